import logging
from datetime import date, time, timedelta

from sqlmodel import Session, select

from workspot.database import create_db_and_tables, engine
from workspot.models.business import Business
from workspot.models.daily_hours import DailyHours
from workspot.models.desk import Desk
from workspot.models.user import User

logger = logging.getLogger(__name__)


OWNER_EMAIL = "owner@workspot.dev"
DAYS_AHEAD = 7


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    create_db_and_tables()

    with Session(engine) as session:
        # 1) demo owner (normally created by the first signed-in request)
        owner = session.exec(select(User).where(User.email == OWNER_EMAIL)).first()
        if not owner:
            owner = User(external_id="seed-owner", email=OWNER_EMAIL, name="Demo Owner")
            session.add(owner)
            session.commit()
            session.refresh(owner)

        # 2) business
        business = session.exec(select(Business).where(Business.owner_id == owner.id)).first()
        if not business:
            business = Business(
                owner_id=owner.id,
                name="Corner Coffee",
                description="Quiet tables by the window, good espresso.",
                address="12 Market Street",
                city="Portland",
                state="OR",
                amenities=["Wi-Fi", "Power Outlets", "Coffee"],
            )
            session.add(business)
            session.commit()
            session.refresh(business)

        # 3) desks
        existing_desk = session.exec(select(Desk).where(Desk.business_id == business.id)).first()
        if not existing_desk:
            session.add_all(
                [
                    Desk(business_id=business.id, name="Window Seat", hourly_rate=6.0),
                    Desk(business_id=business.id, name="Long Table", hourly_rate=4.5),
                    Desk(business_id=business.id, name="Booth", description="Seats two", hourly_rate=9.0),
                ]
            )

        # 4) 09:00-17:00 for the next week
        today = date.today()
        for offset in range(DAYS_AHEAD):
            day = today + timedelta(days=offset)
            row = session.exec(
                select(DailyHours).where(
                    DailyHours.business_id == business.id,
                    DailyHours.available_date == day,
                )
            ).first()
            if not row:
                session.add(
                    DailyHours(
                        business_id=business.id,
                        available_date=day,
                        open_time=time(9, 0),
                        close_time=time(17, 0),
                    )
                )

        session.commit()

        logger.info("Seed complete: owner %s, business %s", owner.email, business.id)
        logger.info("Hours 09:00-17:00 from %s for %s days", today, DAYS_AHEAD)


if __name__ == "__main__":
    main()
