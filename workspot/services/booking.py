import logging
from datetime import date, time
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from workspot.core.exceptions import (
    HoursNotSetError,
    InvalidBookingWindowError,
    OwnBusinessError,
    SlotUnavailableError,
)
from workspot.models import utc_now
from workspot.models.business import Business
from workspot.models.daily_hours import DailyHours
from workspot.models.desk import Desk
from workspot.models.reservation import CANCELLED, CONFIRMED, Reservation, ReservationHour
from workspot.models.user import User
from workspot.services.availability import (
    DayAvailability,
    OpeningHours,
    ReservationInterval,
    day_availability,
    enumerate_start_hours,
    is_available,
    max_duration,
    to_hour,
)

logger = logging.getLogger(__name__)


def hours_for_date(session: Session, business_id: int, day: date) -> DailyHours | None:
    return session.exec(
        select(DailyHours).where(
            DailyHours.business_id == business_id,
            DailyHours.available_date == day,
        )
    ).first()


def reservations_for_desk_on_date(
    session: Session,
    desk_id: int,
    day: date,
) -> List[ReservationInterval]:
    """Live reservations on the desk for the day, as resolver intervals.

    Rows whose times cannot be read are skipped.
    """
    rows = session.exec(
        select(Reservation).where(
            Reservation.desk_id == desk_id,
            Reservation.reservation_date == day,
            Reservation.status != CANCELLED,
        )
    ).all()

    intervals: List[ReservationInterval] = []
    for row in rows:
        start_hour = to_hour(row.start_time)
        end_hour = to_hour(row.end_time)
        if start_hour is None or end_hour is None:
            logger.warning("Skipping reservation %s with unreadable times", row.id)
            continue
        intervals.append(
            ReservationInterval(
                desk_id=row.desk_id,
                day=row.reservation_date,
                start_hour=start_hour,
                end_hour=end_hour,
                status=row.status,
            )
        )
    return intervals


def _opening_hours(hours: DailyHours | None) -> Optional[OpeningHours]:
    if hours is None:
        return None
    return OpeningHours.from_times(hours.open_time, hours.close_time)


def availability_for_desk(session: Session, desk: Desk, day: date) -> DayAvailability:
    hours = _opening_hours(hours_for_date(session, desk.business_id, day))
    reservations = reservations_for_desk_on_date(session, desk.id, day) if hours else []
    return day_availability(hours, reservations)


def max_duration_for_desk(session: Session, desk: Desk, day: date, start_hour: int) -> int:
    hours = _opening_hours(hours_for_date(session, desk.business_id, day))
    if hours is None or not hours.is_valid():
        return 0
    reservations = reservations_for_desk_on_date(session, desk.id, day)
    # a taken start hour is never offered, so it has nothing to extend
    if start_hour not in day_availability(hours, reservations).free_start_hours:
        return 0
    return max_duration(start_hour, hours.close_hour, reservations)


def create_reservation(
    session: Session,
    customer: User,
    desk: Desk,
    day: date,
    start_hour: int,
    duration_hours: int,
) -> Reservation:
    """
    Book ``desk`` for ``[start_hour, start_hour + duration_hours)`` on ``day``.

    The reservation and one ReservationHour row per booked hour are written in
    a single transaction. If another booking got there first, the unique
    constraint on ReservationHour rejects the insert and nothing is kept.
    """
    business = session.get(Business, desk.business_id)
    if business is not None and business.owner_id == customer.id:
        raise OwnBusinessError("You can't book a spot at your own business.")

    hours = _opening_hours(hours_for_date(session, desk.business_id, day))
    if hours is None or not hours.is_valid():
        raise HoursNotSetError("No opening hours published for this date.")

    if start_hour not in enumerate_start_hours(hours):
        raise InvalidBookingWindowError("Selected start time is outside opening hours.")

    end_hour = start_hour + duration_hours
    if duration_hours < 1 or end_hour > hours.close_hour:
        raise InvalidBookingWindowError(
            f"Duration must be between 1 and {hours.close_hour - start_hour} hours for this start time."
        )

    # a window that runs into an existing booking is a conflict, not a bad request
    reservations = reservations_for_desk_on_date(session, desk.id, day)
    if not is_available(desk.id, day, start_hour, end_hour, reservations):
        raise SlotUnavailableError(
            "This spot is no longer available for the selected time. "
            "Please choose a different time or spot."
        )

    reservation = Reservation(
        user_id=customer.id,
        business_id=desk.business_id,
        desk_id=desk.id,
        reservation_date=day,
        start_time=time(start_hour),
        end_time=time(end_hour),
        duration_hours=duration_hours,
        total_price=round(desk.hourly_rate * duration_hours, 2),
        status=CONFIRMED,
    )

    try:
        session.add(reservation)
        session.flush()
        session.add_all(
            [
                ReservationHour(
                    reservation_id=reservation.id,
                    desk_id=desk.id,
                    reservation_date=day,
                    hour=hour,
                )
                for hour in range(start_hour, end_hour)
            ]
        )
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning(
            "Booking conflict on desk %s for %s %02d:00-%02d:00",
            desk.id, day, start_hour, end_hour,
        )
        raise SlotUnavailableError(
            "This spot is no longer available for the selected time. "
            "Please choose a different time or spot."
        ) from exc

    session.refresh(reservation)
    logger.info(
        "Reservation %s confirmed: desk %s on %s %02d:00-%02d:00",
        reservation.id, desk.id, day, start_hour, end_hour,
    )
    return reservation


def cancel_reservation(session: Session, reservation: Reservation) -> Reservation:
    """Cancel a reservation and release its hours. Idempotent."""
    if reservation.status == CANCELLED:
        return reservation

    reservation.status = CANCELLED
    reservation.cancelled_at = utc_now()

    held_hours = session.exec(
        select(ReservationHour).where(ReservationHour.reservation_id == reservation.id)
    ).all()
    for held in held_hours:
        session.delete(held)

    session.add(reservation)
    session.commit()
    session.refresh(reservation)

    logger.info("Reservation %s cancelled", reservation.id)
    return reservation
