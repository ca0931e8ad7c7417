from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from workspot.database import get_session
from workspot.models.business import Business, BusinessCreate
from workspot.models.daily_hours import DailyHours
from workspot.models.desk import Desk
from workspot.models.reservation import Reservation
from workspot.models.user import User
from workspot.core.security import get_current_business, get_current_user
from workspot.services.booking import hours_for_date


router = APIRouter(prefix="/businesses", tags=["businesses"])


# =========================
# BROWSING (CUSTOMERS)
# =========================
@router.get("/")
def list_businesses(session: Session = Depends(get_session)):
    return session.exec(
        select(Business).order_by(Business.created_at.desc(), Business.id.desc())
    ).all()


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_business(
    payload: BusinessCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    existing = session.exec(
        select(Business).where(Business.owner_id == current_user.id)
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="You already listed a business")

    amenities: List[str] = []
    for amenity in payload.amenities:
        amenity = amenity.strip()
        if amenity and amenity not in amenities:
            amenities.append(amenity)

    business = Business(
        owner_id=current_user.id,
        name=payload.name,
        description=payload.description or None,
        address=payload.address,
        city=payload.city,
        state=payload.state or None,
        zip_code=payload.zip_code or None,
        amenities=amenities,
    )

    session.add(business)
    session.commit()
    session.refresh(business)
    return business


# =========================
# SIGNED-IN OWNER
# =========================
@router.get("/mine")
def read_my_business(business: Business = Depends(get_current_business)):
    return business


@router.get("/mine/reservations")
def list_my_business_reservations(
    session: Session = Depends(get_session),
    business: Business = Depends(get_current_business),
):
    return session.exec(
        select(Reservation)
        .where(Reservation.business_id == business.id)
        .order_by(Reservation.reservation_date.desc(), Reservation.start_time)
    ).all()


@router.get("/{business_id}")
def read_business(business_id: int, session: Session = Depends(get_session)):
    business = session.get(Business, business_id)
    if not business:
        raise HTTPException(status_code=404, detail="Space not found")
    return business


# =========================
# DESKS
# =========================
@router.get("/{business_id}/desks")
def list_desks(business_id: int, session: Session = Depends(get_session)):
    if not session.get(Business, business_id):
        raise HTTPException(status_code=404, detail="Space not found")

    return session.exec(
        select(Desk)
        .where(Desk.business_id == business_id)
        .order_by(Desk.created_at, Desk.id)
    ).all()


# =========================
# DATES WITH PUBLISHED HOURS
# GET /businesses/1/hours?start=2024-06-01&end=2024-06-30
# =========================
@router.get("/{business_id}/hours")
def list_available_dates(
    business_id: int,
    start: date,
    end: date,
    session: Session = Depends(get_session),
) -> List[date]:
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")

    rows = session.exec(
        select(DailyHours.available_date)
        .where(
            DailyHours.business_id == business_id,
            DailyHours.available_date >= start,
            DailyHours.available_date <= end,
        )
        .order_by(DailyHours.available_date)
    ).all()
    return list(rows)


@router.get("/{business_id}/hours/{day}")
def read_hours_for_date(
    business_id: int,
    day: date,
    session: Session = Depends(get_session),
):
    hours = hours_for_date(session, business_id, day)
    if not hours:
        raise HTTPException(status_code=404, detail="No hours set for this date")
    return hours
