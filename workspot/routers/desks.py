from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session, select

from workspot.database import get_session
from workspot.models import utc_now
from workspot.models.business import Business
from workspot.models.desk import Desk, DeskCreate, DeskUpdate
from workspot.models.reservation import Reservation
from workspot.core.security import get_current_business
from workspot.services.booking import availability_for_desk, max_duration_for_desk


router = APIRouter(prefix="/desks", tags=["desks"])


def _get_desk_or_404(session: Session, desk_id: int) -> Desk:
    desk = session.get(Desk, desk_id)
    if not desk:
        raise HTTPException(status_code=404, detail="Desk not found")
    return desk


def _get_owned_desk(session: Session, desk_id: int, business: Business) -> Desk:
    desk = _get_desk_or_404(session, desk_id)
    if desk.business_id != business.id:
        raise HTTPException(status_code=403, detail="Not allowed")
    return desk


# =========================
# CRUD (OWNER)
# =========================
@router.post("/", status_code=status.HTTP_201_CREATED)
def create_desk(
    payload: DeskCreate,
    session: Session = Depends(get_session),
    business: Business = Depends(get_current_business),
):
    desk = Desk(
        business_id=business.id,
        name=payload.name,
        description=payload.description or None,
        hourly_rate=payload.hourly_rate,
    )
    session.add(desk)
    session.commit()
    session.refresh(desk)
    return desk


@router.patch("/{desk_id}")
def update_desk(
    desk_id: int,
    payload: DeskUpdate,
    session: Session = Depends(get_session),
    business: Business = Depends(get_current_business),
):
    desk = _get_owned_desk(session, desk_id, business)

    for key, value in payload.model_dump(exclude_unset=True).items():
        if key in ("name", "hourly_rate") and value is None:
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")
        setattr(desk, key, value)
    desk.updated_at = utc_now()

    session.add(desk)
    session.commit()
    session.refresh(desk)
    return desk


@router.delete("/{desk_id}")
def delete_desk(
    desk_id: int,
    session: Session = Depends(get_session),
    business: Business = Depends(get_current_business),
):
    desk = _get_owned_desk(session, desk_id, business)

    has_reservations = session.exec(
        select(Reservation.id).where(Reservation.desk_id == desk.id)
    ).first()
    if has_reservations is not None:
        raise HTTPException(status_code=400, detail="Desk has reservations and cannot be removed")

    session.delete(desk)
    session.commit()
    return {"message": "Desk removed"}


# =========================
# AVAILABILITY (CUSTOMER)
# GET /desks/3/availability?day=2024-06-01
# =========================
@router.get("/{desk_id}/availability")
def get_desk_availability(
    desk_id: int,
    day: date,
    session: Session = Depends(get_session),
):
    desk = _get_desk_or_404(session, desk_id)
    view = availability_for_desk(session, desk, day)

    return {
        "desk_id": desk.id,
        "day": day.isoformat(),
        "is_open": view.is_open,
        "open_hour": view.open_hour,
        "close_hour": view.close_hour,
        "start_hours": view.free_start_hours,
        "booked_hours": view.booked_hours,
        "hourly_rate": desk.hourly_rate,
    }


@router.get("/{desk_id}/max-duration")
def get_max_duration(
    desk_id: int,
    day: date,
    start_hour: int = Query(ge=0, le=23),
    session: Session = Depends(get_session),
):
    desk = _get_desk_or_404(session, desk_id)
    return {
        "desk_id": desk.id,
        "day": day.isoformat(),
        "start_hour": start_hour,
        "max_duration": max_duration_for_desk(session, desk, day, start_hour),
    }
