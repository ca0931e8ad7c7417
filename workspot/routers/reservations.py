from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from workspot.database import get_session
from workspot.models.business import Business
from workspot.models.desk import Desk
from workspot.models.reservation import Reservation, ReservationCreate
from workspot.models.user import User
from workspot.core.exceptions import BookingError, SlotUnavailableError
from workspot.core.security import get_current_user
from workspot.services.booking import cancel_reservation, create_reservation


router = APIRouter(prefix="/reservations", tags=["reservations"])


def _is_business_owner(session: Session, reservation: Reservation, user: User) -> bool:
    business = session.get(Business, reservation.business_id)
    return business is not None and business.owner_id == user.id


# =========================
# BOOK (CUSTOMER)
# =========================
@router.post("/", status_code=status.HTTP_201_CREATED)
def book_desk(
    payload: ReservationCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    desk = session.get(Desk, payload.desk_id)
    if not desk:
        raise HTTPException(status_code=404, detail="Desk not found")

    try:
        return create_reservation(
            session,
            customer=current_user,
            desk=desk,
            day=payload.reservation_date,
            start_hour=payload.start_hour,
            duration_hours=payload.duration_hours,
        )
    except SlotUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except BookingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


# =========================
# LIST (OWN ONLY)
# =========================
@router.get("/")
def list_my_reservations(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return session.exec(
        select(Reservation)
        .where(Reservation.user_id == current_user.id)
        .order_by(Reservation.reservation_date.desc(), Reservation.start_time)
    ).all()


# =========================
# CONFIRMATION
# - customer: their own reservation
# - owner: reservations at their business
# =========================
@router.get("/{reservation_id}")
def read_reservation(
    reservation_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    reservation = session.get(Reservation, reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    if reservation.user_id != current_user.id and not _is_business_owner(session, reservation, current_user):
        raise HTTPException(status_code=403, detail="Not allowed")

    business = session.get(Business, reservation.business_id)
    desk = session.get(Desk, reservation.desk_id)

    return {
        "reservation": reservation,
        "business": business,
        "desk": desk,
    }


# =========================
# CANCEL
# =========================
@router.patch("/{reservation_id}/cancel")
def cancel(
    reservation_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    reservation = session.get(Reservation, reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")

    if reservation.user_id != current_user.id and not _is_business_owner(session, reservation, current_user):
        raise HTTPException(status_code=403, detail="Not allowed")

    return cancel_reservation(session, reservation)
