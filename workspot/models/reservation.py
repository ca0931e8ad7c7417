from typing import Optional
from datetime import date, datetime, time
from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import SQLModel, Field

from workspot.models import utc_now


PENDING = "pending"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"


class Reservation(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)
    business_id: int = Field(foreign_key="business.id", index=True)
    desk_id: int = Field(foreign_key="desk.id", index=True)

    reservation_date: date = Field(index=True)
    start_time: time
    end_time: time

    duration_hours: int
    total_price: float

    # pending | confirmed | cancelled
    status: str = Field(default=CONFIRMED, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    cancelled_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


class ReservationHour(SQLModel, table=True):
    """One row per hour held by a live reservation.

    The unique constraint is what actually prevents two reservations for the
    same desk from overlapping, even when two bookings race past the
    availability check. Rows are removed when the reservation is cancelled.
    """

    __table_args__ = (
        UniqueConstraint("desk_id", "reservation_date", "hour", name="uq_reservation_hour_slot"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    reservation_id: int = Field(foreign_key="reservation.id", index=True)
    desk_id: int = Field(foreign_key="desk.id", index=True)
    reservation_date: date
    hour: int


class ReservationCreate(SQLModel):
    desk_id: int
    reservation_date: date
    start_hour: int = Field(ge=0, le=23)
    duration_hours: int = Field(default=1, ge=1, le=24)
