from typing import Optional
from datetime import date, datetime, time
from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import SQLModel, Field

from workspot.models import utc_now


class DailyHours(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("business_id", "available_date", name="uq_daily_hours_business_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    business_id: int = Field(foreign_key="business.id", index=True)

    available_date: date = Field(index=True)

    # invariant: open_time < close_time (checked on write)
    open_time: time
    close_time: time

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class DailyHoursSet(SQLModel):
    open_time: time
    close_time: time
