from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from workspot.models import utc_now


class DeskBase(SQLModel):
    name: str
    description: Optional[str] = None
    hourly_rate: float = Field(gt=0)


class Desk(DeskBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    business_id: int = Field(foreign_key="business.id", index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class DeskCreate(DeskBase):
    pass


class DeskUpdate(SQLModel):
    name: Optional[str] = None
    description: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, gt=0)
