from typing import List, Optional
from datetime import datetime
from sqlalchemy import JSON, Column, DateTime
from sqlmodel import SQLModel, Field

from workspot.models import utc_now


class BusinessBase(SQLModel):
    name: str
    description: Optional[str] = None
    address: str
    city: str
    state: Optional[str] = None
    zip_code: Optional[str] = None


class Business(BusinessBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # one business per owner
    owner_id: int = Field(foreign_key="user.id", index=True, unique=True)

    amenities: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class BusinessCreate(BusinessBase):
    amenities: List[str] = []
