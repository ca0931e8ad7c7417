from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from workspot.models import utc_now


class UserBase(SQLModel):
    email: str = Field(index=True, unique=True)
    name: Optional[str] = None
    avatar_url: Optional[str] = None


class User(UserBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # subject ("sub") issued by the identity provider
    external_id: str = Field(index=True, unique=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class UserRead(UserBase):
    id: int
    created_at: datetime
