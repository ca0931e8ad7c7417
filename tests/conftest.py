"""
Shared fixtures: an in-memory database and a client signed in through
identity-provider style tokens.
"""

import os

os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ["AUTH_JWT_ALGORITHM"] = "HS256"
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date, time  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from workspot.database import get_session  # noqa: E402
from workspot.main import app  # noqa: E402
from workspot.models.business import Business  # noqa: E402
from workspot.models.daily_hours import DailyHours  # noqa: E402
from workspot.models.desk import Desk  # noqa: E402
from workspot.models.reservation import Reservation, ReservationHour  # noqa: E402, F401
from workspot.models.user import User  # noqa: E402

BOOKING_DAY = date(2024, 6, 1)


def make_token(sub: str, email: str, name: str = "", secret: str = "test-secret") -> str:
    return jwt.encode({"sub": sub, "email": email, "name": name}, secret, algorithm="HS256")


def auth_headers(sub: str, email: str, name: str = "") -> dict:
    return {"Authorization": f"Bearer {make_token(sub, email, name)}"}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner(session):
    user = User(external_id="owner-1", email="owner@example.com", name="Olive Owner")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def customer(session):
    user = User(external_id="customer-1", email="customer@example.com", name="Cam Customer")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def business(session, owner):
    business = Business(
        owner_id=owner.id,
        name="Corner Coffee",
        address="12 Market Street",
        city="Portland",
        amenities=["Wi-Fi"],
    )
    session.add(business)
    session.commit()
    session.refresh(business)
    return business


@pytest.fixture
def desk(session, business):
    desk = Desk(business_id=business.id, name="Window Seat", hourly_rate=6.0)
    session.add(desk)
    session.commit()
    session.refresh(desk)
    return desk


@pytest.fixture
def open_day(session, business):
    """Business open 09:00-17:00 on BOOKING_DAY."""
    hours = DailyHours(
        business_id=business.id,
        available_date=BOOKING_DAY,
        open_time=time(9, 0),
        close_time=time(17, 0),
    )
    session.add(hours)
    session.commit()
    session.refresh(hours)
    return hours


@pytest.fixture
def owner_headers(owner):
    return auth_headers(owner.external_id, owner.email, owner.name)


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer.external_id, customer.email, customer.name)
