"""Shared fixtures: in-memory database, controllable clock, seller factory."""

import math
import os
import tempfile
from datetime import datetime, timedelta, timezone

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "vendor-locator-test-logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.db_conn import get_db
from db.models import User, Seller, Offering
from db.schemas import CurrentCaller
from utils import Base
from utils.constants import EARTH_RADIUS_MILES
from utils.dependencies import get_clock
from utils.enums import UserType


T0 = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
ORIGIN = (40.0, -75.0)


def miles_north(latitude: float, miles: float) -> float:
    """Latitude reached by travelling `miles` due north along a meridian."""
    return latitude + math.degrees(miles / EARTH_RADIUS_MILES)


class FakeClock:
    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(user_type: UserType = UserType.SEARCHER) -> User:
        counter["n"] += 1
        user = User(email=f"user{counter['n']}@example.com", user_type=user_type)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_seller(db, make_user):
    def _make(business_name: str = "Scoops", offerings=("Vanilla", "Chocolate"), is_active: bool = False,
              latitude=None, longitude=None, last_location_update=None) -> Seller:
        user = make_user(UserType.SELLER)
        seller = Seller(
            user_id=user.id,
            business_name=business_name,
            owner_name="Sam Owner",
            phone="555-0100",
            description=f"{business_name} truck",
            is_active=is_active,
            latitude=latitude,
            longitude=longitude,
            last_location_update=last_location_update,
        )
        seller.offerings = [Offering(name=name) for name in offerings]
        db.add(seller)
        db.commit()
        db.refresh(seller)
        return seller

    return _make


@pytest.fixture
def caller_for():
    def _caller(seller: Seller) -> CurrentCaller:
        return CurrentCaller(user_id=seller.user_id, seller_id=seller.id, role=UserType.SELLER)

    return _caller


@pytest.fixture
def client(session_factory, clock):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
