"""Shared test fixtures."""
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from scheduler.database import Base, create_db_engine, get_db
from scheduler.engine import StaffSchedule
from scheduler.main import app
from scheduler.models import Room, StaffMember


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """API client bound to the test database."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def room(db_session) -> Room:
    room = Room(name="Conference Room A", capacity=10, open_time="09:00", close_time="17:00")
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def staff(db_session) -> StaffMember:
    """Advisor working Monday 09:00-10:30 and Wednesday mornings."""
    schedule = (
        StaffSchedule()
        .with_weekday("Monday", ["09:00", "09:30", "10:00"])
        .with_weekday("Wednesday", ["10:00", "10:30"])
    )
    member = StaffMember(username="advisor", full_name="Business Advisor", office_hours=schedule.to_blob())
    db_session.add(member)
    db_session.commit()
    db_session.refresh(member)
    return member


@pytest.fixture
def contact():
    return {
        "customer_name": "Jane Doe",
        "customer_email": "jane@example.com",
        "customer_phone": "555-0100",
    }


@pytest.fixture
def upcoming_monday() -> date:
    """A Monday within the next week, never today."""
    today = date.today()
    return today + timedelta(days=7 - today.weekday())
