"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; the hosted credentials are required
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("RECORD_STORE", "sql")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DISPLAY_TIMEZONE", "UTC")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from visitorlog.database import init_db, make_engine, make_session_factory
from visitorlog.main import create_app
from visitorlog.models.visitor import Visitor
from visitorlog.schemas.visitor import VisitorRecord
from visitorlog.store.sql_store import SqlRecordStore

ADMIN_EMAIL = "admin@exploreit.test"
ADMIN_PASSWORD = "correct-horse-battery"
COLLEGE = "Symbiosis Institute of Technology (SIT)"


def make_record(name="Visitor", mobile_number="9876543210", college=COLLEGE,
                in_time="2024-01-01T10:00:00+00:00", **extra) -> VisitorRecord:
    """Build a visitor record with sensible defaults."""
    return VisitorRecord(
        id=extra.pop("id", name.lower().replace(" ", "-")),
        name=name,
        mobile_number=mobile_number,
        college=college,
        person_to_meet=extra.pop("person_to_meet", "Dr. Rao"),
        purpose_of_visit=extra.pop("purpose_of_visit", "Campus tour"),
        in_time=in_time,
        **extra,
    )


@pytest.fixture
def session_factory():
    """Create a temporary in-memory database for testing."""
    engine = make_engine("sqlite://")
    init_db(engine)
    try:
        yield make_session_factory(engine)
    finally:
        engine.dispose()


@pytest.fixture
def store(session_factory):
    return SqlRecordStore(session_factory)


@pytest.fixture
def admin(store):
    return store.create_admin(ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def seed_visitors(session_factory):
    """Insert visitors with explicit check-in times, returns a helper."""

    def _seed(*rows):
        with session_factory() as db:
            for row in rows:
                db.add(Visitor(
                    name=row["name"],
                    mobile_number=row.get("mobile_number", "9876543210"),
                    college=row.get("college", COLLEGE),
                    person_to_meet=row.get("person_to_meet", "Dr. Rao"),
                    purpose_of_visit=row.get("purpose_of_visit", "Campus tour"),
                    in_time=row.get("in_time", datetime(2024, 1, 1, 10, tzinfo=timezone.utc)),
                ))
            db.commit()

    return _seed


@pytest.fixture
def many_visitors(seed_visitors):
    """25 visitors, one minute apart, Visitor 01 the earliest."""
    start = datetime(2024, 1, 1, 9, tzinfo=timezone.utc)
    seed_visitors(*[
        {"name": f"Visitor {i:02d}", "in_time": start + timedelta(minutes=i)}
        for i in range(1, 26)
    ])


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client, admin):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
