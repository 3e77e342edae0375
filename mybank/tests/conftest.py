import os

# Settings are read at import time; keep the app off the real database.
os.environ["ENV"] = "test"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mybank.core.database import get_db
from mybank.main import app
from mybank.models import Base, Customer


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

SEEDED_AT = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db):
    """Three stored customers with ids 100-102."""
    rows = [
        Customer(
            id=100 + i,
            first_name="Test",
            last_name=f"User{i + 1}",
            email=f"test{i + 1}@example.com",
            personal_id_number=f"1000000000{i + 1}",
            phone_number=f"+47000000{i + 1:02d}",
            created=SEEDED_AT,
            updated=SEEDED_AT,
        )
        for i in range(3)
    ]
    db.add_all(rows)
    db.commit()
    return rows


def _override_get_db(session):
    def override():
        yield session

    return override


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = _override_get_db(db)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def quiet_client(db):
    """Client that turns unhandled server errors into 500 responses."""
    app.dependency_overrides[get_db] = _override_get_db(db)
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_payload():
    def build(**overrides):
        payload = {
            "first_name": "John",
            "last_name": "Doe",
            "email": "john.doe@example.com",
            "personal_id_number": "45678901234",
            "phone_number": "+4712345678",
        }
        payload.update(overrides)
        return payload

    return build
