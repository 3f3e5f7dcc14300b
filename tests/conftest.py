"""Pytest configuration and fixtures."""

import os
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from freshkeep.api.dependencies import get_today
from freshkeep.database import Base, get_db
from freshkeep.main import app


class Clock:
    """Settable stand-in for today's date."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL") + "_test"
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def clock():
    """Clock pinned to a fixed day; tests move it with ``clock.today = ...``."""
    return Clock(date(2026, 3, 10))


@pytest.fixture(scope="function")
def client(db, clock):
    """Create a test client with database and clock overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
