# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Database session fixtures (in-memory SQLite)
- A FundStorage over the test session
- A TestClient with the database dependency overridden
- Participant factories and auth headers
"""

import os

# Set required environment variables BEFORE importing fundtracker modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("APP_NAME", "Test App")

from collections.abc import Iterator
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fundtracker.database import get_db
from fundtracker.dependencies import clear_service_caches
from fundtracker.main import app
from fundtracker.models import Base, Participant
from fundtracker.services.auth.jwt_handler import JWTHandler
from fundtracker.services.auth.password import PasswordService
from fundtracker.services.storage import SqlAlchemyFundStorage

TEST_PASSWORD = "correct-horse-battery"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def storage(db: Session) -> SqlAlchemyFundStorage:
    return SqlAlchemyFundStorage(db)


@pytest.fixture(scope="function")
def client(db: Session) -> Iterator[TestClient]:
    """Create TestClient with database dependency override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    clear_service_caches()

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# FACTORIES
# =============================================================================

@pytest.fixture(scope="session")
def password_hash() -> str:
    """One bcrypt hash of TEST_PASSWORD, shared to keep the suite fast."""
    return PasswordService.hash_password(TEST_PASSWORD)


def create_participant(
        storage: SqlAlchemyFundStorage,
        username: str,
        hashed_password: str = "not-a-real-hash",
        beginning_value: Decimal | None = None,
        ownership_percentage: Decimal = Decimal("0"),
        is_admin: bool = False,
        first_name: str = "Test",
        last_name: str | None = None,
) -> Participant:
    """Insert a participant directly, bypassing service validation."""
    participant = storage.create_participant(
        username=username,
        hashed_password=hashed_password,
        first_name=first_name,
        last_name=last_name or username.capitalize(),
        beginning_value=beginning_value,
        ownership_percentage=ownership_percentage,
        is_admin=is_admin,
    )
    storage.commit()
    return participant


def set_current_period(
        storage: SqlAlchemyFundStorage,
        year: int,
        month: int,
        total_fund_value: Decimal | None = None,
) -> None:
    storage.save_fund_settings(total_fund_value, year, month)
    storage.commit()


def seed_trading_days(storage: SqlAlchemyFundStorage, *days: date, half_days: tuple[date, ...] = ()) -> None:
    """Store the given dates as trading days."""
    for day in days:
        storage.upsert_trading_day(day, is_half_day=day in half_days)
    storage.commit()


def auth_headers(participant: Participant) -> dict[str, str]:
    token = JWTHandler.create_access_token(
        participant_id=participant.id,
        username=participant.username,
        is_admin=participant.is_admin,
    )
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# SAMPLE DATA
# =============================================================================

@pytest.fixture
def november(storage: SqlAlchemyFundStorage) -> tuple[int, int]:
    """Make November 2025 the current period, with a 10,000 fund."""
    set_current_period(storage, 2025, 11, Decimal("10000"))
    return 2025, 11


@pytest.fixture
def admin(storage: SqlAlchemyFundStorage, password_hash: str) -> Participant:
    return create_participant(storage, "admin", hashed_password=password_hash, is_admin=True)


@pytest.fixture
def admin_headers(admin: Participant) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def alice(storage: SqlAlchemyFundStorage, password_hash: str) -> Participant:
    return create_participant(
        storage,
        "alice",
        hashed_password=password_hash,
        beginning_value=Decimal("6000"),
        ownership_percentage=Decimal("60"),
    )


@pytest.fixture
def bob(storage: SqlAlchemyFundStorage) -> Participant:
    return create_participant(
        storage,
        "bob",
        beginning_value=Decimal("4000"),
        ownership_percentage=Decimal("40"),
    )


@pytest.fixture
def alice_headers(alice: Participant) -> dict[str, str]:
    return auth_headers(alice)
