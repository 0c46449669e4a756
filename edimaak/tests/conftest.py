"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from edimaak.app.main import app
from edimaak.app.db.session import get_db, Base
from edimaak.app.core.jwt import create_access_token
from edimaak.app.models.enums import TripStatus, ShipmentStatus
from edimaak.app.models.shipment_request import ShipmentRequest
from edimaak.app.models.trip import Trip
from edimaak.tests.factories import TRAVELER, SENDER, days_from_today

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Fresh database per test function."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        """Enable foreign key constraints for SQLite."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Async client for testing, bound to the per-test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user id."""
    def _headers(user_id: str) -> dict:
        token = create_access_token(data={"sub": user_id})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_trip(db_session):
    """Insert an open trip; route and dates overridable."""
    async def _make(**overrides) -> Trip:
        values = {
            "traveler_id": TRAVELER,
            "from_country": "France",
            "from_city": "Paris",
            "to_country": "Algérie",
            "to_city": "Alger",
            "departure_date": days_from_today(10),
            "max_weight_kg": 20.0,
            "status": TripStatus.OPEN,
        }
        values.update(overrides)
        trip = Trip(**values)
        db_session.add(trip)
        await db_session.commit()
        await db_session.refresh(trip)
        return trip
    return _make


@pytest.fixture
def make_request(db_session):
    """Insert an open shipment request; route and window overridable."""
    async def _make(**overrides) -> ShipmentRequest:
        values = {
            "sender_id": SENDER,
            "from_country": "France",
            "from_city": "Paris",
            "to_country": "Algérie",
            "to_city": "Alger",
            "earliest_date": days_from_today(8),
            "latest_date": days_from_today(12),
            "item_type": "documents",
            "weight_kg": 2.0,
            "status": ShipmentStatus.OPEN,
        }
        values.update(overrides)
        shipment_request = ShipmentRequest(**values)
        db_session.add(shipment_request)
        await db_session.commit()
        await db_session.refresh(shipment_request)
        return shipment_request
    return _make
