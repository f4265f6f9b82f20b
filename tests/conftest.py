"""
Shared test fixtures.

Uses a throw-away SQLite file per test (via aiosqlite) so tests run without
Docker / PostgreSQL.  Every transaction opens with ``BEGIN IMMEDIATE`` so
concurrent writers queue on SQLite's busy timeout instead of failing with
"database is locked" when upgrading a read lock.
"""

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from carpool.domain.entities import Ride
from carpool.infrastructure.database import Base
from carpool.infrastructure.models import RideModel  # noqa: F401
from carpool.services.rides import RideService

DRIVER = "driver-1"


@pytest.fixture
def scheduled_time() -> datetime:
    return datetime(2026, 11, 2, 7, 30, tzinfo=timezone.utc)


@pytest.fixture
def waiting_ride() -> Ride:
    """In-memory two-seat ride, fresh from creation."""
    return Ride(
        id=1,
        driver_id=DRIVER,
        total_seats=2,
        available_seats=2,
        start_location_id="campus",
        destination_id="downtown",
    )


# ── Database ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Create tables in a fresh SQLite file, yield a session factory, dispose."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'rides.db'}", echo=False
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _no_implicit_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def service(session_factory) -> RideService:
    return RideService(session_factory, max_attempts=3)


@pytest_asyncio.fixture
async def ride(service: RideService, scheduled_time: datetime) -> Ride:
    """A persisted two-seat ride in WAITING."""
    return await service.create_ride(
        driver_id=DRIVER,
        total_seats=2,
        start_location_id="campus",
        destination_id="downtown",
        scheduled_time=scheduled_time,
    )


# ── HTTP ──────────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def client(service: RideService) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the real app, wired to the SQLite-backed service."""
    from carpool.api.app import create_app
    from carpool.api.dependencies import get_ride_service
    from carpool.api.middleware import limiter

    app = create_app()
    app.dependency_overrides[get_ride_service] = lambda: service
    limiter.enabled = False

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    limiter.enabled = True
