"""Shared pytest fixtures for all test suites."""

import os
import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from backend.app.api.deps import get_today
from backend.app.db.engine import get_session
from backend.app.db.models import Activity, Base, City
from backend.app.main import app
from backend.app.models.common import Category

# Fixed reference day for derived trip status in tests
TODAY = date(2026, 6, 1)


@dataclass
class Catalog:
    """Catalog rows created for a test."""

    city: City
    hotel: Activity
    museum: Activity
    train: Activity
    rest: Activity


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite engine with all tables.

    A file is used instead of :memory: so every NullPool connection sees the
    same database.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Async session on the SQLite test database."""
    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def catalog(sqlite_engine: AsyncEngine) -> Catalog:
    """Seed one city with one activity per category."""
    city = City(
        city_id=uuid.uuid4(),
        name="Paris",
        country="France",
        latitude=48.8566,
        longitude=2.3522,
        popularity_score=95,
    )

    def activity(name: str, category: Category, cost: str) -> Activity:
        return Activity(
            activity_id=uuid.uuid4(),
            city_id=city.city_id,
            name=name,
            description=f"{name} in Paris, France",
            category=category,
            cost=Decimal(cost),
            duration_hours=2.0,
        )

    seeded = Catalog(
        city=city,
        hotel=activity("Hotel Stay", Category.STAY, "150"),
        museum=activity("Louvre Museum", Category.EXPERIENCE, "20"),
        train=activity("Train Journey", Category.TRAVEL, "50"),
        rest=activity("Rest Day", Category.BUFFER, "0"),
    )

    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        session.add_all([city, seeded.hotel, seeded.museum, seeded.train, seeded.rest])
        await session.commit()

    return seeded


@pytest_asyncio.fixture
async def api_client(sqlite_engine: AsyncEngine) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against the app, bound to the SQLite test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_today] = lambda: TODAY

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def postgres_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set - skipping postgres test")

    # Ensure it's a postgres URL
    if not database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        pytest.skip(f"DATABASE_URL is not PostgreSQL: {database_url}")

    # Convert to async driver if needed
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(
        database_url,
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def postgres_session(postgres_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session for PostgreSQL integration tests."""
    async with AsyncSession(postgres_engine, expire_on_commit=False) as session:
        yield session
        await session.rollback()


@pytest.fixture
def today() -> date:
    """Reference day the API client uses for derived trip status."""
    return TODAY
