"""Test configuration for database unit tests.

Provides an in-memory SQLite database with the full schema and repositories
bound to one session.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from cityprefs.core.database.utils import (
    SqlRepoBundle,
    build_sql_repos,
    create_all,
    create_engine,
    create_sessionmaker,
)
from cityprefs.core.models.domain import City


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine with all tables."""
    engine = create_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture(scope="function")
def repos(in_memory_session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos(in_memory_session, actor="tester")


@pytest.fixture(scope="function")
async def cities(repos: SqlRepoBundle) -> list[City]:
    """Three stored cities: Lisbon, Porto, Braga."""
    return [
        await repos.cities.create(City(name="Lisbon", population=545000, average_rent=1100.0)),
        await repos.cities.create(City(name="Porto", population=232000, average_rent=850.0)),
        await repos.cities.create(City(name="Braga", population=193000)),
    ]
