"""
Database utility functions for engine and session management.

This module provides the core utility functions for creating database engines,
session factories, and repository bundles.

Functions:
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all: Creates all tables from ORM metadata (for tests/dev)
- build_sql_repos: Builds the repository bundle for a session
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from . import entities  # noqa: F401  (registers the tables on Base.metadata)
from .base import Base
from .repositories import CityRepository, UserRepository


def normalize_url(db_url: str) -> str:
    """Rewrite ``postgres://`` and ``postgresql+<driver>://`` URLs to the asyncpg driver."""
    return re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", db_url, count=1)


def create_engine(db_url: str, **engine_kwargs: Any) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    The helper normalizes Postgres URLs to ensure the async driver is used.
    For example, it rewrites ``postgresql://`` and other variants to
    ``postgresql+asyncpg://``. Other URLs (``sqlite+aiosqlite://``) pass through.

    Args:
        db_url: Database connection URL
        **engine_kwargs: Extra keyword arguments for ``create_async_engine``

    Returns:
        Configured AsyncEngine instance
    """
    url = normalize_url(db_url)
    if url.startswith("postgresql+asyncpg://"):
        engine_kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url, **engine_kwargs)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    This is mainly intended for tests and local development.
    Production should use Alembic migrations instead.

    Args:
        engine: Async SQLAlchemy engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of the SQL repositories sharing one session."""

    users: UserRepository
    cities: CityRepository


def build_sql_repos(session: AsyncSession, *, actor: Optional[str] = None) -> SqlRepoBundle:
    """Build a ``SqlRepoBundle`` over an existing session.

    Args:
        session: Async session shared by every repository of the bundle
        actor: Name stamped into audit metadata; defaults to the configured actor

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        users=UserRepository(session, actor=actor),
        cities=CityRepository(session, actor=actor),
    )
