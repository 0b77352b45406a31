"""
Database layer for cityprefs.

Structure:
- entities/: SQLAlchemy row classes, one module per business domain
- repositories/: Data access layer translating rows to domain models
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session, repo bundle)
"""

from .base import Base
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    SqlRepoBundle,
    build_sql_repos,
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "SqlRepoBundle",
    "async_session_maker",
    "build_sql_repos",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
]
