"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns and interfaces
used across all repository implementations in the database layer.
Built with async SQLAlchemy; repositories accept and return immutable domain
models and keep row objects to themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cityprefs.core.errors import ConflictError
from cityprefs.server.core.config import settings

# Generic type for domain entities
EntityType = TypeVar("EntityType", bound=BaseModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Base async repository interface with common CRUD operations."""

    def __init__(self, session: AsyncSession, actor: Optional[str] = None) -> None:
        """Initialize repository with async database session.

        Args:
            session: Async SQLAlchemy session for database operations
            actor: Name stamped into audit metadata; defaults to the configured actor
        """
        self.session = session
        self.actor = actor or settings.audit_actor

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity record.

        Args:
            entity: Domain entity to persist (its ``id`` is ignored)

        Returns:
            Persisted entity with generated fields populated
        """

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary identifier.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found
        """

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Update an existing entity record in place, scoped to its identity.

        Args:
            entity: Domain entity carrying the identity and the new values

        Returns:
            Updated entity instance

        Raises:
            NotFoundError: No record exists for the entity's identity
        """

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Delete entity by its primary identifier, together with the rows it owns.

        Args:
            entity_id: Primary key value

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[EntityType]:
        """List entities ordered by identity with optional pagination.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip

        Returns:
            List of entity instances
        """

    async def save(self, entity: EntityType) -> EntityType:
        """Create the entity when it has no identity yet, otherwise update it."""
        if getattr(entity, "id", None) is None:
            return await self.create(entity)
        return await self.update(entity)

    async def _commit(self, conflict_message: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(conflict_message) from e


class QueryBuilder:
    """Utility class for building SQLAlchemy select statements."""

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a select statement.

        Args:
            stmt: SQLAlchemy select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt

    @staticmethod
    def contains_pattern(fragment: str) -> str:
        """Build a LIKE pattern matching ``fragment`` anywhere, with wildcards escaped."""
        escaped = fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return f"%{escaped}%"


def _utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)
