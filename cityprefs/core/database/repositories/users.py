"""
User repository interface and implementation.

This module provides data access operations for users and the favorite-city
association rows each user owns.

Owned rows
----------

Favorite cities are not cascaded by the ORM. ``create`` and ``update``
persist the user's ``favorite_cities`` through a reconciliation plan computed
against what is stored: orphaned rows are deleted and flushed before new rows
are inserted, so re-adding a city never trips the (user, city) unique
constraint. Every stored association is given its index in the desired
collection as ``position``, and reads order by it. ``delete`` removes the
association rows before the user row.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from cityprefs.core.errors import ConflictError, NotFoundError
from cityprefs.core.logging_config import get_logger
from cityprefs.core.models.domain import AuditMetadata, FavoriteCity, User, normalize_username
from cityprefs.core.patching.reconcile import plan_reconciliation

from ..entities.users import FavoriteCityRow, UserRow
from .base import AsyncBaseRepository, QueryBuilder, _utc_now
from .cities import city_from_row

logger = get_logger(__name__)


def _favorite_from_row(row: FavoriteCityRow) -> FavoriteCity:
    return FavoriteCity(
        id=row.id,
        user_id=row.user_id,
        city_id=row.city_id,
        city=city_from_row(row.city),
        audit=row.audit or AuditMetadata(),
    )


def _user_from_row(row: UserRow, favorites: Sequence[FavoriteCityRow]) -> User:
    return User(
        id=row.id,
        username=row.username,
        min_population=row.min_population,
        max_population=row.max_population,
        min_rent=row.min_rent,
        max_rent=row.max_rent,
        min_house_cost=row.min_house_cost,
        max_house_cost=row.max_house_cost,
        cost_of_living=row.cost_of_living,
        favorite_cities=[_favorite_from_row(favorite) for favorite in favorites],
        audit=row.audit or AuditMetadata(),
    )


def _copy_user_fields(user: User, row: UserRow) -> None:
    row.username = normalize_username(user.username)
    row.min_population = user.min_population
    row.max_population = user.max_population
    row.min_rent = user.min_rent
    row.max_rent = user.max_rent
    row.min_house_cost = user.min_house_cost
    row.max_house_cost = user.max_house_cost
    row.cost_of_living = user.cost_of_living


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user data access operations."""

    async def _favorite_rows(self, user_ids: Sequence[int]) -> Dict[int, List[FavoriteCityRow]]:
        grouped: Dict[int, List[FavoriteCityRow]] = defaultdict(list)
        if not user_ids:
            return grouped
        stmt = (
            select(FavoriteCityRow)
            .where(FavoriteCityRow.user_id.in_(user_ids))
            .options(selectinload(FavoriteCityRow.city))
            .order_by(FavoriteCityRow.position, FavoriteCityRow.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        for row in result.scalars().all():
            grouped[row.user_id].append(row)
        return grouped

    async def _hydrate(self, rows: Sequence[UserRow]) -> List[User]:
        favorites = await self._favorite_rows([row.id for row in rows])
        return [_user_from_row(row, favorites.get(row.id, [])) for row in rows]

    async def _username_taken(self, username: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(UserRow.id).where(UserRow.username == normalize_username(username))
        if exclude_id is not None:
            stmt = stmt.where(UserRow.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def _stored_favorite_rows(self, user_id: int) -> List[FavoriteCityRow]:
        stmt = (
            select(FavoriteCityRow)
            .where(FavoriteCityRow.user_id == user_id)
            .order_by(FavoriteCityRow.position, FavoriteCityRow.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _write_favorites(self, owner: User, desired: Sequence[FavoriteCity]) -> None:
        rows = {row.id: row for row in await self._stored_favorite_rows(owner.id)}
        stored = [
            FavoriteCity(id=row.id, user_id=row.user_id, city_id=row.city_id, audit=row.audit or AuditMetadata())
            for row in rows.values()
        ]
        plan = plan_reconciliation(owner.model_copy(update={"favorite_cities": stored}), desired)
        if plan.removed:
            await self.session.execute(
                delete(FavoriteCityRow).where(FavoriteCityRow.id.in_([favorite.id for favorite in plan.removed]))
            )
            await self.session.flush()
        now = _utc_now()
        for position, favorite in enumerate(plan.ordered):
            row = rows.get(favorite.id) if favorite.id is not None else None
            if row is not None:
                row.position = position
                continue
            self.session.add(
                FavoriteCityRow(
                    user_id=owner.id,
                    city_id=favorite.city_id,
                    position=position,
                    audit=AuditMetadata().created(self.actor, now),
                )
            )
        logger.debug(f"User id={owner.id} favorites: removed={len(plan.removed)} added={len(plan.added)}")

    async def create(self, user: User) -> User:
        """Create a new user together with its favorite cities.

        Args:
            user: User domain model; ``id`` and ``audit`` are ignored

        Returns:
            Persisted User with generated id and audit metadata

        Raises:
            ConflictError: The username is already taken
        """
        if await self._username_taken(user.username):
            raise ConflictError(f"Username '{user.username}' already exists")
        row = UserRow(audit=AuditMetadata().created(self.actor, _utc_now()))
        _copy_user_fields(user, row)
        self.session.add(row)
        await self.session.flush()
        owner = user.model_copy(update={"id": row.id, "favorite_cities": []})
        await self._write_favorites(owner, user.favorite_cities)
        await self._commit(f"Username '{user.username}' already exists")
        return await self._require(row.id)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by its ID, with favorite cities.

        Args:
            user_id: User ID

        Returns:
            User instance or None
        """
        row = await self.session.get(UserRow, user_id, populate_existing=True)
        if row is None:
            return None
        return (await self._hydrate([row]))[0]

    async def _require(self, user_id: int) -> User:
        user = await self.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def get_by_name(self, username: str) -> Optional[User]:
        """Get user by username; the lookup is case-insensitive because usernames are stored lowercase."""
        stmt = select(UserRow).where(UserRow.username == normalize_username(username))
        result = await self.session.execute(stmt)
        row = result.scalars().first()
        if row is None:
            return None
        return (await self._hydrate([row]))[0]

    async def search_by_name(self, fragment: str) -> List[User]:
        """List users whose username contains ``fragment``, ignoring case."""
        stmt = (
            select(UserRow)
            .where(UserRow.username.ilike(QueryBuilder.contains_pattern(fragment), escape="\\"))
            .order_by(UserRow.username)
        )
        result = await self.session.execute(stmt)
        return await self._hydrate(list(result.scalars().all()))

    async def update(self, user: User) -> User:
        """Write a user back under its identity.

        Scalar fields are overwritten with the user's values; favorite cities
        are reconciled against the stored rows.

        Args:
            user: User carrying the identity and new state

        Returns:
            Updated User instance

        Raises:
            NotFoundError: No user exists with ``user.id``
            ConflictError: The new username belongs to another user
        """
        row = await self.session.get(UserRow, user.id) if user.id is not None else None
        if row is None:
            raise NotFoundError("User", user.id)
        if normalize_username(user.username) != row.username and await self._username_taken(
            user.username, exclude_id=row.id
        ):
            raise ConflictError(f"Username '{user.username}' already exists")
        _copy_user_fields(user, row)
        row.audit = (row.audit or AuditMetadata()).modified(self.actor, _utc_now())
        await self._write_favorites(user, user.favorite_cities)
        await self._commit(f"Username '{user.username}' already exists")
        return await self._require(row.id)

    async def delete(self, user_id: int) -> bool:
        """Delete a user and the favorite-city rows it owns; cities are kept.

        Args:
            user_id: User ID to delete

        Returns:
            True if deleted, False if not found
        """
        row = await self.session.get(UserRow, user_id)
        if row is None:
            return False
        await self.session.execute(delete(FavoriteCityRow).where(FavoriteCityRow.user_id == user_id))
        await self.session.delete(row)
        await self.session.commit()
        return True

    async def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[User]:
        """List users ordered by ID.

        Args:
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of User instances
        """
        stmt = QueryBuilder.apply_pagination(select(UserRow).order_by(UserRow.id), limit, offset)
        result = await self.session.execute(stmt)
        return await self._hydrate(list(result.scalars().all()))
