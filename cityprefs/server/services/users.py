"""
User service.

Implements the user operations exposed by the API on top of the user and
city repositories, including full replace with favorite reconciliation and
sparse patching through the merge engine.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cityprefs.core.database.utils import SqlRepoBundle, build_sql_repos
from cityprefs.core.errors import NotFoundError, ValidationError
from cityprefs.core.logging_config import get_logger
from cityprefs.core.models.domain import FavoriteCity, User
from cityprefs.core.patching import USER_PATCH_FIELDS, merge, reconcile
from cityprefs.core.patching.merge import PatchDocument

logger = get_logger(__name__)


class UserService:
    """Service for user and favorite-city operations."""

    def __init__(self, session: AsyncSession, repos: Optional[SqlRepoBundle] = None):
        """Initialize the service with a database session (and optionally prebuilt repositories)."""
        self.repos = repos or build_sql_repos(session)

    async def _check_cities(self, city_ids: Iterable[int]) -> None:
        wanted = list(dict.fromkeys(city_ids))
        existing = await self.repos.cities.existing_ids(wanted)
        missing = [city_id for city_id in wanted if city_id not in existing]
        if missing:
            raise ValidationError(f"Unknown city id(s): {missing}", field="favoriteCities")

    async def find_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[User]:
        return await self.repos.users.list(limit=limit, offset=offset)

    async def find_by_id(self, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            NotFoundError: No user has this ID
        """
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def find_by_name(self, username: str) -> User:
        """
        Get a user by username, ignoring case.

        Raises:
            NotFoundError: No user has this username
        """
        user = await self.repos.users.get_by_name(username)
        if user is None:
            raise NotFoundError("User", username)
        return user

    async def find_by_name_containing(self, fragment: str) -> List[User]:
        return await self.repos.users.search_by_name(fragment)

    async def create(self, user: User) -> User:
        """
        Create a user with its initial favorite cities.

        Args:
            user: The new user; ``id`` must be unset

        Returns:
            The persisted user

        Raises:
            ValidationError: A favorite refers to an unknown city
            ConflictError: The username is already taken
        """
        await self._check_cities(user.favorite_city_ids())
        created = await self.repos.users.create(user.model_copy(update={"id": None}))
        logger.info(f"Created user id={created.id} username={created.username!r}")
        return created

    async def replace(self, user_id: int, replacement: User) -> User:
        """
        Replace the full state of a user.

        Every preference takes the replacement's value (missing ones become
        null) and the favorite cities are reconciled with the replacement's
        collection: kept associations keep their identity, orphans are
        removed and new ones are added.

        Args:
            user_id: Identity of the user to replace
            replacement: Desired state; its ``id`` and audit are ignored

        Returns:
            The updated user

        Raises:
            NotFoundError: No user has this ID
            ValidationError: A favorite refers to an unknown city
        """
        current = await self.find_by_id(user_id)
        await self._check_cities(replacement.favorite_city_ids())
        reconciled = reconcile(current, replacement.favorite_cities)
        desired = replacement.model_copy(
            update={
                "id": current.id,
                "audit": current.audit,
                "favorite_cities": reconciled.favorite_cities,
            }
        )
        updated = await self.repos.users.update(desired)
        logger.info(f"Replaced user id={user_id}")
        return updated

    async def update(self, user_id: int, document: PatchDocument) -> User:
        """
        Apply a sparse update document to a user.

        Only keys present with a non-null value replace the stored values;
        favorites are left alone.

        Raises:
            NotFoundError: No user has this ID
            MalformedPatchError: The document is not a JSON object
            ValidationError: A value cannot be parsed, or the username is emptied
            ConflictError: The new username is already taken
        """
        current = await self.find_by_id(user_id)
        patched = merge(current, document, USER_PATCH_FIELDS)
        if patched == current:
            logger.debug(f"Patch of user id={user_id} changed nothing")
            return current
        updated = await self.repos.users.update(patched)
        logger.info(f"Patched user id={user_id}")
        return updated

    async def delete(self, user_id: int) -> None:
        """
        Delete a user and its favorite-city associations.

        Raises:
            NotFoundError: No user has this ID
        """
        if not await self.repos.users.delete(user_id):
            raise NotFoundError("User", user_id)
        logger.info(f"Deleted user id={user_id}")

    async def list_favorites(self, user_id: int) -> List[FavoriteCity]:
        user = await self.find_by_id(user_id)
        return list(user.favorite_cities)

    async def add_favorite(self, user_id: int, city_id: int) -> User:
        """
        Add a city to a user's favorites; adding a favorite twice is a no-op.

        Raises:
            NotFoundError: The user or the city does not exist
        """
        current = await self.find_by_id(user_id)
        if await self.repos.cities.get_by_id(city_id) is None:
            raise NotFoundError("City", city_id)
        reconciled = reconcile(current, current.favorite_city_ids() + [city_id])
        if reconciled is current:
            return current
        return await self.repos.users.update(reconciled)

    async def remove_favorite(self, user_id: int, city_id: int) -> User:
        """
        Remove a city from a user's favorites; the city itself is kept.

        Raises:
            NotFoundError: The user does not exist or does not favor this city
        """
        current = await self.find_by_id(user_id)
        if city_id not in current.favorite_city_ids():
            raise NotFoundError("Favorite city", city_id)
        reconciled = reconcile(current, [cid for cid in current.favorite_city_ids() if cid != city_id])
        return await self.repos.users.update(reconciled)
