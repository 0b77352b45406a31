"""
City service.

Implements the city operations exposed by the API, including sparse patching
through the merge engine and the historical weather rows a city owns.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cityprefs.core.database.utils import SqlRepoBundle, build_sql_repos
from cityprefs.core.errors import NotFoundError
from cityprefs.core.logging_config import get_logger
from cityprefs.core.models.domain import City, HistoricalWeather
from cityprefs.core.patching import CITY_PATCH_FIELDS, merge
from cityprefs.core.patching.merge import PatchDocument

logger = get_logger(__name__)


class CityService:
    """Service for city and historical weather operations."""

    def __init__(self, session: AsyncSession, repos: Optional[SqlRepoBundle] = None):
        self.repos = repos or build_sql_repos(session)

    async def find_all(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[City]:
        return await self.repos.cities.list(limit=limit, offset=offset)

    async def find_by_id(self, city_id: int) -> City:
        city = await self.repos.cities.get_by_id(city_id)
        if city is None:
            raise NotFoundError("City", city_id)
        return city

    async def find_by_name(self, name: str) -> City:
        city = await self.repos.cities.get_by_name(name)
        if city is None:
            raise NotFoundError("City", name)
        return city

    async def find_by_name_containing(self, fragment: str) -> List[City]:
        return await self.repos.cities.search_by_name(fragment)

    async def create(self, city: City) -> City:
        """
        Create a city.

        Raises:
            ConflictError: A city with the same name exists
        """
        created = await self.repos.cities.create(city.model_copy(update={"id": None}))
        logger.info(f"Created city id={created.id} name={created.name!r}")
        return created

    async def update(self, city_id: int, document: PatchDocument) -> City:
        """
        Apply a sparse update document to a city.

        Raises:
            NotFoundError: No city has this ID
            MalformedPatchError: The document is not a JSON object
            ValidationError: A value cannot be parsed, or the name is emptied
            ConflictError: The new name belongs to another city
        """
        current = await self.find_by_id(city_id)
        patched = merge(current, document, CITY_PATCH_FIELDS)
        if patched == current:
            logger.debug(f"Patch of city id={city_id} changed nothing")
            return current
        updated = await self.repos.cities.update(patched)
        logger.info(f"Patched city id={city_id}")
        return updated

    async def delete(self, city_id: int) -> None:
        """
        Delete a city with its weather rows and the favorites pointing at it.

        Raises:
            NotFoundError: No city has this ID
        """
        if not await self.repos.cities.delete(city_id):
            raise NotFoundError("City", city_id)
        logger.info(f"Deleted city id={city_id}")

    async def list_weather(self, city_id: int) -> List[HistoricalWeather]:
        await self.find_by_id(city_id)
        return await self.repos.cities.list_weather(city_id)

    async def add_weather(self, weather: HistoricalWeather) -> HistoricalWeather:
        """
        Record a month of historical weather for a city.

        Raises:
            NotFoundError: The city does not exist
        """
        created = await self.repos.cities.add_weather(weather)
        logger.info(f"Added weather id={created.id} ({created.month}) to city id={created.city_id}")
        return created
