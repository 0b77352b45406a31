"""
City repository interface and implementation.

This module provides data access operations for cities and the historical
weather rows each city owns. Rows are translated to immutable domain models
on the way out and written from domain models on the way in.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import delete, func, select

from cityprefs.core.errors import ConflictError, NotFoundError
from cityprefs.core.models.domain import AuditMetadata, City, HistoricalWeather

from ..entities.cities import CityRow, HistoricalWeatherRow
from ..entities.users import FavoriteCityRow
from .base import AsyncBaseRepository, QueryBuilder, _utc_now


def city_from_row(row: CityRow) -> City:
    """Translate a ``CityRow`` into a ``City`` domain model."""
    return City(
        id=row.id,
        name=row.name,
        population=row.population,
        population_density_rating=row.population_density_rating,
        safety_rating_score=row.safety_rating_score,
        cost_of_living_score=row.cost_of_living_score,
        average_income=row.average_income,
        average_rent=row.average_rent,
        average_house_cost=row.average_house_cost,
        average_temperature=row.average_temperature,
        latitude=row.latitude,
        longitude=row.longitude,
        audit=row.audit or AuditMetadata(),
    )


def _weather_from_row(row: HistoricalWeatherRow) -> HistoricalWeather:
    return HistoricalWeather(
        id=row.id,
        city_id=row.city_id,
        month=row.month,
        precipitation=row.precipitation,
        temperature=row.temperature,
        audit=row.audit or AuditMetadata(),
    )


def _copy_city_fields(city: City, row: CityRow) -> None:
    row.name = city.name
    row.population = city.population
    row.population_density_rating = city.population_density_rating
    row.safety_rating_score = city.safety_rating_score
    row.cost_of_living_score = city.cost_of_living_score
    row.average_income = city.average_income
    row.average_rent = city.average_rent
    row.average_house_cost = city.average_house_cost
    row.average_temperature = city.average_temperature
    row.latitude = city.latitude
    row.longitude = city.longitude


class CityRepository(AsyncBaseRepository[City]):
    """Repository for city data access operations."""

    async def _name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(CityRow.id).where(func.lower(CityRow.name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(CityRow.id != exclude_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, city: City) -> City:
        """Create a new city.

        Args:
            city: City domain model; ``id`` and ``audit`` are ignored

        Returns:
            Persisted City with generated id and audit metadata

        Raises:
            ConflictError: A city with the same name already exists
        """
        if await self._name_taken(city.name):
            raise ConflictError(f"City '{city.name}' already exists")
        row = CityRow(audit=AuditMetadata().created(self.actor, _utc_now()))
        _copy_city_fields(city, row)
        self.session.add(row)
        await self._commit(f"City '{city.name}' already exists")
        return city_from_row(row)

    async def get_by_id(self, city_id: int) -> Optional[City]:
        """Get city by its ID.

        Args:
            city_id: City ID

        Returns:
            City instance or None
        """
        row = await self.session.get(CityRow, city_id, populate_existing=True)
        return city_from_row(row) if row is not None else None

    async def get_by_name(self, name: str) -> Optional[City]:
        """Get city by its exact name, ignoring case."""
        stmt = select(CityRow).where(func.lower(CityRow.name) == name.lower())
        result = await self.session.execute(stmt)
        row = result.scalars().first()
        return city_from_row(row) if row is not None else None

    async def search_by_name(self, fragment: str) -> List[City]:
        """List cities whose name contains ``fragment``, ignoring case."""
        stmt = (
            select(CityRow)
            .where(CityRow.name.ilike(QueryBuilder.contains_pattern(fragment), escape="\\"))
            .order_by(CityRow.name)
        )
        result = await self.session.execute(stmt)
        return [city_from_row(row) for row in result.scalars().all()]

    async def update(self, city: City) -> City:
        """Write a city's fields back under its identity.

        Args:
            city: City carrying the identity and new values

        Returns:
            Updated City instance
        """
        row = await self.session.get(CityRow, city.id) if city.id is not None else None
        if row is None:
            raise NotFoundError("City", city.id)
        if city.name.lower() != row.name.lower() and await self._name_taken(city.name, exclude_id=row.id):
            raise ConflictError(f"City '{city.name}' already exists")
        _copy_city_fields(city, row)
        row.audit = (row.audit or AuditMetadata()).modified(self.actor, _utc_now())
        await self._commit(f"City '{city.name}' already exists")
        return city_from_row(row)

    async def delete(self, city_id: int) -> bool:
        """Delete a city, its weather rows, and every favorite pointing at it.

        Args:
            city_id: City ID to delete

        Returns:
            True if deleted, False if not found
        """
        row = await self.session.get(CityRow, city_id)
        if row is None:
            return False
        await self.session.execute(delete(HistoricalWeatherRow).where(HistoricalWeatherRow.city_id == city_id))
        await self.session.execute(delete(FavoriteCityRow).where(FavoriteCityRow.city_id == city_id))
        await self.session.delete(row)
        await self.session.commit()
        return True

    async def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[City]:
        """List cities ordered by ID.

        Args:
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of City instances
        """
        stmt = QueryBuilder.apply_pagination(select(CityRow).order_by(CityRow.id), limit, offset)
        result = await self.session.execute(stmt)
        return [city_from_row(row) for row in result.scalars().all()]

    async def existing_ids(self, city_ids: Iterable[int]) -> set[int]:
        """Return the subset of ``city_ids`` that refer to stored cities."""
        ids = set(city_ids)
        if not ids:
            return set()
        result = await self.session.execute(select(CityRow.id).where(CityRow.id.in_(ids)))
        return set(result.scalars().all())

    async def list_weather(self, city_id: int) -> List[HistoricalWeather]:
        """List the historical weather rows of a city in insertion order."""
        stmt = (
            select(HistoricalWeatherRow)
            .where(HistoricalWeatherRow.city_id == city_id)
            .order_by(HistoricalWeatherRow.id)
        )
        result = await self.session.execute(stmt)
        return [_weather_from_row(row) for row in result.scalars().all()]

    async def add_weather(self, weather: HistoricalWeather) -> HistoricalWeather:
        """Attach a historical weather row to its city.

        Raises:
            NotFoundError: The city does not exist
        """
        if await self.session.get(CityRow, weather.city_id) is None:
            raise NotFoundError("City", weather.city_id)
        row = HistoricalWeatherRow(
            city_id=weather.city_id,
            month=weather.month,
            precipitation=weather.precipitation,
            temperature=weather.temperature,
            audit=AuditMetadata().created(self.actor, _utc_now()),
        )
        self.session.add(row)
        await self.session.commit()
        return _weather_from_row(row)
