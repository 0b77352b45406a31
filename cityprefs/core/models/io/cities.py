"""
City I/O models for API requests and responses.

This module contains the schemas for creating and reading cities and their
historical weather rows. Partial updates do not have a schema: the raw JSON
body is handed to the merge engine.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from cityprefs.core.models.domain import City, HistoricalWeather

from .base import AuditRead, ColumnInt, IOModel


class CityFields(IOModel):
    """Attributes shared by city requests and responses."""

    name: str = Field(description="City name, unique across all cities")
    population: Optional[ColumnInt] = None
    population_density_rating: Optional[ColumnInt] = None
    safety_rating_score: Optional[ColumnInt] = None
    cost_of_living_score: Optional[ColumnInt] = None
    average_income: Optional[float] = None
    average_rent: Optional[float] = None
    average_house_cost: Optional[float] = None
    average_temperature: Optional[float] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class CityCreate(CityFields):
    """Schema for creating a city via API."""

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be empty")
        return value

    def to_domain(self) -> City:
        return City(**self.model_dump(by_alias=False))


class CityRead(CityFields, AuditRead):
    """Schema for reading a city from API."""

    id: int

    @classmethod
    def from_domain(cls, city: City) -> CityRead:
        return cls(
            id=city.id,
            **city.model_dump(exclude={"id", "audit"}),
            **cls.audit_fields(city.audit),
        )


class HistoricalWeatherCreate(IOModel):
    """Schema for attaching a historical weather row to a city."""

    month: str = Field(min_length=1, description="Month the averages refer to, e.g. 'January'")
    precipitation: float = Field(description="Average precipitation of the month")
    temperature: float = Field(description="Average temperature of the month")

    def to_domain(self, city_id: int) -> HistoricalWeather:
        return HistoricalWeather(city_id=city_id, **self.model_dump(by_alias=False))


class HistoricalWeatherRead(AuditRead):
    """Schema for reading a historical weather row from API."""

    id: int
    city_id: int
    month: str
    precipitation: float
    temperature: float

    @classmethod
    def from_domain(cls, weather: HistoricalWeather) -> HistoricalWeatherRead:
        return cls(
            id=weather.id,
            city_id=weather.city_id,
            month=weather.month,
            precipitation=weather.precipitation,
            temperature=weather.temperature,
            **cls.audit_fields(weather.audit),
        )
