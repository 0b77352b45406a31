"""City and historical weather domain models."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from .audit import AuditMetadata
from .base import BaseSchema


class City(BaseSchema):
    """A named place with numeric and geographic attributes."""

    id: Optional[int] = None
    name: str
    population: Optional[int] = None
    population_density_rating: Optional[int] = None
    safety_rating_score: Optional[int] = None
    cost_of_living_score: Optional[int] = None
    average_income: Optional[float] = None
    average_rent: Optional[float] = None
    average_house_cost: Optional[float] = None
    average_temperature: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    audit: AuditMetadata = Field(default_factory=AuditMetadata)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("city name must not be empty")
        return value


class HistoricalWeather(BaseSchema):
    """Average precipitation/temperature of one month for a city."""

    id: Optional[int] = None
    city_id: int
    month: str
    precipitation: float
    temperature: float
    audit: AuditMetadata = Field(default_factory=AuditMetadata)
