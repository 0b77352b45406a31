"""User and favorite-city domain models."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from .audit import AuditMetadata
from .base import BaseSchema
from .cities import City


def normalize_username(value: str) -> str:
    """Usernames are stored lowercase regardless of input case."""
    return value.lower()


class FavoriteCity(BaseSchema):
    """
    Association between a user and a city, owned by the user.

    ``user_id`` is the back-reference to the owning user; it is ``None`` only
    while the owner itself has not been persisted yet. ``city`` is a read-side
    snapshot and is not needed to create an association.
    """

    id: Optional[int] = None
    user_id: Optional[int] = None
    city_id: int
    city: Optional[City] = None
    audit: AuditMetadata = Field(default_factory=AuditMetadata)


class User(BaseSchema):
    """A user with optional city preferences and an ordered list of favorite cities."""

    id: Optional[int] = None
    username: str
    min_population: Optional[int] = None
    max_population: Optional[int] = None
    min_rent: Optional[float] = None
    max_rent: Optional[float] = None
    min_house_cost: Optional[float] = None
    max_house_cost: Optional[float] = None
    cost_of_living: Optional[int] = None
    favorite_cities: list[FavoriteCity] = Field(default_factory=list)
    audit: AuditMetadata = Field(default_factory=AuditMetadata)

    @field_validator("username")
    @classmethod
    def _lowercase_username(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("username must not be empty")
        return normalize_username(value)

    def favorite_city_ids(self) -> list[int]:
        return [favorite.city_id for favorite in self.favorite_cities]
