"""
User I/O models for API requests and responses.

``UserCreate`` and ``UserReplace`` carry the complete state of a user,
including the desired favorite cities. Partial updates go through the merge
engine with the raw JSON body instead of a schema.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from cityprefs.core.models.domain import FavoriteCity, User

from .base import AuditRead, ColumnInt, IOModel
from .cities import CityRead


class FavoriteCityRef(IOModel):
    """Reference to a city in a desired favorites collection."""

    city_id: ColumnInt


class UserFields(IOModel):
    """Preferences shared by user requests and responses."""

    username: str = Field(description="Unique user name; stored lowercase")
    min_population: Optional[ColumnInt] = None
    max_population: Optional[ColumnInt] = None
    min_rent: Optional[float] = None
    max_rent: Optional[float] = None
    min_house_cost: Optional[float] = None
    max_house_cost: Optional[float] = None
    cost_of_living: Optional[ColumnInt] = None


class UserCreate(UserFields):
    """Schema for creating a user via API."""

    favorite_cities: list[FavoriteCityRef] = Field(default_factory=list)

    @field_validator("username")
    @classmethod
    def _username_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("username must not be empty")
        return value

    def to_domain(self, user_id: Optional[int] = None) -> User:
        return User(
            id=user_id,
            favorite_cities=[FavoriteCity(user_id=user_id, city_id=ref.city_id) for ref in self.favorite_cities],
            **self.model_dump(by_alias=False, exclude={"favorite_cities"}),
        )


class UserReplace(UserCreate):
    """Schema for replacing a user's full state via API.

    Omitted preferences become null and an omitted ``favoriteCities`` clears
    the favorites.
    """


class FavoriteCityRead(AuditRead):
    """Schema for reading a favorite-city association."""

    id: int
    city_id: int
    city: Optional[CityRead] = None

    @classmethod
    def from_domain(cls, favorite: FavoriteCity) -> FavoriteCityRead:
        return cls(
            id=favorite.id,
            city_id=favorite.city_id,
            city=CityRead.from_domain(favorite.city) if favorite.city is not None else None,
            **cls.audit_fields(favorite.audit),
        )


class UserRead(UserFields, AuditRead):
    """Schema for reading a user from API."""

    id: int
    favorite_cities: list[FavoriteCityRead] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, user: User) -> UserRead:
        return cls(
            id=user.id,
            favorite_cities=[FavoriteCityRead.from_domain(favorite) for favorite in user.favorite_cities],
            **user.model_dump(exclude={"id", "audit", "favorite_cities"}),
            **cls.audit_fields(user.audit),
        )
