"""
I/O models for API requests and responses.

These schemas define the contract between the API endpoints and clients and
are kept apart from the domain models and database rows.

Modules:
- base: shared camelCase configuration and audit fields
- cities: City and historical weather I/O models
- users: User and favorite-city I/O models
"""

from .cities import CityCreate, CityRead, HistoricalWeatherCreate, HistoricalWeatherRead
from .users import FavoriteCityRead, FavoriteCityRef, UserCreate, UserRead, UserReplace

__all__ = [
    "CityCreate",
    "CityRead",
    "FavoriteCityRead",
    "FavoriteCityRef",
    "HistoricalWeatherCreate",
    "HistoricalWeatherRead",
    "UserCreate",
    "UserRead",
    "UserReplace",
]
