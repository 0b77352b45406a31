"""
Database entity models.

Each module maps one business domain onto its tables:

- users: users and their favorite-city association rows
- cities: cities and their historical weather rows
"""

from .cities import CityRow, HistoricalWeatherRow
from .users import FavoriteCityRow, UserRow

__all__ = [
    "CityRow",
    "FavoriteCityRow",
    "HistoricalWeatherRow",
    "UserRow",
]
