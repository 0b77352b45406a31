"""
Database repository layer.

This package contains the repository classes organized by business domain.
Each repository reads and writes its SQLAlchemy rows and hands immutable
domain models to its callers.

Modules:
- base: AsyncBaseRepository interface and QueryBuilder utilities
- cities: City and historical weather repository operations
- users: User and favorite-city repository operations
"""

from .base import AsyncBaseRepository, QueryBuilder
from .cities import CityRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "CityRepository",
    "QueryBuilder",
    "UserRepository",
]
