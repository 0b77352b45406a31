"""Domain models for cityprefs.

These types are shared between:

- the patch engine (merge and reconciliation),
- the repositories/persistence layer,
- the services behind the HTTP API.

The models are immutable: every update produces a new value, which keeps the
patch engine a pure function of (current value, update document).
"""

from .audit import AuditMetadata
from .base import INT_COLUMN_MAX, INT_COLUMN_MIN, BaseSchema
from .cities import City, HistoricalWeather
from .users import FavoriteCity, User, normalize_username

__all__ = [
    "AuditMetadata",
    "BaseSchema",
    "INT_COLUMN_MAX",
    "INT_COLUMN_MIN",
    "City",
    "FavoriteCity",
    "HistoricalWeather",
    "User",
    "normalize_username",
]
