"""
Domain error hierarchy.

Every error raised by the patch engine, the repositories or the services
derives from ``CityPrefsError`` and carries the HTTP status the server renders
it with. Errors are never retried or swallowed; they propagate to the caller.
"""

from __future__ import annotations

from typing import Optional


class CityPrefsError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CityPrefsError):
    """The identity given to an operation does not resolve to a stored entity."""

    status_code = 404

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} {key} not found")
        self.entity = entity
        self.key = key


class MalformedPatchError(CityPrefsError):
    """An update document cannot be read as a field/value mapping."""

    status_code = 400

    def __init__(self, reason: str) -> None:
        super().__init__(f"Malformed patch document: {reason}")
        self.reason = reason


class ValidationError(CityPrefsError):
    """A resolved value violates a domain constraint."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class ConflictError(ValidationError):
    """A unique value (username, city name) is already taken."""

    status_code = 409
