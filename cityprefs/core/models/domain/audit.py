"""Audit metadata embedded in every persisted record."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AuditMetadata:
    """
    Creation/modification stamps.

    Embedded by value in each entity (and mapped as a SQLAlchemy composite on
    the rows). The patch engine never reads or writes it.
    """

    created_by: Optional[str] = None
    created_date: Optional[datetime] = None
    last_modified_by: Optional[str] = None
    last_modified_date: Optional[datetime] = None

    def created(self, actor: str, at: datetime) -> "AuditMetadata":
        return AuditMetadata(created_by=actor, created_date=at, last_modified_by=actor, last_modified_date=at)

    def modified(self, actor: str, at: datetime) -> "AuditMetadata":
        return replace(self, last_modified_by=actor, last_modified_date=at)
