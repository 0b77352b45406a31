"""
Base database models and utilities.

This module provides the declarative base shared by every row model and the
composite mapping that embeds ``AuditMetadata`` into each table.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, composite, mapped_column

from cityprefs.core.models.domain import AuditMetadata


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def audit_composite() -> Any:
    """
    Map the four audit columns onto one ``AuditMetadata`` attribute.

    Each table gets its own column objects, so call this once per class.
    """
    return composite(
        AuditMetadata,
        mapped_column("created_by", String(255), nullable=True),
        mapped_column("created_date", DateTime(timezone=True), nullable=True),
        mapped_column("last_modified_by", String(255), nullable=True),
        mapped_column("last_modified_date", DateTime(timezone=True), nullable=True),
    )
