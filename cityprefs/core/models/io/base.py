"""Shared configuration for API request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cityprefs.core.models.domain import INT_COLUMN_MAX, INT_COLUMN_MIN, AuditMetadata

ColumnInt = Annotated[int, Field(ge=INT_COLUMN_MIN, le=INT_COLUMN_MAX)]


class IOModel(BaseModel):
    """
    Base for all I/O schemas.

    Fields are exposed under camelCase names on the wire (``maxRent``) and can
    still be populated by their snake_case attribute names. Floats must be
    finite and ints must fit the Integer columns they are stored in.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        allow_inf_nan=False,
    )


class AuditRead(IOModel):
    """Audit stamps flattened into a response body."""

    created_by: Optional[str] = None
    created_date: Optional[datetime] = None
    last_modified_by: Optional[str] = None
    last_modified_date: Optional[datetime] = None

    @staticmethod
    def audit_fields(audit: AuditMetadata) -> dict:
        return {
            "created_by": audit.created_by,
            "created_date": audit.created_date,
            "last_modified_by": audit.last_modified_by,
            "last_modified_date": audit.last_modified_date,
        }
