"""Pydantic base schema utilities for domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base Pydantic model for all domain schemas.

    Configures common Pydantic behaviors:
    - ``populate_by_name=True``: Allow initialization by alias or field name.
    - ``extra="forbid"``: Prevent unknown fields from slipping into the model, ensuring strict validation.
    - ``frozen=True``: Domain values are replaced, never mutated; updates produce copies.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


# Range of the Integer columns every int attribute is stored in
INT_COLUMN_MIN = -(2**31)
INT_COLUMN_MAX = 2**31 - 1
