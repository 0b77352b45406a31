"""OpenAPI description of the raw JSON bodies accepted by PATCH endpoints."""

from __future__ import annotations

from typing import Any, Type

from pydantic import BaseModel


def merge_patch_body(schema: Type[BaseModel]) -> dict[str, Any]:
    """
    Build ``openapi_extra`` for an endpoint reading its body as a sparse document.

    The body is never validated against ``schema``; it only documents which
    keys are understood. Every key is optional and ``null`` keeps the stored value.
    """
    properties = schema.model_json_schema(by_alias=True).get("properties", {})
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": {"type": "object", "properties": properties},
                },
                "application/merge-patch+json": {
                    "schema": {"type": "object", "properties": properties},
                },
            },
        }
    }
