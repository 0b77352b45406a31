"""Entity merge engine.

Applies the field patch resolver across every patchable field of an entity
and returns an updated copy ready to be written back under the same identity.

Transaction model
-----------------

The merge is all-or-nothing: every field is resolved before anything is
built, so a malformed document or an invalid value raises without producing
a partially patched entity. Domain models are immutable, so the input entity
is never modified either way.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel

from cityprefs.core.errors import MalformedPatchError, ValidationError
from cityprefs.core.logging_config import get_logger

from .fields import PatchableField, fields_for
from .resolver import resolve

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)

PatchDocument = Union[Mapping[str, Any], str, bytes, bytearray]


def coerce_document(document: Any) -> dict[str, Any]:
    """
    Read an update document as a field/value mapping.

    Args:
        document: A mapping, or JSON text encoding an object.

    Returns:
        A plain dict of the document's entries.

    Raises:
        MalformedPatchError: The document is not a mapping or a JSON object.
    """
    if isinstance(document, (bytes, bytearray)):
        try:
            document = document.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPatchError("body is not valid UTF-8") from e
    if isinstance(document, str):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise MalformedPatchError(f"invalid JSON ({e.msg})") from e
    if not isinstance(document, Mapping):
        raise MalformedPatchError(f"expected an object, got {type(document).__name__}")
    if not all(isinstance(key, str) for key in document):
        raise MalformedPatchError("field names must be strings")
    return dict(document)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_fields(
    entity: BaseModel,
    document: Mapping[str, Any],
    fields: Sequence[PatchableField],
) -> dict[str, Any]:
    """
    Compute the new value of every patchable field.

    Args:
        entity: The current entity.
        document: A coerced update document.
        fields: The entity's patch table.

    Returns:
        Mapping of attribute name to resolved value, for every field in the table.
    """
    values: dict[str, Any] = {}
    for field in fields:
        value = resolve(field.get(entity), document, field.key_in(document), field.parse)
        if field.normalize is not None and value is not None:
            value = field.normalize(value)
        if field.required and _is_empty(value):
            raise ValidationError(f"Field '{field.keys[0]}' must not be empty", field=field.keys[0])
        values[field.attribute] = value
    return values


def merge(
    entity: EntityT,
    document: PatchDocument,
    fields: Optional[Sequence[PatchableField]] = None,
) -> EntityT:
    """
    Merge a sparse update document into an entity.

    Args:
        entity: The current (persisted) entity.
        document: Sparse update document, as a mapping or JSON text.
        fields: Patch table to apply; looked up from the entity type when omitted.

    Returns:
        A copy of ``entity`` with the resolved values; identity, audit metadata and
        owned collections are carried over untouched.

    Raises:
        MalformedPatchError: ``document`` is not a field/value mapping.
        ValidationError: A present value cannot be parsed or violates a constraint.
    """
    data = coerce_document(document)
    table = fields if fields is not None else fields_for(type(entity))
    values = resolve_fields(entity, data, table)
    changed = {name: value for name, value in values.items() if getattr(entity, name) != value}
    if changed:
        logger.debug(f"Patching {type(entity).__name__} id={getattr(entity, 'id', None)}: {sorted(changed)}")
    return entity.model_copy(update=changed)
