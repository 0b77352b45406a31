"""Field patch resolver.

Decides, for one named field, whether a sparse update document replaces the
current value and parses the replacement to the field's semantic type.

Resolution rules
----------------

- key absent from the document: the current value is kept;
- key present with ``null``: treated exactly like an absent key;
- key present with a value: the parsed value replaces the current one, even
  when it is ``""`` or ``0``.

Parsers raise ``ValidationError`` for values that cannot be read as the
field's type. Keys the caller does not ask about are never looked at.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Mapping, Optional, TypeVar

from cityprefs.core.errors import ValidationError
from cityprefs.core.models.domain.base import INT_COLUMN_MAX, INT_COLUMN_MIN

T = TypeVar("T")

Parser = Callable[[Any, str], Any]


def _reject_bool(value: Any, field_name: str, kind: str) -> None:
    # bool is an int subclass; JSON true/false is never a number here
    if isinstance(value, bool):
        raise ValidationError(f"Field '{field_name}' expects {kind}, got boolean", field=field_name)


def _read_int(value: Any, field_name: str) -> int:
    _reject_bool(value, field_name, "an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        raise ValidationError(f"Field '{field_name}' expects an integer, got {value!r}", field=field_name)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise ValidationError(
                f"Field '{field_name}' expects an integer, got {value!r}", field=field_name
            ) from None
        if math.isfinite(number) and number.is_integer():
            return int(number)
    raise ValidationError(f"Field '{field_name}' expects an integer, got {value!r}", field=field_name)


def parse_int(value: Any, field_name: str) -> int:
    """Parse an integer from an int, an integral float or a numeric string."""
    number = _read_int(value, field_name)
    if not INT_COLUMN_MIN <= number <= INT_COLUMN_MAX:
        raise ValidationError(f"Field '{field_name}' is out of range, got {number}", field=field_name)
    return number


def parse_float(value: Any, field_name: str) -> float:
    """Parse a decimal from an int, a float or a numeric string."""
    _reject_bool(value, field_name, "a number")
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise ValidationError(f"Field '{field_name}' is out of range, got {value!r}", field=field_name) from None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(f"Field '{field_name}' expects a number, got {value!r}", field=field_name) from None
    else:
        raise ValidationError(f"Field '{field_name}' expects a number, got {value!r}", field=field_name)
    if not math.isfinite(number):
        raise ValidationError(f"Field '{field_name}' expects a finite number, got {value!r}", field=field_name)
    return number


def parse_str(value: Any, field_name: str) -> str:
    """Parse a string; scalar numbers are stringified, containers are rejected."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(f"Field '{field_name}' expects a string, got {value!r}", field=field_name)


def resolve(
    current: Optional[T],
    document: Mapping[str, Any],
    field_name: str,
    parse: Parser,
) -> Any:
    """
    Resolve the new value of ``field_name``.

    Args:
        current: The value currently stored for the field.
        document: The sparse update document.
        field_name: Key to look up in ``document``.
        parse: Parser for the field's semantic type.

    Returns:
        ``current`` when the key is absent or null, otherwise the parsed value.
    """
    value = document.get(field_name)
    if value is None:
        return current
    return parse(value, field_name)
