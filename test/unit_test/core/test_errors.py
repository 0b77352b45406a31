"""Unit tests for the domain error hierarchy."""

import pytest

from cityprefs.core.errors import (
    CityPrefsError,
    ConflictError,
    MalformedPatchError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error, status_code, message",
    [
        (NotFoundError("User", 7), 404, "User 7 not found"),
        (MalformedPatchError("invalid JSON"), 400, "Malformed patch document: invalid JSON"),
        (ValidationError("bad value", field="maxRent"), 400, "bad value"),
        (ConflictError("taken"), 409, "taken"),
    ],
)
def test_status_codes_and_messages(error, status_code, message):
    assert isinstance(error, CityPrefsError)
    assert error.status_code == status_code
    assert error.message == message
    assert str(error) == message


def test_conflict_is_a_validation_error():
    assert issubclass(ConflictError, ValidationError)
    assert ConflictError("taken").field is None
