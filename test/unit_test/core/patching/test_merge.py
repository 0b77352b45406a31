"""Unit tests for the entity merge engine."""

import json

import pytest

from cityprefs.core.errors import MalformedPatchError, ValidationError
from cityprefs.core.models.domain import AuditMetadata, City, FavoriteCity, User
from cityprefs.core.patching.fields import USER_PATCH_FIELDS
from cityprefs.core.patching.merge import coerce_document, merge, resolve_fields


@pytest.fixture
def cinnamon() -> User:
    return User(
        id=7,
        username="cinnamon",
        min_rent=500.0,
        favorite_cities=[FavoriteCity(id=1, user_id=7, city_id=3)],
        audit=AuditMetadata(created_by="SYSTEM"),
    )


class TestCoerceDocument:
    def test_mapping_is_copied(self):
        source = {"maxRent": 1}
        document = coerce_document(source)
        assert document == source
        assert document is not source

    def test_json_text_and_bytes(self):
        assert coerce_document('{"maxRent": 1200}') == {"maxRent": 1200}
        assert coerce_document(b'{"maxRent": 1200}') == {"maxRent": 1200}

    @pytest.mark.parametrize(
        "document",
        ["not-a-document", "[1, 2]", "42", b"\xff\xfe", None, 12, ["maxRent"], "", "null"],
    )
    def test_malformed_documents(self, document):
        with pytest.raises(MalformedPatchError) as exc_info:
            coerce_document(document)
        assert exc_info.value.status_code == 400

    def test_non_string_keys_are_rejected(self):
        with pytest.raises(MalformedPatchError):
            coerce_document({1: "x"})


class TestMerge:
    def test_empty_document_changes_nothing(self, cinnamon):
        assert merge(cinnamon, {}) == cinnamon

    def test_single_key_changes_only_that_field(self, cinnamon):
        patched = merge(cinnamon, {"maxRent": 1200})

        assert patched.max_rent == 1200.0
        assert patched.min_rent == 500.0
        assert patched.username == "cinnamon"
        assert patched.id == 7
        assert patched.audit == cinnamon.audit
        assert patched.favorite_cities == cinnamon.favorite_cities

    def test_input_entity_is_not_modified(self, cinnamon):
        merge(cinnamon, {"maxRent": 1200, "username": "Other"})
        assert cinnamon.max_rent is None
        assert cinnamon.username == "cinnamon"

    def test_merge_is_idempotent(self, cinnamon):
        document = {"maxRent": 1200, "costOfLiving": 3}
        once = merge(cinnamon, document)
        assert merge(once, document) == once

    def test_null_values_keep_stored_values(self, cinnamon):
        assert merge(cinnamon, {"minRent": None, "username": None}) == cinnamon

    def test_unknown_keys_are_ignored(self, cinnamon):
        assert merge(cinnamon, {"favoriteColor": "blue", "id": 99}) == cinnamon

    def test_favorite_cities_key_is_ignored(self, cinnamon):
        assert merge(cinnamon, {"favoriteCities": []}).favorite_cities == cinnamon.favorite_cities

    @pytest.mark.parametrize("username, expected", [("Arthur", "arthur"), ("JAMES", "james")])
    def test_username_is_lowercased(self, cinnamon, username, expected):
        assert merge(cinnamon, {"username": username}).username == expected

    def test_snake_case_keys_are_accepted(self, cinnamon):
        assert merge(cinnamon, {"max_rent": 900}).max_rent == 900.0

    def test_json_text_document(self, cinnamon):
        patched = merge(cinnamon, json.dumps({"maxHouseCost": "250000"}))
        assert patched.max_house_cost == 250000.0

    def test_zero_is_applied(self, cinnamon):
        assert merge(cinnamon, {"minRent": 0}).min_rent == 0.0

    def test_empty_username_is_rejected(self, cinnamon):
        with pytest.raises(ValidationError) as exc_info:
            merge(cinnamon, {"username": "  "})
        assert exc_info.value.field == "username"

    def test_one_bad_value_applies_nothing(self, cinnamon):
        with pytest.raises(ValidationError):
            merge(cinnamon, {"maxRent": 1200, "costOfLiving": "high"})
        assert cinnamon.max_rent is None

    def test_malformed_document_raises(self, cinnamon):
        with pytest.raises(MalformedPatchError):
            merge(cinnamon, "not-a-document")

    def test_city_table_is_looked_up_from_type(self):
        city = City(id=2, name="Lisbon", population=500000)
        patched = merge(city, {"population": "545000", "averageTemperature": 17.5})
        assert patched.population == 545000
        assert patched.average_temperature == 17.5
        assert patched.name == "Lisbon"

    def test_empty_city_name_is_rejected(self):
        with pytest.raises(ValidationError):
            merge(City(id=2, name="Lisbon"), {"name": ""})


class TestResolveFields:
    def test_returns_every_field(self, cinnamon):
        values = resolve_fields(cinnamon, {"maxRent": 1200}, USER_PATCH_FIELDS)
        assert set(values) == {field.attribute for field in USER_PATCH_FIELDS}
        assert values["max_rent"] == 1200.0
        assert values["min_rent"] == 500.0
