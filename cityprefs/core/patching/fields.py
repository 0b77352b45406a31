"""Static tables of patchable fields.

Each entity type lists the attributes a sparse update document may replace.
Identity, audit metadata and owned collections are deliberately absent: they
change only through dedicated operations.

Document keys are the camelCase wire names used by the API (``maxRent``);
the snake_case attribute name (``max_rent``) is accepted as an alias.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from pydantic.alias_generators import to_camel

from cityprefs.core.models.domain import City, User, normalize_username

from .resolver import Parser, parse_float, parse_int, parse_str


@dataclass(frozen=True)
class PatchableField:
    """One row of a patch table: attribute, document keys, type and constraints."""

    attribute: str
    keys: tuple[str, ...]
    parse: Parser
    normalize: Optional[Callable[[Any], Any]] = None
    required: bool = False

    def get(self, entity: Any) -> Any:
        return getattr(entity, self.attribute)

    def key_in(self, document: Mapping[str, Any]) -> str:
        """Return the first key carrying a non-null value, else the primary key."""
        for key in self.keys:
            if document.get(key) is not None:
                return key
        return self.keys[0]


def patchable(
    attribute: str,
    parse: Parser,
    *,
    normalize: Optional[Callable[[Any], Any]] = None,
    required: bool = False,
) -> PatchableField:
    camel = to_camel(attribute)
    keys = (camel, attribute) if camel != attribute else (attribute,)
    return PatchableField(attribute=attribute, keys=keys, parse=parse, normalize=normalize, required=required)


USER_PATCH_FIELDS: tuple[PatchableField, ...] = (
    patchable("username", parse_str, normalize=normalize_username, required=True),
    patchable("min_population", parse_int),
    patchable("max_population", parse_int),
    patchable("min_rent", parse_float),
    patchable("max_rent", parse_float),
    patchable("min_house_cost", parse_float),
    patchable("max_house_cost", parse_float),
    patchable("cost_of_living", parse_int),
)

CITY_PATCH_FIELDS: tuple[PatchableField, ...] = (
    patchable("name", parse_str, required=True),
    patchable("population", parse_int),
    patchable("population_density_rating", parse_int),
    patchable("safety_rating_score", parse_int),
    patchable("cost_of_living_score", parse_int),
    patchable("average_income", parse_float),
    patchable("average_rent", parse_float),
    patchable("average_house_cost", parse_float),
    patchable("average_temperature", parse_float),
    patchable("latitude", parse_float),
    patchable("longitude", parse_float),
)

PATCH_FIELDS: dict[type, tuple[PatchableField, ...]] = {
    User: USER_PATCH_FIELDS,
    City: CITY_PATCH_FIELDS,
}


def fields_for(entity_type: type) -> tuple[PatchableField, ...]:
    try:
        return PATCH_FIELDS[entity_type]
    except KeyError:
        raise TypeError(f"No patchable fields registered for {entity_type.__name__}") from None
