"""Sparse patch applier.

- ``resolver``: per-field resolution of a sparse update document.
- ``fields``: static tables of patchable fields per entity type.
- ``merge``: applies the resolver across a patch table.
- ``reconcile``: reconciles the owned favorite-city collection.
"""

from .fields import CITY_PATCH_FIELDS, USER_PATCH_FIELDS, PatchableField, fields_for
from .merge import coerce_document, merge, resolve_fields
from .reconcile import ReconciliationPlan, plan_reconciliation, reconcile
from .resolver import parse_float, parse_int, parse_str, resolve

__all__ = [
    "CITY_PATCH_FIELDS",
    "USER_PATCH_FIELDS",
    "PatchableField",
    "ReconciliationPlan",
    "coerce_document",
    "fields_for",
    "merge",
    "parse_float",
    "parse_int",
    "parse_str",
    "plan_reconciliation",
    "reconcile",
    "resolve",
    "resolve_fields",
]
