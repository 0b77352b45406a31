"""Relation reconciler for a user's owned favorite-city associations.

Used by full-replace updates, where the caller supplies the complete desired
collection. Associations are matched by the associated city's identity, not
by the association row's identity:

- current associations missing from the desired set are orphans and are
  removed;
- desired cities missing from the current set get a new association whose
  back-reference points at the owner;
- associations present on both sides are kept as they are.

The reconciler is pure. Persisting a plan is the repository's job, which must
delete ``removed`` before inserting ``added``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from cityprefs.core.logging_config import get_logger
from cityprefs.core.models.domain import FavoriteCity, User

logger = get_logger(__name__)

DesiredAssociation = Union[FavoriteCity, int]


@dataclass(frozen=True)
class ReconciliationPlan:
    """Outcome of matching current associations against a desired collection."""

    kept: tuple[FavoriteCity, ...]
    removed: tuple[FavoriteCity, ...]
    added: tuple[FavoriteCity, ...]
    ordered: tuple[FavoriteCity, ...]

    @property
    def is_noop(self) -> bool:
        return not self.removed and not self.added


def _desired_city_ids(desired: Iterable[DesiredAssociation]) -> list[int]:
    seen: set[int] = set()
    city_ids: list[int] = []
    for item in desired:
        city_id = item.city_id if isinstance(item, FavoriteCity) else int(item)
        if city_id not in seen:
            seen.add(city_id)
            city_ids.append(city_id)
    return city_ids


def plan_reconciliation(owner: User, desired: Iterable[DesiredAssociation]) -> ReconciliationPlan:
    """
    Match the owner's current associations against the desired collection.

    Args:
        owner: The owning user in its current state.
        desired: Desired associations, as ``FavoriteCity`` values or city ids.

    Returns:
        The plan; ``ordered`` is the resulting collection in desired order.
    """
    current = {favorite.city_id: favorite for favorite in owner.favorite_cities}
    city_ids = _desired_city_ids(desired)
    wanted = set(city_ids)

    ordered: list[FavoriteCity] = []
    kept: list[FavoriteCity] = []
    added: list[FavoriteCity] = []
    for city_id in city_ids:
        existing = current.get(city_id)
        if existing is not None:
            kept.append(existing)
            ordered.append(existing)
        else:
            association = FavoriteCity(user_id=owner.id, city_id=city_id)
            added.append(association)
            ordered.append(association)

    removed = tuple(favorite for favorite in owner.favorite_cities if favorite.city_id not in wanted)
    return ReconciliationPlan(kept=tuple(kept), removed=removed, added=tuple(added), ordered=tuple(ordered))


def reconcile(owner: User, desired: Iterable[DesiredAssociation]) -> User:
    """
    Reconcile the owner's favorite cities with the desired collection.

    Args:
        owner: The owning user.
        desired: Desired associations, as ``FavoriteCity`` values or city ids.

    Returns:
        A copy of ``owner`` whose ``favorite_cities`` match ``desired``.
    """
    plan = plan_reconciliation(owner, desired)
    if plan.is_noop and list(plan.ordered) == owner.favorite_cities:
        return owner
    logger.debug(
        f"Reconciling favorites of user id={owner.id}: "
        f"kept={len(plan.kept)} removed={len(plan.removed)} added={len(plan.added)}"
    )
    return owner.model_copy(update={"favorite_cities": list(plan.ordered)})
