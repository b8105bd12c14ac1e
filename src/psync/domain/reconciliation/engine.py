"""Reconciliation of one directory group against one access group.

The engine is pure: it reads the four membership views of a single snapshot and
returns a new plan. Policy encoded here:

- adding requires both directory eligibility and an entitlement-population account;
- removal is driven only by deprovisioned/suspended directory status intersected
  with current access, regardless of the entitlement population, and only
  targets grants that can be revoked on the group itself;
- an identifier listed as both eligible and deprovisioned is treated as
  deprovisioned;
- existing grants are never upgraded or downgraded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from psync.domain.model import AccessLevel

from .correlate import (
    difference,
    federated_ids_of,
    index_by_federated_id,
    intersect,
    normalize_federated_ids,
)
from .plan import ReconciliationPlan

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from psync.domain.model import DownstreamAccount


def reconcile(
    upstream_eligible: Collection[str],
    upstream_deprovisioned: Collection[str],
    entitlement_set: Sequence[DownstreamAccount],
    access_group_members: Sequence[DownstreamAccount],
    *,
    grant_level: AccessLevel = AccessLevel.DEVELOPER,
    removable_members: Sequence[DownstreamAccount] | None = None,
) -> ReconciliationPlan:
    """Compute the add and remove plans for one access group.

    ``access_group_members`` decides who already has access. Removals are drawn
    from ``removable_members``, which defaults to the same accounts; pass the
    direct members when inherited access cannot be revoked on this group.
    """

    deprovisioned = frozenset(normalize_federated_ids(upstream_deprovisioned))
    eligible_upstream = difference(upstream_eligible, deprovisioned)

    eligible_ids = federated_ids_of(intersect(eligible_upstream, entitlement_set))
    current_ids = federated_ids_of(access_group_members)

    entitlement_index = index_by_federated_id(entitlement_set)
    additions = tuple(
        entitlement_index[federated_id] for federated_id in difference(eligible_ids, current_ids)
    )
    removals = intersect(
        deprovisioned,
        access_group_members if removable_members is None else removable_members,
    )

    return ReconciliationPlan(additions=additions, removals=removals, grant_level=grant_level)


@dataclass(frozen=True, slots=True)
class ReconciliationEngine:
    """Stateless engine bound to a fixed grant level."""

    grant_level: AccessLevel = AccessLevel.DEVELOPER

    def reconcile(
        self,
        upstream_eligible: Collection[str],
        upstream_deprovisioned: Collection[str],
        entitlement_set: Sequence[DownstreamAccount],
        access_group_members: Sequence[DownstreamAccount],
        *,
        removable_members: Sequence[DownstreamAccount] | None = None,
    ) -> ReconciliationPlan:
        return reconcile(
            upstream_eligible,
            upstream_deprovisioned,
            entitlement_set,
            access_group_members,
            grant_level=self.grant_level,
            removable_members=removable_members,
        )
