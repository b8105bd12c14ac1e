"""Reconciliation core: identity correlation and plan computation."""

from __future__ import annotations

from .correlate import (
    attach_federated_ids,
    difference,
    federated_id_of,
    federated_ids_of,
    index_by_federated_id,
    intersect,
    normalize_federated_ids,
)
from .engine import ReconciliationEngine, reconcile
from .plan import ReconciliationPlan

__all__ = [
    "ReconciliationEngine",
    "ReconciliationPlan",
    "attach_federated_ids",
    "difference",
    "federated_id_of",
    "federated_ids_of",
    "index_by_federated_id",
    "intersect",
    "normalize_federated_ids",
    "reconcile",
]
