"""Plan values produced by the reconciliation engine.

A plan is computed from one snapshot of the membership inputs and consumed
immediately by the orchestrator; it is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from psync.domain.model import AccessLevel

if TYPE_CHECKING:
    from psync.domain.model import DownstreamAccount


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationPlan:
    """Membership changes needed to bring one access group to its intended state."""

    additions: tuple[DownstreamAccount, ...] = ()
    removals: tuple[DownstreamAccount, ...] = ()
    grant_level: AccessLevel = AccessLevel.DEVELOPER

    @property
    def is_empty(self) -> bool:
        return not self.additions and not self.removals

    def __len__(self) -> int:
        return len(self.additions) + len(self.removals)
