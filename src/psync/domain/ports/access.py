"""Port for reading and mutating access-system group membership."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from psync.domain.model import AccessGroupMembership, AccessLevel


@dataclass(frozen=True, slots=True)
class MembershipChangeResult:
    """Outcome of one add or remove call; ``reason`` is set on failure."""

    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> MembershipChangeResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> MembershipChangeResult:
        return cls(ok=False, reason=reason)


@runtime_checkable
class AccessGateway(Protocol):
    """Reads group membership and applies membership mutations."""

    def fetch_group_members(
        self,
        name: str,
        *,
        max_privilege: AccessLevel,
    ) -> AccessGroupMembership: ...

    def add_member(
        self,
        group_id: int,
        account_id: int,
        level: AccessLevel,
    ) -> MembershipChangeResult: ...

    def remove_member(self, group_id: int, account_id: int) -> MembershipChangeResult: ...


__all__ = ["AccessGateway", "MembershipChangeResult"]
