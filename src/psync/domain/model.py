"""Domain values exchanged between gateways, the correlator and the engine.

All values are transient and scoped to a single reconciliation pass; nothing
here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum


class AccessLevel(IntEnum):
    """GitLab membership levels, ordered by privilege."""

    NO_ACCESS = 0
    MINIMAL_ACCESS = 5
    GUEST = 10
    PLANNER = 15
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40
    OWNER = 50

    @classmethod
    def parse(cls, value: str | int) -> AccessLevel:
        """Accept either a level name (``developer``) or its numeric value."""

        if isinstance(value, int):
            return cls(value)
        normalized = value.strip()
        if normalized.isdigit():
            return cls(int(normalized))
        try:
            return cls[normalized.upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown access level: {value!r}") from None


class DirectoryStatus(StrEnum):
    """Okta user lifecycle states."""

    STAGED = "STAGED"
    PROVISIONED = "PROVISIONED"
    ACTIVE = "ACTIVE"
    RECOVERY = "RECOVERY"
    PASSWORD_EXPIRED = "PASSWORD_EXPIRED"
    LOCKED_OUT = "LOCKED_OUT"
    SUSPENDED = "SUSPENDED"
    DEPROVISIONED = "DEPROVISIONED"


ACTIVE_STATUSES = frozenset(
    {
        DirectoryStatus.ACTIVE,
        DirectoryStatus.RECOVERY,
        DirectoryStatus.PASSWORD_EXPIRED,
        DirectoryStatus.LOCKED_OUT,
    }
)
DEPROVISIONED_STATUSES = frozenset({DirectoryStatus.SUSPENDED, DirectoryStatus.DEPROVISIONED})


@dataclass(frozen=True, slots=True, kw_only=True)
class UpstreamGroup:
    """Directory group with its members partitioned by lifecycle status."""

    group_id: str
    name: str
    active_members: frozenset[str] = field(default_factory=frozenset[str])
    deprovisioned_members: frozenset[str] = field(default_factory=frozenset[str])

    def __post_init__(self) -> None:
        overlap = self.active_members & self.deprovisioned_members
        if overlap:
            raise ValueError(
                f"Group {self.name} lists members as both active and deprovisioned: "
                f"{', '.join(sorted(overlap))}"
            )


@dataclass(frozen=True, slots=True, kw_only=True)
class DownstreamAccount:
    """Account in the access system.

    ``federated_id`` is only present when the account was provisioned through the
    same identity federation as the directory; a blank value counts as absent.
    ``inherited`` marks access that comes from an ancestor group and cannot be
    revoked on the group being viewed.
    """

    account_id: int
    federated_id: str | None = None
    access_level: AccessLevel = AccessLevel.NO_ACCESS
    username: str | None = None
    inherited: bool = False

    def __str__(self) -> str:
        return self.username or str(self.account_id)


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessGroupMembership:
    """Members of one access-system group, already filtered by privilege ceiling.

    ``members`` is the effective membership, direct and inherited.
    """

    group_id: int
    name: str
    members: tuple[DownstreamAccount, ...] = ()
