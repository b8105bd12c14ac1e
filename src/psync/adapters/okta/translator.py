"""Translate Okta payloads into directory domain values."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from psync.domain.model import ACTIVE_STATUSES, DEPROVISIONED_STATUSES, UpstreamGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import OktaGroup, OktaUser

log = getLogger(__name__)


def parse_upstream_group(group: OktaGroup, users: Iterable[OktaUser]) -> UpstreamGroup:
    """Partition ``users`` into active and deprovisioned/suspended identifiers.

    Users that are not yet activated (staged or provisioned) are in neither set,
    so they are never granted and never revoked.
    """

    active: set[str] = set()
    deprovisioned: set[str] = set()
    for user in users:
        if user.status in DEPROVISIONED_STATUSES:
            deprovisioned.add(user.id)
        elif user.status in ACTIVE_STATUSES:
            active.add(user.id)
        else:
            log.debug("Ignoring %s user %s in %s", user.status, user.id, group.profile.name)

    # A user listed twice with different states resolves to deprovisioned.
    active -= deprovisioned
    return UpstreamGroup(
        group_id=group.id,
        name=group.profile.name,
        active_members=frozenset(active),
        deprovisioned_members=frozenset(deprovisioned),
    )
