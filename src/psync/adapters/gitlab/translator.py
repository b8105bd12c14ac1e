"""Translate GitLab payloads into access-system domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from psync.domain.model import AccessGroupMembership, DownstreamAccount

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from psync.domain.model import AccessLevel

    from .schema import GitLabGroup, GroupMember


def parse_account(member: GroupMember, *, inherited: bool = False) -> DownstreamAccount:
    identity = member.group_saml_identity
    return DownstreamAccount(
        account_id=member.id,
        federated_id=identity.extern_uid if identity is not None else None,
        access_level=member.access_level,
        username=member.username,
        inherited=inherited,
    )


def parse_membership(
    group: GitLabGroup,
    members: Iterable[GroupMember],
    *,
    max_privilege: AccessLevel,
    direct_ids: Collection[int],
) -> AccessGroupMembership:
    """Build the group view, hiding members at or above ``max_privilege``.

    ``members`` is the effective listing; anyone not in ``direct_ids`` holds
    access through an ancestor group.
    """

    return AccessGroupMembership(
        group_id=group.id,
        name=group.full_path,
        members=tuple(
            parse_account(member, inherited=member.id not in direct_ids)
            for member in members
            if member.access_level < max_privilege
        ),
    )
