"""Public interface for the GitLab access adapter."""

from __future__ import annotations

from .client import GitLabAccessGateway
from .schema import GitLabGroup, GroupMember, GroupSamlIdentity
from .translator import parse_account, parse_membership

__all__ = [
    "GitLabAccessGateway",
    "GitLabGroup",
    "GroupMember",
    "GroupSamlIdentity",
    "parse_account",
    "parse_membership",
]
