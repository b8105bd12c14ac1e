"""Domain port definitions for adapters."""

from __future__ import annotations

from .access import AccessGateway, MembershipChangeResult
from .directory import DirectoryGateway
from .errors import AccessAPIError, DirectoryAPIError, GatewayError, GroupNotFoundError

__all__ = [
    "AccessAPIError",
    "AccessGateway",
    "DirectoryAPIError",
    "DirectoryGateway",
    "GatewayError",
    "GroupNotFoundError",
    "MembershipChangeResult",
]
