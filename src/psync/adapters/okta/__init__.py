"""Public interface for the Okta directory adapter."""

from __future__ import annotations

from .client import OktaDirectoryGateway
from .schema import OktaGroup, OktaUser
from .translator import parse_upstream_group

__all__ = [
    "OktaDirectoryGateway",
    "OktaGroup",
    "OktaUser",
    "parse_upstream_group",
]
