"""Port for reading directory groups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from psync.domain.model import UpstreamGroup


@runtime_checkable
class DirectoryGateway(Protocol):
    """Supplies directory groups whose members are already partitioned by status."""

    def fetch_groups_by_prefix(self, prefix: str) -> list[UpstreamGroup]: ...


__all__ = ["DirectoryGateway"]
