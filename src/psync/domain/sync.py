"""Application service for one reconciliation pass across all mapped groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from psync.domain.ports.errors import GatewayError
from psync.domain.reconciliation import ReconciliationEngine, attach_federated_ids

if TYPE_CHECKING:
    from psync.config.sync import SyncSettings
    from psync.domain.model import AccessGroupMembership, DownstreamAccount, UpstreamGroup
    from psync.domain.ports import AccessGateway, DirectoryGateway
    from psync.domain.reconciliation import ReconciliationPlan

log = getLogger(__name__)


class SyncError(RuntimeError):
    """Raised when a pass cannot start because its shared inputs are unavailable."""


class MembershipChangeError(RuntimeError):
    """Raised internally when the access system rejects a membership change."""


@dataclass(slots=True)
class GroupSyncResult:
    """Outcome for one directory-group/access-group pair."""

    directory_group: str
    access_group: str
    planned_additions: tuple[DownstreamAccount, ...] = ()
    planned_removals: tuple[DownstreamAccount, ...] = ()
    added: list[DownstreamAccount] = field(default_factory=list["DownstreamAccount"])
    removed: list[DownstreamAccount] = field(default_factory=list["DownstreamAccount"])
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class SyncReport:
    """Summary of a full pass."""

    dry_run: bool = False
    groups: list[GroupSyncResult] = field(default_factory=list["GroupSyncResult"])

    @property
    def added(self) -> int:
        return sum(len(group.added) for group in self.groups)

    @property
    def removed(self) -> int:
        return sum(len(group.removed) for group in self.groups)

    @property
    def failed(self) -> int:
        return sum(1 for group in self.groups if not group.ok)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def sync_access_groups(
    *,
    directory: DirectoryGateway,
    access: AccessGateway,
    settings: SyncSettings,
) -> SyncReport:
    """Reconcile every directory group matching the prefix with its access group.

    Groups are processed one after another. A failure while fetching or mutating
    one group is recorded on that group's result and does not stop the others.
    """

    try:
        upstream_groups = directory.fetch_groups_by_prefix(settings.group_prefix)
        entitlement = access.fetch_group_members(
            settings.entitlement_group,
            max_privilege=settings.max_privilege,
        )
    except GatewayError as exc:
        raise SyncError(f"Unable to load pass inputs: {exc}") from exc

    log.info(
        "Loaded %s directory groups with prefix %r and %s entitlement accounts from %s",
        len(upstream_groups),
        settings.group_prefix,
        len(entitlement.members),
        entitlement.name,
    )

    engine = ReconciliationEngine(grant_level=settings.grant_level)
    report = SyncReport(dry_run=settings.dry_run)
    for upstream in upstream_groups:
        result = _sync_group(
            upstream,
            entitlement=entitlement,
            access=access,
            engine=engine,
            settings=settings,
        )
        report.groups.append(result)

    log.info(
        "Finished pass: groups=%s, added=%s, removed=%s, failed=%s, dry_run=%s",
        len(report.groups),
        report.added,
        report.removed,
        report.failed,
        report.dry_run,
    )
    return report


def _sync_group(
    upstream: UpstreamGroup,
    *,
    entitlement: AccessGroupMembership,
    access: AccessGateway,
    engine: ReconciliationEngine,
    settings: SyncSettings,
) -> GroupSyncResult:
    access_group_name = settings.access_group_for(upstream.name)
    result = GroupSyncResult(directory_group=upstream.name, access_group=access_group_name)

    try:
        target = access.fetch_group_members(
            access_group_name,
            max_privilege=settings.max_privilege,
        )
        members = attach_federated_ids(target.members, entitlement.members)
        plan = engine.reconcile(
            upstream.active_members,
            upstream.deprovisioned_members,
            entitlement.members,
            members,
            removable_members=tuple(member for member in members if not member.inherited),
        )
        result.planned_additions = plan.additions
        result.planned_removals = plan.removals
        log.info(
            "%s -> %s: %s to add, %s to remove",
            upstream.name,
            target.name,
            len(plan.additions),
            len(plan.removals),
        )
        if not settings.dry_run:
            _apply_plan(plan, group=target, access=access, result=result)
    except (GatewayError, MembershipChangeError) as exc:
        result.error = str(exc)
        log.error("Sync of %s -> %s aborted: %s", upstream.name, access_group_name, exc)

    return result


def _apply_plan(
    plan: ReconciliationPlan,
    *,
    group: AccessGroupMembership,
    access: AccessGateway,
    result: GroupSyncResult,
) -> None:
    for account in plan.removals:
        outcome = access.remove_member(group.group_id, account.account_id)
        if not outcome.ok:
            raise MembershipChangeError(
                f"Removing {account} from {group.name} failed: {outcome.reason}"
            )
        log.debug("Removed %s (%s) from %s", account, account.federated_id, group.name)
        result.removed.append(account)

    for account in plan.additions:
        outcome = access.add_member(group.group_id, account.account_id, plan.grant_level)
        if not outcome.ok:
            raise MembershipChangeError(
                f"Adding {account} to {group.name} failed: {outcome.reason}"
            )
        log.debug(
            "Added %s (%s) to %s as %s",
            account,
            account.federated_id,
            group.name,
            plan.grant_level.name,
        )
        result.added.append(account)
