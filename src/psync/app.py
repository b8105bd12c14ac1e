"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from psync.adapters.gitlab import GitLabAccessGateway
from psync.adapters.okta import OktaDirectoryGateway
from psync.config import get_gitlab_config, get_okta_config
from psync.domain.sync import SyncReport, sync_access_groups

if TYPE_CHECKING:
    from psync.config import SyncSettings
    from psync.domain.ports import AccessGateway, DirectoryGateway


log = getLogger(__name__)


def sync_okta_gitlab_groups(
    settings: SyncSettings,
    *,
    directory: DirectoryGateway | None = None,
    access: AccessGateway | None = None,
) -> SyncReport:
    """Run one reconciliation pass from Okta groups to GitLab groups."""

    effective_directory = directory or OktaDirectoryGateway(config=get_okta_config())
    effective_access = access or GitLabAccessGateway(config=get_gitlab_config())
    log.info(
        "Starting pass: prefix=%r, entitlement_group=%r, grant_level=%s, "
        "max_privilege=%s, dry_run=%s",
        settings.group_prefix,
        settings.entitlement_group,
        settings.grant_level.name,
        settings.max_privilege.name,
        settings.dry_run,
    )

    report = sync_access_groups(
        directory=effective_directory,
        access=effective_access,
        settings=settings,
    )

    for group in report.groups:
        if not group.ok:
            log.warning(
                "Group %s -> %s was not fully reconciled: %s",
                group.directory_group,
                group.access_group,
                group.error,
            )
    return report
