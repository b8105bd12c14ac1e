"""Reconciliation pass settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from psync.domain.model import AccessLevel

from .env import env_flag, optional_env_var, require_env_var
from .errors import ConfigurationError

DEFAULT_GROUP_PREFIX = "dev_"
DEFAULT_GRANT_LEVEL = AccessLevel.DEVELOPER
DEFAULT_MAX_PRIVILEGE = AccessLevel.OWNER


@dataclass(frozen=True, slots=True)
class SyncSettings:
    """Explicit settings for one pass; the reconciliation core never reads these.

    ``max_privilege`` is an exclusive ceiling: members at or above it are hidden
    from both the entitlement population and every access group.
    """

    entitlement_group: str
    group_prefix: str = DEFAULT_GROUP_PREFIX
    grant_level: AccessLevel = DEFAULT_GRANT_LEVEL
    max_privilege: AccessLevel = DEFAULT_MAX_PRIVILEGE
    group_mapping: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    dry_run: bool = False

    def __post_init__(self) -> None:
        if not self.entitlement_group.strip():
            raise ConfigurationError("Entitlement group name must not be blank")
        if not self.group_prefix:
            raise ConfigurationError("Directory group prefix must not be blank")
        if self.grant_level >= self.max_privilege:
            raise ConfigurationError(
                f"Grant level {self.grant_level.name} must be below the privilege ceiling "
                f"{self.max_privilege.name}"
            )

    def access_group_for(self, directory_group: str) -> str:
        """Return the access group that mirrors ``directory_group``."""

        mapped = self.group_mapping.get(directory_group)
        if mapped:
            return mapped
        return directory_group.removeprefix(self.group_prefix)


def parse_group_mapping(value: str | None) -> dict[str, str]:
    """Parse ``okta_name=gitlab_name`` pairs separated by commas."""

    mapping: dict[str, str] = {}
    if not value:
        return mapping
    for raw_entry in value.split(","):
        entry = raw_entry.strip()
        if not entry:
            continue
        source, sep, target = entry.partition("=")
        source, target = source.strip(), target.strip()
        if not sep or not source or not target:
            raise ConfigurationError(f"Invalid group mapping entry: {entry!r}")
        mapping[source] = target
    return mapping


def _parse_level(name: str, value: str | None, default: AccessLevel) -> AccessLevel:
    if value is None:
        return default
    try:
        return AccessLevel.parse(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid {name}: {exc}") from exc


def get_sync_settings(
    *,
    entitlement_group: str | None = None,
    group_prefix: str | None = None,
    grant_level: str | None = None,
    max_privilege: str | None = None,
    group_mapping: Mapping[str, str] | None = None,
    dry_run: bool | None = None,
) -> SyncSettings:
    """Build settings from the environment; explicit arguments take precedence."""

    mapping = parse_group_mapping(optional_env_var("PSYNC_GROUP_MAPPING"))
    if group_mapping:
        mapping.update(group_mapping)

    return SyncSettings(
        entitlement_group=entitlement_group or require_env_var("PSYNC_ENTITLEMENT_GROUP"),
        group_prefix=group_prefix
        or optional_env_var("PSYNC_GROUP_PREFIX", DEFAULT_GROUP_PREFIX)
        or DEFAULT_GROUP_PREFIX,
        grant_level=_parse_level(
            "grant level",
            grant_level or optional_env_var("PSYNC_GRANT_LEVEL"),
            DEFAULT_GRANT_LEVEL,
        ),
        max_privilege=_parse_level(
            "privilege ceiling",
            max_privilege or optional_env_var("PSYNC_MAX_PRIVILEGE"),
            DEFAULT_MAX_PRIVILEGE,
        ),
        group_mapping=MappingProxyType(mapping),
        dry_run=env_flag("PSYNC_DRY_RUN") if dry_run is None else dry_run,
    )
