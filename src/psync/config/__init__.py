"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .gitlab import GitLabConfig, get_gitlab_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .okta import OktaConfig, get_okta_config
from .sync import SyncSettings, get_sync_settings, parse_group_mapping

__all__ = [
    "ConfigurationError",
    "GitLabConfig",
    "MissingConfigurationError",
    "OktaConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncSettings",
    "env_flag",
    "get_gitlab_config",
    "get_okta_config",
    "get_sync_settings",
    "optional_env_var",
    "parse_group_mapping",
    "require_env_var",
    "require_env_vars",
]
