"""GitLab configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GITLAB_BASE_URL = "https://gitlab.com"
GITLAB_TIMEOUT_SECONDS = 30.0
GITLAB_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class GitLabConfig:
    """Holds GitLab API configuration values."""

    base_url: str
    token: str
    resilience: ResilienceConfig
    page_size: int = GITLAB_PAGE_SIZE


def get_gitlab_config(*, resilience: ResilienceConfig | None = None) -> GitLabConfig:
    token = require_env_vars(("GITLAB_TOKEN",))["GITLAB_TOKEN"]
    base_url = (optional_env_var("GITLAB_BASE_URL") or DEFAULT_GITLAB_BASE_URL).rstrip("/")
    return GitLabConfig(
        base_url=base_url,
        token=token,
        resilience=resilience
        or ResilienceConfig(
            name="gitlab",
            base_url=f"{base_url}/api/v4/",
            timeout_seconds=GITLAB_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            default_headers={"Accept": "application/json", "PRIVATE-TOKEN": token},
        ),
    )
