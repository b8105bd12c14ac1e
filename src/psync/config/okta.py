"""Okta configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

OKTA_TIMEOUT_SECONDS = 45.0
OKTA_MAX_RETRIES = 3
OKTA_PAGE_SIZE = 200


@dataclass(frozen=True, slots=True)
class OktaConfig:
    """Holds Okta API configuration values."""

    org_url: str
    api_token: str
    resilience: ResilienceConfig
    page_size: int = OKTA_PAGE_SIZE


def get_okta_config(*, resilience: ResilienceConfig | None = None) -> OktaConfig:
    values = require_env_vars(("OKTA_ORG_URL", "OKTA_API_TOKEN"))
    org_url = values["OKTA_ORG_URL"].rstrip("/")
    api_token = values["OKTA_API_TOKEN"]
    return OktaConfig(
        org_url=org_url,
        api_token=api_token,
        resilience=resilience
        or ResilienceConfig(
            name="okta",
            base_url=f"{org_url}/api/v1/",
            timeout_seconds=OKTA_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=OKTA_MAX_RETRIES),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={
                "Accept": "application/json",
                "Authorization": f"SSWS {api_token}",
            },
        ),
    )
