"""Shared fixtures for Okta adapter tests."""

from __future__ import annotations

import pytest

from psync.config.http_resilience import ResilienceConfig, RetryPolicy
from psync.config.okta import OktaConfig

OKTA_ORG_URL = "https://example.okta.com"


@pytest.fixture
def okta_config() -> OktaConfig:
    return OktaConfig(
        org_url=OKTA_ORG_URL,
        api_token="token",
        resilience=ResilienceConfig(
            name="okta",
            base_url=f"{OKTA_ORG_URL}/api/v1/",
            retry=RetryPolicy(total=0),
            default_headers={"Authorization": "SSWS token"},
        ),
        page_size=2,
    )
