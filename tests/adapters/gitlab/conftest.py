"""Shared fixtures for GitLab adapter tests."""

from __future__ import annotations

import pytest

from psync.config.gitlab import GitLabConfig
from psync.config.http_resilience import ResilienceConfig, RetryPolicy

GITLAB_BASE_URL = "https://gitlab.example.com"


@pytest.fixture
def gitlab_config() -> GitLabConfig:
    return GitLabConfig(
        base_url=GITLAB_BASE_URL,
        token="glpat-test",
        resilience=ResilienceConfig(
            name="gitlab",
            base_url=f"{GITLAB_BASE_URL}/api/v4/",
            retry=RetryPolicy(total=0),
            default_headers={"PRIVATE-TOKEN": "glpat-test"},
        ),
        page_size=2,
    )
