from __future__ import annotations

import pytest

from psync.config import MissingConfigurationError, get_gitlab_config, get_okta_config


def test_get_okta_config_builds_authenticated_resilience(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OKTA_ORG_URL", "https://acme.okta.com/")
    monkeypatch.setenv("OKTA_API_TOKEN", "secret")

    config = get_okta_config()

    assert config.org_url == "https://acme.okta.com"
    assert config.resilience.base_url == "https://acme.okta.com/api/v1/"
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["Authorization"] == "SSWS secret"
    assert "POST" not in config.resilience.retry.allowed_methods


def test_get_okta_config_lists_missing_values() -> None:
    with pytest.raises(MissingConfigurationError) as exc:
        get_okta_config()

    assert "OKTA_API_TOKEN" in str(exc.value)
    assert "OKTA_ORG_URL" in str(exc.value)


def test_get_gitlab_config_defaults_to_gitlab_com(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITLAB_TOKEN", "glpat-secret")

    config = get_gitlab_config()

    assert config.base_url == "https://gitlab.com"
    assert config.resilience.base_url == "https://gitlab.com/api/v4/"
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["PRIVATE-TOKEN"] == "glpat-secret"


def test_get_gitlab_config_honours_self_managed_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITLAB_TOKEN", "glpat-secret")
    monkeypatch.setenv("GITLAB_BASE_URL", "https://git.acme.test/")

    config = get_gitlab_config()

    assert config.resilience.base_url == "https://git.acme.test/api/v4/"


def test_get_gitlab_config_requires_token() -> None:
    with pytest.raises(MissingConfigurationError, match="GITLAB_TOKEN"):
        get_gitlab_config()
