from __future__ import annotations

import os

import pytest

_CONFIG_PREFIXES = ("PSYNC_", "OKTA_", "GITLAB_")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's shell or ``.env`` from leaking into configuration tests."""
    for name in list(os.environ):
        if name.startswith(_CONFIG_PREFIXES):
            monkeypatch.delenv(name, raising=False)
