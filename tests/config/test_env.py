from __future__ import annotations

import os

import pytest

from psync.config import (
    ConfigurationError,
    MissingConfigurationError,
    env_flag,
    optional_env_var,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRESENT_VAR", "value")
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["PRESENT_VAR", "MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)
    assert "PRESENT_VAR" not in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_require_env_var_strips_whitespace(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEMP_VAR", " 123 ")

    assert os.getenv("TEMP_VAR") == " 123 "
    assert require_env_var("TEMP_VAR") == "123"


def test_optional_env_var_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLANK_VAR", "")
    monkeypatch.delenv("UNSET_VAR", raising=False)

    assert optional_env_var("BLANK_VAR", "fallback") == "fallback"
    assert optional_env_var("UNSET_VAR") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), ("yes", True), ("off", False), ("0", False)],
)
def test_env_flag_parses_common_spellings(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("FLAG_VAR", raw)

    assert env_flag("FLAG_VAR") is expected


def test_env_flag_rejects_unknown_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLAG_VAR", "maybe")

    with pytest.raises(ConfigurationError, match="FLAG_VAR"):
        env_flag("FLAG_VAR")


def test_env_flag_uses_default_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLAG_VAR", raising=False)

    assert env_flag("FLAG_VAR", default=True) is True
