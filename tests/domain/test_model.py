from __future__ import annotations

import pytest

from psync.domain.model import AccessLevel, DownstreamAccount, UpstreamGroup


def test_upstream_group_rejects_overlapping_member_sets() -> None:
    with pytest.raises(ValueError, match="u1"):
        UpstreamGroup(
            group_id="00g1",
            name="dev_team",
            active_members=frozenset({"u1", "u2"}),
            deprovisioned_members=frozenset({"u1"}),
        )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("developer", AccessLevel.DEVELOPER),
        (" Maintainer ", AccessLevel.MAINTAINER),
        ("minimal-access", AccessLevel.MINIMAL_ACCESS),
        ("50", AccessLevel.OWNER),
        (20, AccessLevel.REPORTER),
    ],
)
def test_access_level_parse(value: str | int, expected: AccessLevel) -> None:
    assert AccessLevel.parse(value) is expected


def test_access_level_parse_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown access level"):
        AccessLevel.parse("superuser")


def test_downstream_account_str_prefers_username() -> None:
    assert str(DownstreamAccount(account_id=7, username="alice")) == "alice"
    assert str(DownstreamAccount(account_id=7)) == "7"
