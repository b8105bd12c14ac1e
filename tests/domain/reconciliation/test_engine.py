from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from psync.domain.model import AccessLevel
from psync.domain.reconciliation import ReconciliationEngine, ReconciliationPlan, reconcile
from tests.helpers.gateways import make_account

if TYPE_CHECKING:
    from psync.domain.model import DownstreamAccount


def _ids(accounts: tuple[DownstreamAccount, ...]) -> list[int]:
    return [account.account_id for account in accounts]


def _apply(
    plan: ReconciliationPlan,
    members: list[DownstreamAccount],
) -> list[DownstreamAccount]:
    removed = {account.account_id for account in plan.removals}
    kept = [member for member in members if member.account_id not in removed]
    return kept + [replace(account, access_level=plan.grant_level) for account in plan.additions]


def test_adds_eligible_entitled_identities() -> None:
    entitlement = [make_account(1, "u1"), make_account(2, "u2"), make_account(3, "u3")]

    plan = reconcile({"u1", "u2"}, set(), entitlement, [])

    assert _ids(plan.additions) == [1, 2]
    assert plan.removals == ()


def test_removes_deprovisioned_member_and_adds_eligible() -> None:
    entitlement = [make_account(1, "u1"), make_account(2, "u2")]
    access_members = [make_account(22, "u2")]

    plan = reconcile({"u1"}, {"u2"}, entitlement, access_members)

    assert _ids(plan.additions) == [1]
    assert _ids(plan.removals) == [22]


def test_no_changes_when_access_group_matches() -> None:
    entitlement = [make_account(1, "u1"), make_account(2, "u2")]
    access_members = [make_account(1, "u1"), make_account(2, "u2")]

    plan = reconcile({"u1", "u2"}, {"u9"}, entitlement, access_members)

    assert plan.is_empty
    assert len(plan) == 0


def test_directory_membership_alone_never_grants() -> None:
    entitlement = [make_account(1, "u1")]

    plan = reconcile({"u1", "u2"}, set(), entitlement, [])

    assert [account.federated_id for account in plan.additions] == ["u1"]


def test_deprovisioned_takes_precedence_over_eligible() -> None:
    entitlement = [make_account(1, "u1")]
    access_members = [make_account(1, "u1")]

    plan = reconcile({"u1"}, {"u1"}, entitlement, access_members)

    assert plan.additions == ()
    assert _ids(plan.removals) == [1]


def test_conflicting_state_without_access_is_not_granted() -> None:
    plan = reconcile({"u1"}, {"u1"}, [make_account(1, "u1")], [])

    assert plan.is_empty


def test_removal_does_not_require_entitlement_membership() -> None:
    access_members = [make_account(5, "gone")]

    plan = reconcile(set(), {"gone"}, [], access_members)

    assert _ids(plan.removals) == [5]


def test_removal_covers_every_account_with_the_identifier() -> None:
    access_members = [make_account(5, "gone"), make_account(6, "gone"), make_account(7, "u7")]

    plan = reconcile(set(), {"gone"}, [], access_members)

    assert _ids(plan.removals) == [5, 6]


def test_accounts_without_identifier_are_left_untouched() -> None:
    entitlement = [make_account(1, None), make_account(2, " ")]
    access_members = [make_account(3, None)]

    plan = reconcile({"", " "}, {"", " "}, entitlement, access_members)

    assert plan.is_empty


def test_removals_are_limited_to_removable_members() -> None:
    inherited = make_account(20, "gone", inherited=True)
    direct = make_account(21, "also-gone")
    access_members = [inherited, direct]

    plan = reconcile(
        set(),
        {"gone", "also-gone"},
        [],
        access_members,
        removable_members=[direct],
    )

    assert _ids(plan.removals) == [21]


def test_inherited_access_counts_as_existing_access() -> None:
    entitlement = [make_account(1, "u1")]
    access_members = [make_account(1, "u1", inherited=True)]

    plan = reconcile({"u1"}, set(), entitlement, access_members, removable_members=[])

    assert plan.is_empty


def test_existing_grants_are_not_changed() -> None:
    entitlement = [make_account(1, "u1")]
    access_members = [make_account(1, "u1", level=AccessLevel.MAINTAINER)]

    plan = reconcile({"u1"}, set(), entitlement, access_members)

    assert plan.is_empty


def test_duplicate_identifier_in_entitlement_grants_first_account() -> None:
    entitlement = [make_account(1, "u1"), make_account(2, "u1")]

    plan = reconcile({"u1"}, set(), entitlement, [])

    assert _ids(plan.additions) == [1]


def test_plan_is_idempotent_after_application() -> None:
    entitlement = [make_account(1, "u1"), make_account(2, "u2"), make_account(3, "u3")]
    access_members = [make_account(3, "u3"), make_account(4, "u4")]
    eligible = {"u1", "u2", "u3"}
    deprovisioned = {"u4"}

    first = reconcile(eligible, deprovisioned, entitlement, access_members)
    second = reconcile(eligible, deprovisioned, entitlement, _apply(first, access_members))

    assert _ids(first.additions) == [1, 2]
    assert _ids(first.removals) == [4]
    assert second.is_empty


def test_plans_are_disjoint_and_grounded() -> None:
    entitlement = [make_account(i, f"u{i}") for i in range(1, 7)]
    access_members = [make_account(i, f"u{i}") for i in (2, 4, 6)]
    eligible = {"u1", "u2", "u3", "u5", "u8"}
    deprovisioned = {"u3", "u4", "u9"}

    plan = reconcile(eligible, deprovisioned, entitlement, access_members)

    added = {account.federated_id for account in plan.additions}
    removed = {account.federated_id for account in plan.removals}
    entitled = {account.federated_id for account in entitlement}
    assert added.isdisjoint(removed)
    assert added <= eligible & entitled
    assert added == {"u1", "u5"}
    assert removed == {"u4"}


def test_inputs_are_not_mutated() -> None:
    eligible = {"u1"}
    deprovisioned = {"u2"}
    entitlement = [make_account(1, "u1")]
    access_members = [make_account(2, "u2")]

    reconcile(eligible, deprovisioned, entitlement, access_members)

    assert eligible == {"u1"}
    assert deprovisioned == {"u2"}
    assert _ids(tuple(entitlement)) == [1]
    assert _ids(tuple(access_members)) == [2]


def test_engine_uses_its_grant_level() -> None:
    engine = ReconciliationEngine(grant_level=AccessLevel.REPORTER)

    plan = engine.reconcile({"u1"}, set(), [make_account(1, "u1")], [])

    assert plan.grant_level is AccessLevel.REPORTER
    assert _ids(plan.additions) == [1]
