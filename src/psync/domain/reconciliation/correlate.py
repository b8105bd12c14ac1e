"""Federated-identity correlation between directory and access-system members.

Account ids from the two systems are not comparable, so every join here is keyed
on the federated identifier. Accounts without one are unmatchable and are
skipped rather than reported. Outputs follow the iteration order of the
account (or left-hand) input, never the order of a set.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from psync.domain.model import DownstreamAccount


def normalize_federated_id(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def normalize_federated_ids(values: Iterable[str]) -> tuple[str, ...]:
    """Return distinct non-blank identifiers in first-seen order."""

    seen: dict[str, None] = {}
    for value in values:
        normalized = normalize_federated_id(value)
        if normalized is not None:
            seen.setdefault(normalized, None)
    return tuple(seen)


def federated_id_of(account: DownstreamAccount) -> str | None:
    return normalize_federated_id(account.federated_id)


def federated_ids_of(accounts: Iterable[DownstreamAccount]) -> tuple[str, ...]:
    """Return distinct federated ids in first-seen order."""

    return normalize_federated_ids(
        account.federated_id for account in accounts if account.federated_id is not None
    )


def index_by_federated_id(
    accounts: Iterable[DownstreamAccount],
) -> dict[str, DownstreamAccount]:
    """Map each federated id to the first account carrying it."""

    index: dict[str, DownstreamAccount] = {}
    for account in accounts:
        federated_id = federated_id_of(account)
        if federated_id is not None:
            index.setdefault(federated_id, account)
    return index


def intersect(
    federated_ids: Iterable[str],
    accounts: Iterable[DownstreamAccount],
) -> tuple[DownstreamAccount, ...]:
    """Return the accounts whose federated id is in ``federated_ids``."""

    present = _presence_index(federated_ids)
    return tuple(account for account in accounts if federated_id_of(account) in present)


def difference(left: Iterable[str], right: Iterable[str]) -> tuple[str, ...]:
    """Return ``left - right``, keeping the order of ``left``."""

    present = _presence_index(right)
    return tuple(value for value in normalize_federated_ids(left) if value not in present)


def attach_federated_ids(
    members: Iterable[DownstreamAccount],
    population: Iterable[DownstreamAccount],
) -> tuple[DownstreamAccount, ...]:
    """Fill missing federated ids on ``members`` from ``population`` by account id.

    Subgroup listings in the access system often omit the federated identity that
    the entitlement group carries for the same account. A member's own identifier
    always wins over the joined one.
    """

    by_account_id: dict[int, str] = {}
    for account in population:
        federated_id = federated_id_of(account)
        if federated_id is not None:
            by_account_id.setdefault(account.account_id, federated_id)

    correlated: list[DownstreamAccount] = []
    for member in members:
        if federated_id_of(member) is None and member.account_id in by_account_id:
            member = replace(member, federated_id=by_account_id[member.account_id])  # noqa: PLW2901
        correlated.append(member)
    return tuple(correlated)


def _presence_index(values: Iterable[str]) -> Collection[str]:
    return frozenset(normalize_federated_ids(values))
