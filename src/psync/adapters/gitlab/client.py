"""HTTP client for GitLab group membership."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from psync.adapters.http_resilience import ClientFactory, ResilientClient, build_limiter
from psync.config.gitlab import GitLabConfig, get_gitlab_config
from psync.domain.ports.access import AccessGateway, MembershipChangeResult
from psync.domain.ports.errors import AccessAPIError, GroupNotFoundError

from .schema import ErrorResponse, GitLabGroup, GroupMember
from .translator import parse_membership

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aiolimiter import AsyncLimiter

    from psync.domain.model import AccessGroupMembership, AccessLevel

log = getLogger(__name__)

_GROUPS_ADAPTER = TypeAdapter(list[GitLabGroup])
_MEMBERS_ADAPTER = TypeAdapter(list[GroupMember])


@dataclass(slots=True)
class GitLabAccessGateway:
    """Access gateway backed by GitLab group memberships.

    Every call runs its own event loop and client, so the rate limiter lives on
    the gateway and is shared by all of them.
    """

    config: GitLabConfig = field(default_factory=get_gitlab_config)
    client_factory: ClientFactory = field(default=ResilientClient)
    _limiter: AsyncLimiter | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        self._limiter = build_limiter(self.config.resilience.ratelimit)

    def fetch_group_members(
        self,
        name: str,
        *,
        max_privilege: AccessLevel,
    ) -> AccessGroupMembership:
        return asyncio.run(self._fetch_group_members_async(name, max_privilege=max_privilege))

    def add_member(
        self,
        group_id: int,
        account_id: int,
        level: AccessLevel,
    ) -> MembershipChangeResult:
        async def call(client: ResilientClient) -> httpx.Response:
            return await client.post(
                f"groups/{group_id}/members",
                json={"user_id": account_id, "access_level": int(level)},
            )

        return asyncio.run(self._mutate(call, action=f"add user {account_id} to {group_id}"))

    def remove_member(self, group_id: int, account_id: int) -> MembershipChangeResult:
        async def call(client: ResilientClient) -> httpx.Response:
            return await client.delete(f"groups/{group_id}/members/{account_id}")

        # A retried DELETE whose first attempt went through answers 404.
        return asyncio.run(
            self._mutate(
                call,
                action=f"remove user {account_id} from {group_id}",
                absent_ok=True,
            )
        )

    def _client(self) -> ResilientClient:
        return self.client_factory(self.config.resilience, limiter=self._limiter)

    async def _fetch_group_members_async(
        self,
        name: str,
        *,
        max_privilege: AccessLevel,
    ) -> AccessGroupMembership:
        async with self._client() as client:
            group = await self._find_group(client, name)
            members = await self._list_members(client, f"groups/{group.id}/members/all")
            direct = await self._list_members(client, f"groups/{group.id}/members")
        membership = parse_membership(
            group,
            members,
            max_privilege=max_privilege,
            direct_ids={member.id for member in direct},
        )
        log.debug(
            "GitLab group %s (%s): %s of %s members below %s, %s direct",
            group.full_path,
            group.id,
            len(membership.members),
            len(members),
            max_privilege.name,
            len(direct),
        )
        return membership

    async def _find_group(self, client: ResilientClient, name: str) -> GitLabGroup:
        response = await self._perform_request(
            client,
            "groups",
            params={"search": name, "per_page": self.config.page_size},
        )
        candidates = _validate(_GROUPS_ADAPTER, _json(response), what="groups")
        wanted = name.casefold()
        # Search matches substrings, so prefer the most specific exact match.
        for attribute in ("full_path", "path", "name"):
            for candidate in candidates:
                if getattr(candidate, attribute).casefold() == wanted:
                    return candidate
        raise GroupNotFoundError(f"GitLab group {name!r} not found")

    async def _list_members(self, client: ResilientClient, path: str) -> list[GroupMember]:
        """List a members endpoint, following ``X-Next-Page``.

        ``members/all`` includes access inherited from ancestor groups, while
        ``members`` only lists grants made on the group itself.
        """

        members: list[GroupMember] = []
        page = "1"
        while page:
            response = await self._perform_request(
                client,
                path,
                params={"per_page": self.config.page_size, "page": page},
            )
            members.extend(_validate(_MEMBERS_ADAPTER, _json(response), what="group members"))
            page = response.headers.get("X-Next-Page", "").strip()
        return members

    async def _perform_request(
        self,
        client: ResilientClient,
        path: str,
        *,
        params: dict[str, str | int],
    ) -> httpx.Response:
        try:
            response = await client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise AccessAPIError(f"GitLab request to {path} failed: {exc}") from exc

        if response.is_error:
            message = _describe_error(response)
            log.error("GitLab API error %s on %s: %s", response.status_code, path, message)
            raise AccessAPIError(message, status_code=response.status_code)
        return response

    async def _mutate(
        self,
        call: Callable[[ResilientClient], Awaitable[httpx.Response]],
        *,
        action: str,
        absent_ok: bool = False,
    ) -> MembershipChangeResult:
        try:
            async with self._client() as client:
                response = await call(client)
        except httpx.HTTPError as exc:
            return MembershipChangeResult.failure(f"{action}: {exc}")

        if absent_ok and response.status_code == httpx.codes.NOT_FOUND:
            log.debug("%s: membership already absent", action)
            return MembershipChangeResult.success()
        if response.is_error:
            return MembershipChangeResult.failure(
                f"{action}: HTTP {response.status_code} {_describe_error(response)}"
            )
        return MembershipChangeResult.success()


def _json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise AccessAPIError(
            f"GitLab returned invalid JSON for {response.request.url}",
            status_code=response.status_code,
        ) from exc


def _validate[T](adapter: TypeAdapter[list[T]], payload: object, *, what: str) -> list[T]:
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        raise AccessAPIError(f"Invalid GitLab {what} payload: {exc}") from exc


def _describe_error(response: httpx.Response) -> str:
    try:
        description = ErrorResponse.model_validate(response.json()).describe()
    except (ValueError, ValidationError):
        description = None
    return description or f"GitLab returned HTTP {response.status_code}"


if TYPE_CHECKING:
    _gateway_check: AccessGateway = GitLabAccessGateway()
