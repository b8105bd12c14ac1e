"""HTTP client for the Okta Groups API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import TypeAdapter, ValidationError

from psync.adapters.http_resilience import ClientFactory, ResilientClient
from psync.config.okta import OktaConfig, get_okta_config
from psync.domain.ports.directory import DirectoryGateway
from psync.domain.ports.errors import DirectoryAPIError

from .schema import ErrorResponse, OktaGroup, OktaUser
from .translator import parse_upstream_group

if TYPE_CHECKING:
    from psync.domain.model import UpstreamGroup

log = getLogger(__name__)

_GROUPS_ADAPTER = TypeAdapter(list[OktaGroup])
_USERS_ADAPTER = TypeAdapter(list[OktaUser])


@dataclass(slots=True)
class OktaDirectoryGateway:
    """Directory gateway backed by Okta groups whose names share a prefix."""

    config: OktaConfig = field(default_factory=get_okta_config)
    client_factory: ClientFactory = field(default=ResilientClient)

    def fetch_groups_by_prefix(self, prefix: str) -> list[UpstreamGroup]:
        return asyncio.run(self._fetch_groups_async(prefix))

    async def _fetch_groups_async(self, prefix: str) -> list[UpstreamGroup]:
        groups: list[UpstreamGroup] = []
        async with self.client_factory(self.config.resilience) as client:
            payloads = await self._collect(
                client,
                "groups",
                params={"q": prefix, "limit": self.config.page_size},
            )
            okta_groups = _validate(_GROUPS_ADAPTER, payloads, what="groups")
            for okta_group in okta_groups:
                # The search is a "starts with" match on name or description.
                if not okta_group.profile.name.startswith(prefix):
                    continue
                user_payloads = await self._collect(
                    client,
                    f"groups/{okta_group.id}/users",
                    params={"limit": self.config.page_size},
                )
                users = _validate(_USERS_ADAPTER, user_payloads, what="group users")
                group = parse_upstream_group(okta_group, users)
                log.debug(
                    "Okta group %s: %s active, %s deprovisioned",
                    group.name,
                    len(group.active_members),
                    len(group.deprovisioned_members),
                )
                groups.append(group)
        return groups

    async def _collect(
        self,
        client: ResilientClient,
        path: str,
        *,
        params: dict[str, str | int],
    ) -> list[object]:
        """Follow ``Link: rel="next"`` pagination and return all items."""

        items: list[object] = []
        url: str = path
        query: dict[str, str | int] | None = params
        while True:
            response = await self._perform_request(client, url, params=query)
            try:
                payload = response.json()
            except ValueError as exc:
                raise DirectoryAPIError(f"Okta returned invalid JSON for {path}") from exc
            if not isinstance(payload, list):
                raise DirectoryAPIError(f"Unexpected Okta response payload for {path}")
            items.extend(payload)

            next_url = response.links.get("next", {}).get("url")
            if not next_url:
                return items
            url, query = next_url, None

    async def _perform_request(
        self,
        client: ResilientClient,
        url: str,
        *,
        params: dict[str, str | int] | None,
    ) -> httpx.Response:
        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise DirectoryAPIError(f"Okta request to {url} failed: {exc}") from exc

        if response.is_error:
            message, code = _describe_error(response)
            log.error("Okta API error %s: %s", code or response.status_code, message)
            raise DirectoryAPIError(message, code=code)
        return response


def _validate[T](adapter: TypeAdapter[list[T]], payload: list[object], *, what: str) -> list[T]:
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        raise DirectoryAPIError(f"Invalid Okta {what} payload: {exc}") from exc


def _describe_error(response: httpx.Response) -> tuple[str, str | None]:
    try:
        error = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return f"Okta returned HTTP {response.status_code}", None
    return error.error_summary, error.error_code


if TYPE_CHECKING:
    _gateway_check: DirectoryGateway = OktaDirectoryGateway()
