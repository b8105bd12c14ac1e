"""Pydantic models describing the GitLab REST API v4 payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from psync.domain.model import AccessLevel


class GitLabBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GitLabGroup(GitLabBaseModel):
    id: int
    name: str
    path: str
    full_path: str


class GroupSamlIdentity(GitLabBaseModel):
    extern_uid: str | None = None
    provider: str | None = None
    saml_provider_id: int | None = None


class GroupMember(GitLabBaseModel):
    id: int
    username: str
    name: str | None = None
    state: str | None = None
    access_level: AccessLevel
    group_saml_identity: GroupSamlIdentity | None = None


class ErrorResponse(GitLabBaseModel):
    message: str | dict[str, list[str]] | list[str] | None = None
    error: str | None = None

    def describe(self) -> str | None:
        if isinstance(self.message, str):
            return self.message
        if isinstance(self.message, dict):
            return "; ".join(
                f"{key}: {', '.join(values)}" for key, values in sorted(self.message.items())
            )
        if isinstance(self.message, list):
            return "; ".join(self.message)
        return self.error
