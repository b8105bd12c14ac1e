"""Pydantic models describing the Okta Groups API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from psync.domain.model import DirectoryStatus


class OktaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GroupProfile(OktaBaseModel):
    name: str
    description: str | None = None


class OktaGroup(OktaBaseModel):
    id: str
    type: str | None = None
    profile: GroupProfile


class UserProfile(OktaBaseModel):
    login: str | None = None
    email: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")


class OktaUser(OktaBaseModel):
    id: str
    status: DirectoryStatus
    profile: UserProfile = Field(default_factory=UserProfile)


class ErrorResponse(OktaBaseModel):
    error_code: str = Field(alias="errorCode")
    error_summary: str = Field(alias="errorSummary")
