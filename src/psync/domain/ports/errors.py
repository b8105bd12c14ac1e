"""Errors raised by gateway adapters."""

from __future__ import annotations


class GatewayError(RuntimeError):
    """Raised when an external system cannot serve a gateway request."""


class DirectoryAPIError(GatewayError):
    """Raised when the identity directory returns an unexpected response."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class AccessAPIError(GatewayError):
    """Raised when the access system returns an unexpected response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GroupNotFoundError(AccessAPIError):
    """Raised when no access group matches a requested name."""
