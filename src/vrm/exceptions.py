"""Exception hierarchy for the VRM client."""

from typing import Any


class VRMError(Exception):
    """Base exception for all VRM errors."""


class VRMAuthError(VRMError):
    """Authentication-related errors (bad credentials, rejected tokens)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        errors: Any = None,
        error_code: str | None = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        self.errors = errors
        self.error_code = error_code
        super().__init__(message)


class VRMNotAuthenticatedError(VRMAuthError):
    """No token or user id is available for the requested operation."""


class VRMAPIError(VRMError):
    """Non-auth API failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        errors: Any = None,
        error_code: str | None = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        self.errors = errors
        self.error_code = error_code
        super().__init__(message)


class VRMLogoutError(VRMAPIError):
    """Logout was answered but the token was not blacklisted."""
