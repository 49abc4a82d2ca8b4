"""Async Python client for the Victron Energy VRM API."""

from .auth import ClientState
from .client import VRM
from .exceptions import (
    VRMAPIError,
    VRMAuthError,
    VRMError,
    VRMLogoutError,
    VRMNotAuthenticatedError,
)
from .models import (
    AccessToken,
    AccessTokensList,
    Credentials,
    Installation,
    Installations,
    Logon,
    UserInfo,
)

__all__ = [
    "VRM",
    "ClientState",
    "AccessToken",
    "AccessTokensList",
    "Credentials",
    "Installation",
    "Installations",
    "Logon",
    "UserInfo",
    "VRMError",
    "VRMAuthError",
    "VRMNotAuthenticatedError",
    "VRMAPIError",
    "VRMLogoutError",
]
