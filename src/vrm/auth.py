"""Authentication: credential/token state and the login/logout calls."""

import dataclasses
import enum
import logging
import threading
from typing import Protocol

import aiohttp

from .constants import (
    AUTH_HEADER,
    BEARER_SCHEME,
    LOGOUT_OK_BODY,
    REQUEST_TIMEOUT,
    TOKEN_SCHEME,
)
from .exceptions import VRMAuthError, VRMLogoutError, VRMNotAuthenticatedError
from .models import AccessToken, Credentials, Logon
from .transport import request_json

logger = logging.getLogger(__name__)


class ClientState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    LOGGED_OUT = "logged_out"


class UserSource(Protocol):
    def get_name(self) -> str: ...

    def get_pass(self) -> str: ...


class LogonSource(Protocol):
    def get_token(self) -> str: ...

    def get_user_id(self) -> int: ...


class AccessSource(Protocol):
    def get_token(self) -> str: ...

    def get_token_id(self) -> str: ...


class TokenManager:
    """Holds credentials, the bearer session and the access token.

    All reads and writes go through one lock so the manager can be shared
    with code running outside the event loop thread.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._user = Credentials()
        self._logon = Logon()
        self._access = AccessToken()
        self._logged_out = False

    # ── Credentials ──────────────────────────────────────────────────────

    def set_user(self, name: str, password: str) -> None:
        with self._lock:
            self._user = Credentials(username=name, password=password)

    def set_user_json(self, config: str | bytes) -> None:
        user = Credentials.from_json(config)
        with self._lock:
            self._user = user

    def set_user_from(self, source: UserSource) -> None:
        self.set_user(source.get_name(), source.get_pass())

    def user_json(self) -> str:
        with self._lock:
            return self._user.to_json()

    @property
    def username(self) -> str:
        with self._lock:
            return self._user.username

    # ── Bearer session ───────────────────────────────────────────────────

    def set_logon(self, token: str, user_id: int) -> None:
        with self._lock:
            self._logon = Logon(token=token, id_user=user_id)
            self._logged_out = False

    def set_logon_json(self, config: str | bytes) -> None:
        logon = Logon.from_json(config)
        with self._lock:
            self._logon = logon
            self._logged_out = False

    def set_logon_from(self, source: LogonSource) -> None:
        self.set_logon(source.get_token(), source.get_user_id())

    def logon_json(self) -> str:
        with self._lock:
            return self._logon.to_json()

    def set_user_id(self, user_id: int) -> None:
        with self._lock:
            self._logon = dataclasses.replace(self._logon, id_user=user_id)

    @property
    def token(self) -> str:
        with self._lock:
            return self._logon.token

    @property
    def user_id(self) -> int:
        with self._lock:
            return self._logon.id_user

    # ── Access token ─────────────────────────────────────────────────────

    def set_access(self, token: str, token_id: str) -> None:
        with self._lock:
            self._access = AccessToken(token=token, id_access_token=token_id)

    def set_access_json(self, config: str | bytes) -> None:
        access = AccessToken.from_json(config)
        with self._lock:
            self._access = access

    def set_access_from(self, source: AccessSource) -> None:
        self.set_access(source.get_token(), source.get_token_id())

    def store_access(self, access: AccessToken) -> None:
        with self._lock:
            self._access = access

    def clear_access(self) -> None:
        with self._lock:
            self._access = AccessToken()

    def access_json(self) -> str:
        with self._lock:
            return self._access.to_json()

    @property
    def access_token(self) -> str:
        with self._lock:
            return self._access.token

    @property
    def access_token_id(self) -> str:
        with self._lock:
            return self._access.id_access_token

    # ── Derived state ────────────────────────────────────────────────────

    @property
    def state(self) -> ClientState:
        with self._lock:
            if self._logon.token or self._access.token:
                return ClientState.AUTHENTICATED
            if self._logged_out:
                return ClientState.LOGGED_OUT
            return ClientState.UNAUTHENTICATED

    @property
    def headers(self) -> dict[str, str]:
        """Auth headers for GET requests; the access token wins over the bearer token."""
        with self._lock:
            access_token = self._access.token
            bearer = self._logon.token
        if access_token:
            auth = f"{TOKEN_SCHEME} {access_token}"
        elif bearer:
            auth = f"{BEARER_SCHEME} {bearer}"
        else:
            raise VRMNotAuthenticatedError("not authenticated, call connect() or set a token first")
        return {AUTH_HEADER: auth, "Content-Type": "application/json"}

    @property
    def bearer_headers(self) -> dict[str, str]:
        """Auth headers that always use the bearer token."""
        token = self.token
        if not token:
            raise VRMNotAuthenticatedError("no bearer token, call connect() first")
        return {AUTH_HEADER: f"{BEARER_SCHEME} {token}", "Content-Type": "application/json"}

    def require_user_id(self) -> int:
        user_id = self.user_id
        if not user_id:
            raise VRMNotAuthenticatedError(
                "user id unknown, call connect() or fetch_user_me() first"
            )
        return user_id

    # ── Remote calls ─────────────────────────────────────────────────────

    async def login(
        self,
        base_url: str,
        session: aiohttp.ClientSession | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> Logon:
        """Log in with the stored credentials.

        POST {base}/auth/login
        Replaces the bearer session on success; leaves it untouched on failure.
        """
        with self._lock:
            payload = self._user.to_dict()
        if not payload["username"]:
            raise VRMNotAuthenticatedError("no username set, call set_user() first")

        data = await request_json(
            "POST",
            f"{base_url}/auth/login",
            action="connect",
            headers={"Content-Type": "application/json"},
            json=payload,
            session=session,
            timeout=timeout,
            error_cls=VRMAuthError,
        )
        if not isinstance(data, dict) or not data.get("token"):
            raise VRMAuthError(
                f"connect failed, unexpected response: {data}", status_code=200
            )
        logon = Logon.from_dict(data)
        with self._lock:
            self._logon = logon
            self._logged_out = False

        if logon.verification_mode:
            logger.info(
                "Two-factor verification mode %r (code sent: %s)",
                logon.verification_mode, logon.verification_sent,
            )
        logger.info("Logged in to VRM as user %s", logon.id_user)
        return logon

    async def logout(
        self,
        base_url: str,
        session: aiohttp.ClientSession | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Blacklist the bearer token.

        GET {base}/auth/logout, answered with ``{"token": ""}`` on success.
        """
        data = await request_json(
            "GET",
            f"{base_url}/auth/logout",
            action="logout",
            headers=self.bearer_headers,
            session=session,
            timeout=timeout,
        )
        if data != LOGOUT_OK_BODY:
            raise VRMLogoutError(
                f"logout failed, unexpected response: {data}", status_code=200
            )
        with self._lock:
            self._logon = Logon()
            self._logged_out = True
        logger.info("Logged out of VRM")
