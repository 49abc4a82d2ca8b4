"""Main VRM client — public interface and orchestration."""

import logging
from typing import Any

import aiohttp

from .access_tokens import (
    create_access_token as _create_access_token,
    fetch_access_tokens_list,
    revoke_access_token as _revoke_access_token,
)
from .auth import AccessSource, ClientState, LogonSource, TokenManager, UserSource
from .constants import API_BASE_URL, REQUEST_TIMEOUT, REQUESTS_LIST
from .installations import (
    FromDict,
    Query,
    fetch_installations,
    fetch_user_me as _fetch_user_me,
    get as _get,
    get_object as _get_object,
)
from .models import AccessToken, AccessTokensList, Installations, Logon, UserInfo

logger = logging.getLogger(__name__)


class VRM:
    """Async client for the Victron Energy VRM API.

    Usage::

        api = VRM("user@example.com", "password")
        await api.connect()
        installations = await api.get_installations()
        stats = await api.get_object(installations.records[0].id_site, "stats", "type=venus")
        await api.close()

    or, with a personal access token instead of a password::

        api = VRM()
        api.set_access("token", "tokenId")
        await api.fetch_user_me()
    """

    def __init__(
        self,
        username: str | None = None,
        password: str | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Owned by the caller; None means one short-lived session per request
        self._session = session

        self._token_mgr = TokenManager()
        if username is not None:
            self._token_mgr.set_user(username, password or "")

        # Populated by get_installations / fetch_user_me
        self.installations: Installations | None = None
        self.user: UserInfo | None = None

    async def __aenter__(self) -> "VRM":
        if self._token_mgr.username and not self._token_mgr.token:
            await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._token_mgr.token:
            await self.close()

    # ── Credentials & tokens ─────────────────────────────────────────────

    def set_user(self, name: str, password: str) -> None:
        """Set the credentials used by connect()."""
        self._token_mgr.set_user(name, password)

    def set_user_json(self, config: str | bytes) -> None:
        self._token_mgr.set_user_json(config)

    def set_user_from(self, source: UserSource) -> None:
        self._token_mgr.set_user_from(source)

    def user_json(self) -> str:
        return self._token_mgr.user_json()

    def set_logon(self, token: str, user_id: int) -> None:
        """Reuse a bearer session obtained earlier (e.g. by another process)."""
        self._token_mgr.set_logon(token, user_id)

    def set_logon_json(self, config: str | bytes) -> None:
        self._token_mgr.set_logon_json(config)

    def set_logon_from(self, source: LogonSource) -> None:
        self._token_mgr.set_logon_from(source)

    def logon_json(self) -> str:
        return self._token_mgr.logon_json()

    def set_access(self, token: str, token_id: str) -> None:
        """Use a personal access token; it takes precedence over the bearer token."""
        self._token_mgr.set_access(token, token_id)

    def set_access_json(self, config: str | bytes) -> None:
        self._token_mgr.set_access_json(config)

    def set_access_from(self, source: AccessSource) -> None:
        self._token_mgr.set_access_from(source)

    def access_json(self) -> str:
        return self._token_mgr.access_json()

    @property
    def token(self) -> str:
        return self._token_mgr.token

    @property
    def user_id(self) -> int:
        return self._token_mgr.user_id

    @property
    def access_token(self) -> str:
        return self._token_mgr.access_token

    @property
    def access_token_id(self) -> str:
        return self._token_mgr.access_token_id

    @property
    def state(self) -> ClientState:
        return self._token_mgr.state

    # ── Session life cycle ───────────────────────────────────────────────

    async def connect(self) -> Logon:
        """Log in with username/password and obtain a bearer token."""
        return await self._token_mgr.login(self.base_url, self._session, self.timeout)

    async def close(self) -> None:
        """Log out; the bearer token is blacklisted server side."""
        await self._token_mgr.logout(self.base_url, self._session, self.timeout)

    # ── Users & access tokens ────────────────────────────────────────────

    async def fetch_user_me(self) -> UserInfo:
        """Fetch the current user and populate user_id."""
        self.user = await _fetch_user_me(
            self.base_url, self._token_mgr, self._session, self.timeout
        )
        return self.user

    async def create_access_token(self, name: str) -> AccessToken:
        return await _create_access_token(
            self.base_url, self._token_mgr, name, self._session, self.timeout
        )

    async def revoke_access_token(self, token_id: str | None = None) -> int:
        return await _revoke_access_token(
            self.base_url, self._token_mgr, token_id, self._session, self.timeout
        )

    async def get_access_tokens_list(self) -> AccessTokensList:
        return await fetch_access_tokens_list(
            self.base_url, self._token_mgr, self._session, self.timeout
        )

    # ── Installations ────────────────────────────────────────────────────

    async def get_installations(self, extended: bool = True) -> Installations:
        """Return all installations of the user and cache them on the client."""
        self.installations = await fetch_installations(
            self.base_url, self._token_mgr, extended, self._session, self.timeout
        )
        return self.installations

    async def get(self, site_id: int, request: str, query: Query = None) -> bytes:
        """GET /installations/{site_id}/{request}, see requests_list()."""
        return await _get(
            self.base_url, self._token_mgr, site_id, request, query,
            self._session, self.timeout,
        )

    async def get_object(
        self,
        site_id: int,
        request: str,
        query: Query = None,
        model: FromDict | None = None,
    ) -> Any:
        """GET /installations/{site_id}/{request} and decode the JSON body."""
        return await _get_object(
            self.base_url, self._token_mgr, site_id, request, query, model,
            self._session, self.timeout,
        )

    @staticmethod
    def requests_list() -> list[str]:
        """Known installation request paths."""
        return list(REQUESTS_LIST)
