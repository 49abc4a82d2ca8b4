"""Installation endpoints: the user's sites and the per-site requests."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

import aiohttp
from yarl import URL

from .auth import TokenManager
from .constants import REQUEST_TIMEOUT
from .exceptions import VRMAPIError
from .models import Installations, UserInfo
from .transport import request_json, request_raw

logger = logging.getLogger(__name__)

Query = str | Mapping[str, Any] | None

T = TypeVar("T", covariant=True)


class FromDict(Protocol[T]):
    def from_dict(self, data: dict) -> T: ...


async def fetch_installations(
    base_url: str,
    token_mgr: TokenManager,
    extended: bool = True,
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> Installations:
    """Fetch every installation the user can access.

    GET {base}/users/{idUser}/installations?extended=1
    """
    user_id = token_mgr.require_user_id()
    data = await request_json(
        "GET",
        f"{base_url}/users/{user_id}/installations",
        action="get url",
        headers=token_mgr.headers,
        params={"extended": "1"} if extended else None,
        session=session,
        timeout=timeout,
    )
    installations = Installations.from_dict(data if isinstance(data, dict) else {})
    for record in installations.records:
        logger.debug("Installation %s: %s", record.id_site, record.name)
    logger.info("Fetched %d installations", len(installations.records))
    return installations


async def fetch_user_me(
    base_url: str,
    token_mgr: TokenManager,
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> UserInfo:
    """Fetch the authenticated user and remember its id.

    GET {base}/users/me
    """
    data = await request_json(
        "GET",
        f"{base_url}/users/me",
        action="get url",
        headers=token_mgr.headers,
        session=session,
        timeout=timeout,
    )
    user = UserInfo.from_dict(data if isinstance(data, dict) else {})
    if not user.id:
        raise VRMAPIError(f"get url failed, unexpected response: {data}", status_code=200)
    token_mgr.set_user_id(user.id)
    logger.debug("Resolved VRM user id %s", user.id)
    return user


def installation_url(base_url: str, site_id: int, request: str) -> str:
    if isinstance(site_id, bool) or not isinstance(site_id, int) or site_id <= 0:
        raise ValueError(f"Invalid site id {site_id!r}, expected a positive int")
    request = request.lstrip("/") if request else ""
    if not request:
        raise ValueError("Request path must not be empty")
    return f"{base_url}/installations/{site_id}/{request}"


async def get(
    base_url: str,
    token_mgr: TokenManager,
    site_id: int,
    request: str,
    query: Query = None,
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> bytes:
    """Fetch one installation request and return the raw JSON body.

    GET {base}/installations/{site_id}/{request}?{query}
    *request* is normally one of ``REQUESTS_LIST``; *query* is either a raw
    query string (``"type=venus"``) or a mapping.
    """
    url: str | URL = installation_url(base_url, site_id, request)
    params = None
    if isinstance(query, str):
        # Sent verbatim, already percent-encoded by the caller
        if query:
            url = URL(f"{url}?{query}", encoded=True)
    elif query:
        params = query
    return await request_raw(
        "GET",
        url,
        action="get url",
        headers=token_mgr.headers,
        params=params,
        session=session,
        timeout=timeout,
    )


async def get_object(
    base_url: str,
    token_mgr: TokenManager,
    site_id: int,
    request: str,
    query: Query = None,
    model: FromDict[T] | None = None,
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> Any:
    """Like :func:`get` but decode the body, optionally into *model*."""
    body = await get(base_url, token_mgr, site_id, request, query, session, timeout)
    try:
        data = json.loads(body)
    except ValueError as e:
        raise VRMAPIError(
            f"get url failed, invalid JSON response: {e}",
            status_code=200,
            response_body=body.decode("utf-8", "replace"),
        ) from e
    if model is None:
        return data
    return model.from_dict(data)
