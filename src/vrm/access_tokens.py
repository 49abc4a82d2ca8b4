"""Personal access token endpoints: create, revoke, list."""

import logging

import aiohttp

from .auth import TokenManager
from .constants import REQUEST_TIMEOUT
from .exceptions import VRMAPIError
from .models import AccessToken, AccessTokensList
from .transport import request_json

logger = logging.getLogger(__name__)


async def create_access_token(
    base_url: str,
    token_mgr: TokenManager,
    name: str,
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> AccessToken:
    """Create a personal access token and make it the client's access token.

    POST {base}/users/{idUser}/accesstokens/create
    The token is only ever returned once, by this call.
    """
    if not name:
        raise ValueError("Access token name must not be empty")

    headers = token_mgr.bearer_headers
    user_id = token_mgr.require_user_id()
    data = await request_json(
        "POST",
        f"{base_url}/users/{user_id}/accesstokens/create",
        action="create access tokens",
        headers=headers,
        json={"name": name},
        session=session,
        timeout=timeout,
    )
    access = AccessToken.from_dict(data if isinstance(data, dict) else {})
    if not access.token:
        raise VRMAPIError(
            f"create access tokens failed, unexpected response: {data}", status_code=200
        )
    token_mgr.store_access(access)
    logger.info("Created access token %r (id %s)", name, access.id_access_token)
    return access


async def revoke_access_token(
    base_url: str,
    token_mgr: TokenManager,
    token_id: str | None = None,
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> int:
    """Revoke an access token, by default the client's own.

    GET {base}/users/{idUser}/accesstokens/{idAccessToken}/revoke
    Returns the number of tokens removed.
    """
    current_id = token_mgr.access_token_id
    token_id = token_id or current_id
    if not token_id:
        raise ValueError("No access token id given and none is set on the client")

    user_id = token_mgr.require_user_id()
    data = await request_json(
        "GET",
        f"{base_url}/users/{user_id}/accesstokens/{token_id}/revoke",
        action="revoke access tokens",
        headers=token_mgr.headers,
        session=session,
        timeout=timeout,
    )
    if not isinstance(data, dict) or not data.get("success"):
        raise VRMAPIError(f"revoke access tokens failed, {data}", status_code=200)

    removed = int((data.get("data") or {}).get("removed") or 0)
    if token_id == current_id:
        token_mgr.clear_access()
    logger.info("Revoked access token %s (%d removed)", token_id, removed)
    return removed


async def fetch_access_tokens_list(
    base_url: str,
    token_mgr: TokenManager,
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
) -> AccessTokensList:
    """List the user's access tokens (the token values themselves are never returned).

    GET {base}/users/{idUser}/accesstokens/list?extended=1
    """
    user_id = token_mgr.require_user_id()
    data = await request_json(
        "GET",
        f"{base_url}/users/{user_id}/accesstokens/list",
        action="get url",
        headers=token_mgr.headers,
        params={"extended": "1"},
        session=session,
        timeout=timeout,
    )
    tokens = AccessTokensList.from_dict(data if isinstance(data, dict) else {})
    logger.debug("User %s has %d access tokens", user_id, len(tokens.tokens))
    return tokens
