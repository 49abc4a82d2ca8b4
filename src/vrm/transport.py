"""HTTP transport: send one request to the VRM API and map failures."""

import json
import logging
from typing import Any

import aiohttp
from yarl import URL

from .constants import REQUEST_TIMEOUT
from .exceptions import VRMAPIError, VRMError

logger = logging.getLogger(__name__)


def raise_for_status(
    action: str, status: int, body: str, error_cls: type[VRMError] = VRMAPIError
) -> None:
    """Raise *error_cls* built from a non-200 VRM response.

    VRM reports failures as ``{"success": false, "errors": ..., "error_code": ...}``.
    When that envelope is present its ``errors`` end up in the message,
    otherwise only the status code does.
    """
    errors = None
    error_code = None
    try:
        data = json.loads(body)
    except ValueError:
        data = None
    if isinstance(data, dict):
        errors = data.get("errors")
        error_code = data.get("error_code")

    if errors is not None:
        message = f"{action} failed, {errors}"
    else:
        message = f"{action} failed, code {status}"
    raise error_cls(
        message,
        status_code=status,
        response_body=body,
        errors=errors,
        error_code=error_code,
    )


async def _send(
    session: aiohttp.ClientSession,
    method: str,
    url: str | URL,
    action: str,
    error_cls: type[VRMError],
    **kwargs: Any,
) -> bytes:
    async with session.request(method, url, **kwargs) as response:
        body = await response.read()
        logger.debug("%s %s -> %s", method, url, response.status)
        if response.status != 200:
            raise_for_status(
                action, response.status, body.decode("utf-8", "replace"), error_cls
            )
        return body


async def request_raw(
    method: str,
    url: str | URL,
    *,
    action: str,
    headers: dict[str, str],
    session: aiohttp.ClientSession | None = None,
    timeout: float = REQUEST_TIMEOUT,
    error_cls: type[VRMError] = VRMAPIError,
    **kwargs: Any,
) -> bytes:
    """Send a request and return the raw body of a 200 response.

    Uses *session* when given (the caller owns it), otherwise a short-lived
    session is opened for this request only.
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    if session is None:
        async with aiohttp.ClientSession(timeout=client_timeout) as own_session:
            return await _send(
                own_session, method, url, action, error_cls, headers=headers, **kwargs
            )
    return await _send(
        session,
        method,
        url,
        action,
        error_cls,
        headers=headers,
        timeout=client_timeout,
        **kwargs,
    )


async def request_json(method: str, url: str | URL, *, action: str, **kwargs: Any) -> Any:
    """Send a request and return the decoded JSON body of a 200 response."""
    body = await request_raw(method, url, action=action, **kwargs)
    try:
        return json.loads(body)
    except ValueError as e:
        raise VRMAPIError(
            f"{action} failed, invalid JSON response: {e}",
            status_code=200,
            response_body=body.decode("utf-8", "replace"),
        ) from e
