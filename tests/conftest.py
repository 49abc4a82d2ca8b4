"""Shared test fixtures for the VRM client tests.

The aiohttp session is replaced by a MagicMock whose ``request()`` returns an
async context manager yielding a canned response. The ``vrm_server`` fixture
runs a local aiohttp server for checks that need what actually goes over the
wire.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from vrm import VRM

BASE_URL = "https://vrm.example.test/v2"


def make_response(status: int = 200, json_data=None, body: bytes | None = None):
    """Build a mock aiohttp response with the given status and body."""
    if body is None:
        body = json.dumps(json_data if json_data is not None else {}).encode()
    resp = MagicMock()
    resp.status = status
    resp.read = AsyncMock(return_value=body)
    return resp


def make_session(*responses):
    """Mock session answering successive request() calls with *responses*."""
    contexts = []
    for resp in responses:
        ctx = MagicMock()
        ctx.__aenter__ = AsyncMock(return_value=resp)
        ctx.__aexit__ = AsyncMock(return_value=False)
        contexts.append(ctx)
    session = MagicMock(spec=aiohttp.ClientSession)
    session.request = MagicMock(side_effect=contexts)
    return session


def call_of(session, index: int = 0):
    """Return (method, url, kwargs) of the index-th request() call."""
    call = session.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs


@pytest.fixture
def installations_payload():
    return {
        "success": True,
        "records": [
            {
                "idSite": 151734,
                "accessLevel": 1,
                "owner": True,
                "is_admin": True,
                "name": "Boat",
                "identifier": "c0619ab1c1a2",
                "idUser": 22,
                "pvMax": 1200,
                "timezone": "Europe/Amsterdam",
                "phonenumber": None,
                "geofenceEnabled": False,
                "realtimeUpdates": True,
                "hasMains": 1,
                "syscreated": 1616421420,
                "device_icon": "boat",
                "alarm": False,
                "last_timestamp": 1700000000,
                "tags": [{"idTag": 3, "name": "alarm", "automatic": True}],
                "current_time": "11:05",
                "timezone_offset": 3600,
                "images": False,
                "view_permissions": {"update_settings": True, "vnc": True},
                "extended": [
                    {
                        "idDataAttribute": 143,
                        "code": "bs",
                        "description": "Battery SOC",
                        "formatWithUnit": "%.1F %%",
                        "dataType": "float",
                        "idDeviceType": 0,
                        "rawValue": "87.5",
                        "formattedValue": "87.5 %",
                        "instance": "512",
                        "dataAttributeEnumValues": [
                            {"nameEnum": "Off", "valueEnum": 0},
                        ],
                        "dataAttributes": [
                            {"instance": 512, "dbusServiceType": "battery", "dbusPath": "/Soc"},
                        ],
                    }
                ],
                "demo_mode": False,
                "mqtt_webhost": "webmqtt42.victronenergy.com",
                "high_workload": False,
                "current_alarms": ["Low battery"],
                "num_alarms": 1,
            },
            {"idSite": 2, "name": "Cabin"},
        ],
    }


@pytest.fixture
def logged_in_client():
    """Factory: a VRM client with a bearer session and a mocked aiohttp session."""

    def _make(*responses) -> VRM:
        client = VRM(
            "user@example.com",
            "s3cret",
            session=make_session(*responses),
            base_url=BASE_URL,
        )
        client.set_logon("jwt-abc", 22)
        return client

    return _make


@pytest_asyncio.fixture
async def vrm_server():
    """Local HTTP server standing in for VRM; records every request URL it sees."""
    seen = []

    async def handler(request: web.Request) -> web.Response:
        seen.append(request.rel_url)
        return web.json_response({"success": True, "records": {}})

    app = web.Application()
    app.router.add_get("/v2/installations/{site_id}/{request:.+}", handler)
    server = TestServer(app)
    await server.start_server()
    yield SimpleNamespace(base_url=str(server.make_url("/v2")), seen=seen)
    await server.close()
