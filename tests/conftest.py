from __future__ import annotations

import json
from configparser import ConfigParser
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pytest
import pytest_asyncio
from aiohttp import web

from acwmctl.config import AcwmConfig, AirconConfig, HttpConfig, LoggingConfig

Reply = Union[Dict[str, Any], list, str, bytes, int, None]


def schema_payload(
    power: Optional[list] = None,
    fan: Optional[list] = None,
    *,
    omit: tuple[str, ...] = (),
) -> Dict[str, Any]:
    uid: Dict[str, Any] = {
        "1": power if power is not None else ["On/Off", {"en": "On/Off"}],
        "2": ["Mode"],
        "4": fan if fan is not None else ["Fan Speed", {"en": "Fan Speed"}],
    }
    for key in omit:
        uid.pop(key, None)
    return {
        "signals": {
            "uid": uid,
            "uidTextvalues": {
                "1": {"0": "Off", "1": "On"},
                "4": {"1": "Low", "2": "Medium", "3": "High", "4": "Max"},
            },
        }
    }


def _respond(reply: Reply) -> web.StreamResponse:
    if isinstance(reply, int):
        return web.Response(status=reply)
    if reply is None:
        return web.Response(body=b"")
    if isinstance(reply, bytes):
        return web.Response(body=reply, content_type="application/json")
    if isinstance(reply, str):
        return web.Response(text=reply, content_type="application/json")
    return web.json_response(reply)


class FakeDevice:
    """In-process stand-in for the unit's HTTP API."""

    def __init__(self) -> None:
        self.port = 0
        self.schema: Reply = schema_payload()
        self.replies: Dict[str, Reply] = {
            "login": {"data": {"id": {"sessionID": "abc123"}}},
            "setdatapointvalue": {"success": 1},
            "logout": {"success": 1},
        }
        self.schema_requests = 0
        self.calls: list[Dict[str, Any]] = []
        self.content_types: list[str] = []

    @property
    def commands(self) -> list[str]:
        return [call["command"] for call in self.calls]

    def call(self, command: str) -> Dict[str, Any]:
        return next(call for call in self.calls if call["command"] == command)

    @property
    def aircon(self) -> AirconConfig:
        return AirconConfig(
            address="127.0.0.1", username="admin", password="secret", port=self.port
        )

    def build_config(self, tmp_path: Optional[Path] = None) -> AcwmConfig:
        return AcwmConfig(
            aircon=self.aircon,
            http=HttpConfig(timeout_seconds=5.0),
            logging=LoggingConfig(),
            raw=ConfigParser(),
            path=(tmp_path or Path(".")) / "acwm.cfg",
        )

    async def handle_schema(self, request: web.Request) -> web.StreamResponse:
        self.schema_requests += 1
        return _respond(self.schema)

    async def handle_command(self, request: web.Request) -> web.StreamResponse:
        self.content_types.append(request.headers.get("Content-Type", ""))
        envelope = json.loads(await request.read())
        self.calls.append(envelope)
        reply = self.replies.get(envelope["command"], {})
        if reply == "echo":
            return web.json_response({"data": envelope["data"]})
        return _respond(reply)


@pytest_asyncio.fixture
async def fake_device(unused_tcp_port):
    device = FakeDevice()

    app = web.Application()
    app.router.add_get("/js/data/data.json", device.handle_schema)
    app.router.add_post("/api.cgi", device.handle_command)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
    await site.start()
    device.port = unused_tcp_port

    try:
        yield device
    finally:
        await runner.cleanup()


@pytest.fixture
def make_schema():
    return schema_payload
