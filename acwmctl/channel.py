"""Transport for the device's single JSON control endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Mapping

import aiohttp

from .config import AirconConfig
from .errors import ChannelTransportError, EmptyResponseError, MalformedResponseError

LOGGER = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def build_envelope(command: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {"command": command, "data": dict(payload)}


class CommandChannel:
    """POSTs ``{command, data}`` envelopes to ``/api.cgi``.

    Exactly one request is made per :meth:`send`; nothing is retried.
    """

    def __init__(self, session: aiohttp.ClientSession, aircon: AirconConfig) -> None:
        self._session = session
        self._url = aircon.command_url

    @property
    def url(self) -> str:
        return self._url

    async def send(self, command: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Send one command and return the decoded JSON object.

        Raises
        ------
        ChannelTransportError
            The request did not complete.
        EmptyResponseError
            The device returned no body.
        MalformedResponseError
            The body is not a JSON object.
        """

        body = json.dumps(build_envelope(command, payload))
        LOGGER.debug("POST %s command=%s", self._url, command)

        try:
            async with self._session.post(
                self._url, data=body, headers=JSON_HEADERS
            ) as response:
                raw = await response.read()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ChannelTransportError(f"{command} request failed: {exc}") from exc

        LOGGER.debug("%s answered HTTP %s with %d bytes", command, status, len(raw))

        if not raw.strip():
            raise EmptyResponseError(f"no result from {command}")

        try:
            decoded = json.loads(raw)
        except ValueError as exc:
            raise MalformedResponseError(f"{command} response is not JSON: {exc}") from exc
        if not isinstance(decoded, dict):
            raise MalformedResponseError(
                f"{command} response is {type(decoded).__name__}, not an object"
            )
        return decoded
