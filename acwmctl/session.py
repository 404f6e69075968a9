"""Login and logout against the control endpoint."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .channel import CommandChannel
from .constants import COMMAND_LOGIN, COMMAND_LOGOUT
from .errors import ChannelError

LOGGER = logging.getLogger(__name__)


def extract_session_id(response: Any) -> Optional[str]:
    """Return ``data.id.sessionID`` when every step of the path has the right type."""
    if not isinstance(response, dict):
        return None
    data = response.get("data")
    if not isinstance(data, dict):
        return None
    identity = data.get("id")
    if not isinstance(identity, dict):
        return None
    session_id = identity.get("sessionID")
    if not isinstance(session_id, str):
        return None
    return session_id


class SessionManager:
    """Owns the one session token of an invocation."""

    def __init__(self, channel: CommandChannel) -> None:
        self._channel = channel

    async def login(self, username: str, password: str) -> Optional[str]:
        try:
            response = await self._channel.send(
                COMMAND_LOGIN, {"username": username, "password": password}
            )
        except ChannelError as exc:
            LOGGER.debug("Login produced no response: %s", exc)
            return None

        session_id = extract_session_id(response)
        if session_id is None:
            LOGGER.debug("Login response carries no session id: %s", response)
        return session_id

    async def logout(self, session_id: str) -> None:
        """Invalidate ``session_id``. The outcome is never reported."""
        try:
            await self._channel.send(COMMAND_LOGOUT, {"sessionID": session_id})
        except ChannelError as exc:
            LOGGER.debug("Logout failed: %s", exc)
