"""Single datapoint writes."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .channel import CommandChannel
from .constants import COMMAND_SET_DATAPOINT
from .errors import ChannelError
from .models import ControlPoint

LOGGER = logging.getLogger(__name__)


def is_success(response: Mapping[str, Any]) -> bool:
    success = response.get("success")
    # bool is an int subclass but JSON true is not an integer
    if isinstance(success, bool) or not isinstance(success, int):
        return False
    return success > 0


async def set_datapoint(
    channel: CommandChannel,
    session_id: str,
    control_point: ControlPoint,
    value: int,
) -> bool:
    """Write ``value`` to ``control_point``; True only when the device confirms it."""

    payload = {"sessionID": session_id, "uid": int(control_point), "value": value}
    try:
        response = await channel.send(COMMAND_SET_DATAPOINT, payload)
    except ChannelError as exc:
        LOGGER.debug("%s produced no response: %s", COMMAND_SET_DATAPOINT, exc)
        return False
    return is_success(response)
