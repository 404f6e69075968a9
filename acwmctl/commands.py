"""Translation of command-line words into a single datapoint write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .constants import APP_NAME, FAN_LEVEL_MAX, FAN_LEVEL_MIN
from .errors import UsageError
from .models import ControlPoint

USAGE = f"Usage: {APP_NAME} <on|off|fan {FAN_LEVEL_MIN}-{FAN_LEVEL_MAX}>"


@dataclass(frozen=True, slots=True)
class DeviceCommand:
    control_point: ControlPoint
    value: int

    def describe(self) -> str:
        return f"{self.control_point.display_name}={self.value}"


def parse_command(words: Sequence[str]) -> DeviceCommand:
    """Parse ``on``, ``off`` or ``fan N``.

    Raises :class:`UsageError` with the message to show the user.
    """

    if not words:
        raise UsageError(USAGE)

    name = words[0]
    if name == "on":
        return DeviceCommand(ControlPoint.POWER_ON_OFF, 1)
    if name == "off":
        return DeviceCommand(ControlPoint.POWER_ON_OFF, 0)
    if name == "fan":
        if len(words) < 2:
            raise UsageError("error: set fan level")
        try:
            level = int(words[1])
        except ValueError:
            level = 0
        if level < FAN_LEVEL_MIN or level > FAN_LEVEL_MAX:
            raise UsageError(
                f"error fan level must be in range {FAN_LEVEL_MIN}...{FAN_LEVEL_MAX}"
            )
        return DeviceCommand(ControlPoint.FAN_LEVEL, level)

    raise UsageError(USAGE)
