"""Constants used across the acwmctl package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "acwmctl"
DEFAULT_CONFIG_PATH = Path.home() / ".acwm"

DEFAULT_HTTP_PORT = 80

DATA_JSON_PATH = "/js/data/data.json"
COMMAND_PATH = "/api.cgi"

COMMAND_LOGIN = "login"
COMMAND_LOGOUT = "logout"
COMMAND_SET_DATAPOINT = "setdatapointvalue"

FAN_LEVEL_MIN = 1
FAN_LEVEL_MAX = 4
