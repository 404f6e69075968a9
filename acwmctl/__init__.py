"""Command-line controller for a networked air-conditioning unit."""

from .commands import DeviceCommand, parse_command
from .config import AcwmConfig, AirconConfig, load_config
from .errors import (
    AcwmError,
    AuthError,
    ChannelError,
    ConfigError,
    InitError,
    SchemaDecodeError,
    UsageError,
)
from .models import ControlPoint, DeviceSchema, LabelsValue, TextValue
from .orchestrator import CommandOrchestrator, CommandOutcome, CommandStage

__all__ = [
    "AcwmConfig",
    "AcwmError",
    "AirconConfig",
    "AuthError",
    "ChannelError",
    "CommandOrchestrator",
    "CommandOutcome",
    "CommandStage",
    "ConfigError",
    "ControlPoint",
    "DeviceCommand",
    "DeviceSchema",
    "InitError",
    "LabelsValue",
    "SchemaDecodeError",
    "TextValue",
    "UsageError",
    "load_config",
    "parse_command",
]
