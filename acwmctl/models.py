"""Domain models for the device schema and control points."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Union

from .errors import SchemaDecodeError


class ControlPoint(IntEnum):
    """Controllable signals, valued by their numeric uid on the device."""

    POWER_ON_OFF = 1
    FAN_LEVEL = 4

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def expected_label(self) -> str:
        """Label the device schema must advertise for this uid."""
        return _EXPECTED_LABELS[self]

    @property
    def key(self) -> str:
        """The uid rendered as the schema document's mapping key."""
        return str(int(self))


_DISPLAY_NAMES = {
    ControlPoint.POWER_ON_OFF: "PowerOnOff",
    ControlPoint.FAN_LEVEL: "FanLevel",
}

_EXPECTED_LABELS = {
    ControlPoint.POWER_ON_OFF: "On/Off",
    ControlPoint.FAN_LEVEL: "Fan Speed",
}


@dataclass(frozen=True, slots=True)
class TextValue:
    text: str


@dataclass(frozen=True, slots=True)
class LabelsValue:
    labels: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))


UidValue = Union[TextValue, LabelsValue]


def decode_uid_value(value: Any, path: str = "$") -> UidValue:
    """Decode one entry of a ``signals.uid`` sequence.

    A JSON string becomes :class:`TextValue`; an object whose values are all
    strings becomes :class:`LabelsValue`. Anything else is rejected.
    """
    if isinstance(value, str):
        return TextValue(value)
    if isinstance(value, dict) and all(
        isinstance(item, str) for item in value.values()
    ):
        return LabelsValue(value)
    raise SchemaDecodeError(
        path, f"expected a string or a string map, got {type(value).__name__}"
    )


def _decode_string_map(value: Any, path: str) -> Dict[str, str]:
    if not isinstance(value, dict):
        raise SchemaDecodeError(path, f"expected an object, got {type(value).__name__}")
    for key, item in value.items():
        if not isinstance(item, str):
            raise SchemaDecodeError(
                f"{path}.{key}", f"expected a string, got {type(item).__name__}"
            )
    return dict(value)


@dataclass(slots=True)
class DeviceSchema:
    """Decoded ``data.json`` self-description of the device."""

    uid: Dict[str, List[UidValue]] = field(default_factory=dict)
    uid_textvalues: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "DeviceSchema":
        if not isinstance(payload, dict):
            raise SchemaDecodeError("$", "expected an object")
        signals = payload.get("signals")
        if not isinstance(signals, dict):
            raise SchemaDecodeError("$.signals", "missing or not an object")

        raw_uid = signals.get("uid")
        if not isinstance(raw_uid, dict):
            raise SchemaDecodeError("$.signals.uid", "missing or not an object")
        uid: Dict[str, List[UidValue]] = {}
        for key, entries in raw_uid.items():
            path = f"$.signals.uid.{key}"
            if not isinstance(entries, list):
                raise SchemaDecodeError(path, "expected an array")
            uid[key] = [
                decode_uid_value(entry, f"{path}[{index}]")
                for index, entry in enumerate(entries)
            ]

        raw_textvalues = signals.get("uidTextvalues")
        if not isinstance(raw_textvalues, dict):
            raise SchemaDecodeError("$.signals.uidTextvalues", "missing or not an object")
        uid_textvalues = {
            key: _decode_string_map(value, f"$.signals.uidTextvalues.{key}")
            for key, value in raw_textvalues.items()
        }

        return cls(uid=uid, uid_textvalues=uid_textvalues)
