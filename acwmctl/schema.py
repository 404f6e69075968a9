"""Verification of the device's advertised control surface."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Iterable

import aiohttp

from .config import AirconConfig
from .errors import (
    EmptyControlPointError,
    InitDecodeError,
    InitTransportError,
    MissingControlPointError,
    SchemaDecodeError,
    UnexpectedLabelError,
)
from .models import ControlPoint, DeviceSchema, LabelsValue, TextValue

LOGGER = logging.getLogger(__name__)

REQUIRED_CONTROL_POINTS = (ControlPoint.POWER_ON_OFF, ControlPoint.FAN_LEVEL)


async def fetch_schema(session: aiohttp.ClientSession, aircon: AirconConfig) -> DeviceSchema:
    """GET ``data.json`` and decode it."""

    url = aircon.data_json_url
    LOGGER.debug("Fetching device schema from %s", url)

    try:
        async with session.get(url) as response:
            if response.status < 200 or response.status >= 300:
                raise InitTransportError(
                    f"error executing request to {url}: HTTP {response.status}"
                )
            raw = await response.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise InitTransportError(f"error executing request to {url}: {exc}") from exc

    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise InitDecodeError(f"{url} is not valid JSON: {exc}") from exc

    try:
        return DeviceSchema.from_payload(payload)
    except SchemaDecodeError as exc:
        raise InitDecodeError(f"unexpected schema document: {exc}") from exc


def check_control_points(
    schema: DeviceSchema,
    control_points: Iterable[ControlPoint] = REQUIRED_CONTROL_POINTS,
) -> None:
    """Raise the first :class:`InitError` found, in ``control_points`` order."""

    for control_point in control_points:
        entries = schema.uid.get(control_point.key)
        if entries is None:
            raise MissingControlPointError(int(control_point))
        if not entries:
            raise EmptyControlPointError(int(control_point))

        first = entries[0]
        if isinstance(first, TextValue):
            if first.text != control_point.expected_label:
                raise UnexpectedLabelError(
                    int(control_point), control_point.expected_label, first.text
                )
        elif isinstance(first, LabelsValue):
            LOGGER.debug(
                "uid %s advertises localized labels; skipping label check",
                control_point.key,
            )
        else:
            raise TypeError(f"unhandled uid value {first!r}")


async def verify_control_surface(
    session: aiohttp.ClientSession, aircon: AirconConfig
) -> DeviceSchema:
    schema = await fetch_schema(session, aircon)
    check_control_points(schema)
    LOGGER.debug("Device exposes %d signals; control surface verified", len(schema.uid))
    return schema
