"""Sequencing of one command against the device."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import aiohttp

from .channel import CommandChannel
from .commands import DeviceCommand
from .config import AcwmConfig
from .constants import COMMAND_SET_DATAPOINT
from .datapoint import set_datapoint
from .errors import AuthError, InitError
from .schema import verify_control_surface
from .session import SessionManager

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CommandStage(str, Enum):
    INIT = "init"
    AUTHENTICATING = "authenticating"
    MUTATING = "mutating"
    LOGGING_OUT = "logging_out"
    DONE = "done"


@dataclass(slots=True)
class CommandOutcome:
    exit_code: int
    stage: CommandStage
    mutation_succeeded: Optional[bool] = None


class CommandOrchestrator:
    """Runs verify, login, write and logout strictly in that order.

    Each stage awaits its network call before the next one starts. A failed
    init or login ends the run with :data:`EXIT_FAILURE`; once a session
    exists, logout always runs and the run ends with :data:`EXIT_OK`
    whether or not the write was confirmed.
    """

    def __init__(
        self,
        config: AcwmConfig,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        output: Callable[[str], None] = print,
    ) -> None:
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._output = output
        self._stage = CommandStage.INIT

    def _transition(self, stage: CommandStage) -> None:
        LOGGER.debug("Command stage %s -> %s", self._stage.value, stage.value)
        self._stage = stage

    def _create_session(self) -> aiohttp.ClientSession:
        timeout_seconds = self._config.http.timeout_seconds
        if timeout_seconds is None:
            return aiohttp.ClientSession()
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=timeout_seconds)
        )

    async def run(self, command: DeviceCommand) -> CommandOutcome:
        if self._session is None:
            self._session = self._create_session()
        try:
            assert self._session is not None  # narrow type for linters
            return await self._run(self._session, command)
        finally:
            if self._owns_session:
                await self._session.close()
                self._session = None

    async def _authenticate(self, sessions: SessionManager) -> str:
        aircon = self._config.aircon
        session_id = await sessions.login(aircon.username, aircon.password)
        if session_id is None:
            raise AuthError("unable to auth, bad sessionId")
        return session_id

    async def _run(
        self, session: aiohttp.ClientSession, command: DeviceCommand
    ) -> CommandOutcome:
        aircon = self._config.aircon
        self._stage = CommandStage.INIT

        try:
            await verify_control_surface(session, aircon)
        except InitError as exc:
            LOGGER.debug("Init failed", exc_info=True)
            self._output(str(exc))
            self._output("there were errors during init process")
            return CommandOutcome(EXIT_FAILURE, self._stage)

        channel = CommandChannel(session, aircon)
        sessions = SessionManager(channel)

        self._transition(CommandStage.AUTHENTICATING)
        try:
            session_id = await self._authenticate(sessions)
        except AuthError as exc:
            self._output(str(exc))
            return CommandOutcome(EXIT_FAILURE, self._stage)

        self._transition(CommandStage.MUTATING)
        succeeded = await set_datapoint(
            channel, session_id, command.control_point, command.value
        )
        self._output(
            f"{COMMAND_SET_DATAPOINT} {command.describe()}: "
            f"{'success' if succeeded else 'fail'}"
        )

        self._transition(CommandStage.LOGGING_OUT)
        await sessions.logout(session_id)

        self._transition(CommandStage.DONE)
        return CommandOutcome(EXIT_OK, self._stage, succeeded)
