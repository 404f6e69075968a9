"""End-to-end tests for command sequencing against a fake unit."""

from configparser import ConfigParser

import aiohttp
import pytest

from acwmctl.commands import DeviceCommand
from acwmctl.config import AcwmConfig, AirconConfig, HttpConfig, LoggingConfig
from acwmctl.errors import AuthError
from acwmctl.models import ControlPoint
from acwmctl.orchestrator import CommandOrchestrator, CommandStage

POWER_ON = DeviceCommand(ControlPoint.POWER_ON_OFF, 1)
FAN_TWO = DeviceCommand(ControlPoint.FAN_LEVEL, 2)


@pytest.mark.asyncio
async def test_power_on_logs_in_writes_and_logs_out(fake_device, tmp_path):
    lines: list[str] = []
    orchestrator = CommandOrchestrator(
        fake_device.build_config(tmp_path), output=lines.append
    )

    outcome = await orchestrator.run(POWER_ON)

    assert outcome.exit_code == 0
    assert outcome.stage is CommandStage.DONE
    assert outcome.mutation_succeeded is True
    assert lines == ["setdatapointvalue PowerOnOff=1: success"]
    assert fake_device.schema_requests == 1
    assert fake_device.commands == ["login", "setdatapointvalue", "logout"]
    assert fake_device.call("setdatapointvalue")["data"] == {
        "sessionID": "abc123",
        "uid": 1,
        "value": 1,
    }
    assert fake_device.call("logout")["data"] == {"sessionID": "abc123"}


@pytest.mark.asyncio
async def test_missing_fan_level_stops_before_login(fake_device, make_schema, tmp_path):
    fake_device.schema = make_schema(omit=("4",))
    lines: list[str] = []
    orchestrator = CommandOrchestrator(
        fake_device.build_config(tmp_path), output=lines.append
    )

    outcome = await orchestrator.run(FAN_TWO)

    assert outcome.exit_code == 1
    assert outcome.stage is CommandStage.INIT
    assert outcome.mutation_succeeded is None
    assert fake_device.calls == []
    assert lines == [
        "unable to find 4 in signals.uid",
        "there were errors during init process",
    ]


@pytest.mark.asyncio
async def test_unconfirmed_write_still_logs_out_and_exits_zero(fake_device, tmp_path):
    fake_device.replies["setdatapointvalue"] = {"success": 0}
    lines: list[str] = []
    orchestrator = CommandOrchestrator(
        fake_device.build_config(tmp_path), output=lines.append
    )

    outcome = await orchestrator.run(FAN_TWO)

    assert outcome.exit_code == 0
    assert outcome.mutation_succeeded is False
    assert lines == ["setdatapointvalue FanLevel=2: fail"]
    assert fake_device.commands == ["login", "setdatapointvalue", "logout"]
    assert fake_device.call("logout")["data"] == {"sessionID": "abc123"}


@pytest.mark.asyncio
async def test_failed_login_skips_write_and_logout(fake_device, tmp_path):
    fake_device.replies["login"] = {"success": 0}
    lines: list[str] = []
    orchestrator = CommandOrchestrator(
        fake_device.build_config(tmp_path), output=lines.append
    )

    outcome = await orchestrator.run(POWER_ON)

    assert outcome.exit_code == 1
    assert outcome.stage is CommandStage.AUTHENTICATING
    assert fake_device.commands == ["login"]
    assert lines == ["unable to auth, bad sessionId"]


@pytest.mark.asyncio
async def test_failed_logout_does_not_change_exit_code(fake_device, tmp_path):
    fake_device.replies["logout"] = None
    orchestrator = CommandOrchestrator(
        fake_device.build_config(tmp_path), output=lambda line: None
    )

    outcome = await orchestrator.run(POWER_ON)

    assert outcome.exit_code == 0
    assert fake_device.commands[-1] == "logout"


@pytest.mark.asyncio
async def test_unreachable_unit_fails_init(fake_device, tmp_path, unused_tcp_port_factory):
    config = fake_device.build_config(tmp_path)
    config.aircon = AirconConfig(
        "127.0.0.1", "admin", "secret", port=unused_tcp_port_factory()
    )
    lines: list[str] = []

    outcome = await CommandOrchestrator(config, output=lines.append).run(POWER_ON)

    assert outcome.exit_code == 1
    assert lines[-1] == "there were errors during init process"
    assert lines[0].startswith("error executing request to http://127.0.0.1:")


@pytest.mark.asyncio
async def test_injected_session_is_left_open(fake_device, tmp_path):
    async with aiohttp.ClientSession() as session:
        orchestrator = CommandOrchestrator(
            fake_device.build_config(tmp_path), session=session, output=lambda line: None
        )
        await orchestrator.run(POWER_ON)

        assert not session.closed


class StubSessions:
    def __init__(self, session_id):
        self.session_id = session_id

    async def login(self, username, password):
        return self.session_id


@pytest.mark.asyncio
async def test_authenticate_raises_auth_error_without_token(tmp_path):
    config = AcwmConfig(
        aircon=AirconConfig("10.0.0.1", "admin", "secret"),
        http=HttpConfig(),
        logging=LoggingConfig(),
        raw=ConfigParser(),
        path=tmp_path / ".acwm",
    )
    orchestrator = CommandOrchestrator(config, output=lambda line: None)

    with pytest.raises(AuthError) as excinfo:
        await orchestrator._authenticate(StubSessions(None))

    assert str(excinfo.value) == "unable to auth, bad sessionId"
    assert await orchestrator._authenticate(StubSessions("abc123")) == "abc123"


@pytest.mark.asyncio
async def test_default_timeout_matches_aiohttp(fake_device, tmp_path):
    config = fake_device.build_config(tmp_path)
    config.http = HttpConfig(timeout_seconds=None)
    orchestrator = CommandOrchestrator(config, output=lambda line: None)

    async with orchestrator._create_session() as created, aiohttp.ClientSession() as default:
        assert created.timeout == default.timeout

    outcome = await orchestrator.run(POWER_ON)

    assert outcome.exit_code == 0
    assert fake_device.commands == ["login", "setdatapointvalue", "logout"]


@pytest.mark.asyncio
async def test_configured_timeout_is_applied(fake_device, tmp_path):
    orchestrator = CommandOrchestrator(
        fake_device.build_config(tmp_path), output=lambda line: None
    )

    async with orchestrator._create_session() as created:
        assert created.timeout.total == 5.0
