"""Configuration loader for acwmctl."""

from __future__ import annotations

import ipaddress
import json
from configparser import ConfigParser, Error as ConfigParserError
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import constants
from .errors import ConfigError

LEGACY_KEYS = {
    "airconIPAddress": "address",
    "username": "username",
    "password": "password",
}


@dataclass(frozen=True, slots=True)
class AirconConfig:
    address: str
    username: str
    password: str
    port: int = constants.DEFAULT_HTTP_PORT

    def __post_init__(self) -> None:
        if not is_ip_address(self.address):
            raise ConfigError("airconIPAddress is not a valid IP")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port out of range: {self.port}")

    @property
    def base_url(self) -> str:
        host = self.address
        if ipaddress.ip_address(host).version == 6:
            host = f"[{host}]"
        if self.port != constants.DEFAULT_HTTP_PORT:
            host = f"{host}:{self.port}"
        return f"http://{host}"

    @property
    def data_json_url(self) -> str:
        return self.base_url + constants.DATA_JSON_PATH

    @property
    def command_url(self) -> str:
        return self.base_url + constants.COMMAND_PATH


@dataclass(slots=True)
class HttpConfig:
    timeout_seconds: Optional[float] = None


@dataclass(slots=True)
class LoggingConfig:
    level: str = "WARNING"
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class AcwmConfig:
    aircon: AirconConfig
    http: HttpConfig
    logging: LoggingConfig
    raw: ConfigParser
    path: Path


def is_ip_address(value: str) -> bool:
    """Return True when ``value`` is an IPv4 or IPv6 literal."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def _read_legacy_json(text: str) -> Optional[dict[str, str]]:
    try:
        payload = json.loads(text)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None

    section: dict[str, str] = {}
    for legacy_key, key in LEGACY_KEYS.items():
        value = payload.get(legacy_key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"{legacy_key} must be a string")
        section[key] = value
    return section


def load_config(path: Optional[Path] = None) -> AcwmConfig:
    """Load configuration from disk and validate the device address."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = ConfigParser(interpolation=None)
    parser.read_dict(
        {
            "aircon": {"port": str(constants.DEFAULT_HTTP_PORT)},
            "http": {},
            "logging": {
                "level": "WARNING",
                "log_network": "false",
            },
        }
    )

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read {config_path}: {exc}") from exc

    legacy = _read_legacy_json(text)
    try:
        if legacy is not None:
            parser.read_dict({"aircon": legacy})
        else:
            parser.read_string(text, source=str(config_path))
    except ConfigParserError as exc:
        raise ConfigError(f"cannot parse {config_path}: {exc}") from exc

    missing = [
        key for key in ("address", "username", "password")
        if not parser.has_option("aircon", key)
    ]
    if missing:
        raise ConfigError(f"missing [aircon] option(s): {', '.join(missing)}")

    try:
        port = parser.getint("aircon", "port")
    except ValueError as exc:
        raise ConfigError(f"port must be an integer: {exc}") from exc

    aircon = AirconConfig(
        address=parser.get("aircon", "address").strip(),
        username=parser.get("aircon", "username"),
        password=parser.get("aircon", "password"),
        port=port,
    )

    try:
        timeout_seconds = parser.getfloat("http", "timeout_seconds", fallback=None)
    except ValueError as exc:
        raise ConfigError(f"timeout_seconds must be a number: {exc}") from exc

    try:
        log_network = parser.getboolean("logging", "log_network", fallback=False)
    except ValueError as exc:
        raise ConfigError(f"log_network must be a boolean: {exc}") from exc

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="WARNING"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_network=log_network,
    )

    return AcwmConfig(
        aircon=aircon,
        http=HttpConfig(timeout_seconds=timeout_seconds),
        logging=logging_config,
        raw=parser,
        path=config_path,
    )
