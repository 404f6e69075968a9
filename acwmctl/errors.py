"""Exception hierarchy for acwmctl."""

from __future__ import annotations


class AcwmError(RuntimeError):
    """Base class for all acwmctl failures."""


class ConfigError(AcwmError):
    """Raised when the configuration file is missing or invalid."""


class UsageError(AcwmError):
    """Raised when command-line arguments do not name a known command."""


class SchemaDecodeError(AcwmError):
    """Raised when the device schema document has an unexpected shape."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"{path}: {detail}")
        self.path = path
        self.detail = detail


class InitError(AcwmError):
    """Raised when the device does not expose the expected control surface."""


class InitTransportError(InitError):
    """The schema document could not be fetched."""


class InitDecodeError(InitError):
    """The schema document could not be decoded."""


class MissingControlPointError(InitError):
    def __init__(self, uid: int) -> None:
        super().__init__(f"unable to find {uid} in signals.uid")
        self.uid = uid


class EmptyControlPointError(InitError):
    def __init__(self, uid: int) -> None:
        super().__init__(f"bad value for {uid} in signals.uid []")
        self.uid = uid


class UnexpectedLabelError(InitError):
    def __init__(self, uid: int, expected: str, found: str) -> None:
        super().__init__(f"init fail, key {uid} expected {expected} found {found}")
        self.uid = uid
        self.expected = expected
        self.found = found


class AuthError(AcwmError):
    """Raised when login does not yield a session token."""


class ChannelError(AcwmError):
    """Raised when a control request does not deliver a usable response."""


class ChannelTransportError(ChannelError):
    """The request failed at the network level."""


class EmptyResponseError(ChannelError):
    """The device answered with an empty body."""


class MalformedResponseError(ChannelError):
    """The device answered with something other than a JSON object."""
