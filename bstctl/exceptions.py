"""Exception hierarchy and device error codes."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Device error codes, numbered like the switch SDK return codes."""

    NONE = 0
    INTERNAL = -1
    MEMORY = -2
    UNIT = -3
    PARAM = -4
    EMPTY = -5
    FULL = -6
    NOT_FOUND = -7
    EXISTS = -8
    TIMEOUT = -9
    BUSY = -10
    FAIL = -11
    DISABLED = -12
    BADID = -13
    RESOURCE = -14
    CONFIG = -15
    UNAVAIL = -16
    INIT = -17
    PORT = -18

    @property
    def description(self) -> str:
        """Human-readable text for the code."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[ErrorCode, str] = {
    ErrorCode.NONE: "Ok",
    ErrorCode.INTERNAL: "Internal error",
    ErrorCode.MEMORY: "Out of memory",
    ErrorCode.UNIT: "Invalid unit",
    ErrorCode.PARAM: "Invalid parameter",
    ErrorCode.EMPTY: "Table empty",
    ErrorCode.FULL: "Table full",
    ErrorCode.NOT_FOUND: "Entry not found",
    ErrorCode.EXISTS: "Entry exists",
    ErrorCode.TIMEOUT: "Operation timed out",
    ErrorCode.BUSY: "Operation still running",
    ErrorCode.FAIL: "Operation failed",
    ErrorCode.DISABLED: "Operation disabled",
    ErrorCode.BADID: "Invalid identifier",
    ErrorCode.RESOURCE: "No resources for operation",
    ErrorCode.CONFIG: "Invalid configuration",
    ErrorCode.UNAVAIL: "Feature unavailable",
    ErrorCode.INIT: "Feature not initialized",
    ErrorCode.PORT: "Invalid port",
}


class BSTError(Exception):
    """Base exception for all BST console errors."""


class DeviceError(BSTError):
    """A gateway operation failed on the device."""

    def __init__(self, message: str = "", code: ErrorCode = ErrorCode.INTERNAL):
        self.code = ErrorCode(code)
        self.message = message or self.code.description
        super().__init__(self.message)


class PortResolutionError(DeviceError):
    """Logical port number could not be mapped to a device port."""

    def __init__(self, port: int, message: str = "", code: ErrorCode = ErrorCode.PORT):
        self.port = port
        super().__init__(message or f"port {port} not found", code)


class AuthenticationError(DeviceError):
    """SSH authentication failed."""


class SSHError(DeviceError):
    """SSH connection or command execution failed."""


class StartupError(BSTError):
    """A fatal startup step failed; the session is not started."""

    def __init__(self, step: str, cause: DeviceError):
        self.step = step
        self.cause = cause
        super().__init__(f"{step}: {cause.message}")


class ConfigError(BSTError):
    """Environment configuration is invalid."""
