"""Unified error taxonomy for command dispatch."""

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine-readable error kind reported in failure records."""

    DECODE_ERROR = "DecodeError"
    TARGET_NOT_FOUND = "TargetNotFound"
    METHOD_NOT_EXPOSED = "MethodNotExposed"
    ARGUMENT_MISMATCH = "ArgumentMismatch"
    INVOCATION_FAILED = "InvocationFailed"


@dataclass(slots=True)
class SettingsBridgeError(Exception):
    """Base class for dispatch-level failures."""

    message: str
    code: str

    def __str__(self) -> str:
        return self.message


class DecodeError(SettingsBridgeError):
    """Raised when the input stream is not a JSON array of objects."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code=ErrorKind.DECODE_ERROR)


class TargetNotFoundError(SettingsBridgeError):
    """Raised when a target identifier cannot be resolved."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code=ErrorKind.TARGET_NOT_FOUND)


class MethodNotExposedError(SettingsBridgeError):
    """Raised when a method name has no capability descriptor."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code=ErrorKind.METHOD_NOT_EXPOSED)


class ArgumentMismatchError(SettingsBridgeError):
    """Raised when an argument cannot be coerced to its declared kind."""

    def __init__(self, message: str, parameter: str | None = None) -> None:
        super().__init__(message=message, code=ErrorKind.ARGUMENT_MISMATCH)
        self.parameter = parameter


class InvocationFailedError(SettingsBridgeError):
    """Raised when an exposed method fails while running."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code=ErrorKind.INVOCATION_FAILED)


class CapabilityRegistryError(SettingsBridgeError):
    """Raised when a capability table cannot be turned into a registry."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="capability_registry")
