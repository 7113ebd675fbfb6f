"""Domain types and contracts for command dispatch."""

from .commands import Command
from .contracts import TargetDirectory, TargetResolver
from .errors import (
    ArgumentMismatchError,
    CapabilityRegistryError,
    DecodeError,
    ErrorKind,
    InvocationFailedError,
    MethodNotExposedError,
    SettingsBridgeError,
    TargetNotFoundError,
)
from .results import Failure, Result, ServiceReport, Success
from .values import JsonValue, ParameterKind, ReturnKind, coerce

__all__ = [
    "Command",
    "TargetResolver",
    "TargetDirectory",
    "ServiceReport",
    "Result",
    "Success",
    "Failure",
    "ErrorKind",
    "SettingsBridgeError",
    "DecodeError",
    "TargetNotFoundError",
    "MethodNotExposedError",
    "ArgumentMismatchError",
    "InvocationFailedError",
    "CapabilityRegistryError",
    "JsonValue",
    "ParameterKind",
    "ReturnKind",
    "coerce",
]
