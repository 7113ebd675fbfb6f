"""Typed per-command results and service response payloads."""

from dataclasses import dataclass, field
from typing import Any

from .errors import ErrorKind, SettingsBridgeError


@dataclass(slots=True, frozen=True)
class Success:
    """A command that ran and produced a value (``None`` for void methods)."""

    index: int
    value: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Failure:
    """A command that could not be run or raised while running."""

    index: int
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, index: int, error: SettingsBridgeError) -> "Failure":
        """Build a failure from a classified dispatch error."""
        return cls(index=index, kind=ErrorKind(error.code), message=error.message)


Result = Success | Failure


@dataclass(slots=True)
class ServiceReport:
    """
    Outcome of one bridge operation (apply, methods or list)

    ``total`` and ``failed`` count the records an apply run wrote; ``targets``
    holds the describe or listing entries.
    """

    code: str
    message: str = ""
    total: int = 0
    failed: int = 0
    targets: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed == 0
