"""Decoded command records."""

from dataclasses import dataclass
from typing import Any

from .values import JsonValue


@dataclass(slots=True, frozen=True)
class Command:
    """
    One unit of work: target + method + arguments.

    Fields keep whatever the input record held. A record with a missing or
    mistyped field still becomes a Command; the dispatcher reports it as a
    failure so the rest of the batch keeps running.
    """

    index: int
    target_id: Any = None
    method_name: Any = None
    arguments: JsonValue = None

    @classmethod
    def from_record(cls, index: int, record: dict[str, Any]) -> "Command":
        """Build a command from one decoded JSON object."""
        return cls(
            index=index,
            target_id=record.get("target"),
            method_name=record.get("method"),
            arguments=record.get("arguments"),
        )

    def describe(self) -> str:
        """Short human-readable label used in log lines."""
        return f"#{self.index} {self.target_id!s}.{self.method_name!s}"
