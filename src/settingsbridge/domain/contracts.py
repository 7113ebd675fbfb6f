"""Contracts for the collaborators that supply targets to the dispatcher."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TargetResolver(Protocol):
    """Resolve an opaque identifier to a target object, or raise."""

    def resolve(self, target_id: str) -> Any: ...


@runtime_checkable
class TargetDirectory(Protocol):
    """Enumerate target identifiers and their declared kind."""

    def list_targets(self, include_all: bool = False) -> list[tuple[str, str]]: ...
