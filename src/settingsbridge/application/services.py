"""Application service layer over the dispatch engine.

This module provides the orchestration surface for CLI and SDK callers:
wiring a resolver and registries into a dispatcher, and shaping listing and
self-description output.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import IO, Any

from settingsbridge.core.decoder import decode_commands
from settingsbridge.core.dispatcher import Dispatcher
from settingsbridge.core.encoder import ResultEncoder, SeparatorStyle
from settingsbridge.core.registry import CapabilityRegistry
from settingsbridge.domain.contracts import TargetDirectory, TargetResolver
from settingsbridge.domain.results import ServiceReport


@dataclass(slots=True)
class ApplyService:
    """Run a batch of JSON commands and stream one record per command."""

    resolver: TargetResolver
    registries: list[CapabilityRegistry] = field(default_factory=list)

    def run(
        self,
        *,
        source: IO[Any] | str | bytes,
        sink: IO[str],
        style: SeparatorStyle = SeparatorStyle.LINES,
    ) -> ServiceReport:
        """
        Decode, dispatch and encode a batch

        Raises:
            DecodeError: If the input is not a JSON array of objects; nothing
                has been written to ``sink`` in that case
        """
        commands = decode_commands(source)
        dispatcher = Dispatcher(self.resolver, self.registries)
        encoder = ResultEncoder(sink, style=style)

        failed = 0
        for result in dispatcher.run(commands):
            if not encoder.write(result).ok:
                failed += 1

        return ServiceReport(
            code="applied",
            message=f"Processed {encoder.written} command(s), {failed} failed",
            total=encoder.written,
            failed=failed,
        )


@dataclass(slots=True)
class DescribeService:
    """Describe every exposed method of the configured target types."""

    registries: list[CapabilityRegistry] = field(default_factory=list)

    def run(self) -> ServiceReport:
        targets = [
            {
                "target": registry.target_type.__name__,
                "methods": [descriptor.to_dict() for descriptor in registry.describe()],
            }
            for registry in self.registries
        ]
        return ServiceReport(
            code="described",
            message=f"{sum(len(r) for r in self.registries)} exposed method(s)",
            targets=targets,
        )

    def signatures(self) -> Iterable[str]:
        """Human-readable ``Name(param: Kind): ReturnKind`` lines."""
        for registry in self.registries:
            for descriptor in registry.describe():
                yield descriptor.signature()


@dataclass(slots=True)
class ListService:
    """List target identifiers and their declared kind."""

    directory: TargetDirectory

    def run(self, *, include_all: bool = False) -> ServiceReport:
        targets = [
            {"id": target_id, "type": kind}
            for target_id, kind in self.directory.list_targets(include_all=include_all)
        ]
        return ServiceReport(
            code="listed",
            message=f"{len(targets)} target(s)",
            targets=targets,
        )
