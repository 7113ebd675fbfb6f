"""
Capability Registry

Single source of truth for what can be called on a target type.
Target types declare their exposed methods in an explicit ``CAPABILITIES``
table built with :func:`exposed` and :func:`capability_table`; the registry
validates that table once and then serves both dispatch and self-description.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from settingsbridge.domain.errors import CapabilityRegistryError
from settingsbridge.domain.values import ParameterKind, ReturnKind

logger = logging.getLogger(__name__)


class _Required:
    """Marker for parameters without a default."""

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Any = _Required()


@dataclass(slots=True, frozen=True)
class ParameterDescriptor:
    """One declared parameter of an exposed method"""

    name: str
    kind: ParameterKind
    default: Any = REQUIRED

    @property
    def has_default(self) -> bool:
        return self.default is not REQUIRED

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "kind": str(self.kind)}
        if self.has_default:
            payload["default"] = self.default
        return payload


@dataclass(slots=True, frozen=True)
class CapabilityDescriptor:
    """An externally callable method: name, parameters, return kind"""

    name: str
    attribute: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    return_kind: ReturnKind = ReturnKind.NONE

    def invoke(self, target: Any, arguments: Sequence[Any]) -> Any:
        """Call the bound method on a target with already coerced arguments."""
        return getattr(target, self.attribute)(*arguments)

    def signature(self) -> str:
        """Render as ``Name(param: Kind, ...): ReturnKind``."""
        params = ", ".join(f"{p.name}: {p.kind}" for p in self.parameters)
        return f"{self.name}({params}): {self.return_kind}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "parameters": [p.to_dict() for p in self.parameters],
            "returnKind": str(self.return_kind),
        }


def parameter(name: str, kind: ParameterKind, default: Any = REQUIRED) -> ParameterDescriptor:
    """Declare a parameter of an exposed method."""
    return ParameterDescriptor(name=name, kind=kind, default=default)


def exposed(
    name: str,
    *parameters: ParameterDescriptor,
    attribute: str | None = None,
    returns: ReturnKind = ReturnKind.NONE,
) -> CapabilityDescriptor:
    """
    Declare one exposed method for a target type's capability table.

    Args:
        name: External method name used by commands (case-sensitive)
        parameters: Ordered parameter declarations
        attribute: Name of the Python method on the target (default: ``name``)
        returns: Declared return kind

    Returns:
        CapabilityDescriptor for the table
    """
    return CapabilityDescriptor(
        name=name,
        attribute=attribute or name,
        parameters=tuple(parameters),
        return_kind=returns,
    )


def capability_table(*descriptors: CapabilityDescriptor) -> tuple[CapabilityDescriptor, ...]:
    """Collect declarations, collapsing repeated identical tags into one."""
    table: list[CapabilityDescriptor] = []
    for descriptor in descriptors:
        if descriptor not in table:
            table.append(descriptor)
    return tuple(table)


@dataclass(slots=True)
class CapabilityRegistry:
    """Validated capabilities of one target type, in declaration order"""

    target_type: type
    _descriptors: dict[str, CapabilityDescriptor] = field(default_factory=dict, repr=False)

    @classmethod
    def build(cls, target_type: type) -> "CapabilityRegistry":
        """
        Build a registry from a type's ``CAPABILITIES`` table

        Args:
            target_type: Class declaring a ``CAPABILITIES`` table

        Returns:
            CapabilityRegistry for the type

        Raises:
            CapabilityRegistryError: If the table is missing, names an attribute
                that is not callable, or declares one name twice with
                different signatures
        """
        table = getattr(target_type, "CAPABILITIES", None)
        if table is None:
            raise CapabilityRegistryError(
                f"{target_type.__name__} does not declare a CAPABILITIES table"
            )
        return cls.from_descriptors(target_type, table)

    @classmethod
    def from_descriptors(
        cls, target_type: type, descriptors: Iterable[CapabilityDescriptor]
    ) -> "CapabilityRegistry":
        """Build a registry from an explicit list of descriptors."""
        registry = cls(target_type=target_type)
        for descriptor in descriptors:
            registry._add(descriptor)
        logger.debug(
            "Built capability registry for %s: %s",
            target_type.__name__,
            ", ".join(registry.names()),
        )
        return registry

    def _add(self, descriptor: CapabilityDescriptor) -> None:
        member = getattr(self.target_type, descriptor.attribute, None)
        if member is None or not callable(member):
            raise CapabilityRegistryError(
                f"{self.target_type.__name__}.{descriptor.attribute} is not a callable method "
                f"(exposed as '{descriptor.name}')"
            )

        existing = self._descriptors.get(descriptor.name)
        if existing is not None:
            if existing == descriptor:
                return
            raise CapabilityRegistryError(
                f"Ambiguous capability '{descriptor.name}' on {self.target_type.__name__}: "
                f"{existing.signature()} vs {descriptor.signature()}"
            )

        seen: set[str] = set()
        for param in descriptor.parameters:
            if param.name in seen:
                raise CapabilityRegistryError(
                    f"Capability '{descriptor.name}' declares parameter '{param.name}' twice"
                )
            seen.add(param.name)

        self._descriptors[descriptor.name] = descriptor

    def describe(self) -> Iterator[CapabilityDescriptor]:
        """Yield descriptors in declaration order; each call starts over."""
        yield from self._descriptors.values()

    def resolve(self, method_name: str) -> CapabilityDescriptor | None:
        """Look up a descriptor by exact, case-sensitive name."""
        return self._descriptors.get(method_name)

    def names(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, method_name: object) -> bool:
        return method_name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[CapabilityDescriptor]:
        return self.describe()
