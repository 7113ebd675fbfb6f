"""
Dispatcher

Resolves each command to a target and an exposed method, coerces its
arguments, invokes it and classifies the outcome. Every command produces
exactly one Result; failures never escape :meth:`Dispatcher.dispatch`.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from settingsbridge.domain.commands import Command
from settingsbridge.domain.contracts import TargetResolver
from settingsbridge.domain.errors import (
    ArgumentMismatchError,
    InvocationFailedError,
    MethodNotExposedError,
    SettingsBridgeError,
    TargetNotFoundError,
)
from settingsbridge.domain.results import Failure, Result, Success
from settingsbridge.domain.values import ReturnKind, coerce, json_type_name

from .registry import CapabilityDescriptor, CapabilityRegistry, ParameterDescriptor

logger = logging.getLogger(__name__)

_ERROR_CODE_ATTRIBUTES = ("error_code", "winerror", "errno")


def describe_exception(error: BaseException) -> str:
    """Render an exception message, with its low-level error code if it has one."""
    message = str(error) or type(error).__name__
    for attribute in _ERROR_CODE_ATTRIBUTES:
        code = getattr(error, attribute, None)
        if code:
            suffix = f"(error code {code})"
            if not message.endswith(suffix):
                message = f"{message} {suffix}"
            break
    return message


def bind_arguments(descriptor: CapabilityDescriptor, arguments: Any) -> list[Any]:
    """
    Bind untyped command arguments to a descriptor's parameters

    Mappings bind by parameter name, sequences by position. With fewer
    positional values than parameters, defaulted parameters are skipped from
    the front until the counts match, so ``SetValue([true])`` binds
    ``newValue`` and leaves ``valueName`` at its default.

    Args:
        descriptor: Resolved capability
        arguments: ``arguments`` field of the command (object, array or null)

    Returns:
        Coerced argument values in declared parameter order

    Raises:
        ArgumentMismatchError: On unknown, missing, surplus or wrongly typed arguments
    """
    params = descriptor.parameters
    if arguments is None:
        arguments = {}

    if isinstance(arguments, Mapping):
        return _bind_by_name(descriptor, params, arguments)
    if isinstance(arguments, Sequence) and not isinstance(arguments, str):
        return _bind_by_position(descriptor, params, arguments)

    raise ArgumentMismatchError(
        f"Arguments for '{descriptor.name}' must be an object or an array, "
        f"got {json_type_name(arguments)}"
    )


def _bind_by_name(
    descriptor: CapabilityDescriptor,
    params: Sequence[ParameterDescriptor],
    arguments: Mapping[str, Any],
) -> list[Any]:
    known = {param.name for param in params}
    unknown = [name for name in arguments if name not in known]
    if unknown:
        raise ArgumentMismatchError(
            f"'{descriptor.name}' has no parameter named {', '.join(repr(n) for n in unknown)}",
            parameter=unknown[0],
        )

    values: list[Any] = []
    for param in params:
        if param.name in arguments:
            values.append(coerce(arguments[param.name], param.kind, param.name))
        elif param.has_default:
            values.append(param.default)
        else:
            raise ArgumentMismatchError(
                f"Missing required parameter '{param.name}' ({param.kind})",
                parameter=param.name,
            )
    return values


def _bind_by_position(
    descriptor: CapabilityDescriptor,
    params: Sequence[ParameterDescriptor],
    arguments: Sequence[Any],
) -> list[Any]:
    if len(arguments) > len(params):
        raise ArgumentMismatchError(
            f"'{descriptor.name}' takes at most {len(params)} argument(s), got {len(arguments)}"
        )

    surplus = len(params) - len(arguments)
    remaining = iter(arguments)
    values: list[Any] = []
    for param in params:
        if surplus and param.has_default:
            values.append(param.default)
            surplus -= 1
            continue
        try:
            raw = next(remaining)
        except StopIteration:
            raise ArgumentMismatchError(
                f"Missing required parameter '{param.name}' ({param.kind})",
                parameter=param.name,
            ) from None
        values.append(coerce(raw, param.kind, param.name))
    return values


def normalize_return(value: Any, kind: ReturnKind) -> Any:
    """
    Shape a raw return value according to its declared kind

    No implicit conversions: a Boolean return must be a bool (or the ints 0
    and 1), and a Sequence return must be a non-text, non-mapping iterable.

    Raises:
        TypeError: If the value does not have the declared shape
    """
    if kind is ReturnKind.NONE:
        return None
    if kind is ReturnKind.SEQUENCE:
        if value is None:
            return []
        if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
            raise TypeError(f"expected {kind}, got {type(value).__name__}")
        return list(value)
    if kind is ReturnKind.BOOLEAN:
        if isinstance(value, bool):
            return value
        if type(value) is int and value in (0, 1):
            return bool(value)
        raise TypeError(f"expected {kind}, got {type(value).__name__}")
    return value


class Dispatcher:
    """Runs commands against resolved targets, one at a time, in order"""

    def __init__(self, resolver: TargetResolver, registries: Iterable[CapabilityRegistry]):
        self.resolver = resolver
        self.registries: dict[type, CapabilityRegistry] = {
            registry.target_type: registry for registry in registries
        }

    def registry_for(self, target: Any) -> CapabilityRegistry | None:
        """Find the registry for a target's type, walking its MRO."""
        for klass in type(target).__mro__:
            registry = self.registries.get(klass)
            if registry is not None:
                return registry
        return None

    def run(self, commands: Iterable[Command]) -> Iterator[Result]:
        """Dispatch commands lazily, yielding one Result per command in input order."""
        for command in commands:
            yield self.dispatch(command)

    def dispatch(self, command: Command) -> Result:
        """Dispatch one command; never raises."""
        logger.debug("Dispatching %s", command.describe())
        try:
            value = self._dispatch(command)
        except SettingsBridgeError as e:
            logger.info("Command %s failed: %s: %s", command.describe(), e.code, e.message)
            return Failure.from_error(command.index, e)
        return Success(index=command.index, value=value)

    def _dispatch(self, command: Command) -> Any:
        target = self._resolve_target(command.target_id)
        descriptor = self._resolve_method(target, command.method_name)
        arguments = bind_arguments(descriptor, command.arguments)

        try:
            value = descriptor.invoke(target, arguments)
        except Exception as e:
            raise InvocationFailedError(describe_exception(e)) from e

        # Lazy sequences run target code here, so any failure counts as the invocation's
        try:
            return normalize_return(value, descriptor.return_kind)
        except Exception as e:
            raise InvocationFailedError(
                f"'{descriptor.name}' return value: {describe_exception(e)}"
            ) from e

    def _resolve_target(self, target_id: Any) -> Any:
        if not isinstance(target_id, str):
            raise TargetNotFoundError(
                "Command has no target identifier"
                if target_id is None
                else f"Target identifier must be a string, got {json_type_name(target_id)}"
            )
        try:
            target = self.resolver.resolve(target_id)
        except Exception as e:
            raise TargetNotFoundError(f"{target_id}: {describe_exception(e)}") from e
        if target is None:
            raise TargetNotFoundError(f"{target_id}: No such target")
        return target

    def _resolve_method(self, target: Any, method_name: Any) -> CapabilityDescriptor:
        if not isinstance(method_name, str):
            raise MethodNotExposedError(
                "Command has no method name"
                if method_name is None
                else f"Method name must be a string, got {json_type_name(method_name)}"
            )
        registry = self.registry_for(target)
        descriptor = registry.resolve(method_name) if registry is not None else None
        if descriptor is None:
            raise MethodNotExposedError(
                f"'{method_name}' is not an exposed method of {type(target).__name__}"
            )
        return descriptor
