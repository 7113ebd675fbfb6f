"""
Untyped JSON values and their coercion to declared parameter kinds.

Values arriving from the JSON boundary are one of: string, number, boolean,
array, object or null. Each declared kind has one explicit, total coercion
function; nothing is converted implicitly (``"1"`` is not a number and ``1``
is not a boolean).
"""

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from .errors import ArgumentMismatchError

JsonValue = str | int | float | bool | None | list[Any] | dict[str, Any]


class ParameterKind(StrEnum):
    """Declared kind of an exposed method parameter."""

    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    ANY = "Any"


class ReturnKind(StrEnum):
    """Declared shape of an exposed method's return value."""

    NONE = "None"
    VALUE = "Value"
    SEQUENCE = "Sequence"
    BOOLEAN = "Boolean"


def _coerce_string(value: JsonValue) -> str:
    if not isinstance(value, str):
        raise TypeError
    return value


def _coerce_number(value: JsonValue) -> int | float:
    # bool is a subclass of int and must not pass as a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError
    return value


def _coerce_boolean(value: JsonValue) -> bool:
    if not isinstance(value, bool):
        raise TypeError
    return value


def _pass_through(value: JsonValue) -> JsonValue:
    return value


_COERCERS: dict[ParameterKind, Callable[[JsonValue], Any]] = {
    ParameterKind.STRING: _coerce_string,
    ParameterKind.NUMBER: _coerce_number,
    ParameterKind.BOOLEAN: _coerce_boolean,
    ParameterKind.ANY: _pass_through,
}


def json_type_name(value: JsonValue) -> str:
    """Name a value by its JSON type, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def coerce(value: JsonValue, kind: ParameterKind, parameter: str) -> Any:
    """
    Coerce an untyped value to a declared parameter kind.

    Args:
        value: Value decoded from JSON
        kind: Declared kind of the receiving parameter
        parameter: Parameter name, reported on mismatch

    Returns:
        The value, unchanged, when it already has the declared kind

    Raises:
        ArgumentMismatchError: If the value does not have the declared kind
    """
    try:
        return _COERCERS[kind](value)
    except TypeError:
        raise ArgumentMismatchError(
            f"Parameter '{parameter}' expects {kind}, got {json_type_name(value)}",
            parameter=parameter,
        ) from None
