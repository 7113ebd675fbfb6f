"""
Setting targets

A :class:`SettingItem` wraps one system setting and exposes the methods a
command may call on it. Where the setting's data actually lives is up to the
:class:`SettingBackend` behind it.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

from settingsbridge.core.registry import capability_table, exposed, parameter
from settingsbridge.domain.values import ParameterKind, ReturnKind

DEFAULT_VALUE_NAME = "Value"


class SettingType(StrEnum):
    """Declared kind of a setting"""

    CUSTOM = "Custom"
    DISPLAY_STRING = "DisplayString"
    LABELED_STRING = "LabeledString"
    BOOLEAN = "Boolean"
    RANGE = "Range"
    STRING = "String"
    LIST = "List"
    ACTION = "Action"
    SETTING_COLLECTION = "SettingCollection"

    @classmethod
    def parse(cls, name: str | None) -> SettingType | None:
        """Case-insensitive lookup by name; None when unknown."""
        if not name:
            return None
        wanted = name.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None

    @property
    def is_composite(self) -> bool:
        """Custom and collection settings are hidden from the default listing."""
        return self in (SettingType.CUSTOM, SettingType.SETTING_COLLECTION)


class SettingFailedError(Exception):
    """Raised when a setting cannot be loaded or refuses an operation."""

    def __init__(self, message: str, error_code: int | None = None):
        self.error_code = error_code
        if error_code:
            message = f"{message} (error code {error_code})"
        super().__init__(message)


@runtime_checkable
class SettingBackend(Protocol):
    """The underlying setting object a SettingItem drives."""

    @property
    def type(self) -> SettingType: ...

    @property
    def is_enabled(self) -> bool: ...

    @property
    def is_applicable(self) -> bool: ...

    def get_value(self, value_name: str) -> Any: ...

    def set_value(self, value_name: str, value: Any) -> None: ...

    def get_possible_values(self) -> Iterable[Any]: ...

    def invoke(self) -> None: ...


class SettingItem:
    """Handles one setting; the exposed methods below are callable by commands."""

    CAPABILITIES = capability_table(
        exposed(
            "GetValue",
            parameter("valueName", ParameterKind.STRING, default=DEFAULT_VALUE_NAME),
            attribute="get_value",
            returns=ReturnKind.VALUE,
        ),
        exposed(
            "SetValue",
            parameter("valueName", ParameterKind.STRING, default=DEFAULT_VALUE_NAME),
            parameter("newValue", ParameterKind.ANY),
            attribute="set_value",
        ),
        exposed(
            "GetPossibleValues",
            attribute="get_possible_values",
            returns=ReturnKind.SEQUENCE,
        ),
        exposed("Invoke", attribute="invoke"),
        exposed("IsEnabled", attribute="is_enabled", returns=ReturnKind.BOOLEAN),
        exposed("IsApplicable", attribute="is_applicable", returns=ReturnKind.BOOLEAN),
    )

    def __init__(self, setting_id: str, backend: SettingBackend):
        self.setting_id = setting_id
        self.backend = backend

    @property
    def setting_type(self) -> SettingType:
        return self.backend.type

    def get_value(self, value_name: str = DEFAULT_VALUE_NAME) -> Any:
        return self.backend.get_value(value_name)

    def set_value(self, value_name: str, new_value: Any) -> None:
        self.backend.set_value(value_name, new_value)

    def get_possible_values(self) -> list[Any]:
        return list(self.backend.get_possible_values())

    def invoke(self) -> None:
        """Invoke an Action setting."""
        self.backend.invoke()

    def is_enabled(self) -> bool:
        return self.backend.is_enabled

    def is_applicable(self) -> bool:
        return self.backend.is_applicable

    def __repr__(self) -> str:
        return f"SettingItem({self.setting_id!r}, type={self.setting_type})"
