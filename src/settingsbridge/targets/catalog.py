"""
Settings catalog

A JSON file describing the available settings. It stands in for the system
setting directory: it lists setting identifiers with their declared type and
backs each one with an in-memory :class:`CatalogSetting`. Changes made through
commands live for the lifetime of the catalog object only.

Example catalog file::

    {
      "settings": {
        "SystemSettings_Notifications_ShowAppNotifications": {
          "type": "Boolean",
          "values": {"Value": true}
        },
        "SystemSettings_Display_Resolution": {
          "type": "List",
          "values": {"Value": "1920x1080"},
          "possibleValues": ["1280x720", "1920x1080"]
        }
      }
    }
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .settings import SettingFailedError, SettingItem, SettingType

logger = logging.getLogger(__name__)


class SettingFailure(BaseModel):
    """Simulated native failure: every operation on the setting raises it"""

    message: str
    error_code: int | None = Field(None, alias="errorCode")

    model_config = ConfigDict(populate_by_name=True)


class SettingDefinition(BaseModel):
    """One setting entry in the catalog file"""

    type: str  # Setting type name, matched case-insensitively
    values: dict[str, Any] = Field(default_factory=dict)  # value name: value
    possible_values: list[Any] = Field(default_factory=list, alias="possibleValues")
    enabled: bool = True
    applicable: bool = True
    failure: SettingFailure | None = None

    model_config = ConfigDict(populate_by_name=True)


class SettingsCatalogFile(BaseModel):
    """Top-level catalog file"""

    version: int = 1
    settings: dict[str, SettingDefinition] = Field(default_factory=dict)


class CatalogSetting:
    """In-memory setting backend built from a catalog entry."""

    def __init__(self, setting_type: SettingType, definition: SettingDefinition):
        self._type = setting_type
        self.values: dict[str, Any] = copy.deepcopy(definition.values)
        self.possible_values: list[Any] = copy.deepcopy(definition.possible_values)
        self.enabled = definition.enabled
        self.applicable = definition.applicable
        self.failure = definition.failure
        self.invocations = 0

    def _check_failure(self) -> None:
        if self.failure is not None:
            raise SettingFailedError(self.failure.message, self.failure.error_code)

    @property
    def type(self) -> SettingType:
        return self._type

    @property
    def is_enabled(self) -> bool:
        self._check_failure()
        return self.enabled

    @property
    def is_applicable(self) -> bool:
        self._check_failure()
        return self.applicable

    def get_value(self, value_name: str) -> Any:
        self._check_failure()
        if value_name not in self.values:
            raise SettingFailedError(f"Setting has no value named '{value_name}'")
        return self.values[value_name]

    def set_value(self, value_name: str, value: Any) -> None:
        self._check_failure()
        if not self.enabled:
            raise SettingFailedError("Setting is disabled")
        self.values[value_name] = value

    def get_possible_values(self) -> list[Any]:
        self._check_failure()
        return list(self.possible_values)

    def invoke(self) -> None:
        self._check_failure()
        if self._type is not SettingType.ACTION:
            raise SettingFailedError(f"Setting of type {self._type} cannot be invoked")
        self.invocations += 1


class SettingsCatalog:
    """Setting directory backed by a catalog file."""

    def __init__(self, definitions: dict[str, SettingDefinition] | None = None):
        self.definitions: dict[str, SettingDefinition] = dict(definitions or {})
        self._backends: dict[str, CatalogSetting] = {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SettingsCatalog:
        """Build a catalog from already parsed catalog JSON."""
        catalog_file = SettingsCatalogFile.model_validate(data)
        return cls(catalog_file.settings)

    @classmethod
    def load(cls, path: Path) -> SettingsCatalog:
        """
        Read a catalog file

        Args:
            path: Path to the catalog JSON file

        Returns:
            SettingsCatalog

        Raises:
            FileNotFoundError: If the file does not exist
            pydantic.ValidationError: If the file does not match the catalog schema
        """
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        catalog = cls.from_dict(data)
        logger.debug("Loaded %d setting(s) from %s", len(catalog.definitions), path)
        return catalog

    def setting_type(self, setting_id: str) -> SettingType | None:
        definition = self.definitions.get(setting_id)
        return SettingType.parse(definition.type) if definition else None

    def backend(self, setting_id: str) -> CatalogSetting | None:
        """Return the shared in-memory backend for a setting, creating it on first use."""
        backend = self._backends.get(setting_id)
        if backend is not None:
            return backend

        definition = self.definitions.get(setting_id)
        if definition is None:
            return None
        setting_type = SettingType.parse(definition.type)
        if setting_type is None:
            raise SettingFailedError(
                f"Unable to instantiate setting class (unknown type '{definition.type}')"
            )
        backend = CatalogSetting(setting_type, definition)
        self._backends[setting_id] = backend
        return backend

    def list_settings(self, include_all: bool = False) -> list[tuple[str, SettingType]]:
        """
        List settings with their type, sorted by identifier

        Entries whose type cannot be parsed are skipped. Composite kinds
        (Custom, SettingCollection) are only included with ``include_all``.
        """
        listing: list[tuple[str, SettingType]] = []
        for setting_id in sorted(self.definitions):
            setting_type = self.setting_type(setting_id)
            if setting_type is None:
                logger.debug("Skipping %s: unknown type", setting_id)
                continue
            if include_all or not setting_type.is_composite:
                listing.append((setting_id, setting_type))
        return listing

    def list_targets(self, include_all: bool = False) -> list[tuple[str, str]]:
        return [(setting_id, str(kind)) for setting_id, kind in self.list_settings(include_all)]


class CatalogResolver:
    """Resolves setting identifiers to SettingItem targets from a catalog."""

    def __init__(self, catalog: SettingsCatalog):
        self.catalog = catalog

    def resolve(self, target_id: str) -> SettingItem:
        if not target_id:
            raise SettingFailedError("No such setting")
        backend = self.catalog.backend(target_id)
        if backend is None:
            raise SettingFailedError("No such setting")
        return SettingItem(target_id, backend)
