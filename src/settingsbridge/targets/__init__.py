"""
Targets for the dispatch engine.

Settings are the one kind of target shipped with the package; the catalog
module backs them with a JSON file in place of the system setting directory.
"""

from .catalog import (
    CatalogResolver,
    CatalogSetting,
    SettingDefinition,
    SettingsCatalog,
    SettingsCatalogFile,
)
from .settings import SettingBackend, SettingFailedError, SettingItem, SettingType

__all__ = [
    "SettingItem",
    "SettingType",
    "SettingBackend",
    "SettingFailedError",
    "SettingsCatalog",
    "SettingsCatalogFile",
    "SettingDefinition",
    "CatalogSetting",
    "CatalogResolver",
]
