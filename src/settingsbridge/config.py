"""
Configuration for the SettingsBridge CLI.

Values come from an optional JSON file; command-line options and environment
variables override them.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core.encoder import SeparatorStyle

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BridgeConfig(BaseModel):
    """CLI configuration file"""

    catalog: Path | None = None  # Settings catalog file
    log_level: str = Field("WARNING", alias="logLevel")
    legacy_separators: bool = Field(False, alias="legacySeparators")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            expected = ", ".join(LOG_LEVELS)
            raise ValueError(f"Unknown log level '{value}' (expected one of {expected})")
        return level

    @property
    def separator_style(self) -> SeparatorStyle:
        return SeparatorStyle.LEGACY if self.legacy_separators else SeparatorStyle.LINES

    def merged(self, **overrides: Any) -> "BridgeConfig":
        """Return a copy with every non-None override applied."""
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return BridgeConfig.model_validate(data)


def load_config(path: Path | None) -> BridgeConfig:
    """
    Read a configuration file

    Args:
        path: Path to a JSON configuration file, or None for defaults

    Returns:
        BridgeConfig

    Raises:
        FileNotFoundError: If the path does not exist
    """
    if path is None:
        return BridgeConfig()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    config = BridgeConfig.model_validate(data)
    if config.catalog is not None and not config.catalog.is_absolute():
        # Relative catalog paths are relative to the config file
        config = config.model_copy(update={"catalog": (path.parent / config.catalog).resolve()})
    return config
