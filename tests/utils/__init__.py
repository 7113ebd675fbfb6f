"""Test utilities for SettingsBridge tests."""

from .fixture_data import (
    DictResolver,
    Gadget,
    Thermostat,
    batch,
    command,
    failing_generator,
    sample_catalog_data,
)

__all__ = [
    "DictResolver",
    "Gadget",
    "Thermostat",
    "batch",
    "command",
    "failing_generator",
    "sample_catalog_data",
]
