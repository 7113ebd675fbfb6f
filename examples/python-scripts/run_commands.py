#!/usr/bin/env python3
"""
Example: Run a batch of setting commands from Python

This script demonstrates how to use the SettingsBridge SDK directly instead
of piping JSON through the CLI.
"""

import sys
from pathlib import Path

from settingsbridge import (
    CapabilityRegistry,
    CatalogResolver,
    Dispatcher,
    ResultEncoder,
    SettingItem,
    SettingsCatalog,
    decode_commands,
)

COMMANDS = """
[
  {"target": "SystemSettings_Display_Brightness", "method": "GetValue", "arguments": {}},
  {"target": "SystemSettings_Display_Brightness", "method": "SetValue", "arguments": [40]},
  {"target": "SystemSettings_Display_Brightness", "method": "GetValue", "arguments": []},
  {"target": "SystemSettings_Display_Orientation", "method": "GetPossibleValues"},
  {"target": "SystemSettings_Troubleshoot_Audio", "method": "Invoke"},
  {"target": "SystemSettings_Missing", "method": "GetValue"}
]
"""


def main():
    catalog = SettingsCatalog.load(Path(__file__).parent.parent / "settings.json")

    print("Settings:")
    for setting_id, setting_type in catalog.list_settings(include_all=True):
        print(f"  - {setting_id}: {setting_type}")

    registry = CapabilityRegistry.build(SettingItem)
    print("\nExposed methods:")
    for descriptor in registry.describe():
        print(f"  - {descriptor.signature()}")

    print("\nResults:")
    dispatcher = Dispatcher(CatalogResolver(catalog), [registry])
    ResultEncoder(sys.stdout).write_all(dispatcher.run(decode_commands(COMMANDS)))


if __name__ == "__main__":
    main()
