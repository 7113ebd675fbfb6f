"""
SettingsBridge

Python library and CLI for calling exposed setting methods from JSON commands.
"""

__version__ = "0.1.0"

from .core import (
    CapabilityDescriptor,
    CapabilityRegistry,
    Dispatcher,
    ParameterDescriptor,
    ResultEncoder,
    SeparatorStyle,
    capability_table,
    decode_commands,
    exposed,
    parameter,
)
from .domain import (
    Command,
    DecodeError,
    ErrorKind,
    Failure,
    ParameterKind,
    Result,
    ReturnKind,
    Success,
)
from .targets import CatalogResolver, SettingItem, SettingsCatalog, SettingType

__all__ = [
    "__version__",
    "CapabilityDescriptor",
    "CapabilityRegistry",
    "ParameterDescriptor",
    "capability_table",
    "exposed",
    "parameter",
    "decode_commands",
    "Dispatcher",
    "ResultEncoder",
    "SeparatorStyle",
    "Command",
    "Result",
    "Success",
    "Failure",
    "ErrorKind",
    "DecodeError",
    "ParameterKind",
    "ReturnKind",
    "SettingItem",
    "SettingType",
    "SettingsCatalog",
    "CatalogResolver",
]
