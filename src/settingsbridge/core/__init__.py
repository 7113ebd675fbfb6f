"""
Core Dispatch Engine

Provider-agnostic machinery for running JSON commands against exposed methods:
- Registry: capability tables per target type
- Decoder: input stream to Commands
- Dispatcher: Commands to Results
- Encoder: Results to output records
"""

from .decoder import decode_commands
from .dispatcher import Dispatcher, bind_arguments, describe_exception, normalize_return
from .encoder import (
    ResultEncoder,
    SeparatorStyle,
    encode_result,
    render_result,
    result_to_record,
)
from .registry import (
    REQUIRED,
    CapabilityDescriptor,
    CapabilityRegistry,
    ParameterDescriptor,
    capability_table,
    exposed,
    parameter,
)

__all__ = [
    # Registry
    "REQUIRED",
    "CapabilityDescriptor",
    "CapabilityRegistry",
    "ParameterDescriptor",
    "capability_table",
    "exposed",
    "parameter",
    # Decoder
    "decode_commands",
    # Dispatcher
    "Dispatcher",
    "bind_arguments",
    "describe_exception",
    "normalize_return",
    # Encoder
    "ResultEncoder",
    "SeparatorStyle",
    "encode_result",
    "render_result",
    "result_to_record",
]
