"""
Result Encoder

Renders each Result as an independently parseable JSON record, in input
order, writing each one as soon as it is produced.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from enum import Enum, StrEnum
from typing import IO, Any

from settingsbridge.domain.errors import ErrorKind
from settingsbridge.domain.results import Failure, Result, Success

logger = logging.getLogger(__name__)


class SeparatorStyle(StrEnum):
    """Record boundary convention on the output stream."""

    # One record per line
    LINES = "lines"
    # ``record,`` + newline after every record, the last one included
    LEGACY = "legacy"


_SEPARATORS: dict[SeparatorStyle, str] = {
    SeparatorStyle.LINES: "\n",
    SeparatorStyle.LEGACY: ",\n",
}


def _json_default(value: Any) -> Any:
    """Render values json cannot serialize by their natural shape."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        return list(value)
    return str(value)


def result_to_record(result: Result) -> dict[str, Any]:
    """Convert a Result to its JSON-ready output record."""
    if isinstance(result, Success):
        return {"value": result.value}
    if isinstance(result, Failure):
        return {"error": True, "kind": str(result.kind), "message": result.message}
    raise TypeError(f"Not a Result: {result!r}")


def encode_result(result: Result) -> str:
    """
    Serialize a Result as a single-line JSON record (no separator)

    Raises:
        TypeError: If the value contains keys or objects JSON cannot represent
        ValueError: On circular references or non-finite numbers
    """
    return json.dumps(
        result_to_record(result),
        default=_json_default,
        ensure_ascii=False,
        allow_nan=False,
    )


def render_result(result: Result) -> tuple[Result, str]:
    """
    Encode a Result, substituting a failure record when its value cannot be encoded

    Returns:
        The Result actually rendered and its encoded record
    """
    try:
        return result, encode_result(result)
    except Exception as e:
        failure = Failure(
            index=result.index,
            kind=ErrorKind.INVOCATION_FAILED,
            message=f"Return value is not JSON-serializable: {e}",
        )
        logger.info("Result #%d could not be encoded: %s", result.index, e)
        return failure, encode_result(failure)


class ResultEncoder:
    """Streams encoded Results to a text stream"""

    def __init__(self, stream: IO[str], style: SeparatorStyle = SeparatorStyle.LINES):
        self.stream = stream
        self.style = style
        self.written = 0

    def write(self, result: Result) -> Result:
        """Write one record followed by its separator, then flush; returns what was written."""
        rendered, record = render_result(result)
        self.stream.write(record)
        self.stream.write(_SEPARATORS[self.style])
        self.stream.flush()
        self.written += 1
        return rendered

    def write_all(self, results: Iterable[Result]) -> int:
        """Write results as they are produced; returns the number written."""
        for result in results:
            self.write(result)
        return self.written
