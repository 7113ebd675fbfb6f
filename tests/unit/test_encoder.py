"""Tests for result record encoding and streaming."""

import io
import json
from enum import Enum

import pytest

from settingsbridge.core.encoder import (
    ResultEncoder,
    SeparatorStyle,
    encode_result,
    render_result,
    result_to_record,
)
from settingsbridge.domain.errors import ErrorKind
from settingsbridge.domain.results import Failure, Success
from settingsbridge.targets import SettingType


class _Color(Enum):
    RED = 1


class _RecordingStream(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self.flushed_at: list[str] = []

    def flush(self) -> None:
        self.flushed_at.append(self.getvalue())
        super().flush()


def test_success_record() -> None:
    assert result_to_record(Success(0, 42)) == {"value": 42}
    assert result_to_record(Success(1)) == {"value": None}


def test_failure_record() -> None:
    record = result_to_record(Failure(0, ErrorKind.TARGET_NOT_FOUND, "missing: No such setting"))

    assert record == {
        "error": True,
        "kind": "TargetNotFound",
        "message": "missing: No such setting",
    }


def test_encode_result_is_a_single_line() -> None:
    encoded = encode_result(Success(0, {"text": "line one\nline two"}))

    assert "\n" not in encoded
    assert json.loads(encoded) == {"value": {"text": "line one\nline two"}}


def test_non_json_values_render_by_shape() -> None:
    encoded = encode_result(Success(0, [SettingType.BOOLEAN, _Color.RED, {3, 1}, (1, 2)]))

    assert json.loads(encoded) == {"value": ["Boolean", 1, [1, 3], [1, 2]]}


def test_unknown_objects_render_as_text() -> None:
    class Opaque:
        def __str__(self) -> str:
            return "opaque"

    assert json.loads(encode_result(Success(0, Opaque()))) == {"value": "opaque"}


def test_lines_style_writes_one_record_per_line() -> None:
    stream = io.StringIO()
    encoder = ResultEncoder(stream)

    written = encoder.write_all([Success(0, 1), Failure(1, ErrorKind.INVOCATION_FAILED, "boom")])

    assert written == 2
    assert stream.getvalue() == (
        '{"value": 1}\n'
        '{"error": true, "kind": "InvocationFailed", "message": "boom"}\n'
    )


def test_legacy_style_terminates_every_record_with_a_comma() -> None:
    stream = io.StringIO()
    ResultEncoder(stream, style=SeparatorStyle.LEGACY).write_all([Success(0, 1), Success(1, 2)])

    assert stream.getvalue() == '{"value": 1},\n{"value": 2},\n'


def test_each_record_is_flushed_as_it_is_written() -> None:
    stream = _RecordingStream()
    encoder = ResultEncoder(stream)

    encoder.write(Success(0, True))
    encoder.write(Success(1, False))

    assert stream.flushed_at == ['{"value": true}\n', '{"value": true}\n{"value": false}\n']


def _circular() -> list:
    items: list = []
    items.append(items)
    return items


@pytest.mark.parametrize(
    "value",
    [{(1, 2): "x"}, _circular(), float("nan"), float("inf"), [1, float("-inf")]],
)
def test_unencodable_value_becomes_an_invocation_failure(value) -> None:
    rendered, record = render_result(Success(3, value))

    assert rendered.index == 3
    assert rendered.kind == ErrorKind.INVOCATION_FAILED
    assert rendered.message.startswith("Return value is not JSON-serializable: ")
    assert json.loads(record) == {
        "error": True,
        "kind": "InvocationFailed",
        "message": rendered.message,
    }


def test_encode_result_never_writes_non_standard_numbers() -> None:
    with pytest.raises(ValueError):
        encode_result(Success(0, float("nan")))


def test_write_keeps_the_slot_and_continues() -> None:
    stream = io.StringIO()
    encoder = ResultEncoder(stream)

    first = encoder.write(Success(0, {(1, 2): "x"}))
    second = encoder.write(Success(1, True))

    assert first.ok is False
    assert second == Success(1, True)
    records = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert records[0]["kind"] == "InvocationFailed"
    assert records[1] == {"value": True}
    assert encoder.written == 2
