"""End-to-end scenarios: JSON commands in, ordered result records out."""

from __future__ import annotations

import json

import pytest

from tests.utils import batch, command
from tests.utils.cli_helpers import invoke_cli, parse_records


def _apply(catalog_file, document: str):
    return invoke_cli("--catalog", str(catalog_file), "apply", input=document)


@pytest.mark.integration
def test_get_value_returns_a_single_success_record(catalog_file) -> None:
    result = _apply(catalog_file, '[{"target":"X","method":"GetValue","arguments":{}}]')

    assert result.exit_code == 0
    assert parse_records(result.output) == [{"value": 42}]


@pytest.mark.integration
def test_unknown_target_returns_target_not_found(catalog_file) -> None:
    result = _apply(catalog_file, '[{"target":"missing","method":"GetValue","arguments":{}}]')

    assert result.exit_code == 0
    records = parse_records(result.output)
    assert len(records) == 1
    assert records[0]["error"] is True
    assert records[0]["kind"] == "TargetNotFound"
    assert "No such setting" in records[0]["message"]


@pytest.mark.integration
def test_set_then_get_sees_the_new_value(catalog_file) -> None:
    document = (
        '[{"target":"X","method":"SetValue","arguments":{"valueName":"Value","newValue":true}},'
        '{"target":"X","method":"GetValue","arguments":{}}]'
    )

    result = _apply(catalog_file, document)

    assert result.exit_code == 0
    assert parse_records(result.output) == [{"value": None}, {"value": True}]


@pytest.mark.integration
def test_bare_object_fails_without_output_records(catalog_file) -> None:
    result = _apply(catalog_file, '{"target":"X","method":"GetValue","arguments":{}}')

    assert result.exit_code != 0
    assert "Invalid JSON" in result.output
    assert '"value"' not in result.output


@pytest.mark.integration
def test_truncated_input_fails(catalog_file) -> None:
    result = _apply(catalog_file, '[{"target":"X",')

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


@pytest.mark.integration
def test_mixed_batch_keeps_order_and_count(catalog_file) -> None:
    records_in = [
        command("Orientation", "GetPossibleValues"),
        command("Orientation", "SetValue", ["Portrait"]),
        command("Orientation", "GetValue", []),
        command("X", "GetValue", {"valueName": 3}),
        command("Broken", "IsEnabled"),
        command("Troubleshoot", "Invoke", {}),
        command("X", "Invoke", {}),
        command("Locked", "SetValue", {"newValue": "x"}),
        command("Notifications", "IsApplicable"),
        {"method": "GetValue"},
    ]

    result = _apply(catalog_file, batch(*records_in))

    assert result.exit_code == 0
    records = parse_records(result.output)
    assert len(records) == len(records_in)
    assert records[0] == {"value": ["Landscape", "Portrait"]}
    assert records[1] == {"value": None}
    assert records[2] == {"value": "Portrait"}
    assert records[3]["kind"] == "ArgumentMismatch"
    assert "valueName" in records[3]["message"]
    assert records[4]["kind"] == "InvocationFailed"
    assert records[4]["message"] == "Access is denied (error code 5)"
    assert records[5] == {"value": None}
    assert records[6]["kind"] == "InvocationFailed"
    assert records[7]["kind"] == "InvocationFailed"
    assert records[8] == {"value": True}
    assert records[9]["kind"] == "TargetNotFound"


@pytest.mark.integration
def test_each_record_is_independently_parseable(catalog_file) -> None:
    result = _apply(catalog_file, batch(command("X", "GetValue"), command("X", "Nope")))

    lines = result.output.splitlines()
    assert len(lines) == 2
    assert [json.loads(line) for line in lines][0] == {"value": 42}


@pytest.mark.integration
def test_non_standard_number_token_fails_without_output_records(catalog_file) -> None:
    document = (
        '[{"target":"X","method":"SetValue","arguments":[NaN]},'
        '{"target":"X","method":"GetValue"}]'
    )

    result = _apply(catalog_file, document)

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output
    assert "NaN" in result.output
    assert '"value"' not in result.output
