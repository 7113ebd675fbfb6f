"""
Command Decoder

Turns a raw input stream into an ordered sequence of commands.
"""

import json
import logging
import math
from collections.abc import Iterator
from typing import IO, Any

from settingsbridge.domain.commands import Command
from settingsbridge.domain.errors import DecodeError
from settingsbridge.domain.values import json_type_name

logger = logging.getLogger(__name__)


def _read_text(stream: IO[Any] | str | bytes) -> str:
    if isinstance(stream, (str, bytes)):
        raw = stream
    else:
        raw = stream.read()
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Input is not valid UTF-8: {e}") from e
    return raw.removeprefix("\ufeff")


def _reject_constant(token: str) -> Any:
    raise DecodeError(f"Non-standard JSON constant '{token}' is not allowed")


def _parse_float(token: str) -> float:
    number = float(token)
    if not math.isfinite(number):
        raise DecodeError(f"Number out of range: {token}")
    return number


def _parse_records(text: str) -> list[dict[str, Any]]:
    try:
        document = json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
    except ValueError as e:
        raise DecodeError(str(e)) from e

    if not isinstance(document, list):
        raise DecodeError(f"Expected a JSON array of commands, got {json_type_name(document)}")

    for position, record in enumerate(document):
        if not isinstance(record, dict):
            raise DecodeError(
                f"Expected a JSON object at index {position}, got {json_type_name(record)}"
            )
    return document


def decode_commands(stream: IO[Any] | str | bytes) -> Iterator[Command]:
    """
    Decode a JSON array of command records

    The top-level structure is validated before anything is returned, so a
    malformed stream never yields a partial batch. Commands themselves are
    built lazily, one per record, in input order.

    Args:
        stream: Binary or text stream (or the raw document itself)

    Returns:
        Single-pass iterator over Commands

    Raises:
        DecodeError: If the input is not a JSON array of objects
    """
    records = _parse_records(_read_text(stream))
    logger.debug("Decoded %d command record(s)", len(records))
    return (Command.from_record(index, record) for index, record in enumerate(records))
