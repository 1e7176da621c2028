from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from saliency_visualizer.values import ValueRange, build_dictionary, is_number


@dataclass(frozen=True)
class TokenRecord:
    raw: str
    value: float | None = None


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one input.

    On failure `ok` is False, `error` holds a user-facing message and the
    payload fields are empty, with the default [0, 1] range.
    """
    ok: bool
    records: list[TokenRecord] = field(default_factory=list)
    dictionary: dict[str, float] = field(default_factory=dict)
    value_range: ValueRange = field(default_factory=ValueRange)
    error: str | None = None

    @classmethod
    def failure(cls, message: str) -> ParseResult:
        return cls(ok=False, error=message)


def _load_json(source: str) -> tuple[Any, str | None]:
    try:
        return json.loads(source), None
    except json.JSONDecodeError as e:
        return None, f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
    except ValueError as e:
        # e.g. integer literals beyond the int string conversion limit
        return None, f"Invalid JSON: {e}"
    except RecursionError:
        return None, "Invalid JSON: nesting too deep"


def parse_pairs(source: str) -> ParseResult:
    """
    Parse a JSON array of [token, value] pairs.

    Each element must be a two-element array whose first item is a string and
    whose second item is a number or null. Order and duplicates are kept.
    """
    data, error = _load_json(source)
    if error is not None:
        return ParseResult.failure(error)
    if not isinstance(data, list):
        return ParseResult.failure("Expected a JSON array")

    records: list[TokenRecord] = []
    for i, item in enumerate(data):
        if not isinstance(item, list) or len(item) != 2:
            return ParseResult.failure(f"Item {i}: expected a [token, value] pair")
        tok, val = item
        if not isinstance(tok, str):
            return ParseResult.failure(f"Item {i}: token must be a string")
        if val is not None and not is_number(val):
            return ParseResult.failure(f"Item {i}: value must be a number or null")
        records.append(TokenRecord(tok, float(val) if val is not None else None))

    return ParseResult(
        ok=True,
        records=records,
        value_range=ValueRange.from_values(r.value for r in records),
    )


def parse_dictionary(source: str) -> ParseResult:
    """
    Parse a JSON object mapping token strings to numbers.

    Control-character-only keys are dropped before the range is computed.
    """
    data, error = _load_json(source)
    if error is not None:
        return ParseResult.failure(error)
    if not isinstance(data, dict):
        return ParseResult.failure("Expected a JSON object")

    for key, val in data.items():
        if not is_number(val):
            return ParseResult.failure(f"Value for {key!r} must be a number")

    dictionary = build_dictionary({k: float(v) for k, v in data.items()})
    return ParseResult(
        ok=True,
        dictionary=dictionary,
        value_range=ValueRange.from_values(dictionary.values()),
    )
