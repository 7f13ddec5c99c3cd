"""Typed view of a raw CSV record."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

AMOUNT_INDEX = 8

_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity", "nan"}


def _parse_float(text: str) -> float:
    """Parse a float with strict syntax (no surrounding blanks, no overflow)."""
    lowered = text.lower()
    if lowered in _SPECIAL:
        return float(lowered)
    if _DECIMAL.fullmatch(text):
        value = float(text)
    elif _HEX.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError as exc:
            raise ValueError(f"value out of range: {text!r}") from exc
    else:
        raise ValueError(f"invalid syntax: {text!r}")
    if math.isinf(value):
        raise ValueError(f"value out of range: {text!r}")
    return value


class RowError(ValueError):
    """Raised when a record cannot be turned into a logical row."""


@dataclass
class LogicalRow:
    """A cleaned record: the raw fields, the parsed amount and an optional group key."""

    raw_record: list[str]
    amount: float
    group_key: str = ""


def parse_logical_row(record: list[str], group_by_index: int = -1) -> LogicalRow:
    """Build a LogicalRow from a record, reading the amount from column 8."""
    if len(record) <= AMOUNT_INDEX:
        raise RowError(f"not enough columns, expected index {AMOUNT_INDEX}")

    raw_amount = record[AMOUNT_INDEX]
    try:
        amount = _parse_float(raw_amount)
    except ValueError as exc:
        raise RowError(f'invalid amount "{raw_amount}": {exc}') from exc

    group_key = ""
    if 0 <= group_by_index < len(record):
        group_key = record[group_by_index]

    return LogicalRow(raw_record=record, amount=amount, group_key=group_key)