"""Row filters written as simple expressions such as "Price > 100"."""

from __future__ import annotations

import operator as _op
import re
from dataclasses import dataclass, field
from enum import IntEnum

from .rows import _parse_float


class FilterOperator(IntEnum):
    """Comparison operators a filter may use."""

    EQUAL = 0
    NOT_EQUAL = 1
    GREATER_THAN = 2
    GREATER_THAN_OR_EQUAL = 3
    LESS_THAN = 4
    LESS_THAN_OR_EQUAL = 5
    CONTAINS = 6
    STARTS_WITH = 7
    ENDS_WITH = 8
    REGEX = 9

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    FilterOperator.EQUAL: "=",
    FilterOperator.NOT_EQUAL: "!=",
    FilterOperator.GREATER_THAN: ">",
    FilterOperator.GREATER_THAN_OR_EQUAL: ">=",
    FilterOperator.LESS_THAN: "<",
    FilterOperator.LESS_THAN_OR_EQUAL: "<=",
    FilterOperator.CONTAINS: "contains",
    FilterOperator.STARTS_WITH: "startswith",
    FilterOperator.ENDS_WITH: "endswith",
    FilterOperator.REGEX: "~=",
}

# Searched in this order so that ">=" wins over ">" and so on.
_PATTERNS = [
    (FilterOperator.GREATER_THAN_OR_EQUAL, " >= "),
    (FilterOperator.LESS_THAN_OR_EQUAL, " <= "),
    (FilterOperator.NOT_EQUAL, " != "),
    (FilterOperator.REGEX, " ~= "),
    (FilterOperator.EQUAL, " = "),
    (FilterOperator.GREATER_THAN, " > "),
    (FilterOperator.LESS_THAN, " < "),
    (FilterOperator.CONTAINS, " contains "),
    (FilterOperator.STARTS_WITH, " startswith "),
    (FilterOperator.ENDS_WITH, " endswith "),
]

_ORDERINGS = {
    FilterOperator.GREATER_THAN: _op.gt,
    FilterOperator.GREATER_THAN_OR_EQUAL: _op.ge,
    FilterOperator.LESS_THAN: _op.lt,
    FilterOperator.LESS_THAN_OR_EQUAL: _op.le,
}

_INTEGER = re.compile(r"[+-]?[0-9]+")

_ESCAPES = {
    "\a": "\\a", "\b": "\\b", "\f": "\\f", "\n": "\\n",
    "\r": "\\r", "\t": "\\t", "\v": "\\v",
}


def _quote(text: str) -> str:
    """Double-quote a string, escaping quotes, backslashes and non-printables."""
    parts = ['"']
    for ch in text:
        if ch in '"\\':
            parts.append("\\" + ch)
        elif ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        elif ord(ch) < 0x100:
            parts.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(f"\\U{ord(ch):08x}")
    parts.append('"')
    return "".join(parts)


def _try_float(text: str) -> float | None:
    try:
        return _parse_float(text)
    except ValueError:
        return None


class FilterError(ValueError):
    """Raised for a malformed filter or one that cannot be applied to a record."""


@dataclass
class Filter:
    """A single condition on one column."""

    column_index: int
    column_name: str
    operator: FilterOperator
    value: str
    num_value: float = 0.0
    is_numeric: bool = False
    regex: re.Pattern[str] | None = None

    def evaluate(self, record: list[str]) -> bool:
        """Whether the record satisfies this condition."""
        if self.column_index >= len(record):
            raise FilterError(
                f"column index {self.column_index} out of range "
                f"(record has {len(record)} columns)"
            )
        cell = record[self.column_index]
        op = self.operator

        if op in (FilterOperator.EQUAL, FilterOperator.NOT_EQUAL):
            if self.is_numeric:
                number = _try_float(cell)
                if number is None:
                    return op is FilterOperator.NOT_EQUAL
                equal = number == self.num_value
            else:
                equal = cell == self.value
            return equal if op is FilterOperator.EQUAL else not equal

        if op in _ORDERINGS:
            number = _try_float(cell)
            if number is None:
                return False
            return _ORDERINGS[op](number, self.num_value)

        if op is FilterOperator.CONTAINS:
            return self.value in cell
        if op is FilterOperator.STARTS_WITH:
            return cell.startswith(self.value)
        if op is FilterOperator.ENDS_WITH:
            return cell.endswith(self.value)
        if op is FilterOperator.REGEX and self.regex is not None:
            return self.regex.search(cell) is not None
        raise FilterError(f"unknown operator: {int(op)}")

    def __str__(self) -> str:
        return f"{self.column_name} {self.operator.symbol} {_quote(self.value)}"


def _resolve_column(left: str, header: list[str] | None) -> tuple[int, str]:
    if _INTEGER.fullmatch(left) and abs(int(left)) < 2**63:
        index = int(left)
        if index < 0:
            raise FilterError(f"column index {index} must not be negative")
        if header is not None and index < len(header):
            return index, header[index]
        return index, f"col_{index}"

    if header is None:
        raise FilterError(f'column name "{left}" used but no header provided')
    wanted = left.casefold()
    for index, name in enumerate(header):
        if name.casefold() == wanted:
            return index, name
    raise FilterError(f'column "{left}" not found in header')


def parse_filter(expr: str, header: list[str] | None = None) -> Filter:
    """Parse an expression like "amount > 100" or "symbol = 'AAPL'"."""
    expr = expr.strip()
    for op, pattern in _PATTERNS:
        position = expr.find(pattern)
        if position >= 0:
            left = expr[:position].strip()
            right = expr[position + len(pattern):].strip()
            break
    else:
        raise FilterError(f'invalid filter expression: no operator found in "{expr}"')

    column_index, column_name = _resolve_column(left, header)

    value = right
    if (right.startswith("'") and right.endswith("'")) or (
        right.startswith('"') and right.endswith('"')
    ):
        value = right[1:-1]

    result = Filter(column_index=column_index, column_name=column_name, operator=op, value=value)

    if op <= FilterOperator.LESS_THAN_OR_EQUAL:
        number = _try_float(value)
        if number is not None:
            result.is_numeric = True
            result.num_value = number

    if op is FilterOperator.REGEX:
        try:
            result.regex = re.compile(value)
        except re.error as exc:
            raise FilterError(f'invalid regex pattern "{value}": {exc}') from exc

    return result


@dataclass
class FilterSet:
    """Several filters that must all hold."""

    filters: list[Filter] = field(default_factory=list)

    def evaluate(self, record: list[str]) -> bool:
        """Whether the record satisfies every filter; stops at the first failure."""
        return all(f.evaluate(record) for f in self.filters)

    def __str__(self) -> str:
        if not self.filters:
            return "no filters"
        return " AND ".join(str(f) for f in self.filters)


def new_filter_set(expressions: list[str], header: list[str] | None = None) -> FilterSet:
    """Parse every expression into one FilterSet."""
    filters = []
    for expr in expressions:
        try:
            filters.append(parse_filter(expr, header))
        except FilterError as exc:
            raise FilterError(f'failed to parse filter "{expr}": {exc}') from exc
    return FilterSet(filters)