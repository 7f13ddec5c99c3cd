"""Column schemas for CSV records and their validation."""

from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass, field
from enum import IntEnum

from .filters import _quote
from .rows import _parse_float


class ColumnType(IntEnum):
    """Expected data type of a column."""

    STRING = 0
    INT = 1
    FLOAT = 2
    BOOL = 3
    DATE = 4
    DATETIME = 5
    EMAIL = 6
    REGEX = 7


DEFAULT_DATE_FORMAT = "2006-01-02"
DEFAULT_DATETIME_FORMAT = "2006-01-02 15:04:05"

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_BOOL_WORDS = {"true", "false", "1", "0", "yes", "no", "y", "n"}
_INTEGER = re.compile(r"[+-]?[0-9]+")

_MONTHS = ["January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"]

# Layout tokens, longest first where they share a prefix.
_TOKENS = [
    ("January", "month_name"),
    ("2006", "year"),
    ("Jan", "month_abbr"),
    ("15", "hour"),
    ("01", "month"),
    ("02", "day"),
    ("04", "minute"),
    ("05", "second"),
    ("06", "year2"),
]

_TOKEN_REGEX = {
    "month_name": "(?P<month_name>" + "|".join(_MONTHS) + ")",
    "month_abbr": "(?P<month_abbr>" + "|".join(m[:3] for m in _MONTHS) + ")",
    "year": r"(?P<year>\d{4})",
    "year2": r"(?P<year2>\d{2})",
    "hour": r"(?P<hour>\d\d?)",
    "month": r"(?P<month>\d{2})",
    "day": r"(?P<day>\d{2})",
    "minute": r"(?P<minute>\d{2})",
    "second": r"(?P<second>\d{2})(?:\.\d+)?",
}

_layout_cache: dict[str, re.Pattern[str]] = {}


def _layout_regex(layout: str) -> re.Pattern[str]:
    cached = _layout_cache.get(layout)
    if cached is not None:
        return cached
    parts: list[str] = []
    seen: set[str] = set()
    position = 0
    while position < len(layout):
        for token, name in _TOKENS:
            if layout.startswith(token, position) and name not in seen:
                parts.append(_TOKEN_REGEX[name])
                seen.add(name)
                position += len(token)
                break
        else:
            parts.append(re.escape(layout[position]))
            position += 1
    compiled = re.compile("".join(parts))
    _layout_cache[layout] = compiled
    return compiled


def matches_layout(layout: str, value: str) -> bool:
    """Whether value is a valid date/time written in the reference-time layout."""
    match = _layout_regex(layout).fullmatch(value)
    if match is None:
        return False
    groups = match.groupdict()
    year = 0
    if groups.get("year") is not None:
        year = int(groups["year"])
    elif groups.get("year2") is not None:
        short = int(groups["year2"])
        year = short + (1900 if short >= 69 else 2000)
    month = 1
    if groups.get("month") is not None:
        month = int(groups["month"])
    elif groups.get("month_name") is not None:
        month = _MONTHS.index(groups["month_name"]) + 1
    elif groups.get("month_abbr") is not None:
        month = [m[:3] for m in _MONTHS].index(groups["month_abbr"]) + 1
    day = int(groups["day"]) if groups.get("day") is not None else 1
    hour = int(groups["hour"]) if groups.get("hour") is not None else 0
    minute = int(groups["minute"]) if groups.get("minute") is not None else 0
    second = int(groups["second"]) if groups.get("second") is not None else 0
    try:
        _dt.datetime(max(year, 1), month, day, hour, minute, second)
    except ValueError:
        return False
    return True


class SchemaError(ValueError):
    """Raised when a record does not satisfy a schema."""


class ValidationError(SchemaError):
    """A record's value in one column is invalid."""

    def __init__(self, column: int, col_name: str, value: str, expected: str) -> None:
        self.column = column
        self.col_name = col_name
        self.value = value
        self.expected = expected
        super().__init__(
            f"column {column} ({col_name}): invalid value {_quote(value)} - {expected}"
        )


@dataclass
class ColumnDef:
    """Constraints on one column."""

    index: int
    name: str
    type: ColumnType = ColumnType.STRING
    required: bool = False
    min_length: int = 0
    max_length: int = 0
    min: float | None = None
    max: float | None = None
    pattern: str = ""
    date_format: str = ""
    allowed_vals: list[str] = field(default_factory=list)

    def check(self, value: str) -> None:
        """Raise SchemaError with the expectation when value does not fit."""
        if self.allowed_vals and value not in self.allowed_vals:
            raise SchemaError(f"value must be one of: [{' '.join(self.allowed_vals)}]")

        kind = self.type
        if kind is ColumnType.STRING:
            length = len(value.encode("utf-8"))
            if self.min_length > 0 and length < self.min_length:
                raise SchemaError(f"string length must be at least {self.min_length}")
            if self.max_length > 0 and length > self.max_length:
                raise SchemaError(f"string length must be at most {self.max_length}")
        elif kind is ColumnType.INT:
            if not _INTEGER.fullmatch(value) or not -(2**63) <= int(value) < 2**63:
                raise SchemaError("expected integer")
            number = float(int(value))
            if self.min is not None and number < self.min:
                raise SchemaError(f"value must be >= {self.min:.0f}")
            if self.max is not None and number > self.max:
                raise SchemaError(f"value must be <= {self.max:.0f}")
        elif kind is ColumnType.FLOAT:
            try:
                number = _parse_float(value)
            except ValueError:
                raise SchemaError("expected float") from None
            if self.min is not None and number < self.min:
                raise SchemaError(f"value must be >= {self.min:.2f}")
            if self.max is not None and number > self.max:
                raise SchemaError(f"value must be <= {self.max:.2f}")
        elif kind is ColumnType.BOOL:
            if value not in _BOOL_WORDS:
                raise SchemaError("expected boolean (true/false, 1/0, yes/no, y/n)")
        elif kind is ColumnType.DATE:
            layout = self.date_format or DEFAULT_DATE_FORMAT
            if not matches_layout(layout, value):
                raise SchemaError(f"expected date in format {layout}")
        elif kind is ColumnType.DATETIME:
            layout = self.date_format or DEFAULT_DATETIME_FORMAT
            if not matches_layout(layout, value):
                raise SchemaError(f"expected datetime in format {layout}")
        elif kind is ColumnType.EMAIL:
            if not EMAIL_PATTERN.fullmatch(value):
                raise SchemaError("expected valid email address")
        elif kind is ColumnType.REGEX:
            if not self.pattern:
                raise SchemaError("regex pattern not specified")
            try:
                matched = re.search(self.pattern, value)
            except re.error as exc:
                raise SchemaError(f"invalid regex pattern: {exc}") from exc
            if matched is None:
                raise SchemaError(f"value must match pattern: {self.pattern}")


@dataclass
class CSVSchema:
    """The column definitions of a CSV file."""

    columns: list[ColumnDef] = field(default_factory=list)
    min_columns: int = 0
    strict_columns: bool = False

    def validate_record(self, record: list[str]) -> None:
        """Raise SchemaError (or ValidationError) if the record breaks the schema."""
        if len(record) < self.min_columns:
            raise SchemaError(
                f"expected at least {self.min_columns} columns, got {len(record)}"
            )
        if self.strict_columns and self.columns:
            max_index = max(0, max(col.index for col in self.columns))
            if len(record) > max_index + 1:
                raise SchemaError(
                    f"expected exactly {max_index + 1} columns, got {len(record)}"
                )

        for col in self.columns:
            if col.index >= len(record):
                if col.required:
                    raise ValidationError(
                        col.index, col.name, "", "column is required but missing"
                    )
                continue
            value = record[col.index]
            if value == "":
                if col.required:
                    raise ValidationError(
                        col.index, col.name, value, "non-empty value required"
                    )
                continue
            try:
                col.check(value)
            except SchemaError as exc:
                raise ValidationError(col.index, col.name, value, str(exc)) from exc


def stock_data_schema() -> CSVSchema:
    """Schema of the generated stock market CSV."""
    t = ColumnType

    def price(index: int, name: str) -> ColumnDef:
        return ColumnDef(index, name, t.FLOAT, required=True, min=0.0)

    return CSVSchema(
        min_columns=22,
        strict_columns=False,
        columns=[
            ColumnDef(0, "TradeID", t.INT, required=True, min=1.0),
            ColumnDef(1, "Timestamp", t.DATETIME, required=True,
                      date_format=DEFAULT_DATETIME_FORMAT),
            ColumnDef(2, "Symbol", t.STRING, required=True, min_length=1, max_length=10),
            ColumnDef(3, "Exchange", t.STRING, required=True,
                      allowed_vals=["NYSE", "NASDAQ", "EURONEXT", "LSE", "TSE"]),
            ColumnDef(4, "Sector", t.STRING, required=True),
            ColumnDef(5, "TradeType", t.STRING, required=True, allowed_vals=["Buy", "Sell"]),
            ColumnDef(6, "OrderType", t.STRING, required=True,
                      allowed_vals=["Market", "Limit", "Stop", "Stop-Limit"]),
            ColumnDef(7, "Quantity", t.INT, required=True, min=1.0),
            price(8, "Price"),
            price(9, "TotalValue"),
            price(10, "OpenPrice"),
            price(11, "ClosePrice"),
            price(12, "HighPrice"),
            price(13, "LowPrice"),
            ColumnDef(14, "Volume", t.INT, required=True, min=0.0),
            price(15, "MarketCap"),
            price(16, "PERatio"),
            price(17, "DividendYield"),
            price(18, "Beta"),
            price(19, "52WeekHigh"),
            price(20, "52WeekLow"),
            ColumnDef(21, "ChangePercent", t.FLOAT, required=True),
        ],
    )