"""Stream a CSV file through validation, filters and aggregators."""

from __future__ import annotations

import csv
import logging
import sys
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from .aggregators import (
    Aggregator,
    CompositeAggregator,
    DebugAggregator,
    GlobalAmountAggregator,
    GroupByAggregator,
)
from .filters import FilterError, FilterSet, new_filter_set
from .rows import RowError, parse_logical_row
from .schema import CSVSchema, SchemaError

logger = logging.getLogger(__name__)


class ProcessError(Exception):
    """Raised when the file cannot be read or processed at all."""


@dataclass
class ProcessConfig:
    """What to read and how to process it."""

    path: str
    sep: str = ","
    has_header: bool = False
    show_first: int = 0
    group_by_col: int = -1
    filters: list[str] = field(default_factory=list)


def _default_aggregator(config: ProcessConfig) -> CompositeAggregator:
    aggregators: list[Aggregator] = [GlobalAmountAggregator()]
    if config.group_by_col >= 0:
        aggregators.append(GroupByAggregator())
    if config.show_first > 0:
        aggregators.append(DebugAggregator(config.show_first))
    return CompositeAggregator(*aggregators)


def _records(handle: TextIO, sep: str) -> Iterator[list[str]]:
    """Yield records, requiring every record to have as many fields as the first."""
    reader = csv.reader(handle, delimiter=sep, strict=True)
    expected: int | None = None
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise ProcessError(f"error while reading CSV: line {reader.line_num}: {exc}") from exc
        if not record:
            continue
        if expected is None:
            expected = len(record)
        elif len(record) != expected:
            raise ProcessError(
                f"error while reading CSV: record on line {reader.line_num}: "
                "wrong number of fields"
            )
        yield record


def _format_list(values: list[str]) -> str:
    return "[" + " ".join(values) + "]"


def process_csv(
    config: ProcessConfig,
    schema: CSVSchema | None = None,
    composite: Aggregator | None = None,
) -> dict[str, int]:
    """Read the file, validate, filter and aggregate its rows, print a summary.

    Returns the row counts: total, filtered, valid, invalid and validation_errors.
    """
    if len(config.sep) != 1:
        raise ProcessError("separator must be a single character")
    if composite is None:
        composite = _default_aggregator(config)

    try:
        handle = open(config.path, newline="", encoding="utf-8")
    except OSError as exc:
        raise ProcessError(f"failed to open file: {exc}") from exc

    counts = {
        "total": 0,
        "filtered": 0,
        "valid": 0,
        "invalid": 0,
        "validation_errors": 0,
    }
    group_by = config.group_by_col

    with handle:
        records = _records(handle, config.sep)

        header: list[str] | None = None
        if config.has_header:
            header = next(records, None)
            if header is None:
                raise ProcessError("file contains only a header and no data rows")
            print(f"Header: {_format_list(header)}")
            if 0 <= group_by < len(header):
                print(f"Group-by column: {header[group_by]} (index {group_by})")

        filter_set: FilterSet | None = None
        if config.filters:
            try:
                filter_set = new_filter_set(config.filters, header)
            except FilterError as exc:
                raise ProcessError(f"failed to parse filters: {exc}") from exc
            print(f"Filters: {filter_set}")

        for record in records:
            counts["total"] += 1
            row_number = counts["total"]

            if schema is not None:
                try:
                    schema.validate_record(record)
                except SchemaError as exc:
                    counts["validation_errors"] += 1
                    logger.warning("row %d validation error: %s", row_number, exc)
                    continue

            if filter_set is not None:
                try:
                    matched = filter_set.evaluate(record)
                except FilterError as exc:
                    logger.warning("row %d filter error: %s", row_number, exc)
                    continue
                if not matched:
                    counts["filtered"] += 1
                    continue

            try:
                logical = parse_logical_row(record, group_by)
            except RowError as exc:
                counts["invalid"] += 1
                logger.warning("skipping invalid row %d: %s", row_number, exc)
                continue

            counts["valid"] += 1
            composite.consume(logical)

    print("\n=== Summary ===")
    print(f"Total rows read:    {counts['total']}")
    if config.filters:
        print(f"Filtered out:       {counts['filtered']}")
    print(f"Valid logical rows: {counts['valid']}")
    if schema is not None:
        print(f"Validation errors:  {counts['validation_errors']}")
    else:
        print(f"Invalid rows:       {counts['invalid']}")

    composite.report(sys.stdout)
    return counts