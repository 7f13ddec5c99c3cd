"""Consumers of logical rows that report statistics."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from .rows import LogicalRow
from .stats import AmountStats


class Aggregator(ABC):
    """Something that consumes rows and can write a report."""

    @abstractmethod
    def consume(self, row: LogicalRow) -> None:
        """Take one row into account."""

    @abstractmethod
    def report(self, out: TextIO) -> None:
        """Write a report of what was consumed."""


class CompositeAggregator(Aggregator):
    """Forwards every row and report request to each of its aggregators."""

    def __init__(self, *aggregators: Aggregator) -> None:
        self.aggregators = list(aggregators)

    def consume(self, row: LogicalRow) -> None:
        for aggregator in self.aggregators:
            aggregator.consume(row)

    def report(self, out: TextIO) -> None:
        for aggregator in self.aggregators:
            aggregator.report(out)


def _write_stats(out: TextIO, stats: AmountStats, indent: str = "") -> None:
    out.write(f"{indent}Count:   {stats.count}\n")
    out.write(f"{indent}Sum:     {stats.sum:.2f}\n")
    out.write(f"{indent}Min:     {stats.min:.2f}\n")
    out.write(f"{indent}Max:     {stats.max:.2f}\n")
    out.write(f"{indent}Average: {stats.average():.2f}\n")


class GlobalAmountAggregator(Aggregator):
    """Statistics over the amounts of all rows."""

    def __init__(self) -> None:
        self.stats = AmountStats()

    def consume(self, row: LogicalRow) -> None:
        self.stats.add(row)

    def report(self, out: TextIO) -> None:
        if not self.stats.has_data():
            out.write("\nNo valid amount data to compute stats.\n")
            return
        out.write("\n=== Amount stats (global) ===\n")
        _write_stats(out, self.stats)


class GroupByAggregator(Aggregator):
    """Statistics per group key; rows without a key are ignored."""

    def __init__(self) -> None:
        self.stats_by_key: dict[str, AmountStats] = {}

    def consume(self, row: LogicalRow) -> None:
        if not row.group_key:
            return
        self.stats_by_key.setdefault(row.group_key, AmountStats()).add(row)

    def report(self, out: TextIO) -> None:
        if not self.stats_by_key:
            return
        out.write("\n=== Group-by statistics ===\n")
        out.write(f"Number of groups: {len(self.stats_by_key)}\n\n")
        out.write("Groups sorted by total sum (descending):\n")
        ordered = sorted(self.stats_by_key.items(), key=lambda item: item[1].sum, reverse=True)
        for position, (key, stats) in enumerate(ordered, start=1):
            out.write(f"[{position}] {key}\n")
            _write_stats(out, stats, indent="  ")
            out.write("\n")


class DebugAggregator(Aggregator):
    """Prints the raw fields of the first few rows it sees."""

    def __init__(self, max_rows: int, stream: TextIO | None = None) -> None:
        self.max_rows = max_rows
        self.current_row = 0
        self.stream = stream

    def consume(self, row: LogicalRow) -> None:
        if self.current_row < self.max_rows:
            target = self.stream if self.stream is not None else sys.stdout
            fields = " ".join(row.raw_record)
            target.write(f"Debug Row {self.current_row + 1}: [{fields}]\n")
            self.current_row += 1

    def report(self, out: TextIO) -> None:
        return None