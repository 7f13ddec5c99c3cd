"""Streaming statistics for a numeric field."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .rows import LogicalRow


@dataclass
class AmountStats:
    """Count, sum, minimum and maximum of the amounts seen so far."""

    count: int = 0
    sum: float = 0.0
    min: float = math.inf
    max: float = -math.inf

    def add(self, row: LogicalRow) -> None:
        """Fold one row's amount into the statistics."""
        value = row.amount
        if self.count == 0:
            self.min = value
            self.max = value
        else:
            if value < self.min:
                self.min = value
            if value > self.max:
                self.max = value
        self.count += 1
        self.sum += value

    def has_data(self) -> bool:
        """Whether at least one value has been added."""
        return self.count > 0

    def average(self) -> float:
        """Mean amount, or NaN when nothing has been added."""
        if self.count == 0:
            return math.nan
        return self.sum / self.count