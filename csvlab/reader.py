"""Stream a CSV file and show its first rows."""

from __future__ import annotations

import csv


def read_csv(path: str, sep: str = ",", show_n: int = 5) -> int:
    """Print the first show_n rows and the total row count; return the count."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")

    total = 0
    expected_fields: int | None = None
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle, delimiter=sep, skipinitialspace=True)
        for record in reader:
            if not record:
                continue
            if expected_fields is None:
                expected_fields = len(record)
            elif len(record) != expected_fields:
                raise csv.Error(
                    f"record on line {reader.line_num}: wrong number of fields"
                )
            total += 1
            if show_n > 0 and total <= show_n:
                print(f"Row {total}: [{' '.join(record)}]")

    print(f"Total rows read: {total}")
    return total