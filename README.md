# csvlab

`csvlab` is a small Python library for working with large CSV files. It can:

- generate large synthetic stock-market trade files,
- stream through a CSV file and print its first rows,
- parse records into typed rows, filter them, validate them against a schema
  and report amount statistics overall and by group,
- anonymise IP addresses.

It needs nothing beyond the Python standard library (Python 3.10 or later).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `csvlab.generate`

`generate_stock_data(output, rows=1_000_000, seed=None)` writes a header and
`rows` made-up trades with 22 columns (`TradeID`, `Timestamp`, `Symbol`,
`Exchange`, `Sector`, `TradeType`, `OrderType`, `Quantity`, `Price`,
`TotalValue`, `OpenPrice`, `ClosePrice`, `HighPrice`, `LowPrice`, `Volume`,
`MarketCap`, `PERatio`, `DividendYield`, `Beta`, `52WeekHigh`, `52WeekLow`,
`ChangePercent`). Timestamps start at 2020-01-01 09:30:01 and advance one
second per row. Progress is printed every 100,000 rows, followed by the
elapsed time and the file size; the size in bytes is returned. Pass `seed`
for reproducible output.

`format_size(size)` renders a byte count such as `"1.50 KB"`.

### `csvlab.reader`

`read_csv(path, sep=",", show_n=5)` prints the first `show_n` rows and the
total number of rows, and returns that number. It raises `ValueError` for a
separator that is not a single character and `csv.Error` when a record has a
different number of fields from the first.

### `csvlab.rows` and `csvlab.stats`

`parse_logical_row(record, group_by_index=-1)` returns a `LogicalRow` whose
`amount` is column 8 parsed as a float and whose `group_key` is the chosen
column, if any. It raises `RowError` when the column is missing or not a
number.

`AmountStats` keeps count, sum, minimum and maximum; `add(row)`, `has_data()`
and `average()` (NaN when empty).

### `csvlab.aggregators`

`GlobalAmountAggregator`, `GroupByAggregator` (groups reported by total sum,
largest first), `DebugAggregator(max_rows)` (prints the first rows it sees)
and `CompositeAggregator(*aggregators)`. Each has `consume(row)` and
`report(out)`, writing to a text stream.

### `csvlab.filters`

`parse_filter(expr, header=None)` and `new_filter_set(expressions, header=None)`
build `Filter` and `FilterSet` objects; `evaluate(record)` tells whether a
record matches (a `FilterSet` needs every filter to match). Malformed
expressions and out-of-range columns raise `FilterError`.

Expressions have the form `column operator value`, with a space on each side
of the operator. The column is a header name (case-insensitive, needs a
header) or a 0-based index. Values may be wrapped in single or double quotes.

| operator          | meaning                                        |
|-------------------|------------------------------------------------|
| `=` `!=`          | equality; numeric when the value is a number   |
| `>` `>=` `<` `<=` | numeric comparison                             |
| `contains`        | substring                                      |
| `startswith`      | prefix                                         |
| `endswith`        | suffix                                         |
| `~=`              | regular-expression search                      |

### `csvlab.schema`

`CSVSchema`, `ColumnDef` and `ColumnType` describe columns (string, int,
float, bool, date, datetime, email, regex) with required flags, lengths,
ranges, date layouts and allowed values. `CSVSchema.validate_record(record)`
raises `ValidationError` for a bad value or `SchemaError` for a wrong column
count. `stock_data_schema()` returns the schema of the generated trade files.
`matches_layout(layout, value)` checks a date written in a reference-time
layout such as `"2006-01-02 15:04:05"`.

### `csvlab.process`

`process_csv(config, schema=None, composite=None)` streams the file named in a
`ProcessConfig` (`path`, `sep`, `has_header`, `show_first`, `group_by_col`,
`filters`), validates, filters and aggregates each row, prints a summary and
the aggregator reports, and returns the row counts (`total`, `filtered`,
`valid`, `invalid`, `validation_errors`). Rows that fail are logged through
`logging`. Unreadable or malformed files raise `ProcessError`.

### `csvlab.anonymize`

`anonymize_ip(ip)` zeroes the last IPv4 octet (`"192.168.1.42"` →
`"192.168.1.0"`) or keeps the first four IPv6 groups followed by `::`.

## Example

```python
from csvlab.filters import new_filter_set
from csvlab.process import ProcessConfig, process_csv
from csvlab.schema import stock_data_schema

header = ["ID", "Name", "Age", "Country", "Amount"]
filters = new_filter_set(["Amount > 100", "Country = 'US'"], header)
filters.evaluate(["1", "John", "25", "US", "150.50"])   # True

counts = process_csv(
    ProcessConfig(path="stock_data.csv", has_header=True, group_by_col=2),
    schema=stock_data_schema(),
)
```

## What it does not do

The package installs no command-line program; its features are used from
Python. It does not infer a schema from a file's contents: schemas are
written by hand as `CSVSchema` objects, or taken from `stock_data_schema()`.