"""Generate a CSV file of synthetic stock market trades."""

from __future__ import annotations

import csv
import datetime as _dt
import os
import random
import time

SYMBOLS = [
    "AAPL", "MSFT", "GOOGL", "AMZN", "META", "TSLA", "NVDA", "JPM", "V", "JNJ",
    "WMT", "PG", "MA", "HD", "DIS", "NFLX", "ADBE", "CRM", "ORCL", "INTC",
    "CSCO", "PFE", "KO", "PEP", "NKE", "MCD", "ABT", "TMO", "COST", "AVGO",
    "BA", "IBM", "GE", "CAT", "AMD", "QCOM", "TXN", "SBUX", "INTU", "PYPL",
]
EXCHANGES = ["NYSE", "NASDAQ", "EURONEXT", "LSE", "TSE"]
SECTORS = [
    "Technology", "Healthcare", "Financial", "Consumer", "Energy",
    "Industrial", "Utilities", "Materials", "Real Estate",
]
ORDER_TYPES = ["Market", "Limit", "Stop", "Stop-Limit"]
TRADE_TYPES = ["Buy", "Sell"]

HEADER = [
    "TradeID", "Timestamp", "Symbol", "Exchange", "Sector", "TradeType",
    "OrderType", "Quantity", "Price", "TotalValue", "OpenPrice", "ClosePrice",
    "HighPrice", "LowPrice", "Volume", "MarketCap", "PERatio", "DividendYield",
    "Beta", "52WeekHigh", "52WeekLow", "ChangePercent",
]

# Market opening on the first day of the generated series.
BASE_DATE = _dt.datetime(2020, 1, 1, 9, 30, 0)
PROGRESS_EVERY = 100_000

_KIB = 1024
_MIB = 1024 * 1024
_GIB = 1024 * 1024 * 1024


def format_size(size: float) -> str:
    """Human-readable file size with two decimals and a B/KB/MB/GB unit."""
    size = float(size)
    if size > _GIB:
        return f"{size / _GIB:.2f} GB"
    if size > _MIB:
        return f"{size / _MIB:.2f} MB"
    if size > _KIB:
        return f"{size / _KIB:.2f} KB"
    return f"{size:.2f} B"


def _trade_row(rng: random.Random, prices: dict[str, float], trade_id: int) -> list[str]:
    timestamp = BASE_DATE + _dt.timedelta(seconds=trade_id)

    symbol = rng.choice(SYMBOLS)
    exchange = rng.choice(EXCHANGES)
    sector = rng.choice(SECTORS)
    trade_type = rng.choice(TRADE_TYPES)
    order_type = rng.choice(ORDER_TYPES)

    base_price = prices[symbol]
    variation = (rng.random() - 0.5) * base_price * 0.02
    price = base_price + variation
    prices[symbol] = price

    quantity = rng.randrange(1000) + 1
    total_value = price * quantity

    open_price = base_price * (1 + (rng.random() - 0.5) * 0.01)
    close_price = price
    high_price = price * (1 + rng.random() * 0.015)
    low_price = price * (1 - rng.random() * 0.015)

    volume = rng.randrange(10_000_000) + 100_000
    market_cap = float(rng.randrange(500_000) + 1000) * 1_000_000
    pe_ratio = rng.random() * 50 + 5
    dividend_yield = rng.random() * 5
    beta = rng.random() * 2 + 0.5
    week52_high = base_price * (1 + rng.random() * 0.5)
    week52_low = base_price * (1 - rng.random() * 0.3)
    change_percent = (price - open_price) / open_price * 100

    return [
        str(trade_id),
        timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        symbol,
        exchange,
        sector,
        trade_type,
        order_type,
        str(quantity),
        f"{price:.2f}",
        f"{total_value:.2f}",
        f"{open_price:.2f}",
        f"{close_price:.2f}",
        f"{high_price:.2f}",
        f"{low_price:.2f}",
        str(volume),
        f"{market_cap:.0f}",
        f"{pe_ratio:.2f}",
        f"{dividend_yield:.2f}",
        f"{beta:.3f}",
        f"{week52_high:.2f}",
        f"{week52_low:.2f}",
        f"{change_percent:.2f}",
    ]


def generate_stock_data(output: str, rows: int = 1_000_000, seed: int | None = None) -> int:
    """Write a header and `rows` random trades to `output`; return the file size in bytes."""
    print(f"Generating {rows} rows of CSV data...")
    start = time.perf_counter()

    rng = random.Random(seed)
    prices = {symbol: rng.randrange(500) + 10 + rng.random() for symbol in SYMBOLS}

    with open(output, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(HEADER)
        for trade_id in range(1, rows + 1):
            writer.writerow(_trade_row(rng, prices, trade_id))
            if trade_id % PROGRESS_EVERY == 0:
                print(
                    f"Progress: {trade_id} rows written "
                    f"({trade_id / rows * 100:.1f}%)"
                )

    elapsed = time.perf_counter() - start
    print(f"\n✓ Successfully generated {rows} rows in {elapsed:.3f}s")
    print(f"Output file: {output}")

    size = os.path.getsize(output)
    print(f"File size: {format_size(size)}")
    return size