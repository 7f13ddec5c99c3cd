import math

from csvlab.rows import LogicalRow
from csvlab.stats import AmountStats


def _row(amount):
    return LogicalRow(raw_record=[], amount=amount)


def test_empty_stats():
    stats = AmountStats()
    assert not stats.has_data()
    assert stats.count == 0
    assert math.isnan(stats.average())
    assert stats.min == math.inf and stats.max == -math.inf


def test_single_value_sets_min_and_max():
    stats = AmountStats()
    stats.add(_row(-4.0))
    assert stats.has_data()
    assert stats.min == -4.0 and stats.max == -4.0


def test_several_values():
    amounts = [3.5, -1.0, 10.25, 2.0]
    stats = AmountStats()
    for amount in amounts:
        stats.add(_row(amount))
    assert stats.count == len(amounts)
    assert stats.sum == sum(amounts)
    assert stats.min == min(amounts)
    assert stats.max == max(amounts)
    assert stats.average() == stats.sum / stats.count


def test_min_never_exceeds_max():
    stats = AmountStats()
    for amount in [5.0, 5.0, 1.0, 9.0, 0.5]:
        stats.add(_row(amount))
        assert stats.min <= stats.average() <= stats.max