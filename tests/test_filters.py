import pytest

from csvlab.filters import (
    Filter,
    FilterError,
    FilterOperator,
    FilterSet,
    new_filter_set,
    parse_filter,
)

HEADER = ["ID", "Name", "Age", "Country", "Amount"]


def test_numeric_greater_than():
    f = parse_filter("Amount > 100", HEADER)
    assert f.column_index == 4
    assert f.operator is FilterOperator.GREATER_THAN
    assert f.is_numeric and f.num_value == 100


def test_string_equality():
    f = parse_filter("Country = 'FR'", HEADER)
    assert (f.column_index, f.operator, f.value) == (3, FilterOperator.EQUAL, "FR")


def test_string_equality_without_quotes():
    f = parse_filter("Country = FR", HEADER)
    assert (f.column_index, f.operator, f.value) == (3, FilterOperator.EQUAL, "FR")


def test_column_by_index():
    f = parse_filter("2 >= 18", HEADER)
    assert f.column_index == 2
    assert f.operator is FilterOperator.GREATER_THAN_OR_EQUAL
    assert f.is_numeric
    assert f.column_name == "Age"


def test_contains_operator():
    f = parse_filter("Name contains John", HEADER)
    assert (f.column_index, f.operator, f.value) == (1, FilterOperator.CONTAINS, "John")


def test_startswith_operator():
    f = parse_filter("Country startswith A", HEADER)
    assert (f.column_index, f.operator, f.value) == (3, FilterOperator.STARTS_WITH, "A")


def test_regex_operator():
    f = parse_filter("Name ~= ^[A-Z].*", HEADER)
    assert f.column_index == 1
    assert f.operator is FilterOperator.REGEX
    assert f.regex is not None and f.regex.pattern == "^[A-Z].*"


@pytest.mark.parametrize("expr", ["Amount 100", "Unknown > 100", "Name ~= [invalid"])
def test_invalid_expressions(expr):
    with pytest.raises(FilterError):
        parse_filter(expr, HEADER)


def test_column_name_case_insensitive():
    f = parse_filter("amount < 5", HEADER)
    assert f.column_index == 4 and f.column_name == "Amount"


def test_column_name_without_header():
    with pytest.raises(FilterError, match="no header provided"):
        parse_filter("Amount > 1", None)


def test_index_without_header_gets_generated_name():
    f = parse_filter("7 = x", None)
    assert f.column_name == "col_7"


def test_negative_index_rejected():
    with pytest.raises(FilterError):
        parse_filter("-1 = x", HEADER)


@pytest.mark.parametrize(
    "expr, record, expected",
    [
        ("Amount > 100", ["1", "John", "25", "US", "150.50"], True),
        ("Amount > 100", ["1", "John", "25", "US", "50.00"], False),
        ("Country = 'FR'", ["1", "Pierre", "30", "FR", "100"], True),
        ("Country = 'FR'", ["1", "John", "25", "US", "100"], False),
        ("Age <= 30", ["1", "John", "25", "US", "100"], True),
        ("Name contains oh", ["1", "John", "25", "US", "100"], True),
        ("Name contains xyz", ["1", "John", "25", "US", "100"], False),
        ("Name startswith Jo", ["1", "John", "25", "US", "100"], True),
        ("Name ~= ^J.*n$", ["1", "John", "25", "US", "100"], True),
        ("Country != 'US'", ["1", "Pierre", "30", "FR", "100"], True),
    ],
)
def test_filter_evaluate(expr, record, expected):
    assert parse_filter(expr, HEADER).evaluate(record) is expected


def test_numeric_equality_compares_values():
    assert parse_filter("Amount = 100", HEADER).evaluate(["1", "a", "2", "US", "100.0"]) is True


def test_numeric_not_equal_with_unparsable_cell():
    assert parse_filter("Amount != 100", HEADER).evaluate(["1", "a", "2", "US", "n/a"]) is True


def test_ordering_with_unparsable_cell():
    assert parse_filter("Amount > 1", HEADER).evaluate(["1", "a", "2", "US", "n/a"]) is False


def test_endswith():
    assert parse_filter("Name endswith hn", HEADER).evaluate(["1", "John"]) is True


def test_evaluate_out_of_range():
    with pytest.raises(FilterError, match="out of range"):
        parse_filter("Amount > 1", HEADER).evaluate(["1", "John"])


def test_filter_str():
    assert str(parse_filter("Amount > 100", HEADER)) == 'Amount > "100"'


@pytest.mark.parametrize(
    "exprs, record, expected",
    [
        (["Amount > 100", "Country = 'US'", "Age >= 18"], ["1", "John", "25", "US", "150.50"], True),
        (["Amount > 100", "Country = 'FR'", "Age >= 18"], ["1", "John", "25", "US", "150.50"], False),
        (["Name contains John"], ["1", "Johnson", "25", "US", "100"], True),
    ],
)
def test_filter_set_evaluate(exprs, record, expected):
    assert new_filter_set(exprs, HEADER).evaluate(record) is expected


def test_filter_set_error_names_expression():
    with pytest.raises(FilterError, match="failed to parse filter"):
        new_filter_set(["Amount > 1", "Bogus > 1"], HEADER)


def test_filter_set_str():
    assert str(FilterSet()) == "no filters"
    fs = new_filter_set(["Amount > 100", "Country = 'US'"], HEADER)
    assert str(fs) == 'Amount > "100" AND Country = "US"'


def test_filter_is_dataclass_equal():
    f = parse_filter("Country contains U", HEADER)
    assert f == Filter(column_index=3, column_name="Country",
                       operator=FilterOperator.CONTAINS, value="U")