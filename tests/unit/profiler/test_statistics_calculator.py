"""
Unit tests for the statistics calculator.

Covers lower-index quartiles, equal-width histograms and frequency labels.
"""

import pytest

from tabular_profiler.profiler.profile_result import ColumnType, NamedCount
from tabular_profiler.profiler.statistics_calculator import (
    StatisticsCalculator,
    format_number,
    lower_quantile,
)
from tabular_profiler.profiler.type_inferrer import TypeInference, TypeInferrer, parse_date


@pytest.fixture
def calculator():
    return StatisticsCalculator()


class TestHelpers:
    """Test formatting and quantile helpers."""

    @pytest.mark.parametrize("value,expected", [
        (5.0, "5"),
        (-2.0, "-2"),
        (2.5, "2.5"),
        (0.0, "0"),
    ])
    def test_format_number(self, value, expected):
        """Test integral values print without a fraction."""
        assert format_number(value) == expected

    def test_lower_quantile_selects_without_averaging(self):
        """Test the value at floor(n * fraction) is returned."""
        values = [1, 2, 3, 4]

        assert lower_quantile(values, 0.5) == 3
        assert lower_quantile(values, 0.25) == 2


class TestNumericStatistics:
    """Test numeric aggregates."""

    def test_quartiles(self, calculator):
        """Test lower-index quartiles of 1..10."""
        stats = calculator.calculate_numeric([float(i) for i in range(1, 11)])

        assert stats.quantiles.q1 == 3
        assert stats.quantiles.median == 6
        assert stats.quantiles.q3 == 8

    def test_min_max_mean(self, calculator):
        """Test basic aggregates, independent of input order."""
        stats = calculator.calculate_numeric([4.0, -1.0, 3.0])

        assert stats.min == -1.0
        assert stats.max == 4.0
        assert stats.mean == pytest.approx(2.0)
        assert stats.top_values is None

    def test_histogram_counts_maximum_in_last_bin(self, calculator):
        """Test 0..10 gives exactly ten bins with the maximum counted."""
        stats = calculator.calculate_numeric([float(i) for i in range(11)])

        assert len(stats.histogram) == 10
        assert sum(b.value for b in stats.histogram) == 11
        assert stats.histogram[-1] == NamedCount(name="9.0", value=2)
        assert stats.histogram[0] == NamedCount(name="0.0", value=1)

    def test_histogram_labels_have_one_decimal(self, calculator):
        """Test bins are labelled by their start with one decimal place."""
        stats = calculator.calculate_numeric([0.0, 1.0])

        assert [b.name for b in stats.histogram][:3] == ["0.0", "0.1", "0.2"]

    def test_constant_column_single_bin(self, calculator):
        """Test a zero-width range gives one bin with every value."""
        stats = calculator.calculate_numeric([5.0, 5.0, 5.0])

        assert stats.histogram == (NamedCount(name="5", value=3),)

    def test_constant_fractional_single_bin(self, calculator):
        """Test the single bin label keeps a fractional value."""
        stats = calculator.calculate_numeric([2.5])

        assert stats.histogram == (NamedCount(name="2.5", value=1),)

    def test_overflowing_range_single_bin(self, calculator):
        """Test a range too wide for float64 keeps every value in one bin."""
        stats = calculator.calculate_numeric([1e308, 1e308, -1e308])

        assert len(stats.histogram) == 1
        assert stats.histogram[0].value == 3

    def test_empty_input(self, calculator):
        """Test no numbers give no aggregates."""
        assert calculator.calculate_numeric([]).is_empty()

    def test_custom_bin_count(self):
        """Test the configured bin count is honoured."""
        stats = StatisticsCalculator(histogram_bins=4).calculate_numeric([0.0, 4.0])

        assert len(stats.histogram) == 4
        assert stats.histogram[-1].value == 1


class TestDateStatistics:
    """Test date aggregates."""

    def test_date_range(self, calculator):
        """Test min, max and day labels of a date histogram."""
        timestamps = [parse_date(f"2024-01-{day:02d}") for day in (1, 5, 11)]

        stats = calculator.calculate_date(timestamps)

        assert stats.min == parse_date("2024-01-01")
        assert stats.max == parse_date("2024-01-11")
        assert stats.mean is None
        assert stats.quantiles is None
        assert len(stats.histogram) == 10
        assert stats.histogram[0].name == "2024-01-01"
        assert stats.histogram[-1].name == "2024-01-10"
        assert sum(b.value for b in stats.histogram) == 3

    def test_single_date(self, calculator):
        """Test a single date gives one labelled bin."""
        stats = calculator.calculate_date([parse_date("2023-06-30")] * 2)

        assert stats.histogram == (NamedCount(name="2023-06-30", value=2),)


class TestFrequencies:
    """Test string frequency aggregates."""

    def test_most_frequent_first(self, calculator):
        """Test ordering by count, ties in first-seen order."""
        stats = calculator.calculate_frequencies(["b", "a", "a", "c", "b", "a"])

        assert stats.top_values == (
            NamedCount("a", 3),
            NamedCount("b", 2),
            NamedCount("c", 1),
        )

    def test_limit(self, calculator):
        """Test at most 20 values are kept."""
        values = [f"value{i}" for i in range(30)]

        stats = calculator.calculate_frequencies(values)

        assert len(stats.top_values) == 20
        assert stats.top_values[0].name == "value0"

    def test_long_labels_truncated(self, calculator):
        """Test labels over 15 characters are cut and suffixed."""
        stats = calculator.calculate_frequencies(["abcdefghijklmnopq", "exactly15chars!"])

        names = [t.name for t in stats.top_values]
        assert names == ["abcdefghijklmno...", "exactly15chars!"]

    def test_counting_uses_full_value(self, calculator):
        """Test values sharing a prefix are counted separately."""
        stats = calculator.calculate_frequencies(["abcdefghijklmnop-1", "abcdefghijklmnop-2"])

        assert [t.value for t in stats.top_values] == [1, 1]
        assert stats.top_values[0].name == stats.top_values[1].name


class TestCalculateDispatch:
    """Test aggregate selection by column type."""

    def test_numeric_dispatch(self, calculator):
        """Test numeric columns get numeric aggregates."""
        values = ["1", "2", "3"]
        stats = calculator.calculate(values, TypeInferrer().infer_column_type(values))

        assert stats.mean == pytest.approx(2.0)
        assert stats.top_values is None

    def test_string_dispatch(self, calculator):
        """Test string columns get only frequencies."""
        values = ["x", "y", "x"]
        stats = calculator.calculate(values, TypeInferrer().infer_column_type(values))

        assert stats.top_values[0] == NamedCount("x", 2)
        assert stats.histogram is None
        assert stats.min is None

    def test_numeric_stats_ignore_non_numeric_values(self, calculator):
        """Test non-parsing values in a numeric column are left out."""
        values = [str(i) for i in range(1, 10)] + ["oops"]
        stats = calculator.calculate(values, TypeInferrer().infer_column_type(values))

        assert stats.max == 9.0
        assert sum(b.value for b in stats.histogram) == 9

    @pytest.mark.parametrize("column_type", [ColumnType.BOOLEAN, ColumnType.UNKNOWN])
    def test_reserved_types_get_no_stats(self, calculator, column_type):
        """Test reserved types carry empty stats."""
        inference = TypeInference(column_type=column_type, sample_size=2)

        assert calculator.calculate(["a", "b"], inference).is_empty()
