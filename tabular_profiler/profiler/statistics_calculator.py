"""
Statistics Calculator - Type-Conditioned Aggregates for Data Profiling.

This module turns a classified column sample into chart-ready aggregates.
What gets computed depends on the column's assigned type.

Architecture:
    StatisticsCalculator is responsible for:
    1. Numeric statistics (min, max, mean, lower-index quartiles, histogram)
    2. Date statistics (min, max timestamps, histogram labelled by day)
    3. String frequencies (top values with truncated display labels)

Design Decisions:
    - Quartiles use direct lower-index selection on the sorted sample:
      q1 = sorted[floor(n * 0.25)], median = sorted[floor(n * 0.5)],
      q3 = sorted[floor(n * 0.75)]. Neighbours are never averaged.
    - Histograms have a fixed number of equal-width bins over [min, max].
      Bin i covers [min + i*step, min + (i+1)*step); the last bin is closed
      at max so the maximum is always counted and no extra bin appears.
    - A zero-width range produces a single bin holding every value.
    - Frequencies are counted on the full value; only the display label is
      truncated. Ties keep first-encounter order.

Usage:
    calculator = StatisticsCalculator()
    stats = calculator.calculate(values, inference)
"""

import logging
import math
from collections import Counter
from typing import Callable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from tabular_profiler.core.constants import (
    HISTOGRAM_BINS,
    TOP_VALUES_LIMIT,
    LABEL_MAX_LENGTH,
    ELLIPSIS,
    HISTOGRAM_LABEL_PRECISION,
)
from tabular_profiler.profiler.profile_result import ColumnStats, ColumnType, NamedCount, Quantiles
from tabular_profiler.profiler.type_inferrer import TypeInference

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """Render a number without a trailing '.0' when it is integral."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def lower_quantile(sorted_values: Sequence[float], fraction: float) -> float:
    """Value at index floor(n * fraction) of an ascending sequence."""
    index = math.floor(len(sorted_values) * fraction)
    return float(sorted_values[index])


class StatisticsCalculator:
    """
    Chart-ready aggregates for classified columns.

    Attributes:
        histogram_bins: Number of equal-width bins for numeric and date columns
        top_values_limit: Number of most frequent values kept for string columns
        label_max_length: Display labels longer than this are truncated

    Example:
        >>> calculator = StatisticsCalculator()
        >>> inference = TypeInferrer().infer_column_type(["1", "2", "3"])
        >>> calculator.calculate(["1", "2", "3"], inference).mean
        2.0
    """

    def __init__(
        self,
        histogram_bins: int = HISTOGRAM_BINS,
        top_values_limit: int = TOP_VALUES_LIMIT,
        label_max_length: int = LABEL_MAX_LENGTH
    ):
        self.histogram_bins = histogram_bins
        self.top_values_limit = top_values_limit
        self.label_max_length = label_max_length

    def calculate(self, values: Sequence[str], inference: TypeInference) -> ColumnStats:
        """
        Compute the aggregate bundle for one column.

        Args:
            values: Non-empty raw values of the column sample
            inference: Classification of the same sample

        Returns:
            ColumnStats populated for the inferred type; empty for
            boolean and unknown columns
        """
        if inference.column_type == ColumnType.NUMERIC:
            return self.calculate_numeric(inference.numeric_values)
        if inference.column_type == ColumnType.DATE:
            return self.calculate_date(inference.date_values)
        if inference.column_type == ColumnType.STRING:
            return self.calculate_frequencies(values)
        return ColumnStats()

    def calculate_numeric(self, numbers: Sequence[float]) -> ColumnStats:
        """Min, max, mean, quartiles and histogram of parsed numbers."""
        if len(numbers) == 0:
            return ColumnStats()

        numeric_array = np.sort(np.asarray(numbers, dtype=np.float64))
        min_value = float(numeric_array[0])
        max_value = float(numeric_array[-1])

        return ColumnStats(
            min=min_value,
            max=max_value,
            mean=float(np.mean(numeric_array)),
            quantiles=Quantiles(
                q1=lower_quantile(numeric_array, 0.25),
                median=lower_quantile(numeric_array, 0.5),
                q3=lower_quantile(numeric_array, 0.75)
            ),
            histogram=self.build_histogram(
                numeric_array, min_value, max_value, self._numeric_label, format_number
            )
        )

    def calculate_date(self, timestamps: Sequence[int]) -> ColumnStats:
        """Min, max and histogram of millisecond timestamps."""
        if len(timestamps) == 0:
            return ColumnStats()

        timestamp_array = np.asarray(timestamps, dtype=np.float64)
        min_value = int(min(timestamps))
        max_value = int(max(timestamps))

        return ColumnStats(
            min=min_value,
            max=max_value,
            histogram=self.build_histogram(
                timestamp_array, min_value, max_value, self._date_label, self._date_label
            )
        )

    def calculate_frequencies(self, values: Sequence[str]) -> ColumnStats:
        """Most frequent raw values, labels truncated for display."""
        counts = Counter(values)
        top_values = tuple(
            NamedCount(name=self._truncate(value), value=count)
            for value, count in counts.most_common(self.top_values_limit)
        )
        return ColumnStats(top_values=top_values)

    def build_histogram(
        self,
        values: np.ndarray,
        min_value: float,
        max_value: float,
        bin_label: Callable[[float], str],
        single_label: Callable[[float], str]
    ) -> Tuple[NamedCount, ...]:
        """
        Count values into equal-width bins over [min_value, max_value].

        Args:
            values: Values to count (all within the range)
            min_value: Lower edge of the first bin
            max_value: Upper edge of the last bin (inclusive)
            bin_label: Labels a bin from its start edge
            single_label: Labels the single bin used when the range has zero or overflowing width

        Returns:
            Bins in ascending order
        """
        step = (max_value - min_value) / self.histogram_bins
        if not np.isfinite(step) or step <= 0:
            return (NamedCount(name=single_label(min_value), value=int(len(values))),)

        histogram: List[NamedCount] = []
        for i in range(self.histogram_bins):
            range_start = min_value + i * step
            if i == self.histogram_bins - 1:
                in_bin = (values >= range_start) & (values <= max_value)
            else:
                range_end = min_value + (i + 1) * step
                in_bin = (values >= range_start) & (values < range_end)
            histogram.append(NamedCount(name=bin_label(range_start), value=int(np.count_nonzero(in_bin))))

        return tuple(histogram)

    @staticmethod
    def _numeric_label(range_start: float) -> str:
        return f"{range_start:.{HISTOGRAM_LABEL_PRECISION}f}"

    @staticmethod
    def _date_label(range_start: float) -> str:
        return pd.Timestamp(range_start, unit="ms").strftime("%Y-%m-%d")

    def _truncate(self, value: str) -> str:
        if len(value) > self.label_max_length:
            return value[:self.label_max_length] + ELLIPSIS
        return value
