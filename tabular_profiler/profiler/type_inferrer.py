"""
Type Inferrer - Semantic Type Classification for Sampled Columns.

This module assigns one semantic type to each column from a bounded sample
of its raw string values. No schema hints are used: the type comes only
from how many values parse as numbers and as calendar dates.

Architecture:
    TypeInferrer evaluates an explicit priority-ordered rule list:
    1. numeric - more than 80% of values parse as numbers
    2. date    - more than 60% of values parse as dates
    3. string  - fallback, also used for an empty sample

    The first rule that holds wins, so a numeric column is never reported
    as a date even though loose date parsers accept many plain numbers.

Design Decisions:
    - Thresholds are strict (greater-than): exactly 80% numeric is not numeric
    - Only values longer than 5 characters that are not numbers are tried as
      dates, which keeps short codes and years out of the date count
    - BOOLEAN and UNKNOWN exist in ColumnType but no rule produces them
    - Parsed numbers and timestamps are kept on the result so the statistics
      step does not parse the sample a second time

Usage:
    inferrer = TypeInferrer()
    inference = inferrer.infer_column_type(["1", "2", "3.5"])
    inference.column_type  # ColumnType.NUMERIC
"""

import logging
import math
import re
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd

from tabular_profiler.core.constants import NUMERIC_THRESHOLD, DATE_THRESHOLD, DATE_MIN_LENGTH
from tabular_profiler.profiler.profile_result import ColumnType

logger = logging.getLogger(__name__)

# Signed decimal with optional fraction and exponent ("-1", "3.", ".5", "1e-3")
_NUMBER_PATTERN = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')

# A value must carry a full calendar date before pandas sees it; pandas
# fills a missing date part from today ("10:30:00", "March 5")
DATE_PATTERNS = [
    r'^\d{4}[-/.]\d{1,2}(?:[-/.]\d{1,2})?(?:$|[ T])',  # ISO date (2024-01-15, 2024/01)
    r'^\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4}(?:$|[ T])',     # US/EU date (01/15/2024)
]
_date_regexes = [re.compile(p) for p in DATE_PATTERNS]

# Month-name dates ("15 Jan 2024", "January 15, 2024") need a four-digit year
_MONTH_NAME = re.compile(r'\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?(?=\W|\d|$)', re.IGNORECASE)
_YEAR = re.compile(r'(?<!\d)\d{4}(?!\d)')

_EPOCH = pd.Timestamp(0)
_ONE_MILLISECOND = pd.Timedelta(milliseconds=1)


def parse_number(value: str) -> Optional[float]:
    """
    Parse a value as a finite number.

    Accepts signed decimals and exponent notation with surrounding
    whitespace. NaN/Infinity spellings, hexadecimal and values that
    overflow to infinity are not numbers.

    Returns:
        The parsed number, or None
    """
    text = value.strip()
    if not _NUMBER_PATTERN.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def is_date_like(text: str) -> bool:
    """Check that a value carries a calendar date, not only a time or period."""
    if any(regex.match(text) for regex in _date_regexes):
        return True
    return bool(_MONTH_NAME.search(text) and _YEAR.search(text))


def parse_date(value: str) -> Optional[int]:
    """
    Parse a value as a calendar date or date-time.

    Naive values are read as UTC; offsets are honoured. Values without a
    calendar date (time-only, quarters like "2024Q1") are not dates.

    Returns:
        Milliseconds since the Unix epoch, or None
    """
    text = value.strip()
    if not is_date_like(text):
        return None
    try:
        timestamp = pd.Timestamp(text)
        if pd.isna(timestamp):
            return None
        if timestamp.tzinfo is not None:
            timestamp = timestamp.tz_convert("UTC").tz_localize(None)
        return int((timestamp - _EPOCH) // _ONE_MILLISECOND)
    except (ValueError, TypeError, OverflowError):
        return None


@dataclass(frozen=True)
class TypeInference:
    """
    Classification result for one column sample.

    Attributes:
        column_type: Assigned semantic type
        sample_size: Number of non-empty values inspected
        numeric_values: Values that parsed as numbers, in sample order
        date_values: Millisecond timestamps of values that parsed as dates
    """
    column_type: ColumnType
    sample_size: int
    numeric_values: Tuple[float, ...] = field(default_factory=tuple)
    date_values: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def numeric_count(self) -> int:
        return len(self.numeric_values)

    @property
    def date_count(self) -> int:
        return len(self.date_values)

    @property
    def numeric_ratio(self) -> float:
        return self.numeric_count / self.sample_size if self.sample_size else 0.0

    @property
    def date_ratio(self) -> float:
        return self.date_count / self.sample_size if self.sample_size else 0.0


# A rule receives the parse counts and decides whether its type applies
TypeRule = Tuple[ColumnType, Callable[[TypeInference], bool]]


class TypeInferrer:
    """
    Heuristic type classification for sampled columns.

    Attributes:
        numeric_threshold: Numeric share a column must exceed to be numeric
        date_threshold: Date share a column must exceed to be a date
        date_min_length: Values must be longer than this to be tried as dates
        rules: Priority-ordered (type, predicate) pairs; STRING is the fallback

    Example:
        >>> inferrer = TypeInferrer()
        >>> inferrer.infer_column_type(["2024-01-15", "2024-02-01"]).column_type
        <ColumnType.DATE: 'date'>
        >>> inferrer.infer_column_type([]).column_type
        <ColumnType.STRING: 'string'>
    """

    def __init__(
        self,
        numeric_threshold: float = NUMERIC_THRESHOLD,
        date_threshold: float = DATE_THRESHOLD,
        date_min_length: int = DATE_MIN_LENGTH
    ):
        self.numeric_threshold = numeric_threshold
        self.date_threshold = date_threshold
        self.date_min_length = date_min_length
        self.rules: List[TypeRule] = [
            (ColumnType.NUMERIC, lambda counts: counts.numeric_ratio > self.numeric_threshold),
            (ColumnType.DATE, lambda counts: counts.date_ratio > self.date_threshold),
        ]

    def infer_column_type(self, values: Sequence[str], column_name: str = "") -> TypeInference:
        """
        Classify a column from its non-empty sampled values.

        Args:
            values: Non-empty raw values, in sample order
            column_name: Header name, used only for logging

        Returns:
            TypeInference with the assigned type and the parsed values
        """
        numeric_values = []
        date_values = []

        for value in values:
            number = parse_number(value)
            if number is not None:
                numeric_values.append(number)
                continue
            if len(value) > self.date_min_length:
                timestamp = parse_date(value)
                if timestamp is not None:
                    date_values.append(timestamp)

        counts = TypeInference(
            column_type=ColumnType.STRING,
            sample_size=len(values),
            numeric_values=tuple(numeric_values),
            date_values=tuple(date_values)
        )
        column_type = self._apply_rules(counts)

        logger.debug(
            f"Type inference for '{column_name}': {column_type.value} "
            f"(numeric={counts.numeric_count}, date={counts.date_count}, "
            f"sampled={counts.sample_size:,})"
        )

        return replace(counts, column_type=column_type)

    def _apply_rules(self, counts: TypeInference) -> ColumnType:
        """Return the type of the first rule that holds."""
        if counts.sample_size == 0:
            return ColumnType.STRING
        for column_type, predicate in self.rules:
            if predicate(counts):
                return column_type
        return ColumnType.STRING
