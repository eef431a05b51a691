"""
Structural Integrity Validator.

Checks that the leading data rows of a file split into the same number of
fields as the header. A few ragged rows (trailing optional columns, a
stray quote) are tolerated; a high ragged-row rate almost always means the
delimiter was detected wrongly or the file is corrupt, and profiling such
a file would produce a misleading result, so the whole file is rejected.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Optional

from tabular_profiler.core.constants import VALIDATION_SAMPLE_SIZE, MAX_MALFORMED_RATIO
from tabular_profiler.core.exceptions import StructuralIntegrityError
from tabular_profiler.loaders.csv_loader import split_line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrityReport:
    """Outcome of a structural integrity check that passed."""
    expected_columns: int
    sample_size: int
    malformed_count: int

    @property
    def malformed_ratio(self) -> float:
        return self.malformed_count / self.sample_size if self.sample_size else 0.0


class StructuralIntegrityValidator:
    """
    Reject files whose sampled rows disagree with the header field count.

    Attributes:
        sample_size: Data rows inspected after the header
        max_malformed_ratio: Largest tolerated malformed share (inclusive)

    Example:
        >>> validator = StructuralIntegrityValidator()
        >>> validator.validate(["1,2", "3,4"], expected_columns=2, delimiter=",").malformed_count
        0
    """

    def __init__(
        self,
        sample_size: int = VALIDATION_SAMPLE_SIZE,
        max_malformed_ratio: float = MAX_MALFORMED_RATIO
    ):
        self.sample_size = sample_size
        self.max_malformed_ratio = max_malformed_ratio

    def validate(
        self,
        data_lines: Sequence[str],
        expected_columns: int,
        delimiter: str,
        file_name: Optional[str] = None
    ) -> IntegrityReport:
        """
        Tokenize up to sample_size data rows and count malformed ones.

        Args:
            data_lines: Non-blank lines following the header
            expected_columns: Header field count
            delimiter: Detected delimiter
            file_name: Name of the file, for error context

        Returns:
            IntegrityReport describing the sample

        Raises:
            StructuralIntegrityError: If malformed > max_malformed_ratio * sample size
        """
        sample = data_lines[:self.sample_size]
        malformed_count = sum(
            1 for line in sample
            if len(split_line(line, delimiter)) != expected_columns
        )

        if malformed_count > self.max_malformed_ratio * len(sample):
            raise StructuralIntegrityError(
                malformed_count=malformed_count,
                sample_size=len(sample),
                expected_columns=expected_columns,
                delimiter=delimiter,
                file_name=file_name
            )

        if malformed_count:
            logger.warning(
                f"{malformed_count} of {len(sample)} sampled rows have a field count "
                f"other than {expected_columns}; continuing"
            )

        return IntegrityReport(
            expected_columns=expected_columns,
            sample_size=len(sample),
            malformed_count=malformed_count
        )
