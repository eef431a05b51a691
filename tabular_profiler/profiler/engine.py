"""
Profiling engine: turns delimited text into a DatasetProfile.

One call runs the whole pipeline over a bounded prefix of the input:

    encoding check -> line split -> dialect detection -> header tokenizing
    -> structural integrity check -> sampling -> per-column type inference
    and statistics -> assembly

Each call is stateless and atomic. It either returns a complete profile or
raises exactly one ProfilingError; nothing partial is ever handed back.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from tabular_profiler.core.config import ProfilerConfig
from tabular_profiler.core.constants import (
    REPLACEMENT_CHAR,
    MIN_NON_BLANK_LINES,
    DELIMITED_FILE_SUFFIX,
)
from tabular_profiler.core.exceptions import (
    ProfilingError,
    EncodingError,
    InsufficientDataError,
    ColumnDetectionError,
    ProfilingFailedError,
)
from tabular_profiler.loaders.csv_loader import CSVLoader, detect_dialect, split_line, split_lines
from tabular_profiler.profiler.integrity import StructuralIntegrityValidator
from tabular_profiler.profiler.profile_result import BatchProfile, ColumnInfo, DatasetProfile
from tabular_profiler.profiler.statistics_calculator import StatisticsCalculator
from tabular_profiler.profiler.type_inferrer import TypeInferrer

logger = logging.getLogger(__name__)


@dataclass
class ColumnSample:
    """Non-empty values observed for one column within the sample window."""
    index: int
    name: str
    values: List[str] = field(default_factory=list)


class DataProfiler:
    """
    Profile delimited text files without schema hints.

    Attributes:
        config: Bounds and thresholds for this profiler
        integrity_validator: Structural integrity check
        type_inferrer: Column type classifier
        statistics_calculator: Aggregate builder

    Example:
        >>> profiler = DataProfiler()
        >>> profile = profiler.profile("a,b\\n1,x\\n2,y\\n3,x\\n", "data.csv")
        >>> profile.row_count
        3
    """

    def __init__(self, config: Optional[ProfilerConfig] = None):
        """
        Initialize the profiler.

        Args:
            config: Optional configuration (defaults reproduce standard behaviour)
        """
        self.config = config or ProfilerConfig()
        self.integrity_validator = StructuralIntegrityValidator(
            sample_size=self.config.validation_sample_size,
            max_malformed_ratio=self.config.max_malformed_ratio
        )
        self.type_inferrer = TypeInferrer(
            numeric_threshold=self.config.numeric_threshold,
            date_threshold=self.config.date_threshold,
            date_min_length=self.config.date_min_length
        )
        self.statistics_calculator = StatisticsCalculator(
            histogram_bins=self.config.histogram_bins,
            top_values_limit=self.config.top_values_limit,
            label_max_length=self.config.label_max_length
        )

    def profile(self, file_content: str, file_name: str) -> DatasetProfile:
        """
        Profile the text content of one delimited file.

        Args:
            file_content: Whole file decoded as text
            file_name: Name recorded on the profile

        Returns:
            Completed DatasetProfile

        Raises:
            EncodingError: Content contains U+FFFD
            InsufficientDataError: Fewer than 2 non-blank lines
            ColumnDetectionError: Header yields no fields
            StructuralIntegrityError: Too many malformed rows in the validation sample
            ProfilingFailedError: Any other failure, wrapping its cause
        """
        start_time = time.time()
        try:
            profile = self._build_profile(file_content, file_name)
        except ProfilingError:
            raise
        except Exception as e:
            logger.error(f"Profiling failed for {file_name}: {e}")
            raise ProfilingFailedError("Failed to profile file", file_name, e) from e

        logger.info(
            f"Profiled {file_name}: {profile.row_count:,} rows, {len(profile.columns)} columns "
            f"in {time.time() - start_time:.2f}s"
        )
        return profile

    def profile_file(self, file_path: str) -> DatasetProfile:
        """
        Read a file from disk and profile it.

        Bytes that are not valid UTF-8 surface as U+FFFD and are rejected
        with EncodingError.

        Raises:
            ProfilingFailedError: If the file cannot be read
        """
        loader = CSVLoader(file_path)
        try:
            text = loader.load()
        except OSError as e:
            raise ProfilingFailedError("Could not read file", loader.file_name, e) from e
        return self.profile(text, loader.file_name)

    def profile_files(self, file_paths: Iterable[str]) -> BatchProfile:
        """
        Profile several files, stopping at the first error.

        Only files ending in ".csv" are profiled; others are skipped. The
        largest file by size becomes the primary profile (the first one
        wins a tie).

        Raises:
            InsufficientDataError: If no delimited file is given
            ProfilingError: The first error raised by any file
        """
        csv_paths = [p for p in file_paths if str(p).lower().endswith(DELIMITED_FILE_SUFFIX)]
        if not csv_paths:
            raise InsufficientDataError(
                message="No CSV file found. Please provide at least one structured dataset file."
            )

        profiles = []
        primary_index = 0
        largest_size = -1

        for path in csv_paths:
            loader = CSVLoader(path)
            try:
                size = loader.get_file_size()
            except OSError as e:
                raise ProfilingFailedError("Could not read file", loader.file_name, e) from e
            profiles.append(self.profile_file(path))

            if size > largest_size:
                largest_size = size
                primary_index = len(profiles) - 1

        logger.info(f"Profiled {len(profiles)} files; primary dataset: {profiles[primary_index].file_name}")
        return BatchProfile(profiles=tuple(profiles), primary_index=primary_index)

    def _build_profile(self, file_content: str, file_name: str) -> DatasetProfile:
        """Run the pipeline; every terminal condition raises."""
        if REPLACEMENT_CHAR in file_content:
            raise EncodingError(file_name)

        lines = split_lines(file_content)
        if len(lines) < MIN_NON_BLANK_LINES:
            raise InsufficientDataError(line_count=len(lines), file_name=file_name)

        dialect = detect_dialect(lines[0])
        headers = split_line(lines[0], dialect.delimiter)
        if len(headers) < 1:
            raise ColumnDetectionError(dialect.delimiter, file_name)

        data_lines = lines[1:]
        self.integrity_validator.validate(data_lines, len(headers), dialect.delimiter, file_name)

        preview = self._build_preview(headers, data_lines[:self.config.preview_rows], dialect.delimiter)

        window = data_lines[:self.config.sample_window]
        samples = self._collect_samples(headers, window, dialect.delimiter)
        columns = self._profile_columns(samples, len(window))

        return DatasetProfile(
            row_count=len(data_lines),
            columns=tuple(columns),
            preview=tuple(preview),
            file_name=file_name,
            delimiter=dialect.delimiter
        )

    @staticmethod
    def _build_preview(headers: Sequence[str], lines: Sequence[str], delimiter: str) -> List[Dict[str, Optional[str]]]:
        """Re-tokenize leading rows into mappings keyed by header name."""
        preview = []
        for line in lines:
            values = split_line(line, delimiter)
            row = {}
            for i, header in enumerate(headers):
                row[header] = values[i] if i < len(values) else None
            preview.append(row)
        return preview

    @staticmethod
    def _collect_samples(headers: Sequence[str], window: Sequence[str], delimiter: str) -> List[ColumnSample]:
        """
        Collect non-empty values per column in one pass over the window.

        A row contributes one value to every column at once, so this scan
        is sequential; each column sample is complete before any column
        is classified.
        """
        samples = [ColumnSample(index=i, name=header) for i, header in enumerate(headers)]
        for line in window:
            values = split_line(line, delimiter)
            for sample in samples:
                if sample.index < len(values) and values[sample.index] != '':
                    sample.values.append(values[sample.index])
        return samples

    def _profile_columns(self, samples: List[ColumnSample], window_size: int) -> List[ColumnInfo]:
        """Classify and aggregate each column, in parallel when configured."""
        max_workers = self.config.max_workers
        if max_workers and max_workers > 1 and len(samples) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                return list(executor.map(lambda s: self._profile_column(s, window_size), samples))
        return [self._profile_column(sample, window_size) for sample in samples]

    def _profile_column(self, sample: ColumnSample, window_size: int) -> ColumnInfo:
        """Build the ColumnInfo of one column sample."""
        inference = self.type_inferrer.infer_column_type(sample.values, sample.name)
        stats = self.statistics_calculator.calculate(sample.values, inference)
        return ColumnInfo(
            name=sample.name,
            type=inference.column_type,
            missing=window_size - len(sample.values),
            unique=len(set(sample.values)),
            example=sample.values[0] if sample.values else None,
            stats=stats
        )


def profile(file_content: str, file_name: str, config: Optional[ProfilerConfig] = None) -> DatasetProfile:
    """Profile delimited text with a one-off DataProfiler."""
    return DataProfiler(config).profile(file_content, file_name)


def profile_file(file_path: str, config: Optional[ProfilerConfig] = None) -> DatasetProfile:
    """Profile a delimited file on disk with a one-off DataProfiler."""
    return DataProfiler(config).profile_file(file_path)


def profile_files(file_paths: Iterable[str], config: Optional[ProfilerConfig] = None) -> BatchProfile:
    """Profile several delimited files with a one-off DataProfiler."""
    return DataProfiler(config).profile_files(file_paths)
