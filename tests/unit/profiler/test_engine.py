"""
Tests for the profiling engine.

Runs the full pipeline on in-memory text and on files, covering the
terminal errors, sampling bounds and multi-file selection.
"""

import logging

import pytest

from tabular_profiler import profile, profile_file, profile_files
from tabular_profiler.core.config import ProfilerConfig
from tabular_profiler.core.exceptions import (
    ColumnDetectionError,
    EncodingError,
    InsufficientDataError,
    ProfilingError,
    ProfilingFailedError,
    StructuralIntegrityError,
)
from tabular_profiler.profiler.engine import DataProfiler
from tabular_profiler.profiler.profile_result import ColumnType, NamedCount


SIMPLE_CSV = "a,b\n1,x\n2,y\n3,x\n"


@pytest.fixture
def profiler():
    return DataProfiler()


class TestEndToEnd:
    """Test a complete profile of a small file."""

    def test_simple_file(self, profiler):
        """Test row count, types, counts and aggregates."""
        result = profiler.profile(SIMPLE_CSV, "simple.csv")

        assert result.file_name == "simple.csv"
        assert result.row_count == 3
        assert result.delimiter == ","
        assert result.column_names == ["a", "b"]

        a = result.get_column("a")
        assert a.type == ColumnType.NUMERIC
        assert a.missing == 0
        assert a.unique == 3
        assert a.example == "1"
        assert a.stats.min == 1
        assert a.stats.max == 3
        assert a.stats.mean == pytest.approx(2.0)
        assert (a.stats.quantiles.q1, a.stats.quantiles.median, a.stats.quantiles.q3) == (1, 2, 3)
        assert len(a.stats.histogram) == 10
        assert sum(b.value for b in a.stats.histogram) == 3

        b = result.get_column("b")
        assert b.type == ColumnType.STRING
        assert b.unique == 2
        assert b.stats.top_values == (NamedCount("x", 2), NamedCount("y", 1))
        assert b.stats.histogram is None

    def test_preview_rows(self, profiler):
        """Test preview rows are keyed by header name."""
        result = profiler.profile(SIMPLE_CSV, "simple.csv")

        assert list(result.preview) == [
            {"a": "1", "b": "x"},
            {"a": "2", "b": "y"},
            {"a": "3", "b": "x"},
        ]

    def test_semicolon_file(self, profiler):
        """Test a semicolon file with decimal commas in quotes."""
        content = 'city;amount\n"Paris";"1,5"\nLyon;2\nNice;3\n'

        result = profiler.profile(content, "fr.csv")

        assert result.delimiter == ";"
        assert result.preview[0] == {"city": "Paris", "amount": "1,5"}

    def test_date_column(self, profiler):
        """Test a date column gets timestamp aggregates."""
        content = "day\n2024-01-01\n2024-01-05\n2024-01-11\n"

        column = profiler.profile(content, "days.csv").columns[0]

        assert column.type == ColumnType.DATE
        assert column.stats.histogram[0].name == "2024-01-01"
        assert column.stats.mean is None

    def test_time_column_is_string(self, profiler):
        """Test clock times profile as strings with their raw frequencies."""
        column = profiler.profile("t\n10:30:00\n11:00:00\n12:15:00\n", "t.csv").columns[0]

        assert column.type == ColumnType.STRING
        assert column.stats.histogram is None
        assert column.stats.top_values[0].name == "10:30:00"

    def test_crlf_and_blank_lines(self, profiler):
        """Test CRLF endings and blank lines are ignored."""
        content = "a,b\r\n\r\n1,x\r\n   \r\n2,y\r\n"

        result = profiler.profile(content, "crlf.csv")

        assert result.row_count == 2
        assert result.preview[-1] == {"a": "2", "b": "y"}

    def test_duplicate_headers_kept_by_position(self, profiler):
        """Test duplicate header names give separate columns."""
        result = profiler.profile("a,a\n1,x\n2,y\n", "dup.csv")

        assert [c.type for c in result.columns] == [ColumnType.NUMERIC, ColumnType.STRING]
        assert result.get_column("a") is result.columns[0]

    def test_empty_column(self, profiler):
        """Test a column with no values."""
        result = profiler.profile("a,b\n1,\n2,\n", "empty.csv")

        b = result.get_column("b")
        assert b.type == ColumnType.STRING
        assert b.missing == 2
        assert b.unique == 0
        assert b.example is None
        assert b.stats.top_values == ()

    def test_success_is_logged(self, profiler, caplog):
        """Test an info record is written for a finished profile."""
        with caplog.at_level(logging.INFO, logger="tabular_profiler"):
            profiler.profile(SIMPLE_CSV, "simple.csv")

        assert "Profiled simple.csv" in caplog.text


class TestSamplingBounds:
    """Test the bounded windows of a profile."""

    def test_row_count_covers_whole_file(self, profiler):
        """Test row count is not limited by the sample window."""
        content = "n\n" + "\n".join(str(i) for i in range(2500)) + "\n"

        result = profiler.profile(content, "big.csv")

        assert result.row_count == 2500
        assert result.columns[0].stats.max == 1999
        assert result.columns[0].unique == 2000

    def test_missing_plus_present_equals_window(self, profiler):
        """Test missing counts are relative to the sample window."""
        rows = ["1,x" if i % 2 else "2," for i in range(2400)]
        rows[150:160] = ["3"] * 10  # short rows after the validation sample
        content = "a,b\n" + "\n".join(rows) + "\n"

        result = profiler.profile(content, "holes.csv")

        b = result.get_column("b")
        present = sum(1 for i, row in enumerate(rows[:2000]) if row.endswith("x"))
        assert b.missing + present == 2000
        assert b.missing == 2000 - present

    def test_preview_limited(self, profiler):
        """Test the preview holds the first 50 data rows."""
        content = "n\n" + "\n".join(str(i) for i in range(60)) + "\n"

        result = profiler.profile(content, "rows.csv")

        assert len(result.preview) == 50
        assert result.preview[0] == {"n": "0"}
        assert result.preview[-1] == {"n": "49"}

    def test_short_row_in_preview(self, profiler):
        """Test fields missing from a short row appear as None."""
        rows = ["1,2,3"] * 9 + ["4,5"]
        content = "a,b,c\n" + "\n".join(rows)

        result = profiler.profile(content, "short.csv")

        assert result.preview[-1] == {"a": "4", "b": "5", "c": None}

    def test_configured_bounds(self):
        """Test windows come from the configuration."""
        config = ProfilerConfig(sample_window=10, preview_rows=3)
        content = "n\n" + "\n".join(str(i) for i in range(100))

        result = DataProfiler(config).profile(content, "rows.csv")

        assert len(result.preview) == 3
        assert result.columns[0].stats.max == 9
        assert result.row_count == 100


class TestTerminalErrors:
    """Test that each failure raises exactly one profiling error."""

    def test_replacement_character(self, profiler):
        """Test content holding U+FFFD is rejected."""
        with pytest.raises(EncodingError) as exc_info:
            profiler.profile("name\ncaf\ufffd\n", "bad.csv")

        assert exc_info.value.file_name == "bad.csv"

    @pytest.mark.parametrize("content", ["", "a,b\n", "\n  \n\r\n", "a,b\n\n   \n"])
    def test_insufficient_data(self, profiler, content):
        """Test fewer than two non-blank lines are rejected."""
        with pytest.raises(InsufficientDataError):
            profiler.profile(content, "tiny.csv")

    def test_structural_integrity(self, profiler):
        """Test a ragged file is rejected with its counts."""
        rows = ["1,2,3"] * 7 + ["1"] * 3
        content = "a,b,c\n" + "\n".join(rows)

        with pytest.raises(StructuralIntegrityError) as exc_info:
            profiler.profile(content, "ragged.csv")

        assert exc_info.value.malformed_count == 3
        assert exc_info.value.sample_size == 10

    def test_column_detection(self, profiler, monkeypatch):
        """Test a header that yields no fields is rejected."""
        monkeypatch.setattr("tabular_profiler.profiler.engine.split_line", lambda line, delimiter: [])

        with pytest.raises(ColumnDetectionError):
            profiler.profile(SIMPLE_CSV, "simple.csv")

    def test_unexpected_failure_is_wrapped(self, profiler, monkeypatch):
        """Test unexpected exceptions surface as ProfilingFailedError."""
        def explode(values, inference):
            raise RuntimeError("boom")

        monkeypatch.setattr(profiler.statistics_calculator, "calculate", explode)

        with pytest.raises(ProfilingFailedError) as exc_info:
            profiler.profile(SIMPLE_CSV, "simple.csv")

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "boom" in exc_info.value.message

    def test_profiler_is_reusable_after_error(self, profiler):
        """Test a failed call leaves no state behind."""
        with pytest.raises(ProfilingError):
            profiler.profile("only header\n", "x.csv")

        assert profiler.profile(SIMPLE_CSV, "simple.csv").row_count == 3


class TestConcurrency:
    """Test per-column work on a thread pool."""

    def test_threaded_matches_sequential(self):
        """Test results do not depend on max_workers."""
        content = "a,b,c,d\n" + "\n".join(f"{i},{i % 3},name{i},2024-01-{i % 28 + 1:02d}" for i in range(300))

        sequential = DataProfiler().profile(content, "data.csv")
        threaded = DataProfiler(ProfilerConfig(max_workers=4)).profile(content, "data.csv")

        assert threaded.to_dict() == sequential.to_dict()

    def test_threaded_wraps_column_errors(self, monkeypatch):
        """Test a failure inside a worker is still wrapped."""
        profiler = DataProfiler(ProfilerConfig(max_workers=2))

        def explode(values, column_name=""):
            raise ValueError("bad column")

        monkeypatch.setattr(profiler.type_inferrer, "infer_column_type", explode)

        with pytest.raises(ProfilingFailedError):
            profiler.profile(SIMPLE_CSV, "simple.csv")


class TestFiles:
    """Test profiling files on disk."""

    def test_profile_file(self, write_csv):
        """Test the base name is recorded as the file name."""
        path = write_csv("simple.csv", SIMPLE_CSV)

        result = profile_file(path)

        assert result.file_name == "simple.csv"
        assert result.row_count == 3

    def test_profile_file_invalid_utf8(self, tmp_path):
        """Test invalid UTF-8 bytes are rejected as an encoding error."""
        path = tmp_path / "latin1.csv"
        path.write_bytes("name\ncafé\nthé\n".encode("latin-1"))

        with pytest.raises(EncodingError):
            profile_file(str(path))

    def test_profile_file_missing(self, tmp_path):
        """Test unreadable files surface as ProfilingFailedError."""
        with pytest.raises(ProfilingFailedError) as exc_info:
            profile_file(str(tmp_path / "missing.csv"))

        assert isinstance(exc_info.value.original_exception, OSError)

    def test_profile_function(self):
        """Test the module-level convenience function."""
        assert profile(SIMPLE_CSV, "simple.csv").row_count == 3


class TestMultipleFiles:
    """Test multi-file profiling and primary selection."""

    def test_largest_file_is_primary(self, write_csv):
        """Test the primary profile is the largest file."""
        small = write_csv("small.csv", SIMPLE_CSV)
        large = write_csv("large.csv", "n\n" + "\n".join(str(i) for i in range(100)))
        notes = write_csv("notes.txt", "not a dataset\nat all\n")

        result = profile_files([small, notes, large])

        assert [p.file_name for p in result.profiles] == ["small.csv", "large.csv"]
        assert result.primary.file_name == "large.csv"
        assert result.to_dict()["primary"] == "large.csv"

    def test_tie_keeps_first_file(self, write_csv):
        """Test equal sizes keep the first file as primary."""
        first = write_csv("first.csv", SIMPLE_CSV)
        second = write_csv("second.csv", SIMPLE_CSV)

        assert profile_files([first, second]).primary.file_name == "first.csv"

    def test_extension_is_case_insensitive(self, write_csv):
        """Test upper-case extensions are accepted."""
        path = write_csv("UPPER.CSV", SIMPLE_CSV)

        assert profile_files([path]).primary.file_name == "UPPER.CSV"

    def test_no_csv_file(self, write_csv):
        """Test an input without delimited files is rejected."""
        notes = write_csv("notes.txt", SIMPLE_CSV)

        with pytest.raises(InsufficientDataError) as exc_info:
            profile_files([notes])

        assert "No CSV file found" in exc_info.value.message

    def test_first_error_stops_batch(self, write_csv):
        """Test the first failing file aborts the batch."""
        good = write_csv("good.csv", SIMPLE_CSV)
        bad = write_csv("bad.csv", "header only\n")

        with pytest.raises(InsufficientDataError) as exc_info:
            profile_files([good, bad])

        assert exc_info.value.file_name == "bad.csv"
