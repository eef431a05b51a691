"""
Exceptions raised by the profiler.

Every ingestion failure is terminal: the pipeline never retries and never
hands back a partially populated profile. Callers stop their workflow and
show the message as is.

Each exception carries a severity so callers can tell a broken setup
(FATAL, stop everything) from a bad input file (CRITICAL, skip the file).
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorSeverity(Enum):
    """How far an error should stop the caller."""
    FATAL = "fatal"              # configuration is unusable
    CRITICAL = "critical"        # this file cannot be profiled
    RECOVERABLE = "recoverable"
    WARNING = "warning"


class TabularProfilerException(Exception):
    """
    Root of the profiler's exceptions.

    Attributes:
        message: Text shown to the user
        severity: ErrorSeverity of the failure
        details: Structured context (file name, counts, delimiter, ...)
        original_exception: Lower-level exception this one wraps, if any

    Example:
        >>> try:
        ...     profile = profiler.profile(text, "sales.csv")
        ... except TabularProfilerException as e:
        ...     log_record = e.to_dict()
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.RECOVERABLE,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-ready form of the error.

        Returns:
            Mapping with type, message, severity, details and original_error
            (the wrapped exception's text, or None)
        """
        return {
            'type': type(self).__name__,
            'message': self.message,
            'severity': self.severity.value,
            'details': self.details,
            'original_error': None if self.original_exception is None else str(self.original_exception)
        }


# ============================================================================
# Configuration Errors (Fatal)
# ============================================================================

class ConfigError(TabularProfilerException):
    """
    Unusable profiler configuration.

    Raised for a missing, oversized or unparsable YAML file, unknown keys
    and values of the wrong type or out of range.

    Attributes:
        field: Name of the offending setting, when one is known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.FATAL,
            details={'field': field} if field else {}
        )
        self.field = field


# ============================================================================
# Profiling Errors (Critical)
# ============================================================================

class ProfilingError(TabularProfilerException):
    """
    Ingestion errors (critical - stop processing this file).

    Base class for every terminal outcome of the profiling pipeline
    other than a completed profile.

    Attributes:
        file_name (Optional[str]): Name of the file being profiled
    """

    def __init__(
        self,
        message: str,
        file_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize profiling error.

        Args:
            message: Error description
            file_name: Name of the file being profiled
            details: Additional context dictionary
            original_exception: Original exception if wrapping
        """
        merged = {'file_name': file_name}
        merged.update(details or {})
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            details=merged,
            original_exception=original_exception
        )
        self.file_name = file_name


class EncodingError(ProfilingError):
    """
    Input text contains the Unicode replacement character.

    The replacement character is what a UTF-8 decoder substitutes for
    undecodable bytes, so its presence means the file was not UTF-8.
    """

    def __init__(self, file_name: Optional[str] = None):
        super().__init__(
            "Encoding Error: The file contains invalid characters. "
            "Please ensure the file is UTF-8 encoded.",
            file_name
        )


class InsufficientDataError(ProfilingError):
    """
    Fewer than two non-blank lines (a header and at least one data row).

    Example:
        >>> raise InsufficientDataError(line_count=1, file_name="empty.csv")
    """

    def __init__(self, line_count: int = 0, file_name: Optional[str] = None, message: Optional[str] = None):
        super().__init__(
            message or "File is empty or contains insufficient data (less than 2 rows).",
            file_name,
            details={'line_count': line_count}
        )
        self.line_count = line_count


class ColumnDetectionError(ProfilingError):
    """Header line yielded no detectable fields."""

    def __init__(self, delimiter: str, file_name: Optional[str] = None):
        super().__init__(
            "Could not detect columns. Please check delimiters.",
            file_name,
            details={'delimiter': delimiter}
        )
        self.delimiter = delimiter


class StructuralIntegrityError(ProfilingError):
    """
    Too many sampled rows disagree with the header's field count.

    The message carries the malformed count, the sample size and the
    expected field count so a caller can diagnose delimiter or quoting
    problems.

    Example:
        >>> raise StructuralIntegrityError(
        ...     malformed_count=40,
        ...     sample_size=100,
        ...     expected_columns=3,
        ...     delimiter=","
        ... )
    """

    def __init__(
        self,
        malformed_count: int,
        sample_size: int,
        expected_columns: int,
        delimiter: str = ',',
        file_name: Optional[str] = None
    ):
        super().__init__(
            f"Data Integrity Error: {malformed_count} out of first {sample_size} rows have "
            f"inconsistent column counts. Expected {expected_columns} columns. "
            f"This is often caused by unquoted delimiters within text fields or mixed delimiters "
            f"(detected delimiter: {delimiter!r}).",
            file_name,
            details={
                'malformed_count': malformed_count,
                'sample_size': sample_size,
                'expected_columns': expected_columns,
                'delimiter': delimiter,
            }
        )
        self.malformed_count = malformed_count
        self.sample_size = sample_size
        self.expected_columns = expected_columns


class ProfilingFailedError(ProfilingError):
    """
    Any other unexpected failure during ingestion.

    Always wraps the exception that caused it.

    Example:
        >>> try:
        ...     open("missing.csv").read()
        ... except OSError as e:
        ...     raise ProfilingFailedError("Could not read file", "missing.csv", e) from e
    """

    def __init__(
        self,
        message: str,
        file_name: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        if original_exception is not None:
            message = f"{message}: {original_exception}"
        super().__init__(
            message,
            file_name,
            original_exception=original_exception
        )
