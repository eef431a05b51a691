"""Delimited text loading, dialect detection and quote-aware line splitting."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from tabular_profiler.core.constants import (
    CANDIDATE_DELIMITERS,
    DEFAULT_DELIMITER,
    QUOTE_CHAR,
)

logger = logging.getLogger(__name__)

# Record separators: CRLF or LF (a lone CR stays inside the line)
_LINE_BREAK = re.compile(r'\r\n|\n')


@dataclass(frozen=True)
class Dialect:
    """Field delimiter governing how every line of one file splits."""
    delimiter: str = DEFAULT_DELIMITER


def detect_delimiter(header_line: str) -> str:
    """
    Pick the field delimiter by counting candidates in the header line.

    The count is deliberately naive (not quote-aware). The candidate with
    the highest count wins; ties keep the earlier candidate, and a header
    containing none of them falls back to a comma.

    Args:
        header_line: First non-blank line of the file

    Returns:
        Detected delimiter character
    """
    best_delimiter = DEFAULT_DELIMITER
    max_count = 0

    for candidate in CANDIDATE_DELIMITERS:
        count = header_line.count(candidate)
        if count > max_count:
            max_count = count
            best_delimiter = candidate

    return best_delimiter


def detect_dialect(header_line: str) -> Dialect:
    """Detect the dialect of a file from its header line."""
    dialect = Dialect(delimiter=detect_delimiter(header_line))
    if dialect.delimiter != DEFAULT_DELIMITER:
        logger.info(f"Auto-detected delimiter: {repr(dialect.delimiter)}")
    return dialect


def _clean_field(raw: str) -> str:
    """Trim whitespace, then drop one leading and one trailing quote."""
    value = raw.strip()
    if value.startswith(QUOTE_CHAR):
        value = value[1:]
    if value.endswith(QUOTE_CHAR):
        value = value[:-1]
    return value


def split_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """
    Split one line into fields, honouring double-quoted sections.

    A delimiter separates fields only when the number of quote characters
    to its right is even, so a delimiter inside a matched quote pair never
    splits. Doubled quotes inside a field are kept as-is (no de-escaping).
    Lines with unbalanced quotes come back with a field count that differs
    from the header; the integrity check reports those as malformed.

    Args:
        line: One record of the file
        delimiter: Detected delimiter

    Returns:
        List of trimmed, unquoted field values

    Example:
        >>> split_line('"Smith, John",34', ',')
        ['Smith, John', '34']
    """
    quotes_remaining = line.count(QUOTE_CHAR)
    fields = []
    start = 0

    for position, char in enumerate(line):
        if char == QUOTE_CHAR:
            quotes_remaining -= 1
        elif char == delimiter and quotes_remaining % 2 == 0:
            fields.append(_clean_field(line[start:position]))
            start = position + 1

    fields.append(_clean_field(line[start:]))
    return fields


def split_lines(text: str) -> List[str]:
    """Split text into records, dropping blank and whitespace-only lines."""
    return [line for line in _LINE_BREAK.split(text) if line.strip() != '']


def read_text(file_path: str) -> str:
    """
    Read a file as UTF-8 text.

    Undecodable bytes become U+FFFD instead of raising, so the encoding
    check of the profiler sees them. A leading byte order mark is dropped.

    Raises:
        OSError: If the file cannot be read
    """
    with open(file_path, 'rb') as f:
        raw = f.read()
    return raw.decode('utf-8-sig', errors='replace')


class CSVLoader:
    """Loader for CSV and delimited text files."""

    def __init__(self, file_path: str):
        """
        Initialize CSVLoader.

        Args:
            file_path: Path to the delimited text file
        """
        self.file_path = Path(file_path)
        self._text: Optional[str] = None

    @property
    def file_name(self) -> str:
        """Base name of the file, used as the profile's file name."""
        return self.file_path.name

    def load(self) -> str:
        """
        Load the whole file into memory as text.

        Returns:
            Decoded file content
        """
        if self._text is None:
            self._text = read_text(str(self.file_path))
            logger.debug(f"Loaded {len(self._text):,} characters from {self.file_path}")
        return self._text

    def get_file_size(self) -> int:
        """Get file size in bytes."""
        return self.file_path.stat().st_size

