"""
Output path templates for the CLI.

A template may contain these placeholders:

- ``{date}``      2025-11-22
- ``{time}``      14-30-45
- ``{timestamp}`` 20251122_143045
- ``{datetime}``  2025-11-22_14-30-45
- ``{file_name}`` profiled file name without extension, made filesystem safe
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from tabular_profiler.core.logging_config import get_logger

logger = get_logger(__name__)

# Placeholder -> strftime format of the run timestamp
TIME_PATTERNS = {
    'date': '%Y-%m-%d',
    'time': '%H-%M-%S',
    'timestamp': '%Y%m%d_%H%M%S',
    'datetime': '%Y-%m-%d_%H-%M-%S',
}

_PLACEHOLDER = re.compile(r'\{(\w+)\}')
_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\s]')
_UNDERSCORE_RUNS = re.compile(r'_+')


class PathPatternExpander:
    """
    Fill placeholders in output path templates.

    Every expansion made by one expander uses the same run timestamp, so
    the JSON and CSV outputs of one run carry matching names.

    Example:
        >>> expander = PathPatternExpander(run_timestamp=datetime(2025, 11, 22, 14, 30, 45))
        >>> expander.expand('profiles/{file_name}_{date}.json', {'file_name': 'sales 2024.csv'})
        'profiles/sales_2024_2025-11-22.json'
    """

    KNOWN_PATTERNS = set(TIME_PATTERNS) | {'file_name'}

    MAX_FILENAME_LENGTH = 200

    def __init__(self, run_timestamp: Optional[datetime] = None):
        self._run_timestamp = run_timestamp

    @property
    def run_timestamp(self) -> datetime:
        """Timestamp shared by all expansions, fixed on first use."""
        if self._run_timestamp is None:
            self._run_timestamp = datetime.now()
        return self._run_timestamp

    def expand(self, path_template: str, context: Optional[Dict[str, str]] = None) -> str:
        """
        Replace known placeholders and create the parent directory.

        Unknown placeholders, and ``{file_name}`` without a file name in
        the context, are left in place with a warning.

        Args:
            path_template: Output path, possibly with placeholders
            context: Optional values; only ``file_name`` is used

        Returns:
            The expanded path (an empty or None template is returned as is)
        """
        if not path_template:
            return path_template

        values = {name: self.run_timestamp.strftime(fmt) for name, fmt in TIME_PATTERNS.items()}
        if context and context.get('file_name'):
            values['file_name'] = self._sanitize_filename(Path(context['file_name']).stem)

        expanded = _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), path_template)

        leftover = sorted(set(_PLACEHOLDER.findall(expanded)))
        if leftover:
            logger.warning(f"Unexpanded pattern(s) in {path_template!r}: {', '.join(leftover)}")

        self._ensure_parent(expanded)
        return expanded

    def _sanitize_filename(self, name: str) -> str:
        """
        Make a name safe as a single path component.

        Example:
            >>> PathPatternExpander()._sanitize_filename('My Data / Report (2024)')
            'My_Data_Report_(2024)'
        """
        safe = _UNDERSCORE_RUNS.sub('_', _UNSAFE_CHARS.sub('_', name)).strip('_')
        if len(safe) > self.MAX_FILENAME_LENGTH:
            safe = safe[:self.MAX_FILENAME_LENGTH]
            logger.warning(f"File name truncated to {self.MAX_FILENAME_LENGTH} characters: {safe}")
        return safe

    @staticmethod
    def _ensure_parent(path: str) -> None:
        parent = Path(path).parent
        if str(parent) == '.':
            return
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # The write that follows reports the failure
            logger.warning(f"Could not create directory {parent}: {e}")
