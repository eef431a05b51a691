"""
Preview export to delimited text.

The export always uses a comma and quotes every field: the header line
lists the column names, then each preview row lists its values in column
order with embedded double quotes doubled. Missing values export as empty
strings.
"""

import logging
from pathlib import Path
from typing import Optional

from tabular_profiler.core.constants import EXPORT_FILE_PREFIX
from tabular_profiler.profiler.profile_result import DatasetProfile

logger = logging.getLogger(__name__)


def _quote(value: Optional[str]) -> str:
    text = '' if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def export_preview_csv(profile: DatasetProfile) -> str:
    """
    Render the preview rows of a profile as CSV text.

    Header names are emitted unquoted, as given. Lines are joined with
    a newline and there is no trailing newline.

    Args:
        profile: Profile whose preview is exported

    Returns:
        CSV text, or an empty string when the preview is empty
    """
    if not profile.preview:
        return ''

    headers = profile.column_names
    csv_rows = [','.join(headers)]
    for row in profile.preview:
        csv_rows.append(','.join(_quote(row.get(header)) for header in headers))
    return '\n'.join(csv_rows)


def default_export_name(profile: DatasetProfile) -> str:
    """File name used when exporting a profile's preview."""
    return f"{EXPORT_FILE_PREFIX}{profile.file_name}"


def write_preview_csv(profile: DatasetProfile, output_path: Optional[str] = None) -> Optional[Path]:
    """
    Write the preview export to disk.

    Args:
        profile: Profile whose preview is exported
        output_path: Destination file; defaults to processed_<file name>
            in the working directory

    Returns:
        Path written, or None when the preview is empty
    """
    csv_text = export_preview_csv(profile)
    if not csv_text:
        logger.warning(f"No preview rows to export for {profile.file_name}")
        return None

    path = Path(output_path or default_export_name(profile))
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(csv_text)
    logger.info(f"Exported {len(profile.preview)} preview rows to {path}")
    return path
