"""
JSON persistence for profiles.

Profiles are written in their camelCase wire format and read back into
an equal DatasetProfile. The encoder also accepts numpy and pandas
scalars, so aggregates computed with numpy never break serialization.
"""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from tabular_profiler.profiler.profile_result import BatchProfile, DatasetProfile


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder for numpy/pandas scalars and arrays; NaN and inf become null."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj) if np.isfinite(obj) else None
        if isinstance(obj, np.bool_):
            return bool(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (pd.Timestamp, datetime, date)):
            return obj.isoformat()
        return super().default(obj)


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """json.dumps with NumpyJSONEncoder, 2-space indent and unescaped non-ASCII."""
    kwargs.setdefault('cls', NumpyJSONEncoder)
    kwargs.setdefault('indent', 2)
    kwargs.setdefault('ensure_ascii', False)
    return json.dumps(obj, **kwargs)


def _write_json(data: Any, output_path: str) -> None:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(safe_json_dumps(data))


def save_profile_json(profile: DatasetProfile, output_path: str) -> None:
    """
    Write a profile to a JSON file, creating parent directories.

    Args:
        profile: Profile to persist
        output_path: Destination file
    """
    _write_json(profile.to_dict(), output_path)


def save_batch_json(batch: BatchProfile, output_path: str) -> None:
    """Write every profile of a batch, plus the primary file name, to one JSON file."""
    _write_json(batch.to_dict(), output_path)


def load_profile_json(input_path: str) -> DatasetProfile:
    """
    Read a profile written by save_profile_json.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON
        KeyError: If required profile fields are missing
    """
    with open(input_path, 'r', encoding='utf-8') as f:
        return DatasetProfile.from_dict(json.load(f))
