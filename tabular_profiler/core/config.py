"""Profiler configuration parsing and validation."""

import os
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from tabular_profiler.core.exceptions import ConfigError
from tabular_profiler.core.constants import (
    VALIDATION_SAMPLE_SIZE,
    MAX_MALFORMED_RATIO,
    SAMPLE_WINDOW,
    PREVIEW_ROWS,
    NUMERIC_THRESHOLD,
    DATE_THRESHOLD,
    DATE_MIN_LENGTH,
    HISTOGRAM_BINS,
    TOP_VALUES_LIMIT,
    LABEL_MAX_LENGTH,
    MAX_CONFIG_FILE_SIZE,
)


# Fields holding a share of rows, validated to lie within [0, 1]
_RATIO_FIELDS = {"max_malformed_ratio", "numeric_threshold", "date_threshold"}

# Fields allowed to be zero
_NON_NEGATIVE_FIELDS = {"date_min_length"}


@dataclass(frozen=True)
class ProfilerConfig:
    """
    Tunable bounds and thresholds for one profiling run.

    The defaults reproduce the standard behaviour; override them through
    YAML or a mapping when a caller needs a larger sample or preview.

    Attributes:
        validation_sample_size: Data rows checked for structural integrity
        max_malformed_ratio: Tolerated malformed share of the validation sample
        sample_window: Data rows used for type inference and statistics
        preview_rows: Data rows materialized into the preview
        numeric_threshold: Numeric share needed to classify a column as numeric
        date_threshold: Date share needed to classify a column as date
        date_min_length: Values must be longer than this to be tried as dates
        histogram_bins: Equal-width bins for numeric and date histograms
        top_values_limit: Most frequent values reported for string columns
        label_max_length: Longest display label before truncation
        max_workers: Threads for per-column work (None or 1 = sequential)
    """
    validation_sample_size: int = VALIDATION_SAMPLE_SIZE
    max_malformed_ratio: float = MAX_MALFORMED_RATIO
    sample_window: int = SAMPLE_WINDOW
    preview_rows: int = PREVIEW_ROWS
    numeric_threshold: float = NUMERIC_THRESHOLD
    date_threshold: float = DATE_THRESHOLD
    date_min_length: int = DATE_MIN_LENGTH
    histogram_bins: int = HISTOGRAM_BINS
    top_values_limit: int = TOP_VALUES_LIMIT
    label_max_length: int = LABEL_MAX_LENGTH
    max_workers: Optional[int] = None

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "max_workers":
                if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 1):
                    raise ConfigError("max_workers must be a positive integer or null", field=f.name)
            elif f.name in _RATIO_FIELDS:
                if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
                    raise ConfigError(f"{f.name} must be a number between 0 and 1, got {value!r}", field=f.name)
            else:
                minimum = 0 if f.name in _NON_NEGATIVE_FIELDS else 1
                if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                    raise ConfigError(
                        f"{f.name} must be an integer >= {minimum}, got {value!r}",
                        field=f.name
                    )

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> "ProfilerConfig":
        """
        Build a configuration from a mapping of field overrides.

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        if config_dict is None:
            return cls()
        if not isinstance(config_dict, dict):
            raise ConfigError("Profiler configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration key(s): {', '.join(unknown)}. "
                f"Known keys: {', '.join(sorted(known))}",
                field=unknown[0]
            )
        return cls(**config_dict)

    @classmethod
    def from_yaml(cls, config_path: str) -> "ProfilerConfig":
        """
        Load configuration from a YAML file.

        The file holds a top-level ``profiler`` mapping; an empty file or
        an empty mapping yields the defaults.

        Raises:
            ConfigError: If the file is missing, too large or invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        file_size = os.path.getsize(config_file)
        if file_size > MAX_CONFIG_FILE_SIZE:
            raise ConfigError(
                f"Configuration file too large: {file_size:,} bytes. "
                f"Maximum allowed: {MAX_CONFIG_FILE_SIZE:,} bytes"
            )

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML file: {str(e)}")
        except UnicodeDecodeError as e:
            raise ConfigError(f"Invalid file encoding (expected UTF-8): {str(e)}")

        if raw_config is None:
            return cls()
        if not isinstance(raw_config, dict) or "profiler" not in raw_config:
            raise ConfigError("Configuration must have a 'profiler' key", field="profiler")

        return cls.from_dict(raw_config["profiler"] or {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
