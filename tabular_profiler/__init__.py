"""
Tabular Profiler - schema recovery and statistical profiling for delimited files.

Given a delimited text file of unknown dialect, the profiler detects the
delimiter, validates structural integrity, infers a semantic type per
column and computes chart-ready statistics, all without schema hints.

Key Components:
- DataProfiler: Runs the whole pipeline and returns a DatasetProfile
- ProfilerConfig: Tunable bounds and thresholds
- DatasetProfile / ColumnInfo / ColumnStats: Immutable, serializable results
"""

__version__ = "0.1.0"

from tabular_profiler.core.config import ProfilerConfig
from tabular_profiler.core.exceptions import (
    TabularProfilerException,
    ConfigError,
    ProfilingError,
    EncodingError,
    InsufficientDataError,
    ColumnDetectionError,
    StructuralIntegrityError,
    ProfilingFailedError,
)
from tabular_profiler.profiler.engine import DataProfiler, profile, profile_file, profile_files
from tabular_profiler.profiler.profile_result import (
    BatchProfile,
    ColumnInfo,
    ColumnStats,
    ColumnType,
    DatasetProfile,
)

__all__ = [
    '__version__',
    'ProfilerConfig',
    'TabularProfilerException',
    'ConfigError',
    'ProfilingError',
    'EncodingError',
    'InsufficientDataError',
    'ColumnDetectionError',
    'StructuralIntegrityError',
    'ProfilingFailedError',
    'DataProfiler',
    'profile',
    'profile_file',
    'profile_files',
    'BatchProfile',
    'ColumnInfo',
    'ColumnStats',
    'ColumnType',
    'DatasetProfile',
]
