"""
Tabular Profiler Constants.

This module defines all magic numbers, thresholds and defaults used
throughout the profiling pipeline. Centralizing these values keeps the
heuristics in one place and lets tests target the exact boundaries.
"""

# ============================================================================
# Dialect Detection Constants
# ============================================================================

# Candidate field delimiters, in tie-break order (comma wins ties)
CANDIDATE_DELIMITERS: tuple = (',', ';', '\t', '|')

# Delimiter used when no candidate occurs in the header line
DEFAULT_DELIMITER: str = ','

# The single quote character honoured by the tokenizer
QUOTE_CHAR: str = '"'

# Character inserted by UTF-8 decoders for undecodable bytes
REPLACEMENT_CHAR: str = '\ufffd'


# ============================================================================
# Structural Integrity Constants
# ============================================================================

# Number of data rows (after the header) checked for field-count agreement
VALIDATION_SAMPLE_SIZE: int = 100

# Maximum tolerated share of malformed rows in the validation sample
# A file is rejected when malformed > ratio * sample size (strict)
MAX_MALFORMED_RATIO: float = 0.2

# Minimum number of non-blank lines (header + one data row)
MIN_NON_BLANK_LINES: int = 2


# ============================================================================
# Sampling Constants
# ============================================================================

# Number of leading data rows used for type inference and statistics
SAMPLE_WINDOW: int = 2_000

# Number of leading data rows materialized into the preview
PREVIEW_ROWS: int = 50


# ============================================================================
# Type Inference Constants
# ============================================================================

# Share of sampled values that must parse as numbers (strict >)
NUMERIC_THRESHOLD: float = 0.8

# Share of sampled values that must parse as dates (strict >)
DATE_THRESHOLD: float = 0.6

# Values must be longer than this to be tried as dates
DATE_MIN_LENGTH: int = 5


# ============================================================================
# Aggregate Constants
# ============================================================================

# Number of equal-width histogram bins for numeric and date columns
HISTOGRAM_BINS: int = 10

# Number of most frequent values reported for string columns
TOP_VALUES_LIMIT: int = 20

# Display labels longer than this are truncated
LABEL_MAX_LENGTH: int = 15

# Marker appended to truncated labels
ELLIPSIS: str = '...'

# Decimal places in numeric histogram labels
HISTOGRAM_LABEL_PRECISION: int = 1


# ============================================================================
# Configuration Security Limits
# ============================================================================

# Maximum YAML configuration file size (1MB)
MAX_CONFIG_FILE_SIZE: int = 1024 * 1024


# ============================================================================
# Logging Constants
# ============================================================================

# Default log message format
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Log date format
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


# ============================================================================
# Export Constants
# ============================================================================

# Prefix for exported preview files
EXPORT_FILE_PREFIX: str = "processed_"

# File suffix accepted by batch profiling
DELIMITED_FILE_SUFFIX: str = ".csv"
