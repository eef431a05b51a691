"""
Data structures for storing profiling results.

Contains the immutable dataset profile handed back to callers. Every
structure is plain data: it serializes to a dictionary keyed with the
camelCase wire names expected by downstream consumers and can be rebuilt
from that dictionary verbatim.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional, Tuple


class ColumnType(Enum):
    """
    Semantic type assigned to a column.

    BOOLEAN and UNKNOWN are reserved: the classifier never assigns them,
    but persisted profiles may carry them and they round-trip unchanged.
    """
    NUMERIC = "numeric"
    STRING = "string"
    DATE = "date"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NamedCount:
    """One chart point: a label and the number of values it covers."""
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NamedCount":
        return cls(name=data["name"], value=data["value"])


@dataclass(frozen=True)
class Quantiles:
    """Lower-index quartiles of a numeric sample."""
    q1: float
    median: float
    q3: float

    def to_dict(self) -> Dict[str, Any]:
        return {"q1": self.q1, "median": self.median, "q3": self.q3}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Quantiles":
        return cls(q1=data["q1"], median=data["median"], q3=data["q3"])


@dataclass(frozen=True)
class ColumnStats:
    """
    Type-conditioned aggregate bundle for one column.

    Only the fields relevant to the column's type are populated:

    - numeric: min, max, mean, quantiles, histogram
    - date: min, max (millisecond timestamps), histogram
    - string: top_values
    - boolean/unknown: nothing

    Attributes:
        min: Smallest value (number or millisecond timestamp)
        max: Largest value (number or millisecond timestamp)
        mean: Arithmetic mean (numeric only)
        quantiles: q1/median/q3 (numeric only)
        histogram: Equal-width bins, in ascending order
        top_values: Most frequent values, most frequent first
    """
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    quantiles: Optional[Quantiles] = None
    histogram: Optional[Tuple[NamedCount, ...]] = None
    top_values: Optional[Tuple[NamedCount, ...]] = None

    def is_empty(self) -> bool:
        """True when no aggregate was computed."""
        return all(
            getattr(self, name) is None
            for name in ("min", "max", "mean", "quantiles", "histogram", "top_values")
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation, omitting absent aggregates."""
        result: Dict[str, Any] = {}
        if self.histogram is not None:
            result["histogram"] = [b.to_dict() for b in self.histogram]
        if self.top_values is not None:
            result["topValues"] = [t.to_dict() for t in self.top_values]
        if self.min is not None:
            result["min"] = self.min
        if self.max is not None:
            result["max"] = self.max
        if self.mean is not None:
            result["mean"] = self.mean
        if self.quantiles is not None:
            result["quantiles"] = self.quantiles.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ColumnStats":
        """Rebuild from a dictionary produced by to_dict()."""
        if not data:
            return cls()
        histogram = data.get("histogram")
        top_values = data.get("topValues")
        quantiles = data.get("quantiles")
        return cls(
            min=data.get("min"),
            max=data.get("max"),
            mean=data.get("mean"),
            quantiles=Quantiles.from_dict(quantiles) if quantiles is not None else None,
            histogram=tuple(NamedCount.from_dict(b) for b in histogram) if histogram is not None else None,
            top_values=tuple(NamedCount.from_dict(t) for t in top_values) if top_values is not None else None,
        )


@dataclass(frozen=True)
class ColumnInfo:
    """
    Profiling result for one column, identified by position.

    Attributes:
        name: Header text (duplicates allowed)
        type: Assigned semantic type
        missing: Sampled rows where the value was absent or empty
        unique: Distinct values within the sample
        example: First non-empty sampled value, or None
        stats: Type-conditioned aggregates
    """
    name: str
    type: ColumnType
    missing: int
    unique: int
    example: Optional[str] = None
    stats: ColumnStats = field(default_factory=ColumnStats)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "type": self.type.value,
            "missing": self.missing,
            "unique": self.unique,
            "example": self.example,
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnInfo":
        """Rebuild from a dictionary produced by to_dict()."""
        return cls(
            name=data["name"],
            type=ColumnType(data["type"]),
            missing=data["missing"],
            unique=data["unique"],
            example=data.get("example"),
            stats=ColumnStats.from_dict(data.get("stats")),
        )


@dataclass(frozen=True)
class DatasetProfile:
    """
    Complete profile of one ingested file.

    Attributes:
        row_count: Total data rows in the file (not bounded by the sample)
        columns: One ColumnInfo per header position
        preview: Leading data rows as mappings keyed by header name; a
            field missing from a short row maps to None
        file_name: Name of the profiled file
        delimiter: Detected field delimiter
    """
    row_count: int
    columns: Tuple[ColumnInfo, ...]
    preview: Tuple[Dict[str, Optional[str]], ...]
    file_name: str
    delimiter: str = ","

    @property
    def column_names(self) -> List[str]:
        """Header names in column order."""
        return [column.name for column in self.columns]

    def get_column(self, name: str) -> ColumnInfo:
        """
        Return the first column with the given header name.

        Raises:
            KeyError: If no column has that name
        """
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "rowCount": self.row_count,
            "columns": [c.to_dict() for c in self.columns],
            "preview": [dict(row) for row in self.preview],
            "fileName": self.file_name,
            "delimiter": self.delimiter,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DatasetProfile":
        """Rebuild from a dictionary produced by to_dict()."""
        return cls(
            row_count=data["rowCount"],
            columns=tuple(ColumnInfo.from_dict(c) for c in data["columns"]),
            preview=tuple(dict(row) for row in data.get("preview", [])),
            file_name=data["fileName"],
            delimiter=data.get("delimiter", ","),
        )


@dataclass(frozen=True)
class BatchProfile:
    """
    Profiles of several files ingested together.

    Attributes:
        profiles: One profile per delimited file, in input order
        primary_index: Position of the largest file in profiles
    """
    profiles: Tuple[DatasetProfile, ...]
    primary_index: int = 0

    @property
    def primary(self) -> DatasetProfile:
        """Profile of the largest input file."""
        return self.profiles[self.primary_index]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "primary": self.primary.file_name,
            "profiles": [p.to_dict() for p in self.profiles],
        }
