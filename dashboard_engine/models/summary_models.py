from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Statistics result models for the dataset explorer engine.

These are plain data handed to presentation. They are rebuilt on every change of
the filtered row set and never persisted.
"""

__all__ = [
    "NumericColumnStats",
    "SummaryStatistics",
    "OverviewSeries",
    "UNDEFINED_AVERAGE",
]

# avg of a numeric column without any numeric value
UNDEFINED_AVERAGE = "NaN"


@dataclass(frozen=True)
class NumericColumnStats:
    """Descriptive statistics of one numeric column.

    ``avg`` is pre-formatted with two decimals ("2.00"). A column without any
    numeric value reports avg="NaN", min=max=None, sum=0, count=0.
    """
    avg: str
    min: float | int | None
    max: float | int | None
    sum: float | int
    count: int

    @property
    def is_defined(self) -> bool:
        return self.count > 0

    def to_dict(self) -> dict[str, Any]:
        return {"avg": self.avg, "min": self.min, "max": self.max, "sum": self.sum}


@dataclass(frozen=True)
class SummaryStatistics:
    """Per-column statistics plus dataset overview counts."""
    numeric: dict[str, NumericColumnStats] = field(default_factory=dict)
    categorical: dict[str, int] = field(default_factory=dict)  # column -> unique count
    total_rows: int = 0
    total_columns: int = 0

    @property
    def numeric_columns(self) -> int:
        return len(self.numeric)

    @property
    def categorical_columns(self) -> int:
        return len(self.categorical)

    @property
    def is_empty(self) -> bool:
        return self.total_rows == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_rows": self.total_rows,
            "total_columns": self.total_columns,
            "numeric_columns": self.numeric_columns,
            "categorical_columns": self.categorical_columns,
            "numeric": {col: s.to_dict() for col, s in self.numeric.items()},
            "categorical": dict(self.categorical),
        }


@dataclass(frozen=True)
class OverviewSeries:
    """Fixed overview charts shown next to the configurable chart."""
    categorical: list[dict[str, Any]] = field(default_factory=list)  # [{name, value}] x<=10
    pie: list[dict[str, Any]] = field(default_factory=list)  # categorical[:6]
    line: list[dict[str, Any]] = field(default_factory=list)  # [{index, <num col>...}] x<=20

    def to_dict(self) -> dict[str, Any]:
        return {"categorical": self.categorical, "pie": self.pie, "line": self.line}
