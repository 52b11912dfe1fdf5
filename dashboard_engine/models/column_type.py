from __future__ import annotations

import math
from enum import Enum
from typing import Any

"""Value kind and column type enums for the dataset explorer engine.

A cell value is classified once into a closed ValueKind so that type inference,
aggregation and chart shaping all agree on what counts as a number.
"""

__all__ = [
    "ValueKind",
    "ColumnType",
    "value_kind",
    "is_number",
]


class ValueKind(Enum):
    """Runtime kind of a single cell value.

    - NUMBER: int or float (bool excluded)
    - TEXT: str
    - NULL: None
    - OTHER: anything else (bool, dates, ...)
    """
    NUMBER = "number"
    TEXT = "text"
    NULL = "null"
    OTHER = "other"


class ColumnType(Enum):
    """Column classification derived from one representative value.

    - NUMERIC: representative value is a number
    - TEXT: representative value is a string
    - UNKNOWN: anything else, including a missing value
    """
    NUMERIC = "numeric"
    TEXT = "text"
    UNKNOWN = "unknown"

    @staticmethod
    def from_value_kind(kind: ValueKind) -> ColumnType:
        if kind is ValueKind.NUMBER:
            return ColumnType.NUMERIC
        if kind is ValueKind.TEXT:
            return ColumnType.TEXT
        return ColumnType.UNKNOWN


def value_kind(value: Any) -> ValueKind:
    """Classify a cell value into its ValueKind."""
    if value is None:
        return ValueKind.NULL
    # bool は int のサブクラスなので先に除外
    if isinstance(value, bool):
        return ValueKind.OTHER
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    return ValueKind.OTHER


def is_number(value: Any) -> bool:
    """True for finite-or-infinite numbers usable in aggregation (NaN excluded)."""
    if value_kind(value) is not ValueKind.NUMBER:
        return False
    return not (isinstance(value, float) and math.isnan(value))
