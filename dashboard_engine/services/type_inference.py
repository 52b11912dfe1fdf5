from __future__ import annotations

from collections.abc import Sequence

from ..models.column_type import ColumnType, value_kind
from ..models.dataset import Row

"""Column type inference.

A column is classified from the value in the first row only. Later rows are not
scanned and a missing first value is not skipped, so a column whose first value
is None is UNKNOWN even when every later row holds a number. Callers must not
expect mixed-type columns to be detected.
"""

__all__ = [
    "infer_column_type",
    "infer_column_types",
    "numeric_columns",
    "text_columns",
]


def infer_column_type(rows: Sequence[Row], column: str) -> ColumnType:
    """Classify ``column`` from ``rows[0][column]``.

    An empty row set is the caller's "no data" state; UNKNOWN is returned
    rather than raising.
    """
    if not rows:
        return ColumnType.UNKNOWN
    return ColumnType.from_value_kind(value_kind(rows[0].get(column)))


def infer_column_types(rows: Sequence[Row], columns: Sequence[str]) -> dict[str, ColumnType]:
    """Classify every column, preserving column order."""
    return {col: infer_column_type(rows, col) for col in columns}


def numeric_columns(rows: Sequence[Row], columns: Sequence[str]) -> list[str]:
    return [c for c, t in infer_column_types(rows, columns).items() if t is ColumnType.NUMERIC]


def text_columns(rows: Sequence[Row], columns: Sequence[str]) -> list[str]:
    return [c for c, t in infer_column_types(rows, columns).items() if t is ColumnType.TEXT]
