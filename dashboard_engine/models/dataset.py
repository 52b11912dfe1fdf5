from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Dataset model: one loaded table.

The column list is fixed once at load time (first row's key order). Rows keep
name-keyed access at the boundary; a key absent from a row reads as None.
"""

__all__ = [
    "Row",
    "Dataset",
]

Row = dict[str, Any]


@dataclass(frozen=True)
class Dataset:
    """Loaded table (name, ordered columns, rows)."""
    name: str
    columns: list[str]
    rows: list[Row]

    @staticmethod
    def from_rows(name: str, rows: list[Row]) -> Dataset:
        """Derive the column list from the first row's keys."""
        columns = list(rows[0].keys()) if rows else []
        return Dataset(name=name, columns=columns, rows=rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def __len__(self) -> int:
        return len(self.rows)
