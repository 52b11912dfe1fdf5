from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

"""Filter models for the dataset explorer engine.

ColumnFilter is an accept-list of string-encoded values for one column.
FilterSet is the immutable collection edited by the dashboard (toggle a value,
remove a column, clear everything); every edit returns a new FilterSet so that
previous states can be kept for undo/redo.
"""

__all__ = [
    "ColumnFilter",
    "FilterSet",
]


@dataclass(frozen=True)
class ColumnFilter:
    """Accept-list for one column.

    Values within one filter combine with OR. An empty value set means
    "no filter" and the column is ignored by the predicate engine.
    """
    column: str
    values: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # list / set を渡されても frozenset に正規化
        if not isinstance(self.values, frozenset):
            object.__setattr__(self, "values", frozenset(self.values))

    @property
    def is_active(self) -> bool:
        return len(self.values) > 0


@dataclass(frozen=True)
class FilterSet:
    """Ordered, immutable set of column filters (at most one per column)."""
    filters: tuple[ColumnFilter, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.filters, tuple):
            object.__setattr__(self, "filters", tuple(self.filters))

    @staticmethod
    def from_mapping(mapping: dict[str, Iterable[str]]) -> FilterSet:
        """Build a FilterSet from ``{column: values}``; empty value lists are dropped."""
        return FilterSet(
            tuple(ColumnFilter(col, frozenset(vals)) for col, vals in mapping.items() if vals)
        )

    def __iter__(self) -> Iterator[ColumnFilter]:
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    def get(self, column: str) -> ColumnFilter | None:
        for f in self.filters:
            if f.column == column:
                return f
        return None

    def toggle(self, column: str, value: str) -> FilterSet:
        """Select ``value`` for ``column``, or deselect it if already selected.

        Deselecting the last value removes the column's filter entirely.
        """
        existing = self.get(column)
        if existing is None:
            return FilterSet(self.filters + (ColumnFilter(column, frozenset({value})),))
        if value in existing.values:
            remaining = existing.values - {value}
            if not remaining:
                return self.remove(column)
            updated = ColumnFilter(column, remaining)
        else:
            updated = ColumnFilter(column, existing.values | {value})
        return FilterSet(tuple(updated if f.column == column else f for f in self.filters))

    def remove(self, column: str) -> FilterSet:
        return FilterSet(tuple(f for f in self.filters if f.column != column))

    def clear(self) -> FilterSet:
        return FilterSet()

    def is_selected(self, column: str, value: str) -> bool:
        f = self.get(column)
        return f is not None and value in f.values

    def selected_count(self, column: str) -> int:
        f = self.get(column)
        return len(f.values) if f is not None else 0
