from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from ..models.dataset import Row
from ..models.filter_models import ColumnFilter

"""Row predicate engine.

filter_rows() keeps a row iff:
- for every active ColumnFilter, stringify(row[column]) is one of its values
  (filters AND across columns, values OR within one filter), and
- when the search term is non-empty, some field's string form contains the
  term, case-insensitively.

All string comparisons go through stringify(), which renders a missing value as
the NULL_SENTINEL text "null". A filter on a column absent from a row therefore
compares against "null" as well.

Also provides the value options listed by the filter picker and the two quick
presets (first N rows, drop incomplete rows).
"""

__all__ = [
    "NULL_SENTINEL",
    "stringify",
    "filter_rows",
    "row_matches",
    "ColumnValueOptions",
    "column_value_options",
    "take_first",
    "drop_incomplete_rows",
    "QuickPreset",
    "apply_preset",
]

logger = logging.getLogger(__name__)

NULL_SENTINEL = "null"

DEFAULT_VALUE_OPTIONS = 50
DEFAULT_TAKE_FIRST = 10

# これ以上の絶対値は指数表記
EXPONENT_FORM_MIN = 1e21


def stringify(value: Any) -> str:
    """Stable text form of a cell value used for filtering, search and grouping.

    None -> "null", booleans -> "true"/"false", integral floats drop ".0"
    (2.0 -> "2"), NaN -> "NaN", infinities -> "Infinity"/"-Infinity".
    Magnitudes of 1e21 and above, or below 1e-6, use exponent form
    ("1e+21", "1.5e-7"); everything else is positional ("0.00001").
    """
    if value is None:
        return NULL_SENTINEL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int) and abs(value) >= EXPONENT_FORM_MIN:
        value = float(value)
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < EXPONENT_FORM_MIN:
        return str(int(value))
    # repr は最短桁数の表現を返す
    text = repr(value)
    mantissa, sep, exp = text.partition("e")
    if not sep:
        return text
    exponent = int(exp)
    if -7 < exponent < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"


def _active_filters(filters: Iterable[ColumnFilter]) -> list[ColumnFilter]:
    return [f for f in filters if f.is_active]


def _passes_filters(row: Row, filters: Sequence[ColumnFilter]) -> bool:
    return all(stringify(row.get(f.column)) in f.values for f in filters)


def _passes_search(row: Row, needle: str) -> bool:
    # needle は呼び出し側で lower() 済み
    return any(needle in stringify(v).lower() for v in row.values())


def row_matches(row: Row, filters: Iterable[ColumnFilter], search_term: str = "") -> bool:
    """Evaluate the combined predicate against a single row."""
    active = _active_filters(filters)
    if not _passes_filters(row, active):
        return False
    return not search_term or _passes_search(row, search_term.lower())


def filter_rows(
    rows: Sequence[Row],
    filters: Iterable[ColumnFilter] = (),
    search_term: str = "",
) -> list[Row]:
    """Return the rows passing every active filter and the search term.

    Pure and order-preserving; input rows are not modified and the result is
    always a new list.
    """
    active = _active_filters(filters)
    if not active and not search_term:
        return list(rows)
    needle = search_term.lower()
    out = [
        row for row in rows
        if _passes_filters(row, active) and (not needle or _passes_search(row, needle))
    ]
    logger.debug(
        f"filter_rows: {len(rows)} -> {len(out)} rows (filters={len(active)} search={search_term!r})"
    )
    return out


@dataclass(frozen=True)
class ColumnValueOptions:
    """Selectable values of one column for the filter picker."""
    column: str
    values: list[str]  # sorted, truncated to the limit
    total: int  # distinct count before truncation

    @property
    def truncated(self) -> bool:
        return self.total > len(self.values)


def column_value_options(
    rows: Sequence[Row],
    column: str,
    limit: int = DEFAULT_VALUE_OPTIONS,
    *,
    include_missing: bool = False,
) -> ColumnValueOptions:
    """Sorted distinct string values of ``column``.

    Missing values are left out unless ``include_missing`` is set, in which
    case the NULL_SENTINEL is listed like any other value.
    """
    distinct: set[str] = set()
    for row in rows:
        value = row.get(column)
        if value is None and not include_missing:
            continue
        distinct.add(stringify(value))
    ordered = sorted(distinct)
    return ColumnValueOptions(column=column, values=ordered[:limit], total=len(ordered))


def take_first(rows: Sequence[Row], n: int = DEFAULT_TAKE_FIRST) -> list[Row]:
    """Quick preset: keep only the first ``n`` rows."""
    return list(rows[: max(0, n)])


def drop_incomplete_rows(rows: Sequence[Row]) -> list[Row]:
    """Quick preset: drop rows holding any None or empty-string field."""
    return [row for row in rows if all(v is not None and v != "" for v in row.values())]


class QuickPreset(str, Enum):
    """One-click narrowing applied on top of the filtered rows."""
    TOP_10 = "top_10"
    REMOVE_NULLS = "remove_nulls"


def apply_preset(rows: Sequence[Row], preset: QuickPreset | str) -> list[Row]:
    """Apply one quick preset; unknown preset ids raise ValueError."""
    preset = QuickPreset(preset)
    if preset is QuickPreset.TOP_10:
        return take_first(rows, DEFAULT_TAKE_FIRST)
    return drop_incomplete_rows(rows)
