from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..models.column_type import ColumnType, is_number
from ..models.dataset import Row
from ..models.summary_models import UNDEFINED_AVERAGE, NumericColumnStats, SummaryStatistics
from .predicates import stringify
from .type_inference import infer_column_types

"""Statistics aggregator.

summarize() computes, for the given rows:
- NUMERIC columns: avg (two decimals, as text), min, max, sum over the values
  that are actually numbers (stray text / None / bool / NaN entries are dropped)
- TEXT columns: number of distinct stringified values, "null" included
UNKNOWN columns appear in neither map.
"""

__all__ = [
    "summarize",
    "numeric_column_stats",
    "unique_count",
    "format_average",
]

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def format_average(total: float, count: int) -> str:
    """avg = total / count with two decimals, ties rounded away from zero.

    "NaN" when count is 0 or the average is not finite (e.g. inf + -inf).
    """
    if count == 0:
        return UNDEFINED_AVERAGE
    avg = total / count
    if not math.isfinite(avg):
        return UNDEFINED_AVERAGE
    if abs(avg) >= 1e21:
        # 桁数が多すぎる値は固定小数点にしない
        return stringify(avg)
    # Decimal(float) は二進値そのままなので 0.125 -> "0.13"
    return str(Decimal(avg).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def numeric_column_stats(rows: Sequence[Row], column: str) -> NumericColumnStats:
    """Aggregate the numeric values of one column.

    Never raises: a column without numeric values yields avg="NaN",
    min=max=None, sum=0, count=0.
    """
    values: list[Any] = [row.get(column) for row in rows]
    numbers = [v for v in values if is_number(v)]
    if not numbers:
        return NumericColumnStats(avg=UNDEFINED_AVERAGE, min=None, max=None, sum=0, count=0)
    total = sum(numbers)
    return NumericColumnStats(
        avg=format_average(total, len(numbers)),
        min=min(numbers),
        max=max(numbers),
        sum=total,
        count=len(numbers),
    )


def unique_count(rows: Sequence[Row], column: str) -> int:
    """Cardinality of the stringified values of ``column`` (missing -> "null")."""
    return len({stringify(row.get(column)) for row in rows})


def summarize(
    rows: Sequence[Row],
    columns: Sequence[str],
    column_types: Mapping[str, ColumnType] | None = None,
) -> SummaryStatistics:
    """Compute numeric and categorical statistics for ``rows``.

    ``column_types`` lets the caller reuse a classification computed once per
    dataset; when omitted the columns are classified from ``rows``.

    An empty row set returns an empty structure (total_rows == 0) which the
    caller treats as its no-data state.
    """
    if not rows:
        return SummaryStatistics(total_rows=0, total_columns=len(columns))

    types = column_types if column_types is not None else infer_column_types(rows, columns)
    numeric: dict[str, NumericColumnStats] = {}
    categorical: dict[str, int] = {}
    for col in columns:
        ctype = types.get(col, ColumnType.UNKNOWN)
        if ctype is ColumnType.NUMERIC:
            stats = numeric_column_stats(rows, col)
            if not stats.is_defined:
                logger.debug(f"summarize: numeric column '{col}' has no numeric values")
            numeric[col] = stats
        elif ctype is ColumnType.TEXT:
            categorical[col] = unique_count(rows, col)

    return SummaryStatistics(
        numeric=numeric,
        categorical=categorical,
        total_rows=len(rows),
        total_columns=len(columns),
    )
