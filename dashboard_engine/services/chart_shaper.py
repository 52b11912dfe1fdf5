from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.chart_config import ChartConfiguration, ChartKind
from ..models.column_type import ColumnType, is_number
from ..models.dataset import Row
from ..models.summary_models import OverviewSeries
from .predicates import stringify
from .type_inference import infer_column_types

"""Chart data shaper.

Turns a row set plus a ChartConfiguration into the minimal series structure a
charting surface needs:

- bar / line / area: the first MAX_SERIES_POINTS rows, each projected to
  ``{x_column: x, y_column: y}``. A non-numeric y is replaced by the row's
  0-based position so the series stays plottable.
- pie: rows grouped by the string form of x in first-seen order, summing y when
  it is numeric and counting 1 per row otherwise, as ``[{"name", "value"}]``.
  Only the first MAX_PIE_GROUPS groups (by first appearance, not by size) are
  kept.

Unset axes default to the first TEXT column (else the first column) for x and
the first NUMERIC column (else the second column) for y. An empty row set
shapes to ``[]``; rendering a placeholder is the caller's job.
"""

__all__ = [
    "MAX_SERIES_POINTS",
    "MAX_PIE_GROUPS",
    "FALLBACK_Y_KEY",
    "default_axes",
    "resolve_chart_configuration",
    "shape_chart_data",
    "overview_series",
]

logger = logging.getLogger(__name__)

MAX_SERIES_POINTS = 50
MAX_PIE_GROUPS = 10

# y key used when no y column can be chosen at all (single-column tables)
FALLBACK_Y_KEY = "value"

OVERVIEW_CATEGORY_LIMIT = 10
OVERVIEW_PIE_LIMIT = 6
OVERVIEW_LINE_ROWS = 20


def default_axes(
    columns: Sequence[str], column_types: Mapping[str, ColumnType]
) -> tuple[str | None, str | None]:
    """Default (x, y) columns for a table."""
    x = next((c for c in columns if column_types.get(c) is ColumnType.TEXT), None)
    if x is None and columns:
        x = columns[0]
    y = next((c for c in columns if column_types.get(c) is ColumnType.NUMERIC), None)
    if y is None and len(columns) > 1:
        y = columns[1]
    return x, y


def resolve_chart_configuration(
    config: ChartConfiguration,
    columns: Sequence[str],
    column_types: Mapping[str, ColumnType],
) -> ChartConfiguration:
    """Fill unset axes of ``config`` with the defaults for ``columns``."""
    if config.x_column and config.y_column:
        return config
    default_x, default_y = default_axes(columns, column_types)
    return config.with_axes(config.x_column or default_x, config.y_column or default_y)


def _shape_cartesian(rows: Sequence[Row], x: str, y: str | None, limit: int) -> list[dict[str, Any]]:
    y_key = y if y is not None else FALLBACK_Y_KEY
    points: list[dict[str, Any]] = []
    for index, row in enumerate(rows[:limit]):
        y_raw = row.get(y) if y is not None else None
        # x と y が同じ列の場合は y が優先される
        points.append({x: row.get(x), y_key: y_raw if is_number(y_raw) else index})
    return points


def _shape_pie(rows: Sequence[Row], x: str, y: str | None, limit: int) -> list[dict[str, Any]]:
    totals: dict[str, float | int] = {}
    for row in rows:
        key = stringify(row.get(x))
        y_raw = row.get(y) if y is not None else None
        amount = y_raw if is_number(y_raw) else 1
        totals[key] = totals.get(key, 0) + amount
    # dict は挿入順 = 初出順
    return [{"name": name, "value": value} for name, value in list(totals.items())[:limit]]


def shape_chart_data(
    rows: Sequence[Row],
    config: ChartConfiguration,
    columns: Sequence[str] | None = None,
    column_types: Mapping[str, ColumnType] | None = None,
    *,
    max_points: int = MAX_SERIES_POINTS,
    max_groups: int = MAX_PIE_GROUPS,
) -> list[dict[str, Any]]:
    """Shape ``rows`` into series data for ``config.kind``.

    ``columns`` defaults to the first row's keys and ``column_types`` to the
    classification of ``rows``; both only matter when an axis is unset.
    """
    if not rows:
        return []
    if columns is None:
        columns = list(rows[0].keys())
    if column_types is None:
        column_types = infer_column_types(rows, columns)
    resolved = resolve_chart_configuration(config, columns, column_types)
    x, y = resolved.x_column, resolved.y_column
    if x is None:
        return []

    if resolved.kind is ChartKind.PIE:
        series = _shape_pie(rows, x, y, max_groups)
    else:
        series = _shape_cartesian(rows, x, y, max_points)
    logger.debug(f"shape_chart_data: kind={resolved.kind.value} x={x} y={y} points={len(series)}")
    return series


def overview_series(
    rows: Sequence[Row],
    columns: Sequence[str],
    column_types: Mapping[str, ColumnType] | None = None,
) -> OverviewSeries:
    """Fixed overview charts of a row set.

    - categorical: row counts of the first TEXT column, first 10 groups
    - pie: the first 6 of those groups
    - line: the first 20 rows of all NUMERIC columns with a 1-based ``index``;
      empty unless there are at least two numeric columns
    """
    if not rows:
        return OverviewSeries()
    types = column_types if column_types is not None else infer_column_types(rows, columns)
    text_cols = [c for c in columns if types.get(c) is ColumnType.TEXT]
    numeric_cols = [c for c in columns if types.get(c) is ColumnType.NUMERIC]

    categorical: list[dict[str, Any]] = []
    if text_cols:
        categorical = _shape_pie(rows, text_cols[0], None, OVERVIEW_CATEGORY_LIMIT)

    line: list[dict[str, Any]] = []
    if len(numeric_cols) >= 2:
        for index, row in enumerate(rows[:OVERVIEW_LINE_ROWS], start=1):
            point: dict[str, Any] = {"index": index}
            for col in numeric_cols:
                point[col] = row.get(col)
            line.append(point)

    return OverviewSeries(
        categorical=categorical,
        pie=categorical[:OVERVIEW_PIE_LIMIT],
        line=line,
    )
