from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config.loader import LimitsConfig
from ..logging.init import timed_stage
from ..models.chart_config import ChartConfiguration
from ..models.column_type import ColumnType
from ..models.dataset import Dataset, Row
from ..models.filter_models import FilterSet
from ..models.summary_models import OverviewSeries, SummaryStatistics
from .chart_shaper import overview_series, resolve_chart_configuration, shape_chart_data
from .history import History
from .predicates import ColumnValueOptions, QuickPreset, apply_preset, column_value_options, filter_rows
from .statistics import summarize
from .type_inference import infer_column_types

"""Dashboard session: the in-process owner of one loaded dataset.

The session holds the only mutable state (raw rows, filters, search term,
quick presets, chart configuration, undo/redo stacks) and drives the stateless
services:

    raw rows --infer (once)--> column types
    raw rows --filter_rows(filters, search)--> apply_preset(...)--> filtered rows
    filtered rows --summarize--> statistics
    filtered rows --shape_chart_data(chart)--> series
    filtered rows --overview_series--> overview

Recomputation happens in view(); callers that debounce input only need to call
view() for the last state they want rendered.
"""

__all__ = [
    "DashboardView",
    "DashboardSession",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """Everything presentation needs for one render."""
    has_data: bool
    total_rows: int
    filtered_rows: list[Row] = field(default_factory=list)
    statistics: SummaryStatistics = field(default_factory=SummaryStatistics)
    chart: ChartConfiguration = field(default_factory=ChartConfiguration)
    series: list[dict[str, Any]] = field(default_factory=list)
    overview: OverviewSeries = field(default_factory=OverviewSeries)

    @property
    def filtered_count(self) -> int:
        return len(self.filtered_rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_data": self.has_data,
            "rows": {"filtered": self.filtered_count, "total": self.total_rows},
            "statistics": self.statistics.to_dict(),
            "chart": self.chart.to_dict(),
            "series": self.series,
            "overview": self.overview.to_dict(),
        }


class DashboardSession:
    """Filter / search / chart state over one Dataset, with undo/redo.

    Quick presets narrow the rows left by the filters and the search term.
    They are applied in order and dropped whenever the filters or the search
    term change, since they act on one particular filtered result.
    """

    def __init__(
        self,
        dataset: Dataset,
        chart: ChartConfiguration | None = None,
        limits: LimitsConfig | None = None,
    ) -> None:
        self.dataset = dataset
        self.limits = limits or LimitsConfig()
        # 型推定はデータセットごとに一度だけ
        self.column_types: dict[str, ColumnType] = (
            infer_column_types(dataset.rows, dataset.columns) if dataset.rows else {}
        )
        self._filters: History[FilterSet] = History(FilterSet())
        self._chart: History[ChartConfiguration] = History(chart or ChartConfiguration())
        self.search_term = ""
        self.presets: tuple[QuickPreset, ...] = ()
        type_labels = {c: t.value for c, t in self.column_types.items()}
        logger.debug(f"session: dataset={dataset.name} rows={len(dataset.rows)} types={type_labels}")

    # ---- state ---------------------------------------------------------
    @property
    def has_data(self) -> bool:
        return not self.dataset.is_empty

    @property
    def filters(self) -> FilterSet:
        return self._filters.current

    @property
    def chart(self) -> ChartConfiguration:
        return self._chart.current

    def _push_filters(self, filters: FilterSet) -> FilterSet:
        self.presets = ()
        return self._filters.push(filters)

    def set_filters(self, filters: FilterSet) -> FilterSet:
        return self._push_filters(filters)

    def toggle_filter_value(self, column: str, value: str) -> FilterSet:
        return self._push_filters(self.filters.toggle(column, value))

    def remove_filter(self, column: str) -> FilterSet:
        return self._push_filters(self.filters.remove(column))

    def clear_filters(self) -> FilterSet:
        """Drop every filter, the search term and the presets."""
        self.search_term = ""
        return self._push_filters(self.filters.clear())

    def set_search(self, term: str) -> None:
        if term != self.search_term:
            self.presets = ()
        self.search_term = term

    def apply_preset(self, preset: QuickPreset | str) -> tuple[QuickPreset, ...]:
        """Stack a quick preset on top of the current filtered rows."""
        self.presets = (*self.presets, QuickPreset(preset))
        return self.presets

    def set_chart(self, chart: ChartConfiguration) -> ChartConfiguration:
        return self._chart.push(chart)

    def undo_filters(self) -> FilterSet | None:
        self.presets = ()
        return self._filters.undo()

    def redo_filters(self) -> FilterSet | None:
        self.presets = ()
        return self._filters.redo()

    def undo_chart(self) -> ChartConfiguration | None:
        return self._chart.undo()

    def redo_chart(self) -> ChartConfiguration | None:
        return self._chart.redo()

    # ---- derived -------------------------------------------------------
    def value_options(self, column: str) -> ColumnValueOptions:
        """Filter picker values for ``column`` over the raw rows."""
        return column_value_options(self.dataset.rows, column, limit=self.limits.value_options)

    def filtered_rows(self) -> list[Row]:
        rows = filter_rows(self.dataset.rows, self.filters, self.search_term)
        for preset in self.presets:
            rows = apply_preset(rows, preset)
        return rows

    def view(self) -> DashboardView:
        """Recompute filtered rows, statistics and chart series."""
        if not self.has_data:
            return DashboardView(has_data=False, total_rows=0, chart=self.chart)

        columns = self.dataset.columns
        with timed_stage(logger, "view.filter"):
            rows = self.filtered_rows()
        with timed_stage(logger, "view.summarize"):
            stats = summarize(rows, columns, self.column_types)
        with timed_stage(logger, "view.shape"):
            chart = resolve_chart_configuration(self.chart, columns, self.column_types)
            series = shape_chart_data(
                rows,
                chart,
                columns,
                self.column_types,
                max_points=self.limits.series_points,
                max_groups=self.limits.pie_groups,
            )
            overview = overview_series(rows, columns, self.column_types)
        return DashboardView(
            has_data=True,
            total_rows=len(self.dataset.rows),
            filtered_rows=rows,
            statistics=stats,
            chart=chart,
            series=series,
            overview=overview,
        )
