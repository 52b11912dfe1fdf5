"""Domain models for the dataset explorer engine.

This package contains the data classes and enums shared by the engine services
(type inference, row predicates, statistics, chart shaping) and the session.
"""

from .chart_config import ChartConfiguration, ChartKind, ColorTheme
from .column_type import ColumnType, ValueKind
from .dataset import Dataset, Row
from .filter_models import ColumnFilter, FilterSet
from .summary_models import NumericColumnStats, OverviewSeries, SummaryStatistics

__all__ = [
    # Table
    "Dataset",
    "Row",
    # Classification
    "ColumnType",
    "ValueKind",
    # Filters
    "ColumnFilter",
    "FilterSet",
    # Chart
    "ChartConfiguration",
    "ChartKind",
    "ColorTheme",
    # Statistics
    "NumericColumnStats",
    "OverviewSeries",
    "SummaryStatistics",
]
