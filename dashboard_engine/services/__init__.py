"""Engine services: type inference, row predicates, statistics, chart shaping."""

from .chart_shaper import overview_series, shape_chart_data
from .predicates import NULL_SENTINEL, filter_rows, stringify
from .statistics import summarize
from .type_inference import infer_column_type, infer_column_types

__all__ = [
    "NULL_SENTINEL",
    "filter_rows",
    "infer_column_type",
    "infer_column_types",
    "overview_series",
    "shape_chart_data",
    "stringify",
    "summarize",
]
