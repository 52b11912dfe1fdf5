from __future__ import annotations

from .orchestrator import DashboardView

"""SUMMARY line rendering for the dataset explorer CLI."""


def render_summary_line(view: DashboardView) -> str:
    """Render the SUMMARY line for one dashboard view.

    Format:
    SUMMARY rows={filtered}/{total} columns={n} numeric={n} categorical={n}
    chart={kind} points={n}

    Examples:
        >>> view = DashboardView(has_data=False, total_rows=0)
        >>> render_summary_line(view)
        'SUMMARY rows=0/0 columns=0 numeric=0 categorical=0 chart=bar points=0'
    """
    stats = view.statistics
    return (
        f"SUMMARY rows={view.filtered_count}/{view.total_rows} "
        f"columns={stats.total_columns} "
        f"numeric={stats.numeric_columns} "
        f"categorical={stats.categorical_columns} "
        f"chart={view.chart.kind.value} "
        f"points={len(view.series)}"
    )
