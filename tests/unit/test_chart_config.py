from __future__ import annotations

import pytest

from dashboard_engine.models.chart_config import (
    DEFAULT_CHART_SIZE,
    MAX_CHART_SIZE,
    MIN_CHART_SIZE,
    ChartConfiguration,
    ChartKind,
    ColorTheme,
    clamp_size,
)


def test_defaults():
    cfg = ChartConfiguration()
    assert cfg.kind is ChartKind.BAR
    assert cfg.color_theme is ColorTheme.PRIMARY
    assert cfg.size_px == DEFAULT_CHART_SIZE
    assert cfg.x_column is None and cfg.y_column is None


@pytest.mark.parametrize("size, expected", [(50, 200), (200, 200), (450, 450), (801, 800), (10_000, 800)])
def test_size_is_clamped(size, expected):
    assert ChartConfiguration(size_px=size).size_px == expected
    assert clamp_size(size) == expected
    assert MIN_CHART_SIZE <= expected <= MAX_CHART_SIZE


def test_string_ids_are_converted():
    cfg = ChartConfiguration(kind="pie", color_theme="vibrant")
    assert cfg.kind is ChartKind.PIE
    assert cfg.color_theme is ColorTheme.VIBRANT
    assert not cfg.kind.is_cartesian
    assert ChartKind.AREA.is_cartesian


def test_unknown_ids_raise_value_error():
    with pytest.raises(ValueError):
        ChartConfiguration(kind="scatter")
    with pytest.raises(ValueError):
        ChartConfiguration(color_theme="neon")


def test_with_axes_and_to_dict():
    cfg = ChartConfiguration(kind="line").with_axes("month", "sales")
    assert cfg.to_dict() == {
        "kind": "line",
        "x_column": "month",
        "y_column": "sales",
        "color_theme": "primary",
        "size_px": 400,
    }
