from __future__ import annotations
import pytest
from pathlib import Path
from dashboard_engine.config.loader import ConfigError, default_config, load_config
from dashboard_engine.models.chart_config import ChartKind, ColorTheme


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.chart.kind is ChartKind.BAR
    assert cfg.chart.color_theme is ColorTheme.VIBRANT
    assert cfg.chart.size_px == 500
    assert cfg.limits.value_options == 20
    assert cfg.limits.preview_rows == 2
    assert cfg.reader.keep_na_strings == ["NA"]
    assert cfg.reader.null_sentinels == ["(NULL)"]
    assert cfg.reader.delimiter is None


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError):
        load_config(missing)


def test_load_config_empty_file_uses_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "dashboard.yml"
    cfg_path.write_text("", encoding="utf-8")
    assert load_config(cfg_path) == default_config()


def test_load_config_partial_sections(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "dashboard.yml"
    cfg_path.write_text("chart:\n  kind: pie\n  size_px: 5000\n", encoding="utf-8")
    cfg = load_config(cfg_path)
    assert cfg.chart.kind is ChartKind.PIE
    assert cfg.chart.size_px == 800
    assert cfg.limits.series_points == 50


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "dashboard.yml"
    cfg_path.write_text("chart: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(cfg_path)
    assert "invalid yaml" in str(e.value)


def test_load_config_unknown_chart_kind(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("kind: bar", "kind: scatter")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    # additionalProperties: false
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_non_mapping_root(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "dashboard.yml"
    cfg_path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg_path)
