# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from dashboard_engine.logging.init import reset_logging

SAMPLE_CSV = """region,product,units,revenue
EU,Widget,10,100.5
US,Gadget,5,50
EU,Gizmo,,30
APAC,Widget,7,70
"""


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DASHBOARD_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "sales.csv"
    f.write_text(SAMPLE_CSV, encoding="utf-8")
    return f


@pytest.fixture()
def sample_config_yaml() -> str:
    return """chart:
  kind: bar
  color_theme: vibrant
  size_px: 500
limits:
  series_points: 50
  pie_groups: 10
  value_options: 20
  preview_rows: 2
reader:
  encoding: utf-8
  keep_na_strings: [NA]
  null_sentinels: ["(NULL)"]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "dashboard.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sales_rows() -> list[dict]:
    return [
        {"region": "EU", "product": "Widget", "units": 10, "revenue": 100.5},
        {"region": "US", "product": "Gadget", "units": 5, "revenue": 50},
        {"region": "EU", "product": "Gizmo", "units": None, "revenue": 30},
        {"region": "APAC", "product": "Widget", "units": 7, "revenue": 70},
    ]


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()
