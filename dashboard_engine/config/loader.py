from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.chart_config import ChartConfiguration

"""Config loader for the dataset explorer.

Responsibilities:
- Load the YAML config (config/dashboard.yml by default)
- Validate it against config_schema.json (unknown keys are rejected)
- Apply defaults for every missing section / key
"""

__all__ = [
    "ConfigError",
    "LimitsConfig",
    "ReaderConfig",
    "DashboardConfig",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "default_config",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/dashboard.yml")
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class LimitsConfig:
    series_points: int = 50  # bar/line/area points
    pie_groups: int = 10  # pie groups (first-seen order)
    value_options: int = 50  # filter picker values per column
    preview_rows: int = 5  # --inspect-data rows


@dataclass(frozen=True)
class ReaderConfig:
    delimiter: str | None = None  # None -> from file suffix (.tsv -> tab, else comma)
    encoding: str = "utf-8"
    keep_na_strings: list[str] = field(default_factory=list)  # pandas の NA 変換から除外
    null_sentinels: list[str] = field(default_factory=list)  # 文字列 -> None (大文字比較)


@dataclass(frozen=True)
class DashboardConfig:
    chart: ChartConfiguration = field(default_factory=ChartConfiguration)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)


def default_config() -> DashboardConfig:
    return DashboardConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (wrong types, unknown keys, bad enum value).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> DashboardConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    chart_raw = data.get("chart", {})
    limits_raw = data.get("limits", {})
    reader_raw = data.get("reader", {})
    defaults = LimitsConfig()
    return DashboardConfig(
        chart=ChartConfiguration(
            kind=chart_raw.get("kind", "bar"),
            x_column=chart_raw.get("x_column"),
            y_column=chart_raw.get("y_column"),
            color_theme=chart_raw.get("color_theme", "primary"),
            size_px=chart_raw.get("size_px", 400),
        ),
        limits=LimitsConfig(
            series_points=limits_raw.get("series_points", defaults.series_points),
            pie_groups=limits_raw.get("pie_groups", defaults.pie_groups),
            value_options=limits_raw.get("value_options", defaults.value_options),
            preview_rows=limits_raw.get("preview_rows", defaults.preview_rows),
        ),
        reader=ReaderConfig(
            delimiter=reader_raw.get("delimiter"),
            encoding=reader_raw.get("encoding", "utf-8"),
            keep_na_strings=list(reader_raw.get("keep_na_strings", [])),
            null_sentinels=list(reader_raw.get("null_sentinels", [])),
        ),
    )
