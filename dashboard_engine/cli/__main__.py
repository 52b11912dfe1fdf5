from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from dashboard_engine.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    DashboardConfig,
    default_config,
    load_config,
)
from dashboard_engine.logging.init import enable_debug, log_summary, setup_logging
from dashboard_engine.models.chart_config import ChartKind, ColorTheme
from dashboard_engine.models.dataset import Dataset
from dashboard_engine.models.filter_models import FilterSet
from dashboard_engine.services.orchestrator import DashboardSession
from dashboard_engine.services.predicates import QuickPreset, take_first
from dashboard_engine.services.summary import render_summary_line
from dashboard_engine.services.type_inference import infer_column_types
from dashboard_engine.table.reader import DatasetReadError, load_dataset

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (--config > $DASHBOARD_CONFIG > config/dashboard.yml)
- Read the data file into a Dataset
- Apply --filter / --search / --preset, shape the chart selected by --chart / --x / --y
- Print the dashboard view as JSON, then the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NO_DATA = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (existing environment wins unless override)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Explore a delimited data file: filter, summarize, shape charts")
    p.add_argument("data_file", type=Path, help="CSV / TSV file to analyse")
    p.add_argument("--config", type=Path, default=None, help="YAML config path")
    p.add_argument(
        "--filter",
        dest="filters",
        action="append",
        default=[],
        metavar="COLUMN=VALUE",
        help="Keep rows whose COLUMN equals VALUE (repeatable; same column = OR)",
    )
    p.add_argument("--search", default="", help="Case-insensitive substring over all fields")
    p.add_argument(
        "--preset",
        dest="presets",
        action="append",
        default=[],
        choices=[q.value for q in QuickPreset],
        help="Quick preset applied after filters and search (repeatable, in order)",
    )
    p.add_argument("--chart", choices=[k.value for k in ChartKind], default=None, help="Chart kind")
    p.add_argument("--x", dest="x_column", default=None, help="X axis column")
    p.add_argument("--y", dest="y_column", default=None, help="Y axis column")
    p.add_argument("--theme", choices=[t.value for t in ColorTheme], default=None, help="Color theme id")
    p.add_argument("--size", type=int, default=None, help="Chart size in px (clamped to 200-800)")
    p.add_argument("--inspect-data", action="store_true", help="Print columns, types & first rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config(explicit: Path | None) -> DashboardConfig:
    """Explicit paths must exist; the default path is optional."""
    env_path = os.getenv("DASHBOARD_CONFIG")
    if explicit is not None:
        return load_config(explicit)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _parse_filters(specs: list[str]) -> FilterSet:
    mapping: dict[str, set[str]] = {}
    for spec in specs:
        column, sep, value = spec.partition("=")
        if not sep or not column:
            raise ValueError(f"invalid --filter '{spec}' (expected COLUMN=VALUE)")
        mapping.setdefault(column, set()).add(value)
    return FilterSet.from_mapping(mapping)


def _inspect_data(dataset: Dataset, preview_rows: int) -> int:
    types = infer_column_types(dataset.rows, dataset.columns)
    print(f"FILE: {dataset.name} rows={len(dataset.rows)}")
    print(f"  COLUMNS: {dataset.columns}")
    type_labels = {c: t.value for c, t in types.items()}
    print(f"  TYPES: {type_labels}")
    print("  sample_rows=", take_first(dataset.rows, preview_rows))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    # .env は DASHBOARD_LOG_LEVEL を含みうるのでロガー設定より先に読む
    _load_env_file(Path(".env"))
    logger = setup_logging()

    # NOTE: [] が渡された場合に sys.argv[1:] が混入しないよう None のときのみ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        dataset = load_dataset(
            args.data_file,
            delimiter=cfg.reader.delimiter,
            encoding=cfg.reader.encoding,
            keep_na_strings=cfg.reader.keep_na_strings,
            null_sentinels=cfg.reader.null_sentinels,
        )
    except DatasetReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL

    logger.info(f"Loaded {dataset.name}: rows={len(dataset.rows)} columns={len(dataset.columns)}")

    if args.inspect_data:
        return _inspect_data(dataset, cfg.limits.preview_rows)

    try:
        filters = _parse_filters(args.filters)
    except ValueError as e:
        logger.error(f"arguments: {e}")
        return EXIT_FATAL
    for f in filters:
        if f.column not in dataset.columns:
            logger.warning(f"filter column not found: {f.column} (compared as missing values)")

    chart = cfg.chart
    overrides = {
        "kind": args.chart,
        "x_column": args.x_column,
        "y_column": args.y_column,
        "color_theme": args.theme,
        "size_px": args.size,
    }
    chart = replace(chart, **{k: v for k, v in overrides.items() if v is not None})

    session = DashboardSession(dataset, chart=chart, limits=cfg.limits)
    session.set_filters(filters)
    session.set_search(args.search)
    for preset in args.presets:
        session.apply_preset(preset)
    view = session.view()

    if not view.has_data:
        logger.warning(f"no data rows in {dataset.name}")
    else:
        print(json.dumps(view.to_dict(), ensure_ascii=False, indent=2, default=str))
        logger.info(f"mode=chart kind={view.chart.kind.value} x={view.chart.x_column} y={view.chart.y_column}")

    # log_summary が "SUMMARY " を付与するため先頭を除去
    summary_line = render_summary_line(view)
    log_summary(summary_line[len("SUMMARY "):])

    return EXIT_SUCCESS if view.has_data else EXIT_NO_DATA


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
