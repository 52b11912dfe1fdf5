from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..models.dataset import Dataset, Row

"""Delimited file reader.

Loads a CSV / TSV upload into a Dataset of plain Python scalars:
- header = first line, column order preserved
- cells pandas treats as NA (blank, "NA", "null", ...) -> None, except the
  strings listed in keep_na_strings which stay text
- strings in null_sentinels (case-insensitive, after strip) -> None
- text that parses as a finite number -> int (integral) or float
- lines that are entirely empty are skipped
"""

__all__ = [
    "DatasetReadError",
    "EmptyDatasetError",
    "read_delimited_file",
    "normalize_table",
    "normalize_value",
    "load_dataset",
]


class DatasetReadError(Exception):
    """Raised when the file cannot be read or parsed as a delimited table."""


class EmptyDatasetError(DatasetReadError):
    """Raised when the file has no header line at all."""


def _delimiter_for(path: Path) -> str:
    return "\t" if path.suffix.lower() in {".tsv", ".tab"} else ","


def read_delimited_file(
    path: Path,
    delimiter: str | None = None,
    encoding: str = "utf-8",
    keep_na_strings: Iterable[str] | None = None,
) -> pd.DataFrame:
    """Read a delimited file into a DataFrame of strings (NA cells are NaN).

    Parameters
    ----------
    path: 入力ファイルパス
    delimiter: 区切り文字 (None ならファイル拡張子から決定)
    keep_na_strings: Pandas の既定 NaN 変換から除外する文字列リスト (例: ['NA'])
    """
    import pandas._libs.parsers as parsers

    keep = set(keep_na_strings or ())
    if keep:
        na_values: list[str] | None = list(parsers.STR_NA_VALUES - keep)
        keep_default_na = False
    else:
        na_values = None
        keep_default_na = True

    if not path.exists():
        raise DatasetReadError(f"file not found: {path}")
    try:
        return pd.read_csv(
            path,
            sep=delimiter or _delimiter_for(path),
            encoding=encoding,
            dtype=str,
            keep_default_na=keep_default_na,
            na_values=na_values,
            skipinitialspace=True,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise EmptyDatasetError(f"no header line in {path.name}") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DatasetReadError(f"cannot parse {path.name}: {e}") from e


def _parse_number(text: str) -> int | float | None:
    try:
        num = float(text)
    except ValueError:
        return None
    if not math.isfinite(num):
        return None
    return int(num) if num.is_integer() else num


def normalize_value(value: Any, null_sentinels: set[str] | None = None) -> Any:
    """Convert one raw cell into a plain Python scalar (or None)."""
    # numpy スカラーは先に Python 型へ
    if isinstance(value, np.generic):
        value = value.item()
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        stripped = value.strip()
        if null_sentinels and stripped.upper() in null_sentinels:
            return None
        number = _parse_number(stripped) if stripped else None
        return number if number is not None else stripped
    return value


def normalize_table(
    df: pd.DataFrame,
    name: str,
    null_sentinels: Iterable[str] | None = None,
) -> Dataset:
    """Turn a raw DataFrame into a Dataset of normalized rows."""
    sentinels = {s.strip().upper() for s in null_sentinels} if null_sentinels else None
    columns = [str(c).strip() for c in df.columns.tolist()]
    # 全列が空の行 (",,,") はスキップ (null_sentinels の変換前に判定する)
    df = df.dropna(how="all")
    rows: list[Row] = []
    for raw in df.itertuples(index=False, name=None):
        row: Row = {}
        for col, val in zip(columns, raw, strict=False):
            row[col] = normalize_value(val, sentinels)
        rows.append(row)
    return Dataset(name=name, columns=columns, rows=rows)


def load_dataset(
    path: Path,
    delimiter: str | None = None,
    encoding: str = "utf-8",
    keep_na_strings: Iterable[str] | None = None,
    null_sentinels: Iterable[str] | None = None,
) -> Dataset:
    """Read and normalize a delimited file in one step."""
    df = read_delimited_file(path, delimiter=delimiter, encoding=encoding, keep_na_strings=keep_na_strings)
    return normalize_table(df, path.name, null_sentinels=null_sentinels)
