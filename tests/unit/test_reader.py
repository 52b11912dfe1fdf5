from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from dashboard_engine.table.reader import (
    DatasetReadError,
    EmptyDatasetError,
    load_dataset,
    normalize_table,
    normalize_value,
    read_delimited_file,
)


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_load_csv_numeric_detection(tmp_path: Path):
    f = _write(tmp_path, "a.csv", "name,amount,code\nAlice,10,007\nBob,2.5,x1\n")
    ds = load_dataset(f)
    assert ds.name == "a.csv"
    assert ds.columns == ["name", "amount", "code"]
    assert ds.rows == [
        {"name": "Alice", "amount": 10, "code": 7},
        {"name": "Bob", "amount": 2.5, "code": "x1"},
    ]
    assert isinstance(ds.rows[0]["amount"], int)


def test_blank_cells_become_none(tmp_path: Path):
    f = _write(tmp_path, "b.csv", "a,b\n1,\n,x\n")
    ds = load_dataset(f)
    assert ds.rows == [{"a": 1, "b": None}, {"a": None, "b": "x"}]


def test_blank_lines_and_all_empty_rows_skipped(tmp_path: Path):
    f = _write(tmp_path, "c.csv", "a,b\n1,2\n\n,\n3,4\n")
    ds = load_dataset(f)
    assert [r["a"] for r in ds.rows] == [1, 3]


def test_keep_na_strings(tmp_path: Path):
    f = _write(tmp_path, "d.csv", "country,v\nNA,1\nUS,\n")
    default = load_dataset(f)
    assert default.rows[0]["country"] is None
    kept = load_dataset(f, keep_na_strings=["NA"])
    assert kept.rows[0]["country"] == "NA"
    assert kept.rows[1]["v"] is None


def test_null_sentinels_case_insensitive(tmp_path: Path):
    f = _write(tmp_path, "e.csv", "a,b\n(NULL),keep\n(null), (Null) \n")
    ds = load_dataset(f, null_sentinels=["(NULL)"])
    assert ds.rows == [{"a": None, "b": "keep"}, {"a": None, "b": None}]


def test_sentinel_only_row_is_kept(tmp_path: Path):
    f = _write(tmp_path, "s.csv", "a,b\n1,x\n(NULL),(null)\n\n,\n2,y\n")
    ds = load_dataset(f, null_sentinels=["(NULL)"])
    # 空行 / ",\n" は除外、センチネルだけの行はデータ行として残る
    assert len(ds.rows) == 3
    assert ds.rows[1] == {"a": None, "b": None}


def test_tsv_delimiter_from_suffix(tmp_path: Path):
    f = _write(tmp_path, "f.tsv", "a\tb\nx,y\t3\n")
    ds = load_dataset(f)
    assert ds.rows == [{"a": "x,y", "b": 3}]


def test_explicit_delimiter(tmp_path: Path):
    f = _write(tmp_path, "g.csv", "a;b\n1;2\n")
    assert load_dataset(f, delimiter=";").rows == [{"a": 1, "b": 2}]


def test_header_only_file_is_empty_dataset(tmp_path: Path):
    f = _write(tmp_path, "h.csv", "a,b\n")
    ds = load_dataset(f)
    assert ds.columns == ["a", "b"]
    assert ds.is_empty


def test_empty_file_raises(tmp_path: Path):
    f = _write(tmp_path, "empty.csv", "")
    with pytest.raises(EmptyDatasetError):
        read_delimited_file(f)


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(DatasetReadError, match="file not found"):
        load_dataset(tmp_path / "nope.csv")


def test_normalize_value_unwraps_numpy_scalars():
    assert normalize_value(np.int64(3)) == 3
    assert type(normalize_value(np.int64(3))) is int
    assert normalize_value(np.float64(2.0)) == 2
    assert normalize_value(np.float64("nan")) is None
    assert normalize_value(np.bool_(True)) is True
    assert normalize_value("  inf ") == "inf"


def test_normalize_table_from_dataframe():
    df = pd.DataFrame({"x": [1, 2], "y": ["a", None]})
    ds = normalize_table(df, "frame")
    assert ds.rows == [{"x": 1, "y": "a"}, {"x": 2, "y": None}]
