from __future__ import annotations

from pathlib import Path

from dashboard_engine.cli import main as cli_main
from dashboard_engine.logging.init import reset_logging

"""Exit code contract tests: 0 success, 1 fatal, 2 no data rows."""


def test_exit_code_success(sample_csv: Path, capsys):
    reset_logging()
    code = cli_main([str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY rows=4/4" in out


def test_exit_code_missing_data_file(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["data/missing.csv"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR read: file not found" in out


def test_exit_code_explicit_config_missing(sample_csv: Path, capsys):
    reset_logging()
    code = cli_main([str(sample_csv), "--config", "config/nope.yml"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config:" in out


def test_exit_code_invalid_default_config(sample_csv: Path, temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / "config" / "dashboard.yml").write_text("bogus: 1\n", encoding="utf-8")
    code = cli_main([str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config validation failed" in out


def test_exit_code_config_from_environment(sample_csv: Path, temp_workdir: Path, monkeypatch, capsys):
    reset_logging()
    monkeypatch.setenv("DASHBOARD_CONFIG", str(temp_workdir / "config" / "env.yml"))
    code = cli_main([str(sample_csv)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found" in out


def test_exit_code_bad_filter_argument(sample_csv: Path, capsys):
    reset_logging()
    code = cli_main([str(sample_csv), "--filter", "region"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR arguments: invalid --filter 'region'" in out


def test_exit_code_header_only_file(temp_workdir: Path, capsys):
    reset_logging()
    f = temp_workdir / "data" / "empty.csv"
    f.write_text("a,b\n", encoding="utf-8")
    code = cli_main([str(f)])
    out = capsys.readouterr().out
    assert code == 2
    assert "WARN no data rows in empty.csv" in out
    assert "SUMMARY rows=0/0" in out


def test_exit_code_zero_byte_file(temp_workdir: Path, capsys):
    reset_logging()
    f = temp_workdir / "data" / "zero.csv"
    f.write_bytes(b"")
    code = cli_main([str(f)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR read: no header line in zero.csv" in out
