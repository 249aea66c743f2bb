"""
Tests for `scripts/run_reports.py`.

Covers the CLI exit codes and that a failed load prints no report.
"""

from __future__ import annotations

import pytest

from conftest import HEADER
from scripts import run_reports
from services.report_formatter import SEPARATOR

ENV_KEYS = [
    "SALES_FILE",
    "SALES_FILE_ENCODING",
    "SALES_DELIMITER",
    "REPORT_LOCALE",
    "REPORT_SELLER",
    "REPORT_MANAGER",
    "REPORT_STATUS",
    "REPORT_MONTHS",
    "LOG_LEVEL",
]

EXAMPLE_ROWS = [
    HEADER,
    "1;Ana;Carla;Eletronicos;100;01/01/2023;Pix;Completed",
    "2;Ana;Carla;Eletronicos;50;15/01/2023;Pix;Completed",
    "3;Bob;Diego;Moveis;30;10/02/2023;Boleto;Cancelled",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LC_ALL", "C")


def test_prints_reports(write_sales_file, capsys) -> None:
    """A successful run prints every report and exits 0."""
    path = write_sales_file(EXAMPLE_ROWS)

    exit_code = run_reports.main([str(path), "--seller", "Ana", "--manager", "Diego"])

    out = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert out[0] == "Total completed sales: 150.00"
    assert out[1] == SEPARATOR
    assert "Days between first and last completed sale: 14" in out
    assert "Total completed sales of Ana: 150.00" in out
    assert "Sales count for the team of Diego: 1" in out
    assert "Sales in FEBRUARY with status CANCELLED: 1" in out
    assert out[-2:] == ["Top 3 sellers:", "Ana 150.00"]


def test_status_and_months_arguments(write_sales_file, capsys) -> None:
    """--status and --months drive the status-and-month report."""
    path = write_sales_file(EXAMPLE_ROWS)

    exit_code = run_reports.main([str(path), "--status", "completed", "--months", "jan", "2"])

    out = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert "Sales in JANUARY with status COMPLETED: 2" in out
    assert not any("FEBRUARY" in line for line in out)


def test_path_from_environment(write_sales_file, monkeypatch, capsys) -> None:
    """SALES_FILE and REPORT_SELLER are used when no arguments are given."""
    path = write_sales_file(EXAMPLE_ROWS)
    monkeypatch.setenv("SALES_FILE", str(path))
    monkeypatch.setenv("REPORT_SELLER", "Ana")

    assert run_reports.main([]) == 0
    assert "Total completed sales of Ana: 150.00" in capsys.readouterr().out


def test_missing_path_configuration(capsys) -> None:
    """Without any input path the run exits 2."""
    assert run_reports.main([]) == 2
    assert "SALES_FILE" in capsys.readouterr().err


def test_invalid_configuration(monkeypatch, capsys) -> None:
    """An invalid setting exits 2 before parsing arguments."""
    monkeypatch.setenv("SALES_DELIMITER", "||")

    assert run_reports.main(["sales.csv"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err


def test_missing_file_aborts(tmp_path, capsys) -> None:
    """A missing file exits 1 and prints no report."""
    exit_code = run_reports.main([str(tmp_path / "missing.csv")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "not found or is empty" in captured.err


def test_malformed_row_aborts_before_any_report(write_sales_file, capsys) -> None:
    """A malformed row exits 1 and prints no report."""
    path = write_sales_file(EXAMPLE_ROWS + ["4;Ana;Carla;Moveis;10;31/02/2023;Pix;Completed"])

    exit_code = run_reports.main([str(path)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "Row 5" in captured.err


def test_invalid_status_argument_exits_with_usage_error(write_sales_file) -> None:
    """An unknown --status is an argparse usage error."""
    path = write_sales_file(EXAMPLE_ROWS)

    with pytest.raises(SystemExit) as exc_info:
        run_reports.main([str(path), "--status", "shipped"])
    assert exc_info.value.code == 2
