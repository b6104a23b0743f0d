"""Tests for the click command line interface."""

from __future__ import annotations

import csv
import json

import pytest
from click.testing import CliRunner

from loan_payoff.main import cli

NEGATIVE_MESSAGE = "Cannot have a negatively amortized loan, increase minimum payments"


@pytest.fixture
def runner():
    return CliRunner()


def test_schedule_prints_summary_and_truncates(runner):
    result = runner.invoke(cli, ["schedule", "--loan", "Test|1000|4.5|6"])

    assert result.exit_code == 0, result.output
    assert "Periods            : 260" in result.output
    assert "Schedule has 261 rows; showing first 120 rows." in result.output
    assert "Period\tInterest\tPayment\tBalance" in result.output


def test_schedule_max_rows_from_environment(runner):
    result = runner.invoke(
        cli,
        ["schedule", "--reference", "A|100|0|50&B|100|0|10", "--show-loans"],
        env={"LOAN_PAYOFF_MAX_ROWS": "3"},
    )

    assert result.exit_code == 0, result.output
    assert "Schedule has 5 rows; showing first 3 rows." in result.output
    assert "A:Int\tA:Pay\tA:Bal" in result.output


def test_show_loans_labels_repeated_names(runner):
    result = runner.invoke(
        cli, ["schedule", "--reference", "Card|100|0|50&Card|100|0|10&Car|0|0|0", "--show-loans"]
    )

    assert result.exit_code == 0, result.output
    assert "Card#1:Int\tCard#1:Pay\tCard#1:Bal\tCard#2:Int" in result.output
    assert "Car:Int\tCar:Pay\tCar:Bal" in result.output
    assert "  Card             : paid off in period 2" in result.output
    assert "  Card             : paid off in period 4" in result.output


def test_period_limit_from_environment(runner):
    result = runner.invoke(
        cli, ["summary", "-l", "Test|1000|4.5|6"], env={"LOAN_PAYOFF_MAX_PERIODS": "100"}
    )

    assert result.exit_code == 1
    assert "not paid off within 100 periods" in result.output


def test_schedule_json_export(runner, tmp_path):
    path = tmp_path / "schedule.json"
    result = runner.invoke(cli, ["schedule", "-l", "Test|1000|4.5|6", "--output", str(path)])

    assert result.exit_code == 0, result.output
    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data["schedule"]) == 261
    assert data["schedule"][-1]["totals"]["amount"] == 0
    assert data["summary"]["periods"] == 260


def test_schedule_csv_export(runner, tmp_path):
    path = tmp_path / "schedule.csv"
    result = runner.invoke(
        cli, ["schedule", "--reference", "A|100|0|50&B|100|0|10", "--output", str(path)]
    )

    assert result.exit_code == 0, result.output
    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Period", "Loan", "Interest", "Payment", "Balance"]
    # Three rows (two loans plus totals) for each of the five records.
    assert len(rows) == 1 + 5 * 3
    assert rows[-1][:2] == ["4", "TOTAL"]


def test_schedule_rejects_unknown_format(runner, tmp_path):
    result = runner.invoke(
        cli, ["schedule", "-l", "Test|1000|4.5|6", "--output", str(tmp_path / "out.txt")]
    )
    assert result.exit_code == 2


def test_negative_amortization_is_reported(runner):
    result = runner.invoke(cli, ["summary", "-l", "Big|7000|4.5|6"])

    assert result.exit_code == 1
    assert NEGATIVE_MESSAGE in result.output


def test_malformed_loan_is_bad_parameter(runner):
    result = runner.invoke(cli, ["summary", "-l", "Test|1000|4.5"])

    assert result.exit_code == 2
    assert "NAME|AMOUNT|INTEREST|PAYMENT" in result.output


def test_loans_required(runner):
    result = runner.invoke(cli, ["summary"])
    assert result.exit_code == 2


def test_summary_with_strategy(runner):
    result = runner.invoke(
        cli, ["summary", "--reference", "A|100|0|50&B|100|0|10", "--strategy", "snowball"]
    )

    assert result.exit_code == 0, result.output
    assert "Strategy           : snowball" in result.output


def test_summary_json_export(runner, tmp_path):
    path = tmp_path / "summary.json"
    result = runner.invoke(cli, ["summary", "-l", "Test|1000|4.5|6", "--output", str(path)])

    assert result.exit_code == 0, result.output
    assert json.loads(path.read_text(encoding="utf-8"))["summary"]["total_interest"] == 557.38


def test_compare(runner):
    result = runner.invoke(
        cli, ["compare", "-l", "Mortgage|5000|3.5|100", "-l", "Card|1000|19.9|50"]
    )

    assert result.exit_code == 0, result.output
    for name in ("sequential", "avalanche", "snowball"):
        assert name in result.output


def test_compare_selected_strategy(runner):
    result = runner.invoke(cli, ["compare", "-l", "Test|1000|4.5|6", "--strategy", "avalanche"])

    assert result.exit_code == 0, result.output
    assert "avalanche" in result.output
    assert "snowball" not in result.output


def test_share(runner):
    result = runner.invoke(
        cli, ["share", "-l", "Something with a space|1000.00|4.5|6", "-l", "Other|2000|2.5|5.10"]
    )

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "Something+with+a+space|1000|4.5|6&Other|2000|2.5|5.1"


def test_invalid_environment(runner):
    result = runner.invoke(
        cli, ["summary", "-l", "Test|1000|4.5|6"], env={"LOAN_PAYOFF_STRATEGY": "random"}
    )
    assert result.exit_code == 1
    assert "LOAN_PAYOFF_STRATEGY" in result.output
