"""Command-line interface for the loan payoff calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute full payoff schedules, view summaries, compare
payment strategies or print the shareable reference for a set of loans.
Results can be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from .config import Settings
from .data_models import AmortizationRecord
from .engine import compare_strategies, compute_schedule
from .errors import LoanPayoffError, ParseError
from .formatter import print_comparison, print_schedule, print_summary
from .loan import Loan
from .loan_set import LoanSet
from .logging_config import configure_logging
from .strategy import STRATEGIES, get_strategy

LOAN_HELP = "Loan in NAME|AMOUNT|INTEREST|PAYMENT format, e.g. 'Car|8000|3.9|250'"


def build_loan_set(loan: Tuple[str, ...], reference: Optional[str]) -> LoanSet:
    """Combine ``--reference`` and ``--loan`` options into one loan set.

    Loans from the reference come first, followed by each ``--loan`` in the
    order given.
    """
    try:
        loans = LoanSet.from_serialized_url(reference) if reference else LoanSet()
        for item in loan:
            loans.add(Loan.from_serialized_url(item))
    except ParseError as exc:
        raise click.BadParameter(str(exc))
    if not len(loans):
        raise click.BadParameter("Provide at least one --loan or a --reference")
    return loans


def export_to_json(path: Path, schedule: List[AmortizationRecord], summary: Dict[str, Any]) -> None:
    """Export schedule and summary to a JSON file."""
    data = {"summary": summary, "schedule": [record.to_dict() for record in schedule]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[AmortizationRecord]) -> None:
    """Export schedule to a CSV file, one row per loan per period."""
    header = ["Period", "Loan", "Interest", "Payment", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for record in schedule:
            for loan in record.loans:
                writer.writerow(
                    [record.period, loan.name, float(loan.interest), float(loan.payment), float(loan.amount)]
                )
            writer.writerow(
                [
                    record.period,
                    "TOTAL",
                    float(record.totals.interest),
                    float(record.totals.payment),
                    float(record.totals.amount),
                ]
            )


def _run(
    loans: LoanSet, days: int, strategy_name: str, max_periods: Optional[int] = None
) -> Tuple[List[AmortizationRecord], Dict[str, Any]]:
    try:
        return compute_schedule(loans, days, get_strategy(strategy_name), max_periods)
    except LoanPayoffError as exc:
        raise click.ClickException(str(exc))
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def loan_options(func):
    """Attach the options shared by every command that reads loans."""
    func = click.option("--reference", "reference", help="Shareable loan reference (tokens joined with '&')")(func)
    func = click.option("--loan", "-l", "loan", multiple=True, help=LOAN_HELP)(func)
    return func


def period_options(func):
    func = click.option(
        "--strategy",
        "strategy",
        type=click.Choice(sorted(STRATEGIES)),
        help="Order in which surplus payment is applied (default from LOAN_PAYOFF_STRATEGY)",
    )(func)
    func = click.option(
        "--days",
        "-d",
        "days",
        type=click.IntRange(min=1),
        help="Days in each period (default from LOAN_PAYOFF_DAYS_IN_PERIOD)",
    )(func)
    return func


@click.group()
@click.option("--log-level", "log_level", help="Logging level (default from LOAN_PAYOFF_LOG_LEVEL)")
@click.option("--log-json", "log_json", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], log_json: bool) -> None:
    """A command-line calculator for paying off one or more loans."""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    try:
        configure_logging(log_level or settings.log_level, log_json or settings.log_json)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level")
    ctx.obj = settings


@cli.command()
@loan_options
@period_options
@click.option("--show-loans", "show_loans", is_flag=True, help="Add per-loan columns to the table")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def schedule(
    settings: Settings,
    loan: Tuple[str, ...],
    reference: Optional[str],
    days: Optional[int],
    strategy: Optional[str],
    show_loans: bool,
    output: Optional[str],
) -> None:
    """Compute and print the full payoff schedule."""
    loans = build_loan_set(loan, reference)
    schedule_records, summary = _run(
        loans, days or settings.days_in_period, strategy or settings.strategy, settings.max_periods
    )
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, schedule_records, summary)
            click.echo(f"Schedule exported to {path}")
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, schedule_records)
            click.echo(f"Schedule exported to {path}")
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
    else:
        print_summary(summary)
        # Limit schedule length printed to avoid flooding the terminal
        max_rows = settings.max_rows
        if len(schedule_records) > max_rows:
            click.echo(f"Schedule has {len(schedule_records)} rows; showing first {max_rows} rows.")
            print_schedule(schedule_records[:max_rows], show_loans=show_loans)
        else:
            print_schedule(schedule_records, show_loans=show_loans)


@cli.command()
@loan_options
@period_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_obj
def summary(
    settings: Settings,
    loan: Tuple[str, ...],
    reference: Optional[str],
    days: Optional[int],
    strategy: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics."""
    loans = build_loan_set(loan, reference)
    _, summary_data = _run(
        loans, days or settings.days_in_period, strategy or settings.strategy, settings.max_periods
    )
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_data}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@loan_options
@click.option("--days", "-d", "days", type=click.IntRange(min=1), help="Days in each period")
@click.option(
    "--strategy",
    "strategy",
    multiple=True,
    type=click.Choice(sorted(STRATEGIES)),
    help="Strategy to include (repeatable; default: all)",
)
@click.pass_obj
def compare(
    settings: Settings,
    loan: Tuple[str, ...],
    reference: Optional[str],
    days: Optional[int],
    strategy: Tuple[str, ...],
) -> None:
    """Compare payment strategies on the same loans.

    Example:

        loan-payoff compare -l "Car|8000|3.9|250" -l "Card|2500|19.9|60"
    """
    loans = build_loan_set(loan, reference)
    selected = [get_strategy(name) for name in strategy] if strategy else None
    try:
        summaries = compare_strategies(
            loans, days or settings.days_in_period, selected, settings.max_periods
        )
    except LoanPayoffError as exc:
        raise click.ClickException(str(exc))
    print_comparison(summaries)


@cli.command()
@loan_options
def share(loan: Tuple[str, ...], reference: Optional[str]) -> None:
    """Print the shareable reference for the given loans."""
    loans = build_loan_set(loan, reference)
    try:
        click.echo(loans.serialize_for_url())
    except ParseError as exc:
        raise click.BadParameter(str(exc))


if __name__ == "__main__":
    cli()
