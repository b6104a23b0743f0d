"""Output helpers for the loan payoff calculator.

This module renders amortization schedules and summaries as plain text
tables. It relies only on built-in printing and string formatting.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List

from .data_models import AmortizationRecord


def _column_labels(names: List[str]) -> List[str]:
    """Suffix repeated loan names with their position, e.g. ``Card#1``."""
    counts = Counter(names)
    return [
        f"{name}#{index}" if counts[name] > 1 else name
        for index, name in enumerate(names, start=1)
    ]


def print_summary(summary: Dict[str, object]) -> None:
    """Print a summary of schedule metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    if summary.get("strategy"):
        print(f"Strategy           : {summary['strategy']}")
    print(f"Starting balance   : {summary['starting_balance']:.2f}")
    print(f"Total interest     : {summary['total_interest']:.2f}")
    print(f"Total paid         : {summary['total_payment']:.2f}")
    print(f"Periods            : {summary['periods']}")
    for entry in summary.get("payoff_periods") or []:
        print(f"  {entry['name']:17s}: paid off in period {entry['period']}")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationRecord], show_loans: bool = False) -> None:
    """Print the amortization schedule as a simple table.

    Parameters
    ----------
    schedule: Iterable[AmortizationRecord]
        The schedule records to print.
    show_loans: bool
        Whether to add interest/payment/balance columns for every loan. By
        default only the totals are shown.
    """
    records: List[AmortizationRecord] = list(schedule)
    headers = ["Period", "Interest", "Payment", "Balance"]
    if show_loans and records:
        for label in _column_labels([loan.name for loan in records[0].loans]):
            headers.extend([f"{label}:Int", f"{label}:Pay", f"{label}:Bal"])
    print("\t".join(headers))
    for record in records:
        row = [
            str(record.period),
            f"{record.totals.interest:.2f}",
            f"{record.totals.payment:.2f}",
            f"{record.totals.amount:.2f}",
        ]
        if show_loans:
            for loan in record.loans:
                row.extend([f"{loan.interest:.2f}", f"{loan.payment:.2f}", f"{loan.amount:.2f}"])
        print("\t".join(row))


def print_comparison(summaries: Dict[str, Dict[str, object]]) -> None:
    """Print strategy summaries side by side.

    The difference column is measured against the first strategy; a negative
    difference means the strategy is cheaper or shorter.
    """
    print("Comparison")
    print("=" * 72)
    names = list(summaries)
    if not names:
        print("=" * 72)
        return
    baseline = summaries[names[0]]
    print(f"{'Strategy':15s} {'Interest':>15s} {'Paid':>15s} {'Periods':>10s} {'Difference':>12s}")
    for name in names:
        s = summaries[name]
        diff = s["total_interest"] - baseline["total_interest"]
        print(
            f"{name:15s} {s['total_interest']:15.2f} {s['total_payment']:15.2f} "
            f"{s['periods']:10d} {diff:12.2f}"
        )
    print("=" * 72)
