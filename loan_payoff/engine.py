"""Schedule computation and summary metrics.

This module wraps ``LoanSet.amortize`` into the calculator's entry points:
compute a schedule together with its summary, summarize an existing schedule
and compare how the available strategies perform on the same loans.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .data_models import AmortizationRecord
from .loan_set import LoanSet
from .strategy import STRATEGIES, Strategy

DEFAULT_DAYS_IN_PERIOD = 30


def summarize(schedule: List[AmortizationRecord]) -> Dict[str, object]:
    """Return aggregate metrics for a schedule produced by ``amortize``.

    The summary contains:

    ``starting_balance``
        Combined balance in the opening record.
    ``total_interest`` / ``total_payment``
        Sums over every period.
    ``periods``
        Number of payment periods (the opening record is not counted).
    ``payoff_periods``
        One ``{"name", "period"}`` entry per loan, in insertion order, giving
        the first period its balance reached zero. Loans that start at zero
        are reported as period 0. Names need not be unique.
    """
    if not schedule:
        return {
            "starting_balance": 0.0,
            "total_interest": 0.0,
            "total_payment": 0.0,
            "periods": 0,
            "payoff_periods": [],
        }
    total_interest = sum((r.totals.interest for r in schedule), Decimal("0"))
    total_payment = sum((r.totals.payment for r in schedule), Decimal("0"))
    paid_off: List[Optional[int]] = [None] * len(schedule[0].loans)
    for record in schedule:
        for index, loan in enumerate(record.loans):
            if loan.amount == 0 and paid_off[index] is None:
                paid_off[index] = record.period
    payoff_periods = [
        {"name": loan.name, "period": period}
        for loan, period in zip(schedule[0].loans, paid_off)
    ]
    return {
        "starting_balance": float(schedule[0].totals.amount),
        "total_interest": float(total_interest),
        "total_payment": float(total_payment),
        "periods": len(schedule) - 1,
        "payoff_periods": payoff_periods,
    }


def compute_schedule(
    loans: LoanSet,
    days_in_period: int = DEFAULT_DAYS_IN_PERIOD,
    strategy: Optional[Strategy] = None,
    max_periods: Optional[int] = None,
) -> Tuple[List[AmortizationRecord], Dict[str, object]]:
    """Compute the amortization schedule and summary for a loan set.

    Returns
    -------
    schedule: List[AmortizationRecord]
        The opening record followed by one record per period.
    summary: Dict[str, object]
        The metrics described in :func:`summarize`, plus the strategy name
        and period length.
    """
    schedule = loans.amortize(days_in_period, strategy, max_periods)
    summary = summarize(schedule)
    summary["strategy"] = strategy.name if strategy is not None else "sequential"
    summary["days_in_period"] = days_in_period
    return schedule, summary


def compare_strategies(
    loans: LoanSet,
    days_in_period: int = DEFAULT_DAYS_IN_PERIOD,
    strategies: Optional[Iterable[Strategy]] = None,
    max_periods: Optional[int] = None,
) -> Dict[str, Dict[str, object]]:
    """Return the summary of each strategy, keyed by strategy name."""
    selected = list(strategies) if strategies is not None else list(STRATEGIES.values())
    results: Dict[str, Dict[str, object]] = {}
    for strategy in selected:
        _, summary = compute_schedule(loans, days_in_period, strategy, max_periods)
        results[strategy.name] = summary
    return results
