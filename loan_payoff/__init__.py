"""Loan payoff schedules for one or more loans sharing a payment pool."""

from .data_models import AmortizationRecord, LoanPeriod, PeriodTotals
from .engine import compare_strategies, compute_schedule, summarize
from .errors import LoanPayoffError, NegativeAmortizationError, ParseError
from .loan import Loan
from .loan_set import LoanSet
from .strategy import (
    HighestInterestFirst,
    LowestBalanceFirst,
    SequentialStrategy,
    Strategy,
    get_strategy,
)

__all__ = [
    "AmortizationRecord",
    "HighestInterestFirst",
    "Loan",
    "LoanPayoffError",
    "LoanPeriod",
    "LoanSet",
    "LowestBalanceFirst",
    "NegativeAmortizationError",
    "ParseError",
    "PeriodTotals",
    "SequentialStrategy",
    "Strategy",
    "compare_strategies",
    "compute_schedule",
    "get_strategy",
    "summarize",
]
