"""Exception types raised by the loan payoff library."""

from __future__ import annotations


NEGATIVE_AMORTIZATION_MESSAGE = (
    "Cannot have a negatively amortized loan, increase minimum payments"
)


class LoanPayoffError(Exception):
    """Base class for all errors raised by ``loan_payoff``."""


class ParseError(LoanPayoffError, ValueError):
    """A serialized loan reference or a numeric field could not be parsed."""


class NegativeAmortizationError(LoanPayoffError):
    """Minimum payments do not keep pace with the interest being accrued."""

    def __init__(self, message: str = NEGATIVE_AMORTIZATION_MESSAGE) -> None:
        super().__init__(message)


class ScheduleTooLongError(LoanPayoffError):
    """The schedule did not finish within the allowed number of periods."""
