"""Shared fixtures for the loan payoff tests."""

from __future__ import annotations

import pytest

from loan_payoff.loan import Loan
from loan_payoff.loan_set import LoanSet
from loan_payoff.logging_config import configure_logging


@pytest.fixture
def loan() -> Loan:
    """The reference loan: 1000 at 4.5 % with a payment of 6 per period."""
    return Loan(name="Test", amount=1000.00, interest=4.5, payment=6)


@pytest.fixture
def loans(loan: Loan) -> LoanSet:
    return LoanSet([loan])


@pytest.fixture
def other_loan() -> Loan:
    return Loan(name="Other", amount=2000, interest=2.5, payment=5.1)


class ChangeCounter:
    """Listener that counts how often it was called."""

    def __init__(self) -> None:
        self.count = 0
        self.seen = []

    def __call__(self, instance) -> None:
        self.count += 1
        self.seen.append(instance)


@pytest.fixture
def counter() -> ChangeCounter:
    return ChangeCounter()


@pytest.fixture(autouse=True)
def reset_logging():
    """Point the package logger back at the current stderr after each test."""
    yield
    configure_logging("WARNING")
