"""Data models for amortization schedules.

This module defines the dataclasses that make up a schedule produced by
``LoanSet.amortize``: a per-loan snapshot for one period, the aggregate
totals for that period and the record tying them together. Records are
frozen so a schedule cannot be altered after it has been produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class LoanPeriod:
    """The state of one loan at the end of a period.

    Attributes
    ----------
    name: str
        The loan name, as given by the user.
    interest: Decimal
        Interest accrued on the loan during the period.
    payment: Decimal
        Payment applied to the loan during the period.
    amount: Decimal
        Balance remaining after interest and payment were applied.
    """

    name: str
    interest: Decimal
    payment: Decimal
    amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "interest": float(self.interest),
            "payment": float(self.payment),
            "amount": float(self.amount),
        }


@dataclass(frozen=True)
class PeriodTotals:
    """Aggregate interest, payment and remaining balance across all loans."""

    interest: Decimal
    payment: Decimal
    amount: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interest": float(self.interest),
            "payment": float(self.payment),
            "amount": float(self.amount),
        }


@dataclass(frozen=True)
class AmortizationRecord:
    """An entry in the amortization schedule.

    Period ``0`` is the opening record: it carries the starting balances with
    zero interest and zero payment. Every following record covers one period
    of ``days_in_period`` days.
    """

    period: int
    loans: Tuple[LoanPeriod, ...]
    totals: PeriodTotals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "loans": [loan.to_dict() for loan in self.loans],
            "totals": self.totals.to_dict(),
        }
