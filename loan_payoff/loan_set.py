"""Ordered loan collections and the amortization loop.

``LoanSet.amortize`` drives every member loan through repeated periods of
interest accrual and payment until all balances reach zero. Each period:

1. every outstanding loan accrues interest for ``days_in_period`` days;
2. the payment pool is the sum of every member's minimum payment, so the
   minimums of loans already paid off roll over to the others;
3. minimums are covered first, then whatever is left of the pool goes to
   loans in the strategy's priority order, each capped at its balance;
4. a record of the period is appended to the schedule.

If the combined balance fails to shrink over a period the payments can never
catch up with the interest, and ``NegativeAmortizationError`` is raised
instead of looping forever.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from . import url_codec
from .data_models import AmortizationRecord, LoanPeriod, PeriodTotals
from .errors import NegativeAmortizationError, ScheduleTooLongError
from .loan import Loan, validate_days
from .strategy import SequentialStrategy, Strategy

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

LoanSetListener = Callable[["LoanSet"], None]


class LoanSet:
    """An ordered group of loans. Insertion order drives default payment order."""

    def __init__(self, loans: Optional[Iterable[Loan]] = None) -> None:
        self._loans: List[Loan] = list(loans) if loans is not None else []
        self._listeners: List[LoanSetListener] = []

    def __len__(self) -> int:
        return len(self._loans)

    def __iter__(self) -> Iterator[Loan]:
        return iter(self._loans)

    def __getitem__(self, index: int) -> Loan:
        return self._loans[index]

    def __repr__(self) -> str:
        return f"LoanSet({self._loans!r})"

    def at(self, index: int) -> Loan:
        return self._loans[index]

    def add(self, loan: Loan) -> None:
        self._loans.append(loan)
        self._notify()

    def remove(self, loan: Loan) -> None:
        self._loans.remove(loan)
        self._notify()

    def subscribe(self, callback: LoanSetListener) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: LoanSetListener) -> None:
        self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def total_amount(self) -> Decimal:
        return sum((loan.amount for loan in self._loans), ZERO)

    def total_payment(self) -> Decimal:
        return sum((loan.payment for loan in self._loans), ZERO)

    def clone(self) -> "LoanSet":
        """Deep copy: every member is cloned and no listeners are carried over."""
        return LoanSet(loan.clone() for loan in self._loans)

    def serialize_for_url(self) -> str:
        return url_codec.join_loan_set([loan.serialize_for_url() for loan in self._loans])

    @classmethod
    def from_serialized_url(cls, text: str) -> "LoanSet":
        return cls(Loan.from_serialized_url(token) for token in url_codec.split_loan_set(text))

    def to_list(self) -> List[Dict[str, Any]]:
        return [loan.to_dict() for loan in self._loans]

    def amortize(
        self,
        days_in_period: int,
        strategy: Optional[Strategy] = None,
        max_periods: Optional[int] = None,
    ) -> List[AmortizationRecord]:
        """Return the full payoff schedule for this set.

        The loop runs on a clone, so the members of this set and their
        listeners are left untouched. The first record (period 0) holds the
        starting balances. The last record always has ``totals.amount == 0``.

        Raises
        ------
        NegativeAmortizationError
            If a period ends without reducing the combined balance.
        ScheduleTooLongError
            If ``max_periods`` is given and the loans are still not paid off
            after that many periods.
        """
        validate_days(days_in_period)
        strategy = strategy or SequentialStrategy()
        working = self.clone()
        loans = working._loans
        pool = working.total_payment()
        logger.debug(
            "Amortizing %d loan(s) over %d-day periods with %s strategy",
            len(loans),
            days_in_period,
            strategy.name,
        )

        schedule: List[AmortizationRecord] = [
            _build_record(0, loans, [ZERO] * len(loans), [ZERO] * len(loans))
        ]
        previous_total = working.total_amount()
        period = 1
        while previous_total > 0:
            if max_periods is not None and period > max_periods:
                logger.warning("Schedule still open after %d periods", max_periods)
                raise ScheduleTooLongError(
                    f"Loans are not paid off within {max_periods} periods"
                )
            interests = [
                loan.apply_interest(days_in_period) if loan.amount > 0 else ZERO
                for loan in loans
            ]
            allocations = _allocate(loans, strategy.order(loans), pool)
            payments = [
                loan.make_payment(allocation) if allocation > 0 else ZERO
                for loan, allocation in zip(loans, allocations)
            ]
            record = _build_record(period, loans, interests, payments)
            schedule.append(record)

            total = record.totals.amount
            if total > 0 and total >= previous_total:
                logger.warning(
                    "Negative amortization in period %d: balance %s after %s interest and %s paid",
                    period,
                    total,
                    record.totals.interest,
                    record.totals.payment,
                )
                raise NegativeAmortizationError()
            previous_total = total
            period += 1

        logger.info(
            "Amortized %d loan(s) in %d period(s) using %s strategy",
            len(loans),
            len(schedule) - 1,
            strategy.name,
        )
        return schedule


def _allocate(loans: List[Loan], order: List[int], pool: Decimal) -> List[Decimal]:
    """Split ``pool`` across loans, minimums first, then in priority order.

    Every allocation is capped at the loan's current balance.
    """
    allocations = [ZERO] * len(loans)
    remaining = pool
    for index in order:
        share = min(loans[index].payment, loans[index].amount, remaining)
        allocations[index] = share
        remaining -= share
    for index in order:
        if remaining <= 0:
            break
        extra = min(loans[index].amount - allocations[index], remaining)
        if extra > 0:
            allocations[index] += extra
            remaining -= extra
    return allocations


def _build_record(
    period: int, loans: List[Loan], interests: List[Decimal], payments: List[Decimal]
) -> AmortizationRecord:
    snapshots = tuple(
        LoanPeriod(name=loan.name, interest=interest, payment=payment, amount=loan.amount)
        for loan, interest, payment in zip(loans, interests, payments)
    )
    totals = PeriodTotals(
        interest=sum(interests, ZERO),
        payment=sum(payments, ZERO),
        amount=sum((loan.amount for loan in loans), ZERO),
    )
    return AmortizationRecord(period=period, loans=snapshots, totals=totals)
