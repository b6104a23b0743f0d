"""The ``Loan`` entity and its per-period math."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from . import url_codec
from .errors import ParseError
from .utils import Number, format_decimal, round_currency, to_decimal

logger = logging.getLogger(__name__)

DAYS_IN_YEAR = Decimal(365)

LoanListener = Callable[["Loan"], None]


def validate_days(days_in_period: int) -> int:
    if isinstance(days_in_period, bool) or not isinstance(days_in_period, int):
        raise ValueError(f"Days in period must be an integer; got {days_in_period!r}")
    if days_in_period <= 0:
        raise ValueError("Days in period must be positive")
    return days_in_period


def _non_negative(field: str, value: Number) -> Decimal:
    result = to_decimal(value)
    if result < 0:
        raise ValueError(f"Loan {field} cannot be negative; got {value!r}")
    return result


def _cents(field: str, value: Number) -> Decimal:
    return round_currency(_non_negative(field, value))


class Loan:
    """A single loan: its balance, rate and minimum payment.

    ``amount`` is the outstanding balance and changes as interest and
    payments are applied. Amounts and payments are held in whole cents,
    rounded half up on assignment. ``interest`` is the annual nominal rate in percent
    (``4.5`` means 4.5 %). ``payment`` is the minimum paid every period.

    Callbacks registered with :meth:`subscribe` are called with the loan
    after every mutation, once per mutation.
    """

    def __init__(self, name: str, amount: Number, interest: Number, payment: Number) -> None:
        if not isinstance(name, str):
            raise ValueError(f"Loan name must be a string; got {name!r}")
        self._name = name
        self._amount = _cents("amount", amount)
        self._interest = _non_negative("interest", interest)
        self._payment = _cents("payment", payment)
        self._listeners: List[LoanListener] = []

    def __repr__(self) -> str:
        return (
            f"Loan(name={self._name!r}, amount={self._amount!r}, "
            f"interest={self._interest!r}, payment={self._payment!r})"
        )

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self.update(name=value)

    @property
    def amount(self) -> Decimal:
        return self._amount

    @amount.setter
    def amount(self, value: Number) -> None:
        self.update(amount=value)

    @property
    def interest(self) -> Decimal:
        return self._interest

    @interest.setter
    def interest(self, value: Number) -> None:
        self.update(interest=value)

    @property
    def payment(self) -> Decimal:
        return self._payment

    @payment.setter
    def payment(self, value: Number) -> None:
        self.update(payment=value)

    def update(
        self,
        *,
        name: Optional[str] = None,
        amount: Optional[Number] = None,
        interest: Optional[Number] = None,
        payment: Optional[Number] = None,
    ) -> None:
        """Assign one or more fields and notify listeners once.

        Every value is validated before anything is assigned, so a rejected
        update leaves the loan untouched.
        """
        if name is not None and not isinstance(name, str):
            raise ValueError(f"Loan name must be a string; got {name!r}")
        new_amount = _cents("amount", amount) if amount is not None else self._amount
        new_interest = _non_negative("interest", interest) if interest is not None else self._interest
        new_payment = _cents("payment", payment) if payment is not None else self._payment
        if name is not None:
            self._name = name
        self._amount = new_amount
        self._interest = new_interest
        self._payment = new_payment
        self._notify()

    def subscribe(self, callback: LoanListener) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: LoanListener) -> None:
        self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def interest_decimal(self) -> Decimal:
        """Return the annual rate as a fraction (``4.5`` -> ``0.045``)."""
        return self._interest / Decimal(100)

    def calculate_period_interest(self, days_in_period: int) -> Decimal:
        """Return the simple interest accrued over ``days_in_period`` days.

        The daily rate is the annual rate divided by 365. The result is
        rounded to cents, half up, before it is ever added to a balance.
        """
        days = validate_days(days_in_period)
        raw = self._amount * self.interest_decimal() * Decimal(days) / DAYS_IN_YEAR
        return round_currency(raw)

    def apply_interest(self, days_in_period: int) -> Decimal:
        """Add the period interest to the balance and return it."""
        interest = self.calculate_period_interest(days_in_period)
        self._amount += interest
        self._notify()
        return interest

    def make_payment(self, proposed_amount: Number) -> Decimal:
        """Pay up to ``proposed_amount`` and return what was actually paid.

        The payment is capped at the outstanding balance, so a loan is never
        driven below zero.
        """
        proposed = _cents("payment", proposed_amount)
        paid = min(proposed, self._amount)
        self._amount -= paid
        self._notify()
        return paid

    def is_paid_off(self) -> bool:
        return self._amount == 0

    def clone(self) -> "Loan":
        """Return an independent copy with no listeners attached."""
        return Loan(self._name, self._amount, self._interest, self._payment)

    def serialize_for_url(self) -> str:
        return url_codec.join_loan_token(
            [
                url_codec.encode(self._name),
                format_decimal(self._amount),
                format_decimal(self._interest),
                format_decimal(self._payment),
            ]
        )

    @classmethod
    def from_serialized_url(cls, token: str) -> "Loan":
        """Build a loan from a ``name|amount|interest|payment`` token."""
        name, amount, interest, payment = url_codec.split_loan_token(token)
        try:
            return cls(url_codec.decode(name), amount, interest, payment)
        except ParseError:
            logger.debug("Rejected loan token %r with a non-numeric field", token)
            raise
        except ValueError as exc:
            raise ParseError(str(exc)) from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "amount": float(self._amount),
            "interest": float(self._interest),
            "payment": float(self._payment),
        }
