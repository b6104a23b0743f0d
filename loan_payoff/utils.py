"""Utility functions for the loan payoff calculator.

This module provides helpers for turning user input into ``Decimal`` values,
rounding currency figures to cents and rendering numbers back to the compact
text used by shareable loan references.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Union

from .errors import ParseError

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def decimal_from_str(value: str, allow_separators: bool = True) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips surrounding whitespace and, unless
    ``allow_separators`` is false, any thousands separators. It raises
    ``ParseError`` if conversion fails or the value is not finite.
    """
    try:
        cleaned = value.strip()
        if allow_separators:
            cleaned = cleaned.replace(",", "")
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ParseError(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ParseError(f"Invalid numeric value: {value!r}")
    return result


def to_decimal(value: Number) -> Decimal:
    """Coerce ``value`` into a ``Decimal``.

    Floats go through their ``repr`` so that ``4.5`` becomes ``Decimal("4.5")``
    instead of its binary expansion. Strings must be plain numbers; thousands
    separators are rejected. Booleans are rejected even though they are
    ``int`` subclasses.
    """
    if isinstance(value, bool):
        raise ParseError(f"Invalid numeric value: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ParseError(f"Invalid numeric value: {value!r}")
        return value
    if isinstance(value, (int, float)):
        return decimal_from_str(repr(value))
    if isinstance(value, str):
        return decimal_from_str(value, allow_separators=False)
    raise ParseError(f"Invalid numeric value: {value!r}")


def round_currency(value: Decimal) -> Decimal:
    """Round a currency figure to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_decimal(value: Decimal) -> str:
    """Render ``value`` without exponent or trailing zeros.

    ``Decimal("1000.00")`` becomes ``"1000"`` and ``Decimal("5.10")`` becomes
    ``"5.1"``.
    """
    normalized = value.normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")
