"""Codec for the shareable loan reference format.

A single loan is written as ``name|amount|interest|payment`` and a loan set
joins those tokens with ``&``::

    Something+with+a+space|1000|4.5|6&Other|2000|2.5|5.1

Only spaces in names are escaped (as ``+``). Other characters pass through
unchanged, so names containing a separator or a literal ``+`` cannot be
written at all.
"""

from __future__ import annotations

import logging
from typing import List

from .errors import ParseError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
LOAN_SEPARATOR = "&"
FIELD_COUNT = 4
RESERVED = (FIELD_SEPARATOR, LOAN_SEPARATOR, "+")


def encode(name: str) -> str:
    """Return ``name`` with spaces replaced by ``+``."""
    if any(char in name for char in RESERVED):
        raise ParseError(f"Loan name {name!r} cannot contain any of '|', '&' or '+'")
    return name.replace(" ", "+")


def decode(text: str) -> str:
    """Return ``text`` with ``+`` replaced by spaces."""
    return text.replace("+", " ")


def split_loan_token(token: str) -> List[str]:
    """Split a single loan token into its four raw fields."""
    fields = token.split(FIELD_SEPARATOR)
    if len(fields) != FIELD_COUNT:
        logger.debug("Rejected loan token %r with %d fields", token, len(fields))
        raise ParseError(
            f"Loan must be in NAME|AMOUNT|INTEREST|PAYMENT format; got {token!r}"
        )
    return fields


def join_loan_token(fields: List[str]) -> str:
    return FIELD_SEPARATOR.join(fields)


def split_loan_set(text: str) -> List[str]:
    """Split a loan set reference into loan tokens.

    A blank reference is an empty set. Empty tokens between separators
    (``a&&b``) are malformed.
    """
    if not text.strip():
        return []
    tokens = text.strip().split(LOAN_SEPARATOR)
    if any(not token for token in tokens):
        raise ParseError(f"Empty loan entry in reference {text!r}")
    return tokens


def join_loan_set(tokens: List[str]) -> str:
    return LOAN_SEPARATOR.join(tokens)
