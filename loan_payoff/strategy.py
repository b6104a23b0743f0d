"""Payment allocation strategies.

A strategy decides in which order loans receive money from the shared
payment pool each period. Strategies look only at the loans they are given
and keep no state between calls, so the same instance can be reused across
periods and schedules. Sorting is stable: loans that tie keep their
insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence

from .loan import Loan


class Strategy(Protocol):
    """Orders loans by payment priority for a single period."""

    name: str

    def order(self, loans: Sequence[Loan]) -> List[int]:  # pragma: no cover - interface
        """Return indices into ``loans``, highest priority first."""
        ...


@dataclass(frozen=True)
class SequentialStrategy:
    """Pay loans in the order they were added."""

    name: str = "sequential"

    def order(self, loans: Sequence[Loan]) -> List[int]:
        return list(range(len(loans)))


@dataclass(frozen=True)
class HighestInterestFirst:
    """Avalanche: direct surplus money at the highest rate first."""

    name: str = "avalanche"

    def order(self, loans: Sequence[Loan]) -> List[int]:
        return sorted(range(len(loans)), key=lambda i: loans[i].interest, reverse=True)


@dataclass(frozen=True)
class LowestBalanceFirst:
    """Snowball: direct surplus money at the smallest balance first."""

    name: str = "snowball"

    def order(self, loans: Sequence[Loan]) -> List[int]:
        return sorted(range(len(loans)), key=lambda i: loans[i].amount)


STRATEGIES: Dict[str, Strategy] = {
    "sequential": SequentialStrategy(),
    "avalanche": HighestInterestFirst(),
    "snowball": LowestBalanceFirst(),
}

DEFAULT_STRATEGY = "sequential"


def get_strategy(name: str) -> Strategy:
    """Return the strategy registered under ``name``."""
    try:
        return STRATEGIES[name.strip().lower()]
    except KeyError:
        choices = ", ".join(sorted(STRATEGIES))
        raise ValueError(f"Unknown payment strategy {name!r}; choose one of {choices}") from None
