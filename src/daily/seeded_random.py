"""
Seeded random numbers for the Daily Challenge.

Every player must get the same route on the same date, so the daily
pick is driven by a linear congruential generator seeded with the date
(``2026-02-06`` -> ``20260206``) rather than by :mod:`random`.
"""
from __future__ import annotations

from datetime import date as _date
from datetime import datetime
from typing import List, Sequence, TypeVar

T = TypeVar("T")

MODULUS: int = 2147483647
MULTIPLIER: int = 1103515245
INCREMENT: int = 12345
LAUNCH_DATE: str = "2026-01-01"


class SeededRandom:
    """Deterministic LCG with the helpers the daily pick needs."""

    def __init__(self, seed: int) -> None:
        # Truncated remainder: a negative seed stays negative and is shifted up below
        self.seed = abs(seed) % MODULUS * (-1 if seed < 0 else 1)
        if self.seed <= 0:
            self.seed += MODULUS - 1

    def next(self) -> float:
        """Next value in [0, 1)."""
        self.seed = (self.seed * MULTIPLIER + INCREMENT) % MODULUS
        return self.seed / MODULUS

    def next_int(self, low: int, high: int) -> int:
        """Integer in [low, high)."""
        return int(self.next() * (high - low)) + low

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle into a new list; *items* is left untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i + 1)
            result[i], result[j] = result[j], result[i]
        return result

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items))]

    def sample(self, items: Sequence[T], count: int) -> List[T]:
        return self.shuffle(items)[: min(count, len(items))]


def _parse(date_string: str) -> _date:
    try:
        return datetime.strptime(date_string, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f"Expected a YYYY-MM-DD date, got {date_string!r}") from exc


def date_to_seed(date_string: str) -> int:
    return int(_parse(date_string).strftime("%Y%m%d"))


def today() -> str:
    """Today's local date as YYYY-MM-DD."""
    return _date.today().isoformat()


def challenge_number(date_string: str, launch_date: str = LAUNCH_DATE) -> int:
    """1-based number of the challenge for *date_string*, counted from the launch date."""
    days = (_parse(date_string) - _parse(launch_date)).days
    return max(1, days + 1)
