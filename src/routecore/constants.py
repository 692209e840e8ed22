"""
Common constants for Connect the Countries game logic.

This module defines shared constants used across the codebase,
including the hint budget, the par sentinel for unreachable routes
and the points/stars tables used by the two scoring policies.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

# Number of hints available in a single round
MAX_HINTS: int = 3

# Par reported when no land route connects start and end
UNREACHABLE_PAR: int = 999

# Bounds on intermediate countries for generated rounds
MIN_INTERMEDIATES: int = 1
MAX_INTERMEDIATES: int = 8


class ColorTag(str, enum.Enum):
    """Color role of a country in a list handed to the renderer."""

    START = 'start'
    END = 'end'
    PATH = 'path'
    HINT = 'hint'
    OPTIMAL = 'optimal'


@dataclass(frozen=True)
class StandalonePoints:
    """
    Points awarded by the standalone Connect the Countries game.

    Rules:
    - optimal route: 5 points
    - +1 if no wrong guess was made before completion
    - +1 if the round took less than 30 seconds
    - non-optimal route: max(1, 5 - par_diff)
    - every hint used costs 1 point, never below 0
    """

    optimal: int = 5
    first_try_bonus: int = 1
    speed_bonus: int = 1
    speed_threshold: float = 30.0
    minimum: int = 1
    hint_penalty: int = 1


@dataclass(frozen=True)
class StarTable:
    """
    Stars awarded by the Daily Challenge for the connect game.

    par_diff 0 gives 5 stars, each extra country costs one star,
    and any completed route is worth at least 1 star.
    """

    optimal: int = 5
    minimum: int = 1

    def __getitem__(self, par_diff: int) -> int:
        """
        Get stars for a completed route.

        Args:
            par_diff: Intermediate countries used minus par

        Returns:
            Stars earned, between minimum and optimal
        """
        return max(self.minimum, self.optimal - max(0, par_diff))


@dataclass
class RouteConfig:
    """Configuration values for a round of Connect the Countries."""

    max_hints: int = MAX_HINTS
    min_intermediates: int = MIN_INTERMEDIATES
    max_intermediates: int = MAX_INTERMEDIATES
    time_limit: Optional[float] = None  # Seconds, None means untimed
    canonical_order: bool = False  # Sort neighbor lists before BFS


POINTS_TABLE = StandalonePoints()
STAR_TABLE = StarTable()
