"""
Scoring utilities shared by the standalone game and the Daily Challenge.

The engine only reports par_diff, time and hints; this module turns a
finished round into points (standalone game) or stars (Daily Challenge).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from routecore.constants import POINTS_TABLE, STAR_TABLE, UNREACHABLE_PAR, StandalonePoints, StarTable


@dataclass(frozen=True)
class RoundOutcome:
    """
    What a scoring policy needs to know about a finished round.

    Attributes:
        correct: True if the route was completed, False on give-up or timeout
        par_diff: Intermediate countries used minus par (999 on give-up)
        hints_used: Hints spent during the round
        time: Seconds taken
        wrong_guesses: Rejected guesses before completion
    """

    correct: bool
    par_diff: int = UNREACHABLE_PAR
    hints_used: int = 0
    time: Optional[float] = None
    wrong_guesses: int = 0

    @property
    def used_hint(self) -> bool:
        return self.hints_used > 0

    def to_daily_payload(self) -> Dict[str, Any]:
        """Payload handed back to the Daily Challenge runner."""
        return {
            "correct": self.correct,
            "time": self.time if self.time is not None else 0,
            "timeLimit": None,
            "parDiff": self.par_diff if self.correct else UNREACHABLE_PAR,
            "usedHint": self.used_hint,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Breakdown of a standalone round score into components.

    Attributes:
        base_points: 5 for an optimal route, max(1, 5 - par_diff) otherwise
        first_try_bonus: +1 on an optimal route without wrong guesses
        speed_bonus: +1 on an optimal route finished under the threshold
        hint_penalty: Points removed for hints
    """

    base_points: int
    first_try_bonus: int
    speed_bonus: int
    hint_penalty: int

    @property
    def total_score(self) -> int:
        """
        Calculate total score from all components.

        Returns:
            Sum of base and bonuses minus the hint penalty, floored at 0
        """
        return max(0, self.base_points + self.first_try_bonus + self.speed_bonus - self.hint_penalty)


def score_round(outcome: RoundOutcome, points: StandalonePoints = POINTS_TABLE) -> ScoreBreakdown:
    """
    Apply the standalone policy to a finished round.

    Args:
        outcome: Result of the round
        points: Points table to use

    Returns:
        ScoreBreakdown, all zeros when the player gave up
    """
    if not outcome.correct:
        return ScoreBreakdown(base_points=0, first_try_bonus=0, speed_bonus=0, hint_penalty=0)

    if outcome.par_diff == 0:
        base = points.optimal
        first_try = points.first_try_bonus if outcome.wrong_guesses == 0 else 0
        fast = outcome.time is not None and outcome.time < points.speed_threshold
        speed = points.speed_bonus if fast else 0
    else:
        base = max(points.minimum, points.optimal - outcome.par_diff)
        first_try = 0
        speed = 0

    return ScoreBreakdown(
        base_points=base,
        first_try_bonus=first_try,
        speed_bonus=speed,
        hint_penalty=points.hint_penalty * outcome.hints_used,
    )


def route_stars(correct: bool, par_diff: Optional[int], stars: StarTable = STAR_TABLE) -> int:
    """Stars for the connect game of the Daily Challenge."""
    if not correct or par_diff is None or par_diff == UNREACHABLE_PAR:
        return 0
    return stars[par_diff]


def final_score(outcome: RoundOutcome) -> int:
    return score_round(outcome).total_score
