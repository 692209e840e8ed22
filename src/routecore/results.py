"""Result dataclasses returned by the route engine."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class Action(str, enum.Enum):
    IGNORE = 'ignore'
    INVALID = 'invalid'
    ADDED = 'added'
    COMPLETE = 'complete'
    UNDONE = 'undone'
    CANNOT_UNDO = 'cannot_undo'
    HINT = 'hint'
    NO_HINTS_LEFT = 'no_hints_left'
    NO_HINT_AVAILABLE = 'no_hint_available'
    GAVE_UP = 'gave_up'


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class RouteSetup:
    start: str
    end: str
    par: int
    optimal_path: Optional[List[str]]

    @property
    def reachable(self) -> bool:
        return self.optimal_path is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "par": self.par,
            "optimalPath": self.optimal_path,
        }


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of ``RouteEngine.add_country``.

    Attributes:
        action: ``invalid``, ``added``, ``complete`` or ``ignore``
        country: Country that was added (``added``)
        route: Route after the move (``added`` and ``complete``)
        steps: Intermediate countries in the route
        par: Intermediate countries on the optimal route (``complete``)
        par_diff: steps - par (``complete``)
        optimal_path: Optimal route of the round (``complete``)
        time: Seconds since the round started (``complete``)
        hints_used: Hints spent in the round (``complete``)
        message: Human-readable explanation (``invalid``)
    """

    action: Action
    country: Optional[str] = None
    route: Optional[List[str]] = None
    steps: Optional[int] = None
    par: Optional[int] = None
    par_diff: Optional[int] = None
    optimal_path: Optional[List[str]] = None
    time: Optional[float] = None
    hints_used: Optional[int] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "action": self.action.value,
            "country": self.country,
            "route": self.route,
            "steps": self.steps,
            "par": self.par,
            "parDiff": self.par_diff,
            "optimalPath": self.optimal_path,
            "time": self.time,
            "hintsUsed": self.hints_used,
            "message": self.message,
        })


@dataclass(frozen=True)
class UndoResult:
    action: Action
    removed: Optional[str] = None
    route: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"action": self.action.value, "removed": self.removed, "route": self.route})


@dataclass(frozen=True)
class HintResult:
    action: Action
    country: Optional[str] = None
    message: Optional[str] = None
    hints_remaining: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({
            "action": self.action.value,
            "country": self.country,
            "message": self.message,
            "hintsRemaining": self.hints_remaining,
        })


@dataclass(frozen=True)
class GiveUpResult:
    action: Action
    route: List[str] = field(default_factory=list)
    optimal_path: Optional[List[str]] = None
    par: Optional[int] = None
    time: Optional[float] = None
    hints_used: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        if self.action is not Action.GAVE_UP:
            return {"action": self.action.value}
        return {
            "action": self.action.value,
            "route": self.route,
            "optimalPath": self.optimal_path,
            "par": self.par,
            "time": self.time,
            "hintsUsed": self.hints_used,
        }


@dataclass(frozen=True)
class Progress:
    route: List[str]
    steps: int
    par: int
    hints_used: int
    hints_remaining: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route": self.route,
            "steps": self.steps,
            "par": self.par,
            "hintsUsed": self.hints_used,
            "hintsRemaining": self.hints_remaining,
        }
