"""Round state and move logic for Connect the Countries."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from routecore.constants import UNREACHABLE_PAR, RouteConfig
from routecore.graph import Adjacency, canonicalize, find_shortest_path
from routecore.paths import TaggedCountry, borders_any, divergence_index, intermediates, tag_optimal, tag_route
from routecore.results import Action, GiveUpResult, HintResult, MoveResult, Progress, RouteSetup, UndoResult

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathSnapshot:
    path: List[str]
    wrong_guesses: int


class RouteEngine:
    """
    Route-building engine for one player and one round at a time.

    The engine never raises for gameplay conditions: every operation
    returns a result whose ``action`` tells the caller what happened.
    Checks that depend on name resolution (unknown country, country
    already on the route, typing the destination) belong to the caller.

    Attributes:
        neighbors: Adjacency mapping the engine searches and validates against
        config: Round configuration (hint budget, neighbor ordering)
        start: First country of the round
        end: Destination of the round
        current_path: Countries built so far, always starting with ``start``
        optimal_path: Shortest route found when the round was set, or None
        par: Intermediate countries on ``optimal_path`` (999 if unreachable)
        path_history: Snapshots pushed before every successful append
        hints_used: Hints spent in the round
        wrong_guesses: Rejected guesses recorded by the caller
        round_ended: True once the round completed or was given up
    """

    def __init__(
        self,
        neighbors: Adjacency,
        config: Optional[RouteConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        on_complete: Optional[Callable[[MoveResult | GiveUpResult], None]] = None,
    ) -> None:
        self.config: RouteConfig = config or RouteConfig()
        self.neighbors: Adjacency = canonicalize(neighbors) if self.config.canonical_order else neighbors
        self.clock = clock
        self.on_complete = on_complete

        self.start: Optional[str] = None
        self.end: Optional[str] = None
        self.current_path: List[str] = []
        self.optimal_path: Optional[List[str]] = None
        self.par: int = 0
        self.path_history: List[PathSnapshot] = []
        self.hints_used: int = 0
        self.wrong_guesses: int = 0
        self.round_ended: bool = True
        self.started_at: float = 0.0

    @property
    def max_hints(self) -> int:
        return self.config.max_hints

    def set_route(self, start: str, end: str) -> RouteSetup:
        """
        Start a new round from *start* to *end*.

        :param start: The country the route starts from.
        :param end: The destination country, distinct from start.
        :return: The round setup with par and optimal path.
        :rtype: RouteSetup
        """
        self.start = start
        self.end = end
        self.current_path = [start]
        self.path_history = []
        self.hints_used = 0
        self.wrong_guesses = 0
        self.round_ended = False

        self.optimal_path = self.find_shortest_path(start, end)
        self.par = intermediates(self.optimal_path) if self.optimal_path else UNREACHABLE_PAR
        self.started_at = self.clock()

        if self.optimal_path is None:
            log.warning("No land route between %s and %s", start, end)
        else:
            log.info("New round %s -> %s (par %d)", start, end, self.par)

        return RouteSetup(start=start, end=end, par=self.par, optimal_path=self._optimal_copy())

    def find_shortest_path(self, start: str, end: str) -> Optional[List[str]]:
        return find_shortest_path(self.neighbors, start, end)

    def elapsed(self) -> float:
        """Seconds since the current round was set."""
        return self.clock() - self.started_at

    def can_add_country(self, country: str) -> bool:
        """
        Check whether *country* borders any country already on the route.

        Branching is allowed: the candidate does not have to border the
        last country added.

        :param country: Candidate country name.
        :return: Whether the move is geographically valid.
        :rtype: bool
        """
        return borders_any(self.neighbors, country, self.current_path)

    def add_country(self, country: str) -> MoveResult:
        """
        Add *country* to the route, completing the round if it borders the destination.

        :param country: Candidate country name, already resolved by the caller.
        :return: ``invalid``, ``added``, ``complete`` or ``ignore``.
        :rtype: MoveResult
        """
        if self.round_ended:
            return MoveResult(action=Action.IGNORE)

        if not self.can_add_country(country):
            log.debug("Rejected %s: no border with %s", country, self.current_path)
            return MoveResult(
                action=Action.INVALID,
                message=f"{country} doesn't border any country on your route",
            )

        self.path_history.append(PathSnapshot(path=list(self.current_path), wrong_guesses=self.wrong_guesses))
        self.current_path.append(country)

        if self.end in self.neighbors.get(country, ()):
            return self._complete()

        return MoveResult(
            action=Action.ADDED,
            country=country,
            route=list(self.current_path),
            steps=len(self.current_path) - 1,
        )

    def _complete(self) -> MoveResult:
        self.current_path.append(self.end)
        self.round_ended = True
        steps = intermediates(self.current_path)

        result = MoveResult(
            action=Action.COMPLETE,
            route=list(self.current_path),
            steps=steps,
            par=self.par,
            par_diff=steps - self.par,
            optimal_path=self._optimal_copy(),
            time=self.elapsed(),
            hints_used=self.hints_used,
        )
        log.info("Route complete in %d step(s), par %d", steps, self.par)

        if self.on_complete:
            self.on_complete(result)
        return result

    def record_wrong_guess(self) -> int:
        """Count a guess the caller rejected; returns the new total."""
        if not self.round_ended:
            self.wrong_guesses += 1
        return self.wrong_guesses

    def undo(self) -> UndoResult:
        """
        Remove the last country added and restore the state before it.

        Hints already spent stay spent.

        :return: ``undone``, ``cannot_undo`` or ``ignore``.
        :rtype: UndoResult
        """
        if self.round_ended:
            return UndoResult(action=Action.IGNORE)
        if len(self.current_path) <= 1:
            return UndoResult(action=Action.CANNOT_UNDO)

        removed = self.current_path[-1]
        snapshot = self.path_history.pop()
        self.current_path = list(snapshot.path)
        self.wrong_guesses = snapshot.wrong_guesses

        return UndoResult(action=Action.UNDONE, removed=removed, route=list(self.current_path))

    def get_hint(self) -> HintResult:
        """
        Spend a hint.

        On the optimal route the hint names the next optimal country;
        off it, the hint only advises undoing.

        :return: ``hint``, ``no_hints_left``, ``no_hint_available`` or ``ignore``.
        :rtype: HintResult
        """
        if self.round_ended:
            return HintResult(action=Action.IGNORE)
        if self.hints_used >= self.max_hints:
            return HintResult(action=Action.NO_HINTS_LEFT)
        if not self.optimal_path or len(self.current_path) >= len(self.optimal_path):
            return HintResult(action=Action.NO_HINT_AVAILABLE)

        self.hints_used += 1
        remaining = self.max_hints - self.hints_used
        prefix = divergence_index(self.current_path, self.optimal_path)

        if prefix == len(self.current_path):
            next_country = self.optimal_path[prefix]
            return HintResult(
                action=Action.HINT,
                country=next_country,
                message=f"Hint {self.hints_used}/{self.max_hints}: Try {next_country}",
                hints_remaining=remaining,
            )

        return HintResult(
            action=Action.HINT,
            message=f"Hint {self.hints_used}/{self.max_hints}: You're off the optimal path. Try undoing.",
            hints_remaining=remaining,
        )

    def give_up(self) -> GiveUpResult:
        """
        End the round without completing it and reveal the optimal route.

        :return: ``gave_up``, or ``ignore`` if the round already ended.
        :rtype: GiveUpResult
        """
        if self.round_ended:
            return GiveUpResult(action=Action.IGNORE)

        self.round_ended = True
        result = GiveUpResult(
            action=Action.GAVE_UP,
            route=list(self.current_path),
            optimal_path=self._optimal_copy(),
            par=self.par,
            time=self.elapsed(),
            hints_used=self.hints_used,
        )
        log.info("Gave up on %s -> %s after %d step(s)", self.start, self.end, len(self.current_path) - 1)

        if self.on_complete:
            self.on_complete(result)
        return result

    def handle_timeout(self) -> GiveUpResult:
        return self.give_up()

    def get_progress(self) -> Progress:
        steps = len([c for c in self.current_path[1:] if c != self.end])
        return Progress(
            route=list(self.current_path),
            steps=steps,
            par=self.par,
            hints_used=self.hints_used,
            hints_remaining=self.max_hints - self.hints_used,
        )

    def _optimal_copy(self) -> Optional[List[str]]:
        return list(self.optimal_path) if self.optimal_path is not None else None

    def get_optimal_path(self) -> Optional[List[str]]:
        return self._optimal_copy()

    def render_tags(self, hint: Optional[str] = None) -> List[TaggedCountry]:
        """Countries of the current route tagged for the renderer."""
        if self.end is None:
            return []
        return tag_route(self.current_path, self.end, hint=hint)

    def optimal_tags(self) -> List[TaggedCountry]:
        return tag_optimal(self.optimal_path) if self.optimal_path else []
