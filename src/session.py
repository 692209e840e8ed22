"""
Session host for Connect the Countries.

Sits between the player's raw input and the RouteEngine: resolves typed
names, applies the checks the engine leaves to its caller, keeps the
wrong-guess count, enforces the time limit and scores the finished round.
"""
from __future__ import annotations

import enum
import json
import logging
import re
import time
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Optional

from route_game import RouteEngine
from routecore.constants import POINTS_TABLE, UNREACHABLE_PAR, RouteConfig, StandalonePoints
from routecore.results import Action, GiveUpResult, HintResult, MoveResult, RouteSetup, UndoResult
from routecore.scoring import RoundOutcome, ScoreBreakdown, route_stars, score_round

log = logging.getLogger(__name__)


def normalize(name: str) -> str:
    """Lowercase, strip accents, turn non-letters into spaces and collapse whitespace."""
    decomposed = unicodedata.normalize("NFD", str(name).lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"\s+", " ", re.sub(r"[^a-z ]", " ", stripped)).strip()


def load_aliases(aliases_file: Path | str) -> Dict[str, str]:
    with Path(aliases_file).open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{aliases_file}: expected a JSON object of alias -> country")
    return {str(alias): str(country) for alias, country in raw.items()}


class CountryResolver:
    """Map typed input to canonical country names, aliases first."""

    def __init__(self, countries: Iterable[str], aliases: Optional[Mapping[str, str]] = None) -> None:
        self._by_norm: Dict[str, str] = {normalize(c): c for c in countries}
        self._aliases: Dict[str, str] = {}
        for alias, official in (aliases or {}).items():
            # Only keep aliases that point at a known country
            if normalize(official) in self._by_norm:
                self._aliases[normalize(alias)] = self._by_norm[normalize(official)]

    def resolve(self, text: str) -> Optional[str]:
        key = normalize(text)
        if not key:
            return None
        return self._aliases.get(key) or self._by_norm.get(key)


class GuessStatus(str, enum.Enum):
    NOT_FOUND = 'not_found'
    ALREADY_USED = 'already_used'
    DESTINATION = 'destination'
    INVALID = 'invalid'
    ADDED = 'added'
    COMPLETE = 'complete'
    IGNORE = 'ignore'


@dataclass(frozen=True)
class GuessOutcome:
    status: GuessStatus
    message: str
    country: Optional[str] = None
    move: Optional[MoveResult] = None
    par_hint: Optional[str] = None  # Set on the first rejected guess of a round

    @property
    def rejected(self) -> bool:
        return self.status in (
            GuessStatus.NOT_FOUND,
            GuessStatus.ALREADY_USED,
            GuessStatus.DESTINATION,
            GuessStatus.INVALID,
        )


class RouteSession:
    """
    One player's standalone or daily round.

    Attributes:
        engine: The route engine holding the round state
        resolver: Typed-name resolver
        config: Round configuration, including the optional time limit
        points: Points table for the standalone policy
        outcome: Scoring input once the round is over, else None
    """

    def __init__(
        self,
        engine: RouteEngine,
        resolver: CountryResolver,
        config: Optional[RouteConfig] = None,
        points: StandalonePoints = POINTS_TABLE,
    ) -> None:
        self.engine = engine
        self.resolver = resolver
        self.config = config or engine.config
        self.points = points
        self.setup: Optional[RouteSetup] = None
        self.outcome: Optional[RoundOutcome] = None
        self.final: Optional[MoveResult | GiveUpResult] = None
        self.par_hint_shown = False

    @classmethod
    def from_neighbors(
        cls,
        neighbors: Mapping[str, list],
        aliases: Optional[Mapping[str, str]] = None,
        config: Optional[RouteConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "RouteSession":
        engine = RouteEngine(neighbors, config=config, clock=clock)
        return cls(engine, CountryResolver(neighbors, aliases), config=config)

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def start(self, start: str, end: str) -> RouteSetup:
        """
        Set up a round; a round without any land route is given up at once.

        Returns:
            The engine's RouteSetup
        """
        self.outcome = None
        self.final = None
        self.par_hint_shown = False
        self.setup = self.engine.set_route(start, end)
        if self.setup.par == UNREACHABLE_PAR:
            log.warning("Round %s -> %s is unplayable, giving up", start, end)
            self.give_up()
        return self.setup

    def guess(self, text: str) -> GuessOutcome:
        """Resolve *text* and try to add it to the route."""
        engine = self.engine
        if self.finished or engine.round_ended:
            return GuessOutcome(GuessStatus.IGNORE, "The round is over")

        country = self.resolver.resolve(text)
        if country is None:
            return self._reject(GuessStatus.NOT_FOUND, "Country not found. Check spelling.")
        if country in engine.current_path:
            return self._reject(GuessStatus.ALREADY_USED, f"{country} is already on your route", country)
        if country == engine.end:
            return self._reject(
                GuessStatus.DESTINATION,
                f"Don't type the destination! Type a country that borders {engine.end}",
                country,
            )

        move = engine.add_country(country)
        if move.action is Action.INVALID:
            return self._reject(GuessStatus.INVALID, move.message or "", country)
        if move.action is Action.COMPLETE:
            self._finish(move, correct=True)
            return GuessOutcome(GuessStatus.COMPLETE, f"{country} borders {engine.end}!", country, move)
        if move.action is Action.ADDED:
            return GuessOutcome(GuessStatus.ADDED, f"{country} added to route", country, move)
        return GuessOutcome(GuessStatus.IGNORE, "The round is over", country, move)

    def _reject(self, status: GuessStatus, message: str, country: Optional[str] = None) -> GuessOutcome:
        self.engine.record_wrong_guess()
        return GuessOutcome(status, message, country, par_hint=self._reveal_par())

    def _reveal_par(self) -> Optional[str]:
        """Tell the player how long the optimal route is, once per round."""
        if self.par_hint_shown or self.engine.par == UNREACHABLE_PAR:
            return None
        self.par_hint_shown = True
        par = self.engine.par
        return f"The optimal route needs {par} countr{'y' if par == 1 else 'ies'} in between"

    def undo(self) -> UndoResult:
        return self.engine.undo()

    def hint(self) -> HintResult:
        return self.engine.get_hint()

    def give_up(self) -> GiveUpResult:
        result = self.engine.give_up()
        if result.action is Action.GAVE_UP:
            self._finish(result, correct=False)
        return result

    def tick(self) -> Optional[GiveUpResult]:
        """Check the time limit; hands the timeout to the engine once it has passed."""
        limit = self.config.time_limit
        if limit is None or self.finished or self.engine.round_ended:
            return None
        if self.engine.elapsed() < limit:
            return None
        log.info("Time limit of %ss reached", limit)
        result = self.engine.handle_timeout()
        if result.action is Action.GAVE_UP:
            self._finish(result, correct=False)
        return result

    def _finish(self, result: MoveResult | GiveUpResult, correct: bool) -> None:
        self.final = result
        par_diff = result.par_diff if isinstance(result, MoveResult) and result.par_diff is not None else UNREACHABLE_PAR
        self.outcome = RoundOutcome(
            correct=correct,
            par_diff=par_diff if correct else UNREACHABLE_PAR,
            hints_used=result.hints_used or 0,
            time=result.time,
            wrong_guesses=self.engine.wrong_guesses,
        )

    def score(self) -> ScoreBreakdown:
        """Standalone points for the finished round."""
        if self.outcome is None:
            raise ValueError("The round is still in progress")
        return score_round(self.outcome, self.points)

    def stars(self) -> int:
        if self.outcome is None:
            raise ValueError("The round is still in progress")
        return route_stars(self.outcome.correct, self.outcome.par_diff)

    def daily_result(self) -> Dict[str, object]:
        """Payload for the Daily Challenge: correct, time, timeLimit, parDiff, usedHint."""
        if self.outcome is None:
            raise ValueError("The round is still in progress")
        return self.outcome.to_daily_payload()
