"""
Play Connect the Countries in the terminal.

Type a country that borders your route to extend it; the destination is
added automatically once you name one of its neighbors.
Commands: ``:undo``, ``:hint``, ``:giveup``, ``:route``.

The default data files are read from the ``data/`` directory of a source
checkout; pass ``--neighbors``, ``--aliases`` and ``--positions`` when
running from an installed copy.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, List, Optional

from country_map import CountryMap
from daily.history import HistoryStore
from daily.pairs import pick_daily_route, pick_random_route
from daily.seeded_random import SeededRandom, date_to_seed, today
from daily.share import share_text
from logging_config import configure_logging
from routecore.constants import MAX_INTERMEDIATES, MIN_INTERMEDIATES, RouteConfig
from routecore.results import Action
from session import GuessStatus, RouteSession, load_aliases

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Connect the Countries: build the shortest land route")
    parser.add_argument(
        "--neighbors",
        type=Path,
        default=DATA_DIR / "countries-neighbors.json",
        help="Adjacency JSON or CSV edge list",
    )
    parser.add_argument(
        "--aliases",
        type=Path,
        default=DATA_DIR / "aliases.json",
        help="Alias JSON (alias -> country)",
    )
    parser.add_argument(
        "--positions",
        type=Path,
        default=DATA_DIR / "country-positions.json",
        help="Country positions JSON used when drawing",
    )
    parser.add_argument("--start", type=str, default=None, help="Start country")
    parser.add_argument("--end", type=str, default=None, help="Destination country")
    parser.add_argument(
        "--daily",
        nargs="?",
        const="today",
        default=None,
        help="Play the daily route for DATE (YYYY-MM-DD, default today)",
    )
    parser.add_argument(
        "--history",
        type=Path,
        default=Path("daily-history.json"),
        help="Where daily results are stored",
    )
    parser.add_argument(
        "--min-intermediates",
        type=int,
        default=MIN_INTERMEDIATES,
        help="Fewest countries between start and destination for generated rounds",
    )
    parser.add_argument(
        "--max-intermediates",
        type=int,
        default=MAX_INTERMEDIATES,
        help="Most countries between start and destination for generated rounds",
    )
    parser.add_argument("--time-limit", type=float, default=None, help="Seconds before the round times out")
    parser.add_argument("--canonical", action="store_true", help="Sort neighbor lists before computing par")
    parser.add_argument("--draw", type=Path, default=None, help="Save the final route drawing to this file")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser.parse_args(argv)


def play_round(session: RouteSession, read: Optional[Callable[[str], str]] = None) -> None:
    """Read guesses until the round completes, times out or is given up."""
    read = read or input
    engine = session.engine
    while not session.finished:
        try:
            text = read("> ").strip()
        except EOFError:
            session.give_up()
            break

        if session.tick() is not None:
            print("⏰ Time's up!")
            break
        if not text:
            continue

        if text == ":undo":
            result = session.undo()
            if result.action is Action.UNDONE:
                print(f"↶ Removed {result.removed}: {' → '.join(result.route or [])}")
            else:
                print("Nothing to undo")
        elif text == ":hint":
            hint = session.hint()
            if hint.action is Action.HINT:
                print(f"💡 {hint.message}")
            elif hint.action is Action.NO_HINTS_LEFT:
                print("💡 No more hints available")
            else:
                print("💡 No hint available")
        elif text == ":giveup":
            session.give_up()
        elif text == ":route":
            print(" → ".join(engine.current_path) + f" → ? → {engine.end}")
        else:
            outcome = session.guess(text)
            prefix = "❌" if outcome.rejected else "✅"
            print(f"{prefix} {outcome.message}")
            if outcome.par_hint:
                print(f"💡 {outcome.par_hint}")
            if outcome.status is GuessStatus.ADDED:
                print(" → ".join(engine.current_path) + f" → ? → {engine.end}")


def report(session: RouteSession) -> None:
    outcome = session.outcome
    engine = session.engine
    if outcome is None:
        return

    if outcome.correct:
        print(f"\nRoute: {' → '.join(engine.current_path)}")
        print(f"Steps: {len(engine.current_path) - 2} (par {engine.par}, {outcome.par_diff:+d})")
    else:
        optimal = engine.get_optimal_path()
        print("\nOptimal route: " + (" → ".join(optimal) if optimal else "none, these countries are not connected"))

    breakdown = session.score()
    print(f"Points: {breakdown.total_score}  Stars: {session.stars()}")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(level=args.log_level)

    country_map = CountryMap()
    positions = args.positions if args.positions.exists() else None
    country_map.load_graph(args.neighbors, positions)
    neighbors = country_map.get_neighbors()
    aliases = load_aliases(args.aliases) if args.aliases.exists() else {}

    config = RouteConfig(
        min_intermediates=args.min_intermediates,
        max_intermediates=args.max_intermediates,
        time_limit=args.time_limit,
        canonical_order=args.canonical,
    )
    session = RouteSession.from_neighbors(neighbors, aliases=aliases, config=config)

    day: Optional[str] = None
    if args.daily:
        day = today() if args.daily == "today" else args.daily
        store = HistoryStore(args.history)
        if store.has_completed(day):
            print(f"Daily challenge for {day} already completed.")
            return
        pair = pick_daily_route(
            country_map.countries(),
            neighbors,
            SeededRandom(date_to_seed(day)),
            min_intermediates=config.min_intermediates,
            max_intermediates=config.max_intermediates,
        )
        start, end = pair.start, pair.end
    elif args.start and args.end:
        start = session.resolver.resolve(args.start) or args.start
        end = session.resolver.resolve(args.end) or args.end
    else:
        pair = pick_random_route(
            neighbors,
            min_intermediates=config.min_intermediates,
            max_intermediates=config.max_intermediates,
        )
        start, end = pair.start, pair.end

    setup = session.start(start, end)
    print(f"Connect {setup.start} → {setup.end}. Par: {setup.par} countr{'y' if setup.par == 1 else 'ies'}.")

    play_round(session)
    report(session)

    if day is not None and session.outcome is not None:
        stars = session.stars()
        result = {"gameId": "connect", "stars": stars, **session.daily_result()}
        stats = HistoryStore(args.history).save_result(day, stars, float(result["time"]), [result])
        print("\n" + share_text(day, stars, float(result["time"]), [result], stats))

    if args.draw is not None:
        tags = session.engine.render_tags() if session.outcome and session.outcome.correct else session.engine.optimal_tags()
        country_map.draw_route(tags, title=f"{start} → {end}", save_path=args.draw)


if __name__ == "__main__":
    main()
