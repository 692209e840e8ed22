"""
Star scoring for the six Daily Challenge mini-games.

Maximum stars by difficulty:
- trivia: 2 (1 base + 1 if answered in under 5 s)
- picture (heritage): 3 (2 base + 1 time)
- outlines, capitals: 4 (3 base + 1 time)
- find: 5 (3 base + 2 time)
- connect: 5 (par based, see routecore.scoring.route_stars)
"""
from __future__ import annotations

from typing import Any, Mapping

from routecore.scoring import route_stars

MAX_STARS = {
    'trivia': 2,
    'picture': 3,
    'outlines': 4,
    'capitals': 4,
    'find': 5,
    'connect': 5,
}
TOTAL_STARS = sum(MAX_STARS.values())

BASE_STARS = {
    'picture': 2,
    'outlines': 3,
    'capitals': 3,
    'find': 3,
}

# (minimum stars, rating, emoji), best first
RATINGS = [
    (21, 'Geography Master', '🏆'),
    (18, 'World Expert', '⭐'),
    (14, 'Globe Trotter', '🌟'),
    (10, 'Explorer', '✨'),
    (6, 'Traveler', '🎯'),
    (0, 'Tourist', '🗺️'),
]


def calculate_stars(result: Mapping[str, Any], game_id: str) -> int:
    """
    Stars earned for one mini-game result.

    Args:
        result: Mapping with ``correct`` and optionally ``time``,
            ``timeLimit``, ``usedHint`` and ``parDiff``
        game_id: One of the keys of MAX_STARS

    Returns:
        Stars between 0 and max_stars(game_id)
    """
    if game_id not in MAX_STARS:
        raise ValueError(f"Unknown game id {game_id!r}")
    if not result.get("correct"):
        return 0

    elapsed = result.get("time")

    if game_id == 'trivia':
        return 2 if elapsed is not None and elapsed < 5 else 1

    if result.get("parDiff") is not None:
        return route_stars(True, result["parDiff"])

    stars = BASE_STARS.get(game_id, 3)

    time_limit = result.get("timeLimit")
    if time_limit and elapsed is not None:
        if game_id == 'find':
            if elapsed < 5:
                stars += 2
            elif elapsed < 10:
                stars += 1
        elif elapsed / time_limit < 0.5:
            stars += 1

    if result.get("usedHint"):
        stars -= 1

    return max(0, stars)


def max_stars(game_id: str) -> int:
    return MAX_STARS.get(game_id, 5)


def rating(stars: int) -> str:
    return next(name for minimum, name, _ in RATINGS if stars >= minimum)


def rating_emoji(stars: int) -> str:
    return next(emoji for minimum, _, emoji in RATINGS if stars >= minimum)


def format_time(seconds: float) -> str:
    """Format seconds as M:SS."""
    total = int(seconds)
    return f"{total // 60}:{total % 60:02d}"
