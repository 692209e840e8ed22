"""Shareable text summary of a finished Daily Challenge."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping

from daily.seeded_random import challenge_number
from daily.stars import TOTAL_STARS, format_time, max_stars, rating
from routecore.constants import UNREACHABLE_PAR

GAME_EMOJIS = {
    'find': '🗺️',
    'trivia': '📚',
    'outlines': '🌍',
    'picture': '🖼️',
    'capitals': '🏛️',
    'connect': '🔗',
}

GAME_NAMES = {
    'find': 'Find Country',
    'trivia': 'Trivia',
    'outlines': 'Outlines',
    'picture': 'Heritage',
    'capitals': 'Capitals',
    'connect': 'Connect',
}

PLAY_URL = "https://geoquiz.info/daily.html"


def _par_info(result: Mapping[str, Any]) -> str:
    par_diff = result.get("parDiff")
    if par_diff is None:
        return ""
    if par_diff == UNREACHABLE_PAR:
        return " gave up"
    sign = "+" if par_diff > 0 else ""
    return f" par{sign}{par_diff}"


def share_text(
    day: str,
    total_stars: int,
    total_time: float,
    breakdown: List[Dict[str, Any]],
    stats: Mapping[str, Any],
) -> str:
    played = date.fromisoformat(day)
    lines = [
        f"🌍 GeoQuiz Daily Challenge #{challenge_number(day)}",
        f"📅 {played.strftime('%b')} {played.day}, {played.year}",
        "",
        f"⭐ {total_stars}/{TOTAL_STARS} stars in {format_time(total_time)}",
        "",
    ]

    for result in breakdown:
        game_id = result["gameId"]
        stars = int(result.get("stars", 0))
        star_str = "⭐" * stars + "☆" * (max_stars(game_id) - stars)
        elapsed = result.get("time")
        time_str = f"{elapsed:.1f}s" if elapsed is not None else ""
        hint = " 💡" if result.get("usedHint") else ""
        name = GAME_NAMES.get(game_id, game_id).ljust(12)
        lines.append(f"{GAME_EMOJIS.get(game_id, '•')} {name} {star_str} {time_str}{hint}{_par_info(result)}")

    streak = int(stats.get("currentStreak", 0))
    lines += [
        "",
        f"🔥 Streak: {streak} day{'s' if streak != 1 else ''}",
        f"🎯 Rating: {rating(total_stars)}",
        "",
        f"Play at: {PLAY_URL}",
    ]
    return "\n".join(lines)
