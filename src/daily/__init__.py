"""Daily Challenge support for the connect game."""

from daily.history import HistoryStore
from daily.pairs import RoutePair, build_route_pool, pick_daily_route, pick_random_route
from daily.seeded_random import SeededRandom, challenge_number, date_to_seed, today
from daily.share import share_text
from daily.stars import calculate_stars, format_time, max_stars, rating, rating_emoji

__all__ = [
    "HistoryStore",
    "RoutePair",
    "build_route_pool",
    "pick_daily_route",
    "pick_random_route",
    "SeededRandom",
    "challenge_number",
    "date_to_seed",
    "today",
    "share_text",
    "calculate_stars",
    "format_time",
    "max_stars",
    "rating",
    "rating_emoji",
]
