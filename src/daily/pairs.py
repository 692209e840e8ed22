"""Start/destination selection for standalone and daily rounds."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

import networkx as nx

from daily.seeded_random import SeededRandom
from routecore.constants import MAX_INTERMEDIATES, MIN_INTERMEDIATES
from routecore.graph import Adjacency, build_graph, find_shortest_path
from routecore.paths import intermediates

log = logging.getLogger(__name__)

FALLBACK_PAIR = ("France", "Germany")


@dataclass(frozen=True)
class RoutePair:
    start: str
    end: str
    difficulty: int  # Intermediate countries on the shortest route


def build_route_pool(
    adjacency: Adjacency,
    min_intermediates: int = MIN_INTERMEDIATES,
    max_intermediates: int = MAX_INTERMEDIATES,
) -> List[RoutePair]:
    """
    Collect every pair of countries whose shortest route has a playable length.

    Pairs are unordered: ``start`` is the country listed first in the
    adjacency mapping. Direct neighbors (0 intermediates) are excluded
    with the default bounds.

    Args:
        adjacency: Mapping of country to neighbor list
        min_intermediates: Fewest countries allowed between start and end
        max_intermediates: Most countries allowed between start and end

    Returns:
        Pairs sorted by difficulty, then by mapping order
    """
    graph = build_graph(adjacency)
    order = {country: i for i, country in enumerate(adjacency)}

    pool: List[RoutePair] = []
    for start in adjacency:
        hops = nx.single_source_shortest_path_length(graph, start, cutoff=max_intermediates + 1)
        for end, distance in hops.items():
            if end not in order or order[end] <= order[start]:
                continue
            between = distance - 1
            if min_intermediates <= between <= max_intermediates:
                pool.append(RoutePair(start=start, end=end, difficulty=between))

    pool.sort(key=lambda pair: pair.difficulty)
    log.debug("Route pool has %d pairs", len(pool))
    return pool


def pick_random_route(
    adjacency: Adjacency,
    rng: Optional[SeededRandom] = None,
    min_intermediates: int = MIN_INTERMEDIATES,
    max_intermediates: int = MAX_INTERMEDIATES,
) -> RoutePair:
    """Pick one pair from the shuffled route pool."""
    pool = build_route_pool(adjacency, min_intermediates, max_intermediates)
    if not pool:
        raise ValueError("No pair of countries has a playable route")
    if rng is None:
        return random.choice(pool)
    return rng.choice(rng.shuffle(pool))


def pick_daily_route(
    countries: Sequence[str],
    adjacency: Adjacency,
    rng: SeededRandom,
    max_attempts: int = 100,
    min_intermediates: int = MIN_INTERMEDIATES,
    max_intermediates: int = MAX_INTERMEDIATES,
) -> RoutePair:
    """
    Draw the daily start and destination with the date-seeded generator.

    Random pairs are drawn until one has a route of playable length or
    ``max_attempts`` draws have been spent; then France -> Germany (or
    the first two countries) is used.
    """
    if len(countries) < 2:
        raise ValueError("At least two countries are needed to pick a route")

    for _ in range(max_attempts):
        start = rng.choice(countries)
        end = rng.choice(countries)
        if start == end:
            continue

        path = find_shortest_path(adjacency, start, end)
        if path is None:
            continue
        between = intermediates(path)
        if min_intermediates <= between <= max_intermediates:
            return RoutePair(start=start, end=end, difficulty=between)

    log.warning("No daily route found in %d attempts, using fallback pair", max_attempts)
    if all(country in countries for country in FALLBACK_PAIR):
        start, end = FALLBACK_PAIR
    else:
        start, end = countries[0], countries[1]
    path = find_shortest_path(adjacency, start, end)
    return RoutePair(start=start, end=end, difficulty=intermediates(path) if path else 0)
