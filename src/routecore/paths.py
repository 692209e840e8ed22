"""
Path utilities shared by the engine, the session host and the renderer.

A path is an ordered list of country names. Helpers here never mutate
the lists they receive.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from routecore.constants import ColorTag
from routecore.graph import Adjacency

# Type alias for renderer input: (country, color role)
TaggedCountry = Tuple[str, ColorTag]


def intermediates(path: Sequence[str]) -> int:
    """
    Count the countries strictly between the two endpoints of a route.

    Args:
        path: Complete route including start and end

    Returns:
        Number of intermediate countries (0 for one- or two-country routes)
    """
    return max(0, len(path) - 2)


def divergence_index(path: Sequence[str], reference: Sequence[str]) -> int:
    """Length of the longest common prefix of *path* and *reference*."""
    index = 0
    for ours, theirs in zip(path, reference):
        if ours != theirs:
            break
        index += 1
    return index


def borders_any(adjacency: Adjacency, candidate: str, countries: Iterable[str]) -> bool:
    """
    Check whether *candidate* borders at least one of *countries*.

    Only the outgoing lists of *countries* are read.
    """
    return any(candidate in adjacency.get(country, ()) for country in countries)


def is_connected_path(adjacency: Adjacency, path: Sequence[str]) -> bool:
    """Check that every consecutive pair of *path* is a border in *adjacency*."""
    return all(b in adjacency.get(a, ()) for a, b in zip(path, path[1:]))


def tag_route(
    route: Sequence[str],
    end: str,
    hint: Optional[str] = None,
) -> List[TaggedCountry]:
    """
    Tag an in-progress route for the renderer.

    The first country is ``start``, a final ``end`` stays ``end`` and every
    other country is ``path``. The destination is always included so the
    map shows the target before it is reached.
    """
    tagged: List[TaggedCountry] = []
    for i, country in enumerate(route):
        if i == 0:
            tagged.append((country, ColorTag.START))
        elif country == end and i == len(route) - 1:
            tagged.append((country, ColorTag.END))
        else:
            tagged.append((country, ColorTag.PATH))

    if not route or route[-1] != end:
        tagged.append((end, ColorTag.END))
    if hint is not None:
        tagged.append((hint, ColorTag.HINT))
    return tagged


def tag_optimal(optimal_path: Sequence[str]) -> List[TaggedCountry]:
    """Tag a revealed optimal path: endpoints keep their roles, the rest is ``optimal``."""
    tagged: List[TaggedCountry] = []
    last = len(optimal_path) - 1
    for i, country in enumerate(optimal_path):
        if i == 0:
            tagged.append((country, ColorTag.START))
        elif i == last:
            tagged.append((country, ColorTag.END))
        else:
            tagged.append((country, ColorTag.OPTIMAL))
    return tagged
