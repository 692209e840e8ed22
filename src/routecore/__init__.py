"""Shared core utilities for Connect the Countries."""

from routecore.constants import (
    MAX_HINTS,
    POINTS_TABLE,
    STAR_TABLE,
    UNREACHABLE_PAR,
    ColorTag,
    RouteConfig,
    StandalonePoints,
    StarTable,
)
from routecore.graph import (
    Adjacency,
    build_graph,
    canonicalize,
    check_symmetry,
    find_asymmetric_edges,
    find_shortest_path,
    load_adjacency,
)
from routecore.paths import TaggedCountry, divergence_index, intermediates, is_connected_path, tag_optimal, tag_route
from routecore.results import Action, GiveUpResult, HintResult, MoveResult, Progress, RouteSetup, UndoResult
from routecore.scoring import RoundOutcome, ScoreBreakdown, final_score, route_stars, score_round

__all__ = [
    "MAX_HINTS",
    "POINTS_TABLE",
    "STAR_TABLE",
    "UNREACHABLE_PAR",
    "ColorTag",
    "RouteConfig",
    "StandalonePoints",
    "StarTable",
    "Adjacency",
    "build_graph",
    "canonicalize",
    "check_symmetry",
    "find_asymmetric_edges",
    "find_shortest_path",
    "load_adjacency",
    "TaggedCountry",
    "divergence_index",
    "intermediates",
    "is_connected_path",
    "tag_optimal",
    "tag_route",
    "Action",
    "GiveUpResult",
    "HintResult",
    "MoveResult",
    "Progress",
    "RouteSetup",
    "UndoResult",
    "RoundOutcome",
    "ScoreBreakdown",
    "final_score",
    "route_stars",
    "score_round",
]
