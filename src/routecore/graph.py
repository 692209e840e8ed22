"""Adjacency graph loading, validation and shortest-path search."""
from __future__ import annotations

import json
import logging
from collections import deque
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import networkx as nx
import pandas as pd

log = logging.getLogger(__name__)

# Type alias for the provider's data: country -> ordered neighbor list
Adjacency = Mapping[str, Sequence[str]]


def load_adjacency(neighbors_file: Path | str) -> Dict[str, List[str]]:
    """
    Load an adjacency mapping from a JSON object or a CSV edge list.

    JSON files hold ``{"Country": ["Neighbor", ...]}``. CSV files hold one
    border per row in ``From``/``To`` columns and are read in both
    directions, so they always produce a symmetric mapping.

    Args:
        neighbors_file: Path of the JSON or CSV file

    Returns:
        Mapping of country name to its neighbor list, in file order
    """
    path = Path(neighbors_file)
    if path.suffix.lower() == ".csv":
        return _load_edge_list(path)

    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object of country -> neighbors")

    adjacency: Dict[str, List[str]] = {}
    for country, neighbors in raw.items():
        if not isinstance(neighbors, list):
            raise ValueError(f"{path}: neighbors of {country!r} must be a list")
        adjacency[str(country)] = [str(n) for n in neighbors]

    log.info("Loaded %d countries from %s", len(adjacency), path)
    return adjacency


def _load_edge_list(path: Path) -> Dict[str, List[str]]:
    borders = pd.read_csv(path)
    missing = {"From", "To"} - set(borders.columns)
    if missing:
        raise ValueError(f"{path}: missing column(s) {sorted(missing)}")

    adjacency: Dict[str, List[str]] = {}
    for _, row in borders.iterrows():
        a, b = str(row["From"]).strip(), str(row["To"]).strip()
        for u, v in ((a, b), (b, a)):
            neighbors = adjacency.setdefault(u, [])
            if v not in neighbors:
                neighbors.append(v)

    log.info("Loaded %d countries from %s", len(adjacency), path)
    return adjacency


def build_graph(adjacency: Adjacency) -> nx.DiGraph:
    """
    Build a directed NetworkX graph from an adjacency mapping.

    Node and successor order follow the mapping, so iterating
    ``graph.successors(country)`` yields neighbors in provider order.
    """
    graph = nx.DiGraph()
    for country, neighbors in adjacency.items():
        graph.add_node(country)
        for neighbor in neighbors:
            graph.add_edge(country, neighbor)
    return graph


def canonicalize(adjacency: Adjacency) -> Dict[str, List[str]]:
    """Return a copy of *adjacency* with every neighbor list sorted alphabetically."""
    return {country: sorted(neighbors) for country, neighbors in adjacency.items()}


def find_shortest_path(adjacency: Adjacency, start: str, end: str) -> Optional[List[str]]:
    """
    Breadth-first search for the shortest land route between two countries.

    Parent pointers replace a queue of whole paths; the frontier is still
    expanded in neighbor-list order and the search stops the first time
    ``end`` shows up as a neighbor, so among several shortest routes the
    one returned depends on the order of each country's neighbor list.
    Only outgoing edges are followed.

    Args:
        adjacency: Mapping of country to neighbor list
        start: First country of the route
        end: Last country of the route

    Returns:
        The route including both endpoints, or None if no route exists
    """
    if start == end:
        return [start]

    parents: Dict[str, Optional[str]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, ()):
            if neighbor in parents:
                continue
            parents[neighbor] = current
            if neighbor == end:
                return _walk_back(parents, end)
            queue.append(neighbor)

    return None


def _walk_back(parents: Mapping[str, Optional[str]], end: str) -> List[str]:
    path: List[str] = []
    node: Optional[str] = end
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path


def find_asymmetric_edges(adjacency: Adjacency) -> List[Tuple[str, str]]:
    """
    List borders that are declared in one direction only.

    Returns:
        ``(a, b)`` pairs where ``b`` is a neighbor of ``a`` but ``a`` is
        not listed as a neighbor of ``b``
    """
    graph = build_graph(adjacency)
    return [(u, v) for u, v in graph.edges() if not graph.has_edge(v, u)]


def check_symmetry(adjacency: Adjacency) -> bool:
    """Log a data-quality warning when the border relation is not symmetric."""
    asymmetric = find_asymmetric_edges(adjacency)
    if asymmetric:
        sample = ", ".join(f"{a}->{b}" for a, b in asymmetric[:5])
        log.warning(
            "Adjacency data has %d one-way border(s), e.g. %s", len(asymmetric), sample
        )
        return False
    return True


def reachable_countries(adjacency: Adjacency, start: str) -> Dict[str, int]:
    """Hop distance from *start* to every country reachable over outgoing borders."""
    graph = build_graph(adjacency)
    if start not in graph:
        return {start: 0}
    return dict(nx.single_source_shortest_path_length(graph, start))
