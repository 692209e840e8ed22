"""Map loading and route drawing utilities for Connect the Countries."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from routecore.constants import ColorTag
from routecore.graph import build_graph, check_symmetry, load_adjacency
from routecore.paths import TaggedCountry

log = logging.getLogger(__name__)


class CountryMap:
    # Fill colors by renderer role
    COLOR_MAP = {
        ColorTag.START: '#2e7d32',
        ColorTag.END: '#c62828',
        ColorTag.PATH: '#1565c0',
        ColorTag.HINT: '#f9a825',
        ColorTag.OPTIMAL: '#6a1b9a',
    }
    BASE_COLOR = '#d9d9d9'
    LAYOUT_SEED = 42

    def __init__(self) -> None:
        self.neighbors: Dict[str, List[str]] = {}
        self.positions: Dict[str, Tuple[float, float]] = {}
        self.graph = nx.Graph()

    def load_graph(self, neighbors_file: str | Path, positions_file: Optional[str | Path] = None) -> None:
        """
        Load countries and borders into the map.

        Args:
            neighbors_file: JSON adjacency or CSV edge list
            positions_file: Optional JSON of country -> [x, y] for drawing
        """
        self.neighbors = load_adjacency(neighbors_file)
        check_symmetry(self.neighbors)
        self.graph = build_graph(self.neighbors).to_undirected()

        if positions_file is not None:
            self.positions = self._load_positions(Path(positions_file))
        nx.set_node_attributes(self.graph, {c: p for c, p in self.positions.items() if c in self.graph}, 'pos')

    @staticmethod
    def _load_positions(path: Path) -> Dict[str, Tuple[float, float]]:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        return {country: (float(xy[0]), float(xy[1])) for country, xy in raw.items()}

    def get_graph(self) -> nx.Graph:
        """Return the undirected border graph."""
        return self.graph

    def get_neighbors(self) -> Dict[str, List[str]]:
        return self.neighbors

    def countries(self) -> List[str]:
        return list(self.neighbors)

    def layout(self) -> Dict[str, Tuple[float, float]]:
        """Node positions, falling back to a seeded spring layout for countries without one."""
        pos = dict(nx.get_node_attributes(self.graph, 'pos'))
        if len(pos) < self.graph.number_of_nodes():
            spring = nx.spring_layout(self.graph, pos=pos or None, fixed=list(pos) or None, seed=self.LAYOUT_SEED)
            for country, xy in spring.items():
                pos.setdefault(country, (float(xy[0]), float(xy[1])))
        return pos

    def draw_route(
        self,
        tagged: Sequence[TaggedCountry],
        title: str = "Connect the Countries",
        figsize: Tuple[int, int] = (12, 8),
        save_path: Optional[str | Path] = None,
    ) -> None:
        """
        Draw the border graph with the tagged countries highlighted.

        Later entries win when a country is tagged twice, so a hint drawn
        after the route stays visible.

        Args:
            tagged: (country, ColorTag) pairs as produced by the engine
            title: Figure title
            figsize: Figure size
            save_path: Write the figure here instead of showing it
        """
        if self.graph.number_of_nodes() == 0:
            raise ValueError("The map is empty. Load data first with load_graph().")

        pos = self.layout()
        roles: Dict[str, ColorTag] = {}
        for country, tag in tagged:
            roles[country] = ColorTag(tag)

        fig = plt.figure(figsize=figsize)
        nx.draw_networkx_edges(self.graph, pos, edge_color='#bbbbbb', width=1)

        node_colors = [self.COLOR_MAP.get(roles.get(c), self.BASE_COLOR) for c in self.graph.nodes]
        nx.draw_networkx_nodes(
            self.graph, pos,
            node_color=node_colors,
            node_size=450,
            edgecolors='black',
            linewidths=1,
        )
        nx.draw_networkx_labels(self.graph, pos, font_size=8)

        # Connect consecutive route countries
        route = [c for c, tag in tagged if ColorTag(tag) is not ColorTag.HINT]
        route_edges = [(a, b) for a, b in zip(route, route[1:]) if self.graph.has_edge(a, b)]
        if route_edges:
            nx.draw_networkx_edges(self.graph, pos, edgelist=route_edges, edge_color='#1565c0', width=3)

        plt.title(title)
        plt.axis('off')
        plt.tight_layout()

        if save_path is not None:
            fig.savefig(save_path)
            plt.close(fig)
            log.info("Route drawing saved to %s", save_path)
        else:
            plt.show()
