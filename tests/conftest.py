# tests/conftest.py
from pathlib import Path

import matplotlib
import pytest

from routecore.graph import load_adjacency

matplotlib.use("Agg")

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


class FakeClock:
    """Manually advanced clock to pass as the engine's time source."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def line_graph():
    """A - B - C - D."""
    return {"A": ["B"], "B": ["A", "C"], "C": ["B", "D"], "D": ["C"]}


@pytest.fixture
def branch_graph():
    """
    A borders B and E; B-C-D is the long way round, E-F reaches G faster.

        A - B - C - D
        |           |
        E --- F --- G
    """
    return {
        "A": ["B", "E"],
        "B": ["A", "C"],
        "C": ["B", "D"],
        "D": ["C", "G"],
        "E": ["A", "F"],
        "F": ["E", "G"],
        "G": ["F", "D"],
        "X": [],
    }


@pytest.fixture
def europe():
    return load_adjacency(DATA_DIR / "countries-neighbors.json")


@pytest.fixture
def aliases_file():
    return DATA_DIR / "aliases.json"


@pytest.fixture
def positions_file():
    return DATA_DIR / "country-positions.json"


@pytest.fixture
def neighbors_file():
    return DATA_DIR / "countries-neighbors.json"
