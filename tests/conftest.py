import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from engine import MazeConfig, MazeSession  # noqa: E402
from maze import Grid, generate  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock for playback tests."""

    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def grid(rng):
    g = Grid(8, 8)
    generate(g, "kruskal", rng)
    return g


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def session(clock):
    cfg = MazeConfig(cols=8, rows=8, seed=42, unsolvable_chance=0.0)
    return MazeSession(cfg, clock=clock)


@pytest.fixture()
def client():
    import main

    main.SESSIONS.clear()
    main.app.config.update(
        {"TESTING": True, "MAZE_CONFIG": MazeConfig(cols=8, rows=8, seed=7, unsolvable_chance=0.0)}
    )
    yield main.app.test_client()
    main.SESSIONS.clear()


def corner_to_corner(g):
    return g.index(0, 0), g.index(g.cols - 1, g.rows - 1)
