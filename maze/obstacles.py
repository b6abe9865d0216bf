"""
obstacles.py — Obstacle & Weight Assignment
============================================
Marks blocked cells and traversal costs on an already-carved grid.

place_obstacles() first enumerates the simple start→end paths of the
current wall layout (bounded — grids are tens by tens), then flips a
weighted coin:

  • "choke" branch   (probability = unsolvable_chance)
        block some of the cells that sit on >= 70 % of the paths.
        This deliberately makes the maze harder and may cut start from
        end completely.  Set unsolvable_chance=0 to turn it off.
  • "safe" branch    (otherwise)
        block only cells that lie on NO discovered path.  Start → end
        stays reachable, checked before returning.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Tuple

from maze.errors import ConfigError, InvariantError
from maze.grid import Grid


logger = logging.getLogger(__name__)


CHOKE_THRESHOLD   = 0.7      # share of paths a cell must appear on
CHOKE_BLOCK_SHARE = 0.6      # share of choke cells that get blocked
MAX_PATHS         = 2000
MAX_EXPANSIONS    = 200_000


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------
@dataclass
class ObstacleReport:
    strategy:      str             = "none"     # "choke" | "safe" | "none"
    paths_found:   int             = 0
    truncated:     bool            = False      # enumeration hit a bound
    blocked_cells: List[int]       = field(default_factory=list)

    @property
    def blocked_count(self) -> int:
        return len(self.blocked_cells)


# ---------------------------------------------------------------------------
# Path enumeration
# ---------------------------------------------------------------------------
def enumerate_paths(
    grid: Grid,
    start: int,
    end: int,
    max_paths: int = MAX_PATHS,
    max_expansions: int = MAX_EXPANSIONS,
) -> Tuple[List[List[int]], bool]:
    """
    Every simple path start → end through open walls (blocked flags are
    ignored — obstacles are cleared before this runs).

    Returns (paths, truncated).  truncated is True when either bound was hit.
    """
    paths: List[List[int]] = []
    path   = [start]
    on_path = {start}
    # frame = remaining neighbours still to try from path[-1]
    frames = [iter(grid.neighbours(start))]
    expansions = 0

    while frames:
        if len(paths) >= max_paths or expansions >= max_expansions:
            return paths, True
        cur = path[-1]
        step = next(frames[-1], None)
        if step is None:
            frames.pop()
            on_path.discard(path.pop())
            continue
        d, nbr = step
        if grid.cells[cur].walls[d] or nbr in on_path:
            continue
        expansions += 1
        if nbr == end:
            paths.append(path + [nbr])
            continue
        path.append(nbr)
        on_path.add(nbr)
        frames.append(iter(grid.neighbours(nbr)))

    return paths, False


# ---------------------------------------------------------------------------
# Obstacles
# ---------------------------------------------------------------------------
def clear_obstacles(grid: Grid) -> None:
    grid.clear_obstacles()


def place_obstacles(
    grid: Grid,
    start: int,
    end: int,
    density: float,
    rng: random.Random,
    unsolvable_chance: float = 0.3,
) -> ObstacleReport:
    if not 0.0 <= density <= 1.0:
        raise ConfigError(f"Obstacle density must be in [0, 1], got {density}")
    if not 0.0 <= unsolvable_chance <= 1.0:
        raise ConfigError(f"Unsolvable chance must be in [0, 1], got {unsolvable_chance}")
    if start == end:
        raise InvariantError("Start and end coincide")

    grid.clear_obstacles()

    paths, truncated = enumerate_paths(grid, start, end)
    report = ObstacleReport(paths_found=len(paths), truncated=truncated)

    if not paths:
        logger.warning("No paths found between start and end, no obstacles placed")
        return report

    logger.info(
        "Found %d path(s) from start to end%s", len(paths), " (truncated)" if truncated else ""
    )

    if rng.random() < unsolvable_chance:
        report.strategy = "choke"
        frequency = Counter(
            cell for p in paths for cell in p if cell != start and cell != end
        )
        choke = sorted(c for c, n in frequency.items() if n >= len(paths) * CHOKE_THRESHOLD)
        rng.shuffle(choke)
        count = min(int(len(choke) * CHOKE_BLOCK_SHARE), len(choke))
        for cell in choke[:count]:
            grid.cells[cell].blocked = True
        report.blocked_cells = choke[:count]
        logger.info("Blocked %d choke cell(s) of %d", count, len(choke))
    else:
        report.strategy = "safe"
        on_any_path = {cell for p in paths for cell in p}
        safe = [
            i for i in range(grid.size)
            if i not in on_any_path and i != start and i != end
        ]
        rng.shuffle(safe)
        count = min(int(len(safe) * density), len(safe))
        for cell in safe[:count]:
            grid.cells[cell].blocked = True
        report.blocked_cells = safe[:count]
        if not grid.is_connected(start, end):
            raise InvariantError("Solvable obstacle layout disconnected start from end")
        logger.info("Preserved %d path(s), placed %d obstacle(s) in safe areas", len(paths), count)

    return report


# ---------------------------------------------------------------------------
# Weights
# ---------------------------------------------------------------------------
def assign_weights(
    grid: Grid,
    start: int,
    end: int,
    rng: random.Random,
    weight_range: Tuple[int, int] = (1, 5),
) -> None:
    """Uniform integer cost per non-blocked cell; start/end cost 1."""
    lo, hi = weight_range
    if lo < 1 or hi < lo:
        raise ConfigError(f"Invalid weight range {weight_range}")
    for cell in grid.cells:
        cell.weight = 1 if cell.blocked else rng.randint(lo, hi)
    grid.cells[start].weight = 1
    grid.cells[end].weight   = 1


def clear_weights(grid: Grid) -> None:
    for cell in grid.cells:
        cell.weight = 1
