"""
generators.py — Maze Generation
================================
Three interchangeable carvers plus two post-passes.

Carvers (each leaves a spanning tree: every cell reachable, no loops):
  • backtracker  – randomized depth-first carve with an explicit stack
  • prim         – randomized Prim over a frontier of (inside, outside, dir)
  • kruskal      – shuffled east/south edges merged through a DisjointSet

Post-passes:
  • add_complexity   – opens a handful of extra walls so the maze is not a
                       strict tree (more branching for the solvers)
  • ensure_pathways  – carves short corridors around chosen cells until
                       each has enough reachable cells in its neighbourhood

All functions take an explicit random.Random so runs are reproducible
from a seed.

    from maze.generators import generate
    generate(grid, "kruskal", rng)
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from maze.cell import Direction, DIRECTIONS
from maze.errors import ConfigError
from maze.grid import Grid, OFF_GRID
from maze.union_find import DisjointSet


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _unvisited_neighbours(grid: Grid, index: int) -> List[Tuple[Direction, int]]:
    return [(d, n) for d, n in grid.neighbours(index) if not grid.cells[n].visited]


def _random_interior(grid: Grid, rng: random.Random) -> int:
    """Random cell away from the border (any cell when the grid is too narrow)."""
    x = rng.randint(1, grid.cols - 2) if grid.cols > 2 else rng.randrange(grid.cols)
    y = rng.randint(1, grid.rows - 2) if grid.rows > 2 else rng.randrange(grid.rows)
    return grid.index(x, y)


# ---------------------------------------------------------------------------
# Randomized backtracker
# ---------------------------------------------------------------------------
def generate_backtracker(grid: Grid, rng: random.Random) -> None:
    grid.reset()
    total   = grid.size
    current = _random_interior(grid, rng)
    grid.cells[current].visited = True
    visited_count = 1
    stack: List[int] = []

    while visited_count < total:
        nbrs = _unvisited_neighbours(grid, current)
        if nbrs:
            d, nxt = rng.choice(nbrs)
            stack.append(current)
            grid.remove_wall_pair(current, nxt, d)
            current = nxt
            grid.cells[current].visited = True
            visited_count += 1
        elif stack:
            current = stack.pop()
        else:
            # stack exhausted with cells left over: restart from the first one
            for i, cell in enumerate(grid.cells):
                if not cell.visited:
                    current = i
                    cell.visited = True
                    visited_count += 1
                    break

    grid.clear_visited()


# ---------------------------------------------------------------------------
# Randomized Prim
# ---------------------------------------------------------------------------
def generate_prim(grid: Grid, rng: random.Random) -> None:
    grid.reset()
    start = _random_interior(grid, rng)
    grid.cells[start].visited = True

    frontier: List[Tuple[int, int, Direction]] = []

    def add_frontier(inside: int) -> None:
        for d, outside in _unvisited_neighbours(grid, inside):
            frontier.append((inside, outside, d))

    add_frontier(start)

    while frontier:
        k = rng.randrange(len(frontier))
        # swap-remove: O(1), order is irrelevant
        frontier[k], frontier[-1] = frontier[-1], frontier[k]
        inside, outside, d = frontier.pop()
        if grid.cells[outside].visited:
            continue
        grid.remove_wall_pair(inside, outside, d)
        grid.cells[outside].visited = True
        add_frontier(outside)

    grid.clear_visited()


# ---------------------------------------------------------------------------
# Randomized Kruskal
# ---------------------------------------------------------------------------
def generate_kruskal(grid: Grid, rng: random.Random) -> None:
    grid.reset()
    dsu = DisjointSet(grid.size)

    # east + south only, so every shared wall appears exactly once
    edges: List[Tuple[int, int, Direction]] = []
    for y in range(grid.rows):
        for x in range(grid.cols):
            a = grid.index(x, y)
            for d in (Direction.EAST, Direction.SOUTH):
                b = grid.neighbor_index(x, y, d)
                if b != OFF_GRID:
                    edges.append((a, b, d))

    rng.shuffle(edges)

    for a, b, d in edges:
        if dsu.union(a, b):
            grid.remove_wall_pair(a, b, d)

    grid.clear_visited()


# ---------------------------------------------------------------------------
# Complexity pass — add loops
# ---------------------------------------------------------------------------
def add_complexity(
    grid: Grid,
    rng: random.Random,
    protected: Iterable[int] = (),
) -> int:
    """
    Open max(2, area // 50) extra walls at random cells.  Never opens a wall
    on a protected cell (start / end).  Returns the number of walls opened.
    """
    protected = set(protected)
    attempts  = max(2, grid.size // 50)
    opened    = 0

    for _ in range(attempts):
        idx = rng.randrange(grid.size)
        if idx in protected:
            continue
        candidates = [
            (d, nbr) for d, nbr in grid.neighbours(idx)
            if grid.cells[idx].walls[d] and nbr not in protected
        ]
        if not candidates:
            continue
        d, nbr = rng.choice(candidates)
        grid.remove_wall_pair(idx, nbr, d)
        opened += 1

    logger.debug("complexity pass opened %d of %d attempted walls", opened, attempts)
    return opened


# ---------------------------------------------------------------------------
# Connectivity-guarantee pass — local branching around endpoints
# ---------------------------------------------------------------------------
def _window(grid: Grid, index: int, radius: int) -> Set[int]:
    cx, cy = grid.coords(index)
    cells = set()
    for y in range(max(0, cy - radius), min(grid.rows, cy + radius + 1)):
        for x in range(max(0, cx - radius), min(grid.cols, cx + radius + 1)):
            cells.add(grid.index(x, y))
    return cells


def local_reach(grid: Grid, index: int, radius: int = 2) -> int:
    """Cells (other than `index`) reachable through open walls without leaving the window."""
    window = _window(grid, index, radius)
    seen   = {index}
    stack  = [index]
    while stack:
        cur = stack.pop()
        walls = grid.cells[cur].walls
        for d, nbr in grid.neighbours(cur):
            if walls[d] or nbr in seen or nbr not in window:
                continue
            seen.add(nbr)
            stack.append(nbr)
    return len(seen) - 1


def _carve_corridor(grid: Grid, start: int, target: int) -> None:
    """L-shaped corridor: horizontal leg first, then vertical."""
    cx, cy = grid.coords(start)
    tx, ty = grid.coords(target)
    while cx != tx:
        d = Direction.EAST if tx > cx else Direction.WEST
        nxt = grid.neighbor_index(cx, cy, d)
        grid.remove_wall_pair(grid.index(cx, cy), nxt, d)
        cx, cy = grid.coords(nxt)
    while cy != ty:
        d = Direction.SOUTH if ty > cy else Direction.NORTH
        nxt = grid.neighbor_index(cx, cy, d)
        grid.remove_wall_pair(grid.index(cx, cy), nxt, d)
        cx, cy = grid.coords(nxt)


def ensure_pathways(
    grid: Grid,
    cells: Sequence[int],
    rng: random.Random,
    radius: int = 2,
    min_pathways: int = 7,
) -> int:
    """
    Make every cell in `cells` reach at least `min_pathways` neighbourhood
    cells (capped at what the clipped window can hold).  Only ever removes
    walls; a compliant grid is left untouched.  Returns corridors carved.
    """
    carved = 0
    for idx in cells:
        window = _window(grid, idx, radius)
        need   = min(min_pathways, len(window) - 1)
        if local_reach(grid, idx, radius) >= need:
            continue
        targets = sorted(window - {idx})
        rng.shuffle(targets)
        for target in targets:
            _carve_corridor(grid, idx, target)
            carved += 1
            if local_reach(grid, idx, radius) >= need:
                break
        logger.debug("pathways around cell %d: %d corridor(s) carved", idx, carved)
    return carved


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
@dataclass
class GeneratorInfo:
    key:         str                               # registry key, e.g. "prim"
    label:       str                               # human label
    fn:          Callable[[Grid, random.Random], None]
    description: str = ""
    tags:        List[str] = field(default_factory=list)


GENERATORS: Dict[str, GeneratorInfo] = {

    "backtracker": GeneratorInfo(
        key="backtracker", label="Recursive Backtracker", fn=generate_backtracker,
        description="Depth-first carve. Long winding corridors, few dead ends.",
        tags=["spanning-tree", "dfs"],
    ),

    "prim": GeneratorInfo(
        key="prim", label="Randomized Prim", fn=generate_prim,
        description="Grows outward from one cell. Many short dead ends.",
        tags=["spanning-tree", "frontier"],
    ),

    "kruskal": GeneratorInfo(
        key="kruskal", label="Randomized Kruskal", fn=generate_kruskal,
        description="Merges random edges with union-find. Uniform texture.",
        tags=["spanning-tree", "union-find"],
    ),
}


def get_generator(key: str) -> Optional[GeneratorInfo]:
    return GENERATORS.get(key)


def generate(grid: Grid, key: str, rng: random.Random) -> GeneratorInfo:
    """Run the spanning carver registered under `key` on `grid`."""
    info = get_generator(key)
    if info is None:
        raise ConfigError(f"Unknown generator: {key}")
    info.fn(grid, rng)
    logger.debug("generated %dx%d maze with %s", grid.cols, grid.rows, key)
    return info


__all__ = [
    "GeneratorInfo",
    "GENERATORS",
    "get_generator",
    "generate",
    "generate_backtracker",
    "generate_prim",
    "generate_kruskal",
    "add_complexity",
    "ensure_pathways",
    "local_reach",
]
