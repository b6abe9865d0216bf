"""
grid.py — Grid Model
=====================
Single source of truth for the maze.  Generators carve it, the obstacle
assigner blocks cells on it, solvers read it, the renderer draws it.

Responsibilities:
  1. Row-major addressing                  (index / coords / neighbor_index)
  2. Shared-wall mutation                  (remove_wall_pair)
  3. Traversal queries                     (neighbours, passable, reachable_from)
  4. Invariant checks                      (check_wall_symmetry)
  5. Reset helpers                         (reset, clear_visited, clear_obstacles)
  6. Serialisation                         (to_dict)

Design decisions:
  - Cells live in one flat list; index = x + y * cols.
  - Walls are stored on BOTH cells.  remove_wall_pair() is the only
    sanctioned way to open a wall so the two copies never disagree.
  - The grid is reinitialised in place (reset) rather than resized
    incrementally.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, Set, Tuple

from maze.cell import Cell, Direction, DIRECTIONS
from maze.errors import ConfigError, InvariantError


OFF_GRID = -1
MIN_GRID_SIZE = 2


class Grid:
    """
    Attributes:
        cols   : Number of columns (x extent).
        rows   : Number of rows (y extent).
        cells  : Flat row-major list of Cell.
    """

    def __init__(self, cols: int, rows: int):
        self.cols:  int        = 0
        self.rows:  int        = 0
        self.cells: List[Cell] = []
        self.reset(cols, rows)

    # ==================================================================
    # LIFECYCLE
    # ==================================================================
    def reset(self, cols: Optional[int] = None, rows: Optional[int] = None) -> None:
        """All walls present, nothing blocked, unit weights, unvisited."""
        cols = self.cols if cols is None else cols
        rows = self.rows if rows is None else rows
        if not isinstance(cols, int) or not isinstance(rows, int):
            raise ConfigError(f"Grid size must be integral, got {cols!r}x{rows!r}")
        if cols < MIN_GRID_SIZE or rows < MIN_GRID_SIZE:
            raise ConfigError(
                f"Grid must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}, got {cols}x{rows}"
            )
        if cols != self.cols or rows != self.rows:
            # build first so a failure leaves the old grid intact
            cells = [Cell() for _ in range(cols * rows)]
            self.cols, self.rows, self.cells = cols, rows, cells
        else:
            for cell in self.cells:
                cell.reset()

    def clear_visited(self) -> None:
        for cell in self.cells:
            cell.visited = False

    def clear_obstacles(self) -> None:
        for cell in self.cells:
            cell.blocked = False

    # ==================================================================
    # ADDRESSING
    # ==================================================================
    def index(self, x: int, y: int) -> int:
        if x < 0 or y < 0 or x >= self.cols or y >= self.rows:
            return OFF_GRID
        return x + y * self.cols

    def coords(self, index: int) -> Tuple[int, int]:
        return index % self.cols, index // self.cols

    def neighbor_index(self, x: int, y: int, direction: Direction) -> int:
        dx, dy = Direction(direction).offset
        return self.index(x + dx, y + dy)

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    @property
    def size(self) -> int:
        return self.cols * self.rows

    # ==================================================================
    # WALLS
    # ==================================================================
    def remove_wall_pair(self, a: int, b: int, direction: Direction) -> None:
        """Open the wall of `a` facing `direction` and its mirror on `b`."""
        direction = Direction(direction)
        self.cells[a].walls[direction] = False
        self.cells[b].walls[direction.opposite] = False

    def removed_wall_pairs(self) -> int:
        """Count opened interior walls (each shared wall counted once)."""
        count = 0
        for idx, cell in enumerate(self.cells):
            x, y = self.coords(idx)
            if x + 1 < self.cols and not cell.walls[Direction.EAST]:
                count += 1
            if y + 1 < self.rows and not cell.walls[Direction.SOUTH]:
                count += 1
        return count

    def wall_snapshot(self) -> List[Tuple[bool, ...]]:
        return [tuple(c.walls) for c in self.cells]

    def check_wall_symmetry(self) -> None:
        """Raise InvariantError if any shared wall disagrees with its mirror."""
        for idx, cell in enumerate(self.cells):
            x, y = self.coords(idx)
            for d in DIRECTIONS:
                nbr = self.neighbor_index(x, y, d)
                if nbr == OFF_GRID:
                    continue
                if cell.walls[d] != self.cells[nbr].walls[d.opposite]:
                    raise InvariantError(
                        f"Asymmetric wall between {idx} and {nbr} ({d.name})"
                    )

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, index: int) -> List[Tuple[Direction, int]]:
        """[(direction, neighbour_index)] for every in-grid neighbour, N,E,S,W order."""
        x, y = self.coords(index)
        result = []
        for d in DIRECTIONS:
            nbr = self.neighbor_index(x, y, d)
            if nbr != OFF_GRID:
                result.append((d, nbr))
        return result

    def passable(self, index: int) -> Iterator[Tuple[Direction, int]]:
        """Neighbours reachable in one move: wall open and neighbour not blocked."""
        walls = self.cells[index].walls
        for d, nbr in self.neighbours(index):
            if not walls[d] and not self.cells[nbr].blocked:
                yield d, nbr

    def reachable_from(self, index: int, respect_blocked: bool = True) -> Set[int]:
        """BFS flood fill through open walls."""
        seen: Set[int] = {index}
        queue = deque([index])
        while queue:
            cur = queue.popleft()
            walls = self.cells[cur].walls
            for d, nbr in self.neighbours(cur):
                if walls[d] or nbr in seen:
                    continue
                if respect_blocked and self.cells[nbr].blocked:
                    continue
                seen.add(nbr)
                queue.append(nbr)
        return seen

    def is_connected(self, a: int, b: int) -> bool:
        return b in self.reachable_from(a)

    def cost(self, index: int, use_weights: bool = True) -> float:
        return float(self.cells[index].weight) if use_weights else 1.0

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict:
        return {
            "cols":  self.cols,
            "rows":  self.rows,
            "cells": [c.to_dict() for c in self.cells],
        }

    def __repr__(self) -> str:
        blocked = sum(1 for c in self.cells if c.blocked)
        return f"Grid({self.cols}x{self.rows}, open_walls={self.removed_wall_pairs()}, blocked={blocked})"
