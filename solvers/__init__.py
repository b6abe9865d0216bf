"""
solvers/__init__.py — Solver Registry
=======================================
Single source of truth for every pathfinding algorithm the session knows.

    from solvers import SOLVERS, get_solver, solve

SOLVERS is a dict:
    {
        "bfs": SolverInfo(key, label, fn, retracts, uses_weights, …),
        …
    }

Every solver has the same signature:
    fn(grid, start, end, use_weights) -> SolveResult
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from maze import ConfigError, Grid, InvariantError
from solvers.event   import Event, EventLog, SolveResult, mark_path_events, reconstruct_path
from solvers.dfs     import dfs      as _dfs
from solvers.bfs     import bfs      as _bfs
from solvers.dijkstra import dijkstra as _dijkstra
from solvers.astar   import astar    as _astar


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SolverInfo — metadata card for each solver
# ---------------------------------------------------------------------------
@dataclass
class SolverInfo:
    key:              str                    # registry key, e.g. "bfs"
    label:            str                    # human label
    fn:               Callable[..., SolveResult]
    retracts:         bool      = False      # rejected event = undo a drawn segment
    uses_weights:     bool      = False      # honours cell weights?
    tags:             List[str] = field(default_factory=list)
    complexity_time:  str       = ""
    complexity_space: str       = ""
    description:      str       = ""


# ---------------------------------------------------------------------------
# THE REGISTRY — insertion order is the selector order (dfs, bfs, dijkstra, astar)
# ---------------------------------------------------------------------------
SOLVERS: Dict[str, SolverInfo] = {

    "dfs": SolverInfo(
        key="dfs", label="Depth-First", fn=_dfs, retracts=True,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep, backs out of dead ends. Path is not necessarily shortest.",
    ),

    "bfs": SolverInfo(
        key="bfs", label="Breadth-First", fn=_bfs,
        tags=["unweighted", "shortest-path"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer. Shortest path by step count.",
    ),

    "dijkstra": SolverInfo(
        key="dijkstra", label="Dijkstra", fn=_dijkstra, uses_weights=True,
        tags=["weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Expands the cheapest cell first. Optimal for positive weights.",
    ),

    "astar": SolverInfo(
        key="astar", label="A*", fn=_astar, uses_weights=True,
        tags=["weighted", "shortest-path", "heuristic"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Dijkstra guided by Manhattan distance. Same cost, fewer cells.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_solver(key: str) -> Optional[SolverInfo]:
    """Return SolverInfo by key, or None."""
    return SOLVERS.get(key)


def list_solvers() -> List[SolverInfo]:
    return list(SOLVERS.values())


def solve(grid: Grid, key: str, start: int, end: int, use_weights: bool = True) -> SolveResult:
    """Run the solver registered under `key`."""
    info = get_solver(key)
    if info is None:
        raise ConfigError(f"Unknown solver: {key}")
    if start == end:
        raise InvariantError("Start and end coincide")
    result = info.fn(grid, start, end, use_weights=use_weights and info.uses_weights)
    logger.debug(
        "%s: %d event(s), path of %d edge(s), cost %.1f",
        key, result.examined, len(result.path), result.cost,
    )
    return result


__all__ = [
    "Event",
    "EventLog",
    "SolveResult",
    "SolverInfo",
    "SOLVERS",
    "get_solver",
    "list_solvers",
    "solve",
    "mark_path_events",
    "reconstruct_path",
]
