"""
astar.py — A* Search
=====================
Dijkstra with the heap keyed by f = g + h, where h is the Manhattan
distance to the end cell.  Every move costs at least 1 and movement is
4-directional, so h is admissible and consistent: the first time the end
cell is popped with a current f its g is optimal.

Stale entries (popped f differs from the best known f for that cell) are
skipped.
"""

import heapq
from typing import Callable, Dict, List, Optional, Tuple

from maze import Grid
from solvers.event import EventLog, SolveResult, mark_path_events, reconstruct_path


def manhattan_to(grid: Grid, end: int) -> Callable[[int], float]:
    ex, ey = grid.coords(end)

    def h(cell: int) -> float:
        x, y = grid.coords(cell)
        return float(abs(x - ex) + abs(y - ey))

    return h


def astar(
    grid: Grid,
    start: int,
    end: int,
    use_weights: bool = True,
) -> SolveResult:

    INF = float("inf")
    h   = manhattan_to(grid, end)

    g_score: Dict[int, float]         = {start: 0.0}
    f_score: Dict[int, float]         = {start: h(start)}
    parent:  Dict[int, Optional[int]] = {start: None}
    open_set: List[Tuple[float, int]] = [(f_score[start], start)]
    log = EventLog()

    while open_set:
        f, u = heapq.heappop(open_set)

        if f != f_score.get(u, INF):
            continue
        if u == end:
            break

        for _, v in grid.passable(u):
            w = grid.cost(v, use_weights)
            tentative_g = g_score[u] + w
            if tentative_g < g_score.get(v, INF):
                parent[v]  = u
                g_score[v] = tentative_g
                f_score[v] = tentative_g + h(v)
                log.emit(u, v, False, w)
                heapq.heappush(open_set, (f_score[v], v))

    path = reconstruct_path(parent, start, end)

    return SolveResult(
        algo_key="astar",
        events=mark_path_events(log, path),
        path=path,
        cost=g_score[end] if path else 0.0,
        start=start,
        end=end,
    )
