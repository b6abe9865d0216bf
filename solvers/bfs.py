"""
bfs.py — Breadth-First Search
==============================
Level-order search with a FIFO queue.  Finds the shortest path by edge
count (weights are ignored).

Events:
  1. Newly discovered neighbour  →  Event(u, v, accepted=False)
  2. End dequeued                →  stop
  3. Afterwards                  →  mark_path_events flips the path edges

Skips blocked cells transparently.
"""

from collections import deque
from typing import Dict, Optional

from maze import Grid
from solvers.event import EventLog, SolveResult, mark_path_events, path_cost, reconstruct_path


def bfs(
    grid: Grid,
    start: int,
    end: int,
    use_weights: bool = False,
) -> SolveResult:
    log     = EventLog()
    queue   = deque([start])
    visited = {start}
    parent: Dict[int, Optional[int]] = {start: None}

    while queue:
        u = queue.popleft()
        if u == end:
            break
        for _, v in grid.passable(u):
            if v in visited:
                continue
            log.emit(u, v, False, 1.0)
            visited.add(v)
            parent[v] = u
            queue.append(v)

    path = reconstruct_path(parent, start, end)

    return SolveResult(
        algo_key="bfs",
        events=mark_path_events(log, path),
        path=path,
        cost=path_cost(path, lambda c: grid.cost(c, use_weights)),
        start=start,
        end=end,
    )
