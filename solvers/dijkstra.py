"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Min-heap (heapq) keyed by accumulated cost.  The cost of a move is the
weight of the cell being entered (1 everywhere when weights are off).

Events:
  1. Successful relaxation u → v   →  Event(u, v, accepted=False, cost=w)
  2. End popped                    →  stop (its distance is final)
  3. Afterwards                    →  mark_path_events flips the path edges

Stale heap entries (distance no longer matches the best known) are skipped
silently — lazy deletion, not an error.
"""

import heapq
from typing import Dict, List, Optional, Tuple

from maze import Grid
from solvers.event import EventLog, SolveResult, mark_path_events, reconstruct_path


def dijkstra(
    grid: Grid,
    start: int,
    end: int,
    use_weights: bool = True,
) -> SolveResult:

    INF = float("inf")

    dist:   Dict[int, float]         = {start: 0.0}
    parent: Dict[int, Optional[int]] = {start: None}
    pq:     List[Tuple[float, int]]  = [(0.0, start)]
    log = EventLog()

    while pq:
        d, u = heapq.heappop(pq)

        # stale entry
        if d != dist.get(u, INF):
            continue
        if u == end:
            break

        for _, v in grid.passable(u):
            w = grid.cost(v, use_weights)
            new_dist = d + w
            if new_dist < dist.get(v, INF):
                dist[v]   = new_dist
                parent[v] = u
                log.emit(u, v, False, w)
                heapq.heappush(pq, (new_dist, v))

    path = reconstruct_path(parent, start, end)

    return SolveResult(
        algo_key="dijkstra",
        events=mark_path_events(log, path),
        path=path,
        cost=dist[end] if path else 0.0,
        start=start,
        end=end,
    )
