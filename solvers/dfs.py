"""
dfs.py — Depth-First Search
=============================
Explicit-stack DFS (no Python recursion limit issues on 60x60 grids).

Each stack frame is (cell, iterator over the directions still to try).
Events:
  1. Descend u → v           →  Event(u, v, accepted=True)
  2. Frame for v exhausted   →  Event(u, v, accepted=False)   (backtrack)
  3. v == end                →  stop; the frames left on the stack ARE the path

Unlike the other solvers the accept / reject flags are final when emitted,
so no mark_path_events pass runs afterwards.
"""

from typing import Iterator, List, Tuple

from maze import Grid, Direction
from solvers.event import EventLog, SolveResult, path_cost


def dfs(
    grid: Grid,
    start: int,
    end: int,
    use_weights: bool = False,
) -> SolveResult:
    log     = EventLog()
    visited = {start}
    frames: List[Tuple[int, Iterator[Tuple[Direction, int]]]] = [
        (start, iter(grid.neighbours(start)))
    ]
    found = start == end

    while frames and not found:
        u, remaining = frames[-1]
        step = next(remaining, None)

        if step is None:
            # -- backtrack --
            frames.pop()
            if frames:
                parent = frames[-1][0]
                log.emit(parent, u, False, grid.cost(u, use_weights))
            continue

        d, v = step
        if grid.cells[u].walls[d] or v in visited or grid.cells[v].blocked:
            continue

        # -- descend --
        visited.add(v)
        log.emit(u, v, True, grid.cost(v, use_weights))
        if v == end:
            frames.append((v, iter(())))
            found = True
            break
        frames.append((v, iter(grid.neighbours(v))))

    path = []
    if found:
        cells = [cell for cell, _ in frames]
        path  = list(zip(cells, cells[1:]))

    return SolveResult(
        algo_key="dfs",
        events=log.freeze(),
        path=path,
        cost=path_cost(path, lambda c: grid.cost(c, use_weights)),
        start=start,
        end=end,
    )
