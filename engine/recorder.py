"""
recorder.py — Solve Recorder & Analytics
==========================================
Runs one solver to completion on the current grid, keeps the result and
computes the numbers the stats panel shows.

Usage:
    rec = Recorder()
    rec.record(grid, "dijkstra", start, end, use_weights=True)
    rec.metrics.path_cost

Comparison:
    Record two solvers on the SAME grid, then compare(rec1, rec2).
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from maze import Grid
from solvers import SolveResult, SolverInfo, get_solver, solve


# ---------------------------------------------------------------------------
# Metrics dataclass
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    events:          int   = 0          # edge examinations logged
    accepted_events: int   = 0
    rejected_events: int   = 0
    cells_reached:   int   = 0          # distinct cells an event led to
    path_length:     int   = 0          # edges on the final path
    path_cost:       float = 0.0
    path_found:      bool  = False
    wall_time_ms:    float = 0.0        # time spent computing, not showing


@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_events: str = ""   # which solver examined fewer edges
    winner_cost:   str = ""   # which found the cheaper path


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        result   : SolveResult of the last record() call.
        metrics  : RunMetrics computed from it.
        info     : SolverInfo of the solver that ran.
    """

    def __init__(self):
        self.result:  Optional[SolveResult] = None
        self.metrics: Optional[RunMetrics]  = None
        self.info:    Optional[SolverInfo]  = None

    def record(
        self,
        grid: Grid,
        algo_key: str,
        start: int,
        end: int,
        use_weights: bool = True,
    ) -> SolveResult:
        """Solve and compute metrics.  Unknown keys raise ConfigError."""
        t0 = time.perf_counter()
        result = solve(grid, algo_key, start, end, use_weights=use_weights)
        wall_ms = (time.perf_counter() - t0) * 1000

        self.info    = get_solver(algo_key)
        self.result  = result
        self.metrics = self._compute_metrics(result, wall_ms)
        return result

    def _compute_metrics(self, result: SolveResult, wall_ms: float) -> RunMetrics:
        accepted = sum(1 for e in result.events if e.accepted)
        return RunMetrics(
            algo_key=result.algo_key,
            algo_label=self.info.label if self.info else "",
            events=len(result.events),
            accepted_events=accepted,
            rejected_events=len(result.events) - accepted,
            cells_reached=len({e.to_cell for e in result.events}),
            path_length=len(result.path),
            path_cost=result.cost,
            path_found=result.found,
            wall_time_ms=round(wall_ms, 3),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return l.algo_label if l_val < r_val else r.algo_label

    # an unsolved run never wins on cost
    l_cost = l.path_cost if l.path_found else float("inf")
    r_cost = r.path_cost if r.path_found else float("inf")

    return ComparisonResult(
        left=l,
        right=r,
        winner_events=winner(l.events, r.events),
        winner_cost=winner(l_cost, r_cost),
    )
