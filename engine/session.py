"""
session.py — Maze Session
==========================
The one object that owns the maze state for a user: config, Grid, the
chosen endpoints, the last SolveResult and the Playback over its log.

Every command is a method; every query the renderer needs is a read-only
method or property.  Phases are strictly sequential:

    regenerate()  →  [pick_new_endpoints() / randomize_obstacles() / weights]
                  →  start_solve()  →  tick()/step()/pause()/resume()

Any command that mutates the grid first resets the playback, so an event
log can never describe a grid other than the one on screen.
"""

import logging
import random
from typing import Dict, List, Optional, Tuple

from maze import (
    ConfigError,
    Grid,
    InvariantError,
    ObstacleReport,
    add_complexity,
    assign_weights,
    clear_weights,
    ensure_pathways,
    generate,
    pick_endpoints,
    place_obstacles,
)
from solvers import SolveResult, get_solver
from engine.config import MazeConfig
from engine.playback import Playback, PlaybackState, Segment
from engine.recorder import Recorder, RunMetrics


logger = logging.getLogger(__name__)


class MazeSession:
    """
    Attributes:
        config    : Current MazeConfig (always valid).
        grid      : The Grid (replaced in place on regenerate).
        start     : Linear index of the start cell.
        end       : Linear index of the end cell.
        result    : SolveResult of the current run, None when idle.
        playback  : Playback over result.events.
        last_obstacles : ObstacleReport of the last randomize_obstacles().
    """

    def __init__(self, config: Optional[MazeConfig] = None, clock=None):
        self.config: MazeConfig = (config or MazeConfig()).validate()
        self.rng:    random.Random = random.Random(self.config.seed)

        playback_kwargs = {} if clock is None else {"clock": clock}
        self.playback = Playback(
            speed=self.config.speed,
            step_mode=self.config.step_mode,
            **playback_kwargs,
        )
        self.recorder = Recorder()

        self.grid:   Grid = Grid(self.config.cols, self.config.rows)
        self.start:  int  = 0
        self.end:    int  = 0
        self.result: Optional[SolveResult] = None
        self.last_obstacles: Optional[ObstacleReport] = None

        self.regenerate()

    # ==================================================================
    # CONFIG
    # ==================================================================
    def configure(self, **changes) -> MazeConfig:
        """
        Apply config changes atomically.  Size / generator changes take
        effect on the next regenerate(); playback knobs apply at once.
        """
        new = self.config.updated(**changes)
        old, self.config = self.config, new

        if new.speed != old.speed:
            self.playback.set_speed(new.speed)
        if new.step_mode != old.step_mode:
            self.playback.set_step_mode(new.step_mode)
        if new.seed != old.seed:
            self.rng.seed(new.seed)
        if not new.use_weights and old.use_weights:
            self.clear_weights()

        logger.info("Config updated: %s", ", ".join(f"{k}={v}" for k, v in changes.items()))
        return new

    # ==================================================================
    # MAZE COMMANDS
    # ==================================================================
    def regenerate(self, **changes) -> None:
        """Fresh maze: carve, choose endpoints, add loops, guarantee local branching, weigh."""
        if changes:
            self.configure(**changes)
        cfg = self.config

        self._invalidate_run()
        self.grid.reset(cfg.cols, cfg.rows)
        generate(self.grid, cfg.generator, self.rng)

        self.start, self.end = pick_endpoints(self.grid, self.rng, cfg.include_center)
        add_complexity(self.grid, self.rng, protected=(self.start, self.end))
        ensure_pathways(self.grid, (self.start, self.end), self.rng)
        self.grid.check_wall_symmetry()

        if cfg.use_weights:
            assign_weights(self.grid, self.start, self.end, self.rng, cfg.weight_range)
        self.last_obstacles = None

        logger.info(
            "Regenerated %dx%d maze with %s (%d open walls)",
            cfg.cols, cfg.rows, cfg.generator, self.grid.removed_wall_pairs(),
        )

    def pick_new_endpoints(self) -> Tuple[int, int]:
        """
        New start / end.  An existing obstacle layout only protected the old
        pair's paths, so it is placed again for the new one.
        """
        self._invalidate_run()
        self.start, self.end = pick_endpoints(self.grid, self.rng, self.config.include_center)
        if self.last_obstacles is not None:
            self._place_obstacles()
        if self.config.use_weights:
            self.grid.cells[self.start].weight = 1
            self.grid.cells[self.end].weight   = 1
        return self.start, self.end

    def randomize_obstacles(self, density: Optional[float] = None) -> ObstacleReport:
        if density is not None:
            self.configure(obstacle_density=density)
        self._invalidate_run()
        return self._place_obstacles()

    def clear_obstacles(self) -> None:
        self._invalidate_run()
        self.grid.clear_obstacles()
        self.last_obstacles = None
        logger.info("Obstacles cleared")

    def randomize_weights(self) -> None:
        if not self.config.use_weights:
            raise ConfigError("Weights are disabled; set use_weights first")
        self._invalidate_run()
        assign_weights(self.grid, self.start, self.end, self.rng, self.config.weight_range)
        logger.info("Weights randomized in %s", self.config.weight_range)

    def clear_weights(self) -> None:
        self._invalidate_run()
        clear_weights(self.grid)

    # ==================================================================
    # SOLVE / PLAYBACK COMMANDS
    # ==================================================================
    def start_solve(self, solver: Optional[str] = None, now: Optional[float] = None) -> SolveResult:
        """Run the solver to completion and start playing its log back."""
        if solver is not None:
            self.configure(solver=solver)
        if self.start == self.end:
            raise InvariantError("Start and end coincide")

        self.playback.reset()
        key = self.config.solver
        result = self.recorder.record(
            self.grid, key, self.start, self.end, use_weights=self.config.use_weights,
        )
        self.result = result
        self.playback.load(result.events, retracts=get_solver(key).retracts, now=now)

        if result.found:
            logger.info(
                "Solve started with %s: %d event(s), path %d edge(s), cost %.1f",
                key, result.examined, len(result.path), result.cost,
            )
        else:
            logger.info("Solve started with %s: no path (%d event(s))", key, result.examined)
        return result

    def tick(self, now: Optional[float] = None) -> int:
        consumed = self.playback.tick(now)
        if consumed and self.playback.is_complete:
            logger.info("Solve finished")
        return consumed

    def step(self, now: Optional[float] = None) -> bool:
        stepped = self.playback.step(now)
        if stepped and self.playback.is_complete:
            logger.info("Solve finished")
        return stepped

    def pause(self) -> bool:
        paused = self.playback.pause()
        if paused:
            logger.info("Paused")
        return paused

    def resume(self, now: Optional[float] = None) -> bool:
        return self.playback.resume(now)

    def reset_run(self) -> None:
        self._invalidate_run()
        logger.info("Run reset")

    def clear_visualization(self) -> None:
        self.playback.clear_visualization()

    # ==================================================================
    # QUERIES
    # ==================================================================
    @property
    def state(self) -> PlaybackState:
        return self.playback.state

    @property
    def metrics(self) -> Optional[RunMetrics]:
        return self.recorder.metrics if self.result is not None else None

    def cells(self) -> List[Dict]:
        return [c.to_dict() for c in self.grid.cells]

    def segment_points(self, segment: Segment) -> Tuple[float, float, float, float]:
        """Cell-centre coordinates (x1, y1, x2, y2) in grid units."""
        ux, uy = self.grid.coords(segment.from_cell)
        vx, vy = self.grid.coords(segment.to_cell)
        return (ux + 0.5, uy + 0.5, vx + 0.5, vy + 0.5)

    def segments(self) -> Dict[str, List[Tuple[float, float, float, float]]]:
        return {
            "success": [self.segment_points(s) for s in self.playback.success],
            "failure": [self.segment_points(s) for s in self.playback.failure],
        }

    def elapsed(self, now: Optional[float] = None) -> Tuple[float, float]:
        return self.playback.elapsed(now)

    def snapshot(self, now: Optional[float] = None) -> Dict:
        real, scaled = self.elapsed(now)
        metrics = self.metrics
        return {
            "config":   self.config.to_dict(),
            "start":    self.grid.coords(self.start),
            "end":      self.grid.coords(self.end),
            "state":    self.state.value,
            "cursor":   self.playback.cursor,
            "total_events": len(self.playback.events),
            "elapsed":  {"real": real, "scaled": scaled},
            "path":     [list(edge) for edge in self.result.path] if self.result else [],
            "path_found": self.result.found if self.result else None,
            "metrics":  metrics.__dict__ if metrics else {},
            "obstacles": self.last_obstacles.__dict__ if self.last_obstacles else {},
        }

    # ==================================================================
    # Internal
    # ==================================================================
    def _invalidate_run(self) -> None:
        self.playback.reset()
        self.result = None

    def _place_obstacles(self) -> ObstacleReport:
        report = place_obstacles(
            self.grid,
            self.start,
            self.end,
            self.config.obstacle_density,
            self.rng,
            unsolvable_chance=self.config.unsolvable_chance,
        )
        self.grid.check_wall_symmetry()
        self.last_obstacles = report
        return report
