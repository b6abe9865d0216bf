"""
config.py — Session Configuration
==================================
Every knob the UI can turn, validated as a whole.  A bad value raises
ConfigError and leaves the previous config untouched; updated() returns a
new object instead of patching fields one by one.
"""

import os
from dataclasses import asdict, dataclass, replace
from numbers import Real
from typing import Optional, Tuple

from maze import ConfigError, GENERATORS
from solvers import SOLVERS


MIN_DIM, MAX_DIM       = 5, 60
MIN_SPEED, MAX_SPEED   = 0.1, 5.0
MAX_OBSTACLE_DENSITY   = 0.6
MIN_MAX_WEIGHT, MAX_MAX_WEIGHT = 2, 15

_INT_FIELDS  = ("cols", "rows", "max_weight")
_REAL_FIELDS = ("speed", "obstacle_density", "unsolvable_chance")
_BOOL_FIELDS = ("use_weights", "step_mode", "include_center")
_KEY_FIELDS  = ("generator", "solver")


@dataclass(frozen=True)
class MazeConfig:
    cols:              int            = 20
    rows:              int            = 20
    generator:         str            = "backtracker"
    solver:            str            = "dfs"
    obstacle_density:  float          = 0.15
    unsolvable_chance: float          = 0.3      # 0 = obstacles never cut start from end
    use_weights:       bool           = True
    max_weight:        int            = 5
    speed:             float          = 1.0      # playback multiplier
    step_mode:         bool           = False
    include_center:    bool           = False    # centre cell as endpoint candidate
    seed:              Optional[int]  = None

    @property
    def weight_range(self) -> Tuple[int, int]:
        return (1, self.max_weight)

    def validate(self) -> "MazeConfig":
        self._check_types()
        if not (MIN_DIM <= self.cols <= MAX_DIM and MIN_DIM <= self.rows <= MAX_DIM):
            raise ConfigError(
                f"Grid size must be within {MIN_DIM}..{MAX_DIM}, got {self.cols}x{self.rows}"
            )
        if self.generator not in GENERATORS:
            raise ConfigError(f"Unknown generator: {self.generator}")
        if self.solver not in SOLVERS:
            raise ConfigError(f"Unknown solver: {self.solver}")
        if not 0.0 <= self.obstacle_density <= MAX_OBSTACLE_DENSITY:
            raise ConfigError(
                f"Obstacle density must be within 0..{MAX_OBSTACLE_DENSITY}, got {self.obstacle_density}"
            )
        if not 0.0 <= self.unsolvable_chance <= 1.0:
            raise ConfigError(f"Unsolvable chance must be within 0..1, got {self.unsolvable_chance}")
        if not MIN_MAX_WEIGHT <= self.max_weight <= MAX_MAX_WEIGHT:
            raise ConfigError(
                f"Max weight must be within {MIN_MAX_WEIGHT}..{MAX_MAX_WEIGHT}, got {self.max_weight}"
            )
        if not MIN_SPEED <= self.speed <= MAX_SPEED:
            raise ConfigError(f"Speed must be within {MIN_SPEED}..{MAX_SPEED}, got {self.speed}")
        return self

    def _check_types(self) -> None:
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        for name in _REAL_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ConfigError(f"{name} must be a number, got {value!r}")
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")
        for name in _KEY_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError(f"seed must be an integer or null, got {self.seed!r}")

    def updated(self, **changes) -> "MazeConfig":
        unknown = set(changes) - set(asdict(self))
        if unknown:
            raise ConfigError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        try:
            return replace(self, **changes).validate()
        except TypeError as exc:
            # e.g. a string where a number was expected
            raise ConfigError(str(exc)) from exc

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_env(cls) -> "MazeConfig":
        """Defaults, overridden by MAZE_COLS / MAZE_ROWS / MAZE_SEED / MAZE_GENERATOR / MAZE_SOLVER."""
        changes = {}
        try:
            if os.getenv("MAZE_COLS"):
                changes["cols"] = int(os.environ["MAZE_COLS"])
            if os.getenv("MAZE_ROWS"):
                changes["rows"] = int(os.environ["MAZE_ROWS"])
            if os.getenv("MAZE_SEED"):
                changes["seed"] = int(os.environ["MAZE_SEED"])
        except ValueError as exc:
            raise ConfigError(f"Bad numeric environment value: {exc}") from exc
        if os.getenv("MAZE_GENERATOR"):
            changes["generator"] = os.environ["MAZE_GENERATOR"]
        if os.getenv("MAZE_SOLVER"):
            changes["solver"] = os.environ["MAZE_SOLVER"]
        return cls().updated(**changes)
