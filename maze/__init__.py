"""
maze/
-----
Core data layer.  Public API:

    from maze import Grid, Cell, Direction
    from maze import generate, pick_endpoints, place_obstacles
"""

from maze.cell       import Cell, Direction, DIRECTIONS
from maze.errors     import MazeError, ConfigError, InvariantError
from maze.grid       import Grid, OFF_GRID, MIN_GRID_SIZE
from maze.union_find import DisjointSet
from maze.generators import (
    GENERATORS,
    GeneratorInfo,
    get_generator,
    generate,
    add_complexity,
    ensure_pathways,
)
from maze.endpoints  import pick_endpoints, endpoint_candidates
from maze.obstacles  import (
    ObstacleReport,
    place_obstacles,
    clear_obstacles,
    assign_weights,
    clear_weights,
)

__all__ = [
    "Cell",          "Direction",      "DIRECTIONS",
    "MazeError",     "ConfigError",    "InvariantError",
    "Grid",          "OFF_GRID",       "MIN_GRID_SIZE",
    "DisjointSet",
    "GENERATORS",    "GeneratorInfo",  "get_generator",  "generate",
    "add_complexity", "ensure_pathways",
    "pick_endpoints", "endpoint_candidates",
    "ObstacleReport", "place_obstacles", "clear_obstacles",
    "assign_weights", "clear_weights",
]
