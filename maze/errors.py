"""
errors.py — Error Taxonomy
===========================
Three kinds of failure exist in the core:

  • ConfigError     – bad caller input (grid size, algorithm key, density,
                      speed …).  Raised BEFORE any state is touched.
  • InvariantError  – the grid or session is in a state that should be
                      impossible (asymmetric walls, start == end, a
                      "solvable" obstacle layout that is not).  Internal
                      defect; nothing downstream can recover.
  • (not an error)  – an unsolvable maze.  Solvers return an empty path.
"""


class MazeError(Exception):
    """Base class for every error raised by the maze core."""


class ConfigError(MazeError, ValueError):
    """Invalid configuration or selector.  No state was changed."""


class InvariantError(MazeError, RuntimeError):
    """A core invariant was violated."""


__all__ = ["MazeError", "ConfigError", "InvariantError"]
