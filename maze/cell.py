from enum import IntEnum
from typing import List, Tuple


# ---------------------------------------------------------------------------
# Direction — fixed order, relied on everywhere (opposite = (d + 2) % 4)
# ---------------------------------------------------------------------------
class Direction(IntEnum):
    NORTH = 0
    EAST  = 1
    SOUTH = 2
    WEST  = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    @property
    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]


_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.EAST:  (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST:  (-1, 0),
}

DIRECTIONS: Tuple[Direction, ...] = (
    Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST,
)


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    One grid position.

    Attributes:
        walls    : [north, east, south, west] — True means the wall is present.
        blocked  : Obstacle flag.  Blocked cells can never be entered.
        weight   : Traversal cost for entering this cell (>= 1).
        visited  : Scratch flag for generators.  Cleared between phases.
    """

    __slots__ = ("walls", "blocked", "weight", "visited")

    def __init__(self):
        self.walls:   List[bool] = [True, True, True, True]
        self.blocked: bool       = False
        self.weight:  int        = 1
        self.visited: bool       = False

    def reset(self) -> None:
        """All walls up, unblocked, unit weight, unvisited."""
        self.walls[:] = [True, True, True, True]
        self.blocked  = False
        self.weight   = 1
        self.visited  = False

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "walls":   list(self.walls),
            "blocked": self.blocked,
            "weight":  self.weight,
        }

    def __repr__(self) -> str:
        sides = "".join(d.name[0] for d in DIRECTIONS if self.walls[d])
        return f"Cell(walls={sides or '-'}, blocked={self.blocked}, weight={self.weight})"
