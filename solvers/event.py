"""
event.py — Search Event Log
============================
Every solver appends one Event per edge it tries, in the exact order it
tried them.  The playback engine later replays that list at its own pace.

    accepted=True   – edge is part of the path being built
                      (DFS: "descending", others: set by mark_path_events)
    accepted=False  – edge explored but not on the path
                      (DFS: a later False for an accepted edge = backtrack)

Design decisions:
  - Event is a frozen dataclass.  The solver is the only writer; playback
    and rendering are pure readers.
  - mark_path_events() is a separate second pass over a finished log.
    It builds a new list instead of mutating events in place.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple


Edge = Tuple[int, int]


@dataclass(frozen=True)
class Event:
    """
    Attributes:
        from_cell : Linear index of the cell being expanded.
        to_cell   : Linear index of the neighbour tried.
        accepted  : See module docstring.
        cost      : Cost of stepping onto to_cell.
    """

    from_cell: int
    to_cell:   int
    accepted:  bool  = False
    cost:      float = 1.0

    @property
    def edge(self) -> Edge:
        return (self.from_cell, self.to_cell)

    def to_dict(self) -> dict:
        return {
            "from":     self.from_cell,
            "to":       self.to_cell,
            "accepted": self.accepted,
            "cost":     self.cost,
        }


class EventLog:
    """Append-only buffer the solver writes into."""

    def __init__(self):
        self._events: List[Event] = []

    def emit(self, from_cell: int, to_cell: int, accepted: bool = False, cost: float = 1.0) -> Event:
        event = Event(from_cell, to_cell, accepted, cost)
        self._events.append(event)
        return event

    def freeze(self) -> Tuple[Event, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __getitem__(self, idx: int) -> Event:
        return self._events[idx]


# ---------------------------------------------------------------------------
# Result of one solve
# ---------------------------------------------------------------------------
@dataclass
class SolveResult:
    algo_key:  str                   = ""
    events:    Tuple[Event, ...]     = ()
    path:      List[Edge]            = field(default_factory=list)
    cost:      float                 = 0.0
    start:     int                   = 0
    end:       int                   = 0

    @property
    def found(self) -> bool:
        return bool(self.path)

    @property
    def examined(self) -> int:
        return len(self.events)

    @property
    def path_cells(self) -> List[int]:
        if not self.path:
            return []
        return [self.path[0][0]] + [v for _, v in self.path]


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------
def reconstruct_path(parent: Dict[int, Optional[int]], start: int, end: int) -> List[Edge]:
    """Walk predecessors back from end to start; [] when end was never reached."""
    if end != start and parent.get(end) is None:
        return []
    path: List[Edge] = []
    cur = end
    while cur != start:
        prev = parent[cur]
        path.append((prev, cur))
        cur = prev
    path.reverse()
    return path


def mark_path_events(events: Sequence[Event], path: Sequence[Edge]) -> Tuple[Event, ...]:
    """Return a copy of `events` with every event on `path` flagged accepted."""
    on_path = set(path)
    return tuple(
        replace(e, accepted=True) if e.edge in on_path else e
        for e in events
    )


def path_cost(path: Sequence[Edge], step_cost: Callable[[int], float]) -> float:
    """Total cost of walking `path`; step_cost(cell) is the price of entering it."""
    return sum(step_cost(v) for _, v in path)
