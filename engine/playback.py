"""
playback.py — Event Log Playback Engine
========================================
The Playback is the ONLY object the renderer reads during a run.  It owns
the finished event log of the current solve, a cursor into it, and the
"revealed" success / failure segments built from the consumed prefix.

Solving is instant; showing it is not.  The engine decides WHEN each
event becomes visible:

    auto mode : tick(now) drains as many events as the elapsed time buys,
                one event per  base_delay / speed  seconds
    step mode : tick() does nothing; step() reveals exactly one event

State machine:
    IDLE      →  load()    →  RUNNING   (COMPLETE at once for an empty log)
    RUNNING   →  pause()   →  PAUSED
    PAUSED    →  resume()  →  RUNNING
    RUNNING   →  (log exhausted) → COMPLETE
    any       →  reset()   →  IDLE

Thread safety:
  Not thread-safe and does not need to be: every call comes from the one
  loop that also renders.  There is no background thread; tick() is a
  drain loop, never a wait.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from maze import ConfigError
from solvers.event import Event


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
BASE_DELAY = 0.005          # seconds per event at 1x

MIN_SPEED, MAX_SPEED = 0.1, 5.0

SPEED_PRESETS = {
    "slow":   0.25,
    "normal": 1.0,
    "fast":   2.5,
    "turbo":  5.0,
}


@dataclass(frozen=True)
class Segment:
    from_cell: int
    to_cell:   int

    @property
    def edge(self) -> Tuple[int, int]:
        return (self.from_cell, self.to_cell)


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
class Playback:
    """
    Attributes:
        events    : The full log of the current solve (immutable tuple).
        cursor    : Number of events consumed so far.
        state     : Current PlaybackState.
        speed     : Multiplier on the base rate (0.1x – 5x).
        step_mode : When True only step() advances the cursor.
        retracts  : When True a rejected event removes its drawn success
                    segment (depth-first backtracking).
        success   : Revealed accepted segments, in draw order.
        failure   : Revealed rejected segments, in draw order.
    """

    def __init__(
        self,
        base_delay: float = BASE_DELAY,
        speed: float = 1.0,
        step_mode: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.base_delay: float               = base_delay
        self.speed:      float               = 1.0
        self.step_mode:  bool                = step_mode
        self._clock:     Callable[[], float] = clock

        self.events:   Tuple[Event, ...] = ()
        self.cursor:   int               = 0
        self.state:    PlaybackState     = PlaybackState.IDLE
        self.retracts: bool              = False
        self.success:  List[Segment]     = []
        self.failure:  List[Segment]     = []

        self._last_tick:  float           = 0.0
        self._start_time: Optional[float] = None
        self._end_time:   Optional[float] = None

        self.set_speed(speed)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, events: Sequence[Event], retracts: bool = False, now: Optional[float] = None) -> None:
        """Attach a fresh log and start playing it from the first event."""
        now = self._now(now)
        self.events      = tuple(events)
        self.cursor      = 0
        self.retracts    = retracts
        self.success     = []
        self.failure     = []
        self._start_time = now
        self._end_time   = None
        self._last_tick  = now
        self.state       = PlaybackState.RUNNING
        if not self.events:
            self._finish(now)

    def reset(self) -> None:
        """Back to IDLE — the log is discarded."""
        self.events      = ()
        self.cursor      = 0
        self.retracts    = False
        self.success     = []
        self.failure     = []
        self._start_time = None
        self._end_time   = None
        self.state       = PlaybackState.IDLE

    def clear_visualization(self) -> None:
        """Forget the drawn segments; the cursor stays where it is."""
        self.success = []
        self.failure = []

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def pause(self) -> bool:
        if self.state != PlaybackState.RUNNING:
            return False
        self.state = PlaybackState.PAUSED
        return True

    def resume(self, now: Optional[float] = None) -> bool:
        if self.state != PlaybackState.PAUSED:
            return False
        self.state      = PlaybackState.RUNNING
        self._last_tick = self._now(now)
        return True

    # ------------------------------------------------------------------
    # Advancing
    # ------------------------------------------------------------------
    @property
    def interval(self) -> float:
        return self.base_delay / self.speed

    def tick(self, now: Optional[float] = None) -> int:
        """
        Call from the render loop.  When running in auto mode, consume every
        event whose slot has come due.  Returns the number consumed.
        """
        if self.state != PlaybackState.RUNNING or self.step_mode:
            return 0
        now = self._now(now)
        interval = self.interval
        consumed = 0
        while self.cursor < len(self.events) and now - self._last_tick >= interval:
            self._consume()
            self._last_tick += interval
            consumed += 1
        if self.cursor >= len(self.events):
            self._finish(now)
        return consumed

    def step(self, now: Optional[float] = None) -> bool:
        """Reveal exactly one event.  Returns False if nothing was left."""
        if self.state not in (PlaybackState.RUNNING, PlaybackState.PAUSED):
            return False
        if self.cursor >= len(self.events):
            self._finish(self._now(now))
            return False
        self._consume()
        if self.cursor >= len(self.events):
            self._finish(self._now(now))
        return True

    def jump_to_end(self, now: Optional[float] = None) -> int:
        """Consume the rest of the log immediately (infinite speed)."""
        if self.state not in (PlaybackState.RUNNING, PlaybackState.PAUSED):
            return 0
        consumed = 0
        while self.cursor < len(self.events):
            self._consume()
            consumed += 1
        self._finish(self._now(now))
        return consumed

    # ------------------------------------------------------------------
    # Speed / mode
    # ------------------------------------------------------------------
    def set_speed(self, multiplier: float) -> None:
        if not MIN_SPEED <= multiplier <= MAX_SPEED:
            raise ConfigError(f"Speed must be within {MIN_SPEED}..{MAX_SPEED}, got {multiplier}")
        self.speed = multiplier

    def set_speed_preset(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ConfigError(f"Unknown speed preset: {preset}")
        self.set_speed(SPEED_PRESETS[preset])

    def set_step_mode(self, enabled: bool, now: Optional[float] = None) -> None:
        if self.step_mode and not enabled:
            # leaving step mode: do not replay the time spent stepping
            self._last_tick = self._now(now)
        self.step_mode = enabled

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def remaining(self) -> int:
        return len(self.events) - self.cursor

    @property
    def is_complete(self) -> bool:
        return self.state == PlaybackState.COMPLETE

    def elapsed(self, now: Optional[float] = None) -> Tuple[float, float]:
        """(real seconds, scaled seconds) since load; frozen once complete."""
        if self._start_time is None:
            return 0.0, 0.0
        end  = self._end_time if self._end_time is not None else self._now(now)
        real = max(0.0, end - self._start_time)
        return real, (real if self.step_mode else real * self.speed)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _consume(self) -> None:
        event = self.events[self.cursor]
        self.cursor += 1
        segment = Segment(event.from_cell, event.to_cell)
        if event.accepted:
            self.success.append(segment)
        else:
            if self.retracts:
                self._retract(segment)
            self.failure.append(segment)

    def _retract(self, segment: Segment) -> None:
        for i in range(len(self.success) - 1, -1, -1):
            if self.success[i] == segment:
                del self.success[i]
                return

    def _finish(self, now: float) -> None:
        if self.state == PlaybackState.COMPLETE:
            return
        self.state     = PlaybackState.COMPLETE
        self._end_time = now
        logger.debug("playback complete after %d event(s)", self.cursor)
