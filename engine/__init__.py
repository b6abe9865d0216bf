"""
engine/
-------
Session, playback & recording layer.

    from engine import MazeSession, MazeConfig, Playback
"""

from engine.config   import MazeConfig
from engine.playback import Playback, PlaybackState, Segment, SPEED_PRESETS, BASE_DELAY
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare
from engine.session  import MazeSession

__all__ = [
    "MazeConfig",
    "MazeSession",
    "Playback",
    "PlaybackState",
    "Segment",
    "SPEED_PRESETS",
    "BASE_DELAY",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
