"""
engine/
-------
Playback, projection & recording layer.

    from engine import PlaybackController, project, Recorder, compare
"""

from engine.projector  import VisualState, project, replay_array
from engine.controller import (
    PlaybackController,
    PlaybackState,
    PlaybackStatus,
    transition,
    tick_interval,
    SPEED_PRESETS,
)
from engine.recorder   import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "VisualState",
    "project",
    "replay_array",
    "PlaybackController",
    "PlaybackState",
    "PlaybackStatus",
    "transition",
    "tick_interval",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
