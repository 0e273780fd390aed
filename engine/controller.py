"""
controller.py — Playback Controller
====================================
The PlaybackController is the ONLY stateful object the UI talks to
during playback.  It owns a cursor into an immutable OperationLog plus a
speed multiplier, and exposes the transport controls.

State machine:
    IDLE     →  play()           →  PLAYING
    PLAYING  →  pause()          →  PAUSED
    PAUSED   →  play()           →  PLAYING
    PLAYING  →  (cursor == end)  →  COMPLETE   (one-shot completion signal)
    any      →  step / seek      →  PAUSED
    any      →  skip_to_end()    →  COMPLETE
    any      →  reset() / load() →  IDLE

All of the rules live in `transition(state, event)`, a pure function
over frozen values; the controller object only adds the side effects
(timer registration, observer callbacks) around it.  Every transport
call is total: out-of-range requests are clamped, nonsensical ones are
ignored, nothing raises.

Timing:
  With a `scheduler` (anything with `call_later(delay, cb)` returning a
  handle with `cancel()`, e.g. an asyncio event loop) the controller
  re-arms one tick at a time while PLAYING.  Without one, the host
  drives it: call `tick()` on your own timer, or `poll()` often and let
  the controller compare elapsed time against the current interval.

Thread safety:
  This class is NOT thread-safe.  Drive it from one thread or one
  event loop.
"""

import logging
import math
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, List, Optional

from algorithms.step import OperationLog, Step
from engine.projector import VisualState, project

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
MIN_SPEED     = 0.1
MAX_SPEED     = 3.0
DEFAULT_SPEED = 1.0
BASE_INTERVAL = 1.0     # seconds per step at speed 1.0

SPEED_PRESETS = {
    "slow":   0.5,      # teaching mode
    "medium": 1.0,
    "fast":   2.0,      # demo mode
    "turbo":  3.0,
}


def clamp_speed(value: float) -> float:
    return max(MIN_SPEED, min(MAX_SPEED, value))


def tick_interval(speed: float) -> float:
    """Seconds between ticks; continuous and strictly decreasing in speed."""
    return BASE_INTERVAL / clamp_speed(speed)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackStatus(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    COMPLETE = "complete"


@dataclass(frozen=True)
class PlaybackState:
    cursor:      int            = 0
    total_steps: int            = 0
    status:      PlaybackStatus = PlaybackStatus.IDLE
    speed:       float          = DEFAULT_SPEED

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.status is PlaybackStatus.PAUSED

    @property
    def is_complete(self) -> bool:
        return self.status is PlaybackStatus.COMPLETE

    @property
    def interval(self) -> float:
        return tick_interval(self.speed)

    def to_dict(self) -> dict:
        return {
            "cursor":      self.cursor,
            "total_steps": self.total_steps,
            "status":      self.status.value,
            "is_playing":  self.is_playing,
            "is_paused":   self.is_paused,
            "is_complete": self.is_complete,
            "speed":       self.speed,
            "interval":    self.interval,
        }


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Play:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class StepForward:
    pass


@dataclass(frozen=True)
class StepBackward:
    pass


@dataclass(frozen=True)
class SkipToBeginning:
    pass


@dataclass(frozen=True)
class SkipToEnd:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class SetSpeed:
    speed: Any = DEFAULT_SPEED


@dataclass(frozen=True)
class Seek:
    index: Any = 0


@dataclass(frozen=True)
class Load:
    total_steps: int = 0


# ---------------------------------------------------------------------------
# Transition function
# ---------------------------------------------------------------------------
def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def transition(state: PlaybackState, event: Any) -> PlaybackState:
    """Pure and total: unknown events and unusable payloads leave `state` as is."""
    end = state.total_steps
    S   = PlaybackStatus

    if isinstance(event, Play):
        if state.is_playing or state.cursor >= end:
            return state
        return replace(state, status=S.PLAYING)

    if isinstance(event, Pause):
        if not state.is_playing:
            return state
        return replace(state, status=S.PAUSED)

    if isinstance(event, Reset):
        return replace(state, cursor=0, status=S.IDLE)

    if isinstance(event, StepForward):
        return replace(state, cursor=min(state.cursor + 1, end), status=S.PAUSED)

    if isinstance(event, StepBackward):
        return replace(state, cursor=max(state.cursor - 1, 0), status=S.PAUSED)

    if isinstance(event, SkipToBeginning):
        status = S.IDLE if state.is_complete else state.status
        return replace(state, cursor=0, status=status)

    if isinstance(event, SkipToEnd):
        return replace(state, cursor=end, status=S.COMPLETE)

    if isinstance(event, Tick):
        if not state.is_playing:
            return state
        cursor = min(state.cursor + 1, end)
        return replace(state, cursor=cursor, status=S.COMPLETE if cursor == end else S.PLAYING)

    if isinstance(event, SetSpeed):
        speed = _as_number(event.speed)
        if speed is None:
            return state
        return replace(state, speed=clamp_speed(speed))

    if isinstance(event, Seek):
        index = _as_number(event.index)
        if index is None:
            return state
        if math.isinf(index):
            cursor = end if index > 0 else 0
        else:
            cursor = max(0, min(int(index), end))
        return replace(state, cursor=cursor, status=S.PAUSED)

    if isinstance(event, Load):
        return PlaybackState(cursor=0, total_steps=max(0, event.total_steps), status=S.IDLE, speed=state.speed)

    return state


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
StepListener     = Callable[[int, VisualState, str], None]
CompleteListener = Callable[[], None]


class PlaybackController:
    """
    Attributes:
        state     : Current PlaybackState (frozen; replaced on every event).
        log       : The OperationLog being played (an empty log until load()).
        scheduler : Optional timer source with call_later(delay, cb).
        clock     : Monotonic time source used by poll().
    """

    def __init__(
        self,
        log: Optional[OperationLog] = None,
        scheduler: Any = None,
        speed: float = DEFAULT_SPEED,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.scheduler = scheduler
        self.clock     = clock
        self.log:   OperationLog  = OperationLog()
        self.state: PlaybackState = PlaybackState(speed=clamp_speed(speed))

        self._handle:     Any   = None     # pending scheduler registration
        self._generation: int   = 0        # bumps on every load(); stale timers check it
        self._last_tick:  float = 0.0
        self._listeners:          List[StepListener]     = []
        self._complete_listeners: List[CompleteListener] = []

        if log is not None:
            self.load(log)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, log: OperationLog) -> None:
        """Retire whatever is playing, then install `log` at cursor 0."""
        if not isinstance(log, OperationLog):
            raise TypeError(f"PlaybackController.load expects an OperationLog, got {type(log).__name__}")
        self._cancel_timer()
        self._generation += 1
        self.log = log
        logger.info("loaded %s log with %d steps", log.algorithm or "anonymous", len(log))
        self._dispatch(Load(total_steps=len(log)), force_notify=True)

    def reset(self) -> None:
        self._dispatch(Reset())

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def play(self) -> None:
        self._dispatch(Play())

    def pause(self) -> None:
        self._dispatch(Pause())

    def toggle_play(self) -> None:
        if self.state.is_playing:
            self.pause()
        else:
            self.play()

    def step_forward(self) -> None:
        self._dispatch(StepForward())

    def step_backward(self) -> None:
        self._dispatch(StepBackward())

    def skip_to_beginning(self) -> None:
        self._dispatch(SkipToBeginning())

    def skip_to_end(self) -> None:
        self._dispatch(SkipToEnd())

    def seek(self, index: int) -> None:
        self._dispatch(Seek(index))

    def set_speed(self, speed: float) -> None:
        self._dispatch(SetSpeed(speed))

    def set_preset(self, preset: str) -> None:
        self.set_speed(SPEED_PRESETS.get(preset, DEFAULT_SPEED))

    # ------------------------------------------------------------------
    # Tick  (scheduler callback, or call from your own timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """Advance exactly one step if PLAYING.  Returns True if the cursor moved."""
        before = self.state.cursor
        self._dispatch(Tick())
        return self.state.cursor != before

    def poll(self) -> bool:
        """
        Call periodically (e.g. every 50 ms) when there is no scheduler.
        Ticks once if the current interval has elapsed since the last tick.
        """
        if not self.state.is_playing:
            return False
        now = self.clock()
        if now - self._last_tick < self.state.interval:
            return False
        self._last_tick = now
        return self.tick()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, callback: StepListener) -> Callable[[], None]:
        """callback(cursor, VisualState, description) on every cursor change."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def on_complete(self, callback: CompleteListener) -> Callable[[], None]:
        self._complete_listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._complete_listeners:
                self._complete_listeners.remove(callback)
        return unsubscribe

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def total_steps(self) -> int:
        return self.state.total_steps

    @property
    def status(self) -> PlaybackStatus:
        return self.state.status

    @property
    def speed(self) -> float:
        return self.state.speed

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    @property
    def is_complete(self) -> bool:
        return self.state.is_complete

    @property
    def has_pending_tick(self) -> bool:
        return self._handle is not None

    @property
    def current_step(self) -> Optional[Step]:
        """The step most recently applied (the one at cursor-1)."""
        if self.state.cursor == 0:
            return None
        return self.log[self.state.cursor - 1]

    def visual_state(self) -> VisualState:
        return project(self.log, self.state.cursor)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _dispatch(self, event: Any, force_notify: bool = False) -> None:
        old = self.state
        new = transition(old, event)
        self.state = new

        if new.is_playing and not old.is_playing:
            self._last_tick = self.clock()
        if old.status is not new.status:
            logger.debug("playback %s → %s at %d/%d", old.status.value, new.status.value,
                         new.cursor, new.total_steps)
        self._sync_timer()

        if force_notify or new.cursor != old.cursor:
            self._notify()
        if new.is_complete and new.cursor != old.cursor:
            self._notify_complete()

    def _sync_timer(self) -> None:
        if not self.state.is_playing:
            self._cancel_timer()
        elif self.scheduler is not None and self._handle is None:
            generation = self._generation
            self._handle = self.scheduler.call_later(self.state.interval, lambda: self._on_timer(generation))

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_timer(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self.tick()     # re-arms through _sync_timer while still PLAYING

    def _notify(self) -> None:
        if not self._listeners:
            return
        vs = self.visual_state()
        for cb in list(self._listeners):
            cb(vs.cursor, vs, vs.description)

    def _notify_complete(self) -> None:
        logger.debug("playback of %s complete", self.log.algorithm or "anonymous")
        for cb in list(self._complete_listeners):
            cb()
