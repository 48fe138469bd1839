"""
Gesture engine that converts per-frame face signals into page turn events.
"""
import logging
from dataclasses import replace
from typing import Callable, Dict, Optional, Sequence, Tuple

from .callbacks import GestureCallbacks
from .config import GestureConfig
from .observations import FaceSignals, read_signals, select_primary_face
from .types import GESTURE_PRIORITY, EngineState, FaceObservation, GestureEvent, GestureKind

logger = logging.getLogger(__name__)

# Smile latch releases once the probability falls below this fraction of the threshold
SMILE_RELEASE_FACTOR = 0.7

_HEAD_GESTURES = (GestureKind.NOD_DOWN, GestureKind.NOD_UP)

# Evaluators return the updated state and whether the trigger condition held
Evaluator = Callable[[EngineState, GestureConfig, FaceSignals], Tuple[EngineState, bool]]


def cooldown_ready(state: EngineState, config: GestureConfig, now: int) -> bool:
    """True before the first fire, then once strictly more than cooldown_ms has passed."""
    if state.last_trigger_ms is None:
        return True
    return (now - state.last_trigger_ms) > config.cooldown_ms


def _wink_left(state: EngineState, config: GestureConfig,
               signals: FaceSignals) -> Tuple[EngineState, bool]:
    return state, (signals.left_eye_open < config.wink_closed_thr
                   and signals.right_eye_open > config.wink_open_thr)


def _wink_right(state: EngineState, config: GestureConfig,
                signals: FaceSignals) -> Tuple[EngineState, bool]:
    return state, (signals.right_eye_open < config.wink_closed_thr
                   and signals.left_eye_open > config.wink_open_thr)


def _smile(state: EngineState, config: GestureConfig,
           signals: FaceSignals) -> Tuple[EngineState, bool]:
    # Rising edge fires immediately, release needs the lower hysteresis band
    if not state.smile_latched and signals.smile > config.smile_threshold:
        return replace(state, smile_latched=True), True
    if state.smile_latched and signals.smile < config.smile_threshold * SMILE_RELEASE_FACTOR:
        return replace(state, smile_latched=False), False
    return state, False


def _nod(latched: bool, departure: float, distance: float,
         config: GestureConfig) -> Tuple[bool, bool]:
    """
    Tilt-then-return detector shared by both nod directions.

    Args:
        latched: Whether a tilt is already in progress
        departure: Signed deviation from baseline in this nod's direction
        distance: Absolute deviation from baseline
        config: Thresholds

    Returns:
        (new latch value, whether the nod completed on this frame)
    """
    if not latched and departure > config.nod_down_delta_deg:
        latched = True
    if latched and distance < config.nod_return_delta_deg:
        return False, True
    return latched, False


def _nod_down(state: EngineState, config: GestureConfig,
              signals: FaceSignals) -> Tuple[EngineState, bool]:
    down = state.baseline_pitch - signals.head_pitch_deg
    latched, completed = _nod(state.nod_down_latched, down, abs(down), config)
    return replace(state, nod_down_latched=latched), completed


def _nod_up(state: EngineState, config: GestureConfig,
            signals: FaceSignals) -> Tuple[EngineState, bool]:
    up = signals.head_pitch_deg - state.baseline_pitch
    latched, completed = _nod(state.nod_up_latched, up, abs(up), config)
    return replace(state, nod_up_latched=latched), completed


_EVALUATORS: Dict[GestureKind, Evaluator] = {
    GestureKind.WINK_LEFT: _wink_left,
    GestureKind.WINK_RIGHT: _wink_right,
    GestureKind.SMILE: _smile,
    GestureKind.NOD_DOWN: _nod_down,
    GestureKind.NOD_UP: _nod_up,
}


def _attempt_fire(state: EngineState, config: GestureConfig, kind: GestureKind,
                  now: int) -> Tuple[EngineState, Optional[GestureEvent]]:
    if not cooldown_ready(state, config, now):
        logger.debug(f"Dropped {kind.value} at {now} ms (cooldown)")
        return state, None
    return replace(state, last_trigger_ms=now), GestureEvent(kind=kind, timestamp_ms=now)


def step(state: EngineState, config: GestureConfig, observations: Sequence[FaceObservation],
         now: int) -> Tuple[EngineState, Optional[GestureEvent]]:
    """
    Advance the recognition state by one frame.

    Gestures are evaluated in GESTURE_PRIORITY order. The first one whose
    trigger condition holds ends the evaluation, whether or not the cooldown
    lets it fire. Disabled gestures are skipped entirely, latches included.

    Args:
        state: State after the previous frame
        config: Configuration to evaluate this frame against
        observations: Faces detected in this frame
        now: Monotonic timestamp in milliseconds

    Returns:
        Tuple of (new state, event or None)
    """
    face = select_primary_face(observations)
    if face is None:
        return state, None

    signals = read_signals(face)
    for kind in GESTURE_PRIORITY:
        if kind in _HEAD_GESTURES and state.baseline_pitch is None:
            state = replace(state, baseline_pitch=signals.head_pitch_deg)
        if not config.is_enabled(kind):
            continue
        state, triggered = _EVALUATORS[kind](state, config, signals)
        if triggered:
            return _attempt_fire(state, config, kind, now)

    return state, None


class GestureEngine:
    """
    Stateful wrapper around step() for one viewing session.

    Owns the recognition state and the current configuration, and hands every
    emitted event to the callback sink. Not thread safe: frames and config
    updates must be delivered from the same logical timeline.
    """

    def __init__(self, config: GestureConfig, callbacks: Optional[GestureCallbacks] = None):
        """Initialize the engine with a fresh state."""
        self._config = config
        self._callbacks = callbacks or GestureCallbacks()
        self._state = EngineState()

    @property
    def config(self) -> GestureConfig:
        return self._config

    @property
    def state(self) -> EngineState:
        return self._state

    def update_config(self, config: GestureConfig) -> None:
        """Swap the whole configuration. Baseline and latches are kept."""
        self._config = config

    def reset(self) -> None:
        """Discard all recognition state, including the baseline pitch."""
        self._state = EngineState()

    def process_frame(self, observations: Sequence[FaceObservation], now: int) -> Optional[GestureEvent]:
        """
        Process one frame and invoke at most one callback.

        Args:
            observations: Faces detected in the frame
            now: Monotonic timestamp in milliseconds

        Returns:
            The emitted event, or None
        """
        self._state, event = step(self._state, self._config, observations, now)
        if event is not None:
            logger.info(f"Gesture {event.kind.value} at {event.timestamp_ms} ms")
            self._callbacks.dispatch(event)
        return event
