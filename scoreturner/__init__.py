"""
Face Gesture Page Turner

Turns the pages of a displayed document hands-free: per-frame face
measurements (eye openness, smile, head pitch) are converted into debounced
wink, smile and nod events.
"""

__version__ = "0.1.0"
__author__ = "Score Turner Team"

from .types import (
    FaceObservation,
    GestureKind,
    GestureEvent,
    EngineState,
    PageCommand,
    ReaderProto,
    GESTURE_PRIORITY,
)
from .config import load_config, Cfg, GestureConfig
from .observations import FaceSignals, select_primary_face, read_signals
from .gestures import GestureEngine, step, cooldown_ready
from .callbacks import GestureCallbacks, reader_callbacks, gesture_to_page_command
from .controller_mock import MockReader

__all__ = [
    "FaceObservation",
    "GestureKind",
    "GestureEvent",
    "EngineState",
    "PageCommand",
    "ReaderProto",
    "GESTURE_PRIORITY",
    "load_config",
    "Cfg",
    "GestureConfig",
    "FaceSignals",
    "select_primary_face",
    "read_signals",
    "GestureEngine",
    "step",
    "cooldown_ready",
    "GestureCallbacks",
    "reader_callbacks",
    "gesture_to_page_command",
    "MockReader",
]
