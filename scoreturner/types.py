"""
Type definitions for face gesture page turning.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Protocol, runtime_checkable


@dataclass
class FaceObservation:
    """Per-face measurements reported by the face detector for one frame."""
    area: float  # bounding box width * height, only used to pick the primary face
    head_pitch_deg: float  # signed head tilt, required
    left_eye_open: Optional[float] = None  # probability in [0, 1]
    right_eye_open: Optional[float] = None  # probability in [0, 1]
    smile: Optional[float] = None  # probability in [0, 1]


class GestureKind(Enum):
    """Facial gestures the engine can emit."""
    WINK_LEFT = "wink_left"
    WINK_RIGHT = "wink_right"
    SMILE = "smile"
    NOD_DOWN = "nod_down"
    NOD_UP = "nod_up"


# Evaluation order, first matching trigger condition wins
GESTURE_PRIORITY = (
    GestureKind.WINK_LEFT,
    GestureKind.WINK_RIGHT,
    GestureKind.SMILE,
    GestureKind.NOD_DOWN,
    GestureKind.NOD_UP,
)


@dataclass(frozen=True)
class GestureEvent:
    """A gesture that fired on a frame."""
    kind: GestureKind
    timestamp_ms: int


@dataclass(frozen=True)
class EngineState:
    """Recognition state threaded through every frame evaluation."""
    last_trigger_ms: Optional[int] = None  # shared by all gestures, None until the first fire
    baseline_pitch: Optional[float] = None  # captured once, never updated
    nod_down_latched: bool = False
    nod_up_latched: bool = False
    smile_latched: bool = False


PageDirection = Literal["next", "prev"]


@dataclass
class PageCommand:
    """Command to move one page in a direction."""
    direction: PageDirection


@runtime_checkable
class ReaderProto(Protocol):
    """Abstract protocol for document viewers driven by gestures."""

    def next_page(self) -> None:
        """Advance to the next page."""
        ...

    def prev_page(self) -> None:
        """Go back to the previous page."""
        ...
