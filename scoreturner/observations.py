"""
Primary face selection and signal extraction.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from .types import FaceObservation

# Absent signals must never produce a gesture on their own
DEFAULT_EYE_OPEN = 1.0
DEFAULT_SMILE = 0.0


@dataclass
class FaceSignals:
    """The four signals the engine reads from the primary face."""
    left_eye_open: float
    right_eye_open: float
    smile: float
    head_pitch_deg: float


def select_primary_face(observations: Sequence[FaceObservation]) -> Optional[FaceObservation]:
    """
    Pick the face with the largest bounding box.

    Args:
        observations: Faces detected in the current frame (may be empty)

    Returns:
        The largest face, the first one encountered on equal areas,
        or None if no face was detected
    """
    primary: Optional[FaceObservation] = None
    for face in observations:
        if primary is None or face.area > primary.area:
            primary = face
    return primary


def read_signals(face: FaceObservation) -> FaceSignals:
    """Read signals from a face, substituting defaults for missing values."""
    return FaceSignals(
        left_eye_open=DEFAULT_EYE_OPEN if face.left_eye_open is None else face.left_eye_open,
        right_eye_open=DEFAULT_EYE_OPEN if face.right_eye_open is None else face.right_eye_open,
        smile=DEFAULT_SMILE if face.smile is None else face.smile,
        head_pitch_deg=face.head_pitch_deg,
    )
