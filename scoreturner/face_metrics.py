"""
Face measurements computed from MediaPipe Face Mesh landmarks.

Landmarks are (x, y) pairs normalized to [0..1]; frame_wh converts them to
pixels. Eye sides are the subject's own left and right.
"""
import math
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from .types import FaceObservation

Landmarks = Sequence[Tuple[float, float]]

# Eye contour points ordered p1..p6 for the eye aspect ratio
LEFT_EYE = (362, 385, 387, 263, 373, 380)
RIGHT_EYE = (33, 160, 158, 133, 153, 144)

NOSE_TIP = 1
CHIN = 152
LEFT_EYE_OUTER = 263
RIGHT_EYE_OUTER = 33
MOUTH_LEFT = 291
MOUTH_RIGHT = 61

# Eye aspect ratio of a closed and a fully open eye
EAR_CLOSED = 0.15
EAR_OPEN = 0.30

# Mouth width over outer eye corner distance, neutral face and full smile
MOUTH_RATIO_NEUTRAL = 0.55
MOUTH_RATIO_SMILE = 0.70

# Generic face model in mm, nose tip at the origin, y pointing down and z pointing
# away from the camera, so every other point sits behind the nose
MODEL_POINTS = np.array([
    [0.0, 0.0, 0.0],         # Nose tip
    [0.0, 90.0, 20.0],       # Chin
    [43.0, -32.0, 25.0],     # Left eye outer corner
    [-43.0, -32.0, 25.0],    # Right eye outer corner
    [28.0, 50.0, 15.0],      # Left mouth corner
    [-28.0, 50.0, 15.0],     # Right mouth corner
], dtype=np.float64)
POSE_LANDMARKS = (NOSE_TIP, CHIN, LEFT_EYE_OUTER, RIGHT_EYE_OUTER, MOUTH_LEFT, MOUTH_RIGHT)


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, v))


def _to_px(landmarks: Landmarks, idx: int, frame_wh: Tuple[int, int]) -> Tuple[float, float]:
    width, height = frame_wh
    return landmarks[idx][0] * width, landmarks[idx][1] * height


def _dist(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def eye_aspect_ratio(landmarks: Landmarks, eye: Tuple[int, ...], frame_wh: Tuple[int, int]) -> float:
    """
    Vertical eye opening relative to eye width.

    Args:
        landmarks: Face mesh landmarks
        eye: Six contour indices (LEFT_EYE or RIGHT_EYE)
        frame_wh: Frame dimensions (width, height)

    Returns:
        (|p2-p6| + |p3-p5|) / (2 * |p1-p4|), 0.0 for a degenerate eye
    """
    p1, p2, p3, p4, p5, p6 = (_to_px(landmarks, i, frame_wh) for i in eye)
    width = _dist(p1, p4)
    if width == 0:
        return 0.0
    return (_dist(p2, p6) + _dist(p3, p5)) / (2.0 * width)


def eye_open_probability(landmarks: Landmarks, eye: Tuple[int, ...], frame_wh: Tuple[int, int]) -> float:
    """Map the eye aspect ratio linearly onto [0, 1]."""
    ear = eye_aspect_ratio(landmarks, eye, frame_wh)
    return _clamp((ear - EAR_CLOSED) / (EAR_OPEN - EAR_CLOSED))


def smile_probability(landmarks: Landmarks, frame_wh: Tuple[int, int]) -> Optional[float]:
    """Smile estimate from mouth widening. None when the eyes overlap."""
    eye_span = _dist(_to_px(landmarks, LEFT_EYE_OUTER, frame_wh), _to_px(landmarks, RIGHT_EYE_OUTER, frame_wh))
    if eye_span == 0:
        return None
    mouth = _dist(_to_px(landmarks, MOUTH_LEFT, frame_wh), _to_px(landmarks, MOUTH_RIGHT, frame_wh))
    ratio = mouth / eye_span
    return _clamp((ratio - MOUTH_RATIO_NEUTRAL) / (MOUTH_RATIO_SMILE - MOUTH_RATIO_NEUTRAL))


def head_pitch_deg(landmarks: Landmarks, frame_wh: Tuple[int, int]) -> float:
    """
    Head pitch from a PnP fit of the generic face model.

    Returns:
        Pitch in degrees, positive looking up, negative looking down
    """
    width, height = frame_wh
    image_points = np.array([_to_px(landmarks, i, frame_wh) for i in POSE_LANDMARKS], dtype=np.float64)
    camera_matrix = np.array([
        [width, 0, width / 2.0],
        [0, width, height / 2.0],
        [0, 0, 1],
    ], dtype=np.float64)
    dist_coeffs = np.zeros((4, 1), dtype=np.float64)

    ok, rvec, _ = cv2.solvePnP(MODEL_POINTS, image_points, camera_matrix, dist_coeffs,
                               flags=cv2.SOLVEPNP_ITERATIVE)
    if not ok:
        return 0.0
    rmat, _ = cv2.Rodrigues(rvec)
    euler_angles = cv2.RQDecomp3x3(rmat)[0]
    # Positive rotation about x tips the forehead toward the camera (looking down)
    return -float(euler_angles[0])


def bounding_box_area(landmarks: Landmarks, frame_wh: Tuple[int, int]) -> float:
    """Area in pixels of the box enclosing all landmarks."""
    points = np.asarray(landmarks, dtype=np.float64)
    width, height = frame_wh
    span_x = (points[:, 0].max() - points[:, 0].min()) * width
    span_y = (points[:, 1].max() - points[:, 1].min()) * height
    return float(span_x * span_y)


def to_observation(landmarks: Landmarks, frame_wh: Tuple[int, int]) -> FaceObservation:
    """Build the per-frame observation for one face."""
    return FaceObservation(
        area=bounding_box_area(landmarks, frame_wh),
        left_eye_open=eye_open_probability(landmarks, LEFT_EYE, frame_wh),
        right_eye_open=eye_open_probability(landmarks, RIGHT_EYE, frame_wh),
        smile=smile_probability(landmarks, frame_wh),
        head_pitch_deg=head_pitch_deg(landmarks, frame_wh),
    )


def to_observations(faces: List[Landmarks], frame_wh: Tuple[int, int]) -> List[FaceObservation]:
    return [to_observation(face, frame_wh) for face in faces]
