"""
Face landmark detection using MediaPipe Face Mesh.
"""
from typing import List, Tuple

import cv2
import mediapipe as mp
import numpy as np

from .face_metrics import Landmarks, to_observations
from .types import FaceObservation


class FaceMeshTracker:
    """Face landmark tracker using MediaPipe Face Mesh."""

    def __init__(self, max_num_faces: int = 2, refine_landmarks: bool = False,
                 min_detection_conf: float = 0.5, min_tracking_conf: float = 0.5):
        """
        Initialize the face mesh tracker.

        Args:
            max_num_faces: Maximum number of faces to detect
            refine_landmarks: Add iris landmarks to the mesh
            min_detection_conf: Minimum confidence for face detection
            min_tracking_conf: Minimum confidence for landmark tracking
        """
        self.mp_face_mesh = mp.solutions.face_mesh
        self.face_mesh = self.mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=max_num_faces,
            refine_landmarks=refine_landmarks,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> List[Landmarks]:
        """
        Detect faces in a frame.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            One list of (x, y) coordinates in [0..1] range per detected face
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.face_mesh.process(frame_rgb)

        if not results.multi_face_landmarks:
            return []

        return [
            [(lm.x, lm.y) for lm in face_landmarks.landmark]
            for face_landmarks in results.multi_face_landmarks
        ]

    def observe(self, frame_bgr: np.ndarray) -> Tuple[List[Landmarks], List[FaceObservation]]:
        """Detect faces and convert them into gesture engine observations."""
        faces = self.process(frame_bgr)
        frame_wh = (frame_bgr.shape[1], frame_bgr.shape[0])
        return faces, to_observations(faces, frame_wh)

    def draw_landmarks(self, frame: np.ndarray, landmarks: Landmarks) -> np.ndarray:
        """Draw face landmarks on the frame as small dots."""
        height, width = frame.shape[:2]
        for x, y in landmarks:
            cv2.circle(frame, (int(x * width), int(y * height)), 1, (0, 255, 0), -1)
        return frame

    def close(self) -> None:
        self.face_mesh.close()
