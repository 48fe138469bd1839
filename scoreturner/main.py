"""
Main application for hands-free page turning with face gestures.
"""
import logging
import sys
import time
from typing import Optional

import cv2

from .callbacks import reader_callbacks
from .config import load_config
from .controller_mock import MockReader
from .gestures import GestureEngine
from .landmarks import FaceMeshTracker

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class PageTurnerApp:
    """Main application class for face gesture page turning."""

    def __init__(self, config_path: Optional[str] = None, page_count: int = 10,
                 show_preview: Optional[bool] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.show_preview = self.config.display.show_preview if show_preview is None else show_preview
        self.tracker = FaceMeshTracker(
            max_num_faces=self.config.face_mesh.max_num_faces,
            refine_landmarks=self.config.face_mesh.refine_landmarks,
            min_detection_conf=self.config.face_mesh.min_detection_confidence,
            min_tracking_conf=self.config.face_mesh.min_tracking_confidence
        )
        self.reader = MockReader(page_count=page_count)

        # One engine per session, only while gesture input is on
        self.engine: Optional[GestureEngine] = None
        self.set_gestures_enabled(self.config.gestures.use_face_gestures)

        self._closed = False
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            self.tracker.close()
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    def set_gestures_enabled(self, enabled: bool) -> None:
        """Turn gesture input on (fresh engine and baseline) or off (state discarded)."""
        if enabled and self.engine is None:
            self.engine = GestureEngine(self.config.gestures.gesture, reader_callbacks(self.reader))
            logger.info("Face gestures enabled")
        elif not enabled and self.engine is not None:
            self.engine = None
            logger.info("Face gestures disabled")

    def run(self) -> None:
        """Run the main application loop."""
        logger.info(f"Starting {self.config.display.window_name}")
        logger.info("Wink right / smile / nod down = next page, wink left / nod up = previous page")

        try:
            self._loop()
        finally:
            self.close()

    def _loop(self) -> None:
        while True:
            ret, frame = self.cap.read()
            if not ret:
                logger.error("Failed to read frame from camera")
                break

            faces, observations = self.tracker.observe(frame)
            event = None
            if self.engine is not None:
                event = self.engine.process_frame(observations, monotonic_ms())

            if not self.show_preview:
                continue

            if self.config.display.show_landmarks:
                for face in faces:
                    frame = self.tracker.draw_landmarks(frame, face)

            status_text = f"Page {self.reader.current_page + 1}/{self.reader.page_count}"
            gesture_status = "Gestures off" if self.engine is None else f"Faces: {len(observations)}"
            if event is not None:
                gesture_status += f" | {event.kind.value.upper()}"

            cv2.putText(frame, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
            cv2.putText(frame, gesture_status, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.6,
                        (0, 255, 0) if event is not None else (255, 255, 255), 2)
            cv2.putText(frame, "Press 'g' to toggle gestures, 'q' to quit", (10, frame.shape[0] - 20),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

            cv2.imshow(self.config.display.window_name, frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('g'):
                self.set_gestures_enabled(self.engine is None)

    def close(self) -> None:
        """Release the camera and detector. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


def main() -> None:
    """Entry point for the application."""
    logging.basicConfig(level=logging.INFO)

    show_preview = True if "--preview" in sys.argv else None
    app = PageTurnerApp(show_preview=show_preview)
    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    finally:
        app.close()


if __name__ == "__main__":
    main()
