"""
Test cases for configuration loading and gesture settings.
"""
import os
import tempfile
import unittest
import sys
from pathlib import Path
from unittest import mock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import scoreturner
from scoreturner.config import load_config, default_config_path, GestureConfig, CONFIG_ENV_VAR
from scoreturner.types import GestureKind

BASE_YAML = """
camera: {index: 1, width: 320, height: 240, fps: 15}
face_mesh: {max_num_faces: 1, refine_landmarks: true, min_detection_confidence: 0.6, min_tracking_confidence: 0.4}
display: {show_preview: true, show_landmarks: false, window_name: Test}
"""


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write(self, text: str) -> str:
        path = os.path.join(self.tmpdir.name, "config.yaml")
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_default_config(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(CONFIG_ENV_VAR, None)
            cfg = load_config()
        self.assertEqual(cfg.camera.width, 640)
        self.assertTrue(cfg.gestures.use_face_gestures)
        self.assertEqual(cfg.gestures.gesture, GestureConfig())

    def test_default_path_ships_inside_package(self):
        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(CONFIG_ENV_VAR, None)
            path = default_config_path()
        self.assertEqual(path.parent, Path(scoreturner.__file__).parent)
        self.assertTrue(path.is_file())

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(os.path.join(self.tmpdir.name, "nope.yaml"))

    def test_not_a_mapping(self):
        with self.assertRaises(ValueError):
            load_config(self.write("- just\n- a list\n"))

    def test_missing_section(self):
        with self.assertRaises(ValueError):
            load_config(self.write("camera: {index: 0, width: 1, height: 1, fps: 1}\n"))

    def test_gestures_section_optional(self):
        cfg = load_config(self.write(BASE_YAML))
        self.assertFalse(cfg.gestures.use_face_gestures)
        self.assertEqual(cfg.gestures.gesture, GestureConfig())
        self.assertEqual(cfg.face_mesh.max_num_faces, 1)
        self.assertEqual(cfg.display.window_name, "Test")

    def test_group_switch_disables_both_directions(self):
        cfg = load_config(self.write(BASE_YAML + "gestures: {nod: false, wink_right: false}\n"))
        enabled = cfg.gestures.gesture.enabled
        self.assertEqual(enabled, frozenset({GestureKind.WINK_LEFT, GestureKind.SMILE}))

    def test_thresholds_are_clamped(self):
        cfg = load_config(self.write(BASE_YAML + "gestures: {cooldown_ms: 50, nod_down_delta_deg: 90}\n"))
        self.assertEqual(cfg.gestures.gesture.cooldown_ms, 300)
        self.assertEqual(cfg.gestures.gesture.nod_down_delta_deg, 30.0)

    def test_path_from_environment(self):
        path = self.write(BASE_YAML)
        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: path}):
            cfg = load_config()
        self.assertEqual(cfg.camera.index, 1)


class TestGestureConfig(unittest.TestCase):
    """Test the immutable gesture configuration."""

    def test_defaults(self):
        cfg = GestureConfig()
        self.assertEqual(cfg.cooldown_ms, 900)
        self.assertEqual(cfg.wink_closed_thr, 0.25)
        self.assertEqual(cfg.wink_open_thr, 0.75)
        self.assertEqual(cfg.nod_down_delta_deg, 15.0)
        self.assertEqual(cfg.nod_return_delta_deg, 7.0)
        self.assertEqual(cfg.enabled, frozenset(GestureKind))

    def test_from_flags(self):
        cfg = GestureConfig.from_flags(smile=False, nod_up=False, cooldown_ms=500)
        self.assertFalse(cfg.is_enabled(GestureKind.SMILE))
        self.assertFalse(cfg.is_enabled(GestureKind.NOD_UP))
        self.assertTrue(cfg.is_enabled(GestureKind.NOD_DOWN))
        self.assertEqual(cfg.cooldown_ms, 500)

    def test_with_enabled_returns_copy(self):
        cfg = GestureConfig()
        off = cfg.with_enabled(GestureKind.WINK_LEFT, False)
        self.assertTrue(cfg.is_enabled(GestureKind.WINK_LEFT))
        self.assertFalse(off.is_enabled(GestureKind.WINK_LEFT))
        self.assertTrue(off.with_enabled(GestureKind.WINK_LEFT, True).is_enabled(GestureKind.WINK_LEFT))

    def test_immutable(self):
        cfg = GestureConfig()
        with self.assertRaises(AttributeError):
            cfg.cooldown_ms = 10

    def test_clamped(self):
        cfg = GestureConfig(wink_closed_thr=0.9, wink_open_thr=0.1, smile_threshold=2.0,
                            nod_return_delta_deg=0.0).clamped()
        self.assertEqual(cfg.wink_closed_thr, 0.5)
        self.assertEqual(cfg.wink_open_thr, 0.5)
        self.assertEqual(cfg.smile_threshold, 0.95)
        self.assertEqual(cfg.nod_return_delta_deg, 3.0)


if __name__ == '__main__':
    unittest.main()
