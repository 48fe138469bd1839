"""
Test cases for primary face selection and signal defaults.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from scoreturner.observations import select_primary_face, read_signals, FaceSignals
from scoreturner.types import FaceObservation


class TestSelectPrimaryFace(unittest.TestCase):
    """Test largest-area face selection."""

    def test_empty_list(self):
        self.assertIsNone(select_primary_face([]))

    def test_single_face(self):
        only = FaceObservation(area=10.0, head_pitch_deg=1.0)
        self.assertIs(select_primary_face([only]), only)

    def test_largest_area_wins(self):
        small = FaceObservation(area=100.0, head_pitch_deg=0.0)
        big = FaceObservation(area=900.0, head_pitch_deg=0.0)
        medium = FaceObservation(area=400.0, head_pitch_deg=0.0)
        self.assertIs(select_primary_face([small, big, medium]), big)

    def test_tie_keeps_first_encountered(self):
        first = FaceObservation(area=250.0, head_pitch_deg=1.0)
        second = FaceObservation(area=250.0, head_pitch_deg=2.0)
        self.assertIs(select_primary_face([first, second]), first)

    def test_accepts_any_sequence(self):
        faces = (FaceObservation(area=1.0, head_pitch_deg=0.0), FaceObservation(area=2.0, head_pitch_deg=0.0))
        self.assertEqual(select_primary_face(faces).area, 2.0)


class TestReadSignals(unittest.TestCase):
    """Test default substitution for missing signals."""

    def test_missing_values_use_safe_defaults(self):
        signals = read_signals(FaceObservation(area=1.0, head_pitch_deg=-4.5))
        self.assertEqual(signals, FaceSignals(left_eye_open=1.0, right_eye_open=1.0,
                                              smile=0.0, head_pitch_deg=-4.5))

    def test_head_pitch_is_required(self):
        """A face without a pitch reading cannot be built, so no 0 degree baseline is invented."""
        with self.assertRaises(TypeError):
            FaceObservation(area=1.0)

    def test_present_values_pass_through(self):
        obs = FaceObservation(area=1.0, left_eye_open=0.2, right_eye_open=0.0,
                              smile=0.8, head_pitch_deg=3.0)
        signals = read_signals(obs)
        self.assertEqual(signals.left_eye_open, 0.2)
        # Zero is a real reading, not a missing one
        self.assertEqual(signals.right_eye_open, 0.0)
        self.assertEqual(signals.smile, 0.8)
        self.assertEqual(signals.head_pitch_deg, 3.0)


if __name__ == '__main__':
    unittest.main()
