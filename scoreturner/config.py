"""
Configuration management for face gesture page turning.
"""
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

import yaml
from dotenv import load_dotenv

from .types import GestureKind

CONFIG_ENV_VAR = "SCORETURNER_CONFIG"

# Ranges accepted by the settings screen
COOLDOWN_MS_RANGE = (300, 2000)
NOD_DOWN_DELTA_RANGE = (5.0, 30.0)
NOD_RETURN_DELTA_RANGE = (3.0, 20.0)
WINK_CLOSED_RANGE = (0.05, 0.5)
WINK_OPEN_RANGE = (0.5, 0.95)
SMILE_RANGE = (0.3, 0.95)


def _coerce_in(value, bounds):
    lo, hi = bounds
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class GestureConfig:
    """
    Thresholds and enabled gestures for the gesture engine.

    Instances are immutable, so the engine only ever sees a complete
    configuration: changing a value means building a new object.
    """
    enabled: FrozenSet[GestureKind] = field(default_factory=lambda: frozenset(GestureKind))
    cooldown_ms: int = 900
    wink_closed_thr: float = 0.25
    wink_open_thr: float = 0.75
    smile_threshold: float = 0.6
    nod_down_delta_deg: float = 15.0
    nod_return_delta_deg: float = 7.0

    @classmethod
    def from_flags(cls, wink_left: bool = True, wink_right: bool = True, smile: bool = True,
                   nod_up: bool = True, nod_down: bool = True, **thresholds: Any) -> "GestureConfig":
        """
        Build a config from one boolean flag per gesture.

        Args:
            wink_left, wink_right, smile, nod_up, nod_down: Enable flags
            **thresholds: Any of the numeric fields (cooldown_ms, wink_closed_thr, ...)

        Returns:
            GestureConfig with the matching enabled set
        """
        flags = {
            GestureKind.WINK_LEFT: wink_left,
            GestureKind.WINK_RIGHT: wink_right,
            GestureKind.SMILE: smile,
            GestureKind.NOD_UP: nod_up,
            GestureKind.NOD_DOWN: nod_down,
        }
        enabled = frozenset(kind for kind, on in flags.items() if on)
        return cls(enabled=enabled, **thresholds)

    def is_enabled(self, kind: GestureKind) -> bool:
        return kind in self.enabled

    def with_enabled(self, kind: GestureKind, on: bool) -> "GestureConfig":
        """Return a copy with one gesture switched on or off."""
        enabled = self.enabled | {kind} if on else self.enabled - {kind}
        return replace(self, enabled=frozenset(enabled))

    def clamped(self) -> "GestureConfig":
        """Return a copy with every threshold coerced into its settings range."""
        return replace(
            self,
            cooldown_ms=int(_coerce_in(self.cooldown_ms, COOLDOWN_MS_RANGE)),
            wink_closed_thr=_coerce_in(self.wink_closed_thr, WINK_CLOSED_RANGE),
            wink_open_thr=_coerce_in(self.wink_open_thr, WINK_OPEN_RANGE),
            smile_threshold=_coerce_in(self.smile_threshold, SMILE_RANGE),
            nod_down_delta_deg=_coerce_in(self.nod_down_delta_deg, NOD_DOWN_DELTA_RANGE),
            nod_return_delta_deg=_coerce_in(self.nod_return_delta_deg, NOD_RETURN_DELTA_RANGE),
        )


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class FaceMeshConfig:
    """MediaPipe Face Mesh configuration settings."""
    max_num_faces: int
    refine_landmarks: bool
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class GesturesConfig:
    """Gesture input configuration."""
    use_face_gestures: bool
    gesture: GestureConfig


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_preview: bool
    show_landmarks: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    face_mesh: FaceMeshConfig
    gestures: GesturesConfig
    display: DisplayConfig


def default_config_path() -> Path:
    """Resolve the config path from the environment or the bundled default."""
    load_dotenv()
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses $SCORETURNER_CONFIG or
              config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return _dict_to_config(data)


def _gesture_config_from_dict(data: Dict[str, Any]) -> GestureConfig:
    """Combine group and per-gesture switches, then read thresholds."""
    defaults = GestureConfig()
    wink = data.get('wink', True)
    nod = data.get('nod', True)
    return GestureConfig.from_flags(
        wink_left=wink and data.get('wink_left', True),
        wink_right=wink and data.get('wink_right', True),
        smile=data.get('smile', True),
        nod_up=nod and data.get('nod_up', True),
        nod_down=nod and data.get('nod_down', True),
        cooldown_ms=int(data.get('cooldown_ms', defaults.cooldown_ms)),
        wink_closed_thr=float(data.get('wink_closed_thr', defaults.wink_closed_thr)),
        wink_open_thr=float(data.get('wink_open_thr', defaults.wink_open_thr)),
        smile_threshold=float(data.get('smile_threshold', defaults.smile_threshold)),
        nod_down_delta_deg=float(data.get('nod_down_delta_deg', defaults.nod_down_delta_deg)),
        nod_return_delta_deg=float(data.get('nod_return_delta_deg', defaults.nod_return_delta_deg)),
    ).clamped()


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    try:
        camera_data = data['camera']
        camera = CameraConfig(
            index=camera_data['index'],
            width=camera_data['width'],
            height=camera_data['height'],
            fps=camera_data['fps']
        )

        fm_data = data['face_mesh']
        face_mesh = FaceMeshConfig(
            max_num_faces=fm_data['max_num_faces'],
            refine_landmarks=fm_data['refine_landmarks'],
            min_detection_confidence=fm_data['min_detection_confidence'],
            min_tracking_confidence=fm_data['min_tracking_confidence']
        )

        display_data = data['display']
        display = DisplayConfig(
            show_preview=display_data['show_preview'],
            show_landmarks=display_data['show_landmarks'],
            window_name=display_data['window_name']
        )
    except KeyError as e:
        raise ValueError(f"Missing config key: {e}") from e

    gestures_data = data.get('gestures') or {}
    gestures = GesturesConfig(
        use_face_gestures=gestures_data.get('use_face_gestures', False),
        gesture=_gesture_config_from_dict(gestures_data)
    )

    return Cfg(
        camera=camera,
        face_mesh=face_mesh,
        gestures=gestures,
        display=display
    )
