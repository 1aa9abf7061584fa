from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np
from . import quat

# viewer placement for wide and narrow screens; narrow ones sit farther back
CAMERA_POSITION_DESKTOP = (0.0, 0.0, 18.0)
CAMERA_POSITION_MOBILE = (0.0, 0.0, 28.0)

@dataclass
class Camera:
    """Viewer pose; looks down its local -Z with +Y up, like a three.js camera."""
    position: np.ndarray = field(default_factory=lambda: np.array(CAMERA_POSITION_DESKTOP))
    rotation: np.ndarray = field(default_factory=lambda: quat.IDENTITY.copy())

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)
        self.rotation = quat.normalize(self.rotation)

    @property
    def forward(self) -> np.ndarray:
        return quat.rotate(self.rotation, (0.0, 0.0, -1.0))

    @property
    def up(self) -> np.ndarray:
        return quat.rotate(self.rotation, (0.0, 1.0, 0.0))

    @staticmethod
    def looking_at(position, target=(0.0, 0.0, 0.0)) -> "Camera":
        # look_at points +Z at the target; a camera needs -Z there, so aim +Z away
        position = np.asarray(position, dtype=float)
        away = 2*position - np.asarray(target, dtype=float)
        return Camera(position=position, rotation=quat.look_at(position, away))

def viewer(mobile: bool=False) -> Camera:
    """Default viewer looking at the scene origin."""
    return Camera.looking_at(CAMERA_POSITION_MOBILE if mobile else CAMERA_POSITION_DESKTOP)
