from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, List, Optional
import numpy as np
from ..config import FocusConfig, MotionConfig
from ..fuse.state import FormationState
from . import quat
from .camera import Camera
from .items import InteractiveItem, ItemPool

Y_AXIS = (0.0, 1.0, 0.0)
Z_AXIS = (0.0, 0.0, 1.0)

def approach_factor(speed: float, dt: float) -> float:
    return min(1.0, max(0.0, speed * dt))

def focus_position(camera: Camera, category: str, cfg: Optional[FocusConfig]=None) -> np.ndarray:
    """Head-up spot in front of the viewer: distance along forward, category offset along up."""
    cfg = cfg or FocusConfig()
    return camera.position + camera.forward*cfg.distance + camera.up*cfg.offsets.get(category, 0.0)

@dataclass
class ItemTransform:
    id: str
    category: str
    position: np.ndarray
    rotation: np.ndarray
    scale: float
    targeted: bool = False
    lid_angle: float = 0.0
    paper_scale: float = 0.0
    paper_y: float = 0.5

    def copy(self) -> "ItemTransform":
        return ItemTransform(self.id, self.category, self.position.copy(), self.rotation.copy(),
                             self.scale, self.targeted, self.lid_angle, self.paper_scale, self.paper_y)

class Interpolator:
    """Per-item transform state advanced once per render tick."""
    def __init__(self, pool: ItemPool, motion: Optional[MotionConfig]=None, focus: Optional[FocusConfig]=None):
        self.motion = motion or MotionConfig()
        self.focus = focus or FocusConfig()
        self.pool = pool
        # items start scattered and drift into whatever formation is active
        self.state: Dict[str, ItemTransform] = {
            it.id: ItemTransform(it.id, it.category, it.scatter_position.copy(), it.rotation.copy(),
                                 it.scale, paper_y=self.motion.paper_lowered)
            for it in pool
        }

    def set_pool(self, pool: ItemPool):
        self.pool = pool

    def _rest_target(self, item: InteractiveItem, formation: FormationState, t: float) -> np.ndarray:
        m = self.motion
        p = item.rest_position(formation).copy()
        p[1] += math.sin(t*m.breathing_frequency + item.phase) * m.breathing_amplitude
        return p

    def _rest_rotation(self, item: InteractiveItem, formation: FormationState, t: float) -> np.ndarray:
        m = self.motion
        if formation == FormationState.SCATTERED:
            extra = quat.axis_angle(Y_AXIS, t*m.spin_rate)
        else:
            extra = quat.axis_angle(Z_AXIS, math.sin(t + item.phase)*m.sway_amplitude)
        return quat.multiply(item.rotation, extra)

    def _animate_gift(self, tf: ItemTransform, dt: float):
        m = self.motion
        lid = m.lid_open_angle if tf.targeted else 0.0
        tf.lid_angle += (lid - tf.lid_angle) * approach_factor(m.lid_speed, dt)
        k = approach_factor(m.paper_speed, dt)
        tf.paper_scale += ((1.0 if tf.targeted else 0.0) - tf.paper_scale) * k
        tf.paper_y += ((m.paper_raised if tf.targeted else m.paper_lowered) - tf.paper_y) * k

    def step(self, formation: FormationState, targeted_id: Optional[str], camera: Camera,
             dt: float, t: float) -> List[ItemTransform]:
        if dt < 0:
            raise ValueError("dt must be >= 0")
        m = self.motion
        out = []
        for item in self.pool:
            tf = self.state[item.id]
            tf.targeted = item.id == targeted_id
            if tf.targeted:
                target = focus_position(camera, item.category, self.focus)
                speed, turn = m.targeted_speed, m.targeted_turn_speed
                tf.scale = self.focus.scales.get(item.category, item.scale)
            else:
                target = self._rest_target(item, formation, t)
                speed, turn = m.resting_speed, m.resting_turn_speed
                tf.scale = item.scale
            tf.position += (target - tf.position) * approach_factor(speed, dt)
            if tf.targeted:
                # face the viewer
                rot = quat.look_at(tf.position, camera.position)
            else:
                rot = self._rest_rotation(item, formation, t)
            tf.rotation = quat.slerp(tf.rotation, rot, approach_factor(turn, dt))
            if item.category == "gift":
                self._animate_gift(tf, dt)
            out.append(tf.copy())
        return out
