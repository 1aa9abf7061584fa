from __future__ import annotations
import logging
import time
from typing import Optional, Sequence
import numpy as np
from ..config import ControllerConfig
from ..filters.stabilizer import GestureStabilizer, UNKNOWN
from ..fuse.state import FormationState, InteractionMode, InteractionSM, Transition
from ..hand.gestures import Gesture, classify_hand
from ..scene.camera import Camera
from ..scene.interpolate import Interpolator, ItemTransform
from ..scene.items import ItemPool, build_pool
from ..select.selector import ItemSelector
from .events import GestureEvent, ItemFrame, RenderFrame, Status

logger = logging.getLogger(__name__)

class Controller:
    """
    Gesture-driven interaction controller.

    on_frame() is the per-video-frame entry (landmarks -> label -> stabilizer
    -> state machine -> selector); tick() is the per-render entry that moves
    items. The two run at independent rates and only share the current state.
    """
    def __init__(self, cfg: Optional[ControllerConfig]=None, pool: Optional[ItemPool]=None,
                 rng: Optional[np.random.Generator]=None):
        self.cfg = cfg or ControllerConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.cfg.pool.seed)
        self.pool = pool if pool is not None else build_pool(self.cfg.pool, self.rng)
        self.stabilizer = GestureStabilizer(self.cfg.stabilizer.window)
        self.sm = InteractionSM()
        self.selector = ItemSelector(self.pool, self.cfg.pool.history_ratio, self.rng)
        self.interp = Interpolator(self.pool, self.cfg.motion, self.cfg.focus)
        self.raw: Gesture = Gesture.NONE
        self._t0: Optional[float] = None

    @property
    def formation(self) -> FormationState:
        return self.sm.formation

    @property
    def mode(self) -> InteractionMode:
        return self.sm.mode

    @property
    def targeted(self) -> Optional[str]:
        return self.selector.targeted

    def _apply(self, label: Gesture, source: str) -> GestureEvent:
        tr: Transition = self.sm.apply(label, source)
        self.selector.update(tr.mode)
        return GestureEvent(gesture=label.value, source=source, formation=tr.formation.value,
                            mode=tr.mode.value, previous=tr.prev_mode.value,
                            previous_formation=tr.prev_formation.value, targeted=self.selector.targeted)

    def on_frame(self, hand) -> Optional[GestureEvent]:
        """One video frame of landmarks (or None); returns an event only on a confirmed change."""
        return self.on_label(classify_hand(hand, self.cfg.features))

    def on_label(self, label: Gesture) -> Optional[GestureEvent]:
        """Raw label already classified elsewhere; goes through the stabilizer."""
        self.raw = label
        confirmed = self.stabilizer.push(label)
        if confirmed is None:
            return None
        return self._apply(confirmed, "camera")

    def inject(self, label) -> Optional[GestureEvent]:
        """Manual override from the UI: same transition table, no stabilizer.

        Returns None when the label would leave formation and mode as they are.
        """
        label = Gesture.parse(label)
        if not self.sm.changes(label):
            return None
        return self._apply(label, "manual")

    def tick(self, camera: Camera, dt: float, t: Optional[float]=None) -> RenderFrame:
        """One render tick; t defaults to seconds since the first tick."""
        if t is None:
            now = time.monotonic()
            if self._t0 is None: self._t0 = now
            t = now - self._t0
        tfs = self.interp.step(self.sm.formation, self.selector.targeted, camera, dt, t)
        return RenderFrame(items=[item_frame(tf) for tf in tfs])

    def set_content(self, messages: Sequence[str]=(), photos: Sequence[str]=()):
        self.pool = self.pool.with_content(messages, photos)
        self.selector.set_pool(self.pool)
        self.interp.set_pool(self.pool)

    def status(self) -> Status:
        stable = self.stabilizer.confirmed
        return Status(formation=self.sm.formation.value, mode=self.sm.mode.value,
                      gesture=self.raw.value,
                      stable=stable.value if isinstance(stable, Gesture) else UNKNOWN,
                      targeted=self.selector.targeted)

def item_frame(tf: ItemTransform) -> ItemFrame:
    return ItemFrame(id=tf.id, category=tf.category,
                     position=[float(v) for v in tf.position],
                     rotation=[float(v) for v in tf.rotation],
                     scale=float(tf.scale), targeted=tf.targeted,
                     lid_angle=float(tf.lid_angle), paper_scale=float(tf.paper_scale),
                     paper_y=float(tf.paper_y))
