from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional
import numpy as np
from ..config import FeatureConfig

logger = logging.getLogger(__name__)

N_LANDMARKS = 21
WRIST=0; THUMB_TIP=4
INDEX_BASE=5; INDEX_TIP=8
MIDDLE_BASE=9; MIDDLE_TIP=12
RING_BASE=13; RING_TIP=16
PINKY_BASE=17; PINKY_TIP=20

class LandmarkError(ValueError):
    """Landmark data that breaks the detector contract (21 points of x, y, z)."""

def as_points(hand) -> np.ndarray:
    """Return a (21, k>=2) float array from a detector dict or array-like.

    Raises LandmarkError instead of letting a short frame index out of range.
    """
    if isinstance(hand, dict):
        if "pts" not in hand:
            raise LandmarkError("hand dict has no 'pts'")
        hand = hand["pts"]
    try:
        pts = np.asarray(hand, dtype=float)
    except (TypeError, ValueError) as e:
        raise LandmarkError(f"landmarks are not numeric: {e}") from e
    if pts.ndim != 2 or pts.shape[0] != N_LANDMARKS or pts.shape[1] < 2:
        raise LandmarkError(f"expected ({N_LANDMARKS}, 3) landmarks, got {pts.shape}")
    if not np.all(np.isfinite(pts[:, :2])):
        raise LandmarkError("landmarks contain non-finite coordinates")
    return pts

@dataclass(frozen=True)
class FeatureSet:
    thumb_extended: bool
    index_extended: bool
    middle_extended: bool
    ring_extended: bool
    pinky_extended: bool
    pinch_distance: float
    is_pinching: bool

    @property
    def extended_count(self) -> int:
        return sum((self.thumb_extended, self.index_extended, self.middle_extended,
                    self.ring_extended, self.pinky_extended))

def _dist(pts, a, b) -> float:
    # image plane only, detector depth is too noisy
    return float(np.linalg.norm(pts[a,:2] - pts[b,:2]))

def is_extended(pts, tip:int, base:int, multiplier:float=1.2) -> bool:
    """A finger is extended when its tip is proportionally farther from the wrist than its base."""
    return _dist(pts, tip, WRIST) > _dist(pts, base, WRIST) * multiplier

def extract_features(hand, cfg: Optional[FeatureConfig]=None) -> Optional[FeatureSet]:
    """Features for one frame; None when no hand is present or the frame is malformed."""
    if hand is None:
        return None
    cfg = cfg or FeatureConfig()
    try:
        pts = as_points(hand)
    except LandmarkError as e:
        logger.warning("rejecting landmark frame: %s", e)
        return None
    m = cfg.extension_multiplier
    pinch_d = _dist(pts, THUMB_TIP, INDEX_TIP)
    return FeatureSet(
        thumb_extended=_dist(pts, THUMB_TIP, PINKY_BASE) > cfg.thumb_distance,
        index_extended=is_extended(pts, INDEX_TIP, INDEX_BASE, m),
        middle_extended=is_extended(pts, MIDDLE_TIP, MIDDLE_BASE, m),
        ring_extended=is_extended(pts, RING_TIP, RING_BASE, m),
        pinky_extended=is_extended(pts, PINKY_TIP, PINKY_BASE, m),
        pinch_distance=pinch_d,
        is_pinching=pinch_d < cfg.pinch_threshold,
    )
