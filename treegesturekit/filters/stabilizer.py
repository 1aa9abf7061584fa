from __future__ import annotations
import logging
from collections import deque
from typing import Deque, Optional, Union
from ..hand.gestures import Gesture

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"  # confirmed value before any window has filled

class GestureStabilizer:
    """
    Rolling window of raw per-frame labels. A label is confirmed only when
    the full window agrees on it and it differs from the current confirmed one.
    """
    def __init__(self, window:int=5):
        if window < 1:
            raise ValueError("window must be >= 1")
        self.window = window
        self.buf: Deque[Gesture] = deque(maxlen=window)
        self.confirmed: Union[Gesture, str] = UNKNOWN

    @property
    def history(self) -> tuple:
        return tuple(self.buf)

    def push(self, label: Gesture) -> Optional[Gesture]:
        """Add one raw label; return the newly confirmed label, or None."""
        self.buf.append(label)
        if len(self.buf) < self.window:
            return None
        if any(g != label for g in self.buf) or label == self.confirmed:
            return None
        logger.debug("gesture confirmed %s -> %s", self.confirmed, label.value)
        self.confirmed = label
        return label
