from __future__ import annotations
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, Optional, Tuple
from ..hand.gestures import Gesture

logger = logging.getLogger(__name__)

class FormationState(str, Enum):
    SCATTERED = "SCATTERED"
    TREE_SHAPE = "TREE_SHAPE"

class InteractionMode(str, Enum):
    IDLE = "IDLE"
    PULLING_FRAME = "PULLING_FRAME"
    PULLING_GIFT = "PULLING_GIFT"

# label -> (formation or None to keep, mode)
TRANSITIONS: Dict[Gesture, Tuple[Optional[FormationState], InteractionMode]] = {
    Gesture.FIST:    (FormationState.TREE_SHAPE, InteractionMode.IDLE),
    Gesture.OPEN:    (FormationState.SCATTERED,  InteractionMode.IDLE),
    Gesture.PINCH:   (None, InteractionMode.PULLING_FRAME),
    Gesture.POINT:   (None, InteractionMode.PULLING_GIFT),
    Gesture.NEUTRAL: (None, InteractionMode.IDLE),
    Gesture.NONE:    (None, InteractionMode.IDLE),
}

@dataclass(frozen=True)
class Transition:
    gesture: Gesture
    source: str
    formation: FormationState
    mode: InteractionMode
    prev_formation: FormationState
    prev_mode: InteractionMode
    ts: float = field(default_factory=time.time)

    @property
    def mode_changed(self) -> bool:
        return self.mode != self.prev_mode

class History:
    def __init__(self, maxlen:int=30):
        self.events: Deque[Transition] = deque(maxlen=maxlen)
    def add(self, tr: Transition):
        self.events.append(tr)
    def last(self, source: Optional[str]=None) -> Optional[Transition]:
        for e in reversed(self.events):
            if source is None or e.source==source: return e
        return None

class InteractionSM:
    """
    Two orthogonal state variables driven by confirmed gesture labels.
    Camera events and manual overrides both go through apply().
    """
    def __init__(self, formation: FormationState=FormationState.TREE_SHAPE,
                 mode: InteractionMode=InteractionMode.IDLE):
        self.formation = formation
        self.mode = mode
        self.hist = History()

    def changes(self, label: Gesture) -> bool:
        """Whether applying label would move formation or mode."""
        formation, mode = TRANSITIONS[label]
        return (formation or self.formation) != self.formation or mode != self.mode

    def apply(self, label: Gesture, source:str="camera") -> Transition:
        formation, mode = TRANSITIONS[label]
        tr = Transition(gesture=label, source=source,
                        formation=formation or self.formation, mode=mode,
                        prev_formation=self.formation, prev_mode=self.mode)
        self.formation, self.mode = tr.formation, tr.mode
        self.hist.add(tr)
        logger.info("%s %s: formation=%s mode=%s", source, label.value,
                    self.formation.value, self.mode.value)
        return tr
