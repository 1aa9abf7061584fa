from __future__ import annotations
from enum import Enum
from typing import Callable, List, Optional, Tuple
from ..config import FeatureConfig
from .features import FeatureSet, extract_features

class Gesture(str, Enum):
    NONE = "NONE"
    FIST = "FIST"
    PINCH = "PINCH"
    POINT = "POINT"
    OPEN = "OPEN"
    NEUTRAL = "NEUTRAL"

    @classmethod
    def parse(cls, value) -> "Gesture":
        if isinstance(value, cls): return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"unknown gesture label: {value!r}") from None

def _pointing(f: FeatureSet) -> bool:
    return f.index_extended and not (f.middle_extended or f.ring_extended or f.pinky_extended)

# first match wins; pinch and point are the narrowest shapes so they go before the counts
RULES: List[Tuple[Callable[[FeatureSet], bool], Gesture]] = [
    (lambda f: f.is_pinching, Gesture.PINCH),
    (_pointing, Gesture.POINT),
    (lambda f: f.extended_count <= 1, Gesture.FIST),
    (lambda f: f.extended_count >= 4, Gesture.OPEN),
]

def classify(features: Optional[FeatureSet]) -> Gesture:
    if features is None:
        return Gesture.NONE
    for rule, label in RULES:
        if rule(features):
            return label
    return Gesture.NEUTRAL

def classify_hand(hand, cfg: Optional[FeatureConfig]=None) -> Gesture:
    return classify(extract_features(hand, cfg))
