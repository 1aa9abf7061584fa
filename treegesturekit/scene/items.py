from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np
from ..config import PoolConfig
from ..fuse.state import FormationState
from .coordinates import cone_surface_position, sphere_position
from .quat import axis_angle

logger = logging.getLogger(__name__)

CATEGORIES: Tuple[str, ...] = ("gift", "frame")

DEFAULT_GIFT_MESSAGES = [
    "New iPhone 16", "World Peace", "A Pair of Socks", "NVIDIA RTX 5090",
    "A Warm Hug", "$1000 Amazon Card", "Coal :(", "Trip to Mars",
    "React Tutorials", "Infinite Coffee",
]

FESTIVE_IMAGES = [
    "https://images.unsplash.com/photo-1512474932049-78ea796b6c42?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1576692131267-cf522760a218?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1543094209-4c126601b1e9?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1513297887119-d46091b24bfa?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1543589077-47d81606c1bf?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1482638202333-c77d501dd2ec?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1575373803274-a622a8459286?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1511108690759-009324a90311?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1544979590-2799616a614d?auto=format&fit=crop&w=600&q=80",
    "https://images.unsplash.com/photo-1606819717115-9159c900370b?auto=format&fit=crop&w=600&q=80",
]

# (height, base radius, y offset) of the cone each category rests on in tree shape
TREE_CONES = {"gift": (10.0, 4.0, -1.0), "frame": (8.0, 3.5, 0.0)}
SCATTER_RADIUS = 12.0
REST_SCALE = {"gift": 0.3, "frame": 0.4}

@dataclass(frozen=True, eq=False)
class InteractiveItem:
    id: str
    category: str
    tree_position: np.ndarray
    scatter_position: np.ndarray
    rotation: np.ndarray  # resting orientation, quaternion (x, y, z, w)
    phase: float
    scale: float
    content: str = ""

    def rest_position(self, formation: FormationState) -> np.ndarray:
        if formation == FormationState.TREE_SHAPE:
            return self.tree_position
        return self.scatter_position

def clean_messages(messages: Sequence[str]) -> List[str]:
    return [m.strip() for m in messages if m and m.strip()]

class ItemPool:
    """Fixed set of interactive items; identity and category never change after build."""
    def __init__(self, items: Sequence[InteractiveItem]):
        self.items: List[InteractiveItem] = list(items)
        self._by_id: Dict[str, InteractiveItem] = {it.id: it for it in self.items}
        if len(self._by_id) != len(self.items):
            raise ValueError("duplicate item ids in pool")

    def __len__(self): return len(self.items)
    def __iter__(self): return iter(self.items)
    def __contains__(self, item_id): return item_id in self._by_id

    def get(self, item_id: Optional[str]) -> Optional[InteractiveItem]:
        return self._by_id.get(item_id) if item_id else None

    def by_category(self, category: str) -> List[InteractiveItem]:
        if category not in CATEGORIES:
            raise ValueError(f"unknown item category: {category!r}")
        return [it for it in self.items if it.category == category]

    def with_content(self, messages: Sequence[str]=(), photos: Sequence[str]=()) -> "ItemPool":
        """New pool with gift messages / frame images reassigned, same ids and layout."""
        msgs = clean_messages(messages) or [it.content for it in self.by_category("gift")]
        out = []
        gi = fi = 0
        for it in self.items:
            if it.category == "gift" and msgs:
                it = replace(it, content=msgs[gi % len(msgs)]); gi += 1
            elif it.category == "frame" and photos:
                it = replace(it, content=photos[fi % len(photos)]); fi += 1
            out.append(it)
        return ItemPool(out)

def build_pool(cfg: Optional[PoolConfig]=None, rng: Optional[np.random.Generator]=None,
               messages: Sequence[str]=(), photos: Sequence[str]=()) -> ItemPool:
    cfg = cfg or PoolConfig()
    rng = rng if rng is not None else np.random.default_rng(cfg.seed)
    msgs = clean_messages(messages) or DEFAULT_GIFT_MESSAGES
    images = list(photos) or FESTIVE_IMAGES
    items = []
    for category, count, content in (("gift", cfg.gifts, msgs), ("frame", cfg.frames, images)):
        h, r, y0 = TREE_CONES[category]
        for i in range(count):
            tree = cone_surface_position(rng, h, r, y0)
            scatter = sphere_position(rng, SCATTER_RADIUS)
            if category == "frame":
                # face outward from the tree axis so the picture is visible
                yaw = float(np.arctan2(tree[0], tree[2]))
            else:
                yaw = float(rng.random() * 2*np.pi)
            items.append(InteractiveItem(
                id=f"{category}-{i}", category=category,
                tree_position=tree, scatter_position=scatter,
                rotation=axis_angle((0.0, 1.0, 0.0), yaw),
                phase=float(rng.random() * 2*np.pi),
                scale=REST_SCALE[category],
                content=content[i % len(content)],
            ))
    logger.debug("built pool: %d gifts, %d frames", cfg.gifts, cfg.frames)
    return ItemPool(items)
