from __future__ import annotations
import logging
from typing import Dict, Optional
import numpy as np
from ..fuse.state import InteractionMode
from ..scene.items import CATEGORIES, ItemPool
from .history import SelectionHistory, history_capacity

logger = logging.getLogger(__name__)

MODE_CATEGORY = {
    InteractionMode.PULLING_FRAME: "frame",
    InteractionMode.PULLING_GIFT: "gift",
}

class ItemSelector:
    """
    Random pick per category that avoids the category's recent picks, plus
    the single targeted id driven by the interaction mode.
    """
    def __init__(self, pool: ItemPool, ratio:float=0.5, rng: Optional[np.random.Generator]=None):
        self.pool = pool
        self.rng = rng if rng is not None else np.random.default_rng()
        self.histories: Dict[str, SelectionHistory] = {
            c: SelectionHistory(history_capacity(len(pool.by_category(c)), ratio)) for c in CATEGORIES
        }
        self.targeted: Optional[str] = None

    def pick(self, category:str) -> Optional[str]:
        candidates = [it.id for it in self.pool.by_category(category)]
        if not candidates:
            return None
        hist = self.histories[category]
        fresh = [c for c in candidates if c not in hist]
        # saturated history must never block a pick
        choices = fresh or candidates
        chosen = choices[int(self.rng.integers(len(choices)))]
        hist.push(chosen)
        logger.info("selected %s (%d fresh of %d)", chosen, len(fresh), len(candidates))
        return chosen

    def update(self, mode: InteractionMode) -> Optional[str]:
        """Bring the targeted id in line with mode; keeps a target of the right category."""
        category = MODE_CATEGORY.get(mode)
        if category is None:
            self.targeted = None
            return None
        current = self.pool.get(self.targeted)
        if current is None or current.category != category:
            self.targeted = self.pick(category)
        return self.targeted

    def set_pool(self, pool: ItemPool):
        """Swap content; ids are unchanged so target and histories stay valid."""
        self.pool = pool
