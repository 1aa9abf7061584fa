from __future__ import annotations
import math
from collections import deque
from typing import Deque, Iterator

def history_capacity(pool_size:int, ratio:float=0.5) -> int:
    return max(1, int(math.floor(pool_size * ratio)))

class SelectionHistory:
    """Insertion-ordered recent picks; push evicts the oldest once full."""
    def __init__(self, capacity:int):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._ids: Deque[str] = deque(maxlen=capacity)

    def push(self, item_id:str):
        self._ids.append(item_id)

    def __contains__(self, item_id) -> bool:
        return item_id in self._ids
    def __len__(self) -> int:
        return len(self._ids)
    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)
    def __repr__(self):
        return f"SelectionHistory({list(self._ids)!r}, capacity={self.capacity})"
