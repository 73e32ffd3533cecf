"""
Undo history for the drawing canvas.

A bounded stack of full-surface snapshots. One entry is pushed per
finished gesture; the oldest entry is evicted once capacity is reached.
"""

from collections import deque
from typing import Deque, Optional

from PyQt6.QtGui import QImage

from ...config import Config


class SnapshotHistory:
    """
    Bounded, oldest-first stack of surface snapshots.

    The bottom entry is never popped: undo with a single entry left
    returns nothing and leaves the stack unchanged.
    """

    def __init__(self, capacity: int = Config.MAX_UNDO_STEPS):
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._entries: Deque[QImage] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def push(self, snapshot: QImage):
        """Store a detached copy of the snapshot, evicting the oldest if full."""
        self._entries.append(snapshot.copy())

    def pop(self) -> Optional[QImage]:
        """
        Remove and return the newest snapshot.

        Returns:
            The removed snapshot, or None when at most one entry remains
        """
        if len(self._entries) <= 1:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[QImage]:
        """Newest snapshot, or None if the history is empty."""
        if not self._entries:
            return None
        return self._entries[-1]

    def reset(self, snapshot: QImage):
        """Drop every entry and start over from a single snapshot."""
        self._entries.clear()
        self.push(snapshot)

    def clear(self):
        self._entries.clear()


__all__ = ['SnapshotHistory']
