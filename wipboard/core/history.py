"""
FILE: wipboard/core/history.py
PURPOSE: Bounded undo history of board snapshots
EXPORTS:
  - BoardHistory (class)
DEPENDENCIES:
  - collections.deque (stdlib)
NOTES:
  - Each entry is the serialized board taken just before a mutation
  - Entries are strings, so they can't be changed after they're pushed
  - Oldest entry is dropped once max_depth is reached
  - Single direction: undo pops, nothing is ever redone
  - Session-scoped (not persisted)
"""

from collections import deque
from typing import Deque, Optional

from .constants import DEFAULT_HISTORY_DEPTH


class BoardHistory:
    """
    Stack of prior board snapshots for a single session.

    Attributes:
        max_depth: Maximum number of snapshots kept
    """

    def __init__(self, max_depth: int = DEFAULT_HISTORY_DEPTH):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self._entries: Deque[str] = deque(maxlen=max_depth)

    def push(self, snapshot: str) -> None:
        """Record a snapshot; evicts the oldest one when full."""
        self._entries.append(snapshot)

    def pop(self) -> Optional[str]:
        """Remove and return the newest snapshot, or None if empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[str]:
        return self._entries[-1] if self._entries else None

    def can_undo(self) -> bool:
        """Check if there's a snapshot to restore."""
        return bool(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
