"""
FontHistory - Undo/Redo over Font Snapshots
===========================================
Append-only list of immutable snapshots with a cursor.

    history = FontHistory(None)
    history.push(glyphs_v1)
    history.push(glyphs_v2)
    history.undo()          # current -> glyphs_v1
    history.push(glyphs_v3) # glyphs_v2 is discarded

Pushing after an undo drops every snapshot past the cursor.
"""

from typing import Generic, List, TypeVar

T = TypeVar("T")


class FontHistory(Generic[T]):
    """
    Snapshot history.

    Args:
        initial: First snapshot (e.g. None before anything is generated)
    """

    def __init__(self, initial: T):
        self._snapshots: List[T] = [initial]
        self._index = 0

    @property
    def current(self) -> T:
        return self._snapshots[self._index]

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def push(self, snapshot: T) -> T:
        """Record a new snapshot after the cursor and make it current."""
        del self._snapshots[self._index + 1:]
        self._snapshots.append(snapshot)
        self._index = len(self._snapshots) - 1
        return snapshot

    def undo(self) -> T:
        """Step back one snapshot (no-op at the start)."""
        if self.can_undo:
            self._index -= 1
        return self.current

    def redo(self) -> T:
        """Step forward one snapshot (no-op at the end)."""
        if self.can_redo:
            self._index += 1
        return self.current
