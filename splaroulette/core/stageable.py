"""Stageable - generic draft/commit wrapper shared by the filter and roster state machines.

Invariants:
    - pending starts equal to committed
    - is_dirty is True iff pending != committed
    - commit() and discard() both leave is_dirty False
    - Held values are immutable (frozenset, frozen dataclass); edits replace pending

Design Decisions:
    - Immutable values instead of copy functions: "copy" is just rebinding
"""

from typing import Generic, TypeVar

T = TypeVar("T")


class Stageable(Generic[T]):
    """A committed value plus an in-progress pending edit of it."""

    def __init__(self, committed: T):
        self._committed = committed
        self._pending = committed

    @property
    def committed(self) -> T:
        return self._committed

    @property
    def pending(self) -> T:
        return self._pending

    @pending.setter
    def pending(self, value: T) -> None:
        self._pending = value

    @property
    def is_dirty(self) -> bool:
        return self._pending != self._committed

    def commit(self) -> T:
        """Promote pending to committed. Returns the new committed value."""
        self._committed = self._pending
        return self._committed

    def discard(self) -> T:
        """Drop pending edits. Returns the restored pending value."""
        self._pending = self._committed
        return self._pending

    def reset(self, value: T) -> None:
        """Replace both sides, e.g. after a catalog reload."""
        self._committed = value
        self._pending = value
