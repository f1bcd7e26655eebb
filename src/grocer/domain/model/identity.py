"""Id allocation for entities.

Each store owns one IdSequence, so ids are monotonically increasing per
entity kind and tests can inject a sequence to control numbering.
"""

from __future__ import annotations


class IdSequence:
    """Monotonic integer id allocator, starting at ``start``."""

    def __init__(self, start: int = 1) -> None:
        if start < 1:
            raise ValueError("Id sequences start at 1 or above")
        self._next = start

    @property
    def peek(self) -> int:
        """The id the next call to ``next()`` will return."""
        return self._next

    def next(self) -> int:
        allocated = self._next
        self._next += 1
        return allocated

    def observe(self, existing_id: int) -> None:
        """Make sure future ids are greater than ``existing_id``."""
        if existing_id >= self._next:
            self._next = existing_id + 1

    def reset(self, after: int = 0) -> None:
        """Restart allocation at ``after + 1`` (used after a bulk reload)."""
        self._next = max(after, 0) + 1
