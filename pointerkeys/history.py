"""In-session history of pointer positions, kept in a fixed-size ring."""

from __future__ import annotations

from typing import Optional


class History:
    """A bounded back/forward stack of positions.

    Adding a position after stepping back drops the positions ahead of
    the current one. When the ring is full the oldest entry is dropped.
    """

    def __init__(self, size: int = 16) -> None:
        if size < 1:
            raise ValueError("history size must be positive")
        self.size = size
        self._buf: list[tuple[int, int]] = [(0, 0)] * size
        self._head = 0
        self._tail = 0
        self._full = False
        self._cur = 0

    def _empty(self) -> bool:
        return not self._full and self._head == self._tail

    def current(self) -> Optional[tuple[int, int]]:
        """Return the current position, or None if the history is empty."""
        if self._empty():
            return None
        return self._buf[self._cur]

    def _truncate(self) -> None:
        if self._empty():
            return
        self._head = (self._cur + 1) % self.size
        self._full = self._tail == self._head

    def add(self, x: int, y: int) -> None:
        """Record a position unless it equals the current one."""
        if self.current() == (x, y):
            return
        self._truncate()
        if self._full:
            self._tail = (self._tail + 1) % self.size
        self._buf[self._head] = (x, y)
        self._cur = self._head
        self._head = (self._head + 1) % self.size
        self._full = self._head == self._tail

    def prev(self) -> None:
        """Step back towards the oldest position."""
        if self._empty() or self._cur == self._tail:
            return
        self._cur = (self._cur - 1) % self.size

    def next(self) -> None:
        """Step forward towards the newest position."""
        if self._empty():
            return
        n = (self._cur + 1) % self.size
        if n != self._head:
            self._cur = n