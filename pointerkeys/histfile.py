"""Persistent history of clicked positions, stored as a fixed-size binary record."""

from __future__ import annotations

import os
import struct

_COUNT = struct.Struct("=i")
_ENTRY = struct.Struct("=ii")
_NEAR = 30


class HistoryFile:
    """A file holding up to max_entries recent click positions."""

    def __init__(self, path: str, max_entries: int = 16) -> None:
        self.path = path
        self.max_entries = max_entries

    def _open(self) -> int:
        return os.open(self.path, os.O_RDWR | os.O_CREAT, 0o600)

    def read(self) -> list[tuple[int, int]]:
        """Return the stored positions, oldest first; creates the file if missing."""
        fd = self._open()
        try:
            size = _COUNT.size + _ENTRY.size * self.max_entries
            data = os.read(fd, size)
        finally:
            os.close(fd)
        if len(data) < _COUNT.size:
            return []
        (count,) = _COUNT.unpack_from(data)
        count = max(0, min(count, self.max_entries))
        data = data.ljust(_COUNT.size + _ENTRY.size * count, b"\0")
        return [
            _ENTRY.unpack_from(data, _COUNT.size + i * _ENTRY.size)
            for i in range(count)
        ]

    def add(self, x: int, y: int) -> None:
        """Append a position, dropping stored ones near it and the oldest if full."""
        entries = [
            (ex, ey) for ex, ey in self.read()
            if not (abs(ex - x) < _NEAR and abs(ey - y) < _NEAR)
        ]
        if len(entries) >= self.max_entries:
            entries = entries[len(entries) - self.max_entries + 1:]
        entries.append((x, y))

        padded = entries + [(0, 0)] * (self.max_entries - len(entries))
        payload = _COUNT.pack(len(entries)) + b"".join(_ENTRY.pack(*e) for e in padded)
        fd = self._open()
        try:
            os.write(fd, payload)
        finally:
            os.close(fd)