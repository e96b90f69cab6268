"""Polling of files for modification."""

from __future__ import annotations

import os
from dataclasses import dataclass


def get_mtime(path: str) -> int:
    """Return a file's modification time in whole seconds, or 0 if it cannot be read."""
    try:
        return int(os.stat(path).st_mtime)
    except OSError:
        return 0


@dataclass
class _Watched:
    path: str
    mtime: int


class FileMonitor:
    """Detects changes to a bounded set of files by polling their mtimes."""

    def __init__(self, limit: int = 32) -> None:
        self.limit = limit
        self._files: list[_Watched] = []

    def add(self, path: str) -> None:
        """Start watching a file."""
        if len(self._files) >= self.limit:
            raise OverflowError(f"cannot monitor more than {self.limit} files")
        self._files.append(_Watched(path, get_mtime(path)))

    def changed(self) -> bool:
        """Return True if a watched file changed since the last check."""
        for watched in self._files:
            mtime = get_mtime(watched.path)
            if mtime != watched.mtime:
                watched.mtime = mtime
                return True
        return False