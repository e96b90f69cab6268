"""State shared by the modes of one running instance."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO

from .config import Config
from .histfile import HistoryFile
from .history import History
from .mouse import Mouse
from .platform import Platform


@dataclass
class Session:
    """The platform, configuration and movement state the modes work on."""

    platform: Platform
    config: Config
    mouse: Optional[Mouse] = None
    history: History = field(default_factory=History)
    histfile: Optional[HistoryFile] = None
    out: Optional[TextIO] = None
    last_selected_hint: str = ""

    def __post_init__(self) -> None:
        if self.mouse is None:
            self.mouse = Mouse(self.platform, self.config)

    @property
    def stream(self) -> TextIO:
        """Where positions are reported."""
        return self.out if self.out is not None else sys.stdout

    def report_position(self) -> tuple[int, int]:
        """Print the pointer position as "x y" and return it."""
        _, x, y = self.platform.mouse_get_position()
        print(f"{x} {y}", file=self.stream)
        self.stream.flush()
        return x, y