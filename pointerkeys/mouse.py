"""Continuous keyboard-driven pointer movement with acceleration."""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

from .config import Config
from .platform import InputEvent, Platform


def _default_clock() -> int:
    return time.monotonic_ns() // 1000


class Mouse:
    """Pointer movement state driven by direction keys.

    process_key is expected to be called about every 10ms, with None on
    timeout; reset should be called when a movement mode starts.
    """

    def __init__(self, platform: Platform, config: Config,
                 clock: Optional[Callable[[], int]] = None) -> None:
        self.platform = platform
        self.config = config
        self.clock = clock or _default_clock

        self.inc = 15
        self.v0 = self.vf = self.vd = 0.0
        self.a = self.a0 = self.a1 = 0.0
        self.cursor_size = 0

        self.screen: Any = None
        self.sw = 0
        self.sh = 0
        self.cx = 0.0
        self.cy = 0.0
        self.v = 0.0

        self.left = self.right = self.up = self.down = 0
        self.resting = True
        self.mode_slow = False
        self.opnum = 0
        self._last_update = 0

    def configure(self) -> None:
        """Load speeds and accelerations from the config."""
        self._update_position()
        self.cursor_size = (self.config.get_int("cursor_size") * self.sh) // 1080
        self.v0 = self.config.get_int("speed") / 1000.0
        self.vf = self.config.get_int("max_speed") / 1000.0
        self.vd = self.config.get_int("decelerator_speed") / 1000.0
        self.a0 = self.config.get_int("acceleration") / 1000000.0
        self.a1 = self.config.get_int("accelerator_acceleration") / 1000000.0
        self.a = self.a0

    def _update_position(self) -> None:
        self.screen, ix, iy = self.platform.mouse_get_position()
        self.sw, self.sh = self.platform.screen_get_dimensions(self.screen)
        self.cx = float(ix)
        self.cy = float(iy)

    def _moving(self) -> bool:
        return bool(self.left or self.right or self.up or self.down)

    def _digit(self, code: int) -> int:
        name = self.platform.input_lookup_name(code, False)
        if not name or not "0" <= name[0] <= "9":
            return -1
        return ord(name[0]) - ord("0")

    def tick(self) -> None:
        """Advance the pointer according to the held keys and elapsed time."""
        t = self.clock()
        elapsed = (t - self._last_update) / 1e3
        self._last_update = t

        dx = self.right - self.left
        dy = self.down - self.up

        maxx = self.sw - self.cursor_size
        maxy = self.sh - self.cursor_size // 2
        miny = self.cursor_size // 2
        minx = 1

        if not dx and not dy:
            self.resting = True
            return

        if self.resting:
            self._update_position()
            if not self.mode_slow:
                self.v = self.v0
            self.resting = False

        self.cx += self.v * elapsed * dx
        self.cy += self.v * elapsed * dy

        self.v = min(self.v + elapsed * self.a, self.vf)

        self.cx = min(max(self.cx, minx), maxx)
        self.cy = min(max(self.cy, miny), maxy)

        self.platform.mouse_move(self.screen, int(self.cx), int(self.cy))

    def process_key(self, ev: Optional[InputEvent], up_key: str, down_key: str,
                    left_key: str, right_key: str) -> bool:
        """Handle an event (None on timeout); return True if the pointer moved or may move."""
        if ev is None:
            self.tick()
            return self._moving()

        n = self._digit(ev.code)
        if n != -1 and not ev.mods:
            if ev.pressed:
                self.opnum = self.opnum * 10 + n
            # A lone 0 propagates so it can act as a key of its own.
            return self.opnum != 0

        handled = False
        if self.config.match(ev, down_key):
            self.down = int(ev.pressed)
            handled = True
        elif self.config.match(ev, left_key):
            self.left = int(ev.pressed)
            handled = True
        elif self.config.match(ev, right_key):
            self.right = int(ev.pressed)
            handled = True
        elif self.config.match(ev, up_key):
            self.up = int(ev.pressed)
            handled = True

        if self.opnum and handled:
            x = self.right - self.left
            y = self.down - self.up
            self._update_position()
            self.cx += self.inc * self.opnum * x
            self.cy += self.inc * self.opnum * y
            self.platform.mouse_move(self.screen, int(self.cx), int(self.cy))
            self.opnum = 0
            self.left = self.right = self.up = self.down = 0
            return True

        self.tick()
        return handled

    def fast(self) -> None:
        """Use the accelerator's acceleration."""
        self.a = self.a1

    def normal(self) -> None:
        """Return to normal speed and acceleration."""
        self.v = self.v0
        self.a = self.a0
        self.mode_slow = False

    def slow(self) -> None:
        """Move at the decelerator speed without acceleration."""
        self.v = self.vd
        self.a = 0.0
        self.mode_slow = True

    def reset(self) -> None:
        """Clear held keys and pending counts and resync with the real pointer."""
        self.opnum = 0
        self.left = self.right = self.up = self.down = 0
        self.a = self.a0
        self.v = self.v0
        self._update_position()
        self.tick()