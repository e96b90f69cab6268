"""Normal mode: move the pointer with held keys, click, drag and scroll."""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from .config import Config
from .keys import event_to_str
from .platform import InputEvent, Platform, ScrollDirection
from .session import Session

_INDICATOR_GAP = 10

_NORMAL_KEYS = (
    "accelerator", "bottom", "buttons", "copy_and_exit", "decelerator",
    "down", "drag", "end", "exit", "grid", "hint", "hint2", "hist_back",
    "hist_forward", "history", "left", "middle", "oneshot_buttons", "print",
    "right", "screen", "scroll_down", "scroll_up", "start", "top", "up",
)

_LEAVE_KEYS = ("exit", "grid", "screen", "history", "hint2", "hint")

_BLINK = re.compile(r"\s*([+-]?\d+)(?:\s*([+-]?\d+))?")


def parse_blink_interval(text: str) -> tuple[int, int]:
    """Parse "on [off]" milliseconds; a single value is used for both."""
    m = _BLINK.match(text)
    if not m:
        raise ValueError(f"{text!r} is not a blink interval")
    on_time = int(m.group(1))
    off_time = int(m.group(2)) if m.group(2) is not None else on_time
    return on_time, off_time


def indicator_box(indicator: str, sw: int, sh: int, size: int
                  ) -> Optional[tuple[int, int, int, int]]:
    """Return the (x, y, w, h) box of the mode indicator, or None if there is none."""
    gap = _INDICATOR_GAP
    positions = {
        "bottomleft": (gap, sh - size - gap),
        "topleft": (gap, gap),
        "topright": (sw - size - gap, gap),
        "bottomright": (sw - size - gap, sh - size - gap),
    }
    pos = positions.get(indicator)
    if pos is None:
        return None
    return pos[0], pos[1], size, size


class _Scroller:
    """Accelerating scroll driven by the scroll options, stepped by tick()."""

    def __init__(self, platform: Platform, config: Config, clock: Callable[[], int]) -> None:
        self.platform = platform
        self.clock = clock
        self.speed = float(config.get_int("scroll_speed"))
        self.max_speed = float(config.get_int("scroll_max_speed"))
        self.acceleration = float(config.get_int("scroll_acceleration"))
        self.deceleration = float(config.get_int("scroll_deceleration"))
        self.direction: Optional[ScrollDirection] = None
        self.v = 0.0
        self.a = 0.0
        self._travelled = 0.0
        self._last = clock()

    def accelerate(self, direction: ScrollDirection) -> None:
        self.direction = direction
        if self.v == 0:
            self.v = self.speed
        self.a = self.acceleration

    def decelerate(self) -> None:
        self.a = self.deceleration

    def stop(self) -> None:
        self.direction = None
        self.v = 0.0
        self.a = 0.0
        self._travelled = 0.0

    def tick(self) -> None:
        t = self.clock()
        elapsed = (t - self._last) / 1e6
        self._last = t
        if self.direction is None:
            return
        self.v = min(self.v + self.a * elapsed, self.max_speed)
        if self.v <= 0:
            self.stop()
            return
        self._travelled += self.v * elapsed
        steps = int(self._travelled)
        self._travelled -= steps
        for _ in range(steps):
            self.platform.scroll(self.direction)


def normal_mode(session: Session, start_ev: Optional[InputEvent] = None,
                oneshot: bool = False) -> Optional[InputEvent]:
    """Run normal mode; return the event that ended it (None after copy_and_exit).

    In oneshot mode a mouse button prints the position and exits the
    program with the button number as status.
    """
    platform, config, mouse = session.platform, session.config, session.mouse
    cursz = config.get_int("cursor_size")
    system_cursor = config.get_int("normal_system_cursor")
    on_time, off_time = parse_blink_interval(config.get("normal_blink_interval"))
    show_cursor = not system_cursor
    dragging = False

    def redraw(scr: Any, x: int, y: int, hide_cursor: bool) -> None:
        sw, sh = platform.screen_get_dimensions(scr)
        size = (config.get_int("indicator_size") * sh) // 1080
        platform.screen_clear(scr)
        if not hide_cursor:
            platform.screen_draw_box(scr, x + 1, y - cursz // 2, cursz, cursz,
                                     config.get("cursor_color"))
        box = indicator_box(config.get("indicator"), sw, sh, size)
        if box is not None:
            platform.screen_draw_box(scr, *box, config.get("indicator_color"))
        platform.commit()

    def move(scr: Any, x: int, y: int) -> None:
        platform.mouse_move(scr, x, y)
        redraw(scr, x, y, not show_cursor)

    platform.input_grab_keyboard()
    scr, mx, my = platform.mouse_get_position()
    sw, sh = platform.screen_get_dimensions(scr)
    if not system_cursor:
        platform.mouse_hide()

    mouse.reset()
    redraw(scr, mx, my, not show_cursor)
    scroller = _Scroller(platform, config, mouse.clock)

    now = 0
    last_blink = 0
    pending = start_ev
    while True:
        config.whitelist(_NORMAL_KEYS)
        if pending is None:
            ev = platform.input_next_event(10)
            now += 10
        else:
            ev, pending = pending, None

        scr, mx, my = platform.mouse_get_position()

        if not system_cursor and on_time:
            if show_cursor and now - last_blink >= on_time:
                show_cursor = False
                redraw(scr, mx, my, True)
                last_blink = now
            elif not show_cursor and now - last_blink >= off_time:
                show_cursor = True
                redraw(scr, mx, my, False)
                last_blink = now

        scroller.tick()
        if mouse.process_key(ev, "up", "down", "left", "right"):
            redraw(scr, mx, my, not show_cursor)
            continue

        if ev is None:
            continue

        if config.match(ev, "scroll_down") or config.match(ev, "scroll_up"):
            redraw(scr, mx, my, True)
            if ev.pressed:
                scroller.stop()
                down = bool(config.match(ev, "scroll_down"))
                scroller.accelerate(ScrollDirection.DOWN if down else ScrollDirection.UP)
            else:
                scroller.decelerate()
        elif config.match(ev, "accelerator"):
            if ev.pressed:
                mouse.fast()
            else:
                mouse.normal()
        elif config.match(ev, "decelerator"):
            if ev.pressed:
                mouse.slow()
            else:
                mouse.normal()
        elif not ev.pressed:
            platform.commit()
            continue

        if config.match(ev, "top"):
            move(scr, mx, cursz // 2)
        elif config.match(ev, "bottom"):
            move(scr, mx, sh - cursz // 2)
        elif config.match(ev, "middle"):
            move(scr, mx, sh // 2)
        elif config.match(ev, "start"):
            move(scr, 1, my)
        elif config.match(ev, "end"):
            move(scr, sw - cursz, my)
        elif config.match(ev, "hist_back"):
            session.history.add(mx, my)
            session.history.prev()
            mx, my = session.history.current() or (mx, my)
            move(scr, mx, my)
        elif config.match(ev, "hist_forward"):
            session.history.next()
            mx, my = session.history.current() or (mx, my)
            move(scr, mx, my)
        elif config.match(ev, "drag"):
            dragging = not dragging
            if dragging:
                platform.mouse_down(config.get_int("drag_button"))
            else:
                platform.mouse_up(config.get_int("drag_button"))
        elif config.match(ev, "copy_and_exit"):
            platform.mouse_up(config.get_int("drag_button"))
            platform.copy_selection()
            ev = None
            break
        elif any(config.match(ev, k) for k in _LEAVE_KEYS):
            break
        elif config.match(ev, "print"):
            print(f"{mx} {my} {event_to_str(platform, ev)}", file=session.stream)
            session.stream.flush()
        else:
            btn = config.match(ev, "buttons")
            if btn:
                if oneshot:
                    print(f"{mx} {my}", file=session.stream)
                    session.stream.flush()
                    raise SystemExit(btn)
                session.history.add(mx, my)
                if session.histfile is not None:
                    session.histfile.add(mx, my)
                platform.mouse_click(btn)
            else:
                btn = config.match(ev, "oneshot_buttons")
                if btn:
                    session.history.add(mx, my)
                    platform.mouse_click(btn)
                    timeout = config.get_int("oneshot_timeout")
                    while True:
                        again = platform.input_next_event(timeout)
                        if again is None:
                            break
                        if again.pressed and config.match(again, "oneshot_buttons"):
                            platform.mouse_click(btn)
                    break

        scr, mx, my = platform.mouse_get_position()
        platform.commit()

    platform.mouse_show()
    platform.screen_clear(scr)
    platform.input_ungrab_keyboard()
    platform.commit()
    return ev