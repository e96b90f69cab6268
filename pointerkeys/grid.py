"""Grid mode: repeatedly subdivide the screen to home in on a position."""

from __future__ import annotations

from typing import Optional

from .config import Config
from .mouse import Mouse
from .platform import InputEvent, Platform

_GRID_KEYS = (
    "grid_up", "grid_down", "grid_right", "grid_left",
    "grid_cut_up", "grid_cut_down", "grid_cut_right", "grid_cut_left",
    "grid_keys", "buttons", "oneshot_buttons",
    "grid", "hint", "exit", "drag", "grid_exit",
)

_EXIT_KEYS = ("buttons", "oneshot_buttons", "grid", "hint", "exit", "drag", "grid_exit")


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def grid_lines(size: int, nc: int, nr: int, x: int, y: int, w: int, h: int
               ) -> list[tuple[int, int, int, int]]:
    """Return the (x, y, w, h) boxes of a grid of nc columns and nr rows; [] if it does not fit."""
    ygap = _cdiv(h - (nr + 1) * size, nr)
    xgap = _cdiv(w - (nc + 1) * size, nc)
    if xgap < 0 or ygap < 0:
        return []
    rows = [(x, y + (ygap + size) * i, w, size) for i in range(nr + 1)]
    cols = [(x + (xgap + size) * i, y, size, h) for i in range(nc + 1)]
    return rows + cols


def grid_mode(platform: Platform, config: Config, mouse: Mouse) -> Optional[InputEvent]:
    """Run grid mode; return the event that ended it."""
    nc = config.get_int("grid_nc")
    nr = config.get_int("grid_nr")

    platform.input_grab_keyboard()
    platform.mouse_hide()
    mouse.reset()

    scr, _, _ = platform.mouse_get_position()
    gw, gh = platform.screen_get_dimensions(scr)
    last: list[Optional[tuple[int, int]]] = [None]

    def redraw(mx: int, my: int, force: bool) -> None:
        if not force and last[0] == (mx, my):
            return
        last[0] = (mx, my)
        x = mx - gw // 2
        y = my - gh // 2
        cursz = config.get_int("cursor_size")
        gsz = config.get_int("grid_size")
        gbsz = config.get_int("grid_border_size")

        platform.screen_clear(scr)
        for box in grid_lines(gsz + gbsz * 2, nc, nr, x, y, gw, gh):
            platform.screen_draw_box(scr, *box, config.get("grid_border_color"))
        for box in grid_lines(gsz, nc, nr, x + gbsz, y + gbsz, gw - gbsz * 2, gh - gbsz * 2):
            platform.screen_draw_box(scr, *box, config.get("grid_color"))
        platform.screen_draw_box(scr, x + gw // 2 - cursz // 2, y + gh // 2 - cursz // 2,
                                 cursz, cursz, config.get("cursor_color"))
        platform.commit()

    mx, my = gw // 2, gh // 2
    platform.mouse_move(scr, mx, my)
    redraw(mx, my, True)

    config.whitelist(_GRID_KEYS)

    while True:
        ev = platform.input_next_event(10)
        _, mx, my = platform.mouse_get_position()

        if mouse.process_key(ev, "grid_up", "grid_down", "grid_left", "grid_right"):
            redraw(mx, my, False)
            continue

        if ev is None or not ev.pressed:
            continue

        idx = config.match(ev, "grid_keys")
        if idx and idx <= nc * nr:
            my = (my - gh // 2) + (gh // nr) * ((idx - 1) // nc)
            mx = (mx - gw // 2) + (gw // nc) * ((idx - 1) % nc)
            gh //= nr
            gw //= nc
            mx += gw // 2
            my += gh // 2
            platform.mouse_move(scr, mx, my)
            redraw(mx, my, False)

        if config.match(ev, "grid_cut_up"):
            my -= gh // 4
            gh //= 2
            platform.mouse_move(scr, mx, my)
            redraw(mx, my, False)
        if config.match(ev, "grid_cut_down"):
            my += gh // 4
            gh //= 2
            platform.mouse_move(scr, mx, my)
            redraw(mx, my, False)
        if config.match(ev, "grid_cut_left"):
            mx -= gw // 4
            gw //= 2
            platform.mouse_move(scr, mx, my)
            redraw(mx, my, False)
        if config.match(ev, "grid_cut_right"):
            mx += gw // 4
            gw //= 2
            platform.mouse_move(scr, mx, my)
            redraw(mx, my, False)

        if any(config.match(ev, k) for k in _EXIT_KEYS):
            break

        redraw(mx, my, False)

    config.whitelist(None)
    platform.screen_clear(scr)
    platform.mouse_show()
    platform.input_ungrab_keyboard()
    platform.commit()
    return ev