"""Hint modes: select a position by typing the label drawn at it."""

from __future__ import annotations

from typing import Any, Iterable, TextIO

from .keys import event_to_str
from .platform import Hint
from .session import Session

_LABEL_MAX = 15


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def hint_size(sw: int, sh: int, size: int) -> tuple[int, int]:
    """Return hint width and height for a screen, size being in thousandths."""
    long_side, short_side = max(sw, sh), min(sw, sh)
    return _cdiv(long_side * size, 1000), _cdiv(short_side * size, 1000)


def generate_fullscreen_hints(chars: str, sw: int, sh: int, size: int) -> list[Hint]:
    """Spread len(chars)**2 two-letter hints evenly over a screen."""
    w, h = hint_size(sw, sh, size)
    n = len(chars)
    if not n:
        return []
    colgap = sw // n - w
    rowgap = sh // n - h
    x_offset = _cdiv(sw - n * w - (n - 1) * colgap, 2)
    y_offset = _cdiv(sh - n * h - (n - 1) * rowgap, 2)
    return [
        Hint(x_offset + i * (colgap + w), y_offset + j * (rowgap + h), w, h, ci + cj)
        for i, ci in enumerate(chars)
        for j, cj in enumerate(chars)
    ]


def sift_hints(x: int, y: int, sh: int, chars: str, gap: int, size: int,
               grid_size: int) -> list[Hint]:
    """Return a small grid of one-letter hints centred on (x, y)."""
    gap = _cdiv(gap * sh, 1000)
    size = _cdiv(size * sh, 1000)
    half = _cdiv((size + (gap - 1)) * grid_size, 2)
    x -= half
    y -= half
    hints = []
    for col in range(grid_size):
        for row in range(grid_size):
            idx = row * grid_size + col
            if idx < len(chars):
                hints.append(Hint(x + (size + gap) * col, y + (size + gap) * row,
                                  size, size, chars[idx]))
    return hints


def filter_hints(hints: Iterable[Hint], prefix: str) -> list[Hint]:
    """Return the hints whose label starts with prefix."""
    return [h for h in hints if h.label.startswith(prefix)]


def _spec_tokens(lines: Iterable[str]):
    for line in lines:
        yield from line.split()


def parse_hint_spec(lines: Iterable[str], w: int, h: int) -> list[Hint]:
    """Read "label x y" triples; each hint of size w x h is centred on its point.

    Reading stops at the first triple that does not parse.
    """
    tokens = _spec_tokens(lines)
    hints = []
    pending: list[str] = []

    def take():
        if pending:
            return pending.pop()
        return next(tokens, None)

    while True:
        label = take()
        if label is None:
            break
        if len(label) > _LABEL_MAX:
            pending.append(label[_LABEL_MAX:])
            label = label[:_LABEL_MAX]
        coords = []
        for _ in range(2):
            tok = take()
            try:
                coords.append(int(tok))
            except (TypeError, ValueError):
                return hints
        hints.append(Hint(coords[0] - w // 2, coords[1] - h // 2, w, h, label))
    return hints


class HintModes:
    """The hint-based selection modes of a session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @property
    def _platform(self):
        return self.session.platform

    @property
    def _config(self):
        return self.session.config

    def init_style(self) -> None:
        """Pass the configured hint style to the platform."""
        c = self._config
        self._platform.init_hint(c.get("hint_bgcolor"), c.get("hint_fgcolor"),
                                 c.get_int("hint_border_radius"), c.get("hint_font"))

    def _show(self, screen: Any, hints: list[Hint]) -> None:
        self._platform.screen_clear(screen)
        self._platform.hint_draw(screen, hints)
        self._platform.commit()

    def select(self, screen: Any, hints: list[Hint]) -> int:
        """Let the user type a label; move to the chosen hint. Returns -1 if cancelled, else 0."""
        platform, config = self._platform, self._config
        self._show(screen, filter_hints(hints, ""))
        rc = 0
        buf = ""
        platform.input_grab_keyboard()
        platform.mouse_hide()
        config.whitelist(("hint_exit", "hint_undo_all", "hint_undo"))

        while True:
            ev = platform.input_next_event(0)
            if ev is None or not ev.pressed:
                continue

            if config.match(ev, "hint_exit"):
                rc = -1
                break
            elif config.match(ev, "hint_undo_all"):
                buf = ""
            elif config.match(ev, "hint_undo"):
                buf = buf[:-1]
            else:
                name = event_to_str(platform, ev)
                if len(name) != 1:
                    continue
                buf += name

            matched = filter_hints(hints, buf)
            self._show(screen, matched)

            if len(matched) == 1:
                h = matched[0]
                platform.screen_clear(screen)
                nx = h.x + h.w // 2
                ny = h.y + h.h // 2
                # Nudge first so text selection widgets notice the move.
                platform.mouse_move(screen, nx + 1, ny + 1)
                platform.mouse_move(screen, nx, ny)
                self.session.last_selected_hint = buf
                break
            if not matched:
                break

        platform.input_ungrab_keyboard()
        platform.screen_clear(screen)
        platform.mouse_show()
        platform.commit()
        return rc

    def _sift(self) -> int:
        c = self._config
        screen, x, y = self._platform.mouse_get_position()
        _, sh = self._platform.screen_get_dimensions(screen)
        hints = sift_hints(x, y, sh, c.get("hint2_chars"), c.get_int("hint2_gap_size"),
                           c.get_int("hint2_size"), c.get_int("hint2_grid_size"))
        return self.select(screen, hints)

    def full(self, second_pass: bool) -> int:
        """Full-screen hint selection, optionally refined by a second small grid."""
        screen, mx, my = self._platform.mouse_get_position()
        self.session.history.add(mx, my)
        sw, sh = self._platform.screen_get_dimensions(screen)
        hints = generate_fullscreen_hints(self._config.get("hint_chars"), sw, sh,
                                          self._config.get_int("hint_size"))
        if self.select(screen, hints):
            return -1
        return self._sift() if second_pass else 0

    def history(self) -> int:
        """Select one of the positions stored in the history file."""
        screen, _, _ = self._platform.mouse_get_position()
        sw, sh = self._platform.screen_get_dimensions(screen)
        entries = self.session.histfile.read() if self.session.histfile else []
        w, h = hint_size(sw, sh, self._config.get_int("hint_size"))
        hints = [Hint(ex - w // 2, ey - h // 2, w, h, chr(ord("a") + i))
                 for i, (ex, ey) in enumerate(entries)]
        return self.select(screen, hints)

    def spec(self, stream: TextIO) -> int:
        """Select among hints read from a stream of "label x y" lines."""
        screen, _, _ = self._platform.mouse_get_position()
        sw, sh = self._platform.screen_get_dimensions(screen)
        w, h = hint_size(sw, sh, self._config.get_int("hint_size"))
        return self.select(screen, parse_hint_spec(stream, w, h))