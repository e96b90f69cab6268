import dataclasses
import io

import pytest

from pointerkeys.config import Config
from pointerkeys.histfile import HistoryFile
from pointerkeys.keys import parse_key
from pointerkeys.mouse import Mouse
from pointerkeys.normal import indicator_box, normal_mode, parse_blink_interval
from pointerkeys.platform import ScrollDirection
from pointerkeys.session import Session

_NAMES = list("abcdefghijklmnopqrstuvwxyz0123456789") + [
    ",", ".", "-", "/", ";", "$", "esc", "backspace"]
_CODES = {n: i + 1 for i, n in enumerate(_NAMES)}

W, H = 1920, 1080


class FakePlatform:
    def __init__(self, events=()):
        self.events = list(events)
        self.pos = [100, 200]
        self.clicks = []
        self.downs = []
        self.ups = []
        self.scrolls = []
        self.copies = 0
        self.grabbed = False
        self.hidden = False

    def monitor_file(self, path): pass
    def commit(self): pass
    def copy_selection(self): self.copies += 1
    def hint_draw(self, screen, hints): pass
    def init_hint(self, bg, fg, radius, font): pass
    def input_grab_keyboard(self): self.grabbed = True
    def input_ungrab_keyboard(self): self.grabbed = False

    def input_lookup_code(self, name):
        if len(name) == 1 and name.isupper():
            return _CODES.get(name.lower(), 0), True
        return _CODES.get(name, 0), False

    def input_lookup_name(self, code, shifted):
        if not 1 <= code <= len(_NAMES):
            return None
        name = _NAMES[code - 1]
        return name.upper() if shifted and name.isalpha() and len(name) == 1 else name

    def input_next_event(self, timeout):
        if not self.events:
            raise RuntimeError("script exhausted")
        return self.events.pop(0)

    def input_wait(self, events): raise RuntimeError("unused")
    def mouse_click(self, b): self.clicks.append(b)
    def mouse_down(self, b): self.downs.append(b)
    def mouse_up(self, b): self.ups.append(b)
    def mouse_get_position(self): return "scr", self.pos[0], self.pos[1]
    def mouse_hide(self): self.hidden = True
    def mouse_show(self): self.hidden = False
    def mouse_move(self, screen, x, y): self.pos = [x, y]
    def screen_clear(self, screen): pass
    def screen_draw_box(self, screen, x, y, w, h, color): pass
    def screen_get_dimensions(self, screen): return W, H
    def screen_list(self): return ["scr"]
    def scroll(self, direction): self.scrolls.append(direction)


def key(platform, text, pressed=True):
    return dataclasses.replace(parse_key(platform, text), pressed=pressed)


def make_session(tmp_path, script_fn, clock=None):
    platform = FakePlatform()
    platform.events = script_fn(platform)
    config = Config(platform)
    config.load(str(tmp_path / "missing.conf"))
    mouse = Mouse(platform, config, clock or (lambda: 0))
    session = Session(platform=platform, config=config, mouse=mouse,
                      histfile=HistoryFile(str(tmp_path / "hist")), out=io.StringIO())
    return session, platform


def test_blink_interval_single_value_used_twice():
    assert parse_blink_interval("300") == (300, 300)


def test_blink_interval_two_values():
    assert parse_blink_interval("500 250") == (500, 250)


def test_blink_interval_default_zero():
    assert parse_blink_interval("0") == (0, 0)


def test_blink_interval_invalid():
    with pytest.raises(ValueError):
        parse_blink_interval("")


def test_indicator_topleft():
    assert indicator_box("topleft", W, H, 12) == (10, 10, 12, 12)


def test_indicator_none():
    assert indicator_box("none", W, H, 12) is None


def test_indicator_bottomright_touches_margin():
    x, y, w, h = indicator_box("bottomright", W, H, 12)
    assert x + w + 10 == W and y + h + 10 == H


def test_exit_key_returns_event_and_releases(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, "esc")])
    ev = normal_mode(session)
    assert session.config.match(ev, "exit") == 1
    assert not platform.grabbed and not platform.hidden


def test_start_event_used_first(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [])
    start = key(platform, "x")
    assert normal_mode(session, start) == start


def test_top_moves_to_top(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, "H"), key(p, "esc")])
    normal_mode(session)
    assert platform.pos == [100, session.config.get_int("cursor_size") // 2]


def test_start_moves_to_left_edge(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, "0"), key(p, "esc")])
    normal_mode(session)
    assert platform.pos == [1, 200]


def test_button_clicks_and_records(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, "m"), key(p, "esc")])
    normal_mode(session)
    assert platform.clicks == [1]
    assert session.histfile.read() == [(100, 200)]
    assert session.history.current() == (100, 200)


def test_oneshot_button_exits_with_button(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, ",")])
    with pytest.raises(SystemExit) as info:
        normal_mode(session, None, True)
    assert info.value.code == 2
    assert session.out.getvalue() == "100 200\n"


def test_oneshot_buttons_click_then_leave(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, "n"), None])
    ev = normal_mode(session)
    assert platform.clicks == [1]
    assert session.config.match(ev, "oneshot_buttons") == 1


def test_print_reports_position_and_key(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, "p"), key(p, "esc")])
    normal_mode(session)
    assert session.out.getvalue() == "100 200 p\n"


def test_drag_toggles_button(tmp_path):
    session, platform = make_session(
        tmp_path, lambda p: [key(p, "v"), key(p, "v"), key(p, "esc")])
    normal_mode(session)
    assert platform.downs == [1] and platform.ups == [1]


def test_copy_and_exit(tmp_path):
    session, platform = make_session(tmp_path, lambda p: [key(p, "c")])
    assert normal_mode(session) is None
    assert platform.copies == 1 and platform.ups == [1]


def test_history_back_and_forward(tmp_path):
    session, platform = make_session(
        tmp_path, lambda p: [key(p, "H"), key(p, "C-o")])
    session.history.add(100, 200)
    platform.events.append(key(platform, "esc"))
    normal_mode(session)
    assert platform.pos == [100, 200]

    top = session.config.get_int("cursor_size") // 2
    platform.events = [key(platform, "C-i"), key(platform, "esc")]
    normal_mode(session)
    assert platform.pos == [100, top]


def test_scroll_down_emits_down_steps(tmp_path):
    ticks = iter(range(0, 10_000_000, 10_000))
    session, platform = make_session(
        tmp_path,
        lambda p: [key(p, "e"), None, None, None, key(p, "e", pressed=False), key(p, "esc")],
        clock=lambda: next(ticks))
    normal_mode(session)
    assert platform.scrolls
    assert set(platform.scrolls) == {ScrollDirection.DOWN}