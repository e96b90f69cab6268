import io

from pointerkeys.config import Config
from pointerkeys.histfile import HistoryFile
from pointerkeys.hints import (
    HintModes, filter_hints, generate_fullscreen_hints, hint_size,
    parse_hint_spec, sift_hints,
)
from pointerkeys.platform import Hint, InputEvent, Mod
from pointerkeys.session import Session

_NAMED = {"esc": 300, "backspace": 301}


class FakePlatform:
    def __init__(self, events, w=1000, h=1000, pos=(500, 500)):
        self.events = list(events)
        self.w, self.h = w, h
        self.pos = pos
        self.moves = []
        self.drawn = []

    def input_lookup_code(self, name):
        if name in _NAMED:
            return _NAMED[name], False
        if len(name) == 1:
            return ord(name.lower()), name.isupper()
        return 0, False

    def input_lookup_name(self, code, shifted):
        for k, v in _NAMED.items():
            if v == code:
                return k
        ch = chr(code)
        return ch.upper() if shifted else ch

    def input_next_event(self, timeout):
        return self.events.pop(0) if self.events else InputEvent(_NAMED["esc"])

    def mouse_get_position(self):
        return "scr", self.pos[0], self.pos[1]

    def screen_get_dimensions(self, screen):
        return self.w, self.h

    def mouse_move(self, screen, x, y):
        self.pos = (x, y)
        self.moves.append((x, y))

    def hint_draw(self, screen, hints):
        self.drawn.append(list(hints))

    def screen_clear(self, screen):
        pass

    def input_grab_keyboard(self):
        pass

    def input_ungrab_keyboard(self):
        pass

    def mouse_hide(self):
        pass

    def mouse_show(self):
        pass

    def commit(self):
        pass


def modes(events, **kw):
    p = FakePlatform(events)
    c = Config(p)
    c.load("/nonexistent/config")
    s = Session(p, c, **kw)
    return p, s, HintModes(s)


def press(ch):
    return InputEvent(ord(ch), Mod(0), True)


def test_hint_size_uses_longer_side_for_width():
    assert hint_size(500, 1000, 20) == hint_size(1000, 500, 20)
    w, h = hint_size(1000, 500, 20)
    assert w >= h


def test_fullscreen_hints_labels_and_count():
    hints = generate_fullscreen_hints("abc", 900, 900, 20)
    assert len(hints) == 9
    assert [h.label for h in hints[:3]] == ["aa", "ab", "ac"]
    assert len({(h.x, h.y) for h in hints}) == 9


def test_sift_hints_limited_by_chars():
    assert len(sift_hints(100, 100, 1000, "abcd", 1, 20, 3)) == 4
    labels = {h.label for h in sift_hints(100, 100, 1000, "abcdefghi", 1, 20, 3)}
    assert labels == set("abcdefghi")


def test_filter_hints():
    hints = [Hint(0, 0, 1, 1, "ab"), Hint(0, 0, 1, 1, "ba")]
    assert filter_hints(hints, "a") == [hints[0]]
    assert filter_hints(hints, "") == hints


def test_parse_hint_spec_centres_and_stops():
    hints = parse_hint_spec(["foo 10 20\n", "bar 30 40\n", "bad x 1\n"], 4, 6)
    assert hints == [Hint(8, 17, 4, 6, "foo"), Hint(28, 37, 4, 6, "bar")]


def test_select_moves_to_chosen_hint():
    p, s, m = modes([press("b")])
    hints = [Hint(0, 0, 10, 10, "a"), Hint(100, 200, 10, 10, "b")]
    assert m.select("scr", hints) == 0
    assert p.pos == (105, 205)
    assert s.last_selected_hint == "b"


def test_select_exit_returns_minus_one():
    p, s, m = modes([InputEvent(_NAMED["esc"])])
    assert m.select("scr", [Hint(0, 0, 1, 1, "a"), Hint(0, 0, 1, 1, "b")]) == -1
    assert p.moves == []


def test_undo_then_select():
    p, s, m = modes([press("a"), InputEvent(_NAMED["backspace"]), press("b"), press("b")])
    hints = [Hint(0, 0, 2, 2, "aa"), Hint(0, 0, 2, 2, "ab"), Hint(50, 50, 2, 2, "bb")]
    assert m.select("scr", hints) == 0
    assert s.last_selected_hint == "b"
    assert p.pos == (51, 51)


def test_full_records_history():
    p, s, m = modes([press("a"), press("a")])
    assert m.full(False) == 0
    assert s.history.current() == (500, 500)
    assert s.last_selected_hint == "aa"


def test_history_mode_uses_file(tmp_path):
    hf = HistoryFile(str(tmp_path / "h"))
    hf.add(300, 300)
    hf.add(700, 700)
    p, s, m = modes([press("b")], histfile=hf)
    assert m.history() == 0
    assert p.pos == (700, 700)


def test_spec_mode_reads_stream():
    p, s, m = modes([press("q")])
    assert m.spec(io.StringIO("q 250 250\nr 10 10\n")) == 0
    assert p.pos == (250, 250)