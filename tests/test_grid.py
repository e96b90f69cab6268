from pointerkeys.config import Config
from pointerkeys.grid import grid_lines, grid_mode
from pointerkeys.mouse import Mouse
from pointerkeys.platform import InputEvent, Mod

_NAMED = {"esc": 300, "backspace": 301}


class FakePlatform:
    def __init__(self, events, w=400, h=400):
        self.events = list(events)
        self.w, self.h = w, h
        self.pos = (0, 0)
        self.moves = []
        self.boxes = []
        self.grabbed = False

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

    def screen_draw_box(self, screen, x, y, w, h, color):
        self.boxes.append((x, y, w, h, color))

    def screen_clear(self, screen):
        self.boxes = []

    def input_grab_keyboard(self):
        self.grabbed = True

    def input_ungrab_keyboard(self):
        self.grabbed = False

    def mouse_hide(self):
        pass

    def mouse_show(self):
        pass

    def commit(self):
        pass


def run(events):
    p = FakePlatform(events)
    c = Config(p)
    c.load("/nonexistent/config")
    m = Mouse(p, c, lambda: 0)
    m.configure()
    return p, grid_mode(p, c, m)


def test_grid_lines_count_and_bounds():
    boxes = grid_lines(2, 3, 2, 10, 20, 100, 80)
    assert len(boxes) == (2 + 1) + (3 + 1)
    assert boxes[0] == (10, 20, 100, 2)
    for bx, by, bw, bh in boxes:
        assert bx + bw <= 10 + 100
        assert by + bh <= 20 + 80


def test_grid_lines_too_small():
    assert grid_lines(50, 2, 2, 0, 0, 100, 100) == []


def test_grid_key_selects_top_left_cell():
    p, ev = run([InputEvent(ord("u"))])
    assert p.moves[0] == (200, 200)
    assert p.moves[1] == (100, 100)
    assert ev.code == 300
    assert p.grabbed is False


def test_button_ends_grid():
    p, ev = run([InputEvent(ord("m"))])
    assert ev.code == ord("m")