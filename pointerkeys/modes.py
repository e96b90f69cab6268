"""Switching between modes, and the daemon waiting for activation keys."""

from __future__ import annotations

import enum
import sys
from typing import Optional

from .grid import grid_mode
from .hints import HintModes, hint_size
from .keys import KeyNameError, event_to_str, parse_key
from .normal import normal_mode
from .platform import Hint, InputEvent
from .session import Session


class Mode(enum.Enum):
    """The interactive modes."""

    NORMAL = "normal"
    HINT = "hint"
    HINT2 = "hint2"
    GRID = "grid"
    SCREEN_SELECTION = "screen_selection"
    HISTORY = "history"
    HINTSPEC = "hintspec"


ACTIVATION_KEYS = (
    "activation_key",
    "hint_activation_key",
    "grid_activation_key",
    "hint_oneshot_key",
    "screen_activation_key",
    "hint2_activation_key",
    "hint2_oneshot_key",
    "history_activation_key",
)

_ACTIVATIONS = (
    ("activation_key", Mode.NORMAL, False),
    ("grid_activation_key", Mode.GRID, False),
    ("hint_activation_key", Mode.HINT, False),
    ("hint2_activation_key", Mode.HINT2, False),
    ("screen_activation_key", Mode.SCREEN_SELECTION, False),
    ("history_activation_key", Mode.HISTORY, False),
    ("hint2_oneshot_key", Mode.HINT2, True),
    ("hint_oneshot_key", Mode.HINT, True),
)

_NORMAL_EXITS = (
    ("history", Mode.HISTORY),
    ("hint", Mode.HINT),
    ("hint2", Mode.HINT2),
    ("grid", Mode.GRID),
    ("screen", Mode.SCREEN_SELECTION),
)


def _screen_selection(session: Session) -> None:
    """Label each screen with a screen_chars character and move to the chosen one."""
    platform, config = session.platform, session.config
    choices = list(zip(config.get("screen_chars"), platform.screen_list()))
    for label, scr in choices:
        sw, sh = platform.screen_get_dimensions(scr)
        w, h = hint_size(sw, sh, config.get_int("hint_size"))
        platform.hint_draw(scr, [Hint(sw // 2 - w // 2, sh // 2 - h // 2, w, h, label)])
    platform.commit()
    platform.input_grab_keyboard()
    config.whitelist(("hint_exit",))
    try:
        while True:
            ev = platform.input_next_event(0)
            if ev is None or not ev.pressed:
                continue
            if config.match(ev, "hint_exit"):
                return
            name = event_to_str(platform, ev)
            for label, scr in choices:
                if name == label:
                    sw, sh = platform.screen_get_dimensions(scr)
                    platform.mouse_move(scr, sw // 2, sh // 2)
                    return
    finally:
        platform.input_ungrab_keyboard()
        for _, scr in choices:
            platform.screen_clear(scr)
        platform.commit()


def mode_loop(session: Session, initial_mode: Mode = Mode.NORMAL, oneshot: bool = False,
              record_history: bool = False) -> int:
    """Run modes starting from initial_mode until the user leaves.

    Returns the oneshot button that ended the session, or 0. In oneshot
    mode the final position is printed (with the hint label in hintspec mode).
    """
    platform, config = session.platform, session.config
    hints = HintModes(session)
    mode = initial_mode
    ev: Optional[InputEvent] = None

    while True:
        btn = 0
        config.whitelist(None)

        if mode is Mode.HISTORY:
            if hints.history() < 0:
                return 0
            ev = None
            mode = Mode.NORMAL
        elif mode is Mode.HINTSPEC:
            hints.spec(sys.stdin)
        elif mode is Mode.NORMAL:
            ev = normal_mode(session, ev, oneshot)
            for key, target in _NORMAL_EXITS:
                if config.match(ev, key):
                    mode = target
                    break
            else:
                rc = config.match(ev, "oneshot_buttons")
                if rc or ev is None:
                    return rc
                if config.match(ev, "exit"):
                    return 0
        elif mode in (Mode.HINT, Mode.HINT2):
            if hints.full(mode is Mode.HINT2) < 0:
                return 0
            ev = None
            mode = Mode.NORMAL
        elif mode is Mode.GRID:
            ev = grid_mode(platform, config, session.mouse)
            if config.match(ev, "grid_exit"):
                ev = None
            mode = Mode.NORMAL
        elif mode is Mode.SCREEN_SELECTION:
            _screen_selection(session)
            mode = Mode.NORMAL
            ev = None

        if oneshot and (initial_mode is not Mode.NORMAL
                        or (btn := config.match(ev, "buttons"))):
            _, x, y = platform.mouse_get_position()
            if record_history and session.histfile is not None:
                session.histfile.add(x, y)
            if mode is Mode.HINTSPEC:
                print(f"{x} {y} {session.last_selected_hint}", file=session.stream)
            else:
                print(f"{x} {y}", file=session.stream)
            session.stream.flush()
            return btn


def activation_mode(session: Session, ev: Optional[InputEvent]) -> Optional[tuple[Mode, bool]]:
    """Return the mode an activation event starts and whether it is a oneshot hint, or None."""
    config = session.config
    config.whitelist(ACTIVATION_KEYS)
    for key, mode, oneshot in _ACTIVATIONS:
        if config.match(ev, key):
            return mode, oneshot
    return None


def reload_config(session: Session, path: str) -> list[InputEvent]:
    """Reload the config file and return the activation key events to wait for."""
    platform, config = session.platform, session.config
    config.load(path)
    HintModes(session).init_style()
    session.mouse.configure()

    events = []
    for name in ACTIVATION_KEYS:
        try:
            ev = parse_key(platform, config.get(name))
        except KeyNameError as err:
            if err.modifier:
                raise
            continue
        if ev is not None:
            events.append(ev)
    return events


def daemon_loop(session: Session, config_path: str) -> None:
    """Wait for activation keys forever, reloading the config whenever it changes."""
    platform = session.platform
    platform.monitor_file(config_path)
    events = reload_config(session, config_path)

    while True:
        ev = platform.input_wait(events)
        if ev is None:
            events = reload_config(session, config_path)
            continue

        chosen = activation_mode(session, ev)
        if chosen is None:
            continue
        mode, oneshot = chosen
        if oneshot:
            HintModes(session).full(mode is Mode.HINT2)
            continue
        mode_loop(session, mode, False, True)