"""Configuration options: defaults, config-file parsing and key matching."""

from __future__ import annotations

import enum
import re
import sys
from dataclasses import dataclass
from typing import Iterable, Optional

from .keys import KeyMatcher, KeyNameError, parse_key
from .platform import InputEvent, Platform


class OptionType(enum.Enum):
    """The kind of value an option holds."""

    KEY = "key"
    BUTTON = "button"
    INT = "int"
    STRING = "string"


@dataclass(frozen=True)
class Option:
    """A recognised option with its default value."""

    key: str
    default: str
    description: str
    type: OptionType


_K, _B, _I, _S = OptionType.KEY, OptionType.BUTTON, OptionType.INT, OptionType.STRING

OPTIONS: tuple[Option, ...] = (
    Option("hint_activation_key", "A-M-x", "Activates hint mode.", _K),
    Option("hint2_activation_key", "A-M-X", "Activate two pass hint mode.", _K),
    Option("grid_activation_key", "A-M-g", "Activates grid mode and allows for further manipulation of the pointer using the mapped keys.", _K),
    Option("history_activation_key", "A-M-h", "Activate history mode.", _K),
    Option("screen_activation_key", "A-M-s", "Activate (s)creen selection mode.", _K),
    Option("activation_key", "A-M-c", "Activate normal movement mode (manual (c)ursor movement).", _K),
    Option("hint_oneshot_key", "A-M-x", "Activate hint mode and exit upon selection.", _K),
    Option("hint2_oneshot_key", "A-M-X", "Activate two pass hint mode and exit upon selection.", _K),
    Option("exit", "esc", "Exit the currently active session.", _K),
    Option("drag", "v", "Toggle drag mode (mnemonic (v)isual mode).", _K),
    Option("copy_and_exit", "c", "Send the copy key and exit (useful in combination with v).", _K),
    Option("accelerator", "a", "Increase the acceleration of the pointer while held.", _K),
    Option("decelerator", "d", "Decrease the speed of the pointer while held.", _K),
    Option("buttons", "m , .", "A space separated list of mouse buttons (2 is middle click).", _B),
    Option("drag_button", "1", "The mouse buttton used for dragging.", _I),
    Option("oneshot_buttons", "n - /", "Oneshot mouse buttons (deactivate on click).", _B),
    Option("print", "p", "Print the current mouse coordinates to stdout (useful for scripts).", _K),
    Option("history", ";", "Activate hint history mode while in normal mode.", _K),
    Option("hint", "x", "Activate hint mode while in normal mode (mnemonic: x marks the spot?).", _K),
    Option("hint2", "X", "Activate two pass hint mode.", _K),
    Option("grid", "g", "Activate (g)rid mode while in normal mode.", _K),
    Option("screen", "s", "Activate (s)creen selection while in normal mode.", _K),
    Option("left", "h", "Move the cursor left in normal mode.", _K),
    Option("down", "k", "Move the cursor down in normal mode.", _K),
    Option("up", "j", "Move the cursor up in normal mode.", _K),
    Option("right", "l", "Move the cursor right in normal mode.", _K),
    Option("top", "H", "Moves the cursor to the top of the screen in normal mode.", _K),
    Option("middle", "M", "Moves the cursor to the middle of the screen in normal mode.", _K),
    Option("bottom", "L", "Moves the cursor to the bottom of the screen in normal mode.", _K),
    Option("start", "0", "Moves the cursor to the leftmost corner of the screen in normal mode.", _K),
    Option("end", "$", "Moves the cursor to the rightmost corner of the screen in normal mode.", _K),
    Option("scroll_down", "e", "Scroll down key.", _K),
    Option("scroll_up", "r", "Scroll up key.", _K),
    Option("cursor_color", "#FF4500", "The color of the pointer in normal mode (rgba hex value).", _S),
    Option("cursor_size", "7", "The height of the pointer in normal mode.", _I),
    Option("repeat_interval", "20", "The number of milliseconds before repeating a movement event.", _I),
    Option("speed", "220", "Pointer speed in pixels/second.", _I),
    Option("max_speed", "1600", "The maximum pointer speed.", _I),
    Option("decelerator_speed", "50", "Pointer speed while decelerator is depressed.", _I),
    Option("acceleration", "700", "Pointer acceleration in pixels/second^2.", _I),
    Option("accelerator_acceleration", "2900", "Pointer acceleration while the accelerator is depressed.", _I),
    Option("oneshot_timeout", "300", "The length of time in milliseconds to wait for a second click after a oneshot key has been pressed.", _I),
    Option("hist_hint_size", "2", "History hint size as a percentage of screen height.", _I),
    Option("grid_nr", "2", "The number of rows in the grid.", _I),
    Option("grid_nc", "2", "The number of columns in the grid.", _I),
    Option("hist_back", "C-o", "Move to the last position in the history stack.", _K),
    Option("hist_forward", "C-i", "Move to the next position in the history stack.", _K),
    Option("grid_up", "w", "Move the grid up.", _K),
    Option("grid_left", "a", "Move the grid left.", _K),
    Option("grid_down", "s", "Move the grid down.", _K),
    Option("grid_right", "d", "Move the grid right.", _K),
    Option("grid_cut_up", "W", "Cut the grid up.", _K),
    Option("grid_cut_left", "A", "Cut the grid left.", _K),
    Option("grid_cut_down", "S", "Cut the grid down.", _K),
    Option("grid_cut_right", "D", "Cut the grid right.", _K),
    Option("grid_keys", "u i j k", "A sequence of comma delimited keybindings which are ordered bookwise with respect to grid position.", _K),
    Option("grid_exit", "c", "Exit grid mode and return to normal mode.", _K),
    Option("grid_size", "4", "The thickness of grid lines in pixels.", _I),
    Option("grid_border_size", "0", "The thickness of the grid border in pixels.", _I),
    Option("grid_color", "#1c1c1e", "The color of the grid.", _S),
    Option("grid_border_color", "#ffffff", "The color of the grid border.", _S),
    Option("hint_bgcolor", "#1c1c1e", "The background hint color.", _S),
    Option("hint_fgcolor", "#a1aba7", "The foreground hint color.", _S),
    Option("hint_chars", "abcdefghijklmnopqrstuvwxyz", "The character set from which hints are generated. The total number of hints is the square of the size of this string. It may be desirable to increase this for larger screens or trim it to increase gaps between hints.", _S),
    Option("hint_font", "Arial", "The font name used by hints. Note: This is platform specific, in X it corresponds to a valid xft font name, on macos it corresponds to a postscript name.", _S),
    Option("hint_size", "20", "Hint size (range: 1-1000)", _I),
    Option("hint_border_radius", "3", "Border radius.", _I),
    Option("hint_exit", "esc", "The exit key used for hint mode.", _K),
    Option("hint_undo", "backspace", "undo last selection step in one of the hint based modes.", _K),
    Option("hint_undo_all", "C-u", "undo all selection steps in one of the hint based modes.", _K),
    Option("hint2_chars", "hjkl;asdfgqwertyuiopzxcvb", "The character set used for the second hint selection, should consist of at least hint2_grid_size^2 characters.", _S),
    Option("hint2_size", "20", "The size of hints in the secondary grid (range: 1-1000).", _I),
    Option("hint2_gap_size", "1", "The spacing between hints in the secondary grid. (range: 1-1000)", _I),
    Option("hint2_grid_size", "3", "The size of the secondary grid.", _I),
    Option("screen_chars", "jkl;asdfg", "The characters used for screen selection.", _S),
    Option("scroll_speed", "350", "Initial scroll speed in units/second (unit varies by platform).", _I),
    Option("scroll_max_speed", "9000", "Maximum scroll speed.", _I),
    Option("scroll_acceleration", "3000", "Scroll acceleration in units/second^2.", _I),
    Option("scroll_deceleration", "-3400", "Scroll deceleration.", _I),
    Option("indicator", "none", "Specifies an optional visual indicator to be displayed while normal mode is active, must be one of: topright, topleft, bottomright, bottomleft, none", _S),
    Option("indicator_color", "#00ff00", "The color of the visual indicator color.", _S),
    Option("indicator_size", "12", "The size of the visual indicator in pixels.", _I),
    Option("normal_system_cursor", "0", "If set to non-zero, use the system cursor instead of the internal one.", _I),
    Option("normal_blink_interval", "0", "If set to non-zero, the blink interval of the normal mode cursor in miliseconds. If two values are supplied, the first corresponds to the time the cursor is visible, and the second corresponds to the amount of time it is invisible", _S),
)

_OPTION_TYPES = {opt.key: opt.type for opt in OPTIONS}

_ATOI = re.compile(r"\s*([+-]?\d+)")


class ConfigError(ValueError):
    """An option is unknown or has an invalid value."""


def option_type(key: str) -> Optional[OptionType]:
    """Return the type of a recognised option, or None."""
    return _OPTION_TYPES.get(key)


def describe_options() -> list[str]:
    """Return one line per option with its description and default."""
    return [f"{opt.key}: {opt.description} (default: {opt.default})" for opt in OPTIONS]


def _atoi(text: str) -> int:
    m = _ATOI.match(text)
    return int(m.group(1)) if m else 0


def _tokens(value: str) -> list[str]:
    return [tok for tok in value.split(" ") if tok]


@dataclass
class _Entry:
    key: str
    value: str
    type: OptionType
    whitelisted: bool = False


class Config:
    """Option values, where later assignments shadow earlier ones."""

    def __init__(self, platform: Platform) -> None:
        self.platform = platform
        self._entries: list[_Entry] = []
        self._matcher = KeyMatcher(platform)

    def _newest_first(self) -> Iterable[_Entry]:
        return reversed(self._entries)

    def load(self, path: str) -> None:
        """Reset to the defaults, then apply a config file ("-" reads stdin).

        A file that cannot be opened leaves only the defaults.
        """
        self._entries = []
        for opt in OPTIONS:
            self.add(opt.key, opt.default)

        if path == "-":
            self._read_lines(sys.stdin)
            return
        try:
            fh = open(path, encoding="utf-8", errors="replace", newline="")
        except OSError:
            return
        with fh:
            self._read_lines(fh)

    def _read_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            if line.startswith("#") or ":" not in line:
                continue
            key, _, value = line.partition(":")
            value = value.lstrip(" ").rstrip("\r\n")
            self.add(key, value)

    def add(self, key: str, value: str) -> None:
        """Assign a value to an option; unknown options are ignored."""
        kind = option_type(key)
        if kind is None:
            return

        if kind is OptionType.INT:
            for i, ch in enumerate(value):
                if not ch.isdigit() and not (i == 0 and ch == "-"):
                    raise ConfigError(f"{value} must be a valid int")
        elif kind in (OptionType.KEY, OptionType.BUTTON):
            self._validate_keys(value)

        self._entries.append(_Entry(key, value, kind))

    def _validate_keys(self, value: str) -> None:
        if value == "unbind":
            return
        for tok in _tokens(value):
            try:
                parse_key(self.platform, tok)
            except KeyNameError as err:
                if err.modifier:
                    raise ConfigError(str(err)) from err
                print(f"ERROR: {tok} is not a valid key name", file=sys.stderr)
                return

    def get(self, key: str) -> str:
        """Return the current value of an option."""
        for entry in self._newest_first():
            if entry.key == key:
                return entry.value
        raise ConfigError(f"unrecognized config entry: {key}")

    def get_int(self, key: str) -> int:
        """Return the current value of an option as an integer."""
        return _atoi(self.get(key))

    def whitelist(self, names: Optional[Iterable[str]]) -> None:
        """Restrict matching to the named key options (None: all of them)."""
        allowed = None if names is None else set(names)
        for entry in self._entries:
            entry.whitelisted = entry.type in (OptionType.KEY, OptionType.BUTTON) and (
                allowed is None or entry.key in allowed
            )

    def _key_index(self, value: str, ev: InputEvent) -> tuple[int, bool]:
        for idx, tok in enumerate(_tokens(value), 1):
            ret = self._matcher.match(ev, tok)
            if ret:
                return idx, ret == 2
        return 0, False

    def match(self, ev: Optional[InputEvent], key: str) -> int:
        """Return the 1-based index of the key in option `key` that ev matches, or 0.

        A more recent whitelisted option bound to the same key shadows
        `key`, in which case 0 is returned.
        """
        for entry in self._newest_first():
            if entry.key == key and entry.value == "unbind":
                return 0
            if not entry.whitelisted:
                continue
            idx, exact = self._key_index(entry.value, ev)
            if not idx:
                continue
            if (entry.type is OptionType.KEY and exact) or entry.type is OptionType.BUTTON:
                return idx if entry.key == key else 0
        return 0