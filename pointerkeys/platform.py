"""Shared types and the interface every display backend provides."""

from __future__ import annotations

import enum
import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol

# Modifier masks used by the X protocol in key and button state fields.
_X_SHIFT_MASK = 1 << 0
_X_CONTROL_MASK = 1 << 2
_X_MOD1_MASK = 1 << 3
_X_MOD4_MASK = 1 << 6


class Mod(enum.IntFlag):
    """Keyboard modifiers carried by an input event."""

    SHIFT = 1
    CONTROL = 2
    ALT = 4
    META = 8

    @classmethod
    def from_x_state(cls, state: int) -> "Mod":
        """Convert an X modifier state mask into modifiers."""
        mods = cls(0)
        if state & _X_SHIFT_MASK:
            mods |= cls.SHIFT
        if state & _X_CONTROL_MASK:
            mods |= cls.CONTROL
        if state & _X_MOD1_MASK:
            mods |= cls.ALT
        if state & _X_MOD4_MASK:
            mods |= cls.META
        return mods

    def to_x_state(self) -> int:
        """Convert modifiers into an X modifier state mask."""
        state = 0
        if self & Mod.CONTROL:
            state |= _X_CONTROL_MASK
        if self & Mod.SHIFT:
            state |= _X_SHIFT_MASK
        if self & Mod.META:
            state |= _X_MOD4_MASK
        if self & Mod.ALT:
            state |= _X_MOD1_MASK
        return state

    @classmethod
    def for_keysym(cls, keysym: str) -> "Mod":
        """Return the modifier a modifier key's keysym name stands for."""
        return _KEYSYM_MODIFIERS.get(keysym, cls(0))


_KEYSYM_MODIFIERS = {
    "Control_L": Mod.CONTROL,
    "Control_R": Mod.CONTROL,
    "Meta_L": Mod.META,
    "Meta_R": Mod.META,
    "Alt_L": Mod.ALT,
    "Alt_R": Mod.ALT,
    "Shift_L": Mod.SHIFT,
    "Shift_R": Mod.SHIFT,
}


class ScrollDirection(enum.Enum):
    """Direction of a scroll step."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def button(self) -> int:
        """The X pointer button that produces this scroll step."""
        return {
            ScrollDirection.UP: 4,
            ScrollDirection.DOWN: 5,
            ScrollDirection.LEFT: 6,
            ScrollDirection.RIGHT: 7,
        }[self]


@dataclass(frozen=True)
class InputEvent:
    """A key press or release."""

    code: int
    mods: Mod = Mod(0)
    pressed: bool = True


@dataclass(frozen=True)
class Hint:
    """A labelled box drawn on a screen."""

    x: int
    y: int
    w: int
    h: int
    label: str


class Platform(Protocol):
    """Operations a display backend offers to the modes."""

    def monitor_file(self, path: str) -> None:
        """Watch a file so that input_wait returns when it changes."""

    def commit(self) -> None:
        """Flush pending drawing and pointer operations."""

    def copy_selection(self) -> None:
        """Copy the current selection to the clipboard."""

    def hint_draw(self, screen: Any, hints: Sequence[Hint]) -> None:
        """Draw the given hints on a screen."""

    def init_hint(self, bgcolor: str, fgcolor: str, border_radius: int, font: str) -> None:
        """Set the style used to draw hints."""

    def input_grab_keyboard(self) -> None:
        """Route all keyboard input to this program."""

    def input_ungrab_keyboard(self) -> None:
        """Release a keyboard grab."""

    def input_lookup_code(self, name: str) -> tuple[int, bool]:
        """Return the key code for a key name and whether it needs shift; code 0 if unknown."""

    def input_lookup_name(self, code: int, shifted: bool) -> Optional[str]:
        """Return the key name for a code, or None."""

    def input_next_event(self, timeout: int) -> Optional[InputEvent]:
        """Wait up to timeout milliseconds (0: forever) for the next key event."""

    def input_wait(self, events: Iterable[InputEvent]) -> Optional[InputEvent]:
        """Wait for one of the given key combinations; None if a watched file changed."""

    def mouse_click(self, button: int) -> None:
        """Click a pointer button."""

    def mouse_down(self, button: int) -> None:
        """Press a pointer button."""

    def mouse_up(self, button: int) -> None:
        """Release a pointer button."""

    def mouse_get_position(self) -> tuple[Any, int, int]:
        """Return the screen under the pointer and the pointer's position on it."""

    def mouse_hide(self) -> None:
        """Hide the system pointer."""

    def mouse_show(self) -> None:
        """Show the system pointer."""

    def mouse_move(self, screen: Any, x: int, y: int) -> None:
        """Move the pointer to a position on a screen."""

    def screen_clear(self, screen: Any) -> None:
        """Remove everything drawn on a screen."""

    def screen_draw_box(self, screen: Any, x: int, y: int, w: int, h: int, color: str) -> None:
        """Draw a filled box on a screen."""

    def screen_get_dimensions(self, screen: Any) -> tuple[int, int]:
        """Return a screen's width and height."""

    def screen_list(self) -> list[Any]:
        """Return all screens."""

    def scroll(self, direction: ScrollDirection) -> None:
        """Scroll one step in a direction."""


def select_backend(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return "wayland" when a Wayland display is set in the environment, else "x"."""
    if environ is None:
        environ = os.environ
    return "wayland" if "WAYLAND_DISPLAY" in environ else "x"