"""Key names: parsing, printing and matching against input events."""

from __future__ import annotations

from typing import Optional

from .platform import InputEvent, Mod, Platform

_NORMALIZATION = (
    ("esc", "Escape"),
    (",", "comma"),
    (".", "period"),
    ("-", "minus"),
    ("/", "slash"),
    (";", "semicolon"),
    ("[", "bracketleft"),
    ("]", "bracketright"),
    ("'", "apostrophe"),
    ("$", "dollar"),
    ("backspace", "BackSpace"),
)

_TO_PLATFORM = dict(_NORMALIZATION)
_FROM_PLATFORM = {xname: name for name, xname in _NORMALIZATION}

_MODIFIER_PREFIXES = {
    "A": Mod.ALT,
    "M": Mod.META,
    "S": Mod.SHIFT,
    "C": Mod.CONTROL,
}


class KeyNameError(ValueError):
    """A key description names an unknown key or modifier."""

    def __init__(self, message: str, modifier: bool = False) -> None:
        super().__init__(message)
        self.modifier = modifier


def to_platform_name(name: str) -> str:
    """Translate a user-facing key name into the backend's keysym name."""
    return _TO_PLATFORM.get(name, name)


def from_platform_name(name: str) -> str:
    """Translate a backend keysym name into the user-facing key name."""
    return _FROM_PLATFORM.get(name, name)


def parse_key(platform: Platform, text: Optional[str]) -> Optional[InputEvent]:
    """Parse a description such as "A-M-x" into a pressed event.

    Returns None for an empty description. Raises KeyNameError for an
    unknown modifier or key name.
    """
    if not text:
        return None

    mods = Mod(0)
    rest = text
    while len(rest) >= 2 and rest[1] == "-":
        try:
            mods |= _MODIFIER_PREFIXES[rest[0]]
        except KeyError:
            raise KeyNameError(f"{rest} is not a valid modifier", modifier=True) from None
        rest = rest[2:]

    code = 0
    if rest:
        code, shifted = platform.input_lookup_code(rest)
        if shifted:
            mods |= Mod.SHIFT
        if not code:
            raise KeyNameError(f"{rest} is not a valid key name")

    return InputEvent(code=code, mods=mods, pressed=True)


def event_to_str(platform: Platform, ev: Optional[InputEvent]) -> str:
    """Describe an event in the form accepted by parse_key."""
    if ev is None:
        return "NULL"

    name = platform.input_lookup_name(ev.code, bool(ev.mods & Mod.SHIFT))
    prefix = ""
    if ev.mods & Mod.CONTROL:
        prefix += "C-"
    if ev.mods & Mod.ALT:
        prefix += "A-"
    if ev.mods & Mod.META:
        prefix += "M-"
    return prefix + (name if name else "UNDEFINED")


class KeyMatcher:
    """Matches events against key descriptions.

    Modifiers seen on a key press are remembered so that the matching
    release is recognised even if the modifiers changed in between.
    """

    def __init__(self, platform: Platform) -> None:
        self.platform = platform
        self._cached_mods: dict[int, Mod] = {}

    def match(self, ev: Optional[InputEvent], text: Optional[str]) -> int:
        """Return 0 for no match, 1 if only the key matches, 2 for a full match."""
        if ev is None:
            return 0

        if ev.pressed:
            mods = ev.mods
            self._cached_mods[ev.code] = ev.mods
        else:
            mods = self._cached_mods.get(ev.code, Mod(0))

        try:
            wanted = parse_key(self.platform, text)
        except KeyNameError as err:
            if err.modifier:
                raise
            return 0

        if wanted is None or wanted.code != ev.code:
            return 0
        if wanted.mods != mods:
            return 1
        return 2