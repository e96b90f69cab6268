"""Hex colour parsing and window opacity values."""

from __future__ import annotations

import string
from typing import NamedTuple, Optional

_HEX_DIGITS = set(string.hexdigits)


class ColorError(ValueError):
    """A colour string is not a 6 or 8 digit hex value."""


class RGBA(NamedTuple):
    """An 8-bit per channel colour."""

    r: int
    g: int
    b: int
    a: int = 255


def hex_to_rgba(text: Optional[str]) -> RGBA:
    """Parse "#rrggbb" or "#rrggbbaa" (the "#" is optional); alpha defaults to 255."""
    if text is None:
        raise ColorError("no colour given")
    digits = text[1:] if text.startswith("#") else text
    if len(digits) not in (6, 8):
        raise ColorError(f"{text} must have 6 or 8 hex digits")
    if not set(digits) <= _HEX_DIGITS:
        raise ColorError(f"{text} is not a hex colour")
    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    return RGBA(*channels)


def opacity_cardinal(alpha: int) -> int:
    """Scale an 8-bit alpha into the 32-bit window opacity property value."""
    return int((alpha / 255) * 0xFFFFFFFF) & 0xFFFFFFFF