"""Enumerations of the i3bar protocol and their string conversions."""

from __future__ import annotations

import enum
from collections.abc import Iterable


class TextAlign(enum.Enum):
    """Alignment of text inside a block."""

    NONE = ""
    CENTER = "center"
    RIGHT = "right"
    LEFT = "left"


class Markup(enum.Enum):
    """Markup language of a block's text."""

    NONE = ""
    PANGO = "pango"


class ClickModifiers(enum.Flag):
    """Keyboard modifiers held during a click."""

    NONE = 0
    MOD1 = enum.auto()
    MOD2 = enum.auto()
    MOD3 = enum.auto()
    MOD4 = enum.auto()
    MOD5 = enum.auto()
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    LOCK = enum.auto()


_MODIFIER_NAMES = {
    "Mod1": ClickModifiers.MOD1,
    "Mod2": ClickModifiers.MOD2,
    "Mod3": ClickModifiers.MOD3,
    "Mod4": ClickModifiers.MOD4,
    "Mod5": ClickModifiers.MOD5,
    "Shift": ClickModifiers.SHIFT,
    "Control": ClickModifiers.CONTROL,
    "Lock": ClickModifiers.LOCK,
}


def to_string(value: TextAlign | Markup) -> str:
    """Return the protocol string for a text alignment or markup value."""
    if not isinstance(value, (TextAlign, Markup)):
        raise TypeError(f"no string form for {value!r}")
    return value.value


def click_modifiers_from_string(value: str | Iterable[str]) -> ClickModifiers:
    """Parse one modifier name, or combine a sequence of them; unknown names count as none."""
    if isinstance(value, str):
        return _MODIFIER_NAMES.get(value, ClickModifiers.NONE)
    result = ClickModifiers.NONE
    for name in value:
        result |= click_modifiers_from_string(name)
    return result