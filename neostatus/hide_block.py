"""Marker text that tells the bar to hide a block."""

from __future__ import annotations

from typing import Any

_HIDDEN_BLOCK_FULL_TEXT = "\x18"


def hidden_full_text() -> str:
    """Return the full text that marks a block as hidden."""
    return _HIDDEN_BLOCK_FULL_TEXT


def is_hidden(value: Any) -> bool:
    """Return whether a string, or an object's full_text, is the hidden marker."""
    text = value if isinstance(value, str) else value.full_text
    return text == _HIDDEN_BLOCK_FULL_TEXT