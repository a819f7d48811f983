"""Keyboard input helpers for rich_picker.

Printable keys go to the search field, so navigation uses arrows, Tab and
the Ctrl-N / Ctrl-P aliases rather than vim letters.
"""

from __future__ import annotations

import readchar


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_up(key: str) -> bool:
    """Check if key is up arrow or Ctrl-P."""
    return key in (readchar.key.UP, readchar.key.CTRL_P)


def is_down(key: str) -> bool:
    """Check if key is down arrow or Ctrl-N."""
    return key in (readchar.key.DOWN, readchar.key.CTRL_N)


def is_tab(key: str) -> bool:
    return key == "\t"


def is_shift_tab(key: str) -> bool:
    return key == "\x1b[Z"


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_interrupt(key: str) -> bool:
    """Check if key is Ctrl-C."""
    return key == readchar.key.CTRL_C


def is_dropdown_toggle(key: str) -> bool:
    """Check if key opens the dropdown accessory (Ctrl-P is taken by up)."""
    return key == readchar.key.CTRL_D


def is_search_char(key: str) -> bool:
    """Check if key is a single printable character for the search field."""
    return len(key) == 1 and key.isprintable()
