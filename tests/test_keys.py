"""Tests for key helpers."""

import readchar

from rich_picker import keys


def test_navigation_aliases():
    assert keys.is_up(readchar.key.UP)
    assert keys.is_up(readchar.key.CTRL_P)
    assert keys.is_down(readchar.key.DOWN)
    assert keys.is_down(readchar.key.CTRL_N)
    assert not keys.is_down("j")


def test_enter_and_escape_variants():
    assert keys.is_enter("\r")
    assert keys.is_enter("\n")
    assert keys.is_escape("\x1b")
    assert not keys.is_escape(readchar.key.UP)


def test_tab_variants():
    assert keys.is_tab("\t")
    assert keys.is_shift_tab("\x1b[Z")
    assert not keys.is_tab("\x1b[Z")


def test_search_chars():
    assert keys.is_search_char("a")
    assert keys.is_search_char(" ")
    assert not keys.is_search_char("\t")
    assert not keys.is_search_char(readchar.key.DOWN)


def test_backspace_and_interrupt():
    assert keys.is_backspace("\x7f")
    assert keys.is_backspace("\b")
    assert keys.is_interrupt("\x03")
    assert keys.is_dropdown_toggle(readchar.key.CTRL_D)
