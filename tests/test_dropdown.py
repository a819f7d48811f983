"""Tests for the dropdown overlay controller."""

import pytest
import readchar

from rich_picker.dropdown import DropdownController
from rich_picker.types import Focus, Item


@pytest.fixture
def events(make_recorder):
    return {
        "change": make_recorder(),
        "cancel": make_recorder(),
        "focus": make_recorder(),
    }


@pytest.fixture
def dropdown(events):
    dd = DropdownController(
        on_change=events["change"],
        on_cancel=lambda: events["cancel"](None),
        on_focus_change=events["focus"],
        default_value="banana",
    )
    dd.add_section("Fruit", [Item(key="apple", title="Apple"), Item(key="banana", title="Banana")])
    dd.add_section("Vegetables", [Item(key="carrot", title="Carrot"), Item(key="leek", title="Leek")])
    dd.mount()
    return dd


class TestLifecycle:
    def test_open_moves_focus_to_popup(self, dropdown, events):
        dropdown.open()
        assert dropdown.is_open
        assert dropdown.focus is Focus.POPUP
        assert events["focus"].calls == [Focus.POPUP]

    def test_close_returns_focus_to_host(self, dropdown, events):
        dropdown.open()
        dropdown.close()
        assert not dropdown.is_open
        assert dropdown.focus is Focus.HOST
        assert events["focus"].calls == [Focus.POPUP, Focus.HOST]

    def test_open_highlights_committed_value(self, dropdown):
        dropdown.open()
        assert dropdown.selection.selected_item.key == "banana"

    def test_close_clears_search(self, dropdown):
        dropdown.open()
        dropdown.handle_key("c")
        dropdown.close()
        assert dropdown.selection.search_text == ""

    def test_open_twice_is_noop(self, dropdown, events):
        dropdown.open()
        dropdown.open()
        assert events["focus"].calls == [Focus.POPUP]


class TestCommit:
    def test_confirm_commits_and_closes(self, dropdown, events):
        dropdown.open()
        dropdown.handle_key(readchar.key.DOWN)
        assert dropdown.handle_key(readchar.key.ENTER) is True

        assert events["change"].calls == ["carrot"]
        assert dropdown.value == "carrot"
        assert dropdown.current_title() == "Carrot"
        assert not dropdown.is_open

    def test_cancel_keeps_previous_value(self, dropdown, events):
        dropdown.open()
        dropdown.handle_key(readchar.key.DOWN)
        dropdown.handle_key(readchar.key.ESC)

        assert events["change"].calls == []
        assert len(events["cancel"].calls) == 1
        assert dropdown.value == "banana"
        assert dropdown.current_title() == "Banana"
        assert not dropdown.is_open

    def test_confirm_with_no_match_stays_open(self, dropdown, events):
        dropdown.open()
        for key in "zzz":
            dropdown.handle_key(key)
        assert dropdown.confirm() is None
        assert dropdown.is_open
        assert events["change"].calls == []

    def test_confirm_when_closed_is_noop(self, dropdown, events):
        assert dropdown.confirm() is None
        assert events["change"].calls == []

    def test_search_then_confirm(self, dropdown, events):
        dropdown.open()
        for key in "lee":
            dropdown.handle_key(key)
        dropdown.handle_key(readchar.key.ENTER)
        assert events["change"].calls == ["leek"]


class TestKeys:
    def test_closed_dropdown_ignores_keys(self, dropdown):
        assert dropdown.handle_key(readchar.key.DOWN) is False

    def test_tab_and_shift_tab_move(self, dropdown):
        dropdown.open()
        dropdown.handle_key("\t")
        assert dropdown.selection.selected_item.key == "carrot"
        dropdown.handle_key("\x1b[Z")
        dropdown.handle_key("\x1b[Z")
        assert dropdown.selection.selected_item.key == "apple"

    def test_wraps_in_popup(self, dropdown):
        dropdown.open()
        dropdown.handle_key(readchar.key.UP)
        dropdown.handle_key(readchar.key.UP)
        assert dropdown.selection.selected_item.key == "leek"

    def test_backspace_edits_search(self, dropdown):
        dropdown.open()
        dropdown.handle_key("a")
        dropdown.handle_key("p")
        dropdown.handle_key(readchar.key.BACKSPACE)
        assert dropdown.selection.search_text == "a"


class TestSections:
    def test_sections_with_headers(self, dropdown):
        sections = dropdown.sections()
        assert [s.title for s in sections] == ["Fruit", "Vegetables"]
        assert all(s.show_header for s in sections)

    def test_headers_hidden_while_searching(self, dropdown):
        dropdown.open()
        dropdown.handle_key("e")
        sections = dropdown.sections()
        assert all(not s.show_header for s in sections)

    def test_empty_sections_dropped(self, dropdown):
        dropdown.open()
        for key in "carr":
            dropdown.handle_key(key)
        assert [s.title for s in dropdown.sections()] == ["Vegetables"]

    def test_section_name_is_searchable(self, dropdown):
        dropdown.open()
        for key in "veget":
            dropdown.handle_key(key)
        keys = [item.key for item in dropdown.selection.visible_items()]
        assert keys == ["carrot", "leek"]


def test_popup_indices_are_independent_of_host():
    host = DropdownController()
    host.add_item(Item(key="x"))
    host.add_item(Item(key="y"))

    popup = DropdownController()
    assert popup.add_item(Item(key="a")) == 0


def test_controlled_value_wins_over_default():
    dd = DropdownController(value="b", default_value="a")
    dd.add_item(Item(key="a", title="A"))
    dd.add_item(Item(key="b", title="B"))
    assert dd.current_title() == "B"
    dd.set_value("a")
    assert dd.current_title() == "A"


def test_no_value_has_no_title():
    dd = DropdownController()
    dd.add_item(Item(key="a", title="A"))
    assert dd.current_title() is None


def test_selection_tracks_the_popup_registry():
    changes = []
    dd = DropdownController(on_change=changes.append)
    assert dd.selection.registry is dd.registry

    dd.add_item(Item(key="only", title="Only"))
    dd.mount()
    dd.open()
    dd.handle_key(readchar.key.ENTER)

    assert changes == ["only"]
    assert dd.value == "only"
    assert not dd.is_open


def test_controlled_value_is_left_to_the_host():
    changes = []
    dd = DropdownController(value="a", on_change=changes.append)
    dd.add_item(Item(key="a", title="A"))
    dd.add_item(Item(key="b", title="B"))
    dd.mount()
    dd.open()
    dd.handle_key(readchar.key.DOWN)

    assert dd.confirm() == "b"
    assert changes == ["b"]
    assert dd.value == "a"
    dd.set_value(changes[-1])
    assert dd.current_title() == "B"


def test_falsy_callables_still_fire():
    class CallLog(list):
        def __call__(self, *args):
            self.append(args)

    change, cancel, focus = CallLog(), CallLog(), CallLog()
    dd = DropdownController(on_change=change, on_cancel=cancel, on_focus_change=focus)
    dd.add_item(Item(key="a", title="A"))
    dd.mount()
    dd.open()
    dd.confirm()
    dd.open()
    dd.cancel()

    assert change == [("a",)]
    assert cancel == [()]
    assert focus == [(Focus.POPUP,), (Focus.HOST,), (Focus.POPUP,), (Focus.HOST,)]


def test_display_options():
    dd = DropdownController(placeholder="Filter owners", tooltip="Owner", is_loading=True)
    assert dd.placeholder == "Filter owners"
    assert dd.tooltip == "Owner"
    assert dd.is_loading is True
    dd.set_loading(False)
    assert dd.is_loading is False
