"""Pytest fixtures for rich-picker tests."""

import pytest

from rich_picker.registry import ItemRegistry
from rich_picker.selection import SelectionController
from rich_picker.types import Item


class Recorder:
    """Collects callback invocations in order."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args[0] if len(args) == 1 else args)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def make_recorder():
    """Build fresh ``Recorder`` instances, one per callback under test."""

    def _make():
        return Recorder()

    return _make


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's config file and env overrides out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("RICH_PICKER_MAX_VISIBLE", raising=False)


@pytest.fixture
def registry():
    return ItemRegistry()


@pytest.fixture
def fruit_registry(registry):
    """Registry holding Apple, Banana, Carrot at indices 0, 1, 2."""
    with registry.batch():
        registry.register(Item(key="apple", title="Apple"))
        registry.register(Item(key="banana", title="Banana"))
        registry.register(Item(key="carrot", title="Carrot", keywords=("orange",)))
    return registry


@pytest.fixture
def make_controller():
    """Build a mounted controller over ``count`` numbered items."""

    def _make(count=5, **kwargs):
        registry = ItemRegistry()
        with registry.batch():
            for i in range(count):
                registry.register(Item(key=f"item-{i}", title=f"Item {i}"))
        controller = SelectionController(registry, **kwargs)
        controller.mount()
        return controller

    return _make
