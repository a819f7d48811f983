"""Tests for center-biased scroll planning."""

from rich_picker.scroll import ScrollPlanner, plan_scroll
from rich_picker.types import Geometry, Item


def test_plan_scroll_centers_item():
    assert plan_scroll(Geometry(offset=20), content_offset=0, viewport_height=10) == 15


def test_plan_scroll_clamps_at_top():
    assert plan_scroll(Geometry(offset=3), content_offset=0, viewport_height=10) == 0


def test_plan_scroll_relative_to_content_origin():
    assert plan_scroll(Geometry(offset=25), content_offset=5, viewport_height=11) == 15


def test_plan_scroll_unknown_geometry():
    assert plan_scroll(None, content_offset=0, viewport_height=10) is None


class TestScrollPlanner:
    def test_requests_scroll(self, make_recorder):
        targets = make_recorder()
        planner = ScrollPlanner(scroll_to=targets, viewport_height=lambda: 4)
        assert planner.plan(Item(geometry=Geometry(offset=9))) == 7
        assert targets.calls == [7]
        assert planner.last_target == 7

    def test_skips_items_without_layout(self, make_recorder):
        targets = make_recorder()
        planner = ScrollPlanner(scroll_to=targets)
        assert planner.plan(Item(title="not laid out")) is None
        assert planner.plan(None) is None
        assert len(targets.calls) == 0
