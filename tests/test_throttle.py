"""Tests for the search text throttle."""

from rich_picker.throttle import SearchTextThrottle


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_delivers_latest_text_after_delay(make_recorder):
    texts = make_recorder()
    clock = FakeClock()
    throttle = SearchTextThrottle(texts, delay=0.3, clock=clock)

    throttle.push("a")
    clock.now = 0.1
    throttle.push("ab")
    clock.now = 0.3
    assert throttle.flush_due() is False

    clock.now = 0.41
    assert throttle.flush_due() is True
    assert texts.calls == ["ab"]
    assert throttle.pending is None


def test_flush_delivers_immediately(make_recorder):
    texts = make_recorder()
    throttle = SearchTextThrottle(texts, clock=FakeClock())
    throttle.push("x")
    assert throttle.flush() is True
    assert throttle.flush() is False
    assert texts.calls == ["x"]


def test_zero_delay_passes_through(make_recorder):
    texts = make_recorder()
    throttle = SearchTextThrottle(texts, delay=0)
    throttle.push("x")
    assert texts.calls == ["x"]
    assert throttle.pending is None
