"""
Tests for the session registry and the end-to-end session flow.
"""

import pytest
import threading
from mpages.core.errors import AlreadyActiveError, MpagesError
from mpages.core.formatter import BELOW_THRESHOLD_STYLE, MET_THRESHOLD_STYLE
from mpages.core.models import SessionConfig
from mpages.core.registry import SessionRegistry
from mpages.core.timer import ThreadScheduler
from mpages.interface.status import StatusRenderer


@pytest.fixture
def renderer():
    renderer = StatusRenderer()
    renderer.attach("doc")
    return renderer


@pytest.fixture
def registry(renderer, scheduler):
    return SessionRegistry(renderer, scheduler=scheduler)


def count_style(line):
    return line.spans[0].style


def test_begin_marks_surface_active(registry, clock):
    """After begin, the surface is active and the session is retrievable."""
    session = registry.begin_session("doc", SessionConfig(), lambda: 0, clock)

    assert registry.is_active("doc")
    assert registry.get("doc") is session


def test_end_marks_surface_inactive(registry, clock):
    """After end, the surface is inactive, and stays so on a second end."""
    registry.begin_session("doc", SessionConfig(), lambda: 0, clock)

    assert registry.end_session("doc") is True
    assert not registry.is_active("doc")

    assert registry.end_session("doc") is False
    assert not registry.is_active("doc")


def test_end_unknown_surface_is_noop(registry):
    """Ending a surface that never had a session is silent."""
    assert registry.end_session("nowhere") is False
    assert not registry.is_active("nowhere")


def test_begin_twice_raises_already_active(registry, clock):
    """A second begin fails and leaves the original session untouched."""
    first = registry.begin_session("doc", SessionConfig(), lambda: 0, clock)
    started = first.start_time

    clock.advance(30)
    with pytest.raises(AlreadyActiveError) as exc_info:
        registry.begin_session("doc", SessionConfig(), lambda: 0, clock)

    assert isinstance(exc_info.value, MpagesError)
    assert exc_info.value.surface_id == "doc"
    assert registry.get("doc") is first
    assert first.start_time == started
    assert first.active


def test_begin_after_end_starts_fresh(registry, scheduler, clock):
    """A surface can get a new session once the previous one ended."""
    first = registry.begin_session("doc", SessionConfig(), lambda: 0, clock)
    registry.end_session("doc")

    clock.advance(10)
    second = registry.begin_session("doc", SessionConfig(), lambda: 0, clock)

    assert second is not first
    assert second.start_time == clock.current
    assert len(scheduler.handles) == 2


def test_late_tick_after_end_does_not_render(registry, renderer, scheduler, clock):
    """A tick already queued when end_session returns produces no render."""
    registry.begin_session("doc", SessionConfig(), lambda: 0, clock)
    clock.advance(1)
    scheduler.fire()
    registry.end_session("doc")

    scheduler.fire()

    assert renderer.current("doc") is None


def test_stale_session_tick_ignored_after_restart(registry, renderer, scheduler, clock):
    """A timer from an ended session cannot render over its replacement."""
    registry.begin_session("doc", SessionConfig(), lambda: 1, clock)
    registry.end_session("doc")
    registry.begin_session("doc", SessionConfig(), lambda: 2, clock)

    scheduler.fire(0)
    assert renderer.current("doc") is None

    scheduler.fire(1)
    assert renderer.current("doc").plain.startswith("Words: 2 ")


def test_end_all(registry, renderer, clock):
    """end_all tears down every registered session."""
    renderer.attach("other")
    registry.begin_session("doc", SessionConfig(), lambda: 0, clock)
    registry.begin_session("other", SessionConfig(), lambda: 0, clock)

    assert registry.end_all() == 2
    assert not registry.is_active("doc")
    assert not registry.is_active("other")


def test_end_to_end_session(registry, renderer, scheduler, clock):
    """Full session: below target, then met, then cleared on close."""
    words = {"count": 0}
    config = SessionConfig(word_threshold=750, update_interval_seconds=1)
    registry.begin_session("doc", config, lambda: words["count"], clock)

    clock.advance(1)
    scheduler.fire()
    line = renderer.current("doc")
    assert line.plain == "Words: 0   Time Elapsed: 00:01"
    assert count_style(line) == BELOW_THRESHOLD_STYLE

    words["count"] = 750
    clock.advance(1)
    scheduler.fire()
    line = renderer.current("doc")
    assert line.plain == "Words: 750   Time Elapsed: 00:02"
    assert count_style(line) == MET_THRESHOLD_STYLE

    registry.end_session("doc")
    assert renderer.current("doc") is None


def test_end_waits_for_in_flight_tick_on_real_timer():
    """end_session on a thread-driven session orders after a tick already running."""
    lines = []
    renderer = StatusRenderer()
    renderer.attach("doc", lines.append)
    registry = SessionRegistry(renderer, scheduler=ThreadScheduler())

    tick_entered = threading.Event()
    release_tick = threading.Event()

    def slow_counter():
        tick_entered.set()
        release_tick.wait(5)
        return 42

    registry.begin_session("doc", SessionConfig(update_interval_seconds=1), slow_counter)
    assert tick_entered.wait(5)

    # The tick is now blocked inside the session lock; let it finish shortly
    # after end_session has started waiting on it.
    threading.Timer(0.2, release_tick.set).start()
    assert registry.end_session("doc") is True

    assert release_tick.is_set()
    assert len(lines) == 2
    assert lines[0].plain.startswith("Words: 42   Time Elapsed: 00:0")
    assert lines[1].plain == ""
    assert renderer.current("doc") is None

    # Another interval passes with no further renders
    rendered = len(lines)
    threading.Event().wait(1.5)
    assert len(lines) == rendered
    assert renderer.current("doc") is None
