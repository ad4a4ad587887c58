"""
Shared fixtures: a manually driven scheduler and a controllable clock.
"""

import pytest
from datetime import datetime, timedelta
from mpages.core.timer import TimerHandle


class ManualHandle(TimerHandle):
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancel_calls = 0

    def cancel(self):
        self.cancel_calls += 1

    @property
    def cancelled(self):
        return self.cancel_calls > 0


class ManualScheduler:
    """Records scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.handles = []

    def schedule_every(self, interval, callback):
        handle = ManualHandle(interval, callback)
        self.handles.append(handle)
        return handle

    def fire(self, index=-1):
        """Fire a schedule, even if cancelled, to simulate a late timer."""
        self.handles[index].callback()


class FakeClock:
    def __init__(self, start=datetime(2026, 10, 18, 6, 30, 0)):
        self.current = start

    def advance(self, seconds):
        self.current += timedelta(seconds=seconds)

    def __call__(self):
        return self.current


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock():
    return FakeClock()
