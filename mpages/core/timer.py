"""
Recurring, cancellable timers used to drive session ticks.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable


logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """Cancellable reference to a recurring schedule."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop future firings. Must be safe to call more than once."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """Whether cancel has been called."""
        pass


class IntervalTimer(TimerHandle):
    """Calls a function every `interval` seconds on a daemon thread."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="mpages-timer", daemon=True)

    def start(self) -> "IntervalTimer":
        """Start firing. Returns self so it can be used as a handle directly."""
        self._thread.start()
        return self

    def _run(self):
        # wait() returns True once cancelled, which ends the loop
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("Timer callback failed")

    def cancel(self) -> None:
        """Stop future firings. Safe to call more than once."""
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()


class ThreadScheduler:
    """Schedules recurring callbacks on background threads."""

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        return IntervalTimer(interval, callback).start()
