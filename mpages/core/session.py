"""
A single timed writing session bound to one document surface.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

from .formatter import format_status_line
from .models import SessionConfig, SessionPhase
from .timer import TimerHandle


logger = logging.getLogger(__name__)

WordCounter = Callable[[], int]
Clock = Callable[[], datetime]


class WritingSession:
    """
    Owns the start time and recurring tick of one writing session.

    The session moves CREATED -> ACTIVE -> ENDED and never back. Ticks only
    do work while ACTIVE and while `is_live` still reports the session as
    registered; anything else is a late timer firing and is dropped.
    """

    def __init__(
        self,
        surface_id: str,
        config: SessionConfig,
        word_counter: WordCounter,
        now: Clock,
        renderer,
        is_live: Callable[[], bool],
    ):
        self.surface_id = surface_id
        self.config = config
        self.word_counter = word_counter
        self.now = now
        self.renderer = renderer
        self.is_live = is_live
        self.start_time: Optional[datetime] = None
        self.handle: Optional[TimerHandle] = None
        self.phase = SessionPhase.CREATED
        self._lock = threading.RLock()

    @classmethod
    def start(
        cls,
        surface_id: str,
        config: SessionConfig,
        word_counter: WordCounter,
        now: Clock,
        renderer,
        scheduler,
        is_live: Callable[[], bool],
    ) -> "WritingSession":
        """
        Create a session and begin ticking.

        Args:
            surface_id: Identifier of the document view the session is bound to
            config: Threshold and update interval
            word_counter: Returns the current word count of the document
            now: Clock used for the start time and every tick
            renderer: StatusRenderer receiving the formatted line
            scheduler: Anything with schedule_every(interval, callback)
            is_live: Liveness check consulted at the top of every tick

        Returns:
            The ACTIVE session
        """
        session = cls(surface_id, config, word_counter, now, renderer, is_live)
        with session._lock:
            session.start_time = now()
            session.phase = SessionPhase.ACTIVE
            session.handle = scheduler.schedule_every(config.update_interval_seconds, session.tick)
        logger.debug("Session started for %s at %s", surface_id, session.start_time)
        return session

    @property
    def active(self) -> bool:
        return self.phase is SessionPhase.ACTIVE

    def elapsed(self) -> timedelta:
        """Time since the session started, zero if it never started."""
        if self.start_time is None:
            return timedelta(0)
        return self.now() - self.start_time

    def tick(self) -> None:
        """Recompute word count and elapsed time and push a fresh status line."""
        with self._lock:
            if self.phase is not SessionPhase.ACTIVE or not self.is_live():
                logger.debug("Dropped tick for inactive surface %s", self.surface_id)
                return

            count = self.word_counter()
            line = format_status_line(self.elapsed(), count, self.config.word_threshold)
            self.renderer.render(self.surface_id, line)

    def end(self) -> None:
        """Cancel the recurring tick and clear the status line. Idempotent."""
        with self._lock:
            if self.phase is SessionPhase.ENDED:
                return
            self.phase = SessionPhase.ENDED
            if self.handle is not None:
                self.handle.cancel()
            self.renderer.clear(self.surface_id)
        logger.debug("Session ended for %s", self.surface_id)
