"""
Registry tracking the one live writing session per document surface.
"""

import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional

from .errors import AlreadyActiveError
from .models import SessionConfig
from .session import Clock, WordCounter, WritingSession
from .timer import ThreadScheduler


logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Maps surface ids to their live WritingSession.

    All session creation and teardown goes through begin_session and
    end_session. Sessions are ended outside the registry lock, since a tick
    holds its session lock while asking the registry whether it is live.
    """

    def __init__(self, renderer, scheduler=None):
        self.renderer = renderer
        self.scheduler = scheduler or ThreadScheduler()
        self._sessions: Dict[str, WritingSession] = {}
        self._lock = threading.Lock()

    def begin_session(
        self,
        surface_id: str,
        config: SessionConfig,
        word_counter: WordCounter,
        now: Optional[Clock] = None,
    ) -> WritingSession:
        """
        Start and register a session for a surface.

        Raises:
            AlreadyActiveError: If the surface already has a live session.
                The existing session is left untouched.
        """
        clock = now or datetime.now
        with self._lock:
            if surface_id in self._sessions:
                raise AlreadyActiveError(surface_id)

            holder: List[WritingSession] = []
            session = WritingSession.start(
                surface_id,
                config,
                word_counter,
                clock,
                self.renderer,
                self.scheduler,
                is_live=lambda: bool(holder) and self._is_current(surface_id, holder[0]),
            )
            holder.append(session)
            self._sessions[surface_id] = session

        logger.info("Writing session started for %s", surface_id)
        return session

    def end_session(self, surface_id: str) -> bool:
        """
        End the session for a surface if there is one.

        Returns:
            True if a session was ended, False if none was registered
        """
        with self._lock:
            session = self._sessions.pop(surface_id, None)

        if session is None:
            logger.debug("No session to end for %s", surface_id)
            return False

        session.end()
        logger.info("Writing session ended for %s", surface_id)
        return True

    def is_active(self, surface_id: str) -> bool:
        """Check whether a surface has a live session."""
        with self._lock:
            return surface_id in self._sessions

    def get(self, surface_id: str) -> Optional[WritingSession]:
        """Get the live session for a surface, if any."""
        with self._lock:
            return self._sessions.get(surface_id)

    def end_all(self) -> int:
        """End every registered session. Returns how many were ended."""
        with self._lock:
            surface_ids = list(self._sessions)
        return sum(1 for surface_id in surface_ids if self.end_session(surface_id))

    def _is_current(self, surface_id: str, session: WritingSession) -> bool:
        with self._lock:
            return self._sessions.get(surface_id) is session
