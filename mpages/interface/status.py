"""
Status renderer: pushes formatted status lines to document surfaces.
"""

import logging
import threading
from typing import Callable, Dict, Optional
from rich.text import Text


logger = logging.getLogger(__name__)

StatusSink = Callable[[Text], None]


class StatusRenderer:
    """Holds the last rendered status line per surface and forwards it to the surface's sink."""

    def __init__(self):
        self._sinks: Dict[str, Optional[StatusSink]] = {}
        self._display: Dict[str, Text] = {}
        self._lock = threading.Lock()

    def attach(self, surface_id: str, sink: Optional[StatusSink] = None) -> None:
        """
        Make a surface renderable.

        Args:
            surface_id: Identifier of the document view
            sink: Optional callable receiving every rendered line
        """
        with self._lock:
            self._sinks[surface_id] = sink

    def detach(self, surface_id: str) -> None:
        """Forget a surface. Later renders to it are ignored."""
        with self._lock:
            self._sinks.pop(surface_id, None)
            self._display.pop(surface_id, None)

    def is_attached(self, surface_id: str) -> bool:
        with self._lock:
            return surface_id in self._sinks

    def render(self, surface_id: str, line: Text) -> None:
        """Show a status line on a surface. Does nothing if the surface is gone."""
        with self._lock:
            if surface_id not in self._sinks:
                logger.debug("Render skipped, surface %s is not attached", surface_id)
                return
            self._display[surface_id] = line
            sink = self._sinks[surface_id]
        if sink is not None:
            sink(line)

    def clear(self, surface_id: str) -> None:
        """Reset a surface's status area to empty."""
        with self._lock:
            self._display.pop(surface_id, None)
            if surface_id not in self._sinks:
                return
            sink = self._sinks[surface_id]
        if sink is not None:
            sink(Text(""))

    def current(self, surface_id: str) -> Optional[Text]:
        """Last line rendered to a surface, or None if nothing is shown."""
        with self._lock:
            return self._display.get(surface_id)
