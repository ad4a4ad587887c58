"""
Watchdog-based watcher keeping a document's word count current.
"""

import logging
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from .documents import DocumentWordCounter


logger = logging.getLogger(__name__)


def _event_path(raw) -> Path:
    # watchdog may hand us bytes
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8')
    return Path(str(raw)).resolve()


class DocumentEventHandler(FileSystemEventHandler):
    """
    Refreshes the word counter whenever the watched document changes.

    Every matching event triggers a re-read. Editors emit bursts of events per
    save and only the last one is guaranteed to see the final content.
    """

    def __init__(self, counter: DocumentWordCounter):
        self.counter = counter
        self.target = counter.path.resolve()

    def on_modified(self, event):
        self._handle(event, event.src_path)

    def on_created(self, event):
        self._handle(event, event.src_path)

    def on_moved(self, event):
        # Editors that save via rename land here
        self._handle(event, event.dest_path)

    def _handle(self, event, raw_path):
        if event.is_directory:
            return

        if _event_path(raw_path) != self.target:
            return

        count = self.counter.refresh()
        logger.debug("Refreshed %s: %d words", self.target.name, count)


class DocumentWatcher:
    """Watches one document's directory and feeds changes to its word counter."""

    def __init__(self, counter: DocumentWordCounter):
        self.observer = Observer()
        self.handler = DocumentEventHandler(counter)
        self.counter = counter
        self._is_running = False

    def start(self):
        """Start watching for changes."""
        if self._is_running:
            return

        self.observer.schedule(self.handler, str(self.handler.target.parent), recursive=False)
        self.observer.start()
        self._is_running = True

    def stop(self):
        """Stop watching and pick up any final edits."""
        if not self._is_running:
            return

        self.observer.stop()
        self.observer.join()
        self._is_running = False
        self.counter.refresh()

    def is_running(self) -> bool:
        """Check if the watcher is currently running."""
        return self._is_running
