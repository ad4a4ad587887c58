"""
Terminal surface for a writing session: a live status line bound to one document.
"""

import logging
from pathlib import Path
from typing import Callable, Optional
from rich.live import Live
from rich.text import Text

from .console import console
from .status import StatusRenderer
from ..core.formatter import format_status_line
from ..core.models import SessionConfig, SessionSummary
from ..core.registry import SessionRegistry
from ..ingestion.documents import DocumentWordCounter
from ..ingestion.watcher import DocumentWatcher


logger = logging.getLogger(__name__)


def surface_id_for(document: Path) -> str:
    """Surface identity is the document's resolved path."""
    return str(Path(document).resolve())


def wait_for_enter() -> None:
    """Block until the user presses Enter, Ctrl+C or closes stdin."""
    try:
        console.input()
    except (KeyboardInterrupt, EOFError):
        pass


def run_live_session(
    document: Path,
    config: SessionConfig,
    registry: Optional[SessionRegistry] = None,
    wait_for_close: Callable[[], None] = wait_for_enter,
) -> SessionSummary:
    """
    Run a writing session on a document until the surface is closed.

    The document watcher keeps the word count current while the registry
    ticks the status line into a rich Live display. Closing always ends the
    session, however wait_for_close returns.

    Args:
        document: Today's document
        config: Threshold and update interval
        registry: Registry to use; a fresh one with its own renderer by default
        wait_for_close: Blocks until the user is done writing

    Returns:
        Summary of the finished session
    """
    registry = registry or SessionRegistry(StatusRenderer())
    renderer = registry.renderer
    surface_id = surface_id_for(document)

    counter = DocumentWordCounter(Path(document))
    watcher = DocumentWatcher(counter)

    initial = format_status_line(0, counter(), config.word_threshold)
    with Live(initial, console=console, auto_refresh=False, transient=True) as live:
        watcher.start()
        try:
            # A surface that already has a session keeps its attachment
            session = registry.begin_session(surface_id, config, counter)
            renderer.attach(surface_id, lambda line: live.update(line, refresh=True))
            try:
                wait_for_close()
            finally:
                elapsed = session.elapsed()
                registry.end_session(surface_id)
                renderer.detach(surface_id)
        finally:
            watcher.stop()

    summary = SessionSummary(
        surface_id=surface_id,
        word_count=counter(),
        word_threshold=config.word_threshold,
        elapsed_seconds=elapsed.total_seconds(),
    )
    logger.debug("Session summary: %s", summary)
    return summary


def summary_text(summary: SessionSummary) -> Text:
    """Closing line shown after a session ends."""
    text = format_status_line(summary.elapsed_seconds, summary.word_count, summary.word_threshold)
    if summary.met:
        text.append("   target met", style="bold green")
    else:
        remaining = summary.word_threshold - summary.word_count
        text.append(f"   {remaining} to go", style="dim")
    return text
