"""
Shared rich console and logging setup.
"""

import logging
from rich.console import Console
from rich.logging import RichHandler


console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route stdlib logging through rich on the shared console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )
