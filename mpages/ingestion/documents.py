"""
Resolves today's writing document and counts the words in it.
"""

import threading
from datetime import date
from pathlib import Path
from typing import Optional, Union


DEFAULT_EXTENSION = ".txt"


def todays_filename(today: Optional[date] = None, extension: str = DEFAULT_EXTENSION) -> str:
    """Name of the document for a given day, e.g. 2026-10-18.txt."""
    today = today or date.today()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return f"{today.isoformat()}{extension}"


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Expand and create the documents directory.

    Raises:
        ValueError: If the path exists but is not a directory
    """
    directory = Path(path).expanduser()
    if directory.exists() and not directory.is_dir():
        raise ValueError(f"Not a directory: {path}")
    directory.mkdir(parents=True, exist_ok=True)
    return directory.resolve()


def todays_document(
    directory: Union[str, Path],
    today: Optional[date] = None,
    extension: str = DEFAULT_EXTENSION,
) -> Path:
    """
    Get today's document, creating the directory and an empty file if needed.

    Args:
        directory: Directory holding the daily documents
        today: Day to resolve, defaults to the current date
        extension: File extension for documents

    Returns:
        Path to the (existing) document
    """
    document = ensure_directory(directory) / todays_filename(today, extension)
    document.touch(exist_ok=True)
    return document


def count_words(text: str) -> int:
    """Count whitespace separated words."""
    return len(text.split())


class DocumentWordCounter:
    """Caches the word count of a document, refreshed on demand."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._count = 0
        self._lock = threading.Lock()
        self.refresh()

    def refresh(self) -> int:
        """Re-read the document and update the cached count."""
        try:
            text = self.path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            text = ""
        count = count_words(text)
        with self._lock:
            self._count = count
        return count

    def __call__(self) -> int:
        with self._lock:
            return self._count
