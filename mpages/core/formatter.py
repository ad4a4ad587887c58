"""
Pure formatting helpers for the session status line.
"""

from datetime import timedelta
from typing import Union
from rich.text import Text


BELOW_THRESHOLD_STYLE = "red"
MET_THRESHOLD_STYLE = "green"

Duration = Union[timedelta, int, float]


def format_count(count: int, threshold: int) -> Text:
    """
    Render a word count colored by progress toward the threshold.

    Args:
        count: Current word count
        threshold: Daily word target

    Returns:
        Rich Text, red while below the target and green once it is met
    """
    style = BELOW_THRESHOLD_STYLE if count < threshold else MET_THRESHOLD_STYLE
    return Text(str(count), style=style)


def format_elapsed(duration: Duration) -> str:
    """
    Render a duration as MM:SS.

    Sub-second precision is truncated. The minutes field keeps growing past
    59 instead of rolling into hours, so 3725 seconds renders as "62:05".
    """
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = duration
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def format_status_line(elapsed: Duration, word_count: int, threshold: int) -> Text:
    """Compose the full status line: colored count followed by elapsed time."""
    text = Text("Words: ")
    text.append_text(format_count(word_count, threshold))
    text.append(f"   Time Elapsed: {format_elapsed(elapsed)}")
    return text
