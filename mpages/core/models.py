"""
Pydantic models and enums shared by the session core.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_WORD_THRESHOLD = 750
DEFAULT_UPDATE_INTERVAL = 1


class SessionConfig(BaseModel):
    """Immutable settings a writing session is started with."""
    model_config = ConfigDict(frozen=True)

    word_threshold: int = Field(default=DEFAULT_WORD_THRESHOLD, gt=0)
    update_interval_seconds: int = Field(default=DEFAULT_UPDATE_INTERVAL, gt=0)


class SessionPhase(str, Enum):
    """Lifecycle of a WritingSession. Transitions only move forward."""
    CREATED = "created"
    ACTIVE = "active"
    ENDED = "ended"


class SessionSummary(BaseModel):
    """Snapshot of a session taken as it closes."""
    surface_id: str
    word_count: int
    word_threshold: int
    elapsed_seconds: float

    @property
    def met(self) -> bool:
        return self.word_count >= self.word_threshold
