"""
Configuration loader for mpages.
Handles the documents directory, word target and refresh interval.
"""

import json
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError

from .core.errors import MpagesError
from .core.models import DEFAULT_UPDATE_INTERVAL, DEFAULT_WORD_THRESHOLD, SessionConfig
from .ingestion.documents import DEFAULT_EXTENSION


class MpagesConfig(BaseModel):
    """Configuration model for mpages."""
    # Where daily documents live; prompted for on first run
    directory: Optional[str] = None

    word_threshold: int = Field(default=DEFAULT_WORD_THRESHOLD, gt=0)
    update_interval: int = Field(default=DEFAULT_UPDATE_INTERVAL, gt=0)  # seconds
    extension: str = DEFAULT_EXTENSION

    # Editor command for `start --open`; falls back to the system default app
    editor: Optional[str] = None

    def is_configured(self) -> bool:
        """Check whether a documents directory has been chosen."""
        return bool(self.directory)

    def to_session_config(self) -> SessionConfig:
        """Build the immutable settings handed to a writing session."""
        return SessionConfig(
            word_threshold=self.word_threshold,
            update_interval_seconds=self.update_interval,
        )


class ConfigError(MpagesError):
    """The saved configuration file cannot be read or is invalid."""

    def __init__(self, config_file: Path, reason: str):
        self.config_file = config_file
        super().__init__(f"Invalid config at {config_file}: {reason}")


class ConfigManager:
    """Reads and writes the JSON config file under ~/.mpages."""

    def __init__(self, config_dir: Path = Path.home() / ".mpages"):
        self.config_dir = config_dir
        self.config_file = config_dir / "config.json"

    def load(self) -> Optional[MpagesConfig]:
        """
        Load the saved configuration.

        Returns:
            The config, or None when nothing has been saved yet

        Raises:
            ConfigError: If the file is not valid JSON or fails validation
        """
        if not self.config_file.exists():
            return None

        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
            return MpagesConfig.model_validate(data)
        except OSError as e:
            raise ConfigError(self.config_file, f"cannot be read ({e})") from e
        except json.JSONDecodeError as e:
            raise ConfigError(self.config_file, f"not valid JSON ({e})") from e
        except ValidationError as e:
            fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
            raise ConfigError(self.config_file, f"bad value for {fields or 'config'}") from e

    def load_or_default(self) -> MpagesConfig:
        """Load configuration, or return defaults when none is saved yet."""
        return self.load() or MpagesConfig()

    def save(self, config: MpagesConfig) -> None:
        """Write the config, creating ~/.mpages if needed."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(json.dumps(config.model_dump(), indent=2), encoding="utf-8")

    def exists(self) -> bool:
        return self.config_file.exists()
