"""JSON-file-backed user preferences.

Holds the small pieces of per-install state: remaining free credits, whether
the first-launch grant already happened, and the source language. The store
is opened and closed by the application lifespan and handed to whoever needs
it; nothing reads it through a global.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class Preferences(BaseModel):
    """Persisted preference values."""

    remaining_credits: int = Field(default=0, ge=0)
    credits_initialized: bool = Field(default=False, description="First-launch credit grant already applied")
    source_language: str = Field(default="en")


class PreferencesStore:
    """Load, mutate and persist :class:`Preferences`.

    Args:
        path: JSON file location. ``None`` keeps preferences in memory only.
    """

    def __init__(self, path: Optional[str | Path] = None) -> None:
        self._path = Path(path) if path is not None else None
        self._data = Preferences()
        self._loaded = False

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def data(self) -> Preferences:
        if not self._loaded:
            self.load()
        return self._data

    def load(self) -> Preferences:
        """Read the file; a missing or corrupt file yields defaults."""
        self._loaded = True
        if self._path is None or not self._path.exists():
            self._data = Preferences()
            return self._data
        try:
            with self._path.open("r", encoding="utf-8") as f:
                self._data = Preferences.model_validate(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            logger.error("Failed to read preferences from %s, using defaults: %s", self._path, e, exc_info=True)
            self._data = Preferences()
        return self._data

    def save(self) -> None:
        """Write the current values. Failures are logged, not raised."""
        if self._path is None:
            return
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            logger.error("Failed to save preferences to %s: %s", self._path, e, exc_info=True)

    def get(self, key: str, default: Any | None = None) -> Any:
        return getattr(self.data, key, default)

    def update(self, **changes: Any) -> Preferences:
        """Apply ``changes``, validate them and persist."""
        self._data = Preferences.model_validate({**self.data.model_dump(), **changes})
        self.save()
        return self._data

    def close(self) -> None:
        if self._loaded:
            self.save()
