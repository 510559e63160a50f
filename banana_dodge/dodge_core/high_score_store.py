"""
High Score Store
================

Durable single-value store for the high score, kept as a small JSON file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Union

HIGH_SCORE_KEY = "highScore"


class HighScoreStore:
    """
    Reads the high score once at startup and writes it on a new record.

    A missing, unreadable or malformed file reads as 0.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(os.path.expanduser(str(path)))

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> int:
        if not self._path.exists():
            return 0

        try:
            with open(self._path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return 0

        if not isinstance(data, dict):
            return 0

        try:
            return max(0, int(data.get(HIGH_SCORE_KEY, 0)))
        except (TypeError, ValueError):
            return 0

    def save(self, high_score: int) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump({HIGH_SCORE_KEY: int(high_score)}, f)


class MemoryHighScoreStore:
    """In-memory stand-in used by the environment and tests."""

    def __init__(self, high_score: int = 0):
        self._high_score = high_score
        self.saves = 0

    def load(self) -> int:
        return self._high_score

    def save(self, high_score: int) -> None:
        self._high_score = int(high_score)
        self.saves += 1


def open_store(path: Optional[Union[str, Path]]):
    """File store for a path, memory store for None."""
    if path is None:
        return MemoryHighScoreStore()
    return HighScoreStore(path)
