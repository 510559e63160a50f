"""
Scoring System
==============

Applies score events to the run state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from banana_dodge.dodge_core.config_loader import GameConfig, get_config
from banana_dodge.dodge_core.entities import RunState


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    reason: str  # "dodge" or "bonus"

    def __repr__(self) -> str:
        return f"ScoreEvent({self.reason}=+{self.points})"


class ScoreTracker:
    """
    Awards points on a RunState and commits the high score.

    - Dodge: an object leaves the bottom of the field
    - Bonus: the player eats a ripe bonus banana (also starts the score flash)
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._dodge_points = config.scoring.dodge_points
        self._bonus_points = config.scoring.bonus_points
        self._flash_ticks = config.scoring.flash_ticks

    def apply_dodge(self, run: RunState, count: int = 1) -> ScoreEvent:
        """Award points for objects that scrolled off the field."""
        points = self._dodge_points * count
        run.score += points
        return ScoreEvent(points=points, reason="dodge")

    def apply_bonus(self, run: RunState) -> ScoreEvent:
        """Award a bonus pickup and start the score flash."""
        run.score += self._bonus_points
        run.score_flash = self._flash_ticks
        return ScoreEvent(points=self._bonus_points, reason="bonus")

    @staticmethod
    def commit_high_score(run: RunState) -> bool:
        """
        Raise the high score to the current score if it beats it.

        Returns:
            True if a new high score was set.
        """
        if run.score > run.high_score:
            run.high_score = run.score
            return True
        return False

    @staticmethod
    def tick_flash(run: RunState) -> None:
        """Count the cosmetic score flash down by one tick."""
        if run.score_flash > 0:
            run.score_flash -= 1
