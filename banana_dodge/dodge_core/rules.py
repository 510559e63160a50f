"""
Game Rules
==========

Run phase transitions and the restart control.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from banana_dodge.dodge_core.config_loader import GameConfig, get_config
from banana_dodge.dodge_core.entities import GamePhase, RunState


@dataclass
class TransitionResult:
    """Result of a phase transition attempt."""
    accepted: bool
    phase: GamePhase
    reason: str = ""


class PhaseRules:
    """
    The run state machine.

    PLAYING -> EXPLODING          on a fatal collision
    EXPLODING -> GAME_OVER_DISPLAYED once the explosion has burnt out
    EXPLODING | GAME_OVER_DISPLAYED -> PLAYING on reset

    No other transitions exist.
    """

    RESETTABLE = (GamePhase.EXPLODING, GamePhase.GAME_OVER_DISPLAYED)

    @staticmethod
    def enter_exploding(run: RunState) -> TransitionResult:
        if run.phase is not GamePhase.PLAYING:
            return TransitionResult(False, run.phase, "not_playing")
        run.phase = GamePhase.EXPLODING
        return TransitionResult(True, run.phase, "fatal_collision")

    @staticmethod
    def finish_explosion(run: RunState, explosion_empty: bool) -> TransitionResult:
        if run.phase is not GamePhase.EXPLODING or not explosion_empty:
            return TransitionResult(False, run.phase)
        run.phase = GamePhase.GAME_OVER_DISPLAYED
        return TransitionResult(True, run.phase, "explosion_done")

    @classmethod
    def can_reset(cls, phase: GamePhase) -> bool:
        return phase in cls.RESETTABLE


class RestartButton:
    """
    Fixed restart rectangle, centred horizontally below the field centre.

    Hit-testing is inclusive on all edges and uses logical field coordinates.
    The button only responds while the game over screen is showing.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize restart button.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        button = config.restart_button
        self.width = button.width
        self.height = button.height
        self.x = config.field.width / 2 - button.width / 2
        self.y = config.field.height / 2 + button.offset_y

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        """(x, y, width, height) in field coordinates."""
        return (self.x, self.y, self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        return (
            self.x <= x <= self.x + self.width and
            self.y <= y <= self.y + self.height
        )

    def accepts(self, phase: GamePhase, x: float, y: float) -> bool:
        """True if a click at (x, y) should restart the game now."""
        return phase is GamePhase.GAME_OVER_DISPLAYED and self.contains(x, y)


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.restart_button = RestartButton(config)
