"""
Entities
========

Plain simulation state: the player, falling objects, run bookkeeping and the
single GameState struct that owns all of them.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from banana_dodge.dodge_core.config_loader import GameConfig, get_config
from banana_dodge.dodge_core.particles import ExplosionPool, SparklePool


class Variant(Enum):
    """Falling object kind. A single value, so bonus and growing never mix."""
    NORMAL = "normal"
    BONUS = "bonus"
    GROWING = "growing"


class GamePhase(Enum):
    """Run state machine."""
    PLAYING = "playing"
    EXPLODING = "exploding"
    GAME_OVER_DISPLAYED = "game_over_displayed"


@dataclass
class PlayerState:
    """The player character. Only ever moves horizontally."""
    x: float
    y: float
    width: float
    height: float
    dx: float = 0.0
    animation_phase: float = 0.0

    @classmethod
    def spawn(cls, config: GameConfig) -> "PlayerState":
        """Player centred horizontally near the bottom of the field."""
        return cls(
            x=config.field.width / 2 - config.player.width / 2,
            y=config.field.height - config.player.bottom_offset,
            width=config.player.width,
            height=config.player.height
        )

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def clamp(self, field_width: float) -> None:
        """Keep the player fully inside [0, field_width]."""
        if self.x < 0:
            self.x = 0.0
        if self.x + self.width > field_width:
            self.x = field_width - self.width


@dataclass
class FallingObject:
    """
    A banana falling down the field.

    `transformed` only ever goes from False to True and `scale` only grows,
    capped at `max_scale`.
    """
    x: float
    y: float
    width: float
    height: float
    speed: float
    original_speed: float
    variant: Variant = Variant.NORMAL
    rotation: float = 0.0
    scale: float = 1.5
    max_scale: float = 4.5
    transformed: bool = False

    @property
    def is_bonus(self) -> bool:
        return self.variant is Variant.BONUS

    @property
    def is_growing(self) -> bool:
        return self.variant is Variant.GROWING

    @property
    def is_edible(self) -> bool:
        """True for a ripe bonus banana, the only thing safe to touch."""
        return self.is_bonus and self.transformed

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def transform(self) -> None:
        self.transformed = True

    def grow(self, amount: float) -> None:
        """Increase scale by amount without passing the cap."""
        self.scale = min(self.max_scale, self.scale + amount)

    def __repr__(self) -> str:
        state = "transformed" if self.transformed else "fresh"
        return f"FallingObject({self.variant.value}, {state}, x={self.x:.1f}, y={self.y:.1f})"


@dataclass
class RunState:
    """Score bookkeeping and the current phase of the run."""
    high_score: int = 0
    score: int = 0
    phase: GamePhase = GamePhase.PLAYING
    score_flash: int = 0

    @property
    def is_terminal(self) -> bool:
        """True once a fatal collision has happened."""
        return self.phase is not GamePhase.PLAYING

    def reset(self) -> None:
        """Clear the run, keeping the high score."""
        self.score = 0
        self.phase = GamePhase.PLAYING
        self.score_flash = 0


@dataclass
class GameState:
    """
    Everything the simulation owns.

    One instance is passed by reference into the simulator and read by the
    renderers; there is no other mutable game state.
    """
    config: GameConfig
    player: PlayerState
    sparkles: SparklePool
    explosion: ExplosionPool
    run: RunState
    rng: random.Random
    objects: List[FallingObject] = field(default_factory=list)
    tick: int = 0
    frames: float = 0.0  # Playing time in display frames (sum of dt)

    @classmethod
    def new(
        cls,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        high_score: int = 0
    ) -> "GameState":
        """
        Build a fresh state ready for the first tick.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
            high_score: Previously persisted high score.
        """
        if config is None:
            config = get_config()

        return cls(
            config=config,
            player=PlayerState.spawn(config),
            sparkles=SparklePool(config.sparkle),
            explosion=ExplosionPool(config.explosion),
            run=RunState(high_score=high_score),
            rng=random.Random(seed)
        )

    @property
    def phase(self) -> GamePhase:
        return self.run.phase

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Clear every collection and restore player/run state.

        Args:
            seed: New random seed. Keeps the current generator if None.
        """
        if seed is not None:
            self.rng = random.Random(seed)

        self.objects.clear()
        self.sparkles.clear()
        self.explosion.clear()
        self.player = PlayerState.spawn(self.config)
        self.run.reset()
        self.tick = 0
        self.frames = 0.0
