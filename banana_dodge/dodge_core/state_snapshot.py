"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from banana_dodge.dodge_core.config_loader import GameConfig, get_config
from banana_dodge.dodge_core.entities import GamePhase, GameState, Variant

PHASE_IDS = {
    GamePhase.PLAYING: 0,
    GamePhase.EXPLODING: 1,
    GamePhase.GAME_OVER_DISPLAYED: 2,
}

VARIANT_IDS = {
    Variant.NORMAL: 0,
    Variant.BONUS: 1,
    Variant.GROWING: 2,
}


@dataclass
class GameSnapshot:
    """
    Game state snapshot.

    Object arrays are fixed-size with masking for variable object counts.
    Objects are packed oldest first, so the lowest (most urgent) ones survive
    truncation.
    """
    # Core state
    player_x: float
    player_dx: float
    score: int
    high_score: int
    phase: int
    tick: int
    objects_count: int
    sparkle_count: int
    explosion_count: int

    # Field info (for normalization)
    field_width: float
    field_height: float
    player_y: float

    # Object arrays (fixed size, padded)
    obj_variant: np.ndarray       # (MAX_OBJ,) int8, -1 for padding
    obj_transformed: np.ndarray   # (MAX_OBJ,) bool
    obj_x: np.ndarray             # (MAX_OBJ,) float32
    obj_y: np.ndarray             # (MAX_OBJ,) float32
    obj_speed: np.ndarray         # (MAX_OBJ,) float32
    obj_scale: np.ndarray         # (MAX_OBJ,) float32
    obj_mask: np.ndarray          # (MAX_OBJ,) bool

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "player_x": np.array(self.player_x, dtype=np.float32),
            "player_dx": np.array(self.player_dx, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "high_score": np.array(self.high_score, dtype=np.int64),
            "phase": np.array(self.phase, dtype=np.int32),
            "objects_count": np.array(self.objects_count, dtype=np.int32),

            "obj_variant": self.obj_variant,
            "obj_transformed": self.obj_transformed,
            "obj_x": self.obj_x,
            "obj_y": self.obj_y,
            "obj_speed": self.obj_speed,
            "obj_scale": self.obj_scale,
            "obj_mask": self.obj_mask,
        }

        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb

        return obs


class SnapshotBuilder:
    """Builds game state snapshots."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_objects = config.observation.max_objects

    @property
    def max_objects(self) -> int:
        return self._max_objects

    def build(
        self,
        state: GameState,
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """Build a snapshot from current game state."""
        n = self._max_objects
        obj_variant = np.full(n, -1, dtype=np.int8)
        obj_transformed = np.zeros(n, dtype=bool)
        obj_x = np.zeros(n, dtype=np.float32)
        obj_y = np.zeros(n, dtype=np.float32)
        obj_speed = np.zeros(n, dtype=np.float32)
        obj_scale = np.zeros(n, dtype=np.float32)
        obj_mask = np.zeros(n, dtype=bool)

        objects = state.objects[:n]
        for i, obj in enumerate(objects):
            obj_variant[i] = VARIANT_IDS[obj.variant]
            obj_transformed[i] = obj.transformed
            obj_x[i] = obj.x
            obj_y[i] = obj.y
            obj_speed[i] = obj.speed
            obj_scale[i] = obj.scale
            obj_mask[i] = True

        return GameSnapshot(
            player_x=state.player.x,
            player_dx=state.player.dx,
            score=state.run.score,
            high_score=state.run.high_score,
            phase=PHASE_IDS[state.run.phase],
            tick=state.tick,
            objects_count=len(state.objects),
            sparkle_count=len(state.sparkles),
            explosion_count=len(state.explosion),
            field_width=float(self._config.field.width),
            field_height=float(self._config.field.height),
            player_y=state.player.y,
            obj_variant=obj_variant,
            obj_transformed=obj_transformed,
            obj_x=obj_x,
            obj_y=obj_y,
            obj_speed=obj_speed,
            obj_scale=obj_scale,
            obj_mask=obj_mask,
            board_rgb=board_rgb
        )
