"""
Dodge Core - The game simulation and its agent interface.

This module provides the per-tick simulator, the Gymnasium environment
wrapper and all supporting systems (spawning, collision, scoring, particles).

Main exports:
- DodgeEnv: Gymnasium environment for single-agent training
- CoreGame: Game orchestrator used by hosts and the environment
- GameState / advance: Explicit simulation state and the tick function
- GameConfig: Configuration loaded from game_config.yaml
"""

from banana_dodge.dodge_core.config_loader import GameConfig, load_config
from banana_dodge.dodge_core.entities import (
    FallingObject,
    GamePhase,
    GameState,
    PlayerState,
    Variant,
)
from banana_dodge.dodge_core.simulator import TickResult, advance, run_ticks
from banana_dodge.dodge_core.game import CoreGame
from banana_dodge.dodge_core.env_gym import DodgeEnv
from banana_dodge.dodge_core.high_score_store import (
    HighScoreStore,
    MemoryHighScoreStore,
)
from banana_dodge.dodge_core.input_source import ControlState, IntentResolver

__all__ = [
    "GameConfig",
    "load_config",
    "FallingObject",
    "GamePhase",
    "GameState",
    "PlayerState",
    "Variant",
    "TickResult",
    "advance",
    "run_ticks",
    "CoreGame",
    "DodgeEnv",
    "HighScoreStore",
    "MemoryHighScoreStore",
    "ControlState",
    "IntentResolver",
]
