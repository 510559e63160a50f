"""
Core Game
=========

Main game orchestrator combining the simulation state, the simulator, the
rules and high score persistence.
"""

from __future__ import annotations

from typing import Optional, List, Dict, Any

from banana_dodge.dodge_core.config_loader import GameConfig, get_config
from banana_dodge.dodge_core.entities import FallingObject, GamePhase, GameState
from banana_dodge.dodge_core.high_score_store import MemoryHighScoreStore
from banana_dodge.dodge_core.input_source import ControlState, IntentResolver
from banana_dodge.dodge_core.rules import GameRules, PhaseRules
from banana_dodge.dodge_core.simulator import Simulator, TickResult


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Game state (player, objects, particle pools, run state)
    - Simulator (one tick per call to step)
    - Restart control and reset gating
    - High score persistence

    One step = one tick = one display frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        store=None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility.
            store: High score store with load()/save(). In-memory if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._store = store if store is not None else MemoryHighScoreStore()

        self._simulator = Simulator(config)
        self._rules = GameRules(config)
        self._intents = IntentResolver(config)
        self._state = GameState.new(config, seed=seed, high_score=self._store.load())

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def state(self) -> GameState:
        """The live simulation state (read-only by convention)."""
        return self._state

    @property
    def rules(self) -> GameRules:
        return self._rules

    @property
    def score(self) -> int:
        """Current score."""
        return self._state.run.score

    @property
    def high_score(self) -> int:
        return self._state.run.high_score

    @property
    def phase(self) -> GamePhase:
        return self._state.run.phase

    @property
    def is_over(self) -> bool:
        """True once the run has ended (exploding or showing game over)."""
        return self._state.run.is_terminal

    @property
    def needs_tick(self) -> bool:
        """False once the game over screen is up; hosts may stop ticking."""
        return self.phase is not GamePhase.GAME_OVER_DISPLAYED

    @property
    def objects(self) -> List[FallingObject]:
        return self._state.objects

    def start(self, seed: Optional[int] = None) -> None:
        """
        Begin a fresh run regardless of phase (new episode).

        Args:
            seed: New random seed. Uses previous if None.
        """
        if seed is not None:
            self._seed = seed
        self._state.reset(seed=self._seed)

    def reset(self, seed: Optional[int] = None) -> bool:
        """
        Reset after a game over.

        Only accepted while exploding or showing the game over screen.

        Returns:
            True if the game was reset.
        """
        if not PhaseRules.can_reset(self.phase):
            return False
        self._state.reset(seed=seed)
        return True

    def click(self, x: float, y: float) -> bool:
        """
        Feed a click/tap in field coordinates to the restart control.

        Returns:
            True if it restarted the game.
        """
        if not self._rules.restart_button.accepts(self.phase, x, y):
            return False
        return self.reset()

    def resolve_intent(self, controls: ControlState) -> int:
        """Turn sampled controls into an intent for the current player position."""
        return self._intents.resolve(self._state.player, controls)

    def step(self, intent: float = 0, dt: float = 1.0) -> TickResult:
        """
        Advance one tick and persist a new high score.

        Args:
            intent: Horizontal intent; only its sign is used.
            dt: Tick length in display frames.

        Returns:
            TickResult for the tick.
        """
        result = self._simulator.advance(self._state, intent, dt)
        if result.new_high_score:
            self._store.save(self._state.run.high_score)
        return result

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        state = self._state
        return {
            "score": state.run.score,
            "high_score": state.run.high_score,
            "phase": state.run.phase.value,
            "tick": state.tick,
            "object_count": len(state.objects),
            "sparkle_count": len(state.sparkles),
            "explosion_count": len(state.explosion),
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Everything is copied out of the live state, so a renderer sees one
        consistent tick and cannot mutate the simulation.
        """
        state = self._state
        player = state.player

        objects_data = []
        for obj in state.objects:
            objects_data.append({
                "x": obj.x,
                "y": obj.y,
                "width": obj.width,
                "height": obj.height,
                "variant": obj.variant.value,
                "transformed": obj.transformed,
                "scale": obj.scale,
                "rotation": obj.rotation,
            })

        def particle_data(pool) -> List[Dict[str, Any]]:
            return [
                {
                    "x": p.x,
                    "y": p.y,
                    "size": p.size,
                    "life": p.life,
                    "color": p.color,
                    "is_smoke": p.is_smoke,
                }
                for p in pool
            ]

        return {
            "field_width": self._config.field.width,
            "field_height": self._config.field.height,
            "player": {
                "x": player.x,
                "y": player.y,
                "width": player.width,
                "height": player.height,
                "dx": player.dx,
                "animation_phase": player.animation_phase,
            },
            "objects": objects_data,
            "sparkles": particle_data(state.sparkles),
            "explosion": particle_data(state.explosion),
            "score": state.run.score,
            "high_score": state.run.high_score,
            "score_flash": state.run.score_flash,
            "phase": state.run.phase.value,
            "restart_button": self._rules.restart_button.rect,
        }
