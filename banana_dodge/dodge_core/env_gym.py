"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to Banana Dodge.
One environment step is one simulation tick.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from banana_dodge.dodge_core.config_loader import GameConfig, load_config
from banana_dodge.dodge_core.game import CoreGame
from banana_dodge.dodge_core.state_snapshot import GameSnapshot, SnapshotBuilder

# Discrete action -> horizontal intent
ACTION_TO_INTENT = (-1, 0, 1)


class DodgeEnv(gym.Env):
    """
    Banana Dodge as a Gymnasium environment.

    Action Space:
        Discrete(3): 0 = move left, 1 = stay, 2 = move right.

    Observation Space:
        Dict of player state, run state and fixed-size object arrays,
        plus an optional RGB image.

    Reward:
        Score gained this tick (+10 per dodged banana, +200 per bonus).

    Termination:
        On the tick of a fatal collision. Truncated after max_ticks.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        render_style: str = "solid",
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        max_ticks: int = 10_000,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            render_style: "solid" for flat shapes, "full" for the pygame presenter.
            image_obs: If True, include board_rgb in observations.
            image_width: Override observation image width.
            image_height: Override observation image height.
            max_ticks: Truncate episodes after this many playing ticks.
            debug: If True, prints per-step debug output.
        """
        super().__init__()

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._render_style = render_style
        self._image_obs = image_obs
        self._max_ticks = max_ticks
        self._debug = debug

        self._img_width = image_width or self._config.observation.image_width
        self._img_height = image_height or self._config.observation.image_height

        self._game = CoreGame(config=self._config)
        self._snapshot_builder = SnapshotBuilder(self._config)

        # Renderers (lazy)
        self._renderer = None
        self._screen_renderer = None

        self.action_space = spaces.Discrete(len(ACTION_TO_INTENT))
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] DodgeEnv initialized")
            print(f"[DEBUG]   Field: {self._config.field.width}x{self._config.field.height}")
            print(f"[DEBUG]   Max objects: {self._config.observation.max_objects}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_obj = self._config.observation.max_objects
        field = self._config.field
        score_high = np.iinfo(np.int64).max

        obs_dict = {
            "player_x": spaces.Box(low=0, high=field.width, shape=(), dtype=np.float32),
            "player_dx": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=score_high, shape=(), dtype=np.int64),
            "high_score": spaces.Box(low=0, high=score_high, shape=(), dtype=np.int64),
            "phase": spaces.Discrete(3),
            "objects_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),

            "obj_variant": spaces.Box(low=-1, high=2, shape=(max_obj,), dtype=np.int8),
            "obj_transformed": spaces.MultiBinary(max_obj),
            "obj_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_speed": spaces.Box(low=0, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_scale": spaces.Box(low=0, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_mask": spaces.MultiBinary(max_obj),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.start(seed=seed)

        obs = self._snapshot_to_obs(self._snapshot_builder.build(self._game.state))
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one tick.

        Args:
            action: 0 (left), 1 (stay) or 2 (right).

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())
        intent = ACTION_TO_INTENT[int(action)]

        result = self._game.step(intent)

        obs = self._snapshot_to_obs(self._snapshot_builder.build(self._game.state))
        reward = float(result.delta_score)
        terminated = self._game.is_over
        truncated = not terminated and self._game.state.tick >= self._max_ticks

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["bonus_collected"] = result.bonus_collected
        info["dodged"] = result.dodged

        if self._debug:
            print(f"[DEBUG] Step: intent={intent:+d}, delta_score={result.delta_score}, "
                  f"objects={info['object_count']}, phase={info['phase']}")
            if result.fatal:
                print(f"[DEBUG] TERMINATED: fatal collision at score {info['score']}")

        return obs, reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        obs = snapshot.to_obs_dict()

        if self._image_obs:
            obs["board_rgb"] = self._render_to_array()

        return obs

    def _render_to_array(self) -> np.ndarray:
        """Render the field to an RGB array."""
        if self._renderer is None:
            self._init_renderer()

        return self._renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def _init_renderer(self) -> None:
        """Initialize renderer based on style."""
        if self._render_style == "full":
            try:
                from banana_dodge.dodge_core.render_pygame import PygameRenderer
                self._renderer = PygameRenderer(self._config)
            except ImportError:
                # Fall back to solid if pygame not available
                from banana_dodge.dodge_core.render_solid import SolidRenderer
                self._renderer = SolidRenderer(self._config)
        else:
            from banana_dodge.dodge_core.render_solid import SolidRenderer
            self._renderer = SolidRenderer(self._config)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._screen_renderer is None:
                from banana_dodge.dodge_core.render_pygame import PygameRenderer
                self._screen_renderer = PygameRenderer(self._config)

            self._screen_renderer.render_to_screen(self._game.get_render_data())
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        for renderer in (self._renderer, self._screen_renderer):
            if renderer is not None:
                renderer.close()
        self._renderer = None
        self._screen_renderer = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
