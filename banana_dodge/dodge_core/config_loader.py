"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class FieldConfig:
    """Logical play field size (independent of window size)."""
    width: int
    height: int


@dataclass(frozen=True)
class PlayerConfig:
    """Player geometry and movement."""
    width: float
    height: float
    speed: float              # Pixels per frame while moving
    bottom_offset: float      # Distance from field bottom to player top
    animation_step: float     # Animation phase advance per moving frame
    pointer_deadzone: float   # Pointer follow stops inside this distance


@dataclass(frozen=True)
class ObstacleConfig:
    """Falling object geometry, speeds and variant transitions."""
    width: float
    height: float
    spawn_y: float
    min_speed: float
    max_speed: float
    start_scale: float
    max_scale: float
    growth_per_tick: float
    growing_slowdown: float        # Speed multiplier applied when a growing object turns
    bonus_ripen_divisor: float     # Bonus ripens at field height / divisor
    growing_trigger_divisor: float # Growing object turns at field height / divisor


@dataclass(frozen=True)
class SpawnConfig:
    """Spawner cadence and variant odds."""
    interval_ticks: int
    min_count: int
    max_count: int
    max_attempts: int
    bonus_chance: float
    growing_chance: float     # Rolled only when the bonus roll fails


@dataclass(frozen=True)
class CollisionConfig:
    """Hitbox shrink applied to both player and objects."""
    padding: float


@dataclass(frozen=True)
class ScoringConfig:
    """Points and cosmetic flash duration."""
    dodge_points: int
    bonus_points: int
    flash_ticks: int


@dataclass(frozen=True)
class SparkleConfig:
    """Bonus pickup sparkle burst."""
    count: int
    min_speed: float
    max_speed: float
    min_size: float
    max_size: float
    min_decay: float
    max_decay: float
    friction: float
    colors: Tuple[Color, ...]


@dataclass(frozen=True)
class ExplosionConfig:
    """Fatal collision fire and smoke burst."""
    fire_count: int
    fire_min_speed: float
    fire_max_speed: float
    fire_min_size: float
    fire_max_size: float
    fire_min_decay: float
    fire_max_decay: float
    fire_friction: float
    fire_gravity: float
    fire_colors: Tuple[Color, ...]
    smoke_count: int
    smoke_min_speed: float
    smoke_max_speed: float
    smoke_lift: float
    smoke_min_size: float
    smoke_max_size: float
    smoke_min_decay: float
    smoke_max_decay: float
    smoke_friction: float
    smoke_rise: float
    smoke_growth: float
    smoke_color: Color


@dataclass(frozen=True)
class RestartButtonConfig:
    """Restart button rectangle, centred horizontally below the field centre."""
    width: float
    height: float
    offset_y: float


@dataclass(frozen=True)
class PersistenceConfig:
    """Where the high score lives."""
    high_score_path: str


@dataclass(frozen=True)
class DisplayConfig:
    """Host loop settings."""
    fps: int
    window_width: int
    window_height: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_objects: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    field: FieldConfig
    player: PlayerConfig
    obstacles: ObstacleConfig
    spawn: SpawnConfig
    collision: CollisionConfig
    scoring: ScoringConfig
    sparkle: SparkleConfig
    explosion: ExplosionConfig
    restart_button: RestartButtonConfig
    persistence: PersistenceConfig
    display: DisplayConfig
    observation: ObservationConfig

    @property
    def min_gap(self) -> float:
        """Narrowest horizontal span the player can pass through."""
        return self.player.width

    @property
    def bonus_ripen_y(self) -> float:
        """Y at which bonus objects ripen."""
        return self.field.height / self.obstacles.bonus_ripen_divisor

    @property
    def growing_trigger_y(self) -> float:
        """Y at which growing objects turn, slow down and start growing."""
        return self.field.height / self.obstacles.growing_trigger_divisor


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_colors(colors_data: List) -> Tuple[Color, ...]:
    """Parse a non-empty list of RGB colors."""
    if not colors_data:
        raise ValueError("Color palette must not be empty")
    return tuple(_parse_color(c) for c in colors_data)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.field.width <= 0 or config.field.height <= 0:
        raise ValueError(
            f"Field size must be positive, got {config.field.width}x{config.field.height}"
        )

    if config.player.width <= 0 or config.player.height <= 0:
        raise ValueError("Player size must be positive")

    if config.player.width > config.field.width:
        raise ValueError(
            f"Player width ({config.player.width}) exceeds field width ({config.field.width})"
        )

    obstacles = config.obstacles
    if obstacles.width <= 0 or obstacles.height <= 0:
        raise ValueError("Obstacle size must be positive")

    if obstacles.min_speed <= 0 or obstacles.max_speed < obstacles.min_speed:
        raise ValueError(
            f"Obstacle speed range invalid: [{obstacles.min_speed}, {obstacles.max_speed}]"
        )

    if obstacles.max_scale < obstacles.start_scale:
        raise ValueError(
            f"max_scale ({obstacles.max_scale}) must be >= start_scale ({obstacles.start_scale})"
        )

    if obstacles.bonus_ripen_divisor <= 0 or obstacles.growing_trigger_divisor <= 0:
        raise ValueError("Transition divisors must be positive")

    spawn = config.spawn
    if spawn.interval_ticks <= 0:
        raise ValueError(f"spawn.interval_ticks must be positive, got {spawn.interval_ticks}")

    if not 1 <= spawn.min_count <= spawn.max_count:
        raise ValueError(
            f"Spawn count range invalid: [{spawn.min_count}, {spawn.max_count}]"
        )

    for name in ("bonus_chance", "growing_chance"):
        value = getattr(spawn, name)
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"spawn.{name} must be in [0, 1], got {value}")

    if config.min_gap + obstacles.width > config.field.width:
        raise ValueError("Field too narrow for an obstacle plus a passable gap")

    if config.collision.padding < 0:
        raise ValueError("collision.padding must be non-negative")

    if config.observation.max_objects <= 0:
        raise ValueError("observation.max_objects must be positive")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    field_data = raw["field"]
    field = FieldConfig(
        width=int(field_data["width"]),
        height=int(field_data["height"])
    )

    player_data = raw["player"]
    player = PlayerConfig(
        width=float(player_data["width"]),
        height=float(player_data["height"]),
        speed=float(player_data["speed"]),
        bottom_offset=float(player_data.get("bottom_offset", 120)),
        animation_step=float(player_data.get("animation_step", 0.15)),
        pointer_deadzone=float(player_data.get("pointer_deadzone", 2.0))
    )

    obs_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        width=float(obs_data["width"]),
        height=float(obs_data["height"]),
        spawn_y=float(obs_data.get("spawn_y", -20)),
        min_speed=float(obs_data["min_speed"]),
        max_speed=float(obs_data["max_speed"]),
        start_scale=float(obs_data.get("start_scale", 1.5)),
        max_scale=float(obs_data.get("max_scale", 4.5)),
        growth_per_tick=float(obs_data.get("growth_per_tick", 0.03)),
        growing_slowdown=float(obs_data.get("growing_slowdown", 0.5)),
        bonus_ripen_divisor=float(obs_data.get("bonus_ripen_divisor", 2)),
        growing_trigger_divisor=float(obs_data.get("growing_trigger_divisor", 3))
    )

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        interval_ticks=int(spawn_data["interval_ticks"]),
        min_count=int(spawn_data.get("min_count", 1)),
        max_count=int(spawn_data.get("max_count", 2)),
        max_attempts=int(spawn_data.get("max_attempts", 20)),
        bonus_chance=float(spawn_data["bonus_chance"]),
        growing_chance=float(spawn_data["growing_chance"])
    )

    collision = CollisionConfig(
        padding=float(raw.get("collision", {}).get("padding", 8))
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        dodge_points=int(scoring_data["dodge_points"]),
        bonus_points=int(scoring_data["bonus_points"]),
        flash_ticks=int(scoring_data.get("flash_ticks", 20))
    )

    sp = raw["sparkle"]
    sparkle = SparkleConfig(
        count=int(sp["count"]),
        min_speed=float(sp["min_speed"]),
        max_speed=float(sp["max_speed"]),
        min_size=float(sp["min_size"]),
        max_size=float(sp["max_size"]),
        min_decay=float(sp["min_decay"]),
        max_decay=float(sp["max_decay"]),
        friction=float(sp.get("friction", 0.95)),
        colors=_parse_colors(sp["colors"])
    )

    ex = raw["explosion"]
    explosion = ExplosionConfig(
        fire_count=int(ex["fire_count"]),
        fire_min_speed=float(ex["fire_min_speed"]),
        fire_max_speed=float(ex["fire_max_speed"]),
        fire_min_size=float(ex["fire_min_size"]),
        fire_max_size=float(ex["fire_max_size"]),
        fire_min_decay=float(ex["fire_min_decay"]),
        fire_max_decay=float(ex["fire_max_decay"]),
        fire_friction=float(ex.get("fire_friction", 0.98)),
        fire_gravity=float(ex.get("fire_gravity", 0.3)),
        fire_colors=_parse_colors(ex["fire_colors"]),
        smoke_count=int(ex["smoke_count"]),
        smoke_min_speed=float(ex["smoke_min_speed"]),
        smoke_max_speed=float(ex["smoke_max_speed"]),
        smoke_lift=float(ex.get("smoke_lift", 1.0)),
        smoke_min_size=float(ex["smoke_min_size"]),
        smoke_max_size=float(ex["smoke_max_size"]),
        smoke_min_decay=float(ex["smoke_min_decay"]),
        smoke_max_decay=float(ex["smoke_max_decay"]),
        smoke_friction=float(ex.get("smoke_friction", 0.95)),
        smoke_rise=float(ex.get("smoke_rise", 0.1)),
        smoke_growth=float(ex.get("smoke_growth", 0.2)),
        smoke_color=_parse_color(ex.get("smoke_color", [51, 51, 51]))
    )

    button_data = raw.get("restart_button", {})
    restart_button = RestartButtonConfig(
        width=float(button_data.get("width", 250)),
        height=float(button_data.get("height", 60)),
        offset_y=float(button_data.get("offset_y", 60))
    )

    persistence_data = raw.get("persistence", {})
    persistence = PersistenceConfig(
        high_score_path=str(persistence_data.get(
            "high_score_path", "~/.banana_dodge/high_score.json"
        ))
    )

    display_data = raw.get("display", {})
    display = DisplayConfig(
        fps=int(display_data.get("fps", 60)),
        window_width=int(display_data.get("window_width", field.width)),
        window_height=int(display_data.get("window_height", field.height))
    )

    observation_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_objects=int(observation_data.get("max_objects", 32)),
        image_width=int(observation_data.get("image_width", 200)),
        image_height=int(observation_data.get("image_height", 150))
    )

    config = GameConfig(
        field=field,
        player=player,
        obstacles=obstacles,
        spawn=spawn,
        collision=collision,
        scoring=scoring,
        sparkle=sparkle,
        explosion=explosion,
        restart_button=restart_button,
        persistence=persistence,
        display=display,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
