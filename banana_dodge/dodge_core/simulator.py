"""
Simulator
=========

The single authoritative per-tick state transition.

One tick while playing:
    player -> objects (move, ripen, grow, dodge) -> spawner -> sparkles
    -> collision scan
While exploding only the explosion debris moves; once it has burnt out the
game over screen is shown and ticks become no-ops.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import List, Optional

from banana_dodge.dodge_core.collision import find_collision
from banana_dodge.dodge_core.config_loader import GameConfig
from banana_dodge.dodge_core.entities import GamePhase, GameState
from banana_dodge.dodge_core.rules import PhaseRules
from banana_dodge.dodge_core.scoring import ScoreEvent, ScoreTracker
from banana_dodge.dodge_core.spawner import Spawner


@dataclass
class TickResult:
    """Result of a single simulation tick."""
    state: GameState
    delta_score: int = 0
    events: List[ScoreEvent] = field(default_factory=list)
    spawned: int = 0
    dodged: int = 0
    bonus_collected: bool = False
    fatal: bool = False
    new_high_score: bool = False
    phase_changed: bool = False

    @property
    def phase(self) -> GamePhase:
        return self.state.run.phase


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


class Simulator:
    """
    Advances a GameState by one tick.

    Holds only configuration-derived helpers; all mutable state lives in the
    GameState passed to advance().
    """

    def __init__(self, config: GameConfig):
        self._config = config
        self._spawner = Spawner(config)
        self._scorer = ScoreTracker(config)

        self._field_width = config.field.width
        self._field_height = config.field.height
        self._ripen_y = config.bonus_ripen_y
        self._growing_y = config.growing_trigger_y
        self._padding = config.collision.padding

    @property
    def spawner(self) -> Spawner:
        return self._spawner

    def advance(self, state: GameState, intent: float = 0, dt: float = 1.0) -> TickResult:
        """
        Execute one tick.

        Args:
            state: The state to advance. Mutated in place.
            intent: Horizontal intent; only its sign is used.
            dt: Tick length in display frames (1.0 = one 60 Hz frame). Motion,
                particles and the spawn schedule all advance by dt.

        Returns:
            TickResult describing what happened.
        """
        result = TickResult(state=state)
        run = state.run
        score_before = run.score

        ScoreTracker.tick_flash(run)

        if run.phase is GamePhase.PLAYING:
            self._advance_playing(state, intent, dt, result)
        elif run.phase is GamePhase.EXPLODING:
            state.explosion.update(dt)
            transition = PhaseRules.finish_explosion(run, state.explosion.is_empty)
            result.phase_changed = transition.accepted

        result.delta_score = run.score - score_before
        return result

    def _advance_playing(
        self,
        state: GameState,
        intent: float,
        dt: float,
        result: TickResult
    ) -> None:
        self._update_player(state, intent, dt)

        dodged = self._update_objects(state, dt)
        if dodged:
            result.dodged = dodged
            result.events.append(self._scorer.apply_dodge(state.run, dodged))

        state.tick += 1
        start = state.frames
        state.frames += dt
        for _ in range(self._spawner.batches_due(start, state.frames)):
            batch = self._spawner.spawn(state.rng)
            state.objects.extend(batch)
            result.spawned += len(batch)

        state.sparkles.update(dt)

        self._resolve_collision(state, result)

    def _update_player(self, state: GameState, intent: float, dt: float) -> None:
        player = state.player
        player.dx = _sign(intent) * self._config.player.speed
        player.x += player.dx * dt

        if player.dx != 0:
            player.animation_phase += self._config.player.animation_step * dt

        player.clamp(self._field_width)

    def _update_objects(self, state: GameState, dt: float) -> int:
        """Move every object and apply variant transitions. Returns dodge count."""
        obstacles = self._config.obstacles
        off_field = set()

        for index, obj in enumerate(state.objects):
            obj.y += obj.speed * dt

            if obj.is_bonus and not obj.transformed and obj.y >= self._ripen_y:
                obj.transform()

            if obj.is_growing and not obj.transformed and obj.y >= self._growing_y:
                obj.transform()
                obj.speed = obj.original_speed * obstacles.growing_slowdown

            if obj.is_growing and obj.transformed and obj.scale < obj.max_scale:
                obj.grow(obstacles.growth_per_tick * dt)

            if obj.y >= self._field_height:
                off_field.add(index)

        if off_field:
            state.objects = [
                obj for index, obj in enumerate(state.objects)
                if index not in off_field
            ]

        return len(off_field)

    def _resolve_collision(self, state: GameState, result: TickResult) -> None:
        """Handle the first overlapping object, newest first. At most one per tick."""
        hit = find_collision(state.player, state.objects, self._padding)
        if hit is None:
            return

        run = state.run
        if hit.is_edible:
            result.events.append(self._scorer.apply_bonus(run))
            cx, cy = hit.center
            state.sparkles.burst(cx, cy, state.rng)
            state.objects = [obj for obj in state.objects if obj is not hit]
            result.bonus_collected = True
            return

        transition = PhaseRules.enter_exploding(run)
        result.fatal = True
        result.phase_changed = transition.accepted
        result.new_high_score = ScoreTracker.commit_high_score(run)

        px, py = state.player.center
        state.explosion.burst(px, py, state.rng)


@functools.lru_cache(maxsize=8)
def _simulator_for(config: GameConfig) -> Simulator:
    return Simulator(config)


def advance(state: GameState, intent: float = 0, dt: float = 1.0) -> TickResult:
    """
    Advance state by one tick using its own configuration.

    Independent of any scheduling mechanism: hosts call this from their loop,
    tests call it directly.
    """
    return _simulator_for(state.config).advance(state, intent, dt)


def run_ticks(
    state: GameState,
    ticks: int,
    intent: float = 0,
    dt: float = 1.0
) -> Optional[TickResult]:
    """Advance several ticks with a constant intent. Returns the last result."""
    result = None
    for _ in range(ticks):
        result = advance(state, intent, dt)
    return result
