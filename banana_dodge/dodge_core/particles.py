"""
Particle Pools
==============

Cosmetic particle effects: the sparkle burst of a bonus pickup and the
fire/smoke explosion of a fatal collision.

Each pool owns its particles exclusively and integrates them once per tick.
A particle is dropped as soon as its life reaches zero.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from banana_dodge.dodge_core.config_loader import ExplosionConfig, SparkleConfig


@dataclass
class Particle:
    """A single particle. Life starts at 1.0 and counts down by decay."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    decay: float
    color: Tuple[int, int, int]
    friction: float
    life: float = 1.0
    is_smoke: bool = False

    @property
    def alive(self) -> bool:
        return self.life > 0.0


class ParticlePool:
    """
    Base particle container.

    Subclasses define how a particle is integrated for one tick; the pool
    handles aging and compaction.
    """

    def __init__(self) -> None:
        self._particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    @property
    def particles(self) -> List[Particle]:
        """Live particles, oldest first."""
        return self._particles

    @property
    def is_empty(self) -> bool:
        return not self._particles

    def clear(self) -> None:
        self._particles = []

    def add(self, particle: Particle) -> None:
        self._particles.append(particle)

    def update(self, dt: float = 1.0) -> None:
        """Integrate every particle by one tick, then drop the dead ones."""
        for p in self._particles:
            self._integrate(p, dt)
            p.life -= p.decay * dt
        self._particles = [p for p in self._particles if p.alive]

    def _integrate(self, p: Particle, dt: float) -> None:
        raise NotImplementedError


class SparklePool(ParticlePool):
    """Bonus pickup sparkles: plain friction, no gravity."""

    def __init__(self, config: SparkleConfig):
        super().__init__()
        self._config = config

    def _integrate(self, p: Particle, dt: float) -> None:
        p.x += p.vx * dt
        p.y += p.vy * dt
        damping = p.friction ** dt
        p.vx *= damping
        p.vy *= damping

    def burst(self, x: float, y: float, rng: random.Random) -> None:
        """Emit a radial ring of sparkles centred on (x, y)."""
        cfg = self._config
        for _ in range(cfg.count):
            angle = rng.uniform(0.0, math.pi * 2)
            speed = rng.uniform(cfg.min_speed, cfg.max_speed)
            self.add(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                size=rng.uniform(cfg.min_size, cfg.max_size),
                decay=rng.uniform(cfg.min_decay, cfg.max_decay),
                color=rng.choice(cfg.colors),
                friction=cfg.friction
            ))


class ExplosionPool(ParticlePool):
    """
    Fatal collision debris.

    Fire falls under gravity; smoke rises and expands. Velocity is damped
    before it is applied, unlike sparkles.
    """

    def __init__(self, config: ExplosionConfig):
        super().__init__()
        self._config = config

    def _integrate(self, p: Particle, dt: float) -> None:
        damping = p.friction ** dt
        p.vx *= damping
        p.vy *= damping

        p.x += p.vx * dt
        p.y += p.vy * dt

        if p.is_smoke:
            p.vy -= self._config.smoke_rise * dt
            p.size += self._config.smoke_growth * dt
        else:
            p.vy += self._config.fire_gravity * dt

    def burst(self, x: float, y: float, rng: random.Random) -> None:
        """Emit fire particles followed by smoke, all from (x, y)."""
        cfg = self._config

        for _ in range(cfg.fire_count):
            angle = rng.uniform(0.0, math.pi * 2)
            speed = rng.uniform(cfg.fire_min_speed, cfg.fire_max_speed)
            self.add(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                size=rng.uniform(cfg.fire_min_size, cfg.fire_max_size),
                decay=rng.uniform(cfg.fire_min_decay, cfg.fire_max_decay),
                color=rng.choice(cfg.fire_colors),
                friction=cfg.fire_friction
            ))

        for _ in range(cfg.smoke_count):
            angle = rng.uniform(0.0, math.pi * 2)
            speed = rng.uniform(cfg.smoke_min_speed, cfg.smoke_max_speed)
            self.add(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed - cfg.smoke_lift,
                size=rng.uniform(cfg.smoke_min_size, cfg.smoke_max_size),
                decay=rng.uniform(cfg.smoke_min_decay, cfg.smoke_max_decay),
                color=cfg.smoke_color,
                friction=cfg.smoke_friction,
                is_smoke=True
            ))
