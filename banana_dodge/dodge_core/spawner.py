"""
Spawner
=======

Periodically drops new bananas at the top of the field.

Placement is random but constrained: objects in one batch never overlap,
never leave a gap too narrow for the player, and the batch always leaves at
least one passable gap across the full width.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence, Tuple

from banana_dodge.dodge_core.config_loader import GameConfig, get_config
from banana_dodge.dodge_core.entities import FallingObject, Variant

# (x, width) of an object's horizontal footprint
Footprint = Tuple[float, float]


def has_passable_gap(
    footprints: Sequence[Footprint],
    field_width: float,
    min_gap: float
) -> bool:
    """
    Check whether a horizontal span of at least min_gap is free.

    Considers the left edge, the spaces between neighbours and the right edge.
    """
    if not footprints:
        return field_width >= min_gap

    ordered = sorted(footprints, key=lambda fp: fp[0])

    if ordered[0][0] >= min_gap:
        return True

    for (x, width), (next_x, _) in zip(ordered, ordered[1:]):
        if next_x - (x + width) >= min_gap:
            return True

    last_x, last_width = ordered[-1]
    return field_width - (last_x + last_width) >= min_gap


class Spawner:
    """
    Batch placement of falling objects under the min-gap constraint.

    A candidate that finds no valid slot within the attempt budget is skipped
    silently; a batch may therefore hold fewer objects than requested.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._field_width = config.field.width
        self._min_gap = config.min_gap
        self._obstacles = config.obstacles
        self._spawn = config.spawn

    @property
    def min_gap(self) -> float:
        return self._min_gap

    def batches_due(self, start: float, end: float) -> int:
        """
        Number of batches due while the frame clock moves from start to end.

        A batch is placed each time the clock reaches a multiple of the
        spawn interval, so catching up on long frames keeps the real-time
        spawn rate.
        """
        interval = self._spawn.interval_ticks
        return int(end // interval) - int(start // interval)

    def fits(self, x: float, width: float, accepted: Sequence[Footprint]) -> bool:
        """
        Check a candidate footprint against the batch placed so far.

        Overlap is rejected, as is any positive gap narrower than min_gap.
        Touching footprints (gap of exactly zero) are allowed.
        """
        for other_x, other_width in accepted:
            if x < other_x + other_width and x + width > other_x:
                return False

            left_gap = x - (other_x + other_width)
            right_gap = other_x - (x + width)
            if 0 < left_gap < self._min_gap or 0 < right_gap < self._min_gap:
                return False

        return True

    def spawn(
        self,
        rng: random.Random,
        count: Optional[int] = None
    ) -> List[FallingObject]:
        """
        Place one batch of objects.

        Args:
            rng: Random source (owned by the game state).
            count: Number of candidates to try. Random in the configured
                range if None.

        Returns:
            The placed objects, in placement order.
        """
        if count is None:
            count = rng.randint(self._spawn.min_count, self._spawn.max_count)

        width = self._obstacles.width
        max_x = self._field_width - width

        placed: List[FallingObject] = []
        footprints: List[Footprint] = []

        for _ in range(count):
            for _attempt in range(self._spawn.max_attempts):
                x = rng.uniform(0.0, max_x)
                if self.fits(x, width, footprints):
                    footprints.append((x, width))
                    placed.append(self._make_object(x, rng))
                    break

        # Guarantee a path: drop random objects until a passable gap exists
        while len(placed) > 1 and not has_passable_gap(
            [(obj.x, obj.width) for obj in placed],
            self._field_width,
            self._min_gap
        ):
            placed.pop(rng.randrange(len(placed)))

        return placed

    def _make_object(self, x: float, rng: random.Random) -> FallingObject:
        """Roll speed, variant and rotation for an accepted position."""
        obstacles = self._obstacles
        speed = rng.uniform(obstacles.min_speed, obstacles.max_speed)

        variant = Variant.NORMAL
        if rng.random() < self._spawn.bonus_chance:
            variant = Variant.BONUS
        elif rng.random() < self._spawn.growing_chance:
            variant = Variant.GROWING

        return FallingObject(
            x=x,
            y=obstacles.spawn_y,
            width=obstacles.width,
            height=obstacles.height,
            speed=speed,
            original_speed=speed,
            variant=variant,
            rotation=rng.uniform(0.0, math.pi * 2),
            scale=obstacles.start_scale,
            max_scale=obstacles.max_scale
        )
