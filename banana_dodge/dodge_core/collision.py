"""
Collision Detection
===================

Axis-aligned hitbox tests between the player and falling objects.

Both hitboxes are shrunk by a fixed padding so that only a clear overlap of
the drawn shapes counts. Object hitboxes are first scaled by the object's
visual scale around its centre.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from banana_dodge.dodge_core.entities import FallingObject, PlayerState


@dataclass(frozen=True)
class Hitbox:
    """Axis-aligned rectangle."""
    x: float
    y: float
    width: float
    height: float

    def overlaps(self, other: "Hitbox") -> bool:
        """Strict overlap; rectangles that only touch do not collide."""
        return (
            self.x < other.x + other.width and
            self.x + self.width > other.x and
            self.y < other.y + other.height and
            self.y + self.height > other.y
        )


def player_hitbox(player: PlayerState, padding: float) -> Hitbox:
    """Player rectangle shrunk by padding on every side."""
    return Hitbox(
        x=player.x + padding,
        y=player.y + padding,
        width=player.width - padding * 2,
        height=player.height - padding * 2
    )


def object_hitbox(obj: FallingObject, padding: float) -> Hitbox:
    """Object rectangle scaled around its centre, then shrunk by padding."""
    scaled_width = obj.width * obj.scale
    scaled_height = obj.height * obj.scale
    offset_x = (scaled_width - obj.width) / 2
    offset_y = (scaled_height - obj.height) / 2

    return Hitbox(
        x=obj.x - offset_x + padding,
        y=obj.y - offset_y + padding,
        width=scaled_width - padding * 2,
        height=scaled_height - padding * 2
    )


def find_collision(
    player: PlayerState,
    objects: Sequence[FallingObject],
    padding: float
) -> Optional[FallingObject]:
    """
    Find the object the player is touching, if any.

    Objects are scanned newest first and the first overlap wins.

    Returns:
        The colliding object, or None.
    """
    hit = player_hitbox(player, padding)
    for obj in reversed(objects):
        if hit.overlaps(object_hitbox(obj, padding)):
            return obj
    return None


def find_all_collisions(
    player: PlayerState,
    objects: Sequence[FallingObject],
    padding: float
) -> List[FallingObject]:
    """Every overlapping object, newest first (for diagnostics and tests)."""
    hit = player_hitbox(player, padding)
    return [obj for obj in reversed(objects) if hit.overlaps(object_hitbox(obj, padding))]
