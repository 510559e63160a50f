"""
Input Source
============

Resolves raw controls into the horizontal intent the simulator consumes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from banana_dodge.dodge_core.config_loader import GameConfig, get_config
from banana_dodge.dodge_core.entities import PlayerState

LEFT = -1
IDLE = 0
RIGHT = 1


@dataclass
class ControlState:
    """Controls sampled by the host for one tick."""
    left: bool = False
    right: bool = False
    pointer_x: Optional[float] = None  # Field coordinates, None when not touching


class IntentResolver:
    """
    Maps keyboard and pointer state to an intent in {-1, 0, +1}.

    Keyboard: right wins when both directions are held.
    Pointer: steer the player's centre toward the pointer; this overrides the
    keyboard and stops inside a small deadzone.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize resolver.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._deadzone = config.player.pointer_deadzone

    def resolve(self, player: PlayerState, controls: ControlState) -> int:
        intent = IDLE
        if controls.left:
            intent = LEFT
        if controls.right:
            intent = RIGHT

        if controls.pointer_x is not None:
            target_x = controls.pointer_x - player.width / 2
            diff = target_x - player.x
            if abs(diff) > self._deadzone:
                intent = RIGHT if diff > 0 else LEFT

        return intent
