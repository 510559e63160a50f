"""
Solid Renderer
==============

Fast numpy-based renderer that draws every entity as a flat rectangle.
Shows scaled object footprints, the player box and particle dots.
"""

from __future__ import annotations

from typing import Dict, Any, Optional, Tuple
import numpy as np

from banana_dodge.dodge_core.config_loader import GameConfig, get_config

# Bonus and growing bananas look normal until they transform
GREEN_COLOR = (50, 205, 50)
RIPE_BONUS_COLOR = (255, 215, 0)
TURNED_GROWING_COLOR = (26, 26, 26)


class SolidRenderer:
    """
    Renders the field as solid-color rectangles.

    Uses numpy for fast CPU-based rendering without pygame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

        self._bg_color = np.array([135, 206, 235], dtype=np.uint8)
        self._ground_color = np.array([26, 77, 15], dtype=np.uint8)
        self._player_color = np.array([139, 69, 19], dtype=np.uint8)
        self._flash_color = np.array([255, 0, 0], dtype=np.uint8)
        self._score_color = np.array([255, 255, 255], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color

        scale_x = width / render_data["field_width"]
        scale_y = height / render_data["field_height"]

        # Ground strip
        ground_top = int(height - 60 * scale_y)
        img[max(0, ground_top):, :] = self._ground_color

        for obj in render_data["objects"]:
            scaled_w = obj["width"] * obj["scale"]
            scaled_h = obj["height"] * obj["scale"]
            x = obj["x"] - (scaled_w - obj["width"]) / 2
            y = obj["y"] - (scaled_h - obj["height"]) / 2
            self._fill_rect(
                img, x * scale_x, y * scale_y, scaled_w * scale_x, scaled_h * scale_y,
                self._object_color(obj)
            )

        if render_data["phase"] == "playing":
            player = render_data["player"]
            self._fill_rect(
                img,
                player["x"] * scale_x, player["y"] * scale_y,
                player["width"] * scale_x, player["height"] * scale_y,
                self._player_color
            )
            for p in render_data["sparkles"]:
                self._draw_dot(img, p, scale_x, scale_y)

        for p in render_data["explosion"]:
            self._draw_dot(img, p, scale_x, scale_y)

        self._draw_score_bar(img, render_data, width)
        return img

    @staticmethod
    def _object_color(obj: Dict[str, Any]) -> Tuple[int, int, int]:
        if obj["transformed"] and obj["variant"] == "bonus":
            return RIPE_BONUS_COLOR
        if obj["transformed"] and obj["variant"] == "growing":
            return TURNED_GROWING_COLOR
        return GREEN_COLOR

    @staticmethod
    def _fill_rect(
        img: np.ndarray,
        x: float,
        y: float,
        w: float,
        h: float,
        color
    ) -> None:
        """Fill a rectangle, clipped to the image."""
        height, width = img.shape[:2]
        x0 = max(0, int(x))
        y0 = max(0, int(y))
        x1 = min(width, int(x + w))
        y1 = min(height, int(y + h))
        if x0 < x1 and y0 < y1:
            img[y0:y1, x0:x1] = color

    def _draw_dot(
        self,
        img: np.ndarray,
        particle: Dict[str, Any],
        scale_x: float,
        scale_y: float
    ) -> None:
        """Draw a particle as a square faded toward the pixel below it."""
        size = max(1.0, particle["size"] * scale_x)
        x = particle["x"] * scale_x - size / 2
        y = particle["y"] * scale_y - size / 2
        height, width = img.shape[:2]
        x0, y0 = max(0, int(x)), max(0, int(y))
        x1, y1 = min(width, int(x + size) + 1), min(height, int(y + size) + 1)
        if x0 >= x1 or y0 >= y1:
            return

        alpha = max(0.0, min(1.0, particle["life"]))
        region = img[y0:y1, x0:x1].astype(np.float32)
        color = np.array(particle["color"], dtype=np.float32)
        img[y0:y1, x0:x1] = (region * (1 - alpha) + color * alpha).astype(np.uint8)

    def _draw_score_bar(self, img: np.ndarray, render_data: Dict[str, Any], width: int) -> None:
        """Thin bar along the top whose length tracks score against high score."""
        best = max(render_data["high_score"], render_data["score"], 1)
        bar_len = int(width * render_data["score"] / best)
        color = self._flash_color if render_data["score_flash"] > 0 else self._score_color
        if bar_len > 0:
            img[0:3, 0:bar_len] = color

    def close(self) -> None:
        """Nothing to release."""
