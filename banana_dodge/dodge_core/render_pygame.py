"""
Pygame Renderer
===============

Full presenter for Banana Dodge using pygame.
Draws the jungle, bananas, the helmeted monkey, particles and the score UI
onto a fixed logical surface, then scales it to a window or an RGB array.
"""

from __future__ import annotations

import math
import random
from typing import Dict, Any, Optional, Tuple, List

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from banana_dodge.dodge_core.config_loader import GameConfig, get_config

# Banana outline in local units, centred on the banana's middle
BANANA_OUTLINE = [
    (-15, -3), (-13, -5), (-8, -6), (-3, -5.5), (3, -5), (8, -4), (12, -2),
    (14, -1), (15, 0), (15, 1), (15, 2), (14, 3), (12, 3.5), (8, 4),
    (3, 4.5), (-3, 4), (-8, 3.5), (-13, 2), (-15, 0),
]
BANANA_SHADOW = [(-14, -1), (-8, 2), (3, 3.5), (14, 1.5), (8, 3), (0, 3.5), (-14, 0.5)]

# (body, shadow, highlight)
GREEN_BANANA = ((50, 205, 50), (34, 139, 34), (144, 238, 144))
RIPE_BANANA = ((255, 215, 0), (218, 165, 32), (255, 255, 224))
BLACK_BANANA = ((26, 26, 26), (0, 0, 0), (51, 51, 51))

BANANA_RESOLUTION = 4


class PygameRenderer:
    """
    Full-featured renderer using pygame.

    Supports:
    - Screen display for human mode, letterboxed to keep the 4:3 field
    - RGB array output for agents
    - Mapping window coordinates back to field coordinates for clicks
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config
        self._field_size = (config.field.width, config.field.height)

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None
        self._viewport = pygame.Rect(0, 0, *self._field_size)

        # Logical frame, always field-sized
        self._frame = pygame.Surface(self._field_size)

        pygame.font.init()
        self._font = pygame.font.Font(None, 28)
        self._font_large = pygame.font.Font(None, 64)
        self._font_button = pygame.font.Font(None, 40)

        self._text_color = (255, 255, 255)
        self._flash_color = (255, 0, 0)
        self._game_over_color = (255, 68, 68)
        self._button_color = (100, 108, 255)
        self._letterbox_color = (0, 0, 0)

        self._background = self._create_background()
        self._banana_cache: Dict[Tuple[int, int, int], pygame.Surface] = {}

    def _create_background(self) -> pygame.Surface:
        """Pre-render the jungle backdrop."""
        width, height = self._field_size
        surface = pygame.Surface(self._field_size)

        # Sky gradient
        top, bottom = (135, 206, 235), (224, 246, 255)
        for y in range(height):
            t = y / height
            color = tuple(int(a * (1 - t) + b * t) for a, b in zip(top, bottom))
            pygame.draw.line(surface, color, (0, y), (width, y))

        # Distant foliage
        for i in range(8):
            x = i * width / 7 - 20
            pygame.draw.ellipse(surface, (45, 80, 22), pygame.Rect(x - 60, 40 - 80, 120, 160))

        # Tree trunks
        for i in range(6):
            x = i * width / 5
            pygame.draw.rect(surface, (101, 67, 33), pygame.Rect(x - 8, 0, 16, 120))

        # Leaves at the top
        for i in range(10):
            self._draw_leaf(surface, i * width / 9, 20 + (i % 2) * 30,
                            40, 15, math.pi / 6 * (i % 3), (34, 139, 34))
        for i in range(12):
            self._draw_leaf(surface, i * width / 11 + 20, 15 + (i % 3) * 25,
                            35, 12, -math.pi / 5 * (i % 4), (50, 205, 50))

        # Jungle floor with fixed grass tufts
        pygame.draw.rect(surface, (26, 77, 15), pygame.Rect(0, height - 60, width, 60))
        grass = random.Random(7)
        for _ in range(40):
            x = grass.random() * width
            y = height - 60 + grass.random() * 20
            pygame.draw.line(surface, (34, 139, 34), (x, y), (x + grass.random() * 4 - 2, y - 8), 2)

        return surface

    @staticmethod
    def _draw_leaf(
        surface: pygame.Surface,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        angle: float,
        color: Tuple[int, int, int]
    ) -> None:
        leaf = pygame.Surface((int(rx * 2), int(ry * 2)), pygame.SRCALPHA)
        pygame.draw.ellipse(leaf, color, leaf.get_rect())
        rotated = pygame.transform.rotate(leaf, -math.degrees(angle))
        surface.blit(rotated, rotated.get_rect(center=(int(cx), int(cy))))

    def _banana_surface(self, palette) -> pygame.Surface:
        """Banana sprite drawn once per palette at BANANA_RESOLUTION x size."""
        key = palette[0]
        if key in self._banana_cache:
            return self._banana_cache[key]

        k = BANANA_RESOLUTION
        size = (40 * k, 16 * k)
        surface = pygame.Surface(size, pygame.SRCALPHA)
        ox, oy = size[0] / 2, size[1] / 2

        def local(points: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
            return [(ox + x * k, oy + y * k) for x, y in points]

        body, shadow, highlight = palette
        pygame.draw.polygon(surface, body, local(BANANA_OUTLINE))
        pygame.draw.polygon(surface, shadow, local(BANANA_SHADOW))
        pygame.draw.ellipse(surface, highlight, pygame.Rect(ox - 8 * k, oy - 4.5 * k, 6 * k, 3 * k))
        pygame.draw.ellipse(surface, highlight, pygame.Rect(ox - 1 * k, oy - 3.7 * k, 8 * k, 2.4 * k))

        # Stem
        pygame.draw.line(surface, (101, 67, 33), local([(-15, -2)])[0], local([(-18, -4)])[0], 2 * k)

        if palette is RIPE_BANANA:
            spots = (101, 67, 33, 128)
            for cx, cy, rx, ry in ((5, -1, 2, 1.5), (-5, 0, 1.5, 1), (10, 0, 1.2, 0.8)):
                pygame.draw.ellipse(
                    surface, spots,
                    pygame.Rect(ox + (cx - rx) * k, oy + (cy - ry) * k, 2 * rx * k, 2 * ry * k)
                )

        self._banana_cache[key] = surface
        return surface

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array (for agent observation).

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        self._draw_frame(render_data)
        surface = pygame.transform.smoothscale(self._frame, (width, height))
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(
        self,
        render_data: Dict[str, Any],
        window_width: Optional[int] = None,
        window_height: Optional[int] = None
    ) -> None:
        """
        Render to pygame window, letterboxed to the field's aspect ratio.

        Args:
            render_data: Data from CoreGame.get_render_data().
            window_width: Window width.
            window_height: Window height.
        """
        window_width = window_width or self._config.display.window_width
        window_height = window_height or self._config.display.window_height

        if self._screen is None or self._screen_size != (window_width, window_height):
            self._screen = pygame.display.set_mode((window_width, window_height), pygame.RESIZABLE)
            self._screen_size = (window_width, window_height)
            pygame.display.set_caption("Banana Dodge")
            self._viewport = self._fit_viewport(window_width, window_height)

        self._draw_frame(render_data)
        self._screen.fill(self._letterbox_color)
        scaled = pygame.transform.smoothscale(self._frame, self._viewport.size)
        self._screen.blit(scaled, self._viewport.topleft)
        pygame.display.flip()

    def _fit_viewport(self, window_width: int, window_height: int) -> pygame.Rect:
        """Largest field-aspect rectangle centred in the window."""
        field_w, field_h = self._field_size
        scale = min(window_width / field_w, window_height / field_h)
        w, h = int(field_w * scale), int(field_h * scale)
        return pygame.Rect((window_width - w) // 2, (window_height - h) // 2, w, h)

    def screen_to_field(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        """Convert window coordinates to field coordinates."""
        field_w, field_h = self._field_size
        vp = self._viewport
        return (
            (screen_x - vp.x) * field_w / vp.width,
            (screen_y - vp.y) * field_h / vp.height
        )

    def _draw_frame(self, render_data: Dict[str, Any]) -> None:
        """Draw one full frame onto the logical surface."""
        surface = self._frame
        surface.blit(self._background, (0, 0))

        for obj in render_data["objects"]:
            self._draw_banana(surface, obj)

        playing = render_data["phase"] == "playing"
        if playing:
            self._draw_player(surface, render_data["player"])
            self._draw_particles(surface, render_data["sparkles"])

        self._draw_particles(surface, render_data["explosion"])
        self._draw_score(surface, render_data)

        if render_data["phase"] == "game_over_displayed":
            self._draw_game_over(surface, render_data)

    def _draw_banana(self, surface: pygame.Surface, obj: Dict[str, Any]) -> None:
        palette = GREEN_BANANA
        if obj["transformed"] and obj["variant"] == "growing":
            palette = BLACK_BANANA
        elif obj["transformed"] and obj["variant"] == "bonus":
            palette = RIPE_BANANA

        sprite = self._banana_surface(palette)
        rotated = pygame.transform.rotozoom(
            sprite, -math.degrees(obj["rotation"]), obj["scale"] / BANANA_RESOLUTION
        )
        center = (obj["x"] + obj["width"] / 2, obj["y"] + obj["height"] / 2)
        surface.blit(rotated, rotated.get_rect(center=(int(center[0]), int(center[1]))))

    def _draw_player(self, surface: pygame.Surface, player: Dict[str, Any]) -> None:
        """Draw the monkey astronaut with animated legs."""
        x, y = player["x"], player["y"]
        cx = x + player["width"] / 2
        brown, dark_brown = (139, 69, 19), (101, 67, 33)

        if player["dx"] != 0:
            swing = math.sin(player["animation_phase"]) * 8
            bob = abs(math.sin(player["animation_phase"])) * 4
            feet = ((x + 25, x + 22 + swing, y + 42 + bob), (x + 45, x + 48 - swing, y + 42 + bob))
        else:
            feet = ((x + 25, x + 18, y + 45), (x + 45, x + 52, y + 45))

        for hip_x, foot_x, foot_y in feet:
            pygame.draw.line(surface, brown, (hip_x, y + 35), (foot_x, foot_y), 5)
            pygame.draw.ellipse(surface, dark_brown, pygame.Rect(foot_x - 4, foot_y - 3, 8, 6))

        # Body, head, face
        pygame.draw.rect(surface, brown, pygame.Rect(x + 15, y + 22, 40, 20))
        pygame.draw.circle(surface, (160, 82, 45), (int(cx), int(y + 15)), 16)
        face = pygame.Rect(cx - 11, y + 7, 22, 22)
        pygame.draw.ellipse(surface, (210, 105, 30), face.clip(pygame.Rect(cx - 11, y + 18, 22, 11)))
        for eye_x in (cx - 6, cx + 6):
            pygame.draw.circle(surface, (0, 0, 0), (int(eye_x), int(y + 13)), 3)

        # Helmet
        pygame.draw.circle(surface, (135, 206, 235), (int(cx), int(y + 15)), 20, 3)
        pygame.draw.arc(surface, (255, 255, 255), pygame.Rect(cx - 12, y + 3, 10, 10), math.pi, 2 * math.pi, 2)
        pygame.draw.rect(surface, (192, 192, 192), pygame.Rect(x + 20, y + 33, 30, 4))

        # Arms
        pygame.draw.line(surface, brown, (x + 18, y + 26), (x + 8, y + 36), 4)
        pygame.draw.line(surface, brown, (x + 52, y + 26), (x + 62, y + 36), 4)

    @staticmethod
    def _draw_particles(surface: pygame.Surface, particles: List[Dict[str, Any]]) -> None:
        for p in particles:
            radius = max(1, int(p["size"]))
            alpha = int(255 * max(0.0, min(1.0, p["life"])))
            dot = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(dot, (*p["color"], alpha), (radius, radius), radius)
            surface.blit(dot, (int(p["x"]) - radius, int(p["y"]) - radius))

    def _draw_score(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        color = self._flash_color if render_data["score_flash"] > 0 else self._text_color
        surface.blit(self._font.render(f"Score: {render_data['score']}", True, color), (10, 14))
        surface.blit(
            self._font.render(f"High Score: {render_data['high_score']}", True, self._text_color),
            (10, 40)
        )

    def _draw_game_over(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        width, height = self._field_size

        title = self._font_large.render("Game Over!", True, self._game_over_color)
        surface.blit(title, title.get_rect(center=(width // 2, height // 2 - 55)))

        final = self._font.render(f"Final Score: {render_data['score']}", True, self._text_color)
        surface.blit(final, final.get_rect(center=(width // 2, height // 2 + 2)))

        bx, by, bw, bh = render_data["restart_button"]
        button = pygame.Rect(int(bx), int(by), int(bw), int(bh))
        pygame.draw.rect(surface, self._button_color, button)
        label = self._font_button.render("Restart", True, self._text_color)
        surface.blit(label, label.get_rect(center=button.center))

    def close(self) -> None:
        """Clean up pygame resources."""
        self._banana_cache.clear()
        if self._screen is not None:
            self._screen = None
