"""
Tests for the pygame presenter (headless).
"""

import os

import numpy as np
import pytest

pygame = pytest.importorskip("pygame")

from banana_dodge.dodge_core.config_loader import load_config
from banana_dodge.dodge_core.entities import FallingObject, GamePhase, Variant
from banana_dodge.dodge_core.env_gym import DodgeEnv
from banana_dodge.dodge_core.game import CoreGame
from banana_dodge.dodge_core.render_pygame import PygameRenderer


@pytest.fixture(autouse=True)
def headless(monkeypatch):
    monkeypatch.setitem(os.environ, "SDL_VIDEODRIVER", "dummy")


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def renderer(config):
    renderer = PygameRenderer(config)
    yield renderer
    renderer.close()


@pytest.fixture
def game(config):
    game = CoreGame(config=config, seed=42)
    for variant, transformed, x in ((Variant.NORMAL, False, 100),
                                    (Variant.BONUS, True, 300),
                                    (Variant.GROWING, True, 600)):
        game.objects.append(FallingObject(
            x=x, y=250, width=30, height=20, speed=2.0, original_speed=2.0,
            variant=variant, transformed=transformed, rotation=0.7
        ))
    return game


class TestPygameRenderer:
    """Test RGB array output and coordinate mapping."""

    def test_render_shape(self, renderer, game):
        img = renderer.render(game.get_render_data(), 200, 150)
        assert img.shape == (150, 200, 3)
        assert img.dtype == np.uint8

    def test_render_full_size(self, renderer, game):
        img = renderer.render(game.get_render_data(), 800, 600)
        assert img.shape == (600, 800, 3)

    def test_game_over_screen(self, renderer, game):
        game.state.run.phase = GamePhase.GAME_OVER_DISPLAYED
        game.state.run.score = 540
        img = renderer.render(game.get_render_data(), 800, 600)

        x, y, w, h = game.rules.restart_button.rect
        # Button fill colour at its left edge, clear of the label
        assert tuple(img[int(y + h / 2), int(x + 5)]) == (100, 108, 255)

    def test_screen_to_field_identity_by_default(self, renderer):
        assert renderer.screen_to_field(400, 300) == (400, 300)


class TestFullStyleEnv:
    """Test the environment with the pygame renderer for images."""

    def test_board_rgb(self):
        env = DodgeEnv(image_obs=True, render_style="full")
        obs, _ = env.reset(seed=42)

        assert obs["board_rgb"].shape == (150, 200, 3)
        env.close()
