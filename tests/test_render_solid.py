"""
Tests for the numpy solid renderer.
"""

import numpy as np
import pytest

from banana_dodge.dodge_core.config_loader import load_config
from banana_dodge.dodge_core.entities import FallingObject, GamePhase, Variant
from banana_dodge.dodge_core.game import CoreGame
from banana_dodge.dodge_core.render_solid import (
    GREEN_COLOR,
    RIPE_BONUS_COLOR,
    TURNED_GROWING_COLOR,
    SolidRenderer,
)

SKY = (135, 206, 235)
PLAYER = (139, 69, 19)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def game(config):
    return CoreGame(config=config, seed=42)


@pytest.fixture
def renderer(config):
    renderer = SolidRenderer(config)
    yield renderer
    renderer.close()


def banana(variant=Variant.NORMAL, transformed=False):
    return FallingObject(
        x=400, y=200, width=30, height=20, speed=2.0, original_speed=2.0,
        variant=variant, transformed=transformed
    )


class TestSolidRenderer:
    """Test rendered frames."""

    def test_shape_and_dtype(self, renderer, game):
        img = renderer.render(game.get_render_data(), 200, 150)
        assert img.shape == (150, 200, 3)
        assert img.dtype == np.uint8

    def test_background(self, renderer, game):
        img = renderer.render(game.get_render_data(), 800, 600)
        assert tuple(img[100, 100]) == SKY
        assert tuple(img[599, 0]) == (26, 77, 15)

    def test_player_drawn_while_playing(self, renderer, game):
        img = renderer.render(game.get_render_data(), 800, 600)
        assert tuple(img[500, 400]) == PLAYER

    def test_player_hidden_after_game_over(self, renderer, game):
        game.state.run.phase = GamePhase.GAME_OVER_DISPLAYED
        img = renderer.render(game.get_render_data(), 800, 600)
        assert tuple(img[500, 400]) == SKY

    @pytest.mark.parametrize("variant, transformed, color", [
        (Variant.NORMAL, False, GREEN_COLOR),
        (Variant.BONUS, False, GREEN_COLOR),
        (Variant.BONUS, True, RIPE_BONUS_COLOR),
        (Variant.GROWING, False, GREEN_COLOR),
        (Variant.GROWING, True, TURNED_GROWING_COLOR),
    ])
    def test_object_colors(self, renderer, game, variant, transformed, color):
        game.objects.append(banana(variant, transformed))
        img = renderer.render(game.get_render_data(), 800, 600)
        assert tuple(img[210, 415]) == color

    def test_scaled_object_covers_more(self, renderer, game):
        obj = banana()
        game.objects.append(obj)

        img = renderer.render(game.get_render_data(), 800, 600)
        assert tuple(img[210, 395]) == GREEN_COLOR

        obj.scale = 1.0
        img = renderer.render(game.get_render_data(), 800, 600)
        assert tuple(img[210, 395]) == SKY
