"""
Tests for the CoreGame orchestrator.
"""

import pytest

from banana_dodge.dodge_core.config_loader import load_config
from banana_dodge.dodge_core.entities import FallingObject, GamePhase
from banana_dodge.dodge_core.game import CoreGame
from banana_dodge.dodge_core.high_score_store import MemoryHighScoreStore
from banana_dodge.dodge_core.input_source import ControlState


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def store():
    return MemoryHighScoreStore(300)


@pytest.fixture
def game(config, store):
    return CoreGame(config=config, seed=42, store=store)


def crash(game):
    """Drop a normal banana onto the player and tick once."""
    game.objects.append(FallingObject(
        x=385, y=485, width=30, height=20, speed=0.0, original_speed=0.0
    ))
    return game.step()


def run_to_game_over(game):
    crash(game)
    for _ in range(200):
        if not game.needs_tick:
            break
        game.step()
    assert game.phase is GamePhase.GAME_OVER_DISPLAYED


class TestCoreGame:
    """Test game lifecycle."""

    def test_initial_state(self, game):
        assert game.score == 0
        assert game.high_score == 300
        assert game.phase is GamePhase.PLAYING
        assert not game.is_over
        assert game.needs_tick
        assert game.objects == []

    def test_fatal_saves_new_high_score(self, game, store):
        game.state.run.score = 540
        result = crash(game)

        assert result.fatal
        assert game.is_over
        assert store.saves == 1
        assert store.load() == 540

    def test_no_save_without_record(self, game, store):
        game.state.run.score = 100
        crash(game)

        assert store.saves == 0
        assert game.high_score == 300

    def test_reset_after_game_over(self, game):
        """score=540, highScore=300 -> after reset score=0, highScore=540."""
        game.state.run.score = 540
        crash(game)
        game.state.sparkles.burst(10, 10, game.state.rng)

        assert game.reset()

        assert game.score == 0
        assert game.high_score == 540
        assert game.phase is GamePhase.PLAYING
        assert game.objects == []
        assert game.state.sparkles.is_empty
        assert game.state.explosion.is_empty
        assert game.state.tick == 0
        assert game.state.frames == 0
        assert game.state.player.x == 365

    def test_reset_refused_while_playing(self, game):
        game.step(1)
        assert not game.reset()
        assert game.state.tick == 1

    def test_reset_allowed_while_exploding(self, game):
        crash(game)
        assert game.phase is GamePhase.EXPLODING
        assert game.reset()

    def test_game_over_screen_stops_ticking(self, game):
        run_to_game_over(game)
        assert not game.needs_tick

    def test_start_is_unconditional(self, game):
        game.step(1)
        game.start(seed=3)
        assert game.state.tick == 0
        assert game.phase is GamePhase.PLAYING


class TestRestartClick:
    """Test the restart control."""

    def test_click_ignored_while_playing(self, game):
        assert not game.click(400, 390)

    def test_click_ignored_while_exploding(self, game):
        crash(game)
        assert not game.click(400, 390)
        assert game.phase is GamePhase.EXPLODING

    def test_click_outside_button(self, game):
        run_to_game_over(game)
        assert not game.click(10, 10)
        assert game.phase is GamePhase.GAME_OVER_DISPLAYED

    def test_click_restarts(self, game):
        run_to_game_over(game)
        assert game.click(400, 390)
        assert game.phase is GamePhase.PLAYING


class TestGameData:
    """Test info and render data exports."""

    def test_resolve_intent(self, game):
        assert game.resolve_intent(ControlState(right=True)) == 1

    def test_info(self, game):
        game.step()
        info = game.get_info()

        assert info["score"] == 0
        assert info["high_score"] == 300
        assert info["phase"] == "playing"
        assert info["tick"] == 1
        assert info["object_count"] == 0

    def test_render_data(self, game, config):
        crash(game)
        data = game.get_render_data()

        assert data["field_width"] == config.field.width
        assert data["field_height"] == config.field.height
        assert data["phase"] == "exploding"
        assert data["restart_button"] == (275, 360, 250, 60)
        assert data["player"]["x"] == 365
        assert len(data["objects"]) == 1
        assert data["objects"][0]["variant"] == "normal"
        assert len(data["explosion"]) == 80
        assert data["sparkles"] == []

    def test_render_data_is_a_copy(self, game):
        crash(game)
        data = game.get_render_data()
        data["objects"][0]["y"] = -1000

        assert game.objects[0].y == 485
