"""
Tests for the per-tick simulation.
"""

from dataclasses import replace

import pytest

from banana_dodge.dodge_core.config_loader import load_config
from banana_dodge.dodge_core.entities import FallingObject, GamePhase, GameState, Variant
from banana_dodge.dodge_core.simulator import Simulator, advance, run_ticks


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def quiet_config(config):
    """Config whose spawner never fires, so tests control every object."""
    return replace(config, spawn=replace(config.spawn, interval_ticks=10 ** 9))


@pytest.fixture
def state(quiet_config):
    return GameState.new(quiet_config, seed=42)


def make_object(x, y, speed=0.0, variant=Variant.NORMAL, transformed=False):
    return FallingObject(
        x=x, y=y, width=30, height=20, speed=speed, original_speed=speed,
        variant=variant, transformed=transformed
    )


def on_player(variant=Variant.NORMAL, transformed=False):
    """An object overlapping the freshly spawned player."""
    return make_object(385, 485, variant=variant, transformed=transformed)


class TestPlayerMovement:
    """Test horizontal movement and clamping."""

    def test_move_right(self, state):
        advance(state, 1)
        assert state.player.x == 371
        assert state.player.dx == 6

    def test_move_left(self, state):
        advance(state, -1)
        assert state.player.x == 359
        assert state.player.dx == -6

    def test_only_sign_of_intent_counts(self, state):
        advance(state, 0.25)
        assert state.player.x == 371

    def test_idle(self, state):
        advance(state, 0)
        assert state.player.x == 365
        assert state.player.dx == 0

    def test_clamp_right(self, state):
        state.player.x = 728
        advance(state, 1)
        assert state.player.x == 730

    def test_clamp_left(self, state):
        state.player.x = 3
        advance(state, -1)
        assert state.player.x == 0

    def test_player_stays_in_field(self, state):
        run_ticks(state, 200, intent=1)
        assert state.player.x + state.player.width <= 800
        run_ticks(state, 200, intent=-1)
        assert state.player.x >= 0

    def test_animation_only_while_moving(self, state):
        advance(state, 0)
        assert state.player.animation_phase == 0

        advance(state, 1)
        assert state.player.animation_phase == pytest.approx(0.15)

    def test_frame_scale(self, state):
        advance(state, 1, dt=0.5)
        assert state.player.x == 368


class TestObjectMotion:
    """Test falling, dodging and variant transitions."""

    def test_object_leaves_field(self, state):
        state.objects.append(make_object(100, 590, speed=5))

        result = advance(state)
        assert state.objects[0].y == 595
        assert state.run.score == 0
        assert result.dodged == 0

        result = advance(state)
        assert state.objects == []
        assert state.run.score == 10
        assert result.dodged == 1
        assert result.delta_score == 10

    def test_several_dodges_in_one_tick(self, state):
        state.objects.extend([
            make_object(50, 599, speed=3),
            make_object(150, 300, speed=3),
            make_object(650, 598, speed=3),
        ])

        result = advance(state)

        assert result.dodged == 2
        assert state.run.score == 20
        assert [obj.x for obj in state.objects] == [150]

    def test_bonus_ripens_at_half_height(self, state):
        obj = make_object(100, 290, speed=5, variant=Variant.BONUS)
        state.objects.append(obj)

        advance(state)
        assert obj.y == 295
        assert not obj.transformed

        advance(state)
        assert obj.y == 300
        assert obj.transformed
        assert obj.speed == 5

    def test_normal_never_transforms(self, state):
        obj = make_object(100, 100, speed=5)
        state.objects.append(obj)
        run_ticks(state, 80)
        assert not obj.transformed

    def test_growing_turns_at_third_height(self, state):
        obj = make_object(100, 195, speed=4, variant=Variant.GROWING)
        state.objects.append(obj)

        advance(state)
        assert not obj.transformed
        assert obj.scale == 1.5

        advance(state)
        assert obj.transformed
        assert obj.speed == 2.0
        assert obj.original_speed == 4
        assert obj.scale > 1.5

    def test_growing_scale_monotonic_and_capped(self, state):
        obj = make_object(100, 203, speed=2, variant=Variant.GROWING, transformed=True)
        state.objects.append(obj)

        scales = []
        for _ in range(120):
            advance(state)
            scales.append(obj.scale)

        assert all(a <= b for a, b in zip(scales, scales[1:]))
        assert max(scales) <= obj.max_scale
        assert scales[-1] == pytest.approx(4.5)

    def test_bonus_does_not_grow(self, state):
        obj = make_object(100, 400, speed=1, variant=Variant.BONUS, transformed=True)
        state.objects.append(obj)
        run_ticks(state, 10)
        assert obj.scale == 1.5


class TestSpawning:
    """Test spawning through the simulator."""

    def test_first_batch_on_interval(self, config):
        state = GameState.new(config, seed=1)

        run_ticks(state, config.spawn.interval_ticks - 1)
        assert state.objects == []

        result = advance(state)
        assert 1 <= result.spawned <= 2
        assert len(state.objects) == result.spawned
        assert all(obj.y == config.obstacles.spawn_y for obj in state.objects)

    def test_spawn_schedule_follows_frame_time(self, config):
        """Double-length ticks reach the first spawn point in half the ticks."""
        state = GameState.new(config, seed=1)
        half = config.spawn.interval_ticks // 2

        run_ticks(state, half - 1, dt=2.0)
        assert state.objects == []

        result = advance(state, dt=2.0)
        assert state.tick == half
        assert state.frames == config.spawn.interval_ticks
        assert result.spawned >= 1

    def test_same_seed_same_run(self, config):
        a = GameState.new(config, seed=9)
        b = GameState.new(config, seed=9)

        run_ticks(a, 300, intent=1)
        run_ticks(b, 300, intent=1)

        assert [(o.x, o.y, o.variant) for o in a.objects] == \
            [(o.x, o.y, o.variant) for o in b.objects]
        assert a.run.score == b.run.score


class TestCollisions:
    """Test bonus pickups and fatal collisions."""

    def test_ripe_bonus_pickup(self, state, quiet_config):
        state.objects.append(on_player(Variant.BONUS, transformed=True))

        result = advance(state)

        assert result.bonus_collected
        assert not result.fatal
        assert result.delta_score == 200
        assert state.run.score == 200
        assert state.run.score_flash == quiet_config.scoring.flash_ticks
        assert state.phase is GamePhase.PLAYING
        assert state.objects == []
        assert len(state.sparkles) == quiet_config.sparkle.count

    def test_unripe_bonus_is_fatal(self, state):
        """Touching a bonus banana above the ripening line ends the run."""
        state.player.y = 100
        obj = make_object(385, 105, variant=Variant.BONUS)
        state.objects.append(obj)

        result = advance(state)

        assert not obj.transformed
        assert result.fatal
        assert not result.bonus_collected
        assert state.run.score == 0
        assert state.phase is GamePhase.EXPLODING

    def test_bonus_ripening_on_contact_tick_is_eaten(self, state):
        """Ripening happens before the collision scan in the same tick."""
        obj = make_object(385, 295, speed=5, variant=Variant.BONUS)
        state.player.y = 290
        state.objects.append(obj)

        result = advance(state)

        assert obj.transformed
        assert result.bonus_collected
        assert not result.fatal

    def test_growing_is_fatal_even_when_turned(self, state):
        state.objects.append(on_player(Variant.GROWING, transformed=True))
        result = advance(state)

        assert result.fatal
        assert state.run.score == 0

    def test_fatal_commits_high_score(self, state, quiet_config):
        state.run.score = 540
        state.run.high_score = 300
        state.objects.append(on_player())

        result = advance(state)

        assert result.fatal
        assert result.phase_changed
        assert result.new_high_score
        assert state.run.high_score == 540
        assert state.run.score == 540
        assert len(state.explosion) == (
            quiet_config.explosion.fire_count + quiet_config.explosion.smoke_count
        )

    def test_fatal_keeps_higher_high_score(self, state):
        state.run.score = 100
        state.run.high_score = 300
        state.objects.append(on_player())

        result = advance(state)

        assert not result.new_high_score
        assert state.run.high_score == 300

    def test_explosion_centred_on_player(self, state):
        state.objects.append(on_player())
        cx, cy = state.player.center

        advance(state)

        for p in state.explosion:
            assert (p.x, p.y) == (cx, cy)

    def test_newest_overlap_wins(self, state):
        """A ripe bonus drawn over an older fatal object is eaten; the scan stops."""
        state.objects.append(on_player())
        state.objects.append(on_player(Variant.BONUS, transformed=True))

        result = advance(state)

        assert result.bonus_collected
        assert not result.fatal
        assert state.phase is GamePhase.PLAYING
        assert len(state.objects) == 1

    def test_score_flash_counts_down(self, state):
        state.objects.append(on_player(Variant.BONUS, transformed=True))
        advance(state)
        flash = state.run.score_flash

        advance(state)
        assert state.run.score_flash == flash - 1


class TestGameOverSequence:
    """Test the exploding and game over phases."""

    @pytest.fixture
    def exploding(self, state):
        state.objects.append(make_object(385, 485, speed=3))
        advance(state)
        assert state.phase is GamePhase.EXPLODING
        return state

    def test_world_frozen_while_exploding(self, exploding):
        obj_y = exploding.objects[0].y
        player_x = exploding.player.x
        tick = exploding.tick

        result = advance(exploding, 1)

        assert exploding.objects[0].y == obj_y
        assert exploding.player.x == player_x
        assert exploding.tick == tick
        assert result.delta_score == 0
        assert not result.fatal

    def test_explosion_burns_out_to_game_over(self, exploding):
        for _ in range(200):
            advance(exploding)
            if exploding.phase is GamePhase.GAME_OVER_DISPLAYED:
                break

        assert exploding.phase is GamePhase.GAME_OVER_DISPLAYED
        assert exploding.explosion.is_empty

    def test_game_over_ticks_are_noops(self, exploding):
        run_ticks(exploding, 200)
        assert exploding.phase is GamePhase.GAME_OVER_DISPLAYED

        score = exploding.run.score
        result = advance(exploding, 1)

        assert exploding.phase is GamePhase.GAME_OVER_DISPLAYED
        assert exploding.run.score == score
        assert not result.phase_changed

    def test_flash_counts_down_while_exploding(self, exploding):
        exploding.run.score_flash = 5
        advance(exploding)
        assert exploding.run.score_flash == 4

    def test_sparkles_frozen_while_exploding(self, exploding):
        exploding.sparkles.burst(100, 100, exploding.rng)
        before = [(p.x, p.y, p.life) for p in exploding.sparkles]

        advance(exploding)

        assert [(p.x, p.y, p.life) for p in exploding.sparkles] == before


class TestSimulatorInstance:
    """Test the Simulator class directly."""

    def test_advance_matches_module_function(self, quiet_config):
        a = GameState.new(quiet_config, seed=5)
        b = GameState.new(quiet_config, seed=5)
        simulator = Simulator(quiet_config)

        for intent in (1, 1, -1, 0, 1):
            simulator.advance(a, intent)
            advance(b, intent)

        assert a.player.x == b.player.x
        assert a.tick == b.tick == 5
