"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
import yaml

import banana_dodge
from banana_dodge.dodge_core.config_loader import get_config, load_config

DEFAULT_CONFIG_PATH = Path(banana_dodge.__file__).parent / "game_config.yaml"


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    with open(DEFAULT_CONFIG_PATH) as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(raw, f)
    return str(path)


class TestDefaultConfig:
    """Test values of the shipped configuration."""

    def test_field_size(self, config):
        assert config.field.width == 800
        assert config.field.height == 600

    def test_player(self, config):
        assert config.player.width == 70
        assert config.player.height == 45
        assert config.player.speed == 6.0

    def test_min_gap_is_player_width(self, config):
        assert config.min_gap == config.player.width

    def test_transition_heights(self, config):
        assert config.bonus_ripen_y == 300
        assert config.growing_trigger_y == 200

    def test_scoring(self, config):
        assert config.scoring.dodge_points == 10
        assert config.scoring.bonus_points == 200
        assert config.scoring.flash_ticks == 20

    def test_colors_parsed_as_tuples(self, config):
        assert config.sparkle.colors == ((255, 215, 0), (255, 165, 0))
        assert config.explosion.smoke_color == (51, 51, 51)

    def test_config_is_hashable(self, config):
        """Frozen config can key caches."""
        assert hash(config) == hash(load_config())

    def test_get_config_is_cached(self):
        assert get_config() is get_config()


class TestConfigErrors:
    """Test validation of bad configuration files."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_zero_spawn_interval(self, tmp_path, raw_config):
        raw_config["spawn"]["interval_ticks"] = 0
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_inverted_speed_range(self, tmp_path, raw_config):
        raw_config["obstacles"]["min_speed"] = 6.0
        raw_config["obstacles"]["max_speed"] = 2.0
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_bad_color(self, tmp_path, raw_config):
        raw_config["sparkle"]["colors"] = [[255, 0]]
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_chance_out_of_range(self, tmp_path, raw_config):
        raw_config["spawn"]["bonus_chance"] = 1.5
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_round_trip_of_valid_file(self, tmp_path, raw_config):
        raw_config["field"]["width"] = 1000
        config = load_config(write_config(tmp_path, raw_config))
        assert config.field.width == 1000
