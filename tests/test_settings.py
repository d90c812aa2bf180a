import pytest

from game.configs.shooter_config import GAME_CONFIG
from game.shapes.settings import GameSettings


def test_defaults():
    s = GameSettings()
    assert (s.width, s.height) == (800, 600)
    assert s.player_start == (400, 550)
    assert s.enemy_bullet_speed == pytest.approx(4.9)


def test_config_dict_loads():
    s = GameSettings.from_dict(GAME_CONFIG)
    assert s.boss_interval_ms == 1500
    assert s.to_dict()["initial_lives"] == 3


def test_unknown_key_rejected():
    with pytest.raises(KeyError):
        GameSettings.from_dict({"gravity": 9.8})
