import logging

from game.shapes.play import play_random


def test_random_play_logs_settings_and_reports(caplog):
    with caplog.at_level(logging.INFO, logger="game.shapes.play"):
        results = play_random(n_episodes=2, seed=0, max_steps=20)

    assert len(results["scores"]) == 2
    assert 0 <= results["wins"] <= 2
    assert "Game settings" in caplog.text
    assert "'width': 800" in caplog.text
