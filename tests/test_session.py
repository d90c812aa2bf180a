import json

import pytest

from conftest import NEVER_MS, make_enemy
from game.shapes.entities import Bullet, BulletOwner, EnemyKind
from game.shapes.highscore import JsonHighScoreStore, MemoryHighScoreStore
from game.shapes.session import ShapeShooter
from game.shapes.simulation import OUTCOME_VICTORY
from game.shapes.state import GamePhase


@pytest.fixture
def game(quiet_settings):
    g = ShapeShooter(settings=quiet_settings, seed=7)
    g.world.enemies.clear()
    return g


def test_nothing_moves_before_start(game):
    assert game.phase is GamePhase.INSTRUCTIONS
    assert game.tick() == {}
    assert game.world.now_ms == 0
    assert not game.shoot()


def test_pause_freezes_simulation(game):
    game.start()
    game.tick(10)
    game.pause()
    game.set_direction("left", True)
    assert game.tick(1000) == {}
    assert game.world.now_ms == 10
    assert game.world.player.x == 400
    assert not game.shoot()

    game.resume()
    game.tick(10)
    assert game.world.player.x == 395


def test_unknown_direction_is_rejected(game):
    with pytest.raises(ValueError):
        game.set_direction("sideways", True)


def test_shot_kills_opponent_spawns_boss_and_leaves_marker(game):
    game.start()
    game.world.enemies.append(make_enemy(400, 100))
    assert game.shoot()

    for _ in range(100):
        game.tick(10)
        if game.score:
            break

    assert game.score == 1
    assert game.high_score == 1
    assert len(game.world.bosses) == 1
    assert len(game.world.markers) == 1

    game.tick(2000)
    assert game.world.markers == []


def test_last_life_lost_ends_in_defeat(game):
    game.start()
    p = game.world.player
    p.lives = 1
    game.world.enemy_bullets.append(
        Bullet(x=p.x, y=p.y, vx=0.0, vy=0.0, owner=BulletOwner.ENEMY)
    )

    game.tick()

    assert game.lives == 0
    assert game.is_game_over
    assert not game.is_victory
    assert not game.world.player.respawn_at_ms
    assert game.tick() == {}


def test_boss_kill_ends_in_victory(game):
    game.start()
    game.world.boss_spawned = True
    game.world.enemies.append(make_enemy(400, 80, kind=EnemyKind.BOSS))
    game.world.player_bullets.append(
        Bullet(x=400, y=90, vx=0.0, vy=-7.0, owner=BulletOwner.PLAYER)
    )

    game.tick()

    assert game.is_game_over
    assert game.is_victory
    assert game.snapshot().victory


def test_boss_kill_and_lethal_hit_in_one_tick_is_victory(game):
    game.start()
    w = game.world
    w.boss_spawned = True
    w.enemies.append(make_enemy(400, 80, kind=EnemyKind.BOSS))
    w.player_bullets.append(
        Bullet(x=400, y=90, vx=0.0, vy=-7.0, owner=BulletOwner.PLAYER)
    )
    p = w.player
    p.lives = 1
    w.enemy_bullets.append(
        Bullet(x=p.x, y=p.y, vx=0.0, vy=0.0, owner=BulletOwner.ENEMY)
    )

    game.tick()

    assert w.outcome == OUTCOME_VICTORY
    assert game.lives == 1
    assert game.is_victory
    assert not game.machine.finish(victory=False)
    assert game.is_victory


def test_shot_reported_in_tick_events(game):
    game.start()
    assert game.shoot()
    assert game.tick()["shot"] == 1.0
    assert game.tick()["shot"] == 0.0


def test_restart_resets_world(game):
    game.start()
    game.world.enemies.append(make_enemy(400, 100))
    game.world.player_bullets.append(
        Bullet(x=400, y=105, vx=0.0, vy=-7.0, owner=BulletOwner.PLAYER)
    )
    game.tick()
    game.world.player.lives = 1
    assert game.score == 1 and game.world.boss_spawned

    assert game.restart()

    w = game.world
    assert game.phase is GamePhase.RUNNING
    assert game.score == 0
    assert game.lives == 3
    assert not w.boss_spawned
    assert len(w.enemies) == 1 and not w.enemies[0].is_boss
    assert w.player_bullets == [] and w.enemy_bullets == []
    assert w.power_ups == [] and w.markers == []
    assert game.high_score == 1


def test_restart_allows_a_new_boss(game):
    game.start()
    game.restart()
    w = game.world
    w.enemies[0].last_shot_ms = NEVER_MS
    target = w.enemies[0]
    w.player_bullets.append(
        Bullet(x=target.x, y=target.y + 5, vx=0.0, vy=-7.0, owner=BulletOwner.PLAYER)
    )
    target.speed = 0.0
    game.tick()
    assert len(w.bosses) == 1


def test_snapshot_is_a_copy(game):
    game.start()
    snap = game.snapshot()
    snap.player.x = -100
    assert game.world.player.x == 400
    assert snap.phase is GamePhase.RUNNING
    assert (snap.width, snap.height) == (800, 600)


# ----------------------------
# High score persistence
# ----------------------------

def test_high_score_loaded_at_startup(quiet_settings):
    g = ShapeShooter(settings=quiet_settings, high_score_store=MemoryHighScoreStore(12))
    assert g.high_score == 12


def test_high_score_saved_when_beaten(quiet_settings, tmp_path):
    path = tmp_path / "hs.json"
    g = ShapeShooter(settings=quiet_settings, high_score_store=JsonHighScoreStore(str(path)))
    g.world.enemies.clear()
    g.start()
    g.world.enemies.append(make_enemy(400, 100))
    g.world.player_bullets.append(
        Bullet(x=400, y=105, vx=0.0, vy=-7.0, owner=BulletOwner.PLAYER)
    )
    g.tick()

    assert json.loads(path.read_text()) == {"high_score": 1}


def test_memory_store_keeps_the_best():
    store = MemoryHighScoreStore()
    assert store.save(5)
    assert not store.save(3)
    assert store.load() == 5


def test_json_store_missing_file_is_zero(tmp_path):
    assert JsonHighScoreStore(str(tmp_path / "none.json")).load() == 0


@pytest.mark.parametrize("content", ["not json", "[]", '{"high_score": "ten"}', '{"high_score": -3}', "{}"])
def test_json_store_malformed_file_is_zero(tmp_path, content):
    path = tmp_path / "hs.json"
    path.write_text(content)
    assert JsonHighScoreStore(str(path)).load() == 0


def test_json_store_only_writes_higher_scores(tmp_path):
    path = tmp_path / "nested" / "hs.json"
    store = JsonHighScoreStore(str(path))
    assert store.save(10)
    assert not store.save(4)
    assert JsonHighScoreStore(str(path)).load() == 10


def test_json_store_write_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    store = JsonHighScoreStore(str(blocker / "hs.json"))
    assert not store.save(3)
