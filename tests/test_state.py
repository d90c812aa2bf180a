from game.shapes.state import GamePhase, GameStateMachine


def test_starts_on_instructions():
    m = GameStateMachine()
    assert m.phase is GamePhase.INSTRUCTIONS
    assert not m.is_running


def test_pause_and_resume():
    m = GameStateMachine()
    assert m.start()
    assert m.toggle_pause()
    assert m.is_paused
    assert m.toggle_pause()
    assert m.is_running


def test_transitions_that_do_not_apply_are_ignored():
    m = GameStateMachine()
    assert not m.pause()
    assert not m.resume()
    m.start()
    assert not m.start()
    assert not m.resume()


def test_first_outcome_wins():
    m = GameStateMachine()
    m.start()
    assert m.finish(victory=True)
    assert not m.finish(victory=False)
    assert m.is_game_over
    assert m.is_victory
    assert not m.pause()
    assert not m.toggle_pause()


def test_restart_clears_outcome():
    m = GameStateMachine()
    m.start()
    m.finish(victory=True)
    assert m.restart()
    assert m.is_running
    assert not m.victory
    assert not m.is_victory
