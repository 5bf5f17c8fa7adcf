import logging

from blockfall.game import Action, GameConfig, GameSession


def test_seeded_sessions_are_reproducible():
    a = GameSession(GameConfig(seed=7))
    b = GameSession(GameConfig(seed=7))
    assert a.state == b.state
    for action in [Action.DROP, Action.LEFT, Action.DROP, Action.ROTATE, Action.TICK] * 5:
        assert a.step(action) == b.step(action)


def drop_until_over(session, limit=500):
    for _ in range(limit):
        if session.game_over:
            break
        session.step(Action.DROP)
    return session.state


def test_session_stops_after_game_over(caplog):
    caplog.set_level(logging.INFO, logger="blockfall.game.session")
    session = GameSession(GameConfig(seed=1))
    final = drop_until_over(session)

    assert final.game_over
    steps = session.steps
    assert session.step(Action.TICK) is final
    assert session.step(Action.LEFT) is final
    assert session.steps == steps
    assert any("game over" in r.getMessage() for r in caplog.records)


def test_lock_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="blockfall.game.session")
    session = GameSession(GameConfig(seed=2))
    session.step(Action.DROP)
    assert any(r.getMessage().startswith("locked") for r in caplog.records)


def test_reset_starts_a_new_game():
    session = GameSession(GameConfig(seed=3))
    first = session.state
    drop_until_over(session)

    fresh = session.reset(seed=3)

    assert fresh is session.state
    assert not fresh.game_over
    assert fresh.score == 0
    assert not fresh.board.any()
    assert session.steps == 0
    assert fresh == first


def test_custom_board_size():
    session = GameSession(GameConfig(width=6, height=8, seed=0))
    assert session.state.board.shape == (8, 6)
    drop_until_over(session)
    assert session.game_over
