import pytest

from falling_blocks.game import Command, GameConfig, GameController, PieceType

from conftest import fill, make_state


def test_state_before_start_raises(timer):
    controller = GameController(timer=timer)
    with pytest.raises(RuntimeError):
        controller.state
    assert not controller.is_running


def test_start_arms_timer_with_configured_interval(timer):
    controller = GameController(GameConfig(tick_interval_ms=250), timer)
    state = controller.start()
    assert timer.calls == [("arm", 250)]
    assert controller.is_running
    assert state is controller.state


def test_dispatch_and_tick_update_state(timer):
    controller = GameController(timer=timer)
    controller.start()
    controller._state = make_state(PieceType.O)

    controller.dispatch(Command.MOVE_LEFT)
    assert controller.state.player.x == 2
    controller.tick()
    assert controller.state.player.y == 1


def test_game_over_cancels_timer_once(timer):
    controller = GameController(timer=timer)
    controller.start()
    state = make_state(PieceType.O, x=3, y=18)
    fill(state.stage, 4, 1)
    controller._state = state

    over = controller.tick()

    assert over.is_over
    assert not controller.is_running
    assert timer.cancels == 1
    assert controller.tick() is over
    assert controller.dispatch(Command.ROTATE) is over
    controller.shutdown()
    assert timer.cancels == 1


def test_shutdown_cancels_timer(timer):
    controller = GameController(timer=timer)
    controller.start()
    controller.shutdown()
    controller.shutdown()
    assert timer.calls == [("arm", 1000), ("cancel",)]


def test_restart_rearms_timer(timer):
    controller = GameController(timer=timer)
    controller.start()
    controller.start()
    assert timer.calls == [("arm", 1000), ("cancel",), ("arm", 1000)]


def test_context_manager_releases_timer(timer):
    with GameController(GameConfig(random_seed=1), timer) as controller:
        assert controller.is_running
    assert timer.calls[-1] == ("cancel",)


def test_controller_without_timer_still_plays():
    controller = GameController(GameConfig(random_seed=2))
    controller.start()
    for _ in range(25):
        controller.tick()
    assert controller.state.stage.merged_count() == 4
