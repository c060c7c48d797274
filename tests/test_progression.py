import pytest

from scavenger.config import LevelSettings
from scavenger.items.entities import EntityKind, ScatteredEntity
from scavenger.progression.state import LevelPhase, LevelState, ProgressionStateMachine, format_time

EXIT = (10, 10)


def make_items(names=("dice", "tnt", "phd", "slot", "game")):
    return [ScatteredEntity(EntityKind.ITEM, n, 0.0, 0.0) for n in names]


@pytest.fixture
def machine():
    return ProgressionStateMachine(LevelSettings())


@pytest.mark.parametrize("level, seconds", [(1, 30), (3, 20), (6, 5), (8, 0)])
def test_initial_countdown(machine, level, seconds):
    state = machine.start(level)
    assert state.countdown == seconds
    assert state.phase is LevelPhase.PLAYING
    assert not state.items_complete and not state.has_reached_exit and not state.game_over


def test_countdown_stops_at_zero_then_game_over(machine):
    items = make_items()
    state = LevelState(level=1, countdown=2)
    state = machine.tick_second(state)
    assert state.countdown == 1
    state = machine.evaluate(state, items, (0, 0), EXIT)
    assert state.phase is LevelPhase.PLAYING

    state = machine.tick_second(state)
    assert state.countdown == 0
    state = machine.tick_second(state)
    assert state.countdown == 0

    state = machine.evaluate(state, items, (0, 0), EXIT)
    assert state.phase is LevelPhase.TIME_EXPIRED
    assert state.game_over
    assert machine.banner(state) == "GAME OVER"
    assert machine.tick_second(state).countdown == 0


def test_item_bonus_is_uncapped(machine):
    state = LevelState(level=1, countdown=10)
    assert machine.collect_item(state).countdown == 15
    state = LevelState(level=1, countdown=58)
    assert machine.collect_item(state).countdown == 63


def test_completion_happens_once_in_any_order(machine):
    items = make_items()
    state = machine.start(1)
    transitions = 0
    for item in reversed(items):
        item.found = True
        after = machine.evaluate(state, items, (0, 0), EXIT)
        if after.phase is not state.phase:
            transitions += 1
        state = after
    for _ in range(3):
        state = machine.evaluate(state, items, (0, 0), EXIT)
    assert state.phase is LevelPhase.ITEMS_COMPLETE
    assert state.items_complete
    assert transitions == 1


def test_exit_before_completion_does_nothing(machine):
    state = machine.evaluate(machine.start(1), make_items(), EXIT, EXIT)
    assert state.phase is LevelPhase.PLAYING


def test_exit_advances_level_before_final(machine):
    state = LevelState(level=3, countdown=9, phase=LevelPhase.ITEMS_COMPLETE)
    state = machine.evaluate(state, [], (9, 10), EXIT)
    assert state.phase is LevelPhase.ITEMS_COMPLETE
    state = machine.evaluate(state, [], EXIT, EXIT)
    assert state.phase is LevelPhase.LEVEL_ADVANCE
    assert state.has_reached_exit and not state.game_over
    assert machine.banner(state) is None


def test_exit_on_final_level_wins(machine):
    state = LevelState(level=6, countdown=3, phase=LevelPhase.ITEMS_COMPLETE)
    state = machine.evaluate(state, [], EXIT, EXIT)
    assert state.phase is LevelPhase.WIN
    assert state.won and state.game_over
    assert machine.banner(state) == "YOU WON!"


def test_time_runs_out_after_completion(machine):
    state = LevelState(level=2, countdown=0, phase=LevelPhase.ITEMS_COMPLETE)
    state = machine.evaluate(state, [], EXIT, EXIT)
    assert state.phase is LevelPhase.TIME_EXPIRED


def test_status_text(machine):
    items = make_items(("dice", "tnt"))
    state = machine.start(2)
    assert machine.status_text(state, items) == "Find dice \ntnt \nCurrent Level: 2"
    items[0].found = True
    assert machine.status_text(state, items) == "Find tnt \nCurrent Level: 2"
    done = LevelState(level=2, countdown=5, phase=LevelPhase.ITEMS_COMPLETE)
    assert machine.status_text(done, items) == "Find the computer. Current Level: 2"
    assert machine.countdown_text(done) == "Countdown: 0:05"


@pytest.mark.parametrize("seconds, text", [(0, "0:00"), (5, "0:05"), (30, "0:30"), (75, "1:15"), (-3, "0:00")])
def test_format_time(seconds, text):
    assert format_time(seconds) == text
