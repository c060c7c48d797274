import math

import pytest

from conftest import ScriptedRolls
from scavenger.config import LevelSettings
from scavenger.engine.scheduler import Scheduler
from scavenger.items.entities import EntityKind, ScatteredEntity
from scavenger.progression.powerups import (
    Player,
    PowerUpEffect,
    PowerUpEffects,
    hint_angle,
    nearest_unfound_item,
)


def item(name, x, y, found=False):
    return ScatteredEntity(EntityKind.ITEM, name, x, y, found=found)


def effects_with(rolls):
    scheduler = Scheduler()
    return PowerUpEffects(LevelSettings(), ScriptedRolls(rolls), scheduler), scheduler


def test_nearest_unfound_item_ignores_found():
    items = [item("near", 10, 0, found=True), item("mid", 50, 0), item("far", 0, 300)]
    assert nearest_unfound_item(items, 0, 0).name == "mid"
    assert nearest_unfound_item([item("x", 1, 1, found=True)], 0, 0) is None


def test_hint_angle_points_from_player_to_item():
    player = Player(0.0, 0.0, speed=300)
    assert hint_angle(player, item("right", 10, 0)) == pytest.approx(0.0)
    assert hint_angle(player, item("below", 0, 10)) == pytest.approx(math.pi / 2)
    assert hint_angle(player, item("left", -10, 0)) == pytest.approx(math.pi)


def test_low_roll_shows_hint_without_speed_change():
    effects, scheduler = effects_with([0.3])
    player = Player(0.0, 0.0, speed=300)
    effect = effects.apply(player, [item("dice", 0, 100), item("tnt", 400, 0)])

    assert effect is PowerUpEffect.DIRECTION_HINT
    assert player.speed == 300
    assert effects.hint.visible and effects.hint.target == "dice"
    assert effects.hint.angle == pytest.approx(math.pi / 2)

    scheduler.advance(4.0)
    assert not effects.hint.visible


def test_high_roll_boosts_speed_then_reverts():
    effects, scheduler = effects_with([0.5])
    player = Player(0.0, 0.0, speed=300)
    effect = effects.apply(player, [item("dice", 0, 100)])

    assert effect is PowerUpEffect.SPEED_BOOST
    assert player.speed == 900
    assert not effects.hint.visible
    scheduler.advance(3.0)
    assert player.speed == 900
    scheduler.advance(1.0)
    assert player.speed == 300


def test_second_boost_extends_instead_of_stacking():
    effects, scheduler = effects_with([0.9, 0.9])
    player = Player(0.0, 0.0, speed=300)
    effects.apply(player, [])
    scheduler.advance(3.0)
    effects.apply(player, [])
    assert player.speed == 900
    scheduler.advance(3.0)
    assert player.speed == 900
    scheduler.advance(1.0)
    assert player.speed == 300


def test_hint_with_nothing_left_shows_nothing():
    effects, scheduler = effects_with([0.1])
    player = Player(0.0, 0.0, speed=300)
    assert effects.apply(player, [item("dice", 5, 5, found=True)]) is PowerUpEffect.DIRECTION_HINT
    assert not effects.hint.visible
    assert scheduler.pending("hint") is None
