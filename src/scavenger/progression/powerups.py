from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..config import LevelSettings
from ..engine.scheduler import Scheduler
from ..items.entities import ScatteredEntity
from ..rng import RandomSource

logger = logging.getLogger(__name__)

HINT_TASK = "hint"
SPEED_TASK = "speed"


class PowerUpEffect(str, Enum):
    DIRECTION_HINT = "direction_hint"
    SPEED_BOOST = "speed_boost"


@dataclass
class Player:
    x: float
    y: float
    speed: float
    frozen: bool = False
    boosted: bool = False


@dataclass
class DirectionHint:
    """Arrow shown at the player pointing at the nearest item still to find."""
    angle: float = 0.0
    target: Optional[str] = None
    visible: bool = False


def nearest_unfound_item(items: Iterable[ScatteredEntity], x: float, y: float) -> Optional[ScatteredEntity]:
    best: Optional[ScatteredEntity] = None
    best_dist = math.inf
    for item in items:
        if item.found:
            continue
        dist = math.hypot(item.x - x, item.y - y)
        if dist < best_dist:
            best_dist = dist
            best = item
    return best


def hint_angle(player: Player, item: ScatteredEntity) -> float:
    """Angle in radians from the player to the item (0 points along +x, y grows down)."""
    return math.atan2(item.y - player.y, item.x - player.x)


class PowerUpEffects:
    """Applies a collected power-up: a coin flip between a direction hint and a speed boost.

    Both effects undo themselves through the scheduler; collecting another
    power-up of the same effect re-arms (and so extends) the pending undo.
    """

    def __init__(self, settings: LevelSettings, rng: RandomSource, scheduler: Scheduler) -> None:
        self.settings = settings
        self.rng = rng
        self.scheduler = scheduler
        self.hint = DirectionHint()

    def apply(self, player: Player, items: Iterable[ScatteredEntity]) -> PowerUpEffect:
        if self.rng.random() < self.settings.hint_chance:
            self.show_direction(player, items)
            return PowerUpEffect.DIRECTION_HINT
        self.boost_speed(player)
        return PowerUpEffect.SPEED_BOOST

    def show_direction(self, player: Player, items: Iterable[ScatteredEntity]) -> None:
        target = nearest_unfound_item(items, player.x, player.y)
        if target is None:
            logger.debug("Direction hint with no item left to point at")
            return
        self.hint.angle = hint_angle(player, target)
        self.hint.target = target.name
        self.hint.visible = True
        logger.info("Direction hint towards %s (%.2f rad)", target.name, self.hint.angle)
        self.scheduler.schedule(HINT_TASK, self.settings.hint_duration, self._hide_hint)

    def _hide_hint(self) -> None:
        self.hint.visible = False

    def boost_speed(self, player: Player) -> None:
        if not player.boosted:
            player.speed += self.settings.speed_boost
            player.boosted = True
        logger.info("Speed boost to %.0f for %.1fs", player.speed, self.settings.speed_boost_duration)
        self.scheduler.schedule(SPEED_TASK, self.settings.speed_boost_duration, lambda: self._end_boost(player))

    def _end_boost(self, player: Player) -> None:
        if player.boosted:
            player.speed -= self.settings.speed_boost
            player.boosted = False
        logger.debug("Speed boost ended; speed back to %.0f", player.speed)
