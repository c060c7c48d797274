from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from . import events
from .config import GameSettings
from .dungeon.compositor import DungeonCompositor
from .dungeon.generator import RoomGenerator, RoomGraph
from .dungeon.rooms import Room
from .engine.scheduler import Scheduler
from .events import EventBus
from .fov.room_fog import RoomFog, VisibilityTracker
from .items.distributor import Distribution, ItemDistributor
from .items.entities import EntityKind, ScatteredEntity
from .progression.powerups import DirectionHint, Player, PowerUpEffects
from .progression.state import LevelPhase, LevelState, ProgressionStateMachine
from .rng import RandomSource
from .tiles.layers import TileWorld

logger = logging.getLogger(__name__)

RESTART_TASK = "restart"


@dataclass(frozen=True)
class Hud:
    """Everything the on-screen overlay shows for one frame."""
    status: str
    countdown: str
    banner: Optional[str]
    hint: DirectionHint


class GameSession:
    """Runs levels: builds each one, feeds it events and advances it every frame.

    Per frame (``update``): scheduled actions, whole-second timer ticks, the
    progression check, then the player's room, fog, entity visibility and the
    HUD, in that order. Starting a level throws the previous one away entirely;
    only the level counter carries over.
    """

    def __init__(
        self,
        settings: GameSettings,
        rng: Optional[RandomSource] = None,
        generator=None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings
        self.rng = rng or RandomSource(settings.dungeon.seed)
        self.generator = generator or RoomGenerator(settings.dungeon)
        self.compositor = DungeonCompositor()
        self.machine = ProgressionStateMachine(settings.level)
        self.bus = bus or EventBus()
        self.scheduler = Scheduler()
        self.level = 0

        self.graph: Optional[RoomGraph] = None
        self.world: Optional[TileWorld] = None
        self.distribution: Optional[Distribution] = None
        self.state: Optional[LevelState] = None
        self.player: Optional[Player] = None
        self.fog: Optional[RoomFog] = None
        self.visibility: Optional[VisibilityTracker] = None
        self.effects: Optional[PowerUpEffects] = None
        self.player_room: Optional[Room] = None
        self.hud: Optional[Hud] = None
        self._clock = 0.0

    # Level lifecycle
    def start_level(self) -> None:
        self.level += 1
        self.scheduler.clear()

        graph = self.generator.generate(self.rng)
        distributor = ItemDistributor(self.settings.level, self.settings.catalog, self.rng)
        # Fail before painting anything if this room set cannot host the level.
        distributor.validate(graph.rooms)
        names = distributor.choose_item_names()
        world = self.compositor.compose(graph.rooms, graph.width, graph.height, self.settings.dungeon.tile_size)
        dist = distributor.distribute(graph.rooms, world, names)

        self.graph = graph
        self.world = world
        self.distribution = dist
        self.state = self.machine.start(self.level)
        self.fog = RoomFog(world.shadow)
        self.visibility = VisibilityTracker(self.room_at_world)
        self.effects = PowerUpEffects(self.settings.level, self.rng, self.scheduler)
        px, py = world.tile_to_world(*dist.start_room.center)
        self.player = Player(px, py, speed=self.settings.level.base_speed)
        self._clock = 0.0

        self.bus.publish(events.LEVEL_STARTED, level=self.level, items=dist.item_names(), rooms=len(graph.rooms))
        self._refresh()

    @property
    def items(self) -> List[ScatteredEntity]:
        return self.distribution.items if self.distribution else []

    @property
    def entities(self) -> List[ScatteredEntity]:
        return self.distribution.entities if self.distribution else []

    @property
    def game_over(self) -> bool:
        return self.state is not None and self.state.game_over

    # Queries
    def room_at_world(self, x: float, y: float) -> Optional[Room]:
        tx, ty = self.world.world_to_tile(x, y)
        return self.graph.room_at(tx, ty)

    def player_tile(self) -> Tuple[int, int]:
        return self.world.world_to_tile(self.player.x, self.player.y)

    def is_blocked(self, tx: int, ty: int) -> bool:
        if not self.world.ground.in_bounds(tx, ty):
            return True
        # Tiles outside every room are off the map even where nothing is painted.
        if self.graph.room_at(tx, ty) is None:
            return True
        # The exit marker only opens once every item has been found.
        if self.state.items_complete and (tx, ty) == self.distribution.exit_tile:
            return False
        return self.world.is_solid(tx, ty)

    def overlapping(self) -> List[ScatteredEntity]:
        """Uncollected entities whose tile-sized box overlaps the player's."""
        size = self.world.tile_size
        return [
            e for e in self.entities
            if not e.found and abs(e.x - self.player.x) < size and abs(e.y - self.player.y) < size
        ]

    # Inputs
    def move_player(self, dx: float, dy: float) -> bool:
        """Move the player by a pixel offset unless frozen or walking into a solid tile."""
        if self.player.frozen or not self.state.active:
            return False
        nx, ny = self.player.x + dx, self.player.y + dy
        tx, ty = self.world.world_to_tile(nx, ny)
        if self.is_blocked(tx, ty):
            logger.debug("Blocked move to tile (%d, %d)", tx, ty)
            return False
        self.player.x, self.player.y = nx, ny
        self.bus.publish(events.PLAYER_MOVED, x=nx, y=ny, tile=(tx, ty))
        return True

    def collide(self, entity: ScatteredEntity) -> bool:
        """Overlap notification between the player and a scattered entity."""
        if not self.state.active or not entity.collect():
            return False
        if entity.kind is EntityKind.ITEM:
            self.state = self.machine.collect_item(self.state)
            logger.info("Collected %s; countdown now %d", entity.name, self.state.countdown)
            self.bus.publish(events.ITEM_COLLECTED, name=entity.name, countdown=self.state.countdown)
        else:
            effect = self.effects.apply(self.player, self.items)
            self.bus.publish(events.POWERUP_COLLECTED, name=entity.name, effect=effect.value)
        return True

    def collect_overlaps(self) -> int:
        return sum(1 for e in self.overlapping() if self.collide(e))

    # Ticks
    def tick_second(self) -> None:
        self.state = self.machine.tick_second(self.state)

    def update(self, dt: float) -> bool:
        """Advance one frame. Returns False once the game is over."""
        if self.state is None:
            self.start_level()
        if self.state.game_over:
            return False

        self.scheduler.advance(dt)
        if self.state.active:
            self._clock += dt
            while self._clock >= 1.0:
                self._clock -= 1.0
                self.tick_second()
        self.evaluate()
        self._refresh()
        return not self.state.game_over

    def evaluate(self) -> None:
        before = self.state.phase
        self.state = self.machine.evaluate(self.state, self.items, self.player_tile(), self.distribution.exit_tile)
        after = self.state.phase
        if after is before:
            return

        if after is LevelPhase.ITEMS_COMPLETE:
            self.bus.publish(events.ITEMS_COMPLETE, level=self.level)
        elif after is LevelPhase.LEVEL_ADVANCE:
            self.player.frozen = True
            self.bus.publish(events.LEVEL_ADVANCED, level=self.level)
            self.scheduler.schedule(RESTART_TASK, self.settings.level.restart_fade, self.start_level)
        elif after is LevelPhase.WIN:
            self.player.frozen = True
            self.bus.publish(events.GAME_WON, level=self.level)
        elif after is LevelPhase.TIME_EXPIRED:
            self.player.frozen = True
            self.bus.publish(events.GAME_LOST, level=self.level)

    def _refresh(self) -> None:
        self.player_room = self.room_at_world(self.player.x, self.player.y)
        self.fog.set_active_room(self.player_room)
        self.visibility.refresh(self.entities, self.player_room)
        self.hud = Hud(
            status=self.machine.status_text(self.state, self.items),
            countdown=self.machine.countdown_text(self.state),
            banner=self.machine.banner(self.state),
            hint=self.effects.hint,
        )
