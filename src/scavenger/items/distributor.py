from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..config import LevelSettings
from ..dungeon.rooms import Room
from ..errors import ConfigurationError
from ..rng import RandomSource
from ..tiles.layers import TileWorld
from .entities import EntityKind, ScatteredEntity

logger = logging.getLogger(__name__)

POWERUP_NAME = "potion"


class PropKind(str, Enum):
    CHEST = "chest"
    SACK = "sack"
    BOOKCASE = "bookcase"


@dataclass(frozen=True)
class PropPlacement:
    kind: PropKind
    x: int
    y: int


@dataclass
class Distribution:
    """Where everything went for one level."""

    start_room: Room
    exit_room: Room
    item_rooms: List[Room]
    decoration_rooms: List[Room]
    items: List[ScatteredEntity] = field(default_factory=list)
    powerups: List[ScatteredEntity] = field(default_factory=list)
    props: List[Tuple[Room, PropPlacement]] = field(default_factory=list)

    @property
    def exit_tile(self) -> Tuple[int, int]:
        return self.exit_room.center

    @property
    def entities(self) -> List[ScatteredEntity]:
        return self.items + self.powerups

    def item_names(self) -> List[str]:
        return [item.name for item in self.items]


class ItemDistributor:
    """Assigns the level's unique collectibles, the exit, props and power-ups to rooms.

    Room roles, in draw order:
      - start room: the first generated room; stays empty
      - exit room: one random room of the rest; holds only the exit marker
      - item rooms: ``item_count`` random rooms, one collectible each
      - decoration rooms: a shuffled ``decoration_fraction`` share of what is left

    Each decoration room takes one random draw that picks the prop (chest, sack
    or bookcases) and, when it is at most ``powerup_chance``, also spawns a
    power-up at the room center.
    """

    def __init__(self, settings: LevelSettings, catalog: Sequence[str], rng: RandomSource) -> None:
        self.settings = settings
        self.catalog = tuple(catalog)
        self.rng = rng

    def validate(self, rooms: Sequence[Room]) -> None:
        count = self.settings.item_count
        if len(self.catalog) < count:
            raise ConfigurationError(
                f"Catalog holds {len(self.catalog)} items but {count} unique items were requested"
            )
        needed = count + 2
        if len(rooms) < needed:
            raise ConfigurationError(
                f"{len(rooms)} rooms cannot host a start room, an exit room and {count} item rooms"
            )

    def choose_item_names(self) -> List[str]:
        indices = self.rng.unique_indices(self.settings.item_count, len(self.catalog))
        return [self.catalog[i] for i in indices]

    def distribute(self, rooms: Sequence[Room], world: TileWorld,
                   item_names: Optional[Sequence[str]] = None) -> Distribution:
        self.validate(rooms)
        names = list(item_names) if item_names is not None else self.choose_item_names()
        if len(names) != self.settings.item_count or len(set(names)) != len(names):
            raise ConfigurationError(f"Item names must be {self.settings.item_count} distinct values, got {names}")

        pool = list(rooms)
        start_room = pool.pop(0)
        exit_room = self.rng.remove_random(pool)
        item_rooms = [self.rng.remove_random(pool) for _ in range(self.settings.item_count)]
        keep = int(len(pool) * self.settings.decoration_fraction)
        decoration_rooms = self.rng.shuffle(pool)[:keep]

        dist = Distribution(start_room, exit_room, item_rooms, list(decoration_rooms))

        world.stuff.paint(world.mapping.FINISH, exit_room.center_x, exit_room.center_y)

        for name, room in zip(names, item_rooms):
            x, y = world.tile_to_world(room.center_x, room.center_y)
            dist.items.append(ScatteredEntity(EntityKind.ITEM, name, x, y))

        for room in decoration_rooms:
            roll = self.rng.random()
            for prop in self._decorate(world, room, roll):
                dist.props.append((room, prop))
            if roll <= self.settings.powerup_chance:
                x, y = world.tile_to_world(room.center_x, room.center_y)
                dist.powerups.append(ScatteredEntity(EntityKind.POWERUP, POWERUP_NAME, x, y))

        logger.info(
            "Distributed items %s; exit at %s; %d decorated rooms, %d power-ups",
            dist.item_names(),
            dist.exit_tile,
            len(decoration_rooms),
            len(dist.powerups),
        )
        return dist

    def _decorate(self, world: TileWorld, room: Room, roll: float) -> List[PropPlacement]:
        tiles = world.mapping
        s = self.settings
        cx, cy = room.center_x, room.center_y

        if roll <= s.chest_threshold:
            world.stuff.paint(tiles.CHEST, cx, cy)
            return [PropPlacement(PropKind.CHEST, cx, cy)]

        if roll <= s.sack_threshold:
            # Two tiles clear of every wall, so a sack never blocks a door.
            x = self.rng.randint(room.left + 2, room.right - 2)
            y = self.rng.randint(room.top + 2, room.bottom - 2)
            world.stuff.paint(tiles.SACKS, x, y)
            return [PropPlacement(PropKind.SACK, x, y)]

        if room.height >= s.tall_room_height:
            spots = [(cx - 1, cy + 1), (cx + 1, cy + 1), (cx - 1, cy - 2), (cx + 1, cy - 2)]
        else:
            spots = [(cx - 1, cy - 1), (cx + 1, cy - 1)]
        placed = []
        for x, y in spots:
            world.stuff.paint(tiles.BOOKCASE, x, y)
            placed.append(PropPlacement(PropKind.BOOKCASE, x, y))
        return placed
