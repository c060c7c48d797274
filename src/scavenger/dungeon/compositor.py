from __future__ import annotations

import logging
from typing import Sequence

from ..tiles.layers import TileWorld
from ..tiles.mapping import TILES, TileMapping
from .rooms import DoorSide, Room, classify_door

logger = logging.getLogger(__name__)


class DungeonCompositor:
    """Paints room/door geometry from the room graph onto a TileWorld.

    Per room:
      - interior floor on the Floor layer
      - corner and edge walls on the Ground layer, each with floor mirrored beneath
      - a wall-floor-wall door run over the wall at every door location

    Every door of every room is classified before anything is painted, so a
    malformed room raises GeometryViolation without leaving a half-painted world.
    """

    def __init__(self, mapping: TileMapping = TILES) -> None:
        self.mapping = mapping

    def compose(self, rooms: Sequence[Room], width: int, height: int, tile_size: int = 32) -> TileWorld:
        plans = [(room, room.door_sides()) for room in rooms]

        world = TileWorld(width, height, tile_size, self.mapping)
        for room, doors in plans:
            self._paint_room(world, room)
            for door, side in doors:
                self._paint_door(world, room, door.x, door.y, side)
        logger.info("Composed %d rooms onto a %dx%d tile world", len(plans), width, height)
        return world

    def _paint_room(self, world: TileWorld, room: Room) -> None:
        floor = self.mapping.FLOOR
        wall = self.mapping.WALL
        left, right, top, bottom = room.left, room.right, room.top, room.bottom
        inner_w, inner_h = room.width - 2, room.height - 2

        world.floor.fill_ref(floor, left + 1, top + 1, inner_w, inner_h)

        for ref, cx, cy in (
            (wall.TOP_LEFT, left, top),
            (wall.TOP_RIGHT, right, top),
            (wall.BOTTOM_RIGHT, right, bottom),
            (wall.BOTTOM_LEFT, left, bottom),
        ):
            world.ground.paint(ref, cx, cy)
            world.floor.paint(floor, cx, cy)

        for ref, ex, ey, ew, eh in (
            (wall.TOP, left + 1, top, inner_w, 1),
            (wall.BOTTOM, left + 1, bottom, inner_w, 1),
            (wall.LEFT, left, top + 1, 1, inner_h),
            (wall.RIGHT, right, top + 1, 1, inner_h),
        ):
            world.ground.fill_ref(ref, ex, ey, ew, eh)
            world.floor.fill_ref(floor, ex, ey, ew, eh)

    def _paint_door(self, world: TileWorld, room: Room, dx: int, dy: int, side: DoorSide) -> None:
        door = self.mapping.DOOR
        x, y = room.x + dx, room.y + dy
        # Runs are anchored at their top-left cell, one tile before the door along the wall.
        if side is DoorSide.TOP:
            world.ground.put_tiles_at(door.TOP, x - 1, y)
        elif side is DoorSide.BOTTOM:
            world.ground.put_tiles_at(door.BOTTOM, x - 1, y)
        elif side is DoorSide.LEFT:
            world.ground.put_tiles_at(door.LEFT, x, y - 1)
        else:
            world.ground.put_tiles_at(door.RIGHT, x, y - 1)
