from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import DungeonSettings
from ..rng import RandomSource
from .rooms import DoorLocation, DoorSide, Room, room_at

logger = logging.getLogger(__name__)


@dataclass
class RoomGraph:
    """Rooms of one dungeon plus the size of the grid they live in."""

    width: int
    height: int
    rooms: List[Room] = field(default_factory=list)

    def room_at(self, tx: int, ty: int) -> Optional[Room]:
        return room_at(self.rooms, tx, ty)

    def to_ascii(self) -> str:
        """Console dump: '#' walls, '+' doors, '.' room floor, ' ' outside."""
        grid = [[" " for _ in range(self.width)] for _ in range(self.height)]
        for room in self.rooms:
            for tx, ty in room.footprint():
                edge = tx in (room.left, room.right) or ty in (room.top, room.bottom)
                grid[ty][tx] = "#" if edge else "."
            for door in room.doors:
                grid[room.y + door.y][room.x + door.x] = "+"
        return "\n".join("".join(row) for row in grid)


class RoomGenerator:
    """Grows a connected set of odd-sized rooms outward from a central room.

    Each new room is attached to a random side of a random existing room so that
    the two walls touch, and both rooms get a door at the shared opening. Doors
    keep ``door_padding`` tiles from every corner.
    """

    def __init__(self, settings: DungeonSettings, attempts_per_room: int = 100) -> None:
        self.settings = settings
        self.attempts_per_room = attempts_per_room

    def _odd_between(self, rng: RandomSource, lo: int, hi: int) -> int:
        lo = lo if lo % 2 == 1 else lo + 1
        hi = hi if hi % 2 == 1 else hi - 1
        if lo > hi:
            raise ValueError(f"No odd size between {lo} and {hi}")
        return lo + 2 * rng.randint(0, (hi - lo) // 2)

    def _random_size(self, rng: RandomSource) -> Tuple[int, int]:
        s = self.settings
        return (
            self._odd_between(rng, s.room_min_width, s.room_max_width),
            self._odd_between(rng, s.room_min_height, s.room_max_height),
        )

    def _fits(self, candidate: Room, rooms: List[Room]) -> bool:
        if candidate.left < 0 or candidate.top < 0:
            return False
        if candidate.right >= self.settings.width or candidate.bottom >= self.settings.height:
            return False
        return not any(candidate.overlaps(other) for other in rooms)

    def generate(self, rng: RandomSource) -> RoomGraph:
        s = self.settings
        graph = RoomGraph(s.width, s.height)

        w, h = self._random_size(rng)
        first = Room(max(0, (s.width - w) // 2), max(0, (s.height - h) // 2), w, h)
        if not self._fits(first, []):
            logger.warning("First room %dx%d does not fit a %dx%d dungeon", w, h, s.width, s.height)
            return graph
        graph.rooms.append(first)

        failures = 0
        while len(graph.rooms) < s.max_rooms and failures < self.attempts_per_room:
            if self._grow(rng, graph.rooms):
                failures = 0
            else:
                failures += 1

        logger.debug("RoomGenerator: generated %d rooms", len(graph.rooms))
        return graph

    def _grow(self, rng: RandomSource, rooms: List[Room]) -> bool:
        pad = self.settings.door_padding
        anchor = rng.choice(rooms)
        side = rng.choice(list(DoorSide))
        w, h = self._random_size(rng)

        if side in (DoorSide.LEFT, DoorSide.RIGHT):
            door_y = rng.randint(anchor.top + pad, anchor.bottom - pad)
            offset = rng.randint(pad, h - 1 - pad)
            x = anchor.right + 1 if side is DoorSide.RIGHT else anchor.left - w
            candidate = Room(x, door_y - offset, w, h)
            if not self._fits(candidate, rooms):
                return False
            if side is DoorSide.RIGHT:
                anchor.add_door(DoorLocation(anchor.width - 1, door_y - anchor.y))
                candidate.add_door(DoorLocation(0, offset))
            else:
                anchor.add_door(DoorLocation(0, door_y - anchor.y))
                candidate.add_door(DoorLocation(w - 1, offset))
        else:
            door_x = rng.randint(anchor.left + pad, anchor.right - pad)
            offset = rng.randint(pad, w - 1 - pad)
            y = anchor.bottom + 1 if side is DoorSide.BOTTOM else anchor.top - h
            candidate = Room(door_x - offset, y, w, h)
            if not self._fits(candidate, rooms):
                return False
            if side is DoorSide.BOTTOM:
                anchor.add_door(DoorLocation(door_x - anchor.x, anchor.height - 1))
                candidate.add_door(DoorLocation(offset, 0))
            else:
                anchor.add_door(DoorLocation(door_x - anchor.x, 0))
                candidate.add_door(DoorLocation(offset, h - 1))

        rooms.append(candidate)
        return True
