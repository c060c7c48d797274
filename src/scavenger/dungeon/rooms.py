from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ..errors import GeometryViolation

Point = Tuple[int, int]


class DoorSide(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class DoorLocation:
    """A door position relative to its room's top-left corner."""
    x: int
    y: int


@dataclass
class Room:
    """A rectangular room from the room graph, in tile units.

    (x, y) is the top-left wall tile. Bounds are inclusive, so ``right`` and
    ``bottom`` are wall tiles too.
    """

    x: int
    y: int
    width: int
    height: int
    doors: List[DoorLocation] = field(default_factory=list)

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    @property
    def center_x(self) -> int:
        return self.x + self.width // 2

    @property
    def center_y(self) -> int:
        return self.y + self.height // 2

    @property
    def center(self) -> Point:
        return (self.center_x, self.center_y)

    def contains(self, tx: int, ty: int) -> bool:
        return self.left <= tx <= self.right and self.top <= ty <= self.bottom

    def overlaps(self, other: "Room") -> bool:
        return not (
            self.right < other.left
            or other.right < self.left
            or self.bottom < other.top
            or other.bottom < self.top
        )

    def add_door(self, door: DoorLocation) -> None:
        self.doors.append(door)

    def door_sides(self) -> List[Tuple[DoorLocation, DoorSide]]:
        return [(door, classify_door(self, door)) for door in self.doors]

    def footprint(self) -> Iterable[Point]:
        for ty in range(self.top, self.bottom + 1):
            for tx in range(self.left, self.right + 1):
                yield (tx, ty)


def classify_door(room: Room, door: DoorLocation) -> DoorSide:
    """Infer which wall a door sits on from its room-relative coordinates.

    The 3-tile door run must leave both corners of that wall untouched, so the
    door must be at least two tiles away from either end. Anything else is a
    malformed room and raises GeometryViolation.
    """
    on_top = door.y == 0
    on_bottom = door.y == room.height - 1
    on_left = door.x == 0
    on_right = door.x == room.width - 1

    if (on_top or on_bottom) and (on_left or on_right):
        raise GeometryViolation(f"Door {door} sits on a corner of room at ({room.x}, {room.y})")
    if on_top or on_bottom:
        if not (2 <= door.x <= room.width - 3):
            raise GeometryViolation(f"Door {door} too close to a corner of room at ({room.x}, {room.y})")
        return DoorSide.TOP if on_top else DoorSide.BOTTOM
    if on_left or on_right:
        if not (2 <= door.y <= room.height - 3):
            raise GeometryViolation(f"Door {door} too close to a corner of room at ({room.x}, {room.y})")
        return DoorSide.LEFT if on_left else DoorSide.RIGHT
    raise GeometryViolation(f"Door {door} is not on the perimeter of room at ({room.x}, {room.y})")


def room_at(rooms: Sequence[Room], tx: int, ty: int) -> Optional[Room]:
    """Return the first room whose inclusive bounds contain tile (tx, ty), if any."""
    for room in rooms:
        if room.contains(tx, ty):
            return room
    return None
