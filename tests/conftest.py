import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from scavenger.dungeon.generator import RoomGraph  # noqa: E402
from scavenger.dungeon.rooms import DoorLocation, Room  # noqa: E402
from scavenger.rng import RandomSource  # noqa: E402


def build_row_graph(count=9, size=7, tall=(), door_row=3):
    """Rooms side by side along the x axis, each joined to the next by a door pair.

    Indices in ``tall`` get height 9 instead of ``size``; all rooms share the same top.
    Doors sit ``door_row`` tiles below the top of each shared wall.
    """
    rooms = []
    for i in range(count):
        height = 9 if i in tall else size
        rooms.append(Room(i * size, 0, size, height))
    for left, right in zip(rooms, rooms[1:]):
        left.add_door(DoorLocation(left.width - 1, door_row))
        right.add_door(DoorLocation(0, door_row))
    return RoomGraph(count * size, 9 if tall else size, rooms)


class FixedGenerator:
    """Stands in for the room generator; hands out a fresh copy of the same layout."""

    def __init__(self, count=9, tall=(), door_row=3):
        self.count = count
        self.tall = tall
        self.door_row = door_row
        self.calls = 0

    def generate(self, rng):
        self.calls += 1
        return build_row_graph(self.count, tall=self.tall, door_row=self.door_row)


class ScriptedRolls(RandomSource):
    """RandomSource whose random() replays a fixed list; other draws stay seeded."""

    def __init__(self, rolls, seed=7):
        super().__init__(seed)
        self._rolls = list(rolls)

    def random(self):
        return self._rolls.pop(0)


@pytest.fixture
def row_graph():
    return build_row_graph()
