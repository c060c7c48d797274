import pytest

from scavenger.config import DungeonSettings
from scavenger.dungeon.compositor import DungeonCompositor
from scavenger.dungeon.generator import RoomGenerator
from scavenger.rng import RandomSource


@pytest.mark.parametrize("seed", [1, 2, 3, 42])
def test_generated_rooms_are_valid(seed):
    settings = DungeonSettings()
    graph = RoomGenerator(settings).generate(RandomSource(seed))
    rooms = graph.rooms
    assert len(rooms) >= 7

    for i, room in enumerate(rooms):
        assert room.width % 2 == 1 and room.height % 2 == 1
        assert settings.room_min_width <= room.width <= settings.room_max_width
        assert room.left >= 0 and room.top >= 0
        assert room.right < settings.width and room.bottom < settings.height
        assert room.doors, "every room is connected"
        for other in rooms[i + 1:]:
            assert not room.overlaps(other)
        # Raises GeometryViolation for a malformed door.
        room.door_sides()

    DungeonCompositor().compose(rooms, graph.width, graph.height)


def test_doors_come_in_matching_pairs():
    graph = RoomGenerator(DungeonSettings()).generate(RandomSource(9))
    door_tiles = {(r.x + d.x, r.y + d.y) for r in graph.rooms for d in r.doors}
    for x, y in door_tiles:
        neighbours = {(x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)}
        assert neighbours & door_tiles


def test_same_seed_same_layout():
    a = RoomGenerator(DungeonSettings()).generate(RandomSource(5))
    b = RoomGenerator(DungeonSettings()).generate(RandomSource(5))
    assert a.to_ascii() == b.to_ascii()


def test_ascii_dump_shape():
    settings = DungeonSettings(width=30, height=20)
    graph = RoomGenerator(settings).generate(RandomSource(2))
    lines = graph.to_ascii().split("\n")
    assert len(lines) == 20
    assert all(len(line) == 30 for line in lines)
    assert "#" in graph.to_ascii()
