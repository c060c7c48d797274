from dataclasses import replace

import pytest

from conftest import ScriptedRolls, build_row_graph
from scavenger.config import DEFAULT_CATALOG, LevelSettings
from scavenger.dungeon.compositor import DungeonCompositor
from scavenger.errors import ConfigurationError
from scavenger.items.distributor import ItemDistributor, PropKind
from scavenger.items.entities import EntityKind
from scavenger.rng import RandomSource
from scavenger.tiles.mapping import EMPTY, TILES


def setup(graph, settings=None, rng=None, catalog=DEFAULT_CATALOG):
    world = DungeonCompositor().compose(graph.rooms, graph.width, graph.height)
    distributor = ItemDistributor(settings or LevelSettings(), catalog, rng or RandomSource(11))
    return world, distributor


@pytest.mark.parametrize("seed", range(10))
def test_five_unique_items_outside_start_and_exit(seed):
    graph = build_row_graph(12)
    world, distributor = setup(graph, rng=RandomSource(seed))
    dist = distributor.distribute(graph.rooms, world)

    names = dist.item_names()
    assert len(names) == 5
    assert len(set(names)) == 5
    assert set(names) <= set(DEFAULT_CATALOG)

    assert dist.start_room is graph.rooms[0]
    assert dist.exit_room is not dist.start_room
    reserved = {id(dist.start_room), id(dist.exit_room)}
    assert not reserved & {id(r) for r in dist.item_rooms}
    assert not reserved & {id(r) for r in dist.decoration_rooms}
    assert not reserved & {id(room) for room, _ in dist.props}

    for item, room in zip(dist.items, dist.item_rooms):
        assert item.kind is EntityKind.ITEM
        assert world.world_to_tile(item.x, item.y) == room.center
    for entity in dist.entities:
        assert entity.found is False
        assert entity.visible is False


def test_exit_marker_and_nothing_else_in_exit_room():
    graph = build_row_graph(12)
    world, distributor = setup(graph)
    dist = distributor.distribute(graph.rooms, world)
    exit_room = dist.exit_room
    assert world.stuff.get(*exit_room.center) == TILES.FINISH.tile
    painted = [(x, y) for x, y in exit_room.footprint() if world.stuff.get(x, y) != EMPTY]
    assert painted == [exit_room.center]


def test_decoration_pool_keeps_ninety_percent():
    graph = build_row_graph(17)  # 17 - start - exit - 5 items = 10 left
    world, distributor = setup(graph)
    dist = distributor.distribute(graph.rooms, world)
    assert len(dist.decoration_rooms) == 9


def test_one_roll_picks_prop_and_gates_powerup():
    # 9 rooms: 2 left for decoration with fraction 1.0
    graph = build_row_graph(9)
    settings = LevelSettings(decoration_fraction=1.0)
    world, distributor = setup(graph, settings, rng=ScriptedRolls([0.1, 0.22]))
    dist = distributor.distribute(graph.rooms, world)

    kinds = [prop.kind for _, prop in dist.props]
    assert kinds == [PropKind.CHEST, PropKind.CHEST]
    assert len(dist.powerups) == 1
    first_room = dist.decoration_rooms[0]
    assert world.world_to_tile(dist.powerups[0].x, dist.powerups[0].y) == first_room.center
    assert dist.powerups[0].kind is EntityKind.POWERUP


def test_sack_stays_clear_of_walls():
    graph = build_row_graph(9)
    settings = LevelSettings(decoration_fraction=1.0)
    for seed in range(20):
        world, distributor = setup(graph, settings, rng=ScriptedRolls([0.3, 0.45], seed=seed))
        dist = distributor.distribute(graph.rooms, world)
        assert not dist.powerups
        for room, prop in dist.props:
            assert prop.kind is PropKind.SACK
            assert room.left + 2 <= prop.x <= room.right - 2
            assert room.top + 2 <= prop.y <= room.bottom - 2
            assert world.stuff.get(prop.x, prop.y) == TILES.SACKS.tile


def test_bookcase_count_depends_on_room_height():
    graph = build_row_graph(9, tall=range(9))
    settings = LevelSettings(decoration_fraction=1.0)
    world, distributor = setup(graph, settings, rng=ScriptedRolls([0.9, 0.7]))
    dist = distributor.distribute(graph.rooms, world)
    assert [p.kind for _, p in dist.props] == [PropKind.BOOKCASE] * 8

    short = build_row_graph(9)
    world, distributor = setup(short, settings, rng=ScriptedRolls([0.9, 0.7]))
    dist = distributor.distribute(short.rooms, world)
    assert [p.kind for _, p in dist.props] == [PropKind.BOOKCASE] * 4
    room, prop = dist.props[0]
    assert (prop.x, prop.y) == (room.center_x - 1, room.center_y - 1)
    assert world.stuff.get(prop.x, prop.y) == TILES.BOOKCASE.rows[0][0]
    assert world.stuff.get(prop.x, prop.y + 1) == TILES.BOOKCASE.rows[1][0]


def test_catalog_smaller_than_item_count_is_configuration_error():
    graph = build_row_graph(12)
    world, distributor = setup(graph, catalog=("dice", "tnt", "phd"))
    with pytest.raises(ConfigurationError):
        distributor.distribute(graph.rooms, world)


def test_too_few_rooms_is_configuration_error():
    graph = build_row_graph(6)
    world, distributor = setup(graph)
    with pytest.raises(ConfigurationError):
        distributor.distribute(graph.rooms, world)


def test_explicit_names_must_be_distinct():
    graph = build_row_graph(9)
    world, distributor = setup(graph)
    with pytest.raises(ConfigurationError):
        distributor.distribute(graph.rooms, world, ["dice"] * 5)


def test_same_seed_same_distribution():
    graph = build_row_graph(14)
    a_world, a = setup(graph, rng=RandomSource(5))
    b_world, b = setup(graph, rng=RandomSource(5))
    da = a.distribute(graph.rooms, a_world)
    db = b.distribute(graph.rooms, b_world)
    assert da.item_names() == db.item_names()
    assert [r.center for r in da.item_rooms] == [r.center for r in db.item_rooms]
    assert a_world.stuff.tiles == b_world.stuff.tiles
