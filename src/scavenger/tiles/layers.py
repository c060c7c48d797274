from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

from ..rng import RandomSource
from .mapping import COLLISION_EXCLUSIONS, EMPTY, TILES, SingleTile, TileGrid, TileMapping, TileRef, WeightedTile

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class LayerName(str, Enum):
    FLOOR = "Floor"
    GROUND = "Ground"
    STUFF = "Stuff"
    SHADOW = "Shadow"


@dataclass(frozen=True)
class TileWrite:
    """One tile placement instruction for a renderer."""
    layer: LayerName
    x: int
    y: int
    tile: int


class TileLayer:
    """A named 2D grid of tile identifiers.

    Coordinates are (x, y) with (0,0) at top-left; tiles are stored as tiles[y][x].
    Writes outside the grid are clipped. Every accepted write is journaled in
    ``writes`` so a renderer can replay the composition.
    """

    def __init__(self, name: LayerName, width: int, height: int, fill: int = EMPTY) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Invalid layer size")
        self.name = name
        self.width = width
        self.height = height
        self.tiles: List[List[int]] = [[fill for _ in range(width)] for _ in range(height)]
        self.writes: List[TileWrite] = []
        self.collision_exclusions: FrozenSet[int] = COLLISION_EXCLUSIONS

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError("Tile out of bounds")
        return self.tiles[y][x]

    def put_tile_at(self, tile: int, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            logger.debug("%s: clipped write of %d at (%d, %d)", self.name.value, tile, x, y)
            return
        self.tiles[y][x] = tile
        self.writes.append(TileWrite(self.name, x, y, tile))

    def put_tiles_at(self, grid: TileGrid, x: int, y: int) -> None:
        for dy, row in enumerate(grid.rows):
            for dx, tile in enumerate(row):
                self.put_tile_at(tile, x + dx, y + dy)

    def fill(self, tile: int, x: int, y: int, width: int, height: int) -> None:
        for ty in range(y, y + height):
            for tx in range(x, x + width):
                self.put_tile_at(tile, tx, ty)

    def paint(self, ref: TileRef, x: int, y: int, rng: Optional[RandomSource] = None) -> None:
        """Write any tile reference with its anchor at (x, y)."""
        if isinstance(ref, SingleTile):
            self.put_tile_at(ref.tile, x, y)
        elif isinstance(ref, TileGrid):
            self.put_tiles_at(ref, x, y)
        elif isinstance(ref, WeightedTile):
            if rng is None:
                raise ValueError("WeightedTile needs a RandomSource to resolve")
            self.put_tile_at(rng.weighted_choice(ref.entries), x, y)
        else:
            raise TypeError(f"Unsupported tile reference: {ref!r}")

    def fill_ref(self, ref: TileRef, x: int, y: int, width: int, height: int,
                 rng: Optional[RandomSource] = None) -> None:
        for ty in range(y, y + height):
            for tx in range(x, x + width):
                self.paint(ref, tx, ty, rng)

    def is_collidable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self.tiles[y][x] not in self.collision_exclusions

    def find(self, tile: int) -> Iterator[Coord]:
        for y, row in enumerate(self.tiles):
            for x, value in enumerate(row):
                if value == tile:
                    yield (x, y)


class TileWorld:
    """The four layers of one level plus tile/world coordinate conversion."""

    def __init__(self, width: int, height: int, tile_size: int = 32, mapping: TileMapping = TILES) -> None:
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.mapping = mapping
        blank = mapping.BLANK.tile
        self.layers: Dict[LayerName, TileLayer] = {
            LayerName.FLOOR: TileLayer(LayerName.FLOOR, width, height, fill=blank),
            LayerName.GROUND: TileLayer(LayerName.GROUND, width, height),
            LayerName.STUFF: TileLayer(LayerName.STUFF, width, height),
            LayerName.SHADOW: TileLayer(LayerName.SHADOW, width, height, fill=blank),
        }
        logger.debug("TileWorld created: %dx%d tiles of %dpx", width, height, tile_size)

    @property
    def floor(self) -> TileLayer:
        return self.layers[LayerName.FLOOR]

    @property
    def ground(self) -> TileLayer:
        return self.layers[LayerName.GROUND]

    @property
    def stuff(self) -> TileLayer:
        return self.layers[LayerName.STUFF]

    @property
    def shadow(self) -> TileLayer:
        return self.layers[LayerName.SHADOW]

    @property
    def width_in_pixels(self) -> int:
        return self.width * self.tile_size

    @property
    def height_in_pixels(self) -> int:
        return self.height * self.tile_size

    def tile_to_world(self, tx: int, ty: int) -> Tuple[float, float]:
        """World position of the center of tile (tx, ty)."""
        half = self.tile_size / 2
        return (tx * self.tile_size + half, ty * self.tile_size + half)

    def world_to_tile(self, x: float, y: float) -> Coord:
        return (int(x // self.tile_size), int(y // self.tile_size))

    def is_solid(self, tx: int, ty: int) -> bool:
        """Whether a tile blocks movement. Only Ground and Stuff take part in collision."""
        return self.ground.is_collidable(tx, ty) or self.stuff.is_collidable(tx, ty)

    def writes(self) -> List[TileWrite]:
        out: List[TileWrite] = []
        for layer in self.layers.values():
            out.extend(layer.writes)
        return out
