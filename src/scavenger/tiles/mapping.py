"""Symbolic tile roles mapped to tileset identifiers.

A role maps to one of three tile references:

- ``SingleTile``: one identifier, written to one cell.
- ``WeightedTile``: a weighted choice between identifiers, resolved per cell.
- ``TileGrid``: a block of identifiers written with its top-left at the anchor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Sequence, Tuple, Union

EMPTY = -1


@dataclass(frozen=True)
class SingleTile:
    tile: int


@dataclass(frozen=True)
class WeightedTile:
    entries: Tuple[Tuple[int, float], ...]

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError("WeightedTile needs at least one entry")


@dataclass(frozen=True)
class TileGrid:
    rows: Tuple[Tuple[int, ...], ...]

    def __post_init__(self) -> None:
        if not self.rows or not self.rows[0]:
            raise ValueError("TileGrid must not be empty")
        if any(len(r) != len(self.rows[0]) for r in self.rows):
            raise ValueError("TileGrid rows must all have the same length")

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    @classmethod
    def from_row(cls, tiles: Sequence[int]) -> "TileGrid":
        return cls((tuple(tiles),))

    @classmethod
    def from_column(cls, tiles: Sequence[int]) -> "TileGrid":
        return cls(tuple((t,) for t in tiles))


TileRef = Union[SingleTile, WeightedTile, TileGrid]


@dataclass(frozen=True)
class WallTiles:
    TOP_LEFT: SingleTile
    TOP_RIGHT: SingleTile
    BOTTOM_RIGHT: SingleTile
    BOTTOM_LEFT: SingleTile
    TOP: SingleTile
    LEFT: SingleTile
    RIGHT: SingleTile
    BOTTOM: SingleTile


@dataclass(frozen=True)
class DoorTiles:
    # Each run is wall-floor-wall along the opening.
    TOP: TileGrid
    LEFT: TileGrid
    BOTTOM: TileGrid
    RIGHT: TileGrid


@dataclass(frozen=True)
class TileMapping:
    BLANK: SingleTile
    FLOOR: SingleTile
    WALL: WallTiles
    DOOR: DoorTiles
    CHEST: TileGrid
    FINISH: SingleTile
    BOOKCASE: TileGrid
    SACKS: SingleTile


TILES = TileMapping(
    BLANK=SingleTile(168),
    FLOOR=SingleTile(70),
    WALL=WallTiles(
        TOP_LEFT=SingleTile(115),
        TOP_RIGHT=SingleTile(117),
        BOTTOM_RIGHT=SingleTile(149),
        BOTTOM_LEFT=SingleTile(147),
        TOP=SingleTile(116),
        LEFT=SingleTile(131),
        RIGHT=SingleTile(133),
        BOTTOM=SingleTile(148),
    ),
    DOOR=DoorTiles(
        TOP=TileGrid.from_row([117, 70, 115]),
        LEFT=TileGrid.from_column([147, 70, 115]),
        BOTTOM=TileGrid.from_row([149, 70, 147]),
        RIGHT=TileGrid.from_column([149, 70, 117]),
    ),
    CHEST=TileGrid.from_column([179, 195]),
    FINISH=SingleTile(138),
    BOOKCASE=TileGrid.from_column([82, 98]),
    SACKS=SingleTile(83),
)

# Empty, floor and the corner pieces, whose open faces point into the room.
COLLISION_EXCLUSIONS: FrozenSet[int] = frozenset({EMPTY, 70, 115, 117, 147, 149})
