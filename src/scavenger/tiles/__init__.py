from .mapping import (
    COLLISION_EXCLUSIONS,
    EMPTY,
    TILES,
    SingleTile,
    TileGrid,
    TileMapping,
    TileRef,
    WeightedTile,
)
from .layers import LayerName, TileLayer, TileWorld, TileWrite

__all__ = [
    "COLLISION_EXCLUSIONS",
    "EMPTY",
    "TILES",
    "SingleTile",
    "TileGrid",
    "TileMapping",
    "TileRef",
    "WeightedTile",
    "LayerName",
    "TileLayer",
    "TileWorld",
    "TileWrite",
]
