from .entities import EntityKind, ScatteredEntity
from .distributor import Distribution, ItemDistributor, PropKind, PropPlacement

__all__ = ["EntityKind", "ScatteredEntity", "Distribution", "ItemDistributor", "PropKind", "PropPlacement"]
