from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class EntityKind(str, Enum):
    ITEM = "item"
    POWERUP = "powerup"


@dataclass
class ScatteredEntity:
    """A placed collectible. Never destroyed; collecting it deactivates it for good."""

    kind: EntityKind
    name: str
    x: float
    y: float
    found: bool = False
    visible: bool = False

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def active(self) -> bool:
        return not self.found

    def collect(self) -> bool:
        """Mark as found and hide. Returns False if it was already collected."""
        if self.found:
            return False
        self.found = True
        self.visible = False
        return True
