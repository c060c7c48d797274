from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from ..dungeon.rooms import Room
from ..items.entities import ScatteredEntity
from ..tiles.layers import TileLayer
from ..tiles.mapping import EMPTY

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class FogTileState(str, Enum):
    UNSEEN = "unseen"         # never entered; fully dark
    SEEN = "seen"             # explored before but not the active room; dim
    VISIBLE = "visible"       # the room the player is in; fully clear


class RoomFog:
    """
    Room-scoped shading over the Shadow layer.

    The shadow layer is drawn over the world with a per-tile alpha:
      - UNSEEN: alpha 1.0
      - SEEN: alpha = seen_alpha
      - VISIBLE: alpha 0.0

    Entering a room reveals its whole footprint (walls included). The room left
    behind stays explored and is dimmed rather than hidden again.
    The first reveal also clears the room's tiles on the shadow layer itself, so
    its write journal records every room the player has uncovered.
    """

    def __init__(self, shadow: TileLayer, seen_alpha: float = 0.5) -> None:
        if not (0.0 <= seen_alpha <= 1.0):
            raise ValueError("seen_alpha must be between 0.0 and 1.0")
        self.shadow = shadow
        self.seen_alpha = seen_alpha
        self.active_room: Optional[Room] = None
        self._alpha: List[List[float]] = [[1.0 for _ in range(shadow.width)] for _ in range(shadow.height)]
        self._explored: List[Room] = []

    def set_active_room(self, room: Optional[Room]) -> None:
        """Make ``room`` the revealed room. ``None`` (between rooms) keeps the current one."""
        if room is None or room is self.active_room:
            return
        if self.active_room is not None:
            self._set_room_alpha(self.active_room, self.seen_alpha)
        self._set_room_alpha(room, 0.0)
        if not any(r is room for r in self._explored):
            self._explored.append(room)
        logger.debug("Active room now at (%d, %d)", room.x, room.y)
        self.active_room = room

    def _set_room_alpha(self, room: Room, alpha: float) -> None:
        for tx, ty in room.footprint():
            if self.shadow.in_bounds(tx, ty):
                self._alpha[ty][tx] = alpha
                if alpha < 1.0 and self.shadow.get(tx, ty) != EMPTY:
                    self.shadow.put_tile_at(EMPTY, tx, ty)

    def alpha_at(self, tx: int, ty: int) -> float:
        if not self.shadow.in_bounds(tx, ty):
            raise IndexError("Tile out of bounds")
        return self._alpha[ty][tx]

    def state_of(self, room: Room) -> FogTileState:
        if room is self.active_room:
            return FogTileState.VISIBLE
        if any(r is room for r in self._explored):
            return FogTileState.SEEN
        return FogTileState.UNSEEN

    def alpha_map(self) -> List[List[float]]:
        return [row[:] for row in self._alpha]


class VisibilityTracker:
    """Shows a scattered entity only while the player shares its room.

    Recomputed from scratch every tick; the only memory is each entity's
    ``found`` flag, and found entities stay hidden.
    """

    def __init__(self, room_lookup: Callable[[float, float], Optional[Room]]) -> None:
        self._room_lookup = room_lookup

    def refresh(self, entities: Iterable[ScatteredEntity], active_room: Optional[Room]) -> int:
        shown = 0
        for entity in entities:
            if entity.found:
                entity.visible = False
                continue
            room = self._room_lookup(entity.x, entity.y)
            entity.visible = room is not None and room is active_room
            if entity.visible:
                shown += 1
        return shown
