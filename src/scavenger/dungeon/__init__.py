from .rooms import DoorLocation, DoorSide, Room, classify_door, room_at
from .generator import RoomGenerator, RoomGraph
from .compositor import DungeonCompositor

__all__ = [
    "DoorLocation",
    "DoorSide",
    "Room",
    "classify_door",
    "room_at",
    "RoomGenerator",
    "RoomGraph",
    "DungeonCompositor",
]
