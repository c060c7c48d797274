from .room_fog import FogTileState, RoomFog, VisibilityTracker

__all__ = ["FogTileState", "RoomFog", "VisibilityTracker"]
