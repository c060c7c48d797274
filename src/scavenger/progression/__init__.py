from .state import LevelPhase, LevelState, ProgressionStateMachine, format_time
from .powerups import DirectionHint, Player, PowerUpEffect, PowerUpEffects, hint_angle, nearest_unfound_item

__all__ = [
    "LevelPhase",
    "LevelState",
    "ProgressionStateMachine",
    "format_time",
    "DirectionHint",
    "Player",
    "PowerUpEffect",
    "PowerUpEffects",
    "hint_angle",
    "nearest_unfound_item",
]
