from .loop import GameEngine, LoopConfig
from .scheduler import ScheduledTask, Scheduler

__all__ = ["GameEngine", "LoopConfig", "ScheduledTask", "Scheduler"]
