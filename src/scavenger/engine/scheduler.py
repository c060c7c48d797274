from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ScheduledTask:
    key: str
    due: float
    callback: Callable[[], None]
    cancelled: bool = False


class Scheduler:
    """One-shot delayed callbacks keyed by purpose.

    At most one task is pending per key: scheduling a key that is already
    pending cancels the earlier task. Time only moves when ``advance`` is called,
    so the scheduler runs on the same tick as everything else.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._tasks: Dict[str, ScheduledTask] = {}

    @property
    def now(self) -> float:
        return self._now

    def schedule(self, key: str, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        previous = self._tasks.get(key)
        if previous is not None:
            previous.cancelled = True
            logger.debug("Re-armed '%s'; previous task cancelled", key)
        task = ScheduledTask(key=key, due=self._now + delay, callback=callback)
        self._tasks[key] = task
        return task

    def cancel(self, key: str) -> bool:
        task = self._tasks.pop(key, None)
        if task is None:
            return False
        task.cancelled = True
        return True

    def pending(self, key: str) -> Optional[ScheduledTask]:
        return self._tasks.get(key)

    def clear(self) -> None:
        for task in self._tasks.values():
            task.cancelled = True
        self._tasks.clear()

    def advance(self, dt: float) -> int:
        """Move time forward by ``dt`` seconds and run every task now due, earliest first."""
        self._now += max(0.0, dt)
        due: List[ScheduledTask] = sorted(
            (t for t in self._tasks.values() if t.due <= self._now), key=lambda t: t.due
        )
        fired = 0
        for task in due:
            if task.cancelled or self._tasks.get(task.key) is not task:
                continue
            del self._tasks[task.key]
            logger.debug("Firing scheduled task '%s'", task.key)
            task.callback()
            fired += 1
        return fired
