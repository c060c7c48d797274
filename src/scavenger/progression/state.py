from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from ..config import LevelSettings
from ..items.entities import ScatteredEntity

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class LevelPhase(str, Enum):
    PLAYING = "playing"
    ITEMS_COMPLETE = "items_complete"
    LEVEL_ADVANCE = "level_advance"
    WIN = "win"
    TIME_EXPIRED = "time_expired"


TERMINAL_PHASES = frozenset({LevelPhase.LEVEL_ADVANCE, LevelPhase.WIN, LevelPhase.TIME_EXPIRED})


@dataclass(frozen=True)
class LevelState:
    """Progress of the current level. Replaced, never mutated."""

    level: int
    countdown: int
    phase: LevelPhase = LevelPhase.PLAYING
    game_over: bool = False

    @property
    def items_complete(self) -> bool:
        return self.phase in (LevelPhase.ITEMS_COMPLETE, LevelPhase.LEVEL_ADVANCE, LevelPhase.WIN)

    @property
    def has_reached_exit(self) -> bool:
        return self.phase in (LevelPhase.LEVEL_ADVANCE, LevelPhase.WIN)

    @property
    def won(self) -> bool:
        return self.phase is LevelPhase.WIN

    @property
    def active(self) -> bool:
        return not self.game_over and self.phase not in TERMINAL_PHASES


def format_time(seconds: int) -> str:
    """Format a second count as M:SS."""
    minutes, part = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{part:02d}"


class ProgressionStateMachine:
    """Level rules as pure transitions over LevelState.

    Playing -> ItemsComplete -> LevelAdvance | Win, and any active phase ->
    TimeExpired once the clock has run out. Win and TimeExpired set game_over,
    after which every transition is a no-op.
    """

    def __init__(self, settings: LevelSettings) -> None:
        self.settings = settings

    def start(self, level: int) -> LevelState:
        state = LevelState(level=level, countdown=self.settings.initial_countdown(level))
        logger.info("Level %d starts with %s on the clock", level, format_time(state.countdown))
        return state

    def tick_second(self, state: LevelState) -> LevelState:
        """One real second elapsed. The clock stops at zero and after the level ends."""
        if not state.active or state.countdown <= 0:
            return state
        return replace(state, countdown=state.countdown - 1)

    def collect_item(self, state: LevelState) -> LevelState:
        if not state.active:
            return state
        return replace(state, countdown=state.countdown + self.settings.item_time_bonus)

    def evaluate(
        self,
        state: LevelState,
        items: Sequence[ScatteredEntity],
        player_tile: Optional[Coord],
        exit_tile: Coord,
    ) -> LevelState:
        """Per-frame check; applies at most one transition."""
        if not state.active:
            return state

        if state.countdown <= 0:
            logger.info("Time expired on level %d", state.level)
            return replace(state, countdown=0, phase=LevelPhase.TIME_EXPIRED, game_over=True)

        if state.phase is LevelPhase.PLAYING:
            if all(item.found for item in items):
                logger.info("All %d items found on level %d", len(items), state.level)
                return replace(state, phase=LevelPhase.ITEMS_COMPLETE)
            return state

        if player_tile is not None and tuple(player_tile) == tuple(exit_tile):
            if state.level >= self.settings.final_level:
                logger.info("Exit reached on final level %d", state.level)
                return replace(state, phase=LevelPhase.WIN, game_over=True)
            logger.info("Exit reached on level %d", state.level)
            return replace(state, phase=LevelPhase.LEVEL_ADVANCE)
        return state

    def status_text(self, state: LevelState, items: Iterable[ScatteredEntity]) -> str:
        if state.items_complete:
            return f"Find the computer. Current Level: {state.level}"
        text = "Find "
        for item in items:
            if not item.found:
                text += item.name + " \n"
        return text + f"Current Level: {state.level}"

    def countdown_text(self, state: LevelState) -> str:
        return "Countdown: " + format_time(state.countdown)

    def banner(self, state: LevelState) -> Optional[str]:
        if state.phase is LevelPhase.WIN:
            return "YOU WON!"
        if state.phase is LevelPhase.TIME_EXPIRED:
            return "GAME OVER"
        return None
