from __future__ import annotations

import logging
import os
from typing import Optional

from .config import GameSettings
from .engine.loop import GameEngine, LoopConfig
from .session import GameSession

logger = logging.getLogger(__name__)


def _arcade_available() -> bool:
    try:
        import arcade  # noqa: F401
        return True
    except Exception:
        return False


def run_headless(settings: GameSettings, max_steps: Optional[int] = 600, tick_rate: float = 30.0) -> int:
    """Run a level in the console with an idle player until the game ends.

    Prints the status line and countdown whenever they change.
    """
    if max_steps is None:
        # Safety in CI/headless: always bound the loop
        max_steps = 600

    session = GameSession(settings)
    session.start_level()
    print("Dungeon Scavenger (headless)")
    last = None

    def on_update(dt: float) -> bool:
        nonlocal last
        running = session.update(dt)
        hud = session.hud
        line = f"[level {session.level}] {hud.countdown} | " + hud.status.replace(" \n", ", ")
        if line != last:
            print(line)
            last = line
        if hud.banner:
            print(hud.banner)
        return running

    fixed_dt = 1.0 / tick_rate if tick_rate and tick_rate > 0 else None
    engine = GameEngine(on_update, LoopConfig(tick_rate=tick_rate, max_steps=max_steps, fixed_dt=fixed_dt))
    try:
        engine.run()
        print(f"Loop complete (steps={engine.step})")
        return 0
    except KeyboardInterrupt:
        engine.stop()
        print("Interrupted by user")
        return 130
    except Exception:
        logger.exception("Unhandled exception in headless loop")
        return 1


def run_gui(settings: GameSettings, max_steps: Optional[int] = None, tick_rate: float = 60.0) -> int:
    """Run with an Arcade window if available, otherwise fall back to headless."""
    if not _arcade_available():
        logger.warning("Arcade not available; falling back to headless mode")
        return run_headless(settings, max_steps=max_steps, tick_rate=tick_rate)

    from .gui import GameWindow

    import arcade

    GameWindow(GameSession(settings), max_steps=max_steps, update_rate=1.0 / tick_rate if tick_rate > 0 else 1 / 60)
    try:
        logger.info("Launching Arcade window")
        arcade.run()
        logger.info("Arcade loop finished")
        return 0
    except Exception:
        logger.exception("Unhandled exception in GUI loop; exiting with code 1")
        return 1


def run_auto(settings: GameSettings, max_steps: Optional[int] = None, tick_rate: float = 60.0) -> int:
    """Run GUI if available and not explicitly overridden, else headless.

    SCAVENGER_HEADLESS=1 forces headless.
    """
    if os.getenv("SCAVENGER_HEADLESS") == "1":
        return run_headless(settings, max_steps=max_steps, tick_rate=tick_rate)
    return run_gui(settings, max_steps=max_steps, tick_rate=tick_rate)
