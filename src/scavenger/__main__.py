from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from . import __version__
from .app import run_auto, run_gui, run_headless
from .config import load_settings
from .dungeon.generator import RoomGenerator
from .errors import ScavengerError
from .logging_config import configure_logging
from .rng import RandomSource


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dungeon-scavenger",
        description="Find every item before the clock runs out, then reach the exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Force GUI mode (Arcade)")
    mode.add_argument("--headless", action="store_true", help="Force headless mode (console)")
    parser.add_argument("--config", default=None, help="YAML settings file (defaults to the bundled one)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible dungeon")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N ticks (for testing)")
    parser.add_argument("--tick-rate", type=float, default=60.0, help="Target tick rate (Hz)")
    parser.add_argument("--dump-map", action="store_true", help="Print the generated room layout and exit")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    try:
        settings = load_settings(args.config).with_env_overrides()
        if args.seed is not None:
            settings = replace(settings, dungeon=replace(settings.dungeon, seed=args.seed))

        if args.dump_map:
            graph = RoomGenerator(settings.dungeon).generate(RandomSource(settings.dungeon.seed))
            print(graph.to_ascii())
            return 0

        if args.gui:
            return run_gui(settings, max_steps=args.max_steps, tick_rate=args.tick_rate)
        if args.headless:
            return run_headless(settings, max_steps=args.max_steps, tick_rate=args.tick_rate)
        return run_auto(settings, max_steps=args.max_steps, tick_rate=args.tick_rate)
    except ScavengerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
