from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

from importlib.resources import files as resource_files

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG: Tuple[str, ...] = (
    "bandage",
    "battery",
    "bible",
    "blood bag",
    "detonator",
    "dice",
    "dollar",
    "game",
    "hourglass",
    "magic 8 ball",
    "magnet",
    "medicine",
    "phd",
    "rainbow baby",
    "slot",
    "book",
    "tnt",
)


@dataclass(frozen=True)
class DungeonSettings:
    """Knobs handed to the room graph generator and the tile world.

    Room sizes should be odd so every room has a center tile; door_padding keeps
    doors far enough from corners that a wall tile fits on either side.
    """

    width: int = 50
    height: int = 50
    door_padding: int = 2
    room_min_width: int = 7
    room_max_width: int = 15
    room_min_height: int = 7
    room_max_height: int = 15
    max_rooms: int = 50
    tile_size: int = 32
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError("dungeon width/height must be positive")
        if self.door_padding < 2:
            raise ConfigurationError("door_padding must be >= 2")
        if self.room_min_width < 5 or self.room_min_height < 5:
            raise ConfigurationError("rooms must be at least 5x5 tiles")
        if self.room_min_width > self.room_max_width or self.room_min_height > self.room_max_height:
            raise ConfigurationError("room min size exceeds max size")
        if self.tile_size <= 0:
            raise ConfigurationError("tile_size must be positive")


@dataclass(frozen=True)
class LevelSettings:
    """Per-level rules: timer, item counts and decoration/power-up odds."""

    item_count: int = 5
    final_level: int = 6
    base_time: int = 35
    time_per_level: int = 5
    item_time_bonus: int = 5
    powerup_chance: float = 0.2
    hint_chance: float = 0.5
    decoration_fraction: float = 0.9
    chest_threshold: float = 0.25
    sack_threshold: float = 0.5
    tall_room_height: int = 9
    hint_duration: float = 4.0
    base_speed: float = 300.0
    speed_boost: float = 600.0
    speed_boost_duration: float = 4.0
    restart_fade: float = 0.25

    def __post_init__(self) -> None:
        if self.item_count <= 0:
            raise ConfigurationError("item_count must be positive")
        if self.final_level < 1:
            raise ConfigurationError("final_level must be >= 1")
        for name in ("base_time", "time_per_level", "item_time_bonus"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0")
        for name in ("powerup_chance", "hint_chance", "decoration_fraction", "chest_threshold", "sack_threshold"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ConfigurationError(f"{name} must be between 0.0 and 1.0, got {value}")
        if self.chest_threshold > self.sack_threshold:
            raise ConfigurationError("chest_threshold must not exceed sack_threshold")
        for name in ("hint_duration", "speed_boost_duration", "restart_fade"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0")

    def initial_countdown(self, level: int) -> int:
        """Seconds on the clock when ``level`` starts (level 1 -> 30s with defaults)."""
        return max(0, self.base_time - level * self.time_per_level)


@dataclass(frozen=True)
class GameSettings:
    dungeon: DungeonSettings = field(default_factory=DungeonSettings)
    level: LevelSettings = field(default_factory=LevelSettings)
    catalog: Tuple[str, ...] = DEFAULT_CATALOG

    def __post_init__(self) -> None:
        if len(set(self.catalog)) != len(self.catalog):
            raise ConfigurationError("item catalog contains duplicate names")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GameSettings":
        """Build settings from a parsed mapping. Unknown keys are ignored with a warning."""
        dungeon = _build(DungeonSettings, raw.get("dungeon") or {})
        level = _build(LevelSettings, raw.get("level") or {})
        catalog = tuple(str(name) for name in raw.get("catalog") or DEFAULT_CATALOG)
        return cls(dungeon=dungeon, level=level, catalog=catalog)

    def with_env_overrides(self) -> "GameSettings":
        """Apply SCAVENGER_* environment overrides on top of these settings."""
        dungeon = self.dungeon
        level = self.level
        seed = _env_int("SCAVENGER_SEED")
        if seed is not None:
            dungeon = replace(dungeon, seed=seed)
        width = _env_int("SCAVENGER_WIDTH")
        if width is not None:
            dungeon = replace(dungeon, width=width)
        height = _env_int("SCAVENGER_HEIGHT")
        if height is not None:
            dungeon = replace(dungeon, height=height)
        final_level = _env_int("SCAVENGER_FINAL_LEVEL")
        if final_level is not None:
            level = replace(level, final_level=final_level)
        return replace(self, dungeon=dungeon, level=level)


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from None


def _build(cls, section: Dict[str, Any]):
    if not isinstance(section, dict):
        raise ConfigurationError(f"{cls.__name__} section must be a mapping")
    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in section.items():
        if key not in known:
            logger.warning("Ignoring unknown %s setting '%s'", cls.__name__, key)
            continue
        kwargs[key] = value
    return cls(**kwargs)


def load_settings(path: Optional[str] = None) -> GameSettings:
    """Load game settings from YAML.

    If path is None, loads the embedded default resource at
    scavenger/data/defaults.yaml.
    """
    if path is None:
        data = resource_files("scavenger.data").joinpath("defaults.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default settings resource")
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
        logger.debug("Loaded settings from path: %s", path)

    raw = yaml.safe_load(data) or {}
    if not isinstance(raw, dict):
        raise ConfigurationError("settings file must contain a mapping at the top level")
    settings = GameSettings.from_dict(raw)
    logger.info(
        "Settings: %dx%d dungeon, %d items per level, %d levels, catalog of %d",
        settings.dungeon.width,
        settings.dungeon.height,
        settings.level.item_count,
        settings.level.final_level,
        len(settings.catalog),
    )
    return settings
