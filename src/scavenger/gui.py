"""Arcade front-end: draws the tile layers as coloured cells and forwards input."""
from __future__ import annotations

import logging
import math
from typing import Optional, Set

import arcade

from .items.entities import EntityKind
from .session import GameSession
from .tiles.mapping import EMPTY

logger = logging.getLogger(__name__)

CELL = 14

_FLOOR_COLOUR = (60, 60, 70)
_WALL_COLOUR = (150, 150, 160)
_DOOR_COLOUR = (120, 90, 60)
_PROP_COLOUR = (140, 100, 40)
_EXIT_COLOUR = (40, 200, 220)
_ITEM_COLOUR = (250, 210, 40)
_POWERUP_COLOUR = (200, 60, 200)
_PLAYER_COLOUR = (240, 240, 240)


class GameWindow(arcade.Window):
    def __init__(self, session: GameSession, max_steps: Optional[int] = None, update_rate: float = 1 / 60) -> None:
        settings = session.settings.dungeon
        super().__init__(
            settings.width * CELL, settings.height * CELL + 80, title="Dungeon Scavenger", update_rate=update_rate
        )
        self.background_color = arcade.color.BLACK
        self.session = session
        self.session.start_level()
        self.max_steps = max_steps
        self.steps = 0
        self._keys: Set[int] = set()

    def _cell_rect(self, tx: int, ty: int):
        left = tx * CELL
        top = self.height - 80 - ty * CELL
        return left, left + CELL, top - CELL, top

    def _draw_cell(self, tx: int, ty: int, colour) -> None:
        left, right, bottom, top = self._cell_rect(tx, ty)
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, colour)

    def on_draw(self) -> None:
        self.clear()
        s = self.session
        world = s.world
        tiles = world.mapping
        for ty in range(world.height):
            for tx in range(world.width):
                ground = world.ground.get(tx, ty)
                stuff = world.stuff.get(tx, ty)
                if stuff == tiles.FINISH.tile:
                    colour = _EXIT_COLOUR
                elif stuff != EMPTY:
                    colour = _PROP_COLOUR
                elif ground == tiles.FLOOR.tile:
                    colour = _DOOR_COLOUR
                elif ground != EMPTY:
                    colour = _WALL_COLOUR
                elif world.floor.get(tx, ty) == tiles.FLOOR.tile:
                    colour = _FLOOR_COLOUR
                else:
                    continue
                shade = 1.0 - s.fog.alpha_at(tx, ty)
                self._draw_cell(tx, ty, tuple(int(c * shade) for c in colour))

        for entity in s.entities:
            if entity.visible:
                colour = _ITEM_COLOUR if entity.kind is EntityKind.ITEM else _POWERUP_COLOUR
                self._draw_cell(*world.world_to_tile(entity.x, entity.y), colour)
        self._draw_cell(*s.player_tile(), _PLAYER_COLOUR)

        hud = s.hud
        arcade.draw_text(hud.status.replace(" \n", ", "), 10, self.height - 30, arcade.color.WHITE, 12)
        arcade.draw_text(hud.countdown, 10, self.height - 60, arcade.color.WHITE, 12)
        if hud.hint.visible:
            px, py = s.player.x / world.tile_size * CELL, self.height - 80 - s.player.y / world.tile_size * CELL
            ex = px + math.cos(hud.hint.angle) * CELL * 3
            ey = py - math.sin(hud.hint.angle) * CELL * 3
            arcade.draw_line(px, py, ex, ey, arcade.color.RED, 3)
        if hud.banner:
            arcade.draw_text(hud.banner, self.width / 2 - 60, self.height / 2, arcade.color.WHITE, 24)

    def on_update(self, delta_time: float) -> None:
        s = self.session
        step = s.player.speed * delta_time
        dx = (arcade.key.RIGHT in self._keys) - (arcade.key.LEFT in self._keys)
        dy = (arcade.key.DOWN in self._keys) - (arcade.key.UP in self._keys)
        if dx:
            s.move_player(dx * step, 0)
        if dy:
            s.move_player(0, dy * step)
        s.collect_overlaps()
        s.update(delta_time)

        self.steps += 1
        if self.max_steps is not None and self.steps >= self.max_steps:
            self.close()

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self._keys.add(symbol)

    def on_key_release(self, symbol: int, modifiers: int) -> None:
        self._keys.discard(symbol)
