"""
Arcade front-end: draws a GameEngine and, when interactive, feeds it the
currently held logical actions from the keyboard.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Set

import arcade

from .drawing import ELLIPSE, DrawCommand
from .engine import JUMP, MOVE_LEFT, MOVE_RIGHT, PAUSE, STAGE_HEIGHT, STAGE_WIDTH, GameEngine

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    arcade.key.LEFT: MOVE_LEFT,
    arcade.key.A: MOVE_LEFT,
    arcade.key.RIGHT: MOVE_RIGHT,
    arcade.key.D: MOVE_RIGHT,
    arcade.key.SPACE: JUMP,
    arcade.key.UP: JUMP,
    arcade.key.W: JUMP,
    arcade.key.P: PAUSE,
    arcade.key.ESCAPE: PAUSE,
}


class ArcadeSurface:
    """Turns top-left/y-down DrawCommands into arcade's bottom-left/y-up calls"""

    def __init__(self, height: float):
        self.height = height

    def draw(self, cmd: DrawCommand):
        color = (*cmd.color, int(255 * cmd.alpha))
        top = self.height - cmd.y
        bottom = top - cmd.height
        if cmd.shape == ELLIPSE:
            arcade.draw_ellipse_filled(
                cmd.x + cmd.width / 2, bottom + cmd.height / 2, cmd.width, cmd.height, color
            )
        else:
            arcade.draw_lrbt_rectangle_filled(cmd.x, cmd.x + cmd.width, bottom, top, color)


class PartyRunWindow(arcade.Window):
    """Arcade window for playing (or watching) a run"""

    def __init__(self, engine: GameEngine, interactive: bool = True):
        super().__init__(int(engine.stage_width), int(engine.stage_height), "Party Run")
        self.engine = engine
        self.interactive = interactive
        self.surface = ArcadeSurface(engine.stage_height)
        self.held: Set[str] = set()
        self.banner: Optional[str] = None

        self.HUD_C = (255, 255, 255)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        action = KEY_BINDINGS.get(symbol)
        if action:
            self.held.add(action)

    def on_key_release(self, symbol: int, modifiers: int):
        action = KEY_BINDINGS.get(symbol)
        if action:
            self.held.discard(action)

    # ----------------------------
    # Frame loop
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive or self.banner:
            return

        result = self.engine.update(delta_time * 1000.0, self.held)
        for event in result.events:
            # Audio hooks would attach here
            logger.debug("event: %s %s", event.type, event.subtype or "")

        if result.run_over:
            self.banner = f"GAME OVER - score {result.score}"
        elif result.victory:
            self.banner = f"HAPPY BIRTHDAY! You won with {result.score} points"
        elif result.level_complete:
            self.engine = self.engine.next_level()
            self.held.clear()

    def on_draw(self):
        self.clear()
        self.engine.render(self.surface)
        self._draw_hud()

    def _draw_hud(self):
        state = self.engine.state
        req = self.engine.level_config.required
        c = state.collectibles
        top = self.height - 24

        txt = (f"Score: {state.score}  Lives: {state.lives}  "
               f"Level {state.level}: {self.engine.level_config.name}")
        arcade.draw_text(txt, 12, top, self.HUD_C, 14)

        quota = (f"Presents {c.presents}/{req.presents}  "
                 f"Cakes {c.cakes}/{req.cakes}  "
                 f"Balloons {c.balloons}/{req.balloons}")
        arcade.draw_text(quota, 12, top - 20, self.HUD_C, 12)

        buffs = "  ".join(f"{p.type} {p.remaining_time / 1000:.1f}s" for p in state.active_power_ups)
        if buffs:
            arcade.draw_text(buffs, 12, top - 38, self.HUD_C, 12)

        if state.paused:
            arcade.draw_text("PAUSED", self.width / 2, self.height / 2, self.HUD_C, 28, anchor_x="center")
        if self.banner:
            arcade.draw_text(self.banner, self.width / 2, self.height / 2, self.HUD_C, 24, anchor_x="center")


def play(level: int = 1, seed: Optional[int] = None, width: int = STAGE_WIDTH, height: int = STAGE_HEIGHT):
    """Open an interactive window and run the arcade loop"""
    engine = GameEngine(level=level, stage_width=width, stage_height=height, rng=random.Random(seed))
    PartyRunWindow(engine)
    arcade.run()
