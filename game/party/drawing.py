"""
Draw descriptions for the stage and its entities.

Everything here is plain data in stage coordinates (top-left origin, y grows
downward). A surface only needs a ``draw(command)`` method to show it; the
arcade window provides one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from .entities import COLLECTIBLE, OBSTACLE, PLAYER, POWER_UP, Entity
from .physics import FRAME_MS, GROUND_HEIGHT

Color = Tuple[int, int, int]

RECT = "rect"
ELLIPSE = "ellipse"

# Colors
GROUND_C = (50, 205, 50)
GROUND_STRIPE_C = (34, 139, 34)
PLAYER_BODY_C = (255, 105, 180)
PLAYER_HEAD_C = (255, 182, 193)
HAT_C = (147, 112, 219)
STAR_C = (255, 215, 0)
EYE_C = (0, 0, 0)

COLLECTIBLE_C = {"present": (255, 20, 147), "cake": (255, 255, 224), "balloon": (135, 206, 235)}
OBSTACLE_C = {"confetti": (255, 105, 180), "bouncer": (255, 69, 0), "pit": (139, 69, 19)}
POWER_UP_C = {"speed": (255, 255, 0), "shield": (0, 191, 255), "superjump": (0, 255, 0)}

# Top / bottom sky colors per level
SKY_C = {
    1: ((255, 228, 225), (135, 206, 235)),
    2: ((255, 105, 180), (255, 215, 0)),
    3: ((25, 25, 112), (255, 105, 180)),
}
SKY_BANDS = 6

# Ground stripes scroll left by background_speed pixels per frame
STRIPE_SPACING = 40
STRIPE_WIDTH = 20


@dataclass(frozen=True)
class DrawCommand:
    shape: str
    x: float
    y: float
    width: float
    height: float
    color: Color
    alpha: float = 1.0


def _lerp_color(a: Color, b: Color, t: float) -> Color:
    return tuple(int(round(ca + (cb - ca) * t)) for ca, cb in zip(a, b))


def background_commands(
    level_number: int,
    stage_width: float,
    stage_height: float,
    scroll_speed: float = 1.0,
    game_time: float = 0.0,
) -> List[DrawCommand]:
    """Banded sky gradient plus the ground strip with its scrolling stripes"""
    top, bottom = SKY_C.get(level_number, SKY_C[3])
    sky_h = stage_height - GROUND_HEIGHT
    band_h = sky_h / SKY_BANDS
    cmds = [
        DrawCommand(RECT, 0, i * band_h, stage_width, band_h,
                    _lerp_color(top, bottom, i / (SKY_BANDS - 1)))
        for i in range(SKY_BANDS)
    ]
    cmds.append(DrawCommand(RECT, 0, sky_h, stage_width, GROUND_HEIGHT, GROUND_C))

    offset = (game_time / FRAME_MS * scroll_speed) % STRIPE_SPACING
    n_stripes = int(math.ceil(stage_width / STRIPE_SPACING)) + 1
    for i in range(n_stripes):
        cmds.append(DrawCommand(RECT, i * STRIPE_SPACING - offset, sky_h, STRIPE_WIDTH, 6, GROUND_STRIPE_C))
    return cmds


def _player_commands(p, game_time: float) -> List[DrawCommand]:
    x, y = p.position.x, p.position.y
    # Flicker while invulnerable, clocked by game time
    alpha = 0.5 if p.invulnerable and int(game_time // 100) % 2 else 1.0
    leg = (p.animation_frame % 2) * 2 - 1 if p.velocity.x != 0 else 0
    return [
        DrawCommand(RECT, x + 8, y + 8, 16, 20, PLAYER_BODY_C, alpha),
        DrawCommand(RECT, x + 6, y + 2, 20, 16, PLAYER_HEAD_C, alpha),
        DrawCommand(RECT, x + 10, y + 6, 2, 2, EYE_C, alpha),
        DrawCommand(RECT, x + 20, y + 6, 2, 2, EYE_C, alpha),
        DrawCommand(RECT, x + 10 + leg, y + 28, 4, 4, PLAYER_BODY_C, alpha),
        DrawCommand(RECT, x + 18 - leg, y + 28, 4, 4, PLAYER_BODY_C, alpha),
        DrawCommand(RECT, x + 8, y, 16, 6, HAT_C, alpha),
        DrawCommand(RECT, x + 14, y - 2, 4, 4, STAR_C, alpha),
    ]


def _collectible_commands(c, game_time: float) -> List[DrawCommand]:
    x, y = c.position.x, c.position.y
    if c.subtype == "present":
        return [
            DrawCommand(RECT, x + 2, y + 4, 20, 16, COLLECTIBLE_C["present"]),
            DrawCommand(RECT, x + 10, y + 2, 4, 20, STAR_C),
            DrawCommand(RECT, x + 2, y + 10, 20, 4, STAR_C),
        ]
    if c.subtype == "cake":
        return [
            DrawCommand(RECT, x + 4, y + 8, 16, 12, COLLECTIBLE_C["cake"]),
            DrawCommand(RECT, x + 4, y + 6, 16, 4, PLAYER_BODY_C),
            DrawCommand(RECT, x + 11, y + 2, 2, 6, COLLECTIBLE_C["balloon"]),
        ]
    # balloon bobs gently; the bounding box does not
    bob = math.sin(c.age / 200) * 2
    return [
        DrawCommand(ELLIPSE, x + 2, y - 4 + bob, 20, 24, COLLECTIBLE_C["balloon"]),
        DrawCommand(RECT, x + 11.5, y + 20, 1, 4, EYE_C),
    ]


def _obstacle_commands(o, game_time: float) -> List[DrawCommand]:
    x, y, box = o.position.x, o.position.y, o.bbox
    color = OBSTACLE_C[o.subtype]
    if o.subtype == "confetti":
        return [
            DrawCommand(RECT, x, y, 4, 4, color),
            DrawCommand(RECT, x + 6, y + 6, 4, 4, STAR_C),
            DrawCommand(RECT, x + 12, y + 3, 4, 4, COLLECTIBLE_C["balloon"]),
        ]
    if o.subtype == "bouncer":
        return [
            DrawCommand(ELLIPSE, x, y - 2, box.width, box.height + 4, color),
            DrawCommand(RECT, x + 6, y + 6, 2, 2, EYE_C),
            DrawCommand(RECT, x + 12, y + 6, 2, 2, EYE_C),
        ]
    return [DrawCommand(RECT, x, y, box.width, box.height, color)]


def _power_up_commands(p, game_time: float) -> List[DrawCommand]:
    glow = math.sin(p.age / 200) * 0.3 + 0.7
    color = POWER_UP_C[p.subtype]
    return [DrawCommand(ELLIPSE, p.position.x + 2, p.position.y + 2, 16, 16, color, glow)]


_DESCRIBERS = {
    PLAYER: _player_commands,
    COLLECTIBLE: _collectible_commands,
    OBSTACLE: _obstacle_commands,
    POWER_UP: _power_up_commands,
}


def entity_commands(entity: Entity, game_time: float) -> List[DrawCommand]:
    if not entity.active:
        return []
    return _DESCRIBERS[entity.kind](entity, game_time)
