"""
Per-frame motion and boundary rules for every entity kind.

Velocities are expressed in units per reference frame (60 FPS). Each update
scales them by ``delta_time / FRAME_MS`` so the simulation speed does not
depend on the caller's frame rate. The jump impulses are the exception:
they replace the vertical velocity outright.
"""

from __future__ import annotations

import math

from .entities import (
    COLLECTIBLE,
    OBSTACLE,
    PLAYER,
    POWER_UP,
    Collectible,
    Entity,
    Obstacle,
    Player,
    PowerUp,
    refresh_bbox,
)
from .utils import clamp

FRAME_MS = 1000.0 / 60.0

GRAVITY = 0.5
JUMP_POWER = -12.0
SUPER_JUMP_POWER = -18.0
MOVE_SPEED = 5.0
SPEED_MULTIPLIER = 1.5

INVULNERABILITY_MS = 2000.0
GROUND_HEIGHT = 50

# Mid-stage band that floating obstacles are kept in
BAND_TOP = 50
BAND_BOTTOM_MARGIN = 100


def frame_scale(delta_time: float) -> float:
    """Convert elapsed milliseconds into reference frames"""
    return delta_time / FRAME_MS


def ground_level(stage_height: float, height: float) -> float:
    """y at which an entity of ``height`` rests on the ground strip"""
    return stage_height - GROUND_HEIGHT - height


def is_off_stage(entity: Entity) -> bool:
    return entity.bbox.x + entity.bbox.width < 0


# ----------------------------
# Player
# ----------------------------

def update_player(player: Player, delta_time: float, stage_width: float, stage_height: float):
    scale = frame_scale(delta_time)

    if player.invulnerable:
        player.invulnerable_time -= delta_time
        if player.invulnerable_time <= 0:
            player.invulnerable = False
            player.invulnerable_time = 0.0

    if not player.grounded:
        player.velocity.y += GRAVITY * scale

    player.position.x += player.velocity.x * scale
    player.position.y += player.velocity.y * scale

    ground = ground_level(stage_height, player.bbox.height)
    if player.position.y >= ground:
        player.position.y = ground
        player.velocity.y = 0.0
        player.grounded = True
        player.jumping = False
    else:
        player.grounded = False

    player.position.x = clamp(player.position.x, 0, stage_width - player.bbox.width)
    refresh_bbox(player)

    # 4-frame walk cycle
    player.animation_time += delta_time
    if player.animation_time > 200:
        player.animation_frame = (player.animation_frame + 1) % 4
        player.animation_time = 0.0


def jump(player: Player, super_jump: bool = False) -> bool:
    """Start a jump if standing on the ground. Returns True if it happened."""
    if not player.grounded:
        return False
    player.velocity.y = SUPER_JUMP_POWER if super_jump else JUMP_POWER
    player.grounded = False
    player.jumping = True
    return True


def move(player: Player, direction: int, speed_multiplier: float = 1.0):
    """direction: -1 left, 1 right, 0 stop"""
    player.velocity.x = direction * MOVE_SPEED * speed_multiplier
    if direction < 0:
        player.facing_right = False
    elif direction > 0:
        player.facing_right = True


def take_damage(player: Player) -> bool:
    """Lose a life unless invulnerable. Returns True if damage was applied."""
    if player.invulnerable:
        return False
    player.lives = max(0, player.lives - 1)
    player.invulnerable = True
    player.invulnerable_time = INVULNERABILITY_MS
    return True


# ----------------------------
# Scrolling entities
# ----------------------------

def _advance(entity: Entity, scale: float):
    entity.position.x += entity.velocity.x * scale
    entity.position.y += entity.velocity.y * scale


def _finish(entity: Entity):
    refresh_bbox(entity)
    if is_off_stage(entity):
        entity.active = False


def update_collectible(item: Collectible, delta_time: float, stage_width: float, stage_height: float):
    item.age += delta_time
    _advance(item, frame_scale(delta_time))
    _finish(item)

    item.animation_time += delta_time
    if item.animation_time > 300:
        item.animation_frame = (item.animation_frame + 1) % 3
        item.animation_time = 0.0


def update_obstacle(obstacle: Obstacle, delta_time: float, stage_width: float, stage_height: float):
    obstacle.age += delta_time
    if obstacle.subtype == "confetti":
        obstacle.velocity.y = math.sin(obstacle.age / 300) * 3
    elif obstacle.subtype == "bouncer":
        obstacle.velocity.y = math.sin(obstacle.age / 500) * 4

    _advance(obstacle, frame_scale(delta_time))

    if obstacle.subtype != "pit":
        obstacle.position.y = clamp(obstacle.position.y, BAND_TOP, stage_height - BAND_BOTTOM_MARGIN)

    _finish(obstacle)


def update_power_up(power_up: PowerUp, delta_time: float, stage_width: float, stage_height: float):
    power_up.age += delta_time
    power_up.velocity.y = math.sin(power_up.age / 400) * 2
    _advance(power_up, frame_scale(delta_time))
    _finish(power_up)


_UPDATERS = {
    PLAYER: update_player,
    COLLECTIBLE: update_collectible,
    OBSTACLE: update_obstacle,
    POWER_UP: update_power_up,
}


def update_entity(entity: Entity, delta_time: float, stage_width: float, stage_height: float):
    """Advance one entity by ``delta_time`` milliseconds"""
    _UPDATERS[entity.kind](entity, delta_time, stage_width, stage_height)
