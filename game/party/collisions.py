"""
Player-vs-world collision detection and its effect on the game state
"""

from __future__ import annotations

import logging
from typing import List

from . import events as ev
from .entities import COLLECTIBLE, OBSTACLE, PLAYER, POWER_UP, Collectible, Entity, Player, PowerUp
from .physics import take_damage
from .powerups import PowerUpTracker
from .state import BIRTHDAY_BONUS, BIRTHDAY_COUNT, GameState
from .utils import aabb_overlap

logger = logging.getLogger(__name__)

POWER_UP_POINTS = 50


def collect_item(item: Collectible, state: GameState, events: List[ev.GameEvent]):
    state.score += item.points
    count = state.collectibles.increment(item.subtype)
    events.append(ev.GameEvent(ev.COLLECT, item.subtype))

    # Counters only ever move up by one, so this fires once per counter
    if count == BIRTHDAY_COUNT:
        state.score += BIRTHDAY_BONUS
        events.append(ev.GameEvent(ev.BIRTHDAY_BONUS, item.subtype))
        logger.info("birthday bonus: %d %ss", count, item.subtype)

    item.active = False


def hit_obstacle(player: Player, tracker: PowerUpTracker, events: List[ev.GameEvent]) -> bool:
    """Apply contact damage. Returns True if a life was lost."""
    if tracker.has_shield:
        return False
    if not take_damage(player):
        return False
    events.append(ev.GameEvent(ev.DAMAGE))
    logger.debug("player hit, %d lives left", player.lives)
    return True


def activate_power_up(
    power_up: PowerUp,
    state: GameState,
    tracker: PowerUpTracker,
    events: List[ev.GameEvent],
):
    tracker.activate(power_up.subtype, power_up.duration)
    state.score += POWER_UP_POINTS
    events.append(ev.GameEvent(ev.POWER_UP, power_up.subtype))
    power_up.active = False


def resolve_collisions(
    player: Player,
    entities: List[Entity],
    state: GameState,
    tracker: PowerUpTracker,
) -> List[ev.GameEvent]:
    """Test every active entity against the player and apply the outcome"""
    events: List[ev.GameEvent] = []
    player_box = player.bbox

    for entity in entities:
        if entity.kind == PLAYER or not entity.active:
            continue
        if not aabb_overlap(player_box, entity.bbox):
            continue

        if entity.kind == COLLECTIBLE:
            collect_item(entity, state, events)
        elif entity.kind == OBSTACLE:
            # Invulnerability set by the first hit guards the rest of this pass
            hit_obstacle(player, tracker, events)
        elif entity.kind == POWER_UP:
            activate_power_up(entity, state, tracker, events)

    return events
