"""Place entities so they overlap the player on the next update."""

from __future__ import annotations

from game.party.engine import GameEngine
from game.party.entities import Collectible, Obstacle, PowerUp, Vec2
from game.party.physics import ground_level


def collectible_on_player(engine: GameEngine, subtype: str) -> Collectible:
    p = engine.player.position
    item = Collectible(position=Vec2(p.x, p.y + 2), subtype=subtype)
    engine.add_entity(item)
    return item


def pit_under_player(engine: GameEngine) -> Obstacle:
    y = ground_level(engine.stage_height, 8)
    pit = Obstacle(position=Vec2(engine.player.position.x, y), subtype="pit")
    engine.add_entity(pit)
    return pit


def power_up_on_player(engine: GameEngine, subtype: str) -> PowerUp:
    p = engine.player.position
    power_up = PowerUp(position=Vec2(p.x, p.y + 4), subtype=subtype)
    engine.add_entity(power_up)
    return power_up
