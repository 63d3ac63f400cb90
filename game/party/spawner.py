"""
Time-driven creation of collectibles, obstacles and power-ups
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from .entities import (
    COLLECTIBLE_TYPES,
    OBSTACLE,
    OBSTACLE_SIZES,
    OBSTACLE_TYPES,
    POWER_UP_TYPES,
    Collectible,
    Entity,
    Obstacle,
    PowerUp,
    Vec2,
)
from .levels import LevelConfig
from .physics import ground_level

logger = logging.getLogger(__name__)

# Margin kept clear above and below the spawn band
SPAWN_MARGIN = 100


class Spawner:
    """
    Three independent timers compared against accumulated game time, so a
    paused engine (which stops accumulating time) also stops spawning.
    """

    def __init__(
        self,
        level: LevelConfig,
        stage_width: float,
        stage_height: float,
        rng: Optional[random.Random] = None,
    ):
        self.level = level
        self.stage_width = stage_width
        self.stage_height = stage_height
        self.rng = rng or random.Random()

        self.last_collectible_spawn = 0.0
        self.last_obstacle_spawn = 0.0
        self.last_power_up_spawn = 0.0

    def spawn(self, game_time: float, entities: List[Entity]) -> List[Entity]:
        """Return the entities due at ``game_time`` (caller adds them to the world)"""
        spawned: List[Entity] = []

        if game_time - self.last_collectible_spawn > self.level.collectible_interval:
            spawned.append(self._spawn_collectible())
            self.last_collectible_spawn = game_time

        if game_time - self.last_obstacle_spawn > self.level.obstacle_interval:
            n_obstacles = sum(1 for e in entities if e.kind == OBSTACLE and e.active)
            # At capacity: keep the timer expired and retry next frame
            if n_obstacles < self.level.max_obstacles:
                spawned.append(self._spawn_obstacle())
                self.last_obstacle_spawn = game_time

        if game_time - self.last_power_up_spawn > self.level.power_up_interval:
            spawned.append(self._spawn_power_up())
            self.last_power_up_spawn = game_time

        for e in spawned:
            logger.debug("spawned %s/%s at t=%.0f", e.kind, e.subtype, game_time)
        return spawned

    def _band_y(self) -> float:
        return self.rng.uniform(SPAWN_MARGIN, self.stage_height - SPAWN_MARGIN)

    def _spawn_collectible(self) -> Collectible:
        subtype = self.rng.choice(COLLECTIBLE_TYPES)
        return Collectible(position=Vec2(self.stage_width, self._band_y()), subtype=subtype)

    def _spawn_obstacle(self) -> Obstacle:
        subtype = self.rng.choice(OBSTACLE_TYPES)
        if subtype == "pit":
            y = ground_level(self.stage_height, OBSTACLE_SIZES["pit"][1])
        else:
            y = self._band_y()
        return Obstacle(position=Vec2(self.stage_width, y), subtype=subtype)

    def _spawn_power_up(self) -> PowerUp:
        subtype = self.rng.choice(POWER_UP_TYPES)
        return PowerUp(position=Vec2(self.stage_width, self._band_y()), subtype=subtype)
