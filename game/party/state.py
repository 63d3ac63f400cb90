"""
Mutable game state owned by the engine
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List

from .levels import Quota

# Run status
RUNNING = "running"
LEVEL_COMPLETE = "level_complete"
RUN_OVER = "run_over"

COUNTER_FOR = {"present": "presents", "cake": "cakes", "balloon": "balloons"}

BIRTHDAY_COUNT = 23
BIRTHDAY_BONUS = 230


@dataclass
class ActivePowerUp:
    type: str
    remaining_time: float
    total_duration: float


@dataclass
class CollectibleCounts:
    presents: int = 0
    cakes: int = 0
    balloons: int = 0

    def increment(self, subtype: str) -> int:
        """Add one item of ``subtype`` and return the new count"""
        name = COUNTER_FOR[subtype]
        value = getattr(self, name) + 1
        setattr(self, name, value)
        return value

    def meets(self, quota: Quota) -> bool:
        return (
            self.presents >= quota.presents
            and self.cakes >= quota.cakes
            and self.balloons >= quota.balloons
        )


@dataclass
class GameState:
    score: int = 0
    level: int = 1
    lives: int = 3
    collectibles: CollectibleCounts = field(default_factory=CollectibleCounts)
    active_power_ups: List[ActivePowerUp] = field(default_factory=list)
    game_time: float = 0.0
    paused: bool = False

    def snapshot(self) -> "GameState":
        """Detached copy for callers; mutating it does not touch the engine"""
        return copy.deepcopy(self)
