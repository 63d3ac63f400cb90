"""
Level configuration table
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

# ==============================================================================
# LEVEL TABLE
# Intervals and durations are in milliseconds of game time
# ==============================================================================

LEVEL_TABLE: List[Dict[str, Any]] = [
    {
        "name": "Morning Surprise",
        "background_speed": 1.0,
        "obstacle_interval": 3000,     # every 3 seconds
        "collectible_interval": 1500,
        "power_up_interval": 8000,
        "required": {"presents": 8, "cakes": 5, "balloons": 5},
        "max_obstacles": 3,
        "duration": 60000,
    },
    {
        "name": "Party Time",
        "background_speed": 1.5,
        "obstacle_interval": 2500,
        "collectible_interval": 1200,
        "power_up_interval": 7000,
        "required": {"presents": 10, "cakes": 8, "balloons": 8},
        "max_obstacles": 5,
        "duration": 75000,
    },
    {
        "name": "Midnight Celebration",
        "background_speed": 2.0,
        "obstacle_interval": 2000,
        "collectible_interval": 1000,
        "power_up_interval": 6000,
        "required": {"presents": 5, "cakes": 10, "balloons": 10},  # cake-heavy finale
        "max_obstacles": 7,
        "duration": 90000,
    },
]


@dataclass(frozen=True)
class Quota:
    """Collectible counts, used both as level thresholds and running totals"""
    presents: int = 0
    cakes: int = 0
    balloons: int = 0


@dataclass(frozen=True)
class LevelConfig:
    level_number: int
    name: str
    background_speed: float
    obstacle_interval: float
    collectible_interval: float
    power_up_interval: float
    required: Quota
    max_obstacles: int
    duration: float  # informational only


def load_levels(table: Sequence[Dict[str, Any]] = LEVEL_TABLE) -> List[LevelConfig]:
    """Build LevelConfig records from a list of dicts (level numbers are 1-based)"""
    if not table:
        raise ValueError("level table is empty")

    levels = []
    for i, row in enumerate(table):
        try:
            required = Quota(**row["required"])
            config = LevelConfig(
                level_number=i + 1,
                name=row["name"],
                background_speed=float(row.get("background_speed", 1.0)),
                obstacle_interval=float(row["obstacle_interval"]),
                collectible_interval=float(row["collectible_interval"]),
                power_up_interval=float(row["power_up_interval"]),
                required=required,
                max_obstacles=int(row["max_obstacles"]),
                duration=float(row.get("duration", 0)),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"level {i + 1}: malformed entry ({exc})") from exc

        intervals = (config.obstacle_interval, config.collectible_interval, config.power_up_interval)
        if min(intervals) <= 0:
            raise ValueError(f"level {i + 1}: spawn intervals must be positive")
        if min(required.presents, required.cakes, required.balloons) < 0:
            raise ValueError(f"level {i + 1}: required counts must be >= 0")
        if config.max_obstacles < 0:
            raise ValueError(f"level {i + 1}: max_obstacles must be >= 0")
        levels.append(config)
    return levels


LEVEL_CONFIGS: List[LevelConfig] = load_levels()


def get_level_config(level: int, levels: Optional[Sequence[LevelConfig]] = None) -> LevelConfig:
    """Look up a level by 1-based number, clamping into the table"""
    levels = levels or LEVEL_CONFIGS
    index = min(max(level, 1), len(levels)) - 1
    return levels[index]
