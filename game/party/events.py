"""
Discrete gameplay events reported to the caller each frame (for audio, HUD
popups, reward shaping).
"""

from dataclasses import dataclass
from typing import Optional

JUMP = "jump"
COLLECT = "collect"
BIRTHDAY_BONUS = "birthday_bonus"
POWER_UP = "power_up"
DAMAGE = "damage"
LEVEL_COMPLETE = "level_complete"
RUN_OVER = "run_over"
VICTORY = "victory"


@dataclass(frozen=True)
class GameEvent:
    type: str
    subtype: Optional[str] = None
