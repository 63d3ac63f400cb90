"""
Tracks the timed buffs currently in effect.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .state import ActivePowerUp

logger = logging.getLogger(__name__)


class PowerUpTracker:
    """
    Works directly on the GameState's ``active_power_ups`` list so the state
    snapshot always reflects the buffs in effect. Holds at most one entry per
    power-up type.
    """

    def __init__(self, active: List[ActivePowerUp]):
        self.active = active

    def tick(self, delta_time: float) -> List[str]:
        """Age every buff by ``delta_time`` ms and drop the expired ones"""
        expired = []
        remaining = []
        for p in self.active:
            p.remaining_time -= delta_time
            if p.remaining_time > 0:
                remaining.append(p)
            else:
                expired.append(p.type)
        self.active[:] = remaining

        for kind in expired:
            logger.debug("power-up expired: %s", kind)
        return expired

    def activate(self, kind: str, duration: float) -> ActivePowerUp:
        """Start ``kind`` at full duration, replacing any running copy"""
        self.active[:] = [p for p in self.active if p.type != kind]
        entry = ActivePowerUp(type=kind, remaining_time=duration, total_duration=duration)
        self.active.append(entry)
        logger.debug("power-up activated: %s (%.0f ms)", kind, duration)
        return entry

    def get(self, kind: str) -> Optional[ActivePowerUp]:
        for p in self.active:
            if p.type == kind:
                return p
        return None

    def has(self, kind: str) -> bool:
        return self.get(kind) is not None

    @property
    def has_speed(self) -> bool:
        return self.has("speed")

    @property
    def has_shield(self) -> bool:
        return self.has("shield")

    @property
    def has_superjump(self) -> bool:
        return self.has("superjump")
