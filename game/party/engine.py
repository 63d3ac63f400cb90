"""
GameEngine - owns one level of a run
------------------------------------
The engine holds the entity list and the GameState exclusively. Callers
drive it with ``update(delta_time_ms, actions)`` once per frame and draw it
with ``render(surface)``; everything they get back is a snapshot.

Per-frame order: power-up expiry -> spawning -> player input -> motion ->
collisions -> pruning -> win/lose check.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Sequence

from . import events as ev
from .collisions import resolve_collisions
from .drawing import background_commands, entity_commands
from .entities import Entity, Player, Vec2, PLAYER_SIZE
from .levels import LEVEL_CONFIGS, LevelConfig, get_level_config
from .physics import SPEED_MULTIPLIER, ground_level, jump, move, update_entity
from .powerups import PowerUpTracker
from .spawner import Spawner
from .state import LEVEL_COMPLETE, RUN_OVER, RUNNING, GameState

logger = logging.getLogger(__name__)

# Logical input actions
MOVE_LEFT = "move_left"
MOVE_RIGHT = "move_right"
JUMP = "jump"
PAUSE = "pause"

STAGE_WIDTH = 1200
STAGE_HEIGHT = 600
PLAYER_START_X = 50


@dataclass
class FrameResult:
    run_over: bool
    level_complete: bool
    victory: bool
    score: int
    events: List[ev.GameEvent] = field(default_factory=list)
    state: Optional[GameState] = None


class GameEngine:
    """Simulation of a single level"""

    def __init__(
        self,
        level: int = 1,
        stage_width: float = STAGE_WIDTH,
        stage_height: float = STAGE_HEIGHT,
        score: int = 0,
        levels: Optional[Sequence[LevelConfig]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.levels = list(levels) if levels else list(LEVEL_CONFIGS)
        self.level_config = get_level_config(level, self.levels)
        self.stage_width = stage_width
        self.stage_height = stage_height
        self.rng = rng or random.Random()

        self.player = Player(position=Vec2(PLAYER_START_X, ground_level(stage_height, PLAYER_SIZE)))
        self.state = GameState(
            score=score,
            level=self.level_config.level_number,
            lives=self.player.lives,
        )
        self.entities: List[Entity] = [self.player]
        self.power_ups = PowerUpTracker(self.state.active_power_ups)
        self.spawner = Spawner(self.level_config, stage_width, stage_height, self.rng)

        self.status = RUNNING
        self._prev_actions: FrozenSet[str] = frozenset()

        logger.info("level %d (%s) started, score %d",
                    self.level_config.level_number, self.level_config.name, score)

    # ----------------------------
    # Frame API
    # ----------------------------

    def update(self, delta_time: float, actions: Iterable[str] = ()) -> FrameResult:
        """Advance the simulation by ``delta_time`` milliseconds"""
        actions = frozenset(actions)
        if PAUSE in actions and PAUSE not in self._prev_actions:
            self.toggle_pause()
        self._prev_actions = actions

        if self.status != RUNNING or self.state.paused:
            return self._result([])

        self.state.game_time += delta_time
        events: List[ev.GameEvent] = []

        self.power_ups.tick(delta_time)

        for entity in self.spawner.spawn(self.state.game_time, self.entities):
            self.add_entity(entity)

        self._apply_input(actions, events)

        for entity in self.entities:
            if entity.active:
                update_entity(entity, delta_time, self.stage_width, self.stage_height)

        events.extend(resolve_collisions(self.player, self.entities, self.state, self.power_ups))

        self.entities = [e for e in self.entities if e.active or e is self.player]
        self.state.lives = self.player.lives

        self._check_end(events)
        return self._result(events)

    def render(self, surface):
        """Send draw commands for the stage and every active entity to ``surface``"""
        for cmd in background_commands(
            self.level_config.level_number,
            self.stage_width,
            self.stage_height,
            scroll_speed=self.level_config.background_speed,
            game_time=self.state.game_time,
        ):
            surface.draw(cmd)
        for entity in self.entities:
            for cmd in entity_commands(entity, self.state.game_time):
                surface.draw(cmd)

    # ----------------------------
    # Run control
    # ----------------------------

    def pause(self):
        self.state.paused = True

    def resume(self):
        self.state.paused = False

    def toggle_pause(self):
        self.state.paused = not self.state.paused
        logger.debug("paused" if self.state.paused else "resumed")

    @property
    def is_final_level(self) -> bool:
        return self.level_config.level_number >= len(self.levels)

    def next_level(self) -> "GameEngine":
        """Fresh engine for the following level, carrying the score over"""
        return GameEngine(
            level=self.level_config.level_number + 1,
            stage_width=self.stage_width,
            stage_height=self.stage_height,
            score=self.state.score,
            levels=self.levels,
            rng=self.rng,
        )

    def add_entity(self, entity: Entity):
        self.entities.append(entity)

    # ----------------------------
    # Internals
    # ----------------------------

    def _apply_input(self, actions: FrozenSet[str], events: List[ev.GameEvent]):
        multiplier = SPEED_MULTIPLIER if self.power_ups.has_speed else 1.0
        if MOVE_LEFT in actions:
            move(self.player, -1, multiplier)
        elif MOVE_RIGHT in actions:
            move(self.player, 1, multiplier)
        else:
            move(self.player, 0)

        if JUMP in actions and jump(self.player, super_jump=self.power_ups.has_superjump):
            events.append(ev.GameEvent(ev.JUMP))

    def _check_end(self, events: List[ev.GameEvent]):
        if self.player.lives <= 0:
            self.status = RUN_OVER
            events.append(ev.GameEvent(ev.RUN_OVER))
            logger.info("run over at level %d, score %d", self.state.level, self.state.score)
        elif self.state.collectibles.meets(self.level_config.required):
            self.status = LEVEL_COMPLETE
            events.append(ev.GameEvent(ev.LEVEL_COMPLETE))
            logger.info("level %d complete, score %d", self.state.level, self.state.score)
            if self.is_final_level:
                events.append(ev.GameEvent(ev.VICTORY))

    def _result(self, events: List[ev.GameEvent]) -> FrameResult:
        return FrameResult(
            run_over=self.status == RUN_OVER,
            level_complete=self.status == LEVEL_COMPLETE,
            victory=self.status == LEVEL_COMPLETE and self.is_final_level,
            score=self.state.score,
            events=events,
            state=self.state.snapshot(),
        )
