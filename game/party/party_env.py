"""
PartyRunEnv - gymnasium wrapper around the side-scrolling party engine
---------------------------------------------------------------------
- Gymnasium API over GameEngine, one fixed-length frame per step
- Discrete MultiDiscrete action space: [move(3), jump(2)]
- Vector observation: player state + buffs + quota progress + K nearest entities
- Reward shaped from the engine's frame events

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.party.party_env
"""

from __future__ import annotations

import math
import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from . import events as ev
from .engine import JUMP, MOVE_LEFT, MOVE_RIGHT, STAGE_HEIGHT, STAGE_WIDTH, GameEngine
from .entities import COLLECTIBLE, OBSTACLE, PLAYER, POWER_UP_DURATIONS, POWER_UP_TYPES, STARTING_LIVES
from .physics import FRAME_MS, MOVE_SPEED, SPEED_MULTIPLIER, SUPER_JUMP_POWER
from .utils import clamp

DEFAULT_REWARDS = {
    "R_COLLECT": 1.0,    # per collectible picked up
    "R_BONUS": 2.0,      # birthday bonus
    "R_POWER_UP": 0.5,
    "R_DAMAGE": 2.0,     # penalty per life lost
    "R_LEVEL": 10.0,     # level complete
    "R_DEATH": 5.0,      # run over
    "R_TIME": 0.001,     # per step
}

# Kind codes used in the entity slots of the observation
KIND_CODES = {COLLECTIBLE: 1.0, OBSTACLE: -1.0}
POWER_UP_CODE = 0.5


class PartyRunEnv(gym.Env):
    """Side-scrolling party collector environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = STAGE_WIDTH,
        height: int = STAGE_HEIGHT,
        start_level: int = 1,
        frame_ms: float = FRAME_MS,
        max_steps: int = 5400,  # 90s at 60 FPS
        k_entities: int = 6,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        assert frame_ms > 0, "frame_ms must be positive"
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.start_level = start_level
        self.frame_ms = frame_ms
        self.max_steps = max_steps
        self.k_entities = k_entities
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        # move: 0 stay, 1 left, 2 right; jump: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player: pos(2) vel(2) grounded(1) lives(1) invulnerable(1)
        # Buffs: remaining fraction per type(3)
        # Quota: progress per counter(3)
        # Each entity: rel pos(2) kind(1)
        obs_dim = 7 + len(POWER_UP_TYPES) + 3 + self.k_entities * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.engine: GameEngine = None  # type: ignore
        self._step_count = 0
        self._last_result = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        level = (options or {}).get("level", self.start_level)
        self.engine = GameEngine(
            level=level,
            stage_width=self.width,
            stage_height=self.height,
            # seeded from np_random, which carries over between resets
            rng=random.Random(int(self.np_random.integers(2**32))),
        )
        if self._window is not None:
            self._window.engine = self.engine
        self._step_count = 0
        self._last_result = None

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, jump = int(action[0]), int(action[1])

        actions = set()
        if move == 1:
            actions.add(MOVE_LEFT)
        elif move == 2:
            actions.add(MOVE_RIGHT)
        if jump:
            actions.add(JUMP)

        result = self.engine.update(self.frame_ms, actions)
        self._last_result = result

        reward = self._compute_reward(result)

        terminated = result.run_over or result.level_complete
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        p = self.engine.player
        state = self.engine.state
        max_vx = MOVE_SPEED * SPEED_MULTIPLIER
        max_vy = abs(SUPER_JUMP_POWER)

        obs_parts = [
            (p.position.x / self.width) * 2 - 1,
            (p.position.y / self.height) * 2 - 1,
            clamp(p.velocity.x / max_vx, -1, 1),
            clamp(p.velocity.y / max_vy, -1, 1),
            1.0 if p.grounded else -1.0,
            (p.lives / STARTING_LIVES) * 2 - 1,
            1.0 if p.invulnerable else -1.0,
        ]

        for kind in POWER_UP_TYPES:
            buff = self.engine.power_ups.get(kind)
            frac = buff.remaining_time / POWER_UP_DURATIONS[kind] if buff else 0.0
            obs_parts.append(clamp(frac * 2 - 1, -1, 1))

        req = self.engine.level_config.required
        got = state.collectibles
        for have, need in ((got.presents, req.presents), (got.cakes, req.cakes), (got.balloons, req.balloons)):
            progress = 1.0 if need == 0 else min(have / need, 1.0)
            obs_parts.append(progress * 2 - 1)

        # Entities: top-K nearest to the player
        cx = p.bbox.x + p.bbox.width / 2
        cy = p.bbox.y + p.bbox.height / 2
        others = [e for e in self.engine.entities if e.kind != PLAYER and e.active]
        others.sort(key=lambda e: math.hypot(e.bbox.x - cx, e.bbox.y - cy))
        for i in range(self.k_entities):
            if i < len(others):
                e = others[i]
                dx = (e.bbox.x + e.bbox.width / 2 - cx) / self.width
                dy = (e.bbox.y + e.bbox.height / 2 - cy) / self.height
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1), KIND_CODES.get(e.kind, POWER_UP_CODE)]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, result) -> float:
        r = self.rewards
        counts = {}
        for event in result.events:
            counts[event.type] = counts.get(event.type, 0) + 1

        reward = 0.0
        reward += r["R_COLLECT"] * counts.get(ev.COLLECT, 0)
        reward += r["R_BONUS"] * counts.get(ev.BIRTHDAY_BONUS, 0)
        reward += r["R_POWER_UP"] * counts.get(ev.POWER_UP, 0)
        reward += r["R_LEVEL"] * counts.get(ev.LEVEL_COMPLETE, 0)

        reward -= r["R_DAMAGE"] * counts.get(ev.DAMAGE, 0)
        reward -= r["R_DEATH"] * counts.get(ev.RUN_OVER, 0)
        reward -= r["R_TIME"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        state = self.engine.state
        events = self._last_result.events if self._last_result else []
        return {
            "score": state.score,
            "lives": state.lives,
            "level": state.level,
            "presents": state.collectibles.presents,
            "cakes": state.collectibles.cakes,
            "balloons": state.collectibles.balloons,
            "collected": sum(1 for e in events if e.type == ev.COLLECT),
            "damage_taken": sum(1 for e in events if e.type == ev.DAMAGE),
            "level_complete": bool(self._last_result and self._last_result.level_complete),
            "num_entities": len(self.engine.entities) - 1,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # Imported lazily so headless training never opens a display
            from .window import PartyRunWindow
            self._window = PartyRunWindow(self.engine, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(
    render: bool = True,
    seed: Optional[int] = 42,
    level: int = 1,
    width: int = STAGE_WIDTH,
    height: int = STAGE_HEIGHT,
) -> float:
    """Run a random episode and return its total reward"""
    env = PartyRunEnv(
        render_mode="human" if render else None,
        width=width,
        height=height,
        start_level=level,
    )
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  score: {info['score']}  "
          f"lives: {info['lives']}  steps: {info['step']}")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
