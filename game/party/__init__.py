"""2D Game module - side-scrolling birthday party collector"""

from .engine import GameEngine, FrameResult
from .levels import LEVEL_CONFIGS, LevelConfig, get_level_config
from .party_env import PartyRunEnv, run_random_episode

__all__ = [
    'GameEngine',
    'FrameResult',
    'LEVEL_CONFIGS',
    'LevelConfig',
    'get_level_config',
    'PartyRunEnv',
    'run_random_episode',
]
