"""
Training configuration for the party run environment
Reward shaping variants and PPO hyperparameters
"""

# Environment parameters
ENV_CONFIG = {
    "width": 1200,
    "height": 600,
    "start_level": 1,
    "max_steps": 5400,  # 90 seconds at 60 FPS
    "k_entities": 6,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Baseline: the env defaults
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced collecting and dodging",
    "R_COLLECT": 1.0,
    "R_BONUS": 2.0,
    "R_POWER_UP": 0.5,
    "R_DAMAGE": 2.0,
    "R_LEVEL": 10.0,
    "R_DEATH": 5.0,
    "R_TIME": 0.001,
}

# Cautious: losing lives hurts a lot more
REWARD_CONFIG_CAUTIOUS = {
    "name": "cautious",
    "description": "Prioritize survival over pickup rate",
    "R_COLLECT": 0.5,
    "R_BONUS": 1.0,
    "R_POWER_UP": 1.0,   # shields keep you alive
    "R_DAMAGE": 5.0,
    "R_LEVEL": 10.0,
    "R_DEATH": 15.0,
    "R_TIME": 0.0005,
}

# Collector: chase every pickup, accept hits
REWARD_CONFIG_COLLECTOR = {
    "name": "collector",
    "description": "Prioritize collectibles and quick level completion",
    "R_COLLECT": 2.0,
    "R_BONUS": 4.0,
    "R_POWER_UP": 0.5,
    "R_DAMAGE": 1.0,
    "R_LEVEL": 20.0,
    "R_DEATH": 3.0,
    "R_TIME": 0.002,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "cautious": REWARD_CONFIG_CAUTIOUS,
    "collector": REWARD_CONFIG_COLLECTOR,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "log_dir": "./logs",
    "model_dir": "./models",
}
