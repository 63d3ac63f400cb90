"""
Custom callback for tracking task-specific metrics during training.
Records: score, collectibles picked up, damage taken, level completion.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log per-episode metrics of PartyRunEnv.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_collected: List[int] = []
        self.episode_damage: List[int] = []
        self.episode_completed: List[float] = []

        # Per-env accumulators (collect/damage are reported per step)
        self._collected: Dict[int, int] = {}
        self._damage: Dict[int, int] = {}

        # CSV file
        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "score", "collected", "damage", "level_complete"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for i, (info, done) in enumerate(zip(infos, dones)):
            self._collected[i] = self._collected.get(i, 0) + info.get("collected", 0)
            self._damage[i] = self._damage.get(i, 0) + info.get("damage_taken", 0)

            # Monitor wrapper adds episode info on the final step
            if done and "episode" in info:
                ep_reward = info["episode"]["r"]
                ep_length = info["episode"]["l"]
                score = info.get("score", 0)
                completed = 1.0 if info.get("level_complete") else 0.0
                collected = self._collected.pop(i, 0)
                damage = self._damage.pop(i, 0)

                self.episode_rewards.append(ep_reward)
                self.episode_lengths.append(ep_length)
                self.episode_scores.append(score)
                self.episode_collected.append(collected)
                self.episode_damage.append(damage)
                self.episode_completed.append(completed)

                if self.csv_writer:
                    self.csv_writer.writerow([
                        self.num_timesteps,
                        len(self.episode_rewards),
                        ep_reward,
                        ep_length,
                        score,
                        collected,
                        damage,
                        completed,
                    ])
                    self.csv_file.flush()

                if self.logger:
                    self.logger.record("party/score", score)
                    self.logger.record("party/collected", collected)
                    self.logger.record("party/level_complete", completed)

                if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                    avg_reward = sum(self.episode_rewards[-10:]) / 10
                    print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                          f"Timestep {self.num_timesteps}, "
                          f"Avg Reward (10 ep): {avg_reward:.2f}")

        return True

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "mean_collected": np.mean(self.episode_collected),
            "completion_rate": np.mean(self.episode_completed),
        }
