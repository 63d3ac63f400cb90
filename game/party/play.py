"""
Play Party Run in an arcade window, or run a headless random agent.

    python -m game.party.play --level 1
    python -m game.party.play --random-agent --seed 7
"""

import argparse
import logging

from .engine import STAGE_HEIGHT, STAGE_WIDTH
from .party_env import run_random_episode


def main():
    parser = argparse.ArgumentParser(description="Party Run")
    parser.add_argument("--level", type=int, default=1, help="Starting level (clamped to the table)")
    parser.add_argument("--seed", type=int, default=None, help="Spawn RNG seed")
    parser.add_argument("--width", type=int, default=STAGE_WIDTH, help="Stage width in pixels")
    parser.add_argument("--height", type=int, default=STAGE_HEIGHT, help="Stage height in pixels")
    parser.add_argument("--random-agent", action="store_true", help="Run a headless random episode")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.random_agent:
        run_random_episode(
            render=False,
            seed=args.seed,
            level=args.level,
            width=args.width,
            height=args.height,
        )
        return

    from .window import play
    play(level=args.level, seed=args.seed, width=args.width, height=args.height)


if __name__ == "__main__":
    main()
