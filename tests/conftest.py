from __future__ import annotations

import random

import pytest

from game.party.engine import GameEngine


@pytest.fixture()
def engine() -> GameEngine:
    """Level 1 engine on the default 1200x600 stage with a fixed spawn seed."""
    return GameEngine(level=1, rng=random.Random(1234))
