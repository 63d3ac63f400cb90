"""
Game entity dataclasses

Every entity kind is its own dataclass tagged with a ``kind`` string.
Code that needs per-kind behaviour dispatches on that tag.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Union

# Entity kinds
PLAYER = "player"
COLLECTIBLE = "collectible"
OBSTACLE = "obstacle"
POWER_UP = "power_up"

# Subtypes
COLLECTIBLE_TYPES = ("present", "cake", "balloon")
OBSTACLE_TYPES = ("confetti", "bouncer", "pit")
POWER_UP_TYPES = ("speed", "shield", "superjump")

COLLECTIBLE_POINTS: Dict[str, int] = {"present": 10, "cake": 25, "balloon": 15}
POWER_UP_DURATIONS: Dict[str, float] = {"speed": 5000.0, "shield": 8000.0, "superjump": 3000.0}

PLAYER_SIZE = 32
COLLECTIBLE_SIZE = 24
POWER_UP_SIZE = 20
OBSTACLE_SIZES = {"confetti": (20, 20), "bouncer": (20, 20), "pit": (48, 8)}

STARTING_LIVES = 3


@dataclass
class Vec2:
    x: float = 0.0
    y: float = 0.0


@dataclass
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Player:
    """The character steered by the input snapshot"""
    kind: ClassVar[str] = PLAYER

    position: Vec2
    velocity: Vec2 = field(default_factory=Vec2)
    active: bool = True
    lives: int = STARTING_LIVES
    grounded: bool = True
    jumping: bool = False
    facing_right: bool = True
    invulnerable: bool = False
    invulnerable_time: float = 0.0  # ms left
    animation_frame: int = 0
    animation_time: float = 0.0
    bbox: BoundingBox = field(init=False)

    def __post_init__(self):
        self.bbox = BoundingBox(self.position.x, self.position.y, PLAYER_SIZE, PLAYER_SIZE)


@dataclass
class Collectible:
    """Scoring item; counts towards the level quota"""
    kind: ClassVar[str] = COLLECTIBLE

    position: Vec2
    subtype: str = "present"
    velocity: Vec2 = field(default_factory=lambda: Vec2(-2.0, 0.0))
    active: bool = True
    age: float = 0.0  # ms since spawn
    animation_frame: int = 0
    animation_time: float = 0.0
    points: int = field(init=False)
    bbox: BoundingBox = field(init=False)

    def __post_init__(self):
        if self.subtype not in COLLECTIBLE_POINTS:
            raise ValueError(f"unknown collectible type: {self.subtype!r}")
        self.points = COLLECTIBLE_POINTS[self.subtype]
        self.bbox = BoundingBox(self.position.x, self.position.y, COLLECTIBLE_SIZE, COLLECTIBLE_SIZE)


@dataclass
class Obstacle:
    """Hazard that damages the player on contact"""
    kind: ClassVar[str] = OBSTACLE

    position: Vec2
    subtype: str = "confetti"
    velocity: Vec2 = field(default_factory=lambda: Vec2(-3.0, 0.0))
    active: bool = True
    age: float = 0.0
    bbox: BoundingBox = field(init=False)

    def __post_init__(self):
        if self.subtype not in OBSTACLE_SIZES:
            raise ValueError(f"unknown obstacle type: {self.subtype!r}")
        w, h = OBSTACLE_SIZES[self.subtype]
        self.bbox = BoundingBox(self.position.x, self.position.y, w, h)


@dataclass
class PowerUp:
    """Timed buff pickup"""
    kind: ClassVar[str] = POWER_UP

    position: Vec2
    subtype: str = "speed"
    velocity: Vec2 = field(default_factory=lambda: Vec2(-2.0, 0.0))
    active: bool = True
    age: float = 0.0
    duration: float = field(init=False)
    bbox: BoundingBox = field(init=False)

    def __post_init__(self):
        if self.subtype not in POWER_UP_DURATIONS:
            raise ValueError(f"unknown power-up type: {self.subtype!r}")
        self.duration = POWER_UP_DURATIONS[self.subtype]
        self.bbox = BoundingBox(self.position.x, self.position.y, POWER_UP_SIZE, POWER_UP_SIZE)


Entity = Union[Player, Collectible, Obstacle, PowerUp]


def refresh_bbox(entity: Entity) -> None:
    """Move the bounding box onto the entity's current position"""
    entity.bbox.x = entity.position.x
    entity.bbox.y = entity.position.y
