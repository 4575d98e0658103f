from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from grove.geom import Vec2

from .tuning import PLAYER_RADIUS, PREDATOR_RADIUS

__all__ = [
    "Player",
    "Predator",
    "PredatorMode",
]


class PredatorMode(str, Enum):
    WANDER = "wander"
    CHASE = "chase"


@dataclass(slots=True)
class Player:
    pos: Vec2
    radius: float = PLAYER_RADIUS

    def __post_init__(self) -> None:
        if float(self.radius) < 0.0:
            raise ValueError(f"radius must be non-negative, got {self.radius}")


@dataclass(slots=True)
class Predator:
    pos: Vec2
    wander_target: Vec2
    radius: float = PREDATOR_RADIUS
    vel: Vec2 = field(default_factory=Vec2)
    mode: PredatorMode = PredatorMode.WANDER
    # Set when a wander move was fully blocked; consumed by the next resample.
    resample_pending: bool = False

    def __post_init__(self) -> None:
        if float(self.radius) < 0.0:
            raise ValueError(f"radius must be non-negative, got {self.radius}")
