from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from grove.geom import Vec2

from .entities import Player
from .world import World

__all__ = [
    "Direction",
    "HeldDirection",
    "direction_from_value",
    "step_player",
]


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def unit(self) -> Vec2:
        return _DIRECTION_UNITS[self]


# Screen coordinates: y grows downwards.
_DIRECTION_UNITS: dict[Direction, Vec2] = {
    Direction.UP: Vec2(0.0, -1.0),
    Direction.DOWN: Vec2(0.0, 1.0),
    Direction.LEFT: Vec2(-1.0, 0.0),
    Direction.RIGHT: Vec2(1.0, 0.0),
}

_DIRECTION_ALIASES: dict[str, Direction] = {
    "w": Direction.UP,
    "arrowup": Direction.UP,
    "s": Direction.DOWN,
    "arrowdown": Direction.DOWN,
    "a": Direction.LEFT,
    "arrowleft": Direction.LEFT,
    "d": Direction.RIGHT,
    "arrowright": Direction.RIGHT,
}


def direction_from_value(value: object) -> Direction | None:
    """Parse a direction name/alias; unknown values and `none` map to `None`."""
    if isinstance(value, Direction):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    if not key or key == "none":
        return None
    try:
        return Direction(key)
    except ValueError:
        return _DIRECTION_ALIASES.get(key)


@dataclass(slots=True)
class HeldDirection:
    """Single nullable direction slot shared by keyboard and touch sources."""

    current: Direction | None = None

    def set(self, direction: Direction | None) -> None:
        self.current = direction

    def clear(self) -> None:
        self.current = None

    def release(self, direction: Direction) -> None:
        # A key-up for a direction that was already superseded must not cancel the newer one.
        if self.current is direction:
            self.current = None


def step_player(
    player: Player,
    direction: Direction | None,
    dt: float,
    *,
    world: World,
    speed: float,
    frozen: bool = False,
) -> bool:
    """Advance the player one frame along the held cardinal direction.

    Returns True when the position changed.
    """

    if frozen or direction is None:
        return False
    dt = float(dt)
    if not (dt > 0.0):
        return False

    step = direction.unit * (float(speed) * dt)
    new_pos = world.clamp_circle(player.pos + step, player.radius)
    if new_pos == player.pos:
        return False
    player.pos = new_pos
    return True
