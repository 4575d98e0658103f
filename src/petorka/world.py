from __future__ import annotations

"""Static map description.

The world is immutable for a session. Doors carry the only mutable bit (`open`),
so the world stores door *placements* and hands out fresh `Door` objects on
every session build/reset.
"""

from dataclasses import dataclass, field
from enum import Enum

from grove.geom import Rect, Vec2, circle_overlaps_any

from .tuning import BOARD_H, BOARD_W, PREDATOR_RADIUS, TILE

__all__ = [
    "DEFAULT_WORLD",
    "Door",
    "DoorKind",
    "DoorPlacement",
    "World",
    "build_default_world",
]


class DoorKind(str, Enum):
    MATH = "math"
    LANGUAGE = "language"


@dataclass(frozen=True, slots=True)
class DoorPlacement:
    id: int
    kind: DoorKind
    pos: Vec2


@dataclass(slots=True)
class Door:
    id: int
    kind: DoorKind
    pos: Vec2
    open: bool = False

    @classmethod
    def from_placement(cls, placement: DoorPlacement) -> Door:
        return cls(id=int(placement.id), kind=placement.kind, pos=placement.pos, open=False)


@dataclass(frozen=True, slots=True)
class World:
    width: float
    height: float
    hazards: tuple[Rect, ...] = ()
    doors: tuple[DoorPlacement, ...] = ()
    player_start: Vec2 = field(default_factory=Vec2)
    predator_start: Vec2 = field(default_factory=Vec2)
    # Initial wander target; also the fallback when resampling finds nothing clear.
    safe_point: Vec2 = field(default_factory=Vec2)
    wander_region: Rect | None = None
    trees: tuple[Vec2, ...] = ()
    paths: tuple[Rect, ...] = ()

    def __post_init__(self) -> None:
        if not (float(self.width) > 0.0 and float(self.height) > 0.0):
            raise ValueError(f"world bounds must be positive, got {self.width}x{self.height}")
        for hazard in self.hazards:
            if hazard.w < 0.0 or hazard.h < 0.0:
                raise ValueError(f"hazard has negative extent: {hazard}")
        seen: set[int] = set()
        for placement in self.doors:
            if placement.id in seen:
                raise ValueError(f"duplicate door id {placement.id}")
            seen.add(placement.id)

    @property
    def bounds(self) -> Rect:
        return Rect(0.0, 0.0, float(self.width), float(self.height))

    @property
    def interior(self) -> Rect:
        if self.wander_region is not None:
            return self.wander_region
        return self.bounds

    def clamp_circle(self, pos: Vec2, radius: float) -> Vec2:
        return pos.clamp_inside(self.width, self.height, inset=radius)

    def circle_hits_hazard(self, pos: Vec2, radius: float) -> bool:
        return circle_overlaps_any(pos, radius, self.hazards)

    def build_doors(self) -> list[Door]:
        return [Door.from_placement(placement) for placement in self.doors]


def _tile(col: float, row: float) -> Vec2:
    return Vec2(col * TILE, row * TILE)


def _tile_center(col: int, row: int) -> Vec2:
    return Vec2(col * TILE + TILE / 2.0, row * TILE + TILE / 2.0)


_DOOR_TILES: tuple[tuple[int, int], ...] = (
    (6, 2),
    (12, 2),
    (16, 4),
    (3, 5),
    (9, 6),
    (14, 7),
    (2, 9),
    (7, 9),
    (12, 9),
    (17, 9),
)

_TREE_TILES: tuple[tuple[int, int], ...] = (
    (1, 1),
    (4, 1),
    (18, 1),
    (17, 3),
    (2, 7),
    (6, 10),
    (14, 10),
)


def build_default_world() -> World:
    doors = tuple(
        DoorPlacement(
            id=idx + 1,
            kind=DoorKind.MATH if idx % 2 == 0 else DoorKind.LANGUAGE,
            pos=_tile_center(col, row),
        )
        for idx, (col, row) in enumerate(_DOOR_TILES)
    )
    world = World(
        width=BOARD_W,
        height=BOARD_H,
        hazards=(
            Rect(5 * TILE, 3 * TILE, 3 * TILE, 2 * TILE),
            Rect(10 * TILE, 7 * TILE, 3 * TILE, 2 * TILE),
        ),
        doors=doors,
        player_start=_tile_center(2, 2),
        predator_start=_tile_center(15, 6),
        safe_point=_tile(10, 6),
        wander_region=Rect(TILE, TILE, BOARD_W - 2 * TILE, BOARD_H - 2 * TILE),
        trees=tuple(_tile(col, row) for col, row in _TREE_TILES),
        paths=(
            Rect(0.0, 5 * TILE + 14.0, BOARD_W, 12.0),
            Rect(8 * TILE + 14.0, 0.0, 12.0, BOARD_H),
        ),
    )
    if world.circle_hits_hazard(world.safe_point, PREDATOR_RADIUS):
        raise ValueError(f"default safe point {world.safe_point} overlaps a hazard")
    return world


DEFAULT_WORLD = build_default_world()
