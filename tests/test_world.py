from __future__ import annotations

import pytest

from grove.geom import Rect, Vec2
from petorka.entities import Predator, Player
from petorka.tuning import BOARD_H, BOARD_W, PLAYER_RADIUS, PREDATOR_RADIUS
from petorka.world import DEFAULT_WORLD, DoorKind, DoorPlacement, World


def test_default_world_layout() -> None:
    world = DEFAULT_WORLD

    assert (world.width, world.height) == (BOARD_W, BOARD_H) == (800.0, 480.0)
    assert len(world.hazards) == 2
    assert [door.id for door in world.doors] == list(range(1, 11))
    assert sum(1 for door in world.doors if door.kind is DoorKind.MATH) == 5
    assert sum(1 for door in world.doors if door.kind is DoorKind.LANGUAGE) == 5
    assert world.doors[0].pos == Vec2(260.0, 100.0)


def test_default_world_start_positions_are_clear_of_hazards() -> None:
    world = DEFAULT_WORLD

    assert not world.circle_hits_hazard(world.player_start, PLAYER_RADIUS)
    assert not world.circle_hits_hazard(world.predator_start, PREDATOR_RADIUS)
    assert not world.circle_hits_hazard(world.safe_point, PREDATOR_RADIUS)


def test_build_doors_returns_fresh_closed_doors() -> None:
    first = DEFAULT_WORLD.build_doors()
    first[0].open = True

    second = DEFAULT_WORLD.build_doors()
    assert all(not door.open for door in second)
    assert first[0] is not second[0]


def test_world_rejects_duplicate_door_ids() -> None:
    doors = (
        DoorPlacement(id=1, kind=DoorKind.MATH, pos=Vec2(10.0, 10.0)),
        DoorPlacement(id=1, kind=DoorKind.LANGUAGE, pos=Vec2(50.0, 10.0)),
    )
    with pytest.raises(ValueError):
        World(width=100.0, height=100.0, doors=doors)


def test_world_rejects_bad_bounds_and_hazards() -> None:
    with pytest.raises(ValueError):
        World(width=0.0, height=100.0)
    with pytest.raises(ValueError):
        World(width=100.0, height=100.0, hazards=(Rect(0.0, 0.0, -1.0, 5.0),))


def test_interior_falls_back_to_bounds() -> None:
    world = World(width=300.0, height=200.0)

    assert world.interior == Rect(0.0, 0.0, 300.0, 200.0)


def test_entities_reject_negative_radius() -> None:
    with pytest.raises(ValueError):
        Player(pos=Vec2(), radius=-1.0)
    with pytest.raises(ValueError):
        Predator(pos=Vec2(), wander_target=Vec2(), radius=-1.0)
