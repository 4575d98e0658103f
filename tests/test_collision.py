from __future__ import annotations

from grove.geom import Rect, Vec2
from petorka.collision import ContactKind, detect_contacts, door_in_reach
from petorka.entities import Player, Predator
from petorka.world import Door, DoorKind, DoorPlacement, World

TRIGGER = Vec2(26.0, 30.0)

WORLD = World(
    width=800.0,
    height=480.0,
    hazards=(Rect(200.0, 120.0, 120.0, 80.0),),
    doors=(
        DoorPlacement(id=1, kind=DoorKind.MATH, pos=Vec2(500.0, 100.0)),
        DoorPlacement(id=2, kind=DoorKind.LANGUAGE, pos=Vec2(540.0, 100.0)),
    ),
    safe_point=Vec2(400.0, 400.0),
)


def _detect(player_pos: Vec2, predator_pos: Vec2, doors: list[Door] | None = None, **kwargs):
    options = {"task_active": False, "margin": 4.0, "door_trigger": TRIGGER}
    options.update(kwargs)
    return detect_contacts(
        WORLD,
        Player(pos=player_pos),
        Predator(pos=predator_pos, wander_target=WORLD.safe_point),
        doors if doors is not None else WORLD.build_doors(),
        **options,
    )


def test_no_contact_in_open_field() -> None:
    contact = _detect(Vec2(100.0, 400.0), Vec2(700.0, 400.0))

    assert contact.kind is ContactKind.NONE
    assert contact.door is None
    assert not contact.terminal


def test_touching_lake_edge_counts_as_hazard() -> None:
    # Player radius 14; lake starts at x=200.
    assert _detect(Vec2(186.0, 160.0), Vec2(700.0, 400.0)).kind is ContactKind.HAZARD
    assert _detect(Vec2(185.9, 160.0), Vec2(700.0, 400.0)).kind is ContactKind.NONE


def test_predator_contact_uses_forgiveness_margin() -> None:
    # Radii 14 + 16 minus margin 4 leaves a reach of 26.
    assert _detect(Vec2(100.0, 400.0), Vec2(125.9, 400.0)).kind is ContactKind.PREDATOR
    assert _detect(Vec2(100.0, 400.0), Vec2(126.0, 400.0)).kind is ContactKind.NONE
    assert _detect(Vec2(100.0, 400.0), Vec2(128.0, 400.0), margin=0.0).kind is ContactKind.PREDATOR


def test_hazard_beats_predator() -> None:
    contact = _detect(Vec2(190.0, 160.0), Vec2(200.0, 160.0))

    assert contact.kind is ContactKind.HAZARD
    assert contact.terminal


def test_predator_beats_door() -> None:
    contact = _detect(Vec2(500.0, 100.0), Vec2(510.0, 100.0))

    assert contact.kind is ContactKind.PREDATOR


def test_door_trigger_is_rectangular() -> None:
    door = Door(id=1, kind=DoorKind.MATH, pos=Vec2(500.0, 100.0))

    assert door_in_reach(Vec2(525.9, 129.9), door, half_extents=TRIGGER)
    assert not door_in_reach(Vec2(526.0, 100.0), door, half_extents=TRIGGER)
    assert not door_in_reach(Vec2(500.0, 130.0), door, half_extents=TRIGGER)


def test_first_closed_door_in_reach_wins() -> None:
    contact = _detect(Vec2(520.0, 100.0), Vec2(700.0, 400.0))

    assert contact.kind is ContactKind.DOOR
    assert contact.door is not None
    assert contact.door.id == 1
    assert not contact.terminal


def test_open_doors_are_ignored() -> None:
    doors = WORLD.build_doors()
    doors[0].open = True

    contact = _detect(Vec2(520.0, 100.0), Vec2(700.0, 400.0), doors=doors)

    assert contact.kind is ContactKind.DOOR
    assert contact.door is doors[1]

    doors[1].open = True
    assert _detect(Vec2(520.0, 100.0), Vec2(700.0, 400.0), doors=doors).kind is ContactKind.NONE


def test_doors_do_not_trigger_while_task_is_active() -> None:
    contact = _detect(Vec2(500.0, 100.0), Vec2(700.0, 400.0), task_active=True)

    assert contact.kind is ContactKind.NONE


def test_dismissed_door_is_skipped() -> None:
    assert _detect(Vec2(500.0, 100.0), Vec2(700.0, 400.0), dismissed_door_id=1).kind is ContactKind.NONE

    contact = _detect(Vec2(520.0, 100.0), Vec2(700.0, 400.0), dismissed_door_id=1)
    assert contact.door is not None
    assert contact.door.id == 2


def test_detection_does_not_mutate_doors() -> None:
    doors = WORLD.build_doors()

    _detect(Vec2(500.0, 100.0), Vec2(700.0, 400.0), doors=doors)

    assert [door.open for door in doors] == [False, False]
