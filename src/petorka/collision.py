from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from grove.geom import Vec2, circles_overlap

from .entities import Player, Predator
from .world import Door, World

__all__ = [
    "Contact",
    "ContactKind",
    "detect_contacts",
    "door_in_reach",
]


class ContactKind(str, Enum):
    NONE = "none"
    HAZARD = "hazard"
    PREDATOR = "predator"
    DOOR = "door"


@dataclass(frozen=True, slots=True)
class Contact:
    kind: ContactKind = ContactKind.NONE
    door: Door | None = None

    @property
    def terminal(self) -> bool:
        return self.kind in (ContactKind.HAZARD, ContactKind.PREDATOR)


NO_CONTACT = Contact()


def door_in_reach(player_pos: Vec2, door: Door, *, half_extents: Vec2) -> bool:
    return abs(player_pos.x - door.pos.x) < half_extents.x and abs(player_pos.y - door.pos.y) < half_extents.y


def detect_contacts(
    world: World,
    player: Player,
    predator: Predator,
    doors: Sequence[Door],
    *,
    task_active: bool,
    margin: float,
    door_trigger: Vec2,
    dismissed_door_id: int | None = None,
) -> Contact:
    """Classify this frame's contact; hazard beats predator beats door.

    Read-only: the caller decides what a contact does to the session. A door
    whose task was just cancelled (`dismissed_door_id`) is skipped until the
    caller lifts the latch.
    """

    if world.circle_hits_hazard(player.pos, player.radius):
        return Contact(kind=ContactKind.HAZARD)

    if circles_overlap(player.pos, player.radius, predator.pos, predator.radius, margin=margin):
        return Contact(kind=ContactKind.PREDATOR)

    if task_active:
        return NO_CONTACT

    for door in doors:
        if door.open or door.id == dismissed_door_id:
            continue
        if door_in_reach(player.pos, door, half_extents=door_trigger):
            return Contact(kind=ContactKind.DOOR, door=door)
    return NO_CONTACT
