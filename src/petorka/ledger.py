from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .feedback import DefeatReason
from .world import Door

__all__ = [
    "Outcome",
    "ScoreLedger",
]


class Outcome(str, Enum):
    IN_PROGRESS = "in_progress"
    VICTORY = "victory"
    DEFEAT = "defeat"


@dataclass(slots=True)
class ScoreLedger:
    """Score, door state and the win/loss outcome of one session.

    The score has no floor or ceiling. Outcomes are terminal: once `VICTORY` or
    `DEFEAT` is recorded only `reset()` returns to `IN_PROGRESS`.
    """

    doors: list[Door] = field(default_factory=list)
    score: int = 0
    outcome: Outcome = Outcome.IN_PROGRESS
    defeat_reason: DefeatReason | None = None

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.IN_PROGRESS

    def door_by_id(self, door_id: int) -> Door | None:
        for door in self.doors:
            if door.id == door_id:
                return door
        return None

    def award(self, points: int) -> None:
        self.score += abs(int(points))

    def penalize(self, points: int) -> None:
        self.score -= abs(int(points))

    def open_door(self, door_id: int) -> bool:
        """Open a closed door; returns False if unknown or already open."""
        door = self.door_by_id(door_id)
        if door is None or door.open:
            return False
        door.open = True
        return True

    def closed_doors(self) -> list[Door]:
        return [door for door in self.doors if not door.open]

    def all_doors_open(self) -> bool:
        return bool(self.doors) and all(door.open for door in self.doors)

    def declare_victory(self) -> bool:
        if self.finished:
            return False
        self.outcome = Outcome.VICTORY
        return True

    def declare_defeat(self, reason: DefeatReason) -> bool:
        if self.finished:
            return False
        self.outcome = Outcome.DEFEAT
        self.defeat_reason = reason
        return True

    def reset(self, doors: list[Door]) -> None:
        self.doors = list(doors)
        self.score = 0
        self.outcome = Outcome.IN_PROGRESS
        self.defeat_reason = None
