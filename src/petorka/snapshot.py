from __future__ import annotations

"""Read-only per-frame view of a session for presentation and tooling."""

from typing import TYPE_CHECKING

import msgspec

from .tasks import MathTask

if TYPE_CHECKING:
    from .session import Session

__all__ = [
    "DoorView",
    "FrameSnapshot",
    "Point",
    "TaskView",
    "build_snapshot",
    "decode_snapshot",
    "encode_snapshot",
]

SNAPSHOT_VERSION = 1


class Point(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    x: float
    y: float


class DoorView(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    id: int
    kind: str
    x: float
    y: float
    open: bool = False


class TaskView(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    door_id: int
    kind: str
    prompt: str
    # Math operands; the expected answer is never exposed.
    a: int | None = None
    b: int | None = None
    op: str | None = None
    choices: tuple[str, ...] = ()
    misses: int = 0


class FrameSnapshot(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    version: int = SNAPSHOT_VERSION
    frame: int = 0
    player: Point = msgspec.field(default_factory=lambda: Point(0.0, 0.0))
    player_radius: float = 0.0
    predator: Point = msgspec.field(default_factory=lambda: Point(0.0, 0.0))
    predator_radius: float = 0.0
    predator_mode: str = "wander"
    doors: tuple[DoorView, ...] = ()
    score: int = 0
    task: TaskView | None = None
    outcome: str = "in_progress"
    defeat_reason: str | None = None
    frozen: bool = False


def build_snapshot(session: Session) -> FrameSnapshot:
    ledger = session.ledger
    task_view: TaskView | None = None
    active = session.gate.active
    if active is not None:
        task = active.task
        if isinstance(task, MathTask):
            task_view = TaskView(
                door_id=active.door_id,
                kind=active.kind.value,
                prompt=task.prompt,
                a=task.a,
                b=task.b,
                op=task.op.value,
                misses=session.gate.misses,
            )
        else:
            task_view = TaskView(
                door_id=active.door_id,
                kind=active.kind.value,
                prompt=task.prompt,
                choices=tuple(active.choices),
                misses=session.gate.misses,
            )

    return FrameSnapshot(
        frame=int(session.frame),
        player=Point(session.player.pos.x, session.player.pos.y),
        player_radius=float(session.player.radius),
        predator=Point(session.predator.pos.x, session.predator.pos.y),
        predator_radius=float(session.predator.radius),
        predator_mode=session.predator.mode.value,
        doors=tuple(
            DoorView(id=door.id, kind=door.kind.value, x=door.pos.x, y=door.pos.y, open=door.open)
            for door in ledger.doors
        ),
        score=int(ledger.score),
        task=task_view,
        outcome=ledger.outcome.value,
        defeat_reason=None if ledger.defeat_reason is None else ledger.defeat_reason.value,
        frozen=session.frozen,
    )


def encode_snapshot(snapshot: FrameSnapshot) -> bytes:
    return msgspec.json.encode(snapshot)


def decode_snapshot(data: bytes | str) -> FrameSnapshot:
    return msgspec.json.decode(data, type=FrameSnapshot)
