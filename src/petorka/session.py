from __future__ import annotations

"""One play session: the per-frame simulation step and the public operations.

All state is owned by a single `Session` and mutated only from `step()` and
the explicit operations (`submit`, `choose`, `cancel`, `reset`, direction
set/clear). Frames are atomic; a frozen frame (outstanding task or terminal
outcome) skips movement and predator AI entirely.
"""

from dataclasses import dataclass
import random
import time

from grove.geom import Vec2

from .clock import cap_frame_dt
from .collision import Contact, ContactKind, detect_contacts, door_in_reach
from .console import ConsoleLog
from .debug import debug_enabled
from .entities import Player, Predator, PredatorMode
from .feedback import DefeatReason, FeedbackHooks, NullFeedback
from .gate import ActiveTask, TaskGate, TaskResult
from .ledger import Outcome, ScoreLedger
from .movement import Direction, HeldDirection, step_player
from .predator import PredatorStep, step_predator
from .snapshot import FrameSnapshot, build_snapshot
from .tasks import RandomTaskGenerators, TaskGenerators
from .tuning import Tuning
from .world import DEFAULT_WORLD, Door, World

__all__ = [
    "FrameReport",
    "Session",
]


@dataclass(frozen=True, slots=True)
class FrameReport:
    frame: int
    dt: float
    frozen: bool
    player_moved: bool = False
    predator: PredatorStep | None = None
    contact: Contact | None = None
    activated: ActiveTask | None = None
    outcome: Outcome = Outcome.IN_PROGRESS


class Session:
    def __init__(
        self,
        *,
        world: World = DEFAULT_WORLD,
        tuning: Tuning | None = None,
        rng: random.Random | None = None,
        generators: TaskGenerators | None = None,
        feedback: FeedbackHooks | None = None,
        log: ConsoleLog | None = None,
    ) -> None:
        self.world = world
        self.tuning = tuning if tuning is not None else Tuning()
        self.rng = rng if rng is not None else random.Random(time.time_ns())
        self.generators: TaskGenerators = generators if generators is not None else RandomTaskGenerators(self.rng)
        self.feedback: FeedbackHooks = feedback if feedback is not None else NullFeedback()
        self.log = log if log is not None else ConsoleLog()

        self.player = Player(pos=world.player_start)
        self.predator = Predator(pos=world.predator_start, wander_target=world.safe_point)
        self.input = HeldDirection()
        self.ledger = ScoreLedger(doors=world.build_doors())
        self.gate = TaskGate(
            ledger=self.ledger,
            generators=self.generators,
            feedback=self.feedback,
            rng=self.rng,
            log=self.log,
            tuning=self.tuning,
        )
        self.frame = 0
        # Door whose task was cancelled; it cannot re-trigger until the player steps out of reach.
        self.dismissed_door_id: int | None = None

    @classmethod
    def build(cls, *, seed: int | None = None, **kwargs) -> Session:
        rng = random.Random(seed) if seed is not None else None
        return cls(rng=rng, **kwargs)

    @property
    def frozen(self) -> bool:
        return self.ledger.finished or self.gate.is_active

    @property
    def outcome(self) -> Outcome:
        return self.ledger.outcome

    @property
    def score(self) -> int:
        return self.ledger.score

    @property
    def doors(self) -> list[Door]:
        return self.ledger.doors

    # -- input -----------------------------------------------------------------

    def set_direction(self, direction: Direction | None) -> None:
        self.input.set(direction)

    def clear_direction(self) -> None:
        self.input.clear()

    def release_direction(self, direction: Direction) -> None:
        self.input.release(direction)

    # -- task gate -------------------------------------------------------------

    def submit(self, answer: object) -> TaskResult | None:
        return self.gate.submit(answer)

    def choose(self, word: str) -> TaskResult | None:
        return self.gate.choose(word)

    def cancel(self) -> bool:
        active = self.gate.active
        if not self.gate.cancel():
            return False
        if active is not None:
            self.dismissed_door_id = active.door_id
        return True

    # -- lifecycle -------------------------------------------------------------

    def reset(self) -> None:
        world = self.world
        self.player.pos = world.player_start
        predator = self.predator
        predator.pos = world.predator_start
        predator.vel = Vec2()
        predator.mode = PredatorMode.WANDER
        predator.wander_target = world.safe_point
        predator.resample_pending = False
        self.ledger.reset(world.build_doors())
        self.gate.clear()
        self.input.clear()
        self.frame = 0
        self.dismissed_door_id = None
        self.log.log("session: reset")

    def snapshot(self) -> FrameSnapshot:
        return build_snapshot(self)

    def step(self, dt: float) -> FrameReport:
        """Run one frame: movement, predator AI, then contact resolution."""
        dt = cap_frame_dt(dt, max_dt=self.tuning.max_frame_dt)
        self.frame += 1

        if self.frozen:
            return FrameReport(frame=self.frame, dt=dt, frozen=True, outcome=self.ledger.outcome)

        tuning = self.tuning
        # The predator reacts to where the player stood when the frame began.
        player_start = self.player.pos
        player_moved = step_player(
            self.player,
            self.input.current,
            dt,
            world=self.world,
            speed=tuning.player_speed,
        )

        previous_mode = self.predator.mode
        predator_step = step_predator(
            self.predator,
            player_start,
            dt,
            world=self.world,
            rng=self.rng,
            tuning=tuning,
        )
        if predator_step.mode is not previous_mode and debug_enabled():
            self.log.log(f"session: frame {self.frame} predator {previous_mode.value} -> {predator_step.mode.value}")

        self._lift_dismissal()
        contact = detect_contacts(
            self.world,
            self.player,
            self.predator,
            self.ledger.doors,
            task_active=self.gate.is_active,
            margin=tuning.contact_margin,
            door_trigger=tuning.door_trigger,
            dismissed_door_id=self.dismissed_door_id,
        )

        activated: ActiveTask | None = None
        if contact.kind is ContactKind.HAZARD:
            self._defeat(DefeatReason.HAZARD)
        elif contact.kind is ContactKind.PREDATOR:
            self._defeat(DefeatReason.PREDATOR)
        elif contact.kind is ContactKind.DOOR and contact.door is not None:
            activated = self.gate.activate(contact.door)

        return FrameReport(
            frame=self.frame,
            dt=dt,
            frozen=False,
            player_moved=player_moved,
            predator=predator_step,
            contact=contact,
            activated=activated,
            outcome=self.ledger.outcome,
        )

    def _lift_dismissal(self) -> None:
        door_id = self.dismissed_door_id
        if door_id is None:
            return
        door = self.ledger.door_by_id(door_id)
        if door is None or not door_in_reach(self.player.pos, door, half_extents=self.tuning.door_trigger):
            self.dismissed_door_id = None

    def _defeat(self, reason: DefeatReason) -> None:
        if not self.ledger.declare_defeat(reason):
            return
        self.input.clear()
        self.log.log(f"session: defeat ({reason.value}) at frame {self.frame} (score {self.ledger.score})")
        self.feedback.on_defeat(reason)
