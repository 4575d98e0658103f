from __future__ import annotations

"""Door task gate.

A door trigger turns into an outstanding task that freezes the simulation
until the player answers correctly or cancels. Wrong answers cost points but
keep the task open for another try.
"""

from dataclasses import dataclass
from enum import Enum
import random

from .console import ConsoleLog
from .feedback import FeedbackHooks
from .ledger import ScoreLedger
from .tasks import InvalidTaskError, LanguageTask, MathTask, Task, TaskGenerators, parse_numeric_answer, validate_task
from .tuning import Tuning
from .world import Door, DoorKind

__all__ = [
    "ActiveTask",
    "TaskGate",
    "TaskResult",
]


class TaskResult(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True, slots=True)
class ActiveTask:
    door_id: int
    task: Task
    # Language choices in presentation order, drawn once on activation.
    choices: tuple[str, ...] = ()

    @property
    def kind(self) -> DoorKind:
        if isinstance(self.task, MathTask):
            return DoorKind.MATH
        return DoorKind.LANGUAGE


class TaskGate:
    __slots__ = ("_active", "_feedback", "_generators", "_ledger", "_log", "_rng", "_tuning", "misses")

    def __init__(
        self,
        *,
        ledger: ScoreLedger,
        generators: TaskGenerators,
        feedback: FeedbackHooks,
        rng: random.Random,
        log: ConsoleLog,
        tuning: Tuning,
    ) -> None:
        self._ledger = ledger
        self._generators = generators
        self._feedback = feedback
        self._rng = rng
        self._log = log
        self._tuning = tuning
        self._active: ActiveTask | None = None
        self.misses = 0

    @property
    def active(self) -> ActiveTask | None:
        return self._active

    @property
    def is_active(self) -> bool:
        return self._active is not None

    def activate(self, door: Door) -> ActiveTask | None:
        if self._active is not None or door.open or self._ledger.finished:
            return None

        try:
            if door.kind is DoorKind.MATH:
                task = validate_task(self._generators.generate_math_task())
            else:
                task = validate_task(self._generators.generate_language_task())
        except InvalidTaskError as exc:
            self._log.log(f"gate: door {door.id} refused generator output: {exc}")
            return None

        choices: tuple[str, ...] = ()
        if isinstance(task, LanguageTask):
            choices = task.choices(self._rng)

        self._active = ActiveTask(door_id=int(door.id), task=task, choices=choices)
        self.misses = 0
        self._log.log(f"gate: door {door.id} ({door.kind.value}) task: {task.prompt}")
        return self._active

    def submit(self, answer: object) -> TaskResult | None:
        active = self._active
        if active is None or not isinstance(active.task, MathTask):
            return None
        value = parse_numeric_answer(answer)
        if value is not None and value == active.task.expected_answer:
            return self._resolve_correct(active)
        return self._resolve_incorrect(active, answer)

    def choose(self, word: str) -> TaskResult | None:
        active = self._active
        if active is None or not isinstance(active.task, LanguageTask):
            return None
        if word == active.task.correct_word:
            return self._resolve_correct(active)
        return self._resolve_incorrect(active, word)

    def cancel(self) -> bool:
        active = self._active
        if active is None:
            return False
        self._active = None
        self.misses = 0
        self._log.log(f"gate: door {active.door_id} task cancelled")
        return True

    def clear(self) -> None:
        """Drop any active task without logging; used by session reset."""
        self._active = None
        self.misses = 0

    def _resolve_correct(self, active: ActiveTask) -> TaskResult:
        ledger = self._ledger
        ledger.award(self._tuning.correct_reward)
        ledger.open_door(active.door_id)
        self._active = None
        self.misses = 0
        self._log.log(f"gate: door {active.door_id} opened (score {ledger.score})")
        self._feedback.on_success()
        if ledger.all_doors_open() and ledger.declare_victory():
            self._log.log(f"session: victory (score {ledger.score})")
            self._feedback.on_victory()
        return TaskResult.CORRECT

    def _resolve_incorrect(self, active: ActiveTask, answer: object) -> TaskResult:
        ledger = self._ledger
        ledger.penalize(self._tuning.wrong_penalty)
        self.misses += 1
        self._log.log(f"gate: door {active.door_id} wrong answer {answer!r} (score {ledger.score})")
        self._feedback.on_failure()
        return TaskResult.INCORRECT
