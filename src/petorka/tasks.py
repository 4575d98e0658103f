from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import random
import re
from typing import Protocol, TypeAlias

from grove.math import is_finite_number

__all__ = [
    "LANGUAGE_PAIRS",
    "MATH_RESULT_MAX",
    "InvalidTaskError",
    "LanguageTask",
    "MathOp",
    "MathTask",
    "RandomTaskGenerators",
    "Task",
    "TaskGenerators",
    "parse_numeric_answer",
    "validate_task",
]

MATH_OPERAND_MAX = 100
MATH_RESULT_MAX = 100

# b/d confusion drills: (correct spelling, decoy).
LANGUAGE_PAIRS: tuple[tuple[str, str], ...] = (
    ("baba", "dada"),
    ("doba", "boda"),
    ("dobar", "bobar"),
    ("brdo", "drbo"),
    ("bod", "dod"),
    ("dud", "bud"),
    ("bubanj", "dudanj"),
    ("dabar", "babar"),
    ("brod", "drod"),
    ("džep", "bžep"),
    ("badem", "dadem"),
    ("dobit", "bobit"),
    ("budi", "dubi"),
    ("djed", "bjed"),
)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class InvalidTaskError(ValueError):
    """A generator returned a task outside its documented contract."""


class MathOp(str, Enum):
    ADD = "+"
    SUB = "-"


@dataclass(frozen=True, slots=True)
class MathTask:
    a: int
    b: int
    op: MathOp
    expected_answer: int

    @property
    def prompt(self) -> str:
        return f"{self.a} {self.op.value} {self.b} = ?"


@dataclass(frozen=True, slots=True)
class LanguageTask:
    correct_word: str
    wrong_word: str

    @property
    def prompt(self) -> str:
        return "Which word is spelled correctly?"

    def choices(self, rng: random.Random) -> tuple[str, str]:
        if rng.random() < 0.5:
            return (self.correct_word, self.wrong_word)
        return (self.wrong_word, self.correct_word)


Task: TypeAlias = MathTask | LanguageTask


class TaskGenerators(Protocol):
    def generate_math_task(self) -> MathTask: ...

    def generate_language_task(self) -> LanguageTask: ...


class RandomTaskGenerators:
    """Default quiz content: bounded +/- problems and the b/d vocabulary table."""

    __slots__ = ("_pairs", "_rng")

    def __init__(self, rng: random.Random, *, pairs: tuple[tuple[str, str], ...] = LANGUAGE_PAIRS) -> None:
        if not pairs:
            raise ValueError("language pair table is empty")
        self._rng = rng
        self._pairs = pairs

    def generate_math_task(self) -> MathTask:
        rng = self._rng
        if rng.random() < 0.5:
            a = rng.randint(0, MATH_OPERAND_MAX)
            b = rng.randint(0, MATH_RESULT_MAX - a)
            return MathTask(a=a, b=b, op=MathOp.ADD, expected_answer=a + b)
        a = rng.randint(0, MATH_OPERAND_MAX)
        b = rng.randint(0, a)
        return MathTask(a=a, b=b, op=MathOp.SUB, expected_answer=a - b)

    def generate_language_task(self) -> LanguageTask:
        correct, wrong = self._rng.choice(self._pairs)
        return LanguageTask(correct_word=correct, wrong_word=wrong)


def validate_task(task: object) -> Task:
    """Check a generator result against the task contract; raise `InvalidTaskError`."""
    if isinstance(task, MathTask):
        for name in ("a", "b", "expected_answer"):
            value = getattr(task, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidTaskError(f"math task field {name} must be int, got {value!r}")
        if not isinstance(task.op, MathOp):
            raise InvalidTaskError(f"math task op must be a MathOp, got {task.op!r}")
        if task.a < 0 or task.b < 0:
            raise InvalidTaskError(f"math task operands must be non-negative: {task}")
        if not (0 <= task.expected_answer <= MATH_RESULT_MAX):
            raise InvalidTaskError(f"math task result out of range 0..{MATH_RESULT_MAX}: {task}")
        actual = task.a + task.b if task.op is MathOp.ADD else task.a - task.b
        if actual != task.expected_answer:
            raise InvalidTaskError(f"math task expected_answer does not match its operands: {task}")
        return task
    if isinstance(task, LanguageTask):
        if not task.correct_word or not task.wrong_word:
            raise InvalidTaskError(f"language task words must be non-empty: {task}")
        if task.correct_word == task.wrong_word:
            raise InvalidTaskError(f"language task words must differ: {task}")
        return task
    raise InvalidTaskError(f"unsupported task type: {type(task).__name__}")


def parse_numeric_answer(value: object) -> int | None:
    """Parse a submitted math answer; anything malformed yields `None` (a miss)."""
    if isinstance(value, str):
        text = value.strip()
        if not _INTEGER_RE.match(text):
            return None
        try:
            return int(text)
        except ValueError:
            # Longer than the interpreter's int-string conversion limit.
            return None
    if not is_finite_number(value):
        return None
    number = float(value)  # type: ignore[arg-type]
    if not number.is_integer():
        return None
    return int(number)
