from __future__ import annotations

import math
import random

import pytest

from petorka.tasks import (
    LANGUAGE_PAIRS,
    InvalidTaskError,
    LanguageTask,
    MathOp,
    MathTask,
    RandomTaskGenerators,
    parse_numeric_answer,
    validate_task,
)


def test_random_math_tasks_stay_in_contract() -> None:
    generators = RandomTaskGenerators(random.Random(5))
    ops = set()
    for _ in range(500):
        task = generators.generate_math_task()
        assert validate_task(task) is task
        assert task.a >= 0
        assert task.b >= 0
        assert 0 <= task.expected_answer <= 100
        ops.add(task.op)
    assert ops == {MathOp.ADD, MathOp.SUB}


def test_random_language_tasks_come_from_the_pair_table() -> None:
    generators = RandomTaskGenerators(random.Random(5))
    for _ in range(100):
        task = generators.generate_language_task()
        assert (task.correct_word, task.wrong_word) in LANGUAGE_PAIRS
        assert validate_task(task) is task


def test_generators_reject_empty_pair_table() -> None:
    with pytest.raises(ValueError, match="empty"):
        RandomTaskGenerators(random.Random(1), pairs=())


def test_math_prompt() -> None:
    assert MathTask(a=7, b=3, op=MathOp.SUB, expected_answer=4).prompt == "7 - 3 = ?"
    assert MathTask(a=2, b=5, op=MathOp.ADD, expected_answer=7).prompt == "2 + 5 = ?"


def test_language_choices_contain_both_words() -> None:
    task = LanguageTask(correct_word="brod", wrong_word="drod")
    seen = set()
    rng = random.Random(9)
    for _ in range(50):
        choices = task.choices(rng)
        assert sorted(choices) == ["brod", "drod"]
        seen.add(choices)
    assert len(seen) == 2


@pytest.mark.parametrize(
    "task",
    [
        MathTask(a=2, b=2, op=MathOp.ADD, expected_answer=5),
        MathTask(a=2, b=5, op=MathOp.SUB, expected_answer=-3),
        MathTask(a=60, b=50, op=MathOp.ADD, expected_answer=110),
        MathTask(a=-1, b=3, op=MathOp.ADD, expected_answer=2),
        MathTask(a=True, b=1, op=MathOp.ADD, expected_answer=2),
        MathTask(a=1.0, b=1, op=MathOp.ADD, expected_answer=2),  # type: ignore[arg-type]
        MathTask(a=1, b=1, op="*", expected_answer=1),  # type: ignore[arg-type]
        LanguageTask(correct_word="", wrong_word="drod"),
        LanguageTask(correct_word="brod", wrong_word="brod"),
        "2 + 2",
        None,
    ],
)
def test_validate_rejects_broken_tasks(task: object) -> None:
    with pytest.raises(InvalidTaskError):
        validate_task(task)


def test_invalid_task_error_is_a_value_error() -> None:
    assert issubclass(InvalidTaskError, ValueError)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (7, 7),
        ("7", 7),
        (" 12 ", 12),
        ("+4", 4),
        ("-3", -3),
        (7.0, 7),
        ("0", 0),
    ],
)
def test_parse_numeric_answer_accepts_integers(value: object, expected: int) -> None:
    assert parse_numeric_answer(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "   ", "abc", "7a", "1.5", "1e2", "--1", "9" * 5000, 7.5, math.nan, math.inf, True, None, [7]],
)
def test_parse_numeric_answer_rejects_garbage(value: object) -> None:
    assert parse_numeric_answer(value) is None
