# tests/test_task_matcher.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from care_scheduler.modules.care_management.domain.models.day_key import DayKey, DayRange
from care_scheduler.modules.care_management.domain.models.task import DotState, Task, TaskType
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.task_matcher import TaskMatcher

APRIL_6 = DayKey(2025, 4, 6)


def _task(task_id: int, due, task_type: TaskType = TaskType.WATER, completed: bool = False) -> Task:
    return Task(
        id=task_id,
        plant_id=1,
        type=task_type,
        description=f"task {task_id}",
        due_date=due,
        completed=completed,
    )


@pytest.fixture()
def matcher(normalizer: DateNormalizer) -> TaskMatcher:
    return TaskMatcher(normalizer)


def test_tasks_due_on_matches_by_reference_day(matcher: TaskMatcher) -> None:
    tasks = [
        _task(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc)),
        # 23:30 UTC on the 5th is already the 6th in Paris
        _task(2, datetime(2025, 4, 5, 23, 30, tzinfo=timezone.utc)),
        # 22:30 UTC on the 6th is the 7th in Paris
        _task(3, datetime(2025, 4, 6, 22, 30, tzinfo=timezone.utc)),
        _task(4, datetime(2025, 4, 7, 8, 0, tzinfo=timezone.utc)),
    ]

    assert [task.id for task in matcher.tasks_due_on(APRIL_6, tasks)] == [1, 2]


def test_tasks_without_due_date_never_match(matcher: TaskMatcher) -> None:
    tasks = [_task(1, None), _task(2, datetime(2025, 4, 6, 9, 0, tzinfo=timezone.utc))]

    assert [task.id for task in matcher.tasks_due_on(APRIL_6, tasks)] == [2]
    assert matcher.day_of(tasks[0]) is None


def test_input_order_is_kept_by_default(matcher: TaskMatcher) -> None:
    tasks = [
        _task(1, datetime(2025, 4, 6, 18, 0, tzinfo=timezone.utc)),
        _task(2, datetime(2025, 4, 6, 6, 0, tzinfo=timezone.utc)),
    ]

    assert [task.id for task in matcher.tasks_due_on(APRIL_6, tasks)] == [1, 2]


def test_due_time_ordering_compares_instants(matcher: TaskMatcher) -> None:
    tasks = [
        _task(1, datetime(2025, 4, 6, 18, 0, tzinfo=timezone.utc)),
        _task(2, datetime(2025, 4, 6, 9, 0)),  # naive: 09:00 Paris, 07:00 UTC
        _task(3, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc)),
    ]

    ordered = matcher.tasks_due_on(APRIL_6, tasks, order_by="due_time")

    assert [task.id for task in ordered] == [2, 3, 1]


def test_unknown_ordering_is_rejected(matcher: TaskMatcher) -> None:
    with pytest.raises(ValueError):
        matcher.tasks_due_on(APRIL_6, [], order_by="priority")


def test_dot_is_none_for_an_empty_day(matcher: TaskMatcher) -> None:
    tasks = [_task(1, datetime(2025, 4, 7, 8, 0, tzinfo=timezone.utc))]
    assert matcher.dot_for_day(APRIL_6, tasks) == DotState.NONE
    assert matcher.dot_for_day(APRIL_6, []) == DotState.NONE


def test_dot_is_urgent_for_pending_watering(matcher: TaskMatcher) -> None:
    tasks = [
        _task(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc), TaskType.FERTILIZE),
        _task(2, datetime(2025, 4, 6, 10, 0, tzinfo=timezone.utc), TaskType.WATER),
    ]
    assert matcher.dot_for_day(APRIL_6, tasks) == DotState.URGENT


@pytest.mark.parametrize(
    "tasks",
    [
        [_task(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc), TaskType.WATER, completed=True)],
        [_task(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc), TaskType.LIGHT)],
        [_task(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc), TaskType.REPOT, completed=True)],
    ],
)
def test_dot_is_normal_without_pending_watering(matcher: TaskMatcher, tasks) -> None:
    assert matcher.dot_for_day(APRIL_6, tasks) == DotState.NORMAL


def test_dots_for_range_covers_every_day(matcher: TaskMatcher) -> None:
    week = DayRange(DayKey(2025, 4, 1), DayKey(2025, 4, 8))
    tasks = [
        _task(1, datetime(2025, 4, 2, 8, 0, tzinfo=timezone.utc), TaskType.WATER),
        _task(2, datetime(2025, 4, 4, 8, 0, tzinfo=timezone.utc), TaskType.OTHER),
        _task(3, datetime(2025, 4, 9, 8, 0, tzinfo=timezone.utc), TaskType.WATER),
        _task(4, None),
    ]

    dots = matcher.dots_for_range(week, tasks)

    assert list(dots) == list(week)
    assert dots[DayKey(2025, 4, 2)] == DotState.URGENT
    assert dots[DayKey(2025, 4, 4)] == DotState.NORMAL
    assert dots[DayKey(2025, 4, 7)] == DotState.NONE


def test_dots_for_range_agree_with_dot_for_day(matcher: TaskMatcher) -> None:
    tasks = [
        _task(1, "2025-04-03T23:30:00Z", TaskType.WATER),
        _task(2, datetime(2025, 4, 5, 12, 0, tzinfo=timezone.utc), TaskType.WATER, completed=True),
    ]
    days = DayRange(DayKey(2025, 4, 1), DayKey(2025, 4, 8))

    dots = matcher.dots_for_range(days, tasks)

    for day in days:
        assert dots[day] == matcher.dot_for_day(day, tasks)
    assert dots[DayKey(2025, 4, 4)] == DotState.URGENT
