# tests/test_query_handlers.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from care_scheduler.modules.care_management.application.handlers.query_handlers import (
    GetCalendarMonthHandler,
    GetDotForDayHandler,
    GetPendingTasksHandler,
    GetPlantTasksHandler,
    GetTasksForDayHandler,
)
from care_scheduler.modules.care_management.application.queries import (
    GetCalendarMonthQuery,
    GetDotForDayQuery,
    GetPendingTasksQuery,
    GetPlantTasksQuery,
    GetTasksForDayQuery,
)
from care_scheduler.modules.care_management.domain.models.day_key import DayKey
from care_scheduler.modules.care_management.domain.models.task import DotState, Task, TaskType
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.shared.core.exceptions import InvalidDateError, PlantNotFoundError

from .fakes import InMemoryPlantDirectory, InMemoryTaskStore, make_plant


@pytest.fixture()
def seeded_store(task_store: InMemoryTaskStore) -> InMemoryTaskStore:
    rows = [
        # (id, plant, type, due, completed)
        (1, 1, TaskType.WATER, datetime(2025, 4, 6, 16, 0, tzinfo=timezone.utc), False),
        (2, 2, TaskType.FERTILIZE, datetime(2025, 4, 6, 6, 0, tzinfo=timezone.utc), False),
        (3, 1, TaskType.WATER, datetime(2025, 4, 5, 23, 15, tzinfo=timezone.utc), True),
        (4, 1, TaskType.LIGHT, datetime(2025, 4, 7, 8, 0, tzinfo=timezone.utc), False),
        (5, 2, TaskType.WATER, None, False),
        (6, 2, TaskType.REPOT, datetime(2025, 4, 30, 22, 30, tzinfo=timezone.utc), False),
    ]
    for task_id, plant_id, task_type, due, completed in rows:
        task_store.add(
            Task(
                id=task_id,
                plant_id=plant_id,
                type=task_type,
                description=f"{task_type.value} #{task_id}",
                due_date=due,
                completed=completed,
            )
        )
    return task_store


@pytest.mark.asyncio
async def test_tasks_for_day(seeded_store: InMemoryTaskStore, normalizer: DateNormalizer) -> None:
    handler = GetTasksForDayHandler(seeded_store, normalizer)

    day, tasks = await handler.handle(GetTasksForDayQuery(day="2025-04-06"))

    assert day == DayKey(2025, 4, 6)
    # Store order is by due instant: task 3 (23:15 UTC on the 5th) comes first
    assert [task.id for task in tasks] == [3, 2, 1]


@pytest.mark.asyncio
async def test_tasks_for_day_accepts_timestamps(seeded_store: InMemoryTaskStore, normalizer: DateNormalizer) -> None:
    handler = GetTasksForDayHandler(seeded_store, normalizer)

    day, tasks = await handler.handle(GetTasksForDayQuery(day="2025-04-06T21:30:00Z"))

    assert day == DayKey(2025, 4, 6)
    assert len(tasks) == 3


@pytest.mark.asyncio
async def test_tasks_for_day_filtered_by_plant_and_ordered(
    seeded_store: InMemoryTaskStore,
    normalizer: DateNormalizer,
) -> None:
    handler = GetTasksForDayHandler(seeded_store, normalizer)

    _, tasks = await handler.handle(GetTasksForDayQuery(day="2025-04-06", plant_id=1, order_by="due_time"))

    assert [task.id for task in tasks] == [3, 1]


@pytest.mark.asyncio
async def test_tasks_for_day_rejects_bad_dates(seeded_store: InMemoryTaskStore, normalizer: DateNormalizer) -> None:
    handler = GetTasksForDayHandler(seeded_store, normalizer)

    with pytest.raises(InvalidDateError):
        await handler.handle(GetTasksForDayQuery(day="2025-02-30"))


@pytest.mark.asyncio
async def test_dot_for_day(seeded_store: InMemoryTaskStore, normalizer: DateNormalizer) -> None:
    handler = GetDotForDayHandler(seeded_store, normalizer)

    assert (await handler.handle(GetDotForDayQuery(day="2025-04-06")))[1] == DotState.URGENT
    assert (await handler.handle(GetDotForDayQuery(day="2025-04-07")))[1] == DotState.NORMAL
    assert (await handler.handle(GetDotForDayQuery(day="2025-04-08")))[1] == DotState.NONE


@pytest.mark.asyncio
async def test_calendar_month(seeded_store: InMemoryTaskStore, normalizer: DateNormalizer) -> None:
    handler = GetCalendarMonthHandler(seeded_store, normalizer)

    dots = await handler.handle(GetCalendarMonthQuery(year=2025, month=4))

    assert len(dots) == 30
    assert dots[DayKey(2025, 4, 6)] == DotState.URGENT
    assert dots[DayKey(2025, 4, 7)] == DotState.NORMAL
    assert dots[DayKey(2025, 4, 1)] == DotState.NONE
    # 22:30 UTC on April 30th is May 1st in Paris
    assert dots[DayKey(2025, 4, 30)] == DotState.NONE

    may = await handler.handle(GetCalendarMonthQuery(year=2025, month=5))
    assert may[DayKey(2025, 5, 1)] == DotState.NORMAL


@pytest.mark.asyncio
async def test_pending_tasks(seeded_store: InMemoryTaskStore) -> None:
    handler = GetPendingTasksHandler(seeded_store)

    everything = await handler.handle(GetPendingTasksQuery())
    for_plant = await handler.handle(GetPendingTasksQuery(plant_id=2))

    assert [task.id for task in everything] == [2, 1, 4, 6, 5]
    assert [task.id for task in for_plant] == [2, 6, 5]


@pytest.mark.asyncio
async def test_plant_tasks(seeded_store: InMemoryTaskStore, plant_directory: InMemoryPlantDirectory) -> None:
    plant_directory.put(make_plant(1))
    handler = GetPlantTasksHandler(seeded_store, plant_directory)

    assert [t.id for t in await handler.handle(GetPlantTasksQuery(plant_id=1))] == [3, 1, 4]
    assert [t.id for t in await handler.handle(GetPlantTasksQuery(plant_id=1, completed=True))] == [3]

    with pytest.raises(PlantNotFoundError):
        await handler.handle(GetPlantTasksQuery(plant_id=2))
