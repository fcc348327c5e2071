# tests/test_auto_watering_sweep.py

from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone

import pytest

from care_scheduler.modules.care_management.application.commands.complete_task import CompleteTaskCommand
from care_scheduler.modules.care_management.application.handlers.command_handlers import CompleteTaskHandler
from care_scheduler.modules.care_management.domain.events.task_events import (
    TaskCreated,
    WateringSweepCompleted,
)
from care_scheduler.modules.care_management.domain.models.day_key import DayKey
from care_scheduler.modules.care_management.domain.models.task import Task, TaskType
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.recurrence_generator import (
    PlantLockRegistry,
    RecurrenceGenerator,
)
from care_scheduler.shared.events.publisher import EventPublisher

from .fakes import InMemoryPlantDirectory, InMemoryTaskStore, RecordingSubscriber, make_plant

NOW = datetime(2025, 4, 6, 7, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_sweep_creates_one_task_per_due_plant(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    normalizer: DateNormalizer,
) -> None:
    plant_directory.put(make_plant(1, frequency=5, last_watered=date(2025, 4, 1)))
    plant_directory.put(make_plant(2, frequency=3))
    plant_directory.put(make_plant(3, frequency=3, auto_watering=False))
    plant_directory.put(make_plant(4, frequency=None))

    summary = await generator.run_auto_watering_sweep(now=NOW)

    assert summary.plant_ids == [1, 2]
    assert summary.plants_considered == 2
    assert summary.tasks_created == 2
    assert summary.partial_failure is None
    assert all(task.type == TaskType.WATER and not task.completed for task in summary.created_tasks)
    assert {normalizer.normalize(task.due_date) for task in summary.created_tasks} == {DayKey(2025, 4, 6)}


@pytest.mark.asyncio
async def test_sweep_is_idempotent(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
) -> None:
    for plant_id in (1, 2, 3):
        plant_directory.put(make_plant(plant_id, frequency=4))

    first = await generator.run_auto_watering_sweep(now=NOW)
    second = await generator.run_auto_watering_sweep(now=NOW)

    assert first.tasks_created == 3
    assert second.tasks_created == 0
    assert second.tasks_skipped == 3
    assert len(task_store.tasks) == 3


@pytest.mark.asyncio
async def test_concurrent_sweeps_never_duplicate(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
) -> None:
    for plant_id in range(1, 6):
        plant_directory.put(make_plant(plant_id, frequency=2))

    summaries = await asyncio.gather(
        generator.run_auto_watering_sweep(now=NOW),
        generator.run_auto_watering_sweep(now=NOW),
    )

    assert sum(summary.tasks_created for summary in summaries) == 5
    assert sorted(task.plant_id for task in task_store.tasks.values()) == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_sweeps_with_separate_lock_registries_never_duplicate(
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
    normalizer: DateNormalizer,
) -> None:
    # Each generator owns its registry, the way an API worker and the Celery worker do
    for plant_id in range(1, 6):
        plant_directory.put(make_plant(plant_id, frequency=2))
    task_store.yield_on_read = True
    api_worker = RecurrenceGenerator(task_store, plant_directory, normalizer, locks=PlantLockRegistry())
    celery_worker = RecurrenceGenerator(task_store, plant_directory, normalizer, locks=PlantLockRegistry())

    summaries = await asyncio.gather(
        api_worker.run_auto_watering_sweep(now=NOW),
        celery_worker.run_auto_watering_sweep(now=NOW),
    )

    assert sum(summary.tasks_created for summary in summaries) == 5
    assert sum(summary.tasks_skipped for summary in summaries) == 5
    assert sorted(task.plant_id for task in task_store.tasks.values()) == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_pending_task_on_due_day_is_skipped(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
    normalizer: DateNormalizer,
) -> None:
    plant_directory.put(make_plant(1, frequency=5, last_watered=date(2025, 4, 1)))
    task_store.add(
        Task(
            id=50,
            plant_id=1,
            type=TaskType.WATER,
            description="Water by hand",
            due_date=normalizer.to_datetime("2025-04-06T20:00:00"),
        )
    )

    summary = await generator.run_auto_watering_sweep(now=NOW)

    assert summary.tasks_created == 0
    assert summary.tasks_skipped == 1
    assert list(task_store.tasks) == [50]


@pytest.mark.asyncio
async def test_one_failing_plant_does_not_abort_the_sweep(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
    recorder: RecordingSubscriber,
) -> None:
    for plant_id in range(1, 6):
        plant_directory.put(make_plant(plant_id, frequency=3))
    task_store.fail_create_for.add(3)

    summary = await generator.run_auto_watering_sweep(now=NOW)

    assert summary.tasks_created == 4
    assert summary.plants_failed == 1
    assert sorted(task.plant_id for task in summary.created_tasks) == [1, 2, 4, 5]

    failure = summary.partial_failure
    assert failure is not None
    assert failure.message == "4 created, 1 failed"
    assert failure.failed_plant_ids == [3]
    assert failure.failures[0].error_type == "RepositoryError"

    [completed] = recorder.of_type(WateringSweepCompleted.EVENT_TYPE)
    assert completed.data["failed_plant_ids"] == [3]
    assert len(recorder.of_type(TaskCreated.EVENT_TYPE)) == 4


@pytest.mark.asyncio
async def test_one_failing_plant_lookup_out_of_five(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
) -> None:
    for plant_id in range(1, 6):
        plant_directory.put(make_plant(plant_id, frequency=3))
    plant_directory.failing_plant_ids.add(4)

    summary = await generator.run_auto_watering_sweep(now=NOW)

    assert summary.plants_considered == 5
    assert summary.tasks_created == 4
    assert summary.plants_failed == 1
    assert summary.partial_failure.message == "4 created, 1 failed"
    assert summary.partial_failure.failed_plant_ids == [4]
    assert sorted(task.plant_id for task in task_store.tasks.values()) == [1, 2, 3, 5]


@pytest.mark.asyncio
async def test_unexpected_lookup_errors_are_isolated(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
) -> None:
    plant_directory.put(make_plant(1, frequency=3))
    plant_directory.put(make_plant(2, frequency=3))
    plant_directory.failing_plant_ids.add(2)

    summary = await generator.run_auto_watering_sweep(now=NOW)

    assert summary.tasks_created == 1
    assert summary.partial_failure.failures[0].plant_id == 2
    assert summary.partial_failure.failures[0].error_type == "RuntimeError"


@pytest.mark.asyncio
async def test_listing_failure_propagates(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    recorder: RecordingSubscriber,
) -> None:
    plant_directory.list_error = ConnectionError("directory unreachable")

    with pytest.raises(ConnectionError):
        await generator.run_auto_watering_sweep(now=NOW)

    assert recorder.events == []


@pytest.mark.asyncio
async def test_sweep_then_complete_with_recurrence(
    generator: RecurrenceGenerator,
    plant_directory: InMemoryPlantDirectory,
    task_store: InMemoryTaskStore,
    normalizer: DateNormalizer,
    publisher: EventPublisher,
) -> None:
    plant_directory.put(make_plant(1, frequency=5, last_watered=date(2025, 4, 1)))

    summary = await generator.run_auto_watering_sweep(now=datetime(2025, 4, 6, 9, 0, tzinfo=timezone.utc))
    [watering] = summary.created_tasks
    assert normalizer.normalize_as_date_only(watering.due_date) == "2025-04-06"

    handler = CompleteTaskHandler(task_store, plant_directory, generator, publisher)
    result = await handler.handle(CompleteTaskCommand(task_id=watering.id, schedule_future=True))

    assert result.completed.completed is True
    assert [normalizer.normalize_as_date_only(t.due_date) for t in result.recurrences] == [
        "2025-04-11",
        "2025-04-16",
        "2025-04-21",
    ]

    # The next pending watering already exists, so a new sweep adds nothing
    again = await generator.run_auto_watering_sweep(now=datetime(2025, 4, 11, 9, 0, tzinfo=timezone.utc))
    assert again.tasks_created == 0
