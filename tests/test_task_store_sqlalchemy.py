# tests/test_task_store_sqlalchemy.py

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import AsyncIterator

import pytest
import pytest_asyncio

from care_scheduler.modules.care_management.domain.models.day_key import DayKey, DayRange
from care_scheduler.modules.care_management.domain.models.task import TaskDraft, TaskFilter, TaskType
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.recurrence_generator import (
    PlantLockRegistry,
    RecurrenceGenerator,
)
from care_scheduler.modules.care_management.infrastructure.database import (
    PlantModel,
    SqlAlchemyPlantDirectory,
    SqlAlchemyTaskStore,
)
from care_scheduler.shared.core.exceptions import PlantNotFoundError, TaskNotFoundError
from care_scheduler.shared.infrastructure.database.connection import DatabaseConnectionManager
from care_scheduler.shared.infrastructure.database.session import DatabaseSessionManager


@pytest_asyncio.fixture()
async def sessions(tmp_path) -> AsyncIterator[DatabaseSessionManager]:
    manager = DatabaseSessionManager()
    await manager.initialize(DatabaseConnectionManager(f"sqlite+aiosqlite:///{tmp_path / 'care.db'}"))
    await manager.connection.create_tables()

    async with manager.get_session() as session:
        session.add_all(
            [
                PlantModel(id=1, name="Monstera", watering_frequency_days=5,
                           last_watered_date=date(2025, 4, 1), auto_watering=True, reminder_time="19:30"),
                PlantModel(id=2, name="Cactus", watering_frequency_days=14, auto_watering=False),
                PlantModel(id=3, name="Fern", watering_frequency_days=None, auto_watering=True),
                PlantModel(id=4, name="Pothos", watering_frequency_days=3, auto_watering=True,
                           reminder_time="late"),
            ]
        )

    yield manager
    await manager.close()


@pytest.fixture()
def store(sessions: DatabaseSessionManager, normalizer: DateNormalizer) -> SqlAlchemyTaskStore:
    return SqlAlchemyTaskStore(sessions, normalizer)


@pytest.fixture()
def directory(sessions: DatabaseSessionManager) -> SqlAlchemyPlantDirectory:
    return SqlAlchemyPlantDirectory(sessions)


def _draft(plant_id: int, due: datetime, task_type: TaskType = TaskType.WATER) -> TaskDraft:
    return TaskDraft(plant_id=plant_id, type=task_type, description=f"{task_type.value} plant {plant_id}", due_date=due)


@pytest.mark.asyncio
async def test_created_tasks_round_trip_in_the_reference_zone(
    store: SqlAlchemyTaskStore,
    normalizer: DateNormalizer,
) -> None:
    created = await store.create_task(_draft(1, datetime(2025, 4, 6, 22, 30, tzinfo=timezone.utc)))
    loaded = await store.get_task(created.id)

    assert loaded.id == created.id
    assert loaded.completed is False
    assert loaded.due_date.tzinfo is not None
    assert loaded.due_date == datetime(2025, 4, 6, 22, 30, tzinfo=timezone.utc)
    assert normalizer.normalize(loaded.due_date) == DayKey(2025, 4, 7)


@pytest.mark.asyncio
async def test_due_day_range_uses_the_reference_day(store: SqlAlchemyTaskStore) -> None:
    late = await store.create_task(_draft(1, datetime(2025, 4, 5, 23, 0, tzinfo=timezone.utc)))
    morning = await store.create_task(_draft(1, datetime(2025, 4, 6, 6, 0, tzinfo=timezone.utc)))
    await store.create_task(_draft(1, datetime(2025, 4, 6, 22, 30, tzinfo=timezone.utc)))

    found = await store.find_tasks(TaskFilter(due_date_range=DayRange.single(DayKey(2025, 4, 6))))

    assert [task.id for task in found] == [late.id, morning.id]


@pytest.mark.asyncio
async def test_find_tasks_filters_combine(store: SqlAlchemyTaskStore) -> None:
    water = await store.create_task(_draft(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc)))
    await store.create_task(_draft(1, datetime(2025, 4, 6, 9, 0, tzinfo=timezone.utc), TaskType.REPOT))
    await store.create_task(_draft(2, datetime(2025, 4, 6, 10, 0, tzinfo=timezone.utc)))
    await store.complete_task(water.id)

    pending_water = await store.find_tasks(TaskFilter(type=TaskType.WATER, completed=False))
    plant_one = await store.find_tasks(TaskFilter(plant_id=1))

    assert [task.plant_id for task in pending_water] == [2]
    assert [task.type for task in plant_one] == [TaskType.WATER, TaskType.REPOT]


@pytest.mark.asyncio
async def test_completion_is_idempotent(store: SqlAlchemyTaskStore) -> None:
    created = await store.create_task(_draft(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc)))

    first, first_transitioned = await store.complete_task(created.id)
    second, second_transitioned = await store.complete_task(created.id)

    assert first.completed is True
    assert first.date_completed is not None
    assert (first_transitioned, second_transitioned) == (True, False)
    assert second.date_completed == first.date_completed


@pytest.mark.asyncio
async def test_missing_tasks_raise_not_found(store: SqlAlchemyTaskStore) -> None:
    with pytest.raises(TaskNotFoundError):
        await store.get_task(999)
    with pytest.raises(TaskNotFoundError):
        await store.complete_task(999)
    with pytest.raises(TaskNotFoundError):
        await store.delete_task(999)


@pytest.mark.asyncio
async def test_guarded_create_plans_from_the_plants_tasks(store: SqlAlchemyTaskStore) -> None:
    existing = await store.create_task(_draft(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc)))
    await store.create_task(_draft(2, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc)))
    seen: list[list[int]] = []

    def plan_once(tasks):
        seen.append([task.id for task in tasks])
        if len(tasks) > 1:
            return None
        return _draft(1, datetime(2025, 4, 9, 8, 0, tzinfo=timezone.utc))

    created = await store.create_task_guarded(1, plan_once)
    declined = await store.create_task_guarded(1, plan_once)

    assert created is not None and created.plant_id == 1
    assert declined is None
    assert seen == [[existing.id], [existing.id, created.id]]

    with pytest.raises(PlantNotFoundError):
        await store.create_task_guarded(42, plan_once)


@pytest.mark.asyncio
async def test_delete_task(store: SqlAlchemyTaskStore) -> None:
    created = await store.create_task(_draft(1, datetime(2025, 4, 6, 8, 0, tzinfo=timezone.utc)))

    await store.delete_task(created.id)

    assert await store.find_tasks(TaskFilter(plant_id=1)) == []


@pytest.mark.asyncio
async def test_plant_directory(directory: SqlAlchemyPlantDirectory) -> None:
    monstera = await directory.get_plant(1)
    enrolled = await directory.list_plants_with_auto_watering()

    assert monstera.watering_frequency_days == 5
    assert monstera.last_watered_date == date(2025, 4, 1)
    assert monstera.reminder_time == time(19, 30)
    assert [plant.id for plant in enrolled] == [1, 4]
    assert enrolled[1].reminder_time is None

    with pytest.raises(PlantNotFoundError):
        await directory.get_plant(42)


@pytest.mark.asyncio
async def test_sweep_against_the_database(
    store: SqlAlchemyTaskStore,
    directory: SqlAlchemyPlantDirectory,
    normalizer: DateNormalizer,
) -> None:
    generator = RecurrenceGenerator(store, directory, normalizer, sweep_concurrency=1, locks=PlantLockRegistry())
    now = datetime(2025, 4, 6, 7, 0, tzinfo=timezone.utc)

    first = await generator.run_auto_watering_sweep(now=now)
    second = await generator.run_auto_watering_sweep(now=now)

    assert first.tasks_created == 2
    assert second.tasks_created == 0
    assert second.tasks_skipped == 2

    [monstera_task] = await store.find_tasks(TaskFilter(plant_id=1))
    assert normalizer.normalize(monstera_task.due_date) == DayKey(2025, 4, 6)
    assert (monstera_task.due_date.hour, monstera_task.due_date.minute) == (19, 30)
