# 📄 File: care_scheduler/modules/care_management/domain/services/recurrence_generator.py
# 🧭 Purpose (Layman Explanation):
# Plans future waterings. When someone waters a plant and asks to "schedule
# the next ones", it books the next three waterings at the plant's rhythm.
# It also runs the "water everything that is due" sweep over every plant,
# making sure running it twice never books the same watering twice.
# 🧪 Purpose (Technical Summary):
# Recurrence Generator domain service: pure single-trigger expansion into N
# TaskDrafts, persistence of an expansion, and the fleet sweep with per-plant
# idempotence guard evaluated under the store's per-plant lock (backed by an
# in-process asyncio lock), bounded concurrency and per-plant failure
# isolation summarized in a GenerationBatch.
# 🔗 Dependencies:
# asyncio, TaskStore/PlantDirectory interfaces, DateNormalizer,
# TaskMatcher, EventPublisher, care_scheduler.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# Command handlers (create task, complete task, run sweep), Celery sweep task

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from care_scheduler.modules.care_management.domain.events.task_events import (
    TaskCreated,
    WateringSweepCompleted,
)
from care_scheduler.modules.care_management.domain.models.day_key import DayKey
from care_scheduler.modules.care_management.domain.models.generation_batch import (
    GenerationBatch,
    GenerationBatchSummary,
)
from care_scheduler.modules.care_management.domain.models.plant import Plant
from care_scheduler.modules.care_management.domain.models.task import (
    Task,
    TaskDraft,
    TaskType,
)
from care_scheduler.modules.care_management.domain.repositories.plant_directory import PlantDirectory
from care_scheduler.modules.care_management.domain.repositories.task_store import TaskStore
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.task_matcher import TaskMatcher
from care_scheduler.shared.core.exceptions import CareScheduleError
from care_scheduler.shared.events.base import DomainEvent
from care_scheduler.shared.events.publisher import EventPublisher
from care_scheduler.shared.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RECURRENCE_COUNT = 3


class PlantLockRegistry:
    """
    One asyncio.Lock per plant, per event loop.

    Serializes sweeps and recurrence expansions of one plant inside this
    process. Sweeps in other processes are serialized by
    ``TaskStore.create_task_guarded``.
    """

    def __init__(self):
        self._locks: Dict[int, Tuple[asyncio.AbstractEventLoop, asyncio.Lock]] = {}

    def lock_for(self, plant_id: int) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        entry = self._locks.get(plant_id)
        if entry is None or entry[0] is not loop:
            entry = (loop, asyncio.Lock())
            self._locks[plant_id] = entry
        return entry[1]


plant_locks = PlantLockRegistry()


class RecurrenceGenerator:
    """
    Generates future watering tasks.

    Two entry points share the same date policy:

    - ``expand`` / ``schedule_future``: N tasks spaced by the plant's
      frequency after one triggering task. Not idempotent; callers invoke it
      once per user action.
    - ``run_auto_watering_sweep``: at most one new due watering task per
      auto-watering plant, guarded against duplicates so it can be re-run.
    """

    def __init__(
        self,
        task_store: TaskStore,
        plant_directory: PlantDirectory,
        normalizer: DateNormalizer,
        recurrence_count: int = DEFAULT_RECURRENCE_COUNT,
        sweep_concurrency: int = 4,
        event_publisher: Optional[EventPublisher] = None,
        locks: Optional[PlantLockRegistry] = None,
    ):
        if recurrence_count < 1:
            raise ValueError("recurrence_count must be at least 1")
        if sweep_concurrency < 1:
            raise ValueError("sweep_concurrency must be at least 1")

        self._tasks = task_store
        self._plants = plant_directory
        self._normalizer = normalizer
        self._matcher = TaskMatcher(normalizer)
        self._recurrence_count = recurrence_count
        self._sweep_concurrency = sweep_concurrency
        self._events = event_publisher
        self._locks = locks or plant_locks

    # =========================================================================
    # SINGLE-TRIGGER EXPANSION
    # =========================================================================

    def expand(
        self,
        trigger: Task,
        frequency_days: Optional[int],
        count: Optional[int] = None
    ) -> List[TaskDraft]:
        """
        Compute the future watering drafts that follow a triggering task.

        Args:
            trigger: Task whose due date anchors the series
            frequency_days: Days between waterings
            count: Number of drafts, defaults to the configured recurrence count

        Returns:
            Drafts due trigger + k * frequency_days for k = 1..count

        Raises:
            CareScheduleError: If the frequency is not positive or the trigger has no due date
        """
        count = self._recurrence_count if count is None else count
        if not frequency_days or frequency_days <= 0:
            raise CareScheduleError(
                "A positive watering frequency is required to schedule future waterings",
                plant_id=trigger.plant_id,
                task_id=trigger.id,
                conflict="missing_watering_frequency",
            )
        if trigger.due_date is None:
            raise CareScheduleError(
                "The triggering task has no due date",
                plant_id=trigger.plant_id,
                task_id=trigger.id,
                conflict="missing_due_date",
            )

        return [
            TaskDraft(
                plant_id=trigger.plant_id,
                type=TaskType.WATER,
                description=f"Scheduled watering ({k}/{count}, every {frequency_days} days)",
                due_date=self._normalizer.shift(trigger.due_date, k * frequency_days),
                completed=False,
            )
            for k in range(1, count + 1)
        ]

    async def schedule_future(self, trigger: Task, plant: Plant) -> List[Task]:
        """
        Expand a triggering task and store the resulting tasks.

        Each task is its own atomic write; if one write fails the error
        propagates and the tasks already stored are kept.
        """
        drafts = self.expand(trigger, plant.watering_frequency_days)

        created: List[Task] = []
        async with self._locks.lock_for(plant.id):
            for draft in drafts:
                created.append(await self._tasks.create_task(draft))

        logger.info(
            f"Scheduled {len(created)} future waterings for {plant.display_name} "
            f"after task {trigger.id}",
            extra={
                'plant_id': plant.id,
                'trigger_task_id': trigger.id,
                'due_days': [self._normalizer.normalize_as_date_only(task.due_date) for task in created],
            }
        )
        await self._publish(
            [TaskCreated(task.id, task.plant_id, task.type.value, source="recurrence") for task in created]
        )
        return created

    # =========================================================================
    # FLEET SWEEP
    # =========================================================================

    async def run_auto_watering_sweep(self, now: Optional[datetime] = None) -> GenerationBatchSummary:
        """
        Create the next due watering task for every auto-watering plant.

        Per-plant failures are recorded in the summary and never abort the
        sweep. A failure to list the plants propagates.

        Args:
            now: Trigger time, defaults to the current time

        Returns:
            GenerationBatchSummary for this run
        """
        batch = GenerationBatch(triggered_at=now or datetime.now(timezone.utc))
        today = self._normalizer.today(batch.triggered_at)

        plants = await self._plants.list_plants_with_auto_watering()
        semaphore = asyncio.Semaphore(self._sweep_concurrency)

        async def run_one(plant_id: int):
            async with semaphore:
                await self._sweep_plant(plant_id, batch, today)

        for plant in plants:
            batch.consider(plant.id)
        await asyncio.gather(*(run_one(plant.id) for plant in plants))

        summary = batch.summarize()
        logger.log_business_event(
            "auto_watering_sweep",
            f"Auto-watering sweep: {summary.tasks_created} created, "
            f"{summary.tasks_skipped} skipped, {summary.plants_failed} failed",
            extra=summary.to_log_dict(),
        )
        if summary.partial_failure is not None:
            logger.warning(
                f"Auto-watering sweep partially failed: {summary.partial_failure.message}",
                extra={'failed_plant_ids': summary.partial_failure.failed_plant_ids}
            )

        events: List[DomainEvent] = [
            TaskCreated(task.id, task.plant_id, task.type.value, source="sweep")
            for task in summary.created_tasks
        ]
        events.append(
            WateringSweepCompleted(
                plants_considered=summary.plants_considered,
                tasks_created=summary.tasks_created,
                plants_failed=summary.plants_failed,
                failed_plant_ids=[failure.plant_id for failure in summary.failures],
            )
        )
        await self._publish(events)
        return summary

    async def _sweep_plant(self, plant_id: int, batch: GenerationBatch, today: DayKey) -> None:
        try:
            plant = await self._plants.get_plant(plant_id)
            if not plant.has_watering_schedule:
                logger.info(f"Plant {plant_id} no longer has a watering frequency, skipping")
                batch.record_skipped(plant_id)
                return

            planned_day: List[DayKey] = []

            def plan(plant_tasks: List[Task]) -> Optional[TaskDraft]:
                water_tasks = [task for task in plant_tasks if task.type == TaskType.WATER]
                due_day = self.next_due_day(plant, water_tasks, today)
                planned_day.append(due_day)
                if self._has_pending_watering_on(due_day, water_tasks):
                    return None
                return TaskDraft(
                    plant_id=plant.id,
                    type=TaskType.WATER,
                    description=f"Water {plant.display_name} (every {plant.watering_frequency_days} days)",
                    due_date=self._normalizer.at_day(due_day, plant.reminder_time),
                )

            # Store lock spans processes; the asyncio lock serializes within this one
            async with self._locks.lock_for(plant.id):
                task = await self._tasks.create_task_guarded(plant.id, plan)

            due_day = planned_day[-1]
            if task is None:
                logger.info(
                    f"Duplicate skipped: {plant.display_name} already has watering on {due_day}",
                    extra={'plant_id': plant.id, 'due_day': due_day.isoformat(), 'outcome': 'duplicate_skipped'}
                )
                batch.record_skipped(plant.id)
                return

            batch.record_created(task)
            logger.debug(f"Created watering task {task.id} for plant {plant.id} on {due_day}")

        except Exception as e:
            batch.record_failure(plant_id, e)
            logger.error(
                f"Auto-watering failed for plant {plant_id}: {e}",
                extra={'plant_id': plant_id, 'error_type': type(e).__name__},
                exc_info=True
            )

    def next_due_day(self, plant: Plant, water_tasks: Sequence[Task], today: DayKey) -> DayKey:
        """
        Day on which the plant's next watering is due.

        The most recent existing water task wins over ``last_watered_date``.
        A most recent task that is still pending is itself the next watering.
        A plant with neither a task nor a last watered date is due today.
        """
        latest = self._latest_watering(water_tasks)
        if latest is not None:
            latest_day, latest_task = latest
            if latest_task.is_pending:
                return latest_day
            return latest_day.plus_days(plant.watering_frequency_days)

        if plant.last_watered_date is not None:
            return DayKey.from_date(plant.last_watered_date).plus_days(plant.watering_frequency_days)

        return today

    def _latest_watering(self, water_tasks: Sequence[Task]) -> Optional[Tuple[DayKey, Task]]:
        latest: Optional[Tuple[DayKey, Task]] = None
        for task in water_tasks:
            day = self._matcher.day_of(task)
            if day is None:
                continue
            if latest is None or (day, task.id) > (latest[0], latest[1].id):
                latest = (day, task)
        return latest

    def _has_pending_watering_on(self, day: DayKey, water_tasks: Sequence[Task]) -> bool:
        pending = [task for task in water_tasks if task.is_pending and task.type == TaskType.WATER]
        return bool(self._matcher.tasks_due_on(day, pending))

    async def _publish(self, events: List[DomainEvent]) -> None:
        if self._events is not None and events:
            await self._events.publish_many(events)
