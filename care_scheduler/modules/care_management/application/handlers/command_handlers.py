# 📄 File: care_scheduler/modules/care_management/application/handlers/command_handlers.py
# 🧭 Purpose (Layman Explanation):
# The "action processors" for care tasks: adding a task (and its future
# waterings), ticking a task off, deleting it, and running the sweep that
# books every due watering.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers orchestrating the Task Store, Plant Directory,
# Recurrence Generator and Event Publisher. Caller-supplied dates are parsed
# before any write; business rule checks happen before the triggering write.
#
# 🔗 Dependencies:
# - care_management.application.commands (command definitions)
# - care_management.domain.services (DateNormalizer, RecurrenceGenerator)
# - care_management.domain.repositories (TaskStore, PlantDirectory interfaces)
# - care_scheduler.shared.events.publisher (EventPublisher)
#
# 🔄 Connected Modules / Calls From:
# - care_management.presentation.dependencies (handler construction)
# - care_management.presentation.api.v1.tasks (API endpoints invoke handlers)
# - background_jobs.tasks.auto_watering (sweep handler)

__all__ = [
    "CreateTaskWithRecurrenceHandler",
    "CompleteTaskHandler",
    "DeleteTaskHandler",
    "RunAutoWateringSweepHandler",
]

import logging
from typing import List, Optional

from care_scheduler.modules.care_management.application.commands.complete_task import CompleteTaskCommand
from care_scheduler.modules.care_management.application.commands.create_task import CreateTaskCommand
from care_scheduler.modules.care_management.application.commands.delete_task import DeleteTaskCommand
from care_scheduler.modules.care_management.application.commands.run_auto_watering_sweep import (
    RunAutoWateringSweepCommand,
)
from care_scheduler.modules.care_management.application.dto.task_results import (
    CompleteTaskResult,
    CreateTaskResult,
    DeleteTaskResult,
)
from care_scheduler.modules.care_management.domain.events.task_events import TaskCompleted, TaskCreated
from care_scheduler.modules.care_management.domain.models.generation_batch import GenerationBatchSummary
from care_scheduler.modules.care_management.domain.models.plant import Plant
from care_scheduler.modules.care_management.domain.models.task import Task, TaskDraft, TaskType
from care_scheduler.modules.care_management.domain.repositories.plant_directory import PlantDirectory
from care_scheduler.modules.care_management.domain.repositories.task_store import TaskStore
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.recurrence_generator import RecurrenceGenerator
from care_scheduler.shared.core.exceptions import CareScheduleError, InvalidDateError
from care_scheduler.shared.events.publisher import EventPublisher

logger = logging.getLogger(__name__)


def _require_watering_schedule(plant: Plant, task_id: Optional[int] = None) -> None:
    if not plant.has_watering_schedule:
        raise CareScheduleError(
            f"{plant.display_name} has no watering frequency; future waterings cannot be scheduled",
            plant_id=plant.id,
            task_id=task_id,
            conflict="missing_watering_frequency",
        )


class CreateTaskWithRecurrenceHandler:
    """
    Handles task creation, optionally followed by recurrence expansion.
    """

    def __init__(
        self,
        task_store: TaskStore,
        plant_directory: PlantDirectory,
        normalizer: DateNormalizer,
        recurrence_generator: RecurrenceGenerator,
        event_publisher: EventPublisher,
    ):
        self._task_store = task_store
        self._plant_directory = plant_directory
        self._normalizer = normalizer
        self._recurrence_generator = recurrence_generator
        self._event_publisher = event_publisher

    async def handle(self, command: CreateTaskCommand) -> CreateTaskResult:
        """
        Create a task and, for watering tasks with schedule_future, its recurrences.

        Raises:
            InvalidDateError: If the due date cannot be parsed
            PlantNotFoundError: If the plant does not exist
            CareScheduleError: If recurrences are requested for a plant without frequency
        """
        try:
            due_date = self._normalizer.to_datetime(command.due_date)
        except InvalidDateError as e:
            raise InvalidDateError(command.due_date, field="due_date") from e

        plant = await self._plant_directory.get_plant(command.plant_id)

        wants_recurrence = command.schedule_future and command.type == TaskType.WATER
        if wants_recurrence:
            _require_watering_schedule(plant)
        elif command.schedule_future:
            logger.debug(f"schedule_future ignored for non-watering task type {command.type.value}")

        created = await self._task_store.create_task(
            TaskDraft(
                plant_id=command.plant_id,
                type=command.type,
                description=command.description,
                due_date=due_date,
            )
        )
        logger.info(
            f"Created {created.type.value} task {created.id} for plant {created.plant_id} "
            f"due {self._normalizer.normalize_as_date_only(created.due_date)}"
        )
        await self._event_publisher.publish(
            TaskCreated(created.id, created.plant_id, created.type.value, source="user")
        )

        recurrences: List[Task] = []
        if wants_recurrence:
            recurrences = await self._recurrence_generator.schedule_future(created, plant)

        return CreateTaskResult(created=created, recurrences=recurrences)


class CompleteTaskHandler:
    """
    Handles task completion, the TaskCompleted event and optional recurrence.
    """

    def __init__(
        self,
        task_store: TaskStore,
        plant_directory: PlantDirectory,
        recurrence_generator: RecurrenceGenerator,
        event_publisher: EventPublisher,
    ):
        self._task_store = task_store
        self._plant_directory = plant_directory
        self._recurrence_generator = recurrence_generator
        self._event_publisher = event_publisher

    async def handle(self, command: CompleteTaskCommand) -> CompleteTaskResult:
        """
        Complete a task.

        TaskCompleted is published and recurrences are expanded only by the
        call whose store write moved the task to completed, so overlapping
        completions of one task publish and expand once.

        Raises:
            TaskNotFoundError: If the task does not exist
            PlantNotFoundError: If recurrences are requested and the plant is gone
            CareScheduleError: If recurrences are requested for a plant without frequency
        """
        task = await self._task_store.get_task(command.task_id)

        plant: Optional[Plant] = None
        wants_recurrence = (
            command.schedule_future and task.type == TaskType.WATER and not task.completed
        )
        if wants_recurrence:
            plant = await self._plant_directory.get_plant(task.plant_id)
            _require_watering_schedule(plant, task.id)

        completed, transitioned = await self._task_store.complete_task(task.id)

        if not transitioned:
            logger.info(f"Task {task.id} was already completed")
            return CompleteTaskResult(completed=completed)

        logger.info(f"Completed {completed.type.value} task {completed.id} for plant {completed.plant_id}")
        await self._event_publisher.publish(
            TaskCompleted(completed.id, completed.plant_id, task_type=completed.type.value)
        )

        recurrences: List[Task] = []
        if wants_recurrence:
            recurrences = await self._recurrence_generator.schedule_future(completed, plant)

        return CompleteTaskResult(completed=completed, recurrences=recurrences)


class DeleteTaskHandler:
    """Handles permanent task deletion."""

    def __init__(self, task_store: TaskStore):
        self._task_store = task_store

    async def handle(self, command: DeleteTaskCommand) -> DeleteTaskResult:
        task = await self._task_store.get_task(command.task_id)
        await self._task_store.delete_task(task.id)
        logger.info(f"Deleted task {task.id} for plant {task.plant_id}")
        return DeleteTaskResult(deleted=task)


class RunAutoWateringSweepHandler:
    """Handles the fleet-wide auto-watering sweep."""

    def __init__(self, recurrence_generator: RecurrenceGenerator):
        self._recurrence_generator = recurrence_generator

    async def handle(self, command: RunAutoWateringSweepCommand) -> GenerationBatchSummary:
        logger.info(f"Auto-watering sweep requested by {command.triggered_by.value}")
        return await self._recurrence_generator.run_auto_watering_sweep(now=command.triggered_at)
