# 📄 File: care_scheduler/modules/care_management/application/handlers/query_handlers.py
# 🧭 Purpose (Layman Explanation):
# Answers the scheduler's read-only questions: what is due on a day, which
# dot a calendar day gets, what is still pending and what a plant has planned.
#
# 🧪 Purpose (Technical Summary):
# CQRS query handlers. Store queries are narrowed with a padded day range on
# the stored due day; the Task Matcher then decides exact day membership
# from each task's due date.
#
# 🔗 Dependencies:
# - care_management.application.queries
# - care_management.domain.services (DateNormalizer, TaskMatcher)
# - care_management.domain.repositories (TaskStore, PlantDirectory)
#
# 🔄 Connected Modules / Calls From:
# - care_management.presentation.dependencies
# - care_management.presentation.api.v1.tasks

__all__ = [
    "GetTasksForDayHandler",
    "GetDotForDayHandler",
    "GetCalendarMonthHandler",
    "GetPendingTasksHandler",
    "GetPlantTasksHandler",
]

import logging
from typing import Dict, List, Tuple

from care_scheduler.modules.care_management.application.queries.get_calendar_month import GetCalendarMonthQuery
from care_scheduler.modules.care_management.application.queries.get_task_lists import (
    GetPendingTasksQuery,
    GetPlantTasksQuery,
)
from care_scheduler.modules.care_management.application.queries.get_tasks_for_day import (
    GetDotForDayQuery,
    GetTasksForDayQuery,
)
from care_scheduler.modules.care_management.domain.models.day_key import DayKey, DayRange
from care_scheduler.modules.care_management.domain.models.task import DotState, Task, TaskFilter
from care_scheduler.modules.care_management.domain.repositories.plant_directory import PlantDirectory
from care_scheduler.modules.care_management.domain.repositories.task_store import TaskStore
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.modules.care_management.domain.services.task_matcher import TaskMatcher

logger = logging.getLogger(__name__)

# Stored due days may predate a reference timezone change
DAY_PADDING = 1


class GetTasksForDayHandler:
    """Tasks due on one day."""

    def __init__(self, task_store: TaskStore, normalizer: DateNormalizer):
        self._task_store = task_store
        self._normalizer = normalizer
        self._matcher = TaskMatcher(normalizer)

    async def handle(self, query: GetTasksForDayQuery) -> Tuple[DayKey, List[Task]]:
        """
        Returns:
            The normalized day and the tasks due on it

        Raises:
            InvalidDateError: If the day cannot be parsed
        """
        day = self._normalizer.normalize(query.day)
        candidates = await self._task_store.find_tasks(
            TaskFilter(plant_id=query.plant_id, due_date_range=DayRange.around(day, DAY_PADDING))
        )
        return day, self._matcher.tasks_due_on(day, candidates, order_by=query.order_by)


class GetDotForDayHandler:
    """Calendar dot for one day."""

    def __init__(self, task_store: TaskStore, normalizer: DateNormalizer):
        self._task_store = task_store
        self._normalizer = normalizer
        self._matcher = TaskMatcher(normalizer)

    async def handle(self, query: GetDotForDayQuery) -> Tuple[DayKey, DotState]:
        day = self._normalizer.normalize(query.day)
        candidates = await self._task_store.find_tasks(
            TaskFilter(due_date_range=DayRange.around(day, DAY_PADDING))
        )
        return day, self._matcher.dot_for_day(day, candidates)


class GetCalendarMonthHandler:
    """Calendar dots for every day of a month."""

    def __init__(self, task_store: TaskStore, normalizer: DateNormalizer):
        self._task_store = task_store
        self._matcher = TaskMatcher(normalizer)

    async def handle(self, query: GetCalendarMonthQuery) -> Dict[DayKey, DotState]:
        month = DayRange.month(query.year, query.month)
        padded = DayRange(month.start.plus_days(-DAY_PADDING), month.end.plus_days(DAY_PADDING))
        candidates = await self._task_store.find_tasks(TaskFilter(due_date_range=padded))
        return self._matcher.dots_for_range(month, candidates)


class GetPendingTasksHandler:
    """Unfinished tasks, earliest due first."""

    def __init__(self, task_store: TaskStore):
        self._task_store = task_store

    async def handle(self, query: GetPendingTasksQuery) -> List[Task]:
        return await self._task_store.find_tasks(
            TaskFilter(plant_id=query.plant_id, completed=False)
        )


class GetPlantTasksHandler:
    """Every task of one plant."""

    def __init__(self, task_store: TaskStore, plant_directory: PlantDirectory):
        self._task_store = task_store
        self._plant_directory = plant_directory

    async def handle(self, query: GetPlantTasksQuery) -> List[Task]:
        """
        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        plant = await self._plant_directory.get_plant(query.plant_id)
        return await self._task_store.find_tasks(
            TaskFilter(plant_id=plant.id, completed=query.completed)
        )
