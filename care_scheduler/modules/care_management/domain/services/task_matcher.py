# 📄 File: care_scheduler/modules/care_management/domain/services/task_matcher.py
# 🧭 Purpose (Layman Explanation):
# Answers "what needs doing on this day?" and "should this calendar square
# show a dot, and is it an urgent watering dot?".
# 🧪 Purpose (Technical Summary):
# Pure task-to-day matching on structural DayKey equality, with optional
# ordering by due time, plus DotState summaries for one day or a day range.
# Tasks whose due date is missing or unparsable are skipped, never raised.
# 🔗 Dependencies:
# date_normalizer.py, domain models (Task, DotState, DayKey, DayRange)
# 🔄 Connected Modules / Calls From:
# query handlers (tasks for day, dot for day, calendar month), recurrence
# generator (idempotence guard)

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from care_scheduler.modules.care_management.domain.models.day_key import DayKey, DayRange
from care_scheduler.modules.care_management.domain.models.task import DotState, Task
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer
from care_scheduler.shared.core.exceptions import InvalidDateError

logger = logging.getLogger(__name__)

ORDER_BY_DUE_TIME = "due_time"


class TaskMatcher:
    """Matches tasks to calendar days."""

    def __init__(self, normalizer: DateNormalizer):
        self._normalizer = normalizer

    def day_of(self, task: Task) -> Optional[DayKey]:
        """DayKey of a task's due date, or None when it has none or it cannot be parsed."""
        if task.due_date is None:
            return None
        try:
            return self._normalizer.normalize(task.due_date)
        except InvalidDateError:
            logger.debug(f"Skipping task {task.id}: unparsable due date {task.due_date!r}")
            return None

    def tasks_due_on(
        self,
        day: DayKey,
        tasks: Iterable[Task],
        order_by: Optional[str] = None
    ) -> List[Task]:
        """
        Tasks whose normalized due date is ``day``.

        Args:
            day: Day to match
            tasks: Candidate tasks
            order_by: None keeps input order; "due_time" sorts by due datetime

        Returns:
            Matching tasks

        Raises:
            ValueError: If order_by is not a supported ordering
        """
        matched = [task for task in tasks if self.day_of(task) == day]

        if order_by is None:
            return matched
        if order_by == ORDER_BY_DUE_TIME:
            return sorted(matched, key=self._due_sort_key)
        raise ValueError(f"Unsupported task ordering: {order_by}")

    def dot_for_day(self, day: DayKey, tasks: Iterable[Task]) -> DotState:
        """Calendar dot for one day: urgent iff an unfinished watering task is due."""
        return self._dot_for(self.tasks_due_on(day, tasks))

    def dots_for_range(self, days: DayRange, tasks: Iterable[Task]) -> Dict[DayKey, DotState]:
        """Calendar dots for every day of a range, in a single pass over the tasks."""
        by_day: Dict[DayKey, List[Task]] = defaultdict(list)
        for task in tasks:
            day = self.day_of(task)
            if day is not None and day in days:
                by_day[day].append(task)
        return {day: self._dot_for(by_day.get(day, [])) for day in days}

    @staticmethod
    def _dot_for(day_tasks: List[Task]) -> DotState:
        if not day_tasks:
            return DotState.NONE
        if any(task.is_urgent for task in day_tasks):
            return DotState.URGENT
        return DotState.NORMAL

    def _due_sort_key(self, task: Task) -> datetime:
        return self._normalizer.to_datetime(task.due_date).astimezone(timezone.utc)
