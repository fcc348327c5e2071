"""Queries (read operations) of the care management module."""

from .get_calendar_month import GetCalendarMonthQuery
from .get_task_lists import GetPendingTasksQuery, GetPlantTasksQuery
from .get_tasks_for_day import GetDotForDayQuery, GetTasksForDayQuery

__all__ = [
    "GetCalendarMonthQuery",
    "GetDotForDayQuery",
    "GetPendingTasksQuery",
    "GetPlantTasksQuery",
    "GetTasksForDayQuery",
]
