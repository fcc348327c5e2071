"""Command and query handlers of the care management module."""

from .command_handlers import (
    CompleteTaskHandler,
    CreateTaskWithRecurrenceHandler,
    DeleteTaskHandler,
    RunAutoWateringSweepHandler,
)
from .query_handlers import (
    GetCalendarMonthHandler,
    GetDotForDayHandler,
    GetPendingTasksHandler,
    GetPlantTasksHandler,
    GetTasksForDayHandler,
)

__all__ = [
    "CompleteTaskHandler",
    "CreateTaskWithRecurrenceHandler",
    "DeleteTaskHandler",
    "GetCalendarMonthHandler",
    "GetDotForDayHandler",
    "GetPendingTasksHandler",
    "GetPlantTasksHandler",
    "GetTasksForDayHandler",
    "RunAutoWateringSweepHandler",
]
