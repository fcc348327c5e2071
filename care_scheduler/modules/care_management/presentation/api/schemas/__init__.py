# 📄 File: care_scheduler/modules/care_management/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# The shapes of data the care task API accepts and returns.
# 🧪 Purpose (Technical Summary):
# Re-exports the care task request/response schemas.
# 🔗 Dependencies:
# task_schemas.py
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.tasks, presentation.api.v1.plants

from .task_schemas import (
    CalendarMonthResponse,
    CompleteTaskRequest,
    CompleteTaskResponse,
    CreateTaskRequest,
    CreateTaskResponse,
    DayDotResponse,
    DayTasksResponse,
    DeleteTaskResponse,
    SweepSummaryResponse,
    TaskListResponse,
    TaskResponse,
    TaskTypeStyleResponse,
)

__all__ = [
    "CalendarMonthResponse",
    "CompleteTaskRequest",
    "CompleteTaskResponse",
    "CreateTaskRequest",
    "CreateTaskResponse",
    "DayDotResponse",
    "DayTasksResponse",
    "DeleteTaskResponse",
    "SweepSummaryResponse",
    "TaskListResponse",
    "TaskResponse",
    "TaskTypeStyleResponse",
]
