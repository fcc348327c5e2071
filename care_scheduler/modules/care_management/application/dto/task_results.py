# 📄 File: care_scheduler/modules/care_management/application/dto/task_results.py
# 🧭 Purpose (Layman Explanation):
# The answers the scheduler gives back after changing tasks, always listing
# exactly which tasks were created, completed or deleted.
#
# 🧪 Purpose (Technical Summary):
# Result DTOs returned by command handlers so every mutating operation
# returns the affected entities.
#
# 🔗 Dependencies:
# - pydantic, care_management.domain.models
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers
# - presentation.api.schemas.task_schemas

from typing import List

from pydantic import BaseModel, Field

from care_scheduler.modules.care_management.domain.models.task import Task


class CreateTaskResult(BaseModel):
    """Outcome of CreateTaskWithRecurrence."""

    created: Task
    recurrences: List[Task] = Field(default_factory=list)


class CompleteTaskResult(BaseModel):
    """Outcome of CompleteTask."""

    completed: Task
    recurrences: List[Task] = Field(default_factory=list)


class DeleteTaskResult(BaseModel):
    """Outcome of DeleteTask."""

    deleted: Task
