# 📄 File: care_scheduler/modules/care_management/application/commands/create_task.py
# 🧭 Purpose (Layman Explanation):
# The "add a care task" request: which plant, what kind of care, a short
# description, the day it is due and whether to book the next waterings too.
#
# 🧪 Purpose (Technical Summary):
# CQRS command for CreateTaskWithRecurrence. The due date is kept as supplied
# (date, datetime or string) and parsed by the handler through the date
# normalizer so unparsable dates surface as InvalidDateError.
#
# 🔗 Dependencies:
# - pydantic for command validation and serialization
# - care_management.domain.models.task (TaskType)
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (CreateTaskWithRecurrenceHandler)
# - presentation.api.v1.tasks (POST /tasks)

from datetime import date, datetime
from typing import Union

from pydantic import BaseModel, Field, field_validator

from care_scheduler.modules.care_management.domain.models.task import TaskType


class CreateTaskCommand(BaseModel):
    """
    Command for creating a care task, optionally followed by future waterings.
    """

    plant_id: int = Field(..., gt=0, description="Plant the task belongs to", examples=[12])
    type: TaskType = Field(..., description="Kind of care", examples=["water"])
    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="What needs doing",
        examples=["Water the monstera"],
    )
    due_date: Union[str, datetime, date] = Field(
        ...,
        description="Due date: YYYY-MM-DD or an ISO 8601 timestamp",
        examples=["2025-04-01", "2025-04-01T18:30:00+02:00"],
    )
    schedule_future: bool = Field(
        default=False,
        description="For watering tasks, also create the next scheduled waterings",
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description must not be blank")
        return v
