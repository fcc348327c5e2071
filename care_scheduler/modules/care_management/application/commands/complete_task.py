# 📄 File: care_scheduler/modules/care_management/application/commands/complete_task.py
# 🧭 Purpose (Layman Explanation):
# The "I did it" request for a care task, with the option to book the next
# waterings right away.
#
# 🧪 Purpose (Technical Summary):
# CQRS command for CompleteTask; completion emits TaskCompleted and may run
# the single-trigger recurrence expansion for watering tasks.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (CompleteTaskHandler)
# - presentation.api.v1.tasks (PATCH /tasks/{task_id}/complete)

from pydantic import BaseModel, Field


class CompleteTaskCommand(BaseModel):
    """Command for completing a care task."""

    task_id: int = Field(..., gt=0, description="Task to complete")
    schedule_future: bool = Field(
        default=False,
        description="For watering tasks, create the next scheduled waterings",
    )
