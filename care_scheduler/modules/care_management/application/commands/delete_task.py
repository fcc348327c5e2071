# 📄 File: care_scheduler/modules/care_management/application/commands/delete_task.py
# 🧭 Purpose (Layman Explanation):
# The "remove this task for good" request.
#
# 🧪 Purpose (Technical Summary):
# CQRS command for DeleteTask (hard delete, no soft-delete state).
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (DeleteTaskHandler)
# - presentation.api.v1.tasks (DELETE /tasks/{task_id})

from pydantic import BaseModel, Field


class DeleteTaskCommand(BaseModel):
    """Command for permanently deleting a care task."""

    task_id: int = Field(..., gt=0, description="Task to delete")
