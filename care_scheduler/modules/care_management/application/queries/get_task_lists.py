# 📄 File: care_scheduler/modules/care_management/application/queries/get_task_lists.py
# 🧭 Purpose (Layman Explanation):
# The "what is still to do?" and "what tasks does this plant have?" questions.
#
# 🧪 Purpose (Technical Summary):
# CQRS queries for GetPendingTasks and GetPlantTasks.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.query_handlers
# - presentation.api.v1.tasks (GET /tasks/pending, GET /plants/{plant_id}/tasks)

from typing import Optional

from pydantic import BaseModel, Field


class GetPendingTasksQuery(BaseModel):
    """Query for every unfinished task, optionally for one plant."""

    plant_id: Optional[int] = Field(default=None, gt=0)


class GetPlantTasksQuery(BaseModel):
    """Query for every task of one plant."""

    plant_id: int = Field(..., gt=0)
    completed: Optional[bool] = Field(default=None, description="Filter on completion state")
