# 📄 File: care_scheduler/modules/care_management/application/queries/get_tasks_for_day.py
# 🧭 Purpose (Layman Explanation):
# The "what is due on this day?" and "what dot goes on this calendar day?"
# questions.
#
# 🧪 Purpose (Technical Summary):
# CQRS queries for GetTasksForDay and GetDotForDay. The day is any DateLike
# value and is normalized by the handler.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.query_handlers
# - presentation.api.v1.tasks (GET /tasks/day/{day}, GET /tasks/day/{day}/dot)

from datetime import date, datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


class GetTasksForDayQuery(BaseModel):
    """Query for the tasks due on one calendar day."""

    day: Union[str, datetime, date] = Field(..., description="Day as YYYY-MM-DD or timestamp")
    plant_id: Optional[int] = Field(default=None, gt=0, description="Restrict to one plant")
    order_by: Optional[Literal["due_time"]] = Field(
        default=None,
        description="Omit to keep store order, 'due_time' to sort by due time",
    )


class GetDotForDayQuery(BaseModel):
    """Query for the calendar dot of one day."""

    day: Union[str, datetime, date] = Field(..., description="Day as YYYY-MM-DD or timestamp")
