# 📄 File: care_scheduler/modules/care_management/application/queries/get_calendar_month.py
# 🧭 Purpose (Layman Explanation):
# Asks for the dot of every day of a month, so a calendar can be drawn in one go.
#
# 🧪 Purpose (Technical Summary):
# CQRS query for GetCalendarMonth, answered with one task fetch and one
# matcher pass.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.query_handlers (GetCalendarMonthHandler)
# - presentation.api.v1.tasks (GET /tasks/calendar/{year}/{month})

from pydantic import BaseModel, Field


class GetCalendarMonthQuery(BaseModel):
    """Query for the dots of every day in a month."""

    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
