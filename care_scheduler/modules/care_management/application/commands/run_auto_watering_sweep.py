# 📄 File: care_scheduler/modules/care_management/application/commands/run_auto_watering_sweep.py
# 🧭 Purpose (Layman Explanation):
# The "book every watering that is due now" request, sent by an admin or by
# the nightly background job.
#
# 🧪 Purpose (Technical Summary):
# CQRS command for RunAutoWateringSweep; carries the trigger source and an
# optional trigger time for reproducible runs.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (RunAutoWateringSweepHandler)
# - presentation.api.v1.tasks (POST /tasks/generate-auto-watering)
# - background_jobs.tasks.auto_watering (Celery beat)

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SweepTrigger(str, Enum):
    """Who started a sweep."""
    ADMIN = "admin"
    SCHEDULE = "schedule"


class RunAutoWateringSweepCommand(BaseModel):
    """Command for running the fleet-wide auto-watering sweep."""

    triggered_by: SweepTrigger = Field(default=SweepTrigger.ADMIN)
    triggered_at: Optional[datetime] = Field(
        default=None,
        description="Trigger time; defaults to now",
    )
