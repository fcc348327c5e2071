# 📄 File: care_scheduler/modules/care_management/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# The scheduler's read-only view of a plant: how often it needs water, when
# it was last watered and at what time of day reminders should land.
# 🧪 Purpose (Technical Summary):
# Read-only Plant projection supplied by the Plant Directory. The scheduler
# never writes plants; it only reads the watering fields.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# plant_directory.py, recurrence_generator.py, command handlers

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Plant(BaseModel):
    """Plant fields the scheduler needs."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: Optional[str] = None
    watering_frequency_days: Optional[int] = Field(
        None, gt=0, description="Days between waterings"
    )
    last_watered_date: Optional[date] = None
    auto_watering: bool = False
    reminder_time: Optional[time] = Field(
        None, description="Time of day given to generated watering tasks"
    )

    @property
    def has_watering_schedule(self) -> bool:
        return self.watering_frequency_days is not None and self.watering_frequency_days > 0

    @property
    def display_name(self) -> str:
        return self.name or f"plant #{self.id}"
