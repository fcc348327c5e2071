# 📄 File: care_scheduler/modules/care_management/domain/events/task_events.py
# 🧭 Purpose (Layman Explanation):
# Defines the announcements the scheduler makes: a task was created, a task
# was completed, a watering sweep finished. Other parts of the app (badges,
# notifications) listen for them without the scheduler knowing who they are.
# 🧪 Purpose (Technical Summary):
# Domain events for the care task lifecycle built on the shared DomainEvent
# base, each validating its payload on construction.
# 🔗 Dependencies:
# care_scheduler.shared.events.base
# 🔄 Connected Modules / Calls From:
# Command handlers, recurrence generator, EventPublisher subscribers

from typing import Any, Dict, List, Optional

from care_scheduler.shared.events.base import DomainEvent


class TaskCompleted(DomainEvent):
    """
    Event fired when a care task is completed.

    Triggers (outside this service):
    - Badge progress
    - Notifications
    """
    EVENT_TYPE = "care_task.completed"

    def __init__(self, task_id: int, plant_id: int, task_type: Optional[str] = None, **kwargs):
        data = {"task_id": task_id, "plant_id": plant_id}
        if task_type is not None:
            data["task_type"] = task_type
        super().__init__(self.EVENT_TYPE, data, **kwargs)

    def _validate_event_data(self):
        for key in ("task_id", "plant_id"):
            if self.data.get(key) is None:
                raise ValueError(f"{key} is required for {self.EVENT_TYPE}")

    @property
    def task_id(self) -> int:
        return self.data["task_id"]

    @property
    def plant_id(self) -> int:
        return self.data["plant_id"]


class TaskCreated(DomainEvent):
    """Event fired when a task is created, by a user or by recurrence."""
    EVENT_TYPE = "care_task.created"

    def __init__(self, task_id: int, plant_id: int, task_type: str, source: str = "user", **kwargs):
        super().__init__(
            self.EVENT_TYPE,
            {"task_id": task_id, "plant_id": plant_id, "task_type": task_type, "source": source},
            **kwargs
        )

    def _validate_event_data(self):
        if self.data.get("source") not in ("user", "recurrence", "sweep"):
            raise ValueError(f"Unknown task source: {self.data.get('source')}")

    @property
    def task_id(self) -> int:
        return self.data["task_id"]


class WateringSweepCompleted(DomainEvent):
    """Event fired after every auto-watering sweep, successful or partial."""
    EVENT_TYPE = "care_task.watering_sweep_completed"

    def __init__(
        self,
        plants_considered: int,
        tasks_created: int,
        plants_failed: int,
        failed_plant_ids: List[int],
        **kwargs
    ):
        super().__init__(
            self.EVENT_TYPE,
            {
                "plants_considered": plants_considered,
                "tasks_created": tasks_created,
                "plants_failed": plants_failed,
                "failed_plant_ids": failed_plant_ids,
            },
            **kwargs
        )

    def _validate_event_data(self):
        if self.data["tasks_created"] < 0 or self.data["plants_failed"] < 0:
            raise ValueError("Sweep counters cannot be negative")

    @property
    def summary(self) -> Dict[str, Any]:
        return dict(self.data)
