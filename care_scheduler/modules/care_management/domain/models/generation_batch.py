# 📄 File: care_scheduler/modules/care_management/domain/models/generation_batch.py
# 🧭 Purpose (Layman Explanation):
# A scratch pad for one "water everything that is due" run: which plants were
# looked at, how many tasks were created or skipped, and which plants failed.
# 🧪 Purpose (Technical Summary):
# Ephemeral GenerationBatch accumulator (never persisted) and the immutable
# GenerationBatchSummary returned to callers, including the per-plant
# PartialSweepFailure report.
# 🔗 Dependencies:
# pydantic, datetime, typing, care_scheduler.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# recurrence_generator.py, sweep command handler, API schemas, Celery task

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from care_scheduler.modules.care_management.domain.models.task import Task
from care_scheduler.shared.core.exceptions import describe_exception


class PlantFailure(BaseModel):
    """Why one plant could not be processed during a sweep."""

    plant_id: int
    error_code: str
    error_type: str
    message: str


class PartialSweepFailure(BaseModel):
    """Report attached to a sweep summary when some plants failed."""

    plants_failed: int
    tasks_created: int
    failures: List[PlantFailure]

    @property
    def message(self) -> str:
        return f"{self.tasks_created} created, {self.plants_failed} failed"

    @property
    def failed_plant_ids(self) -> List[int]:
        return [failure.plant_id for failure in self.failures]


class GenerationBatchSummary(BaseModel):
    """Outcome of one auto-watering sweep."""

    plant_ids: List[int] = Field(default_factory=list)
    plants_considered: int = 0
    tasks_created: int = 0
    tasks_skipped: int = 0
    plants_failed: int = 0
    failures: List[PlantFailure] = Field(default_factory=list)
    created_tasks: List[Task] = Field(default_factory=list)
    triggered_at: datetime
    completed_at: Optional[datetime] = None

    @property
    def partial_failure(self) -> Optional[PartialSweepFailure]:
        if not self.failures:
            return None
        return PartialSweepFailure(
            plants_failed=self.plants_failed,
            tasks_created=self.tasks_created,
            failures=self.failures,
        )

    def to_log_dict(self) -> Dict[str, Any]:
        return {
            "plants_considered": self.plants_considered,
            "tasks_created": self.tasks_created,
            "tasks_skipped": self.tasks_skipped,
            "plants_failed": self.plants_failed,
            "failed_plant_ids": [failure.plant_id for failure in self.failures],
            "triggered_at": self.triggered_at.isoformat(),
        }


class GenerationBatch:
    """Mutable record of one sweep while it runs."""

    def __init__(self, triggered_at: Optional[datetime] = None):
        self.triggered_at = triggered_at or datetime.now(timezone.utc)
        self.plant_ids: List[int] = []
        self.created_tasks: List[Task] = []
        self.skipped_plant_ids: List[int] = []
        self.failures: List[PlantFailure] = []

    def consider(self, plant_id: int) -> None:
        self.plant_ids.append(plant_id)

    def record_created(self, task: Task) -> None:
        self.created_tasks.append(task)

    def record_skipped(self, plant_id: int) -> None:
        self.skipped_plant_ids.append(plant_id)

    def record_failure(self, plant_id: int, error: Exception) -> None:
        self.failures.append(PlantFailure(plant_id=plant_id, **describe_exception(error)))

    def summarize(self) -> GenerationBatchSummary:
        return GenerationBatchSummary(
            plant_ids=list(self.plant_ids),
            plants_considered=len(self.plant_ids),
            tasks_created=len(self.created_tasks),
            tasks_skipped=len(self.skipped_plant_ids),
            plants_failed=len(self.failures),
            failures=sorted(self.failures, key=lambda failure: failure.plant_id),
            created_tasks=sorted(self.created_tasks, key=lambda task: task.plant_id),
            triggered_at=self.triggered_at,
            completed_at=datetime.now(timezone.utc),
        )
