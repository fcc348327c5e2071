# 📄 File: care_scheduler/modules/care_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the scheduler's core "things": tasks, plants, day keys and sweep records.
# 🧪 Purpose (Technical Summary):
# Re-exports the care management domain models.
# 🔗 Dependencies:
# day_key, task, plant, generation_batch
# 🔄 Connected Modules / Calls From:
# domain services, repositories, application handlers, presentation schemas

from care_scheduler.modules.care_management.domain.models.day_key import DayKey, DayRange
from care_scheduler.modules.care_management.domain.models.generation_batch import (
    GenerationBatch,
    GenerationBatchSummary,
    PartialSweepFailure,
    PlantFailure,
)
from care_scheduler.modules.care_management.domain.models.plant import Plant
from care_scheduler.modules.care_management.domain.models.task import (
    TASK_TYPE_STYLES,
    DotState,
    Task,
    TaskDraft,
    TaskFilter,
    TaskType,
    TaskTypeStyle,
)

__all__ = [
    "DayKey",
    "DayRange",
    "DotState",
    "GenerationBatch",
    "GenerationBatchSummary",
    "PartialSweepFailure",
    "Plant",
    "PlantFailure",
    "TASK_TYPE_STYLES",
    "Task",
    "TaskDraft",
    "TaskFilter",
    "TaskType",
    "TaskTypeStyle",
]
