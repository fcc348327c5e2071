# 📄 File: care_scheduler/modules/care_management/presentation/api/schemas/task_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines what the care task API accepts and sends back: new tasks, task
# lists for a day, the calendar dots and the auto-watering report.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the care task endpoints. Responses
# are built from domain entities with ``from_domain`` and carry the normalized
# day and the per-type presentation (icon, background) so clients never
# recompute days or styles.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - care_management.domain.models (Task, TaskType, DotState, summaries)
#
# 🔄 Connected Modules / Calls From:
# - care_management.presentation.api.v1.tasks
# - care_management.presentation.api.v1.plants

"""
Care Task API Schemas

Request Schemas:
- CreateTaskRequest: new task, optionally with future waterings
- CompleteTaskRequest: completion options

Response Schemas:
- TaskResponse: one task with its due day and type style
- DayTasksResponse / DayDotResponse: one calendar day
- CalendarMonthResponse: dots for every day of a month
- CreateTaskResponse / CompleteTaskResponse / DeleteTaskResponse: affected tasks
- SweepSummaryResponse: outcome of an auto-watering sweep
- TaskTypeStyleResponse: presentation of a task type
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from care_scheduler.modules.care_management.domain.models.day_key import DayKey
from care_scheduler.modules.care_management.domain.models.generation_batch import GenerationBatchSummary
from care_scheduler.modules.care_management.domain.models.task import (
    DotState,
    Task,
    TaskType,
    TaskTypeStyle,
)
from care_scheduler.modules.care_management.domain.services.date_normalizer import DateNormalizer


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class CreateTaskRequest(BaseModel):
    """Task creation request."""

    plant_id: int = Field(..., gt=0, description="Plant the task belongs to", examples=[12])
    type: TaskType = Field(..., description="Kind of care", examples=["water"])
    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="What needs doing",
        examples=["Water the monstera"],
    )
    due_date: Union[str, datetime, date] = Field(
        ...,
        description="Due date: YYYY-MM-DD or an ISO 8601 timestamp",
        examples=["2025-04-01"],
    )
    schedule_future: bool = Field(
        default=False,
        description="For watering tasks, also create the next scheduled waterings",
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description must not be blank")
        return v


class CompleteTaskRequest(BaseModel):
    """Task completion options."""

    schedule_future: bool = Field(
        default=False,
        description="For watering tasks, create the next scheduled waterings",
    )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class TaskTypeStyleResponse(BaseModel):
    """Presentation of one task type."""

    type: TaskType
    label: str
    icon: str
    background: str

    @classmethod
    def from_domain(cls, task_type: TaskType, style: TaskTypeStyle) -> "TaskTypeStyleResponse":
        return cls(type=task_type, label=style.label, icon=style.icon, background=style.background)


class TaskResponse(BaseModel):
    """One care task."""

    id: int
    plant_id: int
    type: TaskType
    description: str
    due_date: Optional[datetime] = None
    due_day: Optional[str] = Field(None, description="Normalized due day (YYYY-MM-DD)")
    completed: bool
    date_completed: Optional[datetime] = None
    icon: str
    background: str

    @classmethod
    def from_domain(cls, task: Task, normalizer: DateNormalizer) -> "TaskResponse":
        style = task.type.style
        return cls(
            id=task.id,
            plant_id=task.plant_id,
            type=task.type,
            description=task.description,
            due_date=task.due_date,
            due_day=normalizer.normalize_as_date_only(task.due_date) if task.due_date else None,
            completed=task.completed,
            date_completed=task.date_completed,
            icon=style.icon,
            background=style.background,
        )

    @classmethod
    def from_domain_list(cls, tasks: List[Task], normalizer: DateNormalizer) -> List["TaskResponse"]:
        return [cls.from_domain(task, normalizer) for task in tasks]


class TaskListResponse(BaseModel):
    """A list of tasks."""

    tasks: List[TaskResponse]
    total: int


class DayTasksResponse(BaseModel):
    """Tasks due on one day."""

    day: str = Field(..., description="Normalized day (YYYY-MM-DD)")
    tasks: List[TaskResponse]
    total: int


class DayDotResponse(BaseModel):
    """Calendar dot of one day."""

    day: str
    dot: DotState
    css_class: Optional[str] = None

    @classmethod
    def from_domain(cls, day: DayKey, dot: DotState) -> "DayDotResponse":
        return cls(day=day.isoformat(), dot=dot, css_class=dot.css_class)


class CalendarMonthResponse(BaseModel):
    """Calendar dots for every day of a month."""

    year: int
    month: int
    days: List[DayDotResponse]

    @classmethod
    def from_domain(cls, year: int, month: int, dots: Dict[DayKey, DotState]) -> "CalendarMonthResponse":
        return cls(
            year=year,
            month=month,
            days=[DayDotResponse.from_domain(day, dot) for day, dot in sorted(dots.items())],
        )


class CreateTaskResponse(BaseModel):
    """Created task and any scheduled future waterings."""

    created: TaskResponse
    recurrences: List[TaskResponse] = Field(default_factory=list)


class CompleteTaskResponse(BaseModel):
    """Completed task and any scheduled future waterings."""

    completed: TaskResponse
    recurrences: List[TaskResponse] = Field(default_factory=list)


class DeleteTaskResponse(BaseModel):
    """The task that was deleted."""

    deleted: TaskResponse


class PlantFailureResponse(BaseModel):
    plant_id: int
    error_code: str
    error_type: str
    message: str


class SweepSummaryResponse(BaseModel):
    """Outcome of an auto-watering sweep."""

    plants_considered: int
    tasks_created: int
    tasks_skipped: int
    plants_failed: int
    partial_failure: Optional[str] = Field(
        None, description="Set when some plants failed, e.g. '4 created, 1 failed'"
    )
    failures: List[PlantFailureResponse] = Field(default_factory=list)
    created_tasks: List[TaskResponse] = Field(default_factory=list)
    triggered_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, summary: GenerationBatchSummary, normalizer: DateNormalizer) -> "SweepSummaryResponse":
        partial = summary.partial_failure
        return cls(
            plants_considered=summary.plants_considered,
            tasks_created=summary.tasks_created,
            tasks_skipped=summary.tasks_skipped,
            plants_failed=summary.plants_failed,
            partial_failure=partial.message if partial is not None else None,
            failures=[PlantFailureResponse(**failure.model_dump()) for failure in summary.failures],
            created_tasks=TaskResponse.from_domain_list(summary.created_tasks, normalizer),
            triggered_at=summary.triggered_at,
            completed_at=summary.completed_at,
        )
