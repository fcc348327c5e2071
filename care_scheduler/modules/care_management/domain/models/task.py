# 📄 File: care_scheduler/modules/care_management/domain/models/task.py
# 🧭 Purpose (Layman Explanation):
# Defines what a care task is (water the fern on Tuesday, repot the cactus
# next month), the five kinds of care the app knows about, and how each kind
# is shown on the calendar.
# 🧪 Purpose (Technical Summary):
# Domain models for the Task aggregate: closed TaskType enum with exhaustive
# presentation/urgency tables, Task entity with monotonic completion,
# TaskDraft creation request, TaskFilter query object and DotState summary.
# 🔗 Dependencies:
# pydantic, datetime, typing, enum, day_key
# 🔄 Connected Modules / Calls From:
# task_store.py, task_matcher.py, recurrence_generator.py, command/query
# handlers, SQLAlchemy task store, API schemas

from datetime import datetime
from enum import Enum
from typing import Callable, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from care_scheduler.modules.care_management.domain.models.day_key import DayKey, DayRange


class TaskType(str, Enum):
    """Kinds of plant care a task can represent."""
    WATER = "water"
    FERTILIZE = "fertilize"
    REPOT = "repot"
    LIGHT = "light"
    OTHER = "other"

    @property
    def style(self) -> "TaskTypeStyle":
        return TASK_TYPE_STYLES[self]

    @property
    def is_urgent_when_pending(self) -> bool:
        """Whether an unfinished task of this type marks its day as urgent."""
        return self in URGENT_TASK_TYPES


class DotState(str, Enum):
    """Calendar-cell summary for one day."""
    NONE = "none"
    NORMAL = "normal"
    URGENT = "urgent"

    @property
    def css_class(self) -> Optional[str]:
        return DOT_CSS_CLASSES[self]


class TaskTypeStyle(BaseModel):
    """How a task type is presented on lists and the calendar."""

    model_config = ConfigDict(frozen=True)

    label: str
    icon: str
    background: str


# =============================================================================
# EXHAUSTIVE TYPE TABLES
# =============================================================================

TASK_TYPE_STYLES: Dict[TaskType, TaskTypeStyle] = {
    TaskType.WATER: TaskTypeStyle(label="Watering", icon="opacity", background="bg-blue-100"),
    TaskType.FERTILIZE: TaskTypeStyle(label="Fertilizing", icon="spa", background="bg-green-100"),
    TaskType.REPOT: TaskTypeStyle(label="Repotting", icon="yard", background="bg-amber-100"),
    TaskType.LIGHT: TaskTypeStyle(label="Light / move", icon="wb_sunny", background="bg-yellow-100"),
    TaskType.OTHER: TaskTypeStyle(label="Other care", icon="eco", background="bg-gray-100"),
}

URGENT_TASK_TYPES: FrozenSet[TaskType] = frozenset({TaskType.WATER})

DOT_CSS_CLASSES: Dict[DotState, Optional[str]] = {
    DotState.NONE: None,
    DotState.NORMAL: "bg-primary",
    DotState.URGENT: "bg-alert",
}

for _table_name, _table, _enum in (
    ("TASK_TYPE_STYLES", TASK_TYPE_STYLES, TaskType),
    ("DOT_CSS_CLASSES", DOT_CSS_CLASSES, DotState),
):
    _missing = set(_enum) - set(_table)
    if _missing:
        raise RuntimeError(f"{_table_name} does not cover {sorted(m.value for m in _missing)}")


# =============================================================================
# ENTITIES
# =============================================================================

class Task(BaseModel):
    """
    One unit of plant care.

    Only the calendar day of ``due_date`` matters for matching. Completion is
    monotonic: a completed task never becomes pending again.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., description="Identifier assigned by the task store")
    plant_id: int = Field(..., description="Plant this task belongs to")
    type: TaskType
    description: str
    due_date: Optional[datetime] = None
    completed: bool = False
    date_completed: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return not self.completed

    @property
    def is_urgent(self) -> bool:
        return self.is_pending and self.type.is_urgent_when_pending

    def mark_completed(self, completed_at: datetime) -> "Task":
        """Return the completed version of this task (unchanged if already completed)."""
        if self.completed:
            return self
        return self.model_copy(update={"completed": True, "date_completed": completed_at})


class TaskDraft(BaseModel):
    """A request to create a task; the store assigns the id."""

    plant_id: int = Field(..., gt=0)
    type: TaskType
    description: str = Field(..., min_length=1, max_length=500)
    due_date: datetime
    completed: bool = False

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description must not be blank")
        return v


class TaskFilter(BaseModel):
    """
    Criteria for TaskStore.find_tasks. Unset criteria match everything.

    ``due_date_range`` selects tasks whose due day lies in the half-open
    range; tasks without a due date never match a range.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    plant_id: Optional[int] = None
    type: Optional[TaskType] = None
    completed: Optional[bool] = None
    due_date_range: Optional[DayRange] = None

    def matches(self, task: Task, day_of: Callable[[datetime], DayKey]) -> bool:
        """
        Evaluate the filter against one task in memory.

        Args:
            task: Task to test
            day_of: Function turning a due datetime into its DayKey
        """
        if self.plant_id is not None and task.plant_id != self.plant_id:
            return False
        if self.type is not None and task.type != self.type:
            return False
        if self.completed is not None and task.completed != self.completed:
            return False
        if self.due_date_range is not None:
            if task.due_date is None:
                return False
            return day_of(task.due_date) in self.due_date_range
        return True
