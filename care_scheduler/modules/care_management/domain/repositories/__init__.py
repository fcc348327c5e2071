"""Repository interfaces consumed by the care management domain."""

from .plant_directory import PlantDirectory
from .task_store import TaskPlan, TaskStore

__all__ = ["PlantDirectory", "TaskPlan", "TaskStore"]
