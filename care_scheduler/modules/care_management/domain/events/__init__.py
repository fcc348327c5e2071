"""Domain events emitted by the care management module."""

from .task_events import TaskCompleted, TaskCreated, WateringSweepCompleted

__all__ = ["TaskCompleted", "TaskCreated", "WateringSweepCompleted"]
