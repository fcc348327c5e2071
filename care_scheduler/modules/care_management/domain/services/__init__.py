"""Domain services: date normalization, task matching and recurrence generation."""

from .date_normalizer import DateLike, DateNormalizer
from .recurrence_generator import PlantLockRegistry, RecurrenceGenerator, plant_locks
from .task_matcher import ORDER_BY_DUE_TIME, TaskMatcher

__all__ = [
    "DateLike",
    "DateNormalizer",
    "ORDER_BY_DUE_TIME",
    "PlantLockRegistry",
    "RecurrenceGenerator",
    "TaskMatcher",
    "plant_locks",
]
