"""
Core package for the care scheduler.
Provides the exception hierarchy shared by every layer.
"""

from .exceptions import (
    PlantCareException,
    ValidationError,
    InvalidDateError,
    NotFoundError,
    PlantNotFoundError,
    TaskNotFoundError,
    BusinessRuleViolationError,
    CareScheduleError,
    DatabaseError,
    RepositoryError,
    TransactionError,
    describe_exception,
)

__all__ = [
    "PlantCareException",
    "ValidationError",
    "InvalidDateError",
    "NotFoundError",
    "PlantNotFoundError",
    "TaskNotFoundError",
    "BusinessRuleViolationError",
    "CareScheduleError",
    "DatabaseError",
    "RepositoryError",
    "TransactionError",
    "describe_exception",
]
