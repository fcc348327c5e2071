# 📄 File: care_scheduler/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Defines the special error types the scheduler uses to say clearly what went
# wrong (a date that makes no sense, a plant or task that does not exist, a
# database hiccup) instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and proper serialization for API responses and error handling.
# 🔗 Dependencies:
# FastAPI HTTPException, typing, HTTP status constants
# 🔄 Connected Modules / Calls From:
# Date normalizer, task store implementations, command/query handlers,
# API exception handlers, Celery sweep task

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class PlantCareException(Exception):
    """
    Base exception class for the care scheduler.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=self.status_code,
            detail=self.to_dict()["error"]
        )


# =============================================================================
# VALIDATION & DATA EXCEPTIONS
# =============================================================================

class ValidationError(PlantCareException):
    """
    Exception raised for data validation failures.
    Used when input data doesn't meet validation requirements.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR"
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code=error_code
        )


class InvalidDateError(ValidationError):
    """
    Exception raised when a value cannot be parsed as a calendar date.
    Raised by the date normalizer; callers decide whether to skip or report.
    """

    def __init__(
        self,
        value: Any,
        field: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"Invalid date: {value!r}"

        self.value = value
        super().__init__(
            message=message,
            field=field,
            value=value,
            constraint="ISO 8601 date (YYYY-MM-DD) or timestamp",
            error_code="INVALID_DATE"
        )


class NotFoundError(PlantCareException):
    """
    Exception raised when requested resource is not found.
    Used for missing entities, files, endpoints, etc.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class PlantNotFoundError(NotFoundError):
    """
    Exception raised when plant is not found.
    Specialized NotFoundError for plant resources.
    """

    def __init__(
        self,
        plant_id: int,
        message: Optional[str] = None
    ):
        if not message:
            message = f"Plant not found: {plant_id}"

        self.plant_id = plant_id
        super().__init__(
            message=message,
            resource_type="plant",
            resource_id=str(plant_id),
            details={"plant_id": plant_id}
        )


class TaskNotFoundError(NotFoundError):
    """Specialized NotFoundError for care tasks."""

    def __init__(
        self,
        task_id: int,
        message: Optional[str] = None
    ):
        if not message:
            message = f"Task not found: {task_id}"

        self.task_id = task_id
        super().__init__(
            message=message,
            resource_type="task",
            resource_id=str(task_id),
            details={"task_id": task_id}
        )


# =============================================================================
# BUSINESS LOGIC EXCEPTIONS
# =============================================================================

class BusinessRuleViolationError(PlantCareException):
    """
    Exception raised when business rules are violated.
    Used for domain-specific rule enforcement.
    """

    def __init__(
        self,
        message: str = "Business rule violation",
        rule: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if rule:
            details["rule"] = rule
        if context:
            details["context"] = context

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="BUSINESS_RULE_VIOLATION"
        )


class CareScheduleError(BusinessRuleViolationError):
    """
    Exception raised for care schedule violations.
    Used when a recurrence cannot be computed (no frequency, no due date).
    """

    def __init__(
        self,
        message: str = "Care schedule error",
        plant_id: Optional[int] = None,
        task_id: Optional[int] = None,
        conflict: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if plant_id is not None:
            details["plant_id"] = plant_id
        if task_id is not None:
            details["task_id"] = task_id
        if conflict:
            details["conflict"] = conflict

        super().__init__(
            message=message,
            rule="care_schedule_validation",
            context=dict(details),
            details=details
        )


# =============================================================================
# PERSISTENCE EXCEPTIONS
# =============================================================================

class DatabaseError(PlantCareException):
    """
    Exception raised for database operation failures.
    Used for connection issues, query failures, etc.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )


class RepositoryError(PlantCareException):
    """
    Exception raised for repository/database operation failures.
    Used when database operations fail at the repository layer.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: Optional[str] = None,
        entity: Optional[str] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="REPOSITORY_ERROR"
        )


class TransactionError(PlantCareException):
    """
    Exception raised when a database transaction fails.
    Used to wrap commit/rollback errors in DB sessions.
    """

    def __init__(
        self,
        message: str = "Database transaction failed",
        operation: Optional[str] = None,
        entity: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if entity:
            details["entity"] = entity

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="TRANSACTION_ERROR"
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def describe_exception(exc: Exception) -> Dict[str, Any]:
    """
    Summarize any exception as a plain dictionary.

    Used where failures are collected rather than raised, such as the
    per-plant failures of the auto-watering sweep.

    Args:
        exc: Exception to describe

    Returns:
        Dict with error code, type and message
    """
    if isinstance(exc, PlantCareException):
        return {
            "error_code": exc.error_code,
            "error_type": type(exc).__name__,
            "message": exc.message,
        }
    return {
        "error_code": "UNEXPECTED_ERROR",
        "error_type": type(exc).__name__,
        "message": str(exc),
    }
