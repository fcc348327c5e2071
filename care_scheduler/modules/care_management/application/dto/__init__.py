"""Result objects returned by command handlers."""

from .task_results import CompleteTaskResult, CreateTaskResult, DeleteTaskResult

__all__ = ["CompleteTaskResult", "CreateTaskResult", "DeleteTaskResult"]
