# 📄 File: care_scheduler/modules/care_management/domain/repositories/task_store.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for saving, finding, completing and deleting care tasks
# without saying which database is used underneath.
# 🧪 Purpose (Technical Summary):
# Task Store repository interface (create/find/complete/delete plus get by
# id) following the Repository pattern and dependency inversion principle.
# 🔗 Dependencies:
# Domain models (Task, TaskDraft, TaskFilter), typing, abc
# 🔄 Connected Modules / Calls From:
# recurrence_generator.py, command/query handlers, SQLAlchemy task store,
# in-memory test fakes

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from ..models.task import Task, TaskDraft, TaskFilter

# Decides from a plant's current tasks which task to create; None creates nothing
TaskPlan = Callable[[List[Task]], Optional[TaskDraft]]


class TaskStore(ABC):
    """
    Repository interface for care tasks.

    Implementation Notes:
    - Methods return domain entities (Task), not database models
    - Each write is atomic: a created task is either fully stored or absent
    - Missing tasks raise TaskNotFoundError
    """

    @abstractmethod
    async def create_task(self, draft: TaskDraft) -> Task:
        """
        Create a new task.

        Args:
            draft: Task creation request

        Returns:
            Created Task with its assigned id

        Raises:
            RepositoryError: If the write fails
        """
        pass

    @abstractmethod
    async def find_tasks(self, task_filter: TaskFilter) -> List[Task]:
        """
        Find tasks matching a filter, ordered by due date then id.

        Args:
            task_filter: Criteria; unset fields match everything

        Returns:
            List of matching tasks (possibly empty)
        """
        pass

    @abstractmethod
    async def get_task(self, task_id: int) -> Task:
        """
        Get one task.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        pass

    @abstractmethod
    async def create_task_guarded(self, plant_id: int, plan: TaskPlan) -> Optional[Task]:
        """
        Create at most one task for a plant, decided under a per-plant lock.

        The plant's tasks are loaded and ``plan`` is called with them while a
        lock on the plant is held, so check-then-create sequences of concurrent
        callers, in this process or another one, never interleave.

        Args:
            plant_id: Plant whose tasks are inspected and locked
            plan: Returns the draft to create, or None to create nothing

        Returns:
            The created task, or None when ``plan`` declined

        Raises:
            PlantNotFoundError: If the plant does not exist
            RepositoryError: If the write fails
        """
        pass

    @abstractmethod
    async def complete_task(self, task_id: int) -> Tuple[Task, bool]:
        """
        Mark a task completed and stamp its completion time.

        Completing an already completed task returns it unchanged. Check and
        write are atomic: of concurrent completions of one task, exactly one
        reports the transition.

        Returns:
            The task, and whether this call moved it from pending to completed

        Raises:
            TaskNotFoundError: If no task has this id
        """
        pass

    @abstractmethod
    async def delete_task(self, task_id: int) -> None:
        """
        Permanently delete a task.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        pass
