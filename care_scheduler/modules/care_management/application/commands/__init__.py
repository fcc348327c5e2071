"""Commands (write operations) of the care management module."""

from .complete_task import CompleteTaskCommand
from .create_task import CreateTaskCommand
from .delete_task import DeleteTaskCommand
from .run_auto_watering_sweep import RunAutoWateringSweepCommand, SweepTrigger

__all__ = [
    "CompleteTaskCommand",
    "CreateTaskCommand",
    "DeleteTaskCommand",
    "RunAutoWateringSweepCommand",
    "SweepTrigger",
]
