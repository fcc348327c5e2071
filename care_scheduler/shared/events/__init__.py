# 📄 File: care_scheduler/shared/events/__init__.py

# 🧭 Purpose (Layman Explanation):
# The announcement system of the scheduler: when something happens (a task is
# completed, a sweep finishes) other parts of the app can be told about it.

# 🧪 Purpose (Technical Summary):
# Domain event base classes and the in-process event publisher.

# 🔗 Dependencies:
# - care_scheduler.shared.events.base, publisher

# 🔄 Connected Modules / Calls From:
# care_management domain events, command handlers, main.py wiring

from care_scheduler.shared.events.base import DomainEvent, EventHandler, EventMetadata
from care_scheduler.shared.events.publisher import (
    EventPublisher,
    get_event_publisher,
    reset_event_publisher,
)

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventMetadata",
    "EventPublisher",
    "get_event_publisher",
    "reset_event_publisher",
]
