# 📄 File: care_scheduler/shared/events/base.py

# 🧭 Purpose (Layman Explanation):
# Defines the basic building blocks for events - templates that say what
# information an event carries when something important happens.

# 🧪 Purpose (Technical Summary):
# Base event classes and interfaces for domain events, providing structure for
# event data, metadata, and handler contracts.

# 🔗 Dependencies:
# - uuid: Event unique identifiers
# - datetime: Event timestamps
# - dataclasses: Event metadata structure

# 🔄 Connected Modules / Calls From:
# Used by: care_management.domain.events, EventPublisher, event subscribers

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4


@dataclass
class EventMetadata:
    """
    Metadata for domain events.

    Contains common information about event tracking.
    """
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = "1.0"
    source: str = "care-scheduler"
    correlation_id: Optional[str] = None
    request_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to dictionary."""
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data


class DomainEvent(ABC):
    """
    Base class for all domain events.

    Provides common structure and functionality for events
    throughout the scheduler.
    """

    def __init__(
        self,
        event_type: str,
        data: Dict[str, Any],
        metadata: Optional[EventMetadata] = None,
        **kwargs
    ):
        """
        Initialize domain event.

        Args:
            event_type: Type identifier for the event
            data: Event payload data
            metadata: Event metadata
            **kwargs: Additional metadata fields
        """
        self.event_type = event_type
        self.data = data or {}

        if metadata is None:
            metadata = EventMetadata()

        for key, value in kwargs.items():
            if hasattr(metadata, key):
                setattr(metadata, key, value)

        self.metadata = metadata

        self._validate()

    def _validate(self):
        """Validate event structure and data."""
        if not self.event_type:
            raise ValueError("Event type is required")

        if not isinstance(self.data, dict):
            raise ValueError("Event data must be a dictionary")

        self._validate_event_data()

    @abstractmethod
    def _validate_event_data(self):
        """Validate event-specific data. Override in subclasses."""
        pass

    @property
    def event_id(self) -> str:
        return self.metadata.event_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary representation."""
        return {
            'event_type': self.event_type,
            'data': self.data,
            'metadata': self.metadata.to_dict()
        }

    def to_json(self) -> str:
        """Convert event to JSON string."""
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)

    def __str__(self) -> str:
        return f"{self.event_type}({self.metadata.event_id})"


class EventHandler(ABC):
    """
    Abstract base class for event subscribers.
    """

    @property
    @abstractmethod
    def event_types(self) -> list:
        """Event types this handler processes."""
        pass

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle the domain event.

        Args:
            event: Domain event to handle
        """
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can process the event."""
        return event.event_type in self.event_types
