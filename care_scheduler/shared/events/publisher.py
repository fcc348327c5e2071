# 📄 File: care_scheduler/shared/events/publisher.py

# 🧭 Purpose (Layman Explanation):
# The town crier of the scheduler: when a task is completed or a sweep
# finishes, it tells every part of the app that asked to be notified, without
# letting a listener's mistake break the action that caused the news.

# 🧪 Purpose (Technical Summary):
# In-process asynchronous event publisher. Subscribers register per event type
# (EventHandler objects or plain async callables); publish() dispatches to all
# matching subscribers, logs subscriber failures instead of propagating them,
# and keeps a bounded history plus counters for diagnostics.

# 🔗 Dependencies:
# - asyncio: subscriber dispatch
# - care_scheduler.shared.events.base: DomainEvent, EventHandler
# - care_scheduler.shared.utils.logging: structured logger

# 🔄 Connected Modules / Calls From:
# Command handlers (TaskCompleted, TaskCreated), recurrence generator
# (WateringSweepCompleted), presentation dependencies, tests

import asyncio
from collections import defaultdict, deque
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Union

from care_scheduler.shared.events.base import DomainEvent, EventHandler
from care_scheduler.shared.utils.logging import get_logger

logger = get_logger(__name__)

Subscriber = Union[EventHandler, Callable[[DomainEvent], Awaitable[None]]]


class EventPublisher:
    """
    Dispatches domain events to in-process subscribers.

    Publishing is fire-and-forget from the caller's point of view: a failing
    subscriber is logged and counted, never raised to the publisher.
    """

    def __init__(self, history_size: int = 100):
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)
        self._history: Deque[DomainEvent] = deque(maxlen=history_size)
        self._stats = {
            'events_published': 0,
            'handler_calls': 0,
            'handler_failures': 0,
        }

    def subscribe(self, event_type: str, subscriber: Subscriber) -> None:
        """Register a subscriber for one event type ('*' for all)."""
        if subscriber not in self._subscribers[event_type]:
            self._subscribers[event_type].append(subscriber)
            logger.debug(f"Subscribed {subscriber!r} to {event_type}")

    def register_handler(self, handler: EventHandler) -> None:
        """Register an EventHandler for every type it declares."""
        for event_type in handler.event_types:
            self.subscribe(event_type, handler)

    def unsubscribe(self, event_type: str, subscriber: Subscriber) -> None:
        if subscriber in self._subscribers.get(event_type, []):
            self._subscribers[event_type].remove(subscriber)

    async def publish(self, event: DomainEvent) -> str:
        """
        Publish an event to its subscribers.

        Args:
            event: Domain event to publish

        Returns:
            str: the event id
        """
        self._history.append(event)
        self._stats['events_published'] += 1

        subscribers = list(self._subscribers.get(event.event_type, []))
        subscribers.extend(self._subscribers.get('*', []))

        if subscribers:
            await asyncio.gather(
                *(self._execute_subscriber(subscriber, event) for subscriber in subscribers)
            )

        logger.debug(
            f"Published {event}",
            extra={'event_type': event.event_type, 'subscribers': len(subscribers)}
        )
        return event.event_id

    async def publish_many(self, events: List[DomainEvent]) -> List[str]:
        return [await self.publish(event) for event in events]

    async def _execute_subscriber(self, subscriber: Subscriber, event: DomainEvent) -> None:
        self._stats['handler_calls'] += 1
        try:
            if isinstance(subscriber, EventHandler):
                if subscriber.can_handle(event):
                    await subscriber.handle(event)
            else:
                await subscriber(event)
        except Exception as e:
            self._stats['handler_failures'] += 1
            logger.error(
                f"Event subscriber failed for {event}: {e}",
                extra={'event_type': event.event_type, 'event_id': event.event_id},
                exc_info=True
            )

    def get_history(self, event_type: Optional[str] = None) -> List[DomainEvent]:
        """Recently published events, oldest first."""
        if event_type is None:
            return list(self._history)
        return [event for event in self._history if event.event_type == event_type]

    def get_stats(self) -> Dict[str, Any]:
        return {
            **self._stats,
            'subscribed_event_types': sorted(self._subscribers.keys()),
        }


# Global publisher instance
_event_publisher: Optional[EventPublisher] = None


def get_event_publisher() -> EventPublisher:
    """Get the process-wide event publisher."""
    global _event_publisher
    if _event_publisher is None:
        _event_publisher = EventPublisher()
    return _event_publisher


def reset_event_publisher() -> None:
    """Drop the process-wide publisher (used between tests)."""
    global _event_publisher
    _event_publisher = None
