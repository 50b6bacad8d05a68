"""
Event management for decoupled battle systems.

The engine, the tournament and the managers never call each other for
bookkeeping; the engine publishes what happened and whoever cares subscribes
(publisher-subscriber). The queue is guarded by a re-entrant lock so fights
running on several threads can share one bus.
"""

import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import BattleEvent, EventType


class EventPriority(Enum):
    """Event processing priorities. Lower value is processed first."""
    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass
class QueuedEvent:
    """An event in the processing queue with metadata."""
    event: "BattleEvent"
    priority: EventPriority = EventPriority.NORMAL
    timestamp: datetime = field(default_factory=datetime.now)
    sequence: int = 0
    source: Optional[str] = None

    def __lt__(self, other: "QueuedEvent") -> bool:
        """Priority first, then publication order."""
        if self.priority.value != other.priority.value:
            return self.priority.value < other.priority.value
        return self.sequence < other.sequence


EventSubscriber = Callable[["BattleEvent"], None]


class EventManager:
    """Central event bus for battle system communication."""

    def __init__(self, enable_debug_logging: bool = False, history_size: int = 1000):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to report bus activity to the debug callback
            history_size: Number of processed events kept for inspection
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []

        self._event_queue: deque[QueuedEvent] = deque()
        self._event_history: deque[QueuedEvent] = deque(maxlen=history_size)

        self._events_published = 0
        self._events_processed = 0
        self._subscriber_errors = 0

        self._lock = threading.RLock()
        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback receiving bus diagnostics (e.g. ``print``)."""
        self._debug_callback = callback

    def _debug_log(self, message: str, force: bool = False) -> None:
        if self._debug_callback and (force or self.enable_debug_logging):
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to subscribe to
            subscriber: Callback function to handle events
            subscriber_name: Optional name for debugging
        """
        with self._lock:
            self._subscribers[event_type].append(subscriber)

        display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._debug_log(f"Subscribed {display} to {event_type.name} events")

    def subscribe_all(
        self,
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to every event type."""
        with self._lock:
            self._universal_subscribers.append(subscriber)

        display = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._debug_log(f"Subscribed {display} to ALL events")

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Unsubscribe from a specific event type.

        Returns:
            True if subscriber was found and removed
        """
        with self._lock:
            try:
                self._subscribers[event_type].remove(subscriber)
            except ValueError:
                return False
        self._debug_log(f"Unsubscribed from {event_type.name} events")
        return True

    def unsubscribe_all(self, subscriber: EventSubscriber) -> bool:
        """Remove a universal subscriber.

        Returns:
            True if subscriber was found and removed
        """
        with self._lock:
            try:
                self._universal_subscribers.remove(subscriber)
            except ValueError:
                return False
        return True

    def publish(
        self,
        event: "BattleEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event; subscribers see it on the next ``process_events``.

        Args:
            event: The event to publish
            priority: Processing priority for the event
            source: Optional source identifier for debugging
        """
        with self._lock:
            self._events_published += 1
            self._event_queue.append(
                QueuedEvent(
                    event=event,
                    priority=priority,
                    sequence=self._events_published,
                    source=source or "unknown",
                )
            )

        self._debug_log(
            f"Published {event.__class__.__name__} (priority: {priority.name}, source: {source})"
        )

    def publish_immediate(self, event: "BattleEvent", source: Optional[str] = None) -> None:
        """Publish and dispatch an event right away, bypassing the queue."""
        with self._lock:
            self._events_published += 1
            queued = QueuedEvent(
                event=event,
                priority=EventPriority.CRITICAL,
                sequence=self._events_published,
                source=source or "immediate",
            )
        self._process_event(queued)

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Dispatch queued events in priority order.

        Args:
            max_events: Maximum number of events to process (None for all)

        Returns:
            Number of events processed
        """
        with self._lock:
            pending = sorted(self._event_queue)
            self._event_queue.clear()

        if max_events is not None and max_events < len(pending):
            with self._lock:
                # Put the remainder back in front of anything published meanwhile
                self._event_queue.extendleft(reversed(pending[max_events:]))
            pending = pending[:max_events]

        for queued in pending:
            self._process_event(queued)

        return len(pending)

    def _process_event(self, queued: QueuedEvent) -> None:
        event = queued.event

        with self._lock:
            self._event_history.append(queued)
            self._events_processed += 1
            subscribers = list(self._subscribers.get(event.event_type, []))
            universal = list(self._universal_subscribers)

        self._debug_log(f"Processing {event.__class__.__name__} from {queued.source} (turn: {event.turn})")

        for subscriber in subscribers + universal:
            try:
                subscriber(event)
            except Exception as e:
                # One broken subscriber must not starve the others
                with self._lock:
                    self._subscriber_errors += 1
                self._debug_log(
                    f"Error in subscriber {getattr(subscriber, '__name__', 'anonymous')}: {e!r}",
                    force=True,
                )

    def clear_queue(self) -> int:
        """Drop all queued events.

        Returns:
            Number of events that were cleared
        """
        with self._lock:
            count = len(self._event_queue)
            self._event_queue.clear()
        self._debug_log(f"Cleared {count} queued events")
        return count

    def get_statistics(self) -> dict[str, Any]:
        """Get event processing statistics."""
        with self._lock:
            return {
                'events_published': self._events_published,
                'events_processed': self._events_processed,
                'events_queued': len(self._event_queue),
                'subscriber_errors': self._subscriber_errors,
                'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
                'universal_subscribers_count': len(self._universal_subscribers),
                'event_history_size': len(self._event_history),
            }

    def get_recent_events(self, count: int = 10) -> list[dict[str, Any]]:
        """Describe the most recently processed events."""
        with self._lock:
            recent = list(self._event_history)[-count:]

        return [
            {
                'event_type': queued.event.event_type.name,
                'turn': queued.event.turn,
                'priority': queued.priority.name,
                'source': queued.source,
                'timestamp': queued.timestamp.isoformat(),
            }
            for queued in recent
        ]

    def has_queued_events(self) -> bool:
        with self._lock:
            return len(self._event_queue) > 0

    def shutdown(self) -> None:
        """Drop all subscribers, queued events and history."""
        with self._lock:
            self._subscribers.clear()
            self._universal_subscribers.clear()
            self._event_queue.clear()
            self._event_history.clear()
