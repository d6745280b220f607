"""
SheetNest - Event Bus
=====================
Event bus for nesting diagnostics.

A bus is created per nesting request and passed down to the grouper and
the packer, so parallel requests never share handlers or counters.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Nesting event types"""

    # ========== Drawing Events ==========
    DRAWING_PARSED = "drawing.parsed"
    DRAWING_UNREADABLE = "drawing.unreadable"

    # ========== Grouping Events ==========
    ENTITY_SKIPPED = "grouping.entity_skipped"
    GROUP_CREATED = "grouping.group_created"

    # ========== Packing Events ==========
    GROUP_PLACED = "packing.group_placed"
    GROUP_OMITTED = "packing.group_omitted"
    STRATEGY_COMPLETED = "packing.strategy_completed"


@dataclass
class Event:
    """
    Event emitted during a nesting request.

    Attributes:
        type: Event type
        data: Event payload
        timestamp: Time of emission
        source: Emitting module
    """
    type: EventType
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.now)
    source: Optional[str] = None


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Synchronous event bus.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.GROUP_OMITTED, handle_omitted)
        results = calculate_nesting(text, 2.0, observer=bus)
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe a handler to one event type"""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"[EventBus] Subscribed handler to {event_type.value}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe a handler to every event"""
        self._global_handlers.append(handler)

    def publish(self, event: Event) -> None:
        """
        Publish an event.

        Handlers run synchronously in subscription order. An error in one
        handler does not block the others.
        """
        for handler in self._handlers.get(event.type, []) + self._global_handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"[EventBus] Handler error for {event.type.value}: {e}",
                    exc_info=True
                )

    def emit(self, event_type: EventType, source: str = None, **data) -> None:
        """Build and publish an event"""
        self.publish(Event(type=event_type, data=data, source=source))


class EventRecorder:
    """Handler that keeps every received event, with per-type counts"""

    def __init__(self):
        self.events: List[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> List[Event]:
        return [e for e in self.events if e.type == event_type]

    def count(self, event_type: EventType) -> int:
        return len(self.of_type(event_type))


def emit(observer: Optional[EventBus], event_type: EventType,
         source: str = None, **data) -> None:
    """Publish on an optional observer"""
    if observer is not None:
        observer.emit(event_type, source=source, **data)


def logging_handler(event: Event) -> None:
    """Handler logging every event"""
    logger.info(f"[EVENT] {event.type.value} | Data: {event.data}")


def setup_event_logging(bus: EventBus) -> EventBus:
    """Log every event published on the bus"""
    bus.subscribe_all(logging_handler)
    return bus
