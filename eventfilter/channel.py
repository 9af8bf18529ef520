import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .otel.metrics import FilterMetricsCollector

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass
class Event:
    """
    Standard event structure for the channel.

    All events flowing through the channel use this structure.
    """

    event_id: str
    event_type: str
    source: str
    timestamp: datetime
    data: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        event_type: str,
        source: str,
        data: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> "Event":
        """Build an event with a fresh id and the current timestamp."""
        return cls(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            source=source,
            timestamp=datetime.now(),
            data=data or {},
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
            "metadata": self.metadata,
            "correlation_id": self.correlation_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Deserialize event from dictionary."""
        return cls(
            event_id=data["event_id"],
            event_type=data["event_type"],
            source=data["source"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            data=data.get("data", {}),
            metadata=data.get("metadata", {}),
            correlation_id=data.get("correlation_id"),
        )


class ChannelDelegate(Protocol):
    def should_filter(self, event: Event) -> bool: ...


class EventChannel:
    """
    Synchronous in-process event channel.

    Before an event is dispatched every registered delegate is asked whether
    the event should be filtered out. Events that survive are handed to the
    subscribers of their event type and to wildcard subscribers.
    """

    def __init__(self, metrics: Optional["FilterMetricsCollector"] = None):
        self._delegates: List[ChannelDelegate] = []
        self._subscribers: Dict[str, List[Callable[[Event], Any]]] = {}
        self._wildcard_subscribers: List[Callable[[Event], Any]] = []
        self._lock = threading.Lock()
        self.metrics = metrics

    def add_delegate(self, delegate: ChannelDelegate) -> None:
        with self._lock:
            if delegate in self._delegates:
                return
            self._delegates.append(delegate)
        logger.debug(f"Added channel delegate {delegate!r}")

    def remove_delegate(self, delegate: ChannelDelegate) -> None:
        with self._lock:
            if delegate in self._delegates:
                self._delegates.remove(delegate)
        logger.debug(f"Removed channel delegate {delegate!r}")

    def has_delegate(self, delegate: ChannelDelegate) -> bool:
        with self._lock:
            return delegate in self._delegates

    def subscribe(self, event_type: str, callback: Callable[[Event], Any]) -> None:
        """Subscribe to an event type, or to all of them with ``*``."""
        with self._lock:
            if event_type == WILDCARD:
                self._wildcard_subscribers.append(callback)
            else:
                self._subscribers.setdefault(event_type, []).append(callback)
        logger.info(f"Subscribed to event type: {event_type}")

    def unsubscribe(self, event_type: str, callback: Callable[[Event], Any]) -> None:
        with self._lock:
            if event_type == WILDCARD:
                self._wildcard_subscribers.remove(callback)
            elif event_type in self._subscribers:
                self._subscribers[event_type].remove(callback)
        logger.info(f"Unsubscribed from event type: {event_type}")

    def enqueue(self, event: Event) -> bool:
        """
        Offer an event to the channel.

        Returns:
            False if a delegate filtered the event out, True if it was dispatched.
        """
        with self._lock:
            delegates = list(self._delegates)
            callbacks = list(self._subscribers.get(event.event_type, []))
            callbacks.extend(self._wildcard_subscribers)

        for delegate in delegates:
            if delegate.should_filter(event):
                logger.debug(
                    f"Event {event.event_id} of type {event.event_type} filtered out"
                )
                if self.metrics:
                    self.metrics.increment_events_suppressed(event.event_type)
                return False

        for callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Error in subscriber callback: {e}")

        if self.metrics:
            self.metrics.increment_events_delivered(event.event_type)
        return True
