"""
Domain Events - Things that happened during a sync.

Events are immutable records of something that occurred.
They are how callers (notifications, logs) observe a pass.
"""

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class PassStarted(DomainEvent):
    """Event: A sync pass started."""

    repository: str = ""
    branch: str = ""
    device_name: str = ""


@dataclass(frozen=True)
class FileCommitted(DomainEvent):
    """Event: A file was written to the remote."""

    path: str = ""
    version_marker: str = ""


@dataclass(frozen=True)
class FileSkipped(DomainEvent):
    """Event: A file matched the remote and was not written."""

    path: str = ""
    reason: str = "unchanged"


@dataclass(frozen=True)
class FileFailed(DomainEvent):
    """Event: A file could not be synced."""

    path: str = ""
    error_kind: str = ""
    reason: str = ""
    message: str = ""


@dataclass(frozen=True)
class PassCompleted(DomainEvent):
    """Event: A sync pass finished."""

    repository: str = ""
    branch: str = ""
    committed: int = 0
    skipped: int = 0
    failed: int = 0
    errors: tuple = ()


@dataclass(frozen=True)
class PassAborted(DomainEvent):
    """Event: A sync pass stopped before any file was handled."""

    reason: str = ""


@dataclass(frozen=True)
class TickSkipped(DomainEvent):
    """Event: A scheduled tick was dropped."""

    reason: str = "busy"


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    Subscribing to DomainEvent receives every event. Only the most recent
    max_history events are kept, so a long-running watch stays bounded.
    """

    DEFAULT_MAX_HISTORY = 1000

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY):
        self._handlers: dict[type, list[Callable]] = {}
        self._history: deque[DomainEvent] = deque(maxlen=max_history)
        self._lock = threading.Lock()

    def subscribe(self, event_type: type, handler: Callable) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        with self._lock:
            self._history.append(event)

        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Catch-all handlers
        if type(event) is not DomainEvent:
            for handler in self._handlers.get(DomainEvent, []):
                handler(event)

    def get_history(self, event_type: Optional[type] = None) -> list[DomainEvent]:
        """Get published events, optionally only those of one type."""
        with self._lock:
            history = list(self._history)
        if event_type is None:
            return history
        return [e for e in history if isinstance(e, event_type)]

    def clear_history(self) -> None:
        """Clear event history."""
        with self._lock:
            self._history.clear()
