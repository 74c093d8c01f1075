"""
Domain - Entities, enums and events.
"""

from .enums import ErrorKind, FailureReason, OutcomeStatus, SkipReason
from .entities import FileSnapshot, PassResult, RemoteFileState, SyncOutcome
from .events import (
    DomainEvent,
    EventBus,
    FileCommitted,
    FileFailed,
    FileSkipped,
    PassAborted,
    PassCompleted,
    PassStarted,
    TickSkipped,
)

__all__ = [
    "ErrorKind",
    "FailureReason",
    "OutcomeStatus",
    "SkipReason",
    "FileSnapshot",
    "PassResult",
    "RemoteFileState",
    "SyncOutcome",
    # Events
    "DomainEvent",
    "EventBus",
    "FileCommitted",
    "FileFailed",
    "FileSkipped",
    "PassAborted",
    "PassCompleted",
    "PassStarted",
    "TickSkipped",
]
