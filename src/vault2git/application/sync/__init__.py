"""
Sync Module - One pass of vault files against the remote, and its schedule.
"""

from .detector import has_changed
from .engine import SyncEngine, classify_error
from .scheduler import Scheduler
from .session import SyncSession

__all__ = [
    "SyncEngine",
    "SyncSession",
    "Scheduler",
    "has_changed",
    "classify_error",
]
