"""
Application Layer - Use cases, commands, and orchestration.

This layer contains:
- commands/: Individual write operations (CommitFileCommand)
- sync/: Sync engine, change detector, session and scheduler
- retry: Bounded backoff for transient remote errors
"""

from .retry import RetryPolicy
from .commands import Command, CommandResult, CommitFileCommand, commit_message
from .sync import Scheduler, SyncEngine, SyncSession, has_changed

__all__ = [
    "SyncEngine",
    "SyncSession",
    "Scheduler",
    "has_changed",
    "RetryPolicy",
    "Command",
    "CommandResult",
    "CommitFileCommand",
    "commit_message",
]
