"""
Commands - Individual write operations.

Commands wrap a remote write so it can be validated, retried and
reported uniformly.
"""

from .base import Command, CommandResult
from .file_commands import CommitFileCommand, commit_message

__all__ = [
    "Command",
    "CommandResult",
    "CommitFileCommand",
    "commit_message",
]
