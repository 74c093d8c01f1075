"""
File Commands - Commit a single file to the remote repository.
"""

import logging
from pathlib import PurePosixPath
from typing import Optional

from ...core.ports.remote_repository import RemoteRepositoryError, RemoteRepositoryPort
from ..retry import RetryPolicy
from .base import Command, CommandResult


def commit_message(device_name: str, path: str) -> str:
    """Commit message for an updated file: '<device>: Updated <file name>'."""
    return f"{device_name}: Updated {PurePosixPath(path).name}"


class CommitFileCommand(Command):
    """
    Write one file with optimistic concurrency.

    Every attempt sends the same content and the same expected version, so
    a retry can never overwrite a remote change made after the read.
    """

    def __init__(
        self,
        remote: RemoteRepositoryPort,
        repository: str,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        expected_version: Optional[str] = None,
        retry: Optional[RetryPolicy] = None,
    ):
        self.remote = remote
        self.repository = repository
        self.branch = branch
        self.path = path
        self.content = content
        self.message = message
        self.expected_version = expected_version
        self.retry = retry or RetryPolicy()
        self.logger = logging.getLogger("CommitFileCommand")
        self._attempts = 0

    @property
    def name(self) -> str:
        return f"Commit {self.path}"

    def validate(self) -> Optional[str]:
        if not self.repository:
            return "Repository is required"
        if not self.branch:
            return "Branch is required"
        if not self.path or self.path.startswith("/"):
            return f"Invalid path: {self.path!r}"
        if not self.message:
            return "Commit message is required"
        return None

    def _write(self) -> str:
        self._attempts += 1
        return self.remote.write_file(
            self.repository,
            self.branch,
            self.path,
            self.content,
            self.message,
            expected_version=self.expected_version,
        )

    def _execute(self) -> CommandResult:
        try:
            marker = self.retry.call(self._write)
        except RemoteRepositoryError as e:
            self.logger.error(f"Failed to commit {self.path}: {e}")
            return CommandResult.fail(str(e), exception=e, attempts=self._attempts)

        self.logger.info(f"Committed {self.path} ({marker})")
        return CommandResult.ok(marker, attempts=self._attempts)
