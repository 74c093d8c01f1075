"""
Domain Entities - Files, remote state and per-file sync outcomes.

Optional values are modeled as None rather than empty strings so that an
empty file (content=b"") is never confused with a missing one.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePosixPath
from typing import Iterator, Optional

from .enums import ErrorKind, FailureReason, OutcomeStatus, SkipReason


@dataclass(frozen=True)
class FileSnapshot:
    """A local file as read at the start of its handling in a pass."""

    path: str
    content: bytes
    modified: Optional[datetime] = None

    @property
    def name(self) -> str:
        """Last segment of the path (the file name)."""
        return PurePosixPath(self.path).name

    @property
    def is_hidden(self) -> bool:
        """True if any path segment starts with a dot (e.g. .obsidian/)."""
        return any(part.startswith(".") for part in PurePosixPath(self.path).parts)


@dataclass(frozen=True)
class RemoteFileState:
    """The remote copy of a file, or its absence."""

    content: Optional[bytes] = None
    version_marker: Optional[str] = None

    @classmethod
    def absent(cls) -> "RemoteFileState":
        """State of a file that does not exist remotely."""
        return cls(content=None, version_marker=None)

    @property
    def exists(self) -> bool:
        return self.content is not None


@dataclass(frozen=True)
class SyncOutcome:
    """Result of handling one file in one pass."""

    path: str
    status: OutcomeStatus
    version_marker: Optional[str] = None
    skip_reason: Optional[SkipReason] = None
    error_kind: Optional[ErrorKind] = None
    failure_reason: Optional[FailureReason] = None
    message: str = ""

    @classmethod
    def committed(cls, path: str, version_marker: str) -> "SyncOutcome":
        return cls(path=path, status=OutcomeStatus.COMMITTED, version_marker=version_marker)

    @classmethod
    def skipped(cls, path: str, reason: SkipReason = SkipReason.UNCHANGED) -> "SyncOutcome":
        return cls(path=path, status=OutcomeStatus.SKIPPED, skip_reason=reason)

    @classmethod
    def failed(
        cls,
        path: str,
        kind: ErrorKind,
        message: str,
        reason: FailureReason = FailureReason.UNKNOWN,
    ) -> "SyncOutcome":
        return cls(
            path=path,
            status=OutcomeStatus.FAILED,
            error_kind=kind,
            failure_reason=reason,
            message=message,
        )

    @property
    def is_committed(self) -> bool:
        return self.status is OutcomeStatus.COMMITTED

    @property
    def is_skipped(self) -> bool:
        return self.status is OutcomeStatus.SKIPPED

    @property
    def is_failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED


@dataclass
class PassResult:
    """
    Aggregate of one sync pass.

    Outcomes are kept in local enumeration order. The result behaves as a
    read-only sequence of SyncOutcome.
    """

    repository: str = ""
    branch: str = ""
    outcomes: list[SyncOutcome] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    def __iter__(self) -> Iterator[SyncOutcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    def __getitem__(self, index: int) -> SyncOutcome:
        return self.outcomes[index]

    @property
    def committed(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.is_committed]

    @property
    def skipped(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.is_skipped]

    @property
    def failed(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.is_failed]

    @property
    def success(self) -> bool:
        """True if no file failed."""
        return not self.failed

    @property
    def duration(self) -> Optional[float]:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()

    def summary(self) -> str:
        return (
            f"{len(self.committed)} committed, "
            f"{len(self.skipped)} skipped, "
            f"{len(self.failed)} failed"
        )
