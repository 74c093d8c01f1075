"""
Sync Engine - Runs one pass of local files against the remote repository.

This is the main entry point for sync operations.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from functools import partial
from typing import Optional

from ...core.domain.entities import FileSnapshot, PassResult, RemoteFileState, SyncOutcome
from ...core.domain.enums import ErrorKind, FailureReason
from ...core.domain.events import (
    EventBus,
    FileCommitted,
    FileFailed,
    FileSkipped,
    PassAborted,
    PassCompleted,
    PassStarted,
)
from ...core.ports.config_provider import SyncConfig
from ...core.ports.local_store import LocalFile, LocalStoreError, LocalStorePort
from ...core.ports.remote_repository import (
    AuthenticationError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionError,
    Principal,
    RateLimitError,
    RemoteRepositoryError,
    RemoteRepositoryPort,
)
from ..commands import CommitFileCommand, commit_message
from ..retry import RetryPolicy
from .detector import has_changed
from .session import SyncSession


def classify_error(error: Exception) -> tuple[ErrorKind, FailureReason]:
    """Map an exception to the error kind and reason reported on an outcome."""
    if isinstance(error, RateLimitError):
        return ErrorKind.TRANSIENT, FailureReason.RATE_LIMITED
    if isinstance(error, RemoteRepositoryError) and error.transient:
        return ErrorKind.TRANSIENT, FailureReason.NETWORK
    if isinstance(error, ConflictError):
        return ErrorKind.PERMANENT, FailureReason.CONFLICT
    if isinstance(error, AuthenticationError):
        return ErrorKind.PERMANENT, FailureReason.AUTHENTICATION
    if isinstance(error, PermissionError):
        return ErrorKind.PERMANENT, FailureReason.PERMISSION
    if isinstance(error, NotFoundError):
        return ErrorKind.PERMANENT, FailureReason.NOT_FOUND
    if isinstance(error, InvalidRequestError):
        return ErrorKind.PERMANENT, FailureReason.INVALID_REQUEST
    if isinstance(error, LocalStoreError):
        return ErrorKind.PERMANENT, FailureReason.LOCAL_READ
    return ErrorKind.PERMANENT, FailureReason.UNKNOWN


class SyncEngine:
    """
    Synchronizes every local file to the configured branch.

    Per file:
    1. Read the local content
    2. Read the remote content and version marker (missing = new file)
    3. Skip if the bytes are identical
    4. Otherwise commit, expecting the version marker read in step 2

    Files are handled independently on a bounded worker pool. A failure on
    one file is reported as a Failed outcome and never stops the others.
    Only authentication and vault enumeration failures abort a pass.
    """

    def __init__(
        self,
        remote: RemoteRepositoryPort,
        store: LocalStorePort,
        session: Optional[SyncSession] = None,
        event_bus: Optional[EventBus] = None,
        retry: Optional[RetryPolicy] = None,
    ):
        """
        Initialize the engine.

        Args:
            remote: Remote repository port
            store: Local store port
            session: Session shared with the scheduler (one pass at a time)
            event_bus: Optional event bus receiving per-file events
            retry: Retry policy; built from the pass config when omitted
        """
        self.remote = remote
        self.store = store
        self.session = session or SyncSession()
        self.event_bus = event_bus or EventBus()
        self.retry = retry
        self.logger = logging.getLogger("SyncEngine")

    # -------------------------------------------------------------------------
    # Main Entry Point
    # -------------------------------------------------------------------------

    def run_pass(self, config: SyncConfig) -> PassResult:
        """
        Run one sync pass.

        Args:
            config: Sync configuration, unchanged for the whole pass

        Returns:
            PassResult with one outcome per local file, in enumeration order

        Raises:
            SyncBusyError: If another pass is in progress
            AuthenticationError: If credentials are missing or rejected
            LocalStoreError: If the vault cannot be listed
        """
        with self.session.running():
            return self._run(config)

    # -------------------------------------------------------------------------
    # Pass
    # -------------------------------------------------------------------------

    def _run(self, config: SyncConfig) -> PassResult:
        principal = self._authenticate()
        repository = config.repository_slug(principal.login)
        result = PassResult(repository=repository, branch=config.branch)

        self.event_bus.publish(PassStarted(
            repository=repository,
            branch=config.branch,
            device_name=config.device_name,
        ))

        try:
            files = self.store.list_files()
        except LocalStoreError as e:
            self.logger.error(f"Could not list vault files: {e}")
            self.event_bus.publish(PassAborted(reason=str(e)))
            raise

        self.logger.info(
            f"Syncing {len(files)} file(s) to {repository}@{config.branch} "
            f"as '{config.device_name}'"
        )

        retry = self.retry or RetryPolicy(
            max_attempts=config.max_attempts,
            delay=config.retry_delay,
        )
        handle = partial(self._sync_file, config, repository, retry)

        if files:
            workers = max(1, min(config.max_workers, len(files)))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields in submission order
                for outcome in pool.map(handle, files):
                    result.outcomes.append(outcome)
                    self._publish_outcome(outcome)

        result.finished_at = datetime.now()
        self.event_bus.publish(PassCompleted(
            repository=repository,
            branch=config.branch,
            committed=len(result.committed),
            skipped=len(result.skipped),
            failed=len(result.failed),
            errors=tuple(f"{o.path}: {o.message}" for o in result.failed),
        ))
        self.logger.info(f"Pass complete: {result.summary()}")
        return result

    def _authenticate(self) -> Principal:
        try:
            principal = self.remote.authenticate()
        except AuthenticationError as e:
            self.logger.error(f"Authentication failed: {e}")
            self.event_bus.publish(PassAborted(reason=str(e)))
            raise
        self.logger.debug(f"Authenticated as {principal.login}")
        return principal

    # -------------------------------------------------------------------------
    # Per File
    # -------------------------------------------------------------------------

    def _sync_file(
        self,
        config: SyncConfig,
        repository: str,
        retry: RetryPolicy,
        entry: LocalFile,
    ) -> SyncOutcome:
        try:
            return self._handle_file(config, repository, retry, entry)
        except Exception as e:
            # Anything unexpected still ends as this file's outcome
            self.logger.exception(f"Unexpected error syncing {entry.path}")
            return self._failed(entry.path, e)

    def _handle_file(
        self,
        config: SyncConfig,
        repository: str,
        retry: RetryPolicy,
        entry: LocalFile,
    ) -> SyncOutcome:
        path = entry.path
        try:
            snapshot = FileSnapshot(
                path=path,
                content=self.store.read_file(path),
                modified=entry.modified,
            )
            remote = self._read_remote(repository, config.branch, path, retry)
        except (LocalStoreError, RemoteRepositoryError) as e:
            return self._failed(path, e)

        if not has_changed(remote, snapshot):
            self.logger.debug(f"Unchanged: {path}")
            return SyncOutcome.skipped(path)

        if snapshot.is_hidden:
            self.logger.info(f"Committing hidden file: {path}")

        command = CommitFileCommand(
            remote=self.remote,
            repository=repository,
            branch=config.branch,
            path=path,
            content=snapshot.content,
            message=commit_message(config.device_name, path),
            expected_version=remote.version_marker,
            retry=retry,
        )
        cmd_result = command.execute()

        if cmd_result.success:
            return SyncOutcome.committed(path, cmd_result.data)
        if cmd_result.exception is not None:
            return self._failed(path, cmd_result.exception)
        return SyncOutcome.failed(
            path,
            ErrorKind.PERMANENT,
            cmd_result.error or "Commit failed",
            FailureReason.INVALID_REQUEST,
        )

    def _read_remote(
        self,
        repository: str,
        branch: str,
        path: str,
        retry: RetryPolicy,
    ) -> RemoteFileState:
        try:
            return retry.call(self.remote.read_file, repository, branch, path)
        except NotFoundError:
            return RemoteFileState.absent()

    def _failed(self, path: str, error: Exception) -> SyncOutcome:
        kind, reason = classify_error(error)
        self.logger.warning(f"Failed {path} ({kind.value}, {reason.value}): {error}")
        return SyncOutcome.failed(path, kind, str(error), reason)

    def _publish_outcome(self, outcome: SyncOutcome) -> None:
        if outcome.is_committed:
            self.event_bus.publish(FileCommitted(
                path=outcome.path,
                version_marker=outcome.version_marker or "",
            ))
        elif outcome.is_skipped:
            self.event_bus.publish(FileSkipped(
                path=outcome.path,
                reason=outcome.skip_reason.value if outcome.skip_reason else "",
            ))
        else:
            self.event_bus.publish(FileFailed(
                path=outcome.path,
                error_kind=outcome.error_kind.value if outcome.error_kind else "",
                reason=outcome.failure_reason.value if outcome.failure_reason else "",
                message=outcome.message,
            ))
