"""
Remote Repository Port - Abstract interface for Git-forge file APIs.

Implementations: GitHub, GitLab.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import RemoteFileState
from ..exceptions import Vault2GitError


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

class RemoteRepositoryError(Vault2GitError):
    """Base exception for remote repository errors."""

    transient = False

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path


class AuthenticationError(RemoteRepositoryError):
    """Credentials are missing or were rejected."""


class PermissionError(RemoteRepositoryError):
    """The authenticated principal may not perform the operation."""


class NotFoundError(RemoteRepositoryError):
    """Repository, branch or file does not exist."""


class ConflictError(RemoteRepositoryError):
    """The remote file changed since its version marker was read."""


class InvalidRequestError(RemoteRepositoryError):
    """The remote rejected the request (bad path, malformed content)."""


class TransientError(RemoteRepositoryError):
    """Network failure, timeout or server error; worth retrying."""

    transient = True


class RateLimitError(TransientError):
    """The remote is throttling requests."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[Exception] = None,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, path=path, cause=cause)
        self.retry_after = retry_after


# -----------------------------------------------------------------------------
# Data
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Principal:
    """The authenticated account."""

    login: str
    name: Optional[str] = None


@dataclass(frozen=True)
class RepositoryInfo:
    """A repository visible to the principal."""

    full_name: str
    default_branch: Optional[str] = None
    private: bool = False


@dataclass(frozen=True)
class BranchInfo:
    """A branch of a repository."""

    name: str
    commit: Optional[str] = None


# -----------------------------------------------------------------------------
# Port
# -----------------------------------------------------------------------------

class RemoteRepositoryPort(ABC):
    """
    Abstract interface for a Git-forge repository.

    Content crosses this interface as bytes; any transport encoding
    (base64) is the adapter's concern and must round-trip losslessly.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'GitHub')."""
        ...

    @abstractmethod
    def authenticate(self) -> Principal:
        """
        Verify credentials.

        Raises:
            AuthenticationError: If the token is missing or rejected
        """
        ...

    @abstractmethod
    def list_repositories(self) -> list[RepositoryInfo]:
        """List repositories the principal can access."""
        ...

    @abstractmethod
    def list_branches(self, repository: str) -> list[BranchInfo]:
        """List branches of a repository."""
        ...

    @abstractmethod
    def read_file(self, repository: str, branch: str, path: str) -> RemoteFileState:
        """
        Read a file and its version marker.

        Raises:
            NotFoundError: If the file does not exist on the branch
        """
        ...

    @abstractmethod
    def write_file(
        self,
        repository: str,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        expected_version: Optional[str] = None,
    ) -> str:
        """
        Create or update a file in a single commit.

        Args:
            repository: Repository identifier (e.g., 'owner/name')
            branch: Target branch
            path: Slash-separated path inside the repository
            content: Full file content
            message: Commit message
            expected_version: Version marker the update is based on;
                None creates the file

        Returns:
            The new version marker

        Raises:
            ConflictError: If expected_version no longer matches
        """
        ...
