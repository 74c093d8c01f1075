"""
Local Store Port - Abstract interface for the local vault.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..exceptions import Vault2GitError


class LocalStoreError(Vault2GitError):
    """The vault could not be listed or a file could not be read."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path


@dataclass(frozen=True)
class LocalFile:
    """A vault entry: relative slash-separated path and modification time."""

    path: str
    modified: Optional[datetime] = None


class LocalStorePort(ABC):
    """Abstract interface for enumerating and reading vault files."""

    @abstractmethod
    def list_files(self) -> list[LocalFile]:
        """
        Enumerate all files with stable relative paths.

        Raises:
            LocalStoreError: If the vault cannot be listed
        """
        ...

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """
        Read a file's full content.

        Raises:
            LocalStoreError: If the file cannot be read
        """
        ...
