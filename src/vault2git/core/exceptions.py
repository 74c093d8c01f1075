"""
Exceptions - Errors raised outside of a specific port.

Port-specific errors (remote repository, local store) live next to the
port they belong to and derive from Vault2GitError.
"""

from typing import Optional


class Vault2GitError(Exception):
    """Base class for all vault2git errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConfigurationError(Vault2GitError):
    """Configuration is missing or invalid."""


class SyncBusyError(Vault2GitError):
    """A sync pass is already in progress."""

    def __init__(self, message: str = "A sync pass is already in progress"):
        super().__init__(message)


__all__ = ["Vault2GitError", "ConfigurationError", "SyncBusyError"]
