"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .remote_repository import (
    AuthenticationError,
    BranchInfo,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionError,
    Principal,
    RateLimitError,
    RemoteRepositoryError,
    RemoteRepositoryPort,
    RepositoryInfo,
    TransientError,
)
from .local_store import LocalFile, LocalStoreError, LocalStorePort
from .config_provider import AppConfig, ConfigProviderPort, RemoteConfig, SyncConfig

__all__ = [
    # Remote repository
    "RemoteRepositoryPort",
    "RemoteRepositoryError",
    "AuthenticationError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "InvalidRequestError",
    "TransientError",
    "RateLimitError",
    "Principal",
    "RepositoryInfo",
    "BranchInfo",
    # Local store
    "LocalStorePort",
    "LocalStoreError",
    "LocalFile",
    # Config
    "ConfigProviderPort",
    "AppConfig",
    "RemoteConfig",
    "SyncConfig",
]
