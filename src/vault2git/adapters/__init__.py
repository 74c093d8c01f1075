"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Remote repositories: GitHub, GitLab
- Local store: Filesystem vault
- Config: Environment variables
"""

from .config import EnvironmentConfigProvider
from .factory import create_remote
from .github import GitHubAdapter
from .gitlab import GitLabAdapter
from .vault import FileSystemVaultStore

__all__ = [
    "GitHubAdapter",
    "GitLabAdapter",
    "FileSystemVaultStore",
    "EnvironmentConfigProvider",
    "create_remote",
]
