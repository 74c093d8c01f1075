"""
GitHub Adapter - Implementation of RemoteRepositoryPort for GitHub.
"""

from .adapter import GitHubAdapter
from .client import GitHubApiClient

__all__ = ["GitHubAdapter", "GitHubApiClient"]
