"""
GitLab Adapter - Implementation of RemoteRepositoryPort for GitLab.
"""

from .adapter import GitLabAdapter
from .client import GitLabApiClient

__all__ = ["GitLabAdapter", "GitLabApiClient"]
