"""
GitHub Adapter - Implements RemoteRepositoryPort for GitHub.

Files are read and written through the contents API; the version marker is
the blob sha, which GitHub requires to update an existing file.
"""

import base64
import binascii
import logging
from typing import Any, Optional

from ...core.domain.entities import RemoteFileState
from ...core.ports.config_provider import RemoteConfig
from ...core.ports.remote_repository import (
    BranchInfo,
    InvalidRequestError,
    Principal,
    RemoteRepositoryPort,
    RepositoryInfo,
)
from .client import DEFAULT_API_URL, GitHubApiClient


class GitHubAdapter(RemoteRepositoryPort):
    """
    GitHub implementation of the RemoteRepositoryPort.

    Translates between file bytes and GitHub's base64 JSON payloads.
    """

    def __init__(
        self,
        config: RemoteConfig,
        client: Optional[GitHubApiClient] = None,
    ):
        """
        Initialize the GitHub adapter.

        Args:
            config: Remote configuration (token, optional API URL)
            client: Optional pre-built client
        """
        self.config = config
        self.logger = logging.getLogger("GitHubAdapter")
        self._client = client or GitHubApiClient(
            token=config.token,
            base_url=config.api_url or DEFAULT_API_URL,
        )

    @property
    def name(self) -> str:
        return "GitHub"

    # -------------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------------

    def authenticate(self) -> Principal:
        data = self._client.get_user()
        return Principal(login=data["login"], name=data.get("name"))

    def list_repositories(self) -> list[RepositoryInfo]:
        return [
            RepositoryInfo(
                full_name=repo["full_name"],
                default_branch=repo.get("default_branch"),
                private=bool(repo.get("private", False)),
            )
            for repo in self._client.list_repos()
        ]

    def list_branches(self, repository: str) -> list[BranchInfo]:
        return [
            BranchInfo(name=branch["name"], commit=branch.get("commit", {}).get("sha"))
            for branch in self._client.list_branches(repository)
        ]

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def read_file(self, repository: str, branch: str, path: str) -> RemoteFileState:
        data = self._client.get_contents(repository, path, ref=branch)

        if isinstance(data, list) or data.get("type") != "file":
            raise InvalidRequestError(f"Not a file: {path}", path=path)

        sha = data["sha"]
        if data.get("encoding") == "base64" and data.get("content") is not None:
            content = self._decode(data["content"], path)
        else:
            # Larger files come back without inline content
            self.logger.debug(f"Fetching {path} through the blobs API")
            blob = self._client.get_blob(repository, sha)
            content = self._decode(blob.get("content", ""), path)

        return RemoteFileState(content=content, version_marker=sha)

    def write_file(
        self,
        repository: str,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        expected_version: Optional[str] = None,
    ) -> str:
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        if expected_version:
            payload["sha"] = expected_version

        data = self._client.put_contents(repository, path, payload)
        sha = data["content"]["sha"]
        self.logger.debug(f"Wrote {path} on {repository}@{branch} -> {sha}")
        return sha

    def _decode(self, encoded: str, path: str) -> bytes:
        try:
            # GitHub wraps base64 at 60 columns
            return base64.b64decode("".join(encoded.split()))
        except (binascii.Error, ValueError) as e:
            raise InvalidRequestError(f"Malformed content for {path}: {e}", path=path, cause=e)
