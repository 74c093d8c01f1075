"""
GitLab Adapter - Implements RemoteRepositoryPort for GitLab.

The version marker is the file's last_commit_id, which GitLab checks on
update to reject writes based on a stale read. Writes go through the
commits API in a single request whose response is the new commit, so the
returned marker is always our own commit's id.
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
from .client import DEFAULT_API_URL, GitLabApiClient


class GitLabAdapter(RemoteRepositoryPort):
    """GitLab implementation of the RemoteRepositoryPort."""

    def __init__(
        self,
        config: RemoteConfig,
        client: Optional[GitLabApiClient] = None,
    ):
        self.config = config
        self.logger = logging.getLogger("GitLabAdapter")
        self._client = client or GitLabApiClient(
            token=config.token,
            base_url=config.api_url or DEFAULT_API_URL,
        )

    @property
    def name(self) -> str:
        return "GitLab"

    def authenticate(self) -> Principal:
        data = self._client.get_user()
        return Principal(login=data["username"], name=data.get("name"))

    def list_repositories(self) -> list[RepositoryInfo]:
        return [
            RepositoryInfo(
                full_name=project["path_with_namespace"],
                default_branch=project.get("default_branch"),
                private=project.get("visibility", "private") != "public",
            )
            for project in self._client.list_projects()
        ]

    def list_branches(self, repository: str) -> list[BranchInfo]:
        return [
            BranchInfo(name=branch["name"], commit=branch.get("commit", {}).get("id"))
            for branch in self._client.list_branches(repository)
        ]

    def read_file(self, repository: str, branch: str, path: str) -> RemoteFileState:
        data = self._client.get_file(repository, path, ref=branch)
        if data.get("encoding", "base64") != "base64":
            raise InvalidRequestError(f"Unsupported encoding for {path}: {data.get('encoding')}", path=path)

        try:
            content = base64.b64decode(data.get("content", ""))
        except (binascii.Error, ValueError) as e:
            raise InvalidRequestError(f"Malformed content for {path}: {e}", path=path, cause=e)

        return RemoteFileState(content=content, version_marker=data["last_commit_id"])

    def write_file(
        self,
        repository: str,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        expected_version: Optional[str] = None,
    ) -> str:
        action: dict[str, Any] = {
            "file_path": path,
            "encoding": "base64",
            "content": base64.b64encode(content).decode("ascii"),
        }
        if expected_version:
            action["action"] = "update"
            action["last_commit_id"] = expected_version
        else:
            # Rejected with "already exists" if someone created it meanwhile
            action["action"] = "create"

        data = self._client.create_commit(repository, {
            "branch": branch,
            "commit_message": message,
            "actions": [action],
        })
        marker = data.get("id")
        if not marker:
            raise InvalidRequestError(f"No commit id returned for {path}", path=path)

        self.logger.debug(f"Wrote {path} on {repository}@{branch} -> {marker}")
        return marker
