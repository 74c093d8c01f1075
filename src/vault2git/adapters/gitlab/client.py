"""
GitLab API Client - Low-level HTTP client for the GitLab REST API (v4).
"""

from typing import Any, Optional
from urllib.parse import quote

import requests

from ...core.ports.remote_repository import (
    ConflictError,
    InvalidRequestError,
    RemoteRepositoryError,
)
from ..http_client import ForgeApiClient


DEFAULT_API_URL = "https://gitlab.com/api/v4"

# Messages GitLab returns with a 400 when an optimistic write loses
CONFLICT_MARKERS = (
    "has changed since",
    "already exists",
    "a file with this name doesn't exist",
)


def project_id(repository: str) -> str:
    """URL-encode a 'namespace/project' path for use as a project id."""
    return quote(repository, safe="")


class GitLabApiClient(ForgeApiClient):
    """GitLab client authenticated with a personal access token."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = ForgeApiClient.DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(base_url, token, timeout=timeout, session=session)
        self._current_user: Optional[dict] = None

    def auth_headers(self, token: str) -> dict[str, str]:
        return {"PRIVATE-TOKEN": token}

    def classify_client_error(
        self,
        response: requests.Response,
        endpoint: str,
    ) -> Optional[RemoteRepositoryError]:
        if response.status_code != 400:
            return None
        body = (response.text or "").lower()
        if any(marker in body for marker in CONFLICT_MARKERS):
            return ConflictError(f"Version mismatch on {endpoint}: {response.text[:200]}", path=endpoint)
        return InvalidRequestError(f"Invalid request for {endpoint}: {response.text[:200]}", path=endpoint)

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_user(self) -> dict[str, Any]:
        if self._current_user is None:
            self._current_user = self.get("user")
        return self._current_user

    def list_projects(self) -> list[dict[str, Any]]:
        return self.get_paginated(
            "projects",
            params={"membership": "true", "per_page": 100, "order_by": "path", "sort": "asc"},
        )

    def list_branches(self, repo: str) -> list[dict[str, Any]]:
        return self.get_paginated(
            f"projects/{project_id(repo)}/repository/branches",
            params={"per_page": 100},
        )

    def _file_endpoint(self, repo: str, path: str) -> str:
        return f"projects/{project_id(repo)}/repository/files/{quote(path, safe='')}"

    def get_file(self, repo: str, path: str, ref: str) -> dict[str, Any]:
        return self.get(self._file_endpoint(repo, path), params={"ref": ref})

    def create_commit(self, repo: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Commit a set of file actions; the response carries the new commit id."""
        return self.post(f"projects/{project_id(repo)}/repository/commits", json=payload)
