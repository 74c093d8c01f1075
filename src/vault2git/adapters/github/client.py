"""
GitHub API Client - Low-level HTTP client for the GitHub REST API.

The GitHubAdapter uses this to implement the RemoteRepositoryPort.
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


DEFAULT_API_URL = "https://api.github.com"


class GitHubApiClient(ForgeApiClient):
    """GitHub REST v3 client authenticated with a personal access token."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = ForgeApiClient.DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(base_url, token, timeout=timeout, session=session)
        self._current_user: Optional[dict] = None

    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"token {token}"}

    def classify_client_error(
        self,
        response: requests.Response,
        endpoint: str,
    ) -> Optional[RemoteRepositoryError]:
        if response.status_code != 422:
            return None
        body = response.text or ""
        # Contents API answers 422 when the sha is missing or stale
        if "sha" in body:
            return ConflictError(f"Version mismatch on {endpoint}: {body[:200]}", path=endpoint)
        return InvalidRequestError(f"Invalid request for {endpoint}: {body[:200]}", path=endpoint)

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_user(self) -> dict[str, Any]:
        """Get the authenticated user."""
        if self._current_user is None:
            self._current_user = self.get("user")
        return self._current_user

    def list_repos(self) -> list[dict[str, Any]]:
        return self.get_paginated("user/repos", params={"per_page": 100, "sort": "full_name"})

    def list_branches(self, repo: str) -> list[dict[str, Any]]:
        return self.get_paginated(f"repos/{repo}/branches", params={"per_page": 100})

    def get_contents(self, repo: str, path: str, ref: str) -> Any:
        return self.get(f"repos/{repo}/contents/{quote(path)}", params={"ref": ref})

    def put_contents(self, repo: str, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self.put(f"repos/{repo}/contents/{quote(path)}", json=payload)

    def get_blob(self, repo: str, sha: str) -> dict[str, Any]:
        return self.get(f"repos/{repo}/git/blobs/{sha}")

    @property
    def is_connected(self) -> bool:
        return self._current_user is not None
