"""
Forge API Client - Low-level HTTP client shared by the Git-forge adapters.

This handles the raw HTTP communication and maps failures onto the
RemoteRepositoryError hierarchy. Provider clients set the base URL and the
auth header, and may refine how 4xx responses are classified.
"""

import logging
from typing import Any, Optional

import requests

from ..core.ports.remote_repository import (
    AuthenticationError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    RemoteRepositoryError,
    TransientError,
)


class ForgeApiClient:
    """
    Base REST client for a Git forge.

    Handles the session, request/response, pagination and error handling.
    """

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root (e.g., https://api.github.com)
            token: Personal access token
            timeout: Per-request timeout in seconds
            session: Optional pre-built session (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

        self._session = session or requests.Session()
        self._session.headers.update(self.default_headers())
        if token:
            self._session.headers.update(self.auth_headers(token))

    # -------------------------------------------------------------------------
    # Provider Hooks
    # -------------------------------------------------------------------------

    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def auth_headers(self, token: str) -> dict[str, str]:
        raise NotImplementedError

    def classify_client_error(
        self,
        response: requests.Response,
        endpoint: str,
    ) -> Optional[RemoteRepositoryError]:
        """Provider-specific 4xx mapping; None falls back to the defaults."""
        return None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def url(self, endpoint: str) -> str:
        if endpoint.startswith("http://") or endpoint.startswith("https://"):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def send(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make an authenticated request and return the raw response.

        Raises:
            RemoteRepositoryError: On API errors
            TransientError: On connection failures and timeouts
        """
        if not self.token:
            raise AuthenticationError("No access token configured")

        kwargs.setdefault("timeout", self.timeout)
        url = self.url(endpoint)

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise TransientError(f"Request timed out: {e}", cause=e)
        except requests.exceptions.ConnectionError as e:
            raise TransientError(f"Connection failed: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            # Broken chunked bodies, bad content encoding and the like
            raise TransientError(f"Request failed: {e}", path=endpoint, cause=e)

        self._raise_for_status(response, endpoint)
        return response

    def decode(self, response: requests.Response, endpoint: str) -> Any:
        """Decode a JSON body, mapping garbage to InvalidRequestError."""
        try:
            return response.json()
        except ValueError as e:
            raise InvalidRequestError(
                f"Response from {endpoint} is not JSON: {e}",
                path=endpoint,
                cause=e,
            )

    def request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Make an authenticated request and decode the JSON body.

        Returns:
            Decoded JSON (dict or list), or {} for an empty body
        """
        response = self.send(method, endpoint, **kwargs)
        if not response.content:
            return {}
        return self.decode(response, endpoint)

    def get(self, endpoint: str, **kwargs) -> Any:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """POST request."""
        return self.request("POST", endpoint, json=json, **kwargs)

    def put(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """PUT request."""
        return self.request("PUT", endpoint, json=json, **kwargs)

    def get_paginated(
        self,
        endpoint: str,
        params: Optional[dict] = None,
        max_pages: int = 50,
    ) -> list[Any]:
        """GET every page of a list endpoint, following Link: rel=next."""
        items: list[Any] = []
        url: Optional[str] = endpoint
        page_params = dict(params or {})

        for _ in range(max_pages):
            if url is None:
                break
            response = self.send("GET", url, params=page_params)
            items.extend(self.decode(response, url))
            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            page_params = {}

        return items

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _raise_for_status(self, response: requests.Response, endpoint: str) -> None:
        if response.ok:
            return

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if 400 <= status < 500:
            specific = self.classify_client_error(response, endpoint)
            if specific is not None:
                raise specific

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check the personal access token."
            )

        if status == 403:
            if self._is_rate_limited(response):
                raise RateLimitError(
                    f"Rate limited on {endpoint}",
                    path=endpoint,
                    retry_after=self._retry_after(response),
                )
            raise PermissionError(f"Permission denied for {endpoint}", path=endpoint)

        if status == 404:
            raise NotFoundError(f"Not found: {endpoint}", path=endpoint)

        if status == 409:
            raise ConflictError(f"Conflict on {endpoint}: {error_body}", path=endpoint)

        if status == 429:
            raise RateLimitError(
                f"Rate limited on {endpoint}",
                path=endpoint,
                retry_after=self._retry_after(response),
            )

        if status >= 500:
            raise TransientError(f"Server error {status}: {error_body}", path=endpoint)

        raise RemoteRepositoryError(f"API error {status}: {error_body}", path=endpoint)

    def _is_rate_limited(self, response: requests.Response) -> bool:
        if response.headers.get("X-RateLimit-Remaining") == "0":
            return True
        if "Retry-After" in response.headers:
            return True
        return "rate limit" in (response.text or "").lower()

    def _retry_after(self, response: requests.Response) -> Optional[float]:
        value = response.headers.get("Retry-After")
        if value is None:
            return None
        try:
            return float(value)
        except ValueError:
            return None
