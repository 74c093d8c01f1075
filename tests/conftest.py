"""Shared fixtures: in-memory implementations of the remote and local ports."""

import hashlib
import json
import threading
from typing import Callable, Optional

import pytest
import requests

from vault2git.core.domain.entities import RemoteFileState
from vault2git.core.ports.local_store import LocalFile, LocalStoreError, LocalStorePort
from vault2git.core.ports.remote_repository import (
    AuthenticationError,
    BranchInfo,
    ConflictError,
    NotFoundError,
    Principal,
    RemoteRepositoryPort,
    RepositoryInfo,
)


class InMemoryRemote(RemoteRepositoryPort):
    """Remote repository backed by a dict, enforcing version markers."""

    def __init__(self, files: Optional[dict[str, bytes]] = None, login: str = "alice"):
        self.login = login
        self.authenticated = True
        self.files: dict[str, tuple[bytes, str]] = {}
        self.calls: list[tuple] = []
        self.read_errors: dict[str, list[Exception]] = {}
        self.write_errors: dict[str, list[Exception]] = {}
        self.before_write: Optional[Callable[[str], None]] = None
        self._revision = 0
        for path, content in (files or {}).items():
            self.put(path, content)

    @property
    def name(self) -> str:
        return "Memory"

    def put(self, path: str, content: bytes) -> str:
        """Write directly, as another client would."""
        self._revision += 1
        marker = f"{hashlib.sha1(content).hexdigest()[:12]}-{self._revision}"
        self.files[path] = (content, marker)
        return marker

    def marker(self, path: str) -> str:
        return self.files[path][1]

    @property
    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "write"]

    @property
    def reads(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "read"]

    def authenticate(self) -> Principal:
        self.calls.append(("authenticate",))
        if not self.authenticated:
            raise AuthenticationError("Bad credentials")
        return Principal(login=self.login, name="Alice")

    def list_repositories(self) -> list[RepositoryInfo]:
        self.calls.append(("list_repositories",))
        return [RepositoryInfo(full_name=f"{self.login}/notes", default_branch="main")]

    def list_branches(self, repository: str) -> list[BranchInfo]:
        self.calls.append(("list_branches", repository))
        return [BranchInfo(name="main", commit="abc123def456")]

    def read_file(self, repository: str, branch: str, path: str) -> RemoteFileState:
        self.calls.append(("read", repository, branch, path))
        errors = self.read_errors.get(path)
        if errors:
            raise errors.pop(0)
        if path not in self.files:
            raise NotFoundError(f"Not found: {path}", path=path)
        content, marker = self.files[path]
        return RemoteFileState(content=content, version_marker=marker)

    def write_file(
        self,
        repository: str,
        branch: str,
        path: str,
        content: bytes,
        message: str,
        expected_version: Optional[str] = None,
    ) -> str:
        self.calls.append(("write", repository, branch, path, message, expected_version))
        if self.before_write is not None:
            self.before_write(path)
        errors = self.write_errors.get(path)
        if errors:
            raise errors.pop(0)

        current = self.files.get(path)
        current_marker = current[1] if current else None
        if current_marker != expected_version:
            raise ConflictError(f"Version mismatch on {path}", path=path)
        return self.put(path, content)


class InMemoryStore(LocalStorePort):
    """Local store backed by an ordered dict."""

    def __init__(self, files: Optional[dict[str, bytes]] = None):
        self.files: dict[str, bytes] = dict(files or {})
        self.read_errors: set[str] = set()
        self.list_error: Optional[Exception] = None
        self.list_calls = 0
        # Set both to make list_files block until released
        self.entered: Optional[threading.Event] = None
        self.release: Optional[threading.Event] = None

    def list_files(self) -> list[LocalFile]:
        self.list_calls += 1
        if self.entered is not None:
            self.entered.set()
        if self.release is not None:
            self.release.wait(timeout=5)
        if self.list_error is not None:
            raise self.list_error
        return [LocalFile(path=path) for path in self.files]

    def read_file(self, path: str) -> bytes:
        if path in self.read_errors:
            raise LocalStoreError(f"Cannot read {path}", path=path)
        return self.files[path]


@pytest.fixture
def remote():
    return InMemoryRemote()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def make_response():
    """Factory for real requests.Response objects."""

    def factory(
        status: int = 200,
        json_body=None,
        text: Optional[str] = None,
        headers: Optional[dict] = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status
        response.encoding = "utf-8"
        response.url = "https://api.test/endpoint"
        if json_body is not None:
            response._content = json.dumps(json_body).encode("utf-8")
        elif text is not None:
            response._content = text.encode("utf-8")
        else:
            response._content = b""
        response.headers.update(headers or {})
        return response

    return factory
