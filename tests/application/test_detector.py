"""Tests for the change detector."""

from vault2git.application.sync import has_changed
from vault2git.core.domain.entities import FileSnapshot, RemoteFileState


class TestHasChanged:
    """Tests for has_changed."""

    def test_absent_remote(self):
        assert has_changed(RemoteFileState.absent(), FileSnapshot("a.md", b"x"))

    def test_absent_remote_empty_local(self):
        assert has_changed(RemoteFileState.absent(), FileSnapshot("a.md", b""))

    def test_identical(self):
        remote = RemoteFileState(content=b"hello\n", version_marker="1")
        assert not has_changed(remote, FileSnapshot("a.md", b"hello\n"))

    def test_line_endings_are_significant(self):
        remote = RemoteFileState(content=b"hello\n", version_marker="1")
        assert has_changed(remote, FileSnapshot("a.md", b"hello\r\n"))

    def test_trailing_whitespace_is_significant(self):
        remote = RemoteFileState(content=b"hello", version_marker="1")
        assert has_changed(remote, FileSnapshot("a.md", b"hello "))

    def test_empty_remote_equals_empty_local(self):
        remote = RemoteFileState(content=b"", version_marker="1")
        assert not has_changed(remote, FileSnapshot("a.md", b""))
