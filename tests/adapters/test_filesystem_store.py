"""Tests for the filesystem vault store."""

import pytest

from vault2git.adapters.vault import FileSystemVaultStore
from vault2git.core.ports.local_store import LocalStoreError


@pytest.fixture
def vault(tmp_path):
    (tmp_path / "daily").mkdir()
    (tmp_path / "daily" / "2024-01-01.md").write_bytes(b"day one")
    (tmp_path / "b.md").write_bytes(b"bee")
    (tmp_path / "a.md").write_bytes(b"ay")
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "app.json").write_bytes(b"{}")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_bytes(b"ref: refs/heads/main")
    (tmp_path / "empty.md").write_bytes(b"")
    return tmp_path


class TestListFiles:
    """Tests for FileSystemVaultStore.list_files."""

    def test_sorted_relative_paths(self, vault):
        files = FileSystemVaultStore(vault).list_files()

        assert [f.path for f in files] == [
            ".obsidian/app.json",
            "a.md",
            "b.md",
            "daily/2024-01-01.md",
            "empty.md",
        ]

    def test_modified_time(self, vault):
        files = FileSystemVaultStore(vault).list_files()

        assert all(f.modified is not None for f in files)
        assert files[0].modified.tzinfo is not None

    def test_custom_excludes(self, vault):
        files = FileSystemVaultStore(vault, exclude_dirs=(".git", ".obsidian")).list_files()

        assert ".obsidian/app.json" not in [f.path for f in files]

    def test_empty_vault(self, tmp_path):
        assert FileSystemVaultStore(tmp_path).list_files() == []

    def test_missing_root(self, tmp_path):
        with pytest.raises(LocalStoreError):
            FileSystemVaultStore(tmp_path / "nope").list_files()


class TestReadFile:
    """Tests for FileSystemVaultStore.read_file."""

    def test_reads_bytes(self, vault):
        store = FileSystemVaultStore(vault)

        assert store.read_file("daily/2024-01-01.md") == b"day one"
        assert store.read_file("empty.md") == b""

    def test_missing_file(self, vault):
        with pytest.raises(LocalStoreError):
            FileSystemVaultStore(vault).read_file("gone.md")

    @pytest.mark.parametrize("path", ["../outside.md", "/etc/passwd", "daily/../../x"])
    def test_rejects_escaping_paths(self, vault, path):
        with pytest.raises(LocalStoreError):
            FileSystemVaultStore(vault).read_file(path)
