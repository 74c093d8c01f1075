"""
Filesystem Vault - LocalStorePort backed by a directory on disk.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional, Union

from ...core.ports.local_store import LocalFile, LocalStoreError, LocalStorePort


DEFAULT_EXCLUDE_DIRS = (".git", ".trash")


class FileSystemVaultStore(LocalStorePort):
    """
    Vault rooted at a local directory.

    Paths are relative to the root and slash-separated on every platform.
    Hidden files such as .obsidian/ are included; only the directories
    named in exclude_dirs are pruned.
    """

    def __init__(
        self,
        root: Union[str, Path],
        exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
    ):
        self.root = Path(root).expanduser()
        self.exclude_dirs = frozenset(exclude_dirs)
        self.logger = logging.getLogger("FileSystemVaultStore")

    def list_files(self) -> list[LocalFile]:
        if not self.root.is_dir():
            raise LocalStoreError(f"Vault directory not found: {self.root}", path=str(self.root))

        files: list[LocalFile] = []

        def on_error(error: OSError) -> None:
            raise LocalStoreError(f"Cannot list {error.filename}: {error}", cause=error)

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=on_error):
            dirnames[:] = sorted(d for d in dirnames if d not in self.exclude_dirs)
            base = Path(dirpath)
            for filename in filenames:
                full = base / filename
                if not full.is_file():
                    continue
                relative = full.relative_to(self.root).as_posix()
                files.append(LocalFile(path=relative, modified=self._modified(full)))

        files.sort(key=lambda f: f.path)
        self.logger.debug(f"Found {len(files)} file(s) in {self.root}")
        return files

    def read_file(self, path: str) -> bytes:
        full = self._resolve(path)
        try:
            return full.read_bytes()
        except OSError as e:
            raise LocalStoreError(f"Cannot read {path}: {e}", path=path, cause=e)

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise LocalStoreError(f"Path escapes the vault: {path}", path=path)
        return self.root.joinpath(*relative.parts)

    def _modified(self, full: Path) -> Optional[datetime]:
        try:
            return datetime.fromtimestamp(full.stat().st_mtime, tz=timezone.utc)
        except OSError:
            # Removed while listing; the read will report it
            return None
