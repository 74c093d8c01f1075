"""
Sync Session - Process-wide gate allowing one pass at a time.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from ...core.exceptions import SyncBusyError


class SyncSession:
    """
    Holds the "pass in progress" flag.

    Manual and scheduled passes both go through the same session, so at
    most one pass runs per session at any time.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._in_progress = False
        self.logger = logging.getLogger("SyncSession")

    @property
    def in_progress(self) -> bool:
        """True while a pass holds the session."""
        with self._lock:
            return self._in_progress

    def try_begin(self) -> bool:
        """Mark a pass as started. Returns False if one is already running."""
        with self._lock:
            if self._in_progress:
                return False
            self._in_progress = True
            return True

    def end(self) -> None:
        """Mark the running pass as finished."""
        with self._lock:
            self._in_progress = False

    @contextmanager
    def running(self) -> Iterator["SyncSession"]:
        """
        Hold the session for the duration of a pass.

        Raises:
            SyncBusyError: If another pass is in progress
        """
        if not self.try_begin():
            raise SyncBusyError()
        self.logger.debug("Pass started")
        try:
            yield self
        finally:
            self.end()
            self.logger.debug("Pass finished")
