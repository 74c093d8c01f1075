"""
Scheduler - Triggers sync passes on a fixed interval.
"""

import logging
import threading
from typing import Any, Callable, Optional

from ...core.domain.events import EventBus, TickSkipped
from ...core.exceptions import SyncBusyError
from ...core.ports.config_provider import SyncConfig
from .session import SyncSession


class Scheduler:
    """
    Owns one periodic timer.

    Each tick starts on_tick on a worker thread unless a pass is already in
    progress, in which case the tick is dropped rather than queued.
    Restarting replaces the timer; stopping never interrupts a running pass.
    """

    def __init__(
        self,
        session: SyncSession,
        event_bus: Optional[EventBus] = None,
    ):
        self.session = session
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger("Scheduler")

        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._timer_thread: Optional[threading.Thread] = None
        self._worker: Optional[threading.Thread] = None
        self._on_tick: Optional[Callable[[], Any]] = None
        self._interval: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    @property
    def interval(self) -> Optional[float]:
        """Current interval in seconds, or None when stopped."""
        return self._interval if self.is_running else None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self, config: SyncConfig, on_tick: Callable[[], Any]) -> None:
        """
        Start ticking every config.sync_interval minutes.

        Calling start again replaces the previous schedule.

        Raises:
            ValueError: If the interval is not positive
        """
        if config.sync_interval <= 0:
            raise ValueError(f"Sync interval must be positive, got {config.sync_interval}")

        interval = float(config.sync_interval) * 60
        stop_event = threading.Event()
        thread = threading.Thread(
            target=self._loop,
            args=(stop_event, interval),
            name="vault2git-scheduler",
            daemon=True,
        )

        # Swap in one critical section so concurrent starts leave one timer
        with self._lock:
            old_event, old_thread = self._stop_event, self._timer_thread
            self._on_tick = on_tick
            self._interval = interval
            self._stop_event = stop_event
            self._timer_thread = thread
            thread.start()

        self._halt(old_event, old_thread)
        self.logger.info(f"Auto-sync every {config.sync_interval} minute(s)")

    def stop(self) -> None:
        """Cancel the timer. Safe to call when not running."""
        with self._lock:
            stop_event, thread = self._stop_event, self._timer_thread
            self._stop_event = None
            self._timer_thread = None
            self._on_tick = None

        if self._halt(stop_event, thread):
            self.logger.info("Auto-sync stopped")

    def _halt(
        self,
        stop_event: Optional[threading.Event],
        thread: Optional[threading.Thread],
    ) -> bool:
        if stop_event is None:
            return False
        stop_event.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=2.0)
        return True

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the most recently dispatched pass to finish."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)

    # -------------------------------------------------------------------------
    # Ticks
    # -------------------------------------------------------------------------

    def tick(self) -> bool:
        """
        Attempt to begin a pass.

        Returns:
            True if on_tick was dispatched, False if the tick was dropped
        """
        on_tick = self._on_tick
        if on_tick is None:
            return False

        if self.session.in_progress:
            self._drop()
            return False

        worker = threading.Thread(
            target=self._run_tick,
            args=(on_tick,),
            name="vault2git-pass",
            daemon=True,
        )
        self._worker = worker
        worker.start()
        return True

    def _loop(self, stop_event: threading.Event, interval: float) -> None:
        while not stop_event.wait(interval):
            self.tick()

    def _run_tick(self, on_tick: Callable[[], Any]) -> None:
        try:
            on_tick()
        except SyncBusyError:
            self._drop()
        except Exception as e:
            # Keep the schedule alive; the next tick retries
            self.logger.error(f"Scheduled sync failed: {e}")

    def _drop(self) -> None:
        self.logger.info("Tick skipped: busy")
        self.event_bus.publish(TickSkipped(reason="busy"))
