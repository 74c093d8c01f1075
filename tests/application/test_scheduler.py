"""Tests for the scheduler."""

import threading

import pytest

from vault2git.application.sync import Scheduler, SyncSession
from vault2git.core.domain.events import EventBus, TickSkipped
from vault2git.core.exceptions import SyncBusyError
from vault2git.core.ports.config_provider import SyncConfig


@pytest.fixture
def session():
    return SyncSession()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def scheduler(session, event_bus):
    scheduler = Scheduler(session, event_bus)
    yield scheduler
    scheduler.stop()


class TestLifecycle:
    """start / stop behaviour."""

    def test_rejects_non_positive_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.start(SyncConfig(sync_interval=0), lambda: None)
        with pytest.raises(ValueError):
            scheduler.start(SyncConfig(sync_interval=-1), lambda: None)
        assert not scheduler.is_running

    def test_interval_in_seconds(self, scheduler):
        scheduler.start(SyncConfig(sync_interval=5), lambda: None)

        assert scheduler.is_running
        assert scheduler.interval == 300

    def test_stop_when_not_running(self, scheduler):
        scheduler.stop()
        scheduler.stop()
        assert not scheduler.is_running
        assert scheduler.interval is None

    def test_restart_replaces_timer(self, scheduler):
        scheduler.start(SyncConfig(sync_interval=5), lambda: None)
        first = scheduler._timer_thread

        scheduler.start(SyncConfig(sync_interval=10), lambda: None)

        assert not first.is_alive()
        assert scheduler.interval == 600
        running = [t for t in threading.enumerate() if t.name == "vault2git-scheduler"]
        assert len(running) == 1

    def test_timer_fires(self, scheduler):
        fired = threading.Event()

        scheduler.start(SyncConfig(sync_interval=0.001), fired.set)

        assert fired.wait(timeout=5)

    def test_no_ticks_after_stop(self, scheduler):
        calls = []
        scheduler.start(SyncConfig(sync_interval=5), lambda: calls.append(1))
        scheduler.stop()

        assert not scheduler.tick()
        assert calls == []


class TestTick:
    """Tests for Scheduler.tick."""

    def test_without_start(self, scheduler):
        assert not scheduler.tick()

    def test_dispatches(self, scheduler):
        fired = threading.Event()
        scheduler.start(SyncConfig(sync_interval=5), fired.set)

        assert scheduler.tick()
        assert fired.wait(timeout=5)

    def test_drops_when_busy(self, scheduler, session, event_bus):
        calls = []
        scheduler.start(SyncConfig(sync_interval=5), lambda: calls.append(1))
        session.try_begin()

        assert not scheduler.tick()
        scheduler.join(timeout=5)

        assert calls == []
        assert len(event_bus.get_history(TickSkipped)) == 1

    def test_busy_error_from_pass_is_dropped(self, scheduler, event_bus):
        def on_tick():
            raise SyncBusyError()

        scheduler.start(SyncConfig(sync_interval=5), on_tick)

        assert scheduler.tick()
        scheduler.join(timeout=5)

        assert len(event_bus.get_history(TickSkipped)) == 1

    def test_failure_keeps_schedule(self, scheduler):
        def on_tick():
            raise RuntimeError("network down")

        scheduler.start(SyncConfig(sync_interval=5), on_tick)

        assert scheduler.tick()
        scheduler.join(timeout=5)
        assert scheduler.is_running


class TestConcurrentStart:
    """Racing start calls leave a single timer."""

    def test_one_timer_survives(self, scheduler):
        barrier = threading.Barrier(8)

        def start():
            barrier.wait(timeout=5)
            scheduler.start(SyncConfig(sync_interval=5), lambda: None)

        starters = [threading.Thread(target=start) for _ in range(8)]
        for t in starters:
            t.start()
        for t in starters:
            t.join(timeout=10)

        running = [t for t in threading.enumerate() if t.name == "vault2git-scheduler"]
        assert running == [scheduler._timer_thread]
        assert scheduler.is_running

        scheduler.stop()
        assert not any(t.is_alive() for t in running)
