"""Tests for the refresh scheduler.

Run with: pytest tests/test_scheduler.py -v
"""

import threading

import pytest

from orientation.services.scheduler import RefreshScheduler


class TestTick:
    """Tests for synchronous ticks."""

    def test_invalid_interval(self):
        """A non-positive interval is rejected."""
        with pytest.raises(ValueError):
            RefreshScheduler(interval=0)

    def test_interval_from_settings(self, settings):
        """The default period comes from settings."""
        settings.ORIENTATION = {"REFRESH_INTERVAL_SECONDS": 3}
        assert RefreshScheduler().interval == 3

    def test_tick_calls_every_callback(self):
        """Each registered callback receives the tick number."""
        scheduler = RefreshScheduler()
        first, second = [], []
        scheduler.register(first.append)
        scheduler.register(second.append)
        scheduler.tick()
        scheduler.tick()
        assert first == [1, 2]
        assert second == [1, 2]
        assert scheduler.tick_count == 2

    def test_failing_callback_is_isolated(self, caplog):
        """One failing callback does not stop the others or later ticks."""
        scheduler = RefreshScheduler()
        seen = []

        def broken(tick):
            raise RuntimeError("boom")

        scheduler.register(broken)
        scheduler.register(seen.append)
        scheduler.tick()
        scheduler.tick()
        assert seen == [1, 2]
        assert "failed on tick 1" in caplog.text

    def test_unregister(self):
        """Unregistered callbacks are no longer called."""
        scheduler = RefreshScheduler()
        seen = []
        scheduler.register(seen.append)
        scheduler.tick()
        scheduler.unregister(seen.append)
        scheduler.unregister(seen.append)
        scheduler.tick()
        assert seen == [1]

    def test_trigger_without_loop_ticks_inline(self):
        """Without a running loop, trigger ticks synchronously."""
        scheduler = RefreshScheduler()
        seen = []
        scheduler.register(seen.append)
        scheduler.trigger()
        assert seen == [1]


class TestLoop:
    """Tests for the background loop."""

    def test_loop_ticks_immediately_and_stops(self):
        """Starting ticks at once; stopping ends the thread."""
        scheduler = RefreshScheduler(interval=60)
        ticked = threading.Event()
        scheduler.register(lambda tick: ticked.set())
        with scheduler:
            assert scheduler.is_running
            assert ticked.wait(timeout=5)
        assert not scheduler.is_running

    def test_trigger_wakes_the_loop(self):
        """Trigger causes an extra tick without waiting for the interval."""
        scheduler = RefreshScheduler(interval=60)
        seen = []
        second = threading.Event()

        def record(tick):
            seen.append(tick)
            if tick >= 2:
                second.set()

        scheduler.register(record)
        scheduler.start()
        try:
            for _ in range(50):
                if seen:
                    break
                threading.Event().wait(0.05)
            scheduler.trigger()
            assert second.wait(timeout=5)
        finally:
            scheduler.stop()
        assert seen[:2] == [1, 2]

    def test_double_start_is_ignored(self, caplog):
        """Starting twice keeps the single loop."""
        scheduler = RefreshScheduler(interval=60)
        scheduler.start()
        try:
            scheduler.start()
            assert "already running" in caplog.text
        finally:
            scheduler.stop()
