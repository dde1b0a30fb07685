"""Tests for the live dashboard driven by the refresh scheduler.

Run with: pytest tests/test_live.py -v
"""

import pytest

from orientation.domain.errors import ClockNotSyncedError, SnapshotUnavailableError
from orientation.services.clock import TrustedClock
from orientation.services.live import LiveDashboard
from orientation.services.scheduler import RefreshScheduler
from tests.factories import DAY, InMemorySessionStore, make_window, pht


@pytest.fixture
def scheduler() -> RefreshScheduler:
    return RefreshScheduler(interval=60)


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore([make_window(start=540, end=600), make_window(start=660, end=720, schedule_id="late")])


class TestLoading:
    """Tests for the loading state."""

    def test_loading_until_clock_synced(self, authority, monotonic, store, scheduler):
        """Without trusted time the dashboard stays loading."""
        clock = TrustedClock(authority, monotonic=monotonic)
        live = LiveDashboard(store, clock, scheduler)
        scheduler.tick()
        assert live.is_loading
        assert store.reads == 0
        with pytest.raises(ClockNotSyncedError):
            live.require_view()

    def test_sync_triggers_first_render(self, authority, monotonic, store, scheduler):
        """Anchoring the clock recomputes immediately."""
        clock = TrustedClock(authority, monotonic=monotonic)
        live = LiveDashboard(store, clock, scheduler)
        clock.sync()
        assert not live.is_loading
        assert live.require_view().current_session.session.id.value == "morning"

    def test_loading_until_snapshot(self, clock, scheduler):
        """With no store and no snapshot the dashboard stays loading."""
        live = LiveDashboard(None, clock, scheduler)
        scheduler.tick()
        assert live.is_loading
        with pytest.raises(SnapshotUnavailableError):
            live.require_view()

    def test_pushed_snapshot_renders(self, clock, scheduler):
        """A pushed snapshot is rendered right away."""
        live = LiveDashboard(None, clock, scheduler)
        live.set_snapshot([make_window()])
        assert live.view.sessions[0].time_context == "Starts in 15 minutes"


class TestTicks:
    """Tests for recomputation as time advances."""

    def test_status_advances_without_new_data(self, clock, monotonic, scheduler):
        """Status transitions follow the clock on later ticks."""
        live = LiveDashboard(None, clock, scheduler)
        live.set_snapshot([make_window(start=540, end=600)])
        assert live.view.current_session.status.is_upcoming

        monotonic.advance(20 * 60)
        scheduler.tick()
        assert live.view.current_session.status.is_active
        assert live.view.current_session.time_context == "Ends in 55 minutes"

        monotonic.advance(60 * 60)
        scheduler.tick()
        assert live.view.current_session is None
        assert live.view.sessions[0].status.is_past

    def test_store_is_read_for_clock_day(self, clock, store, scheduler):
        """Each tick re-reads today's sessions."""
        live = LiveDashboard(store, clock, scheduler)
        scheduler.tick()
        scheduler.tick()
        assert store.reads == 2
        assert len(live.view.sessions) == 2

    def test_selected_day(self, clock, scheduler):
        """A selected day other than today is read instead."""
        tomorrow = make_window(date=pht(2025, 1, 29), schedule_id="tomorrow")
        store = InMemorySessionStore([make_window(), tomorrow])
        live = LiveDashboard(store, clock, scheduler, day=DAY)
        live.select_day(pht(2025, 1, 29))
        assert [v.session.id.value for v in live.view.sessions] == ["tomorrow"]

    def test_failed_refresh_keeps_last_snapshot(self, clock, store, scheduler, caplog):
        """A store failure after the first read keeps the previous snapshot."""
        live = LiveDashboard(store, clock, scheduler)
        scheduler.tick()

        def broken(day):
            raise ConnectionError("database gone")

        store.get_sessions_for_day = broken
        scheduler.tick()
        assert len(live.view.sessions) == 2
        assert "keeping the last snapshot" in caplog.text

    def test_close_stops_updates(self, clock, scheduler):
        """A closed dashboard ignores further ticks."""
        live = LiveDashboard(None, clock, scheduler)
        live.set_snapshot([make_window()])
        tick = live.last_tick
        live.close()
        scheduler.tick()
        assert live.last_tick == tick


class TestSettings:
    """Tests for settings-driven rendering."""

    def test_upcoming_cap_from_settings(self, clock, scheduler, settings):
        """The upcoming cap follows the configured setting."""
        settings.ORIENTATION = {"MAX_UPCOMING_SESSIONS": 1}
        live = LiveDashboard(None, clock, scheduler)
        live.set_snapshot(
            [make_window(start=h * 60, end=h * 60 + 30, schedule_id=f"s{h}") for h in range(9, 13)]
        )
        assert live.view.current_session.session.id.value == "s9"
        assert [v.session.id.value for v in live.view.upcoming_sessions] == ["s10"]

    def test_ending_soon_from_settings(self, clock, scheduler, settings):
        """The warning threshold follows the configured setting."""
        settings.ORIENTATION = {"ENDING_SOON_MINUTES": 30}
        live = LiveDashboard(None, clock, scheduler)
        live.set_snapshot([make_window(start=480, end=540)])
        assert live.view.current_session.time_context == "⚠️ Ending in 15 minutes"

    def test_close_detaches_from_clock(self, authority, monotonic, scheduler):
        """A closed dashboard no longer triggers ticks when the clock syncs."""
        clock = TrustedClock(authority, monotonic=monotonic)
        live = LiveDashboard(None, clock, scheduler)
        live.close()
        clock.sync()
        assert scheduler.tick_count == 0
