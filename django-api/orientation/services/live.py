"""Live dashboard state kept current by the refresh scheduler."""

import logging
from collections.abc import Sequence
from datetime import datetime

from orientation.domain import DashboardView, SessionWindow
from orientation.domain.errors import ClockNotSyncedError, SnapshotUnavailableError
from orientation.conf import get_setting
from orientation.services.aggregator import build_dashboard
from orientation.services.clock import TrustedClock
from orientation.services.scheduler import RefreshScheduler
from orientation.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)


class LiveDashboard:
    """Holds the latest snapshot and recomputes the dashboard on every tick.

    Shows as loading until both the clock anchor and the first snapshot are
    available; afterwards the last snapshot keeps rendering while "now"
    advances.
    """

    def __init__(
        self,
        store: SessionStore | None,
        clock: TrustedClock,
        scheduler: RefreshScheduler,
        day: datetime | None = None,
        max_upcoming: int | None = None,
        ending_soon_minutes: int | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._scheduler = scheduler
        self._day = day
        if max_upcoming is None:
            max_upcoming = get_setting("MAX_UPCOMING_SESSIONS")
        if ending_soon_minutes is None:
            ending_soon_minutes = get_setting("ENDING_SOON_MINUTES")
        self._max_upcoming = max_upcoming
        self._ending_soon_minutes = ending_soon_minutes
        self._snapshot: tuple[SessionWindow, ...] | None = None
        self._view: DashboardView | None = None
        self.last_tick = 0
        scheduler.register(self.on_tick)
        clock.on_synced(scheduler.trigger)

    @property
    def is_loading(self) -> bool:
        return self._view is None

    @property
    def view(self) -> DashboardView | None:
        return self._view

    def require_view(self) -> DashboardView:
        if self._view is not None:
            return self._view
        if not self._clock.is_synced:
            raise ClockNotSyncedError()
        raise SnapshotUnavailableError()

    def select_day(self, day: datetime) -> None:
        self._day = day
        self._snapshot = None
        self._view = None
        self._scheduler.trigger()

    def set_snapshot(self, sessions: Sequence[SessionWindow]) -> None:
        """Replace the snapshot and recompute right away.

        Meant for feeds without a store; a configured store is re-read on
        every tick and replaces it.
        """
        self._snapshot = tuple(sessions)
        self._scheduler.trigger()

    def refresh_snapshot(self) -> None:
        """Re-read the selected day from the store.

        A failed read keeps the previous snapshot when there is one.
        """
        if self._store is None:
            return
        day = self._day if self._day is not None else self._clock.today()
        try:
            self._snapshot = tuple(self._store.get_sessions_for_day(day))
        except Exception:
            if self._snapshot is None:
                raise
            logger.warning("Snapshot refresh failed, keeping the last snapshot", exc_info=True)

    def on_tick(self, tick: int) -> None:
        self.last_tick = tick
        if not self._clock.is_synced:
            return
        self.refresh_snapshot()
        if self._snapshot is None:
            return
        self._view = build_dashboard(
            self._snapshot,
            self._clock.now(),
            max_upcoming=self._max_upcoming,
            ending_soon_minutes=self._ending_soon_minutes,
        )

    def close(self) -> None:
        self._scheduler.unregister(self.on_tick)
        self._clock.remove_listener(self._scheduler.trigger)
