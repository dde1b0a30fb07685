"""Dashboard service - all business logic lives here.

Services:
- Depend only on interfaces (stores) and the trusted clock
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from dataclasses import dataclass
from datetime import datetime

from orientation.conf import get_setting
from orientation.domain import (
    AttendeeStatus,
    AttendeeView,
    DashboardView,
    ScanHistoryGroup,
    ScanHistoryStats,
    ScanType,
    ScheduleId,
    SessionView,
)
from orientation.domain.errors import ScheduleNotFoundError
from orientation.domain.reference_time import start_of_reference_day
from orientation.services.aggregator import build_dashboard, build_session_view
from orientation.services.attendees import AttendeeSort, filter_attendees, sort_attendees
from orientation.services.clock import TrustedClock
from orientation.services.scan_history import (
    DatePreset,
    DateRange,
    group_scan_history,
    resolve_date_range,
    summarize_scans,
)
from orientation.stores.interfaces import ScanEventStore, SessionStore


@dataclass(frozen=True)
class ScanHistoryResult:
    date_range: DateRange
    groups: list[ScanHistoryGroup]
    stats: ScanHistoryStats


class DashboardService:
    """Service for the inspector dashboard and scan history."""

    def __init__(
        self,
        sessions: SessionStore,
        scans: ScanEventStore,
        clock: TrustedClock,
    ) -> None:
        self._sessions = sessions
        self._scans = scans
        self._clock = clock

    def _day(self, day: datetime | None) -> datetime:
        if day is None:
            return self._clock.today()
        return start_of_reference_day(day)

    def get_dashboard(self, day: datetime | None = None) -> DashboardView:
        """Return the dashboard for ``day`` (default: today).

        Raises:
            ClockNotSyncedError: If trusted time is not available yet.
        """
        now = self._clock.now()
        sessions = self._sessions.get_sessions_for_day(self._day(day))
        return build_dashboard(
            sessions,
            now,
            max_upcoming=get_setting("MAX_UPCOMING_SESSIONS"),
            ending_soon_minutes=get_setting("ENDING_SOON_MINUTES"),
        )

    def get_sessions(self, day: datetime | None = None) -> list[SessionView]:
        """Return the day's sessions with derived status, ordered by start."""
        return list(self.get_dashboard(day).sessions)

    def get_session_attendees(
        self,
        schedule_id: str,
        search: str = "",
        status: AttendeeStatus | None = None,
        sort_by: AttendeeSort = AttendeeSort.NAME,
        descending: bool = False,
    ) -> tuple[SessionView, list[AttendeeView]]:
        """Return a session and its filtered, sorted attendees.

        Raises:
            ScheduleNotFoundError: If the schedule does not exist.
            ClockNotSyncedError: If trusted time is not available yet.
        """
        now = self._clock.now()
        try:
            key = ScheduleId.from_string(schedule_id)
        except ValueError:
            raise ScheduleNotFoundError(schedule_id) from None
        window = self._sessions.get_session(key)
        if window is None:
            raise ScheduleNotFoundError(schedule_id)
        view = build_session_view(window, now, get_setting("ENDING_SOON_MINUTES"))
        attendees = filter_attendees(view.attendees, search=search, status=status)
        return view, sort_attendees(attendees, sort_by=sort_by, descending=descending)

    def get_scan_history(
        self,
        preset: DatePreset = DatePreset.LAST_7_DAYS,
        custom_range: DateRange | None = None,
        scan_type: ScanType | None = None,
        limit: int | None = None,
    ) -> ScanHistoryResult:
        """Return scans grouped by reference day, newest first."""
        now = self._clock.now()
        date_range = resolve_date_range(preset, now, custom_range)
        if limit is None:
            limit = get_setting("SCAN_HISTORY_LIMIT")
        events = self._scans.list_scan_events(
            date_range.start, date_range.end, scan_type=scan_type, limit=limit
        )
        return ScanHistoryResult(
            date_range=date_range,
            groups=group_scan_history(events, now, date_range, scan_type),
            stats=summarize_scans(events),
        )
