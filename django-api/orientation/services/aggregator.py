"""Session aggregation: per-session stats, dashboard totals and current-session selection.

Every function here is pure over (sessions, now); the dashboard is rebuilt
wholesale on every tick rather than updated in place.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from orientation.domain import (
    AttendeeStatus,
    AttendeeView,
    DashboardView,
    Diagnostic,
    SessionCounts,
    SessionStats,
    SessionView,
    SessionWindow,
)
from orientation.domain.status import enrich_attendee, hint_disagrees, resolve_session_status
from orientation.domain.time_context import ENDING_SOON_MINUTES, format_time_context

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPCOMING = 5

OVERLAPPING_ACTIVE = "OVERLAPPING_ACTIVE_SESSIONS"
HINT_DISAGREEMENT = "STATUS_HINT_DISAGREEMENT"


def compute_session_stats(attendees: Iterable[AttendeeView]) -> SessionStats:
    counts = {status: 0 for status in AttendeeStatus}
    total = scanned_in = scanned_out = 0
    for attendee in attendees:
        total += 1
        counts[attendee.status] += 1
        if attendee.record.check_in_time is not None:
            scanned_in += 1
        if attendee.record.check_out_time is not None:
            scanned_out += 1
    return SessionStats(
        total=total,
        completed=counts[AttendeeStatus.COMPLETED],
        checked_in=counts[AttendeeStatus.CHECKED_IN],
        pending=counts[AttendeeStatus.PENDING],
        missed=counts[AttendeeStatus.MISSED],
        scanned_in=scanned_in,
        scanned_out=scanned_out,
    )


def build_session_view(
    window: SessionWindow,
    now: datetime,
    ending_soon_minutes: int = ENDING_SOON_MINUTES,
) -> SessionView:
    status = resolve_session_status(window, now)
    attendees = tuple(enrich_attendee(record, window, now) for record in window.attendees)
    return SessionView(
        session=window,
        status=status,
        stats=compute_session_stats(attendees),
        time_context=format_time_context(
            window, now, ending_soon_minutes=ending_soon_minutes
        ),
        attendees=attendees,
    )


def count_sessions(views: Iterable[SessionView]) -> SessionCounts:
    total = upcoming = active = completed = 0
    for view in views:
        total += 1
        if view.status.is_active:
            active += 1
        elif view.status.is_upcoming:
            upcoming += 1
        else:
            completed += 1
    return SessionCounts(total=total, upcoming=upcoming, active=active, completed=completed)


def sum_stats(views: Iterable[SessionView]) -> SessionStats:
    totals = SessionStats()
    for view in views:
        totals = totals + view.stats
    return totals


def _by_start(view: SessionView) -> tuple[datetime, str]:
    return view.session.start_instant, view.session.id.value


def select_current_session(
    views: Sequence[SessionView],
) -> tuple[SessionView | None, list[Diagnostic]]:
    """Pick the session to highlight.

    The active session wins; with none active, the earliest upcoming one.
    Several active sessions are a data anomaly: the earliest start wins and
    a diagnostic is returned.
    """
    diagnostics: list[Diagnostic] = []
    active = sorted((v for v in views if v.status.is_active), key=_by_start)
    if len(active) > 1:
        ids = tuple(v.session.id for v in active)
        logger.warning(
            "%d sessions are active at once: %s",
            len(active),
            ", ".join(str(i) for i in ids),
        )
        diagnostics.append(
            Diagnostic(
                code=OVERLAPPING_ACTIVE,
                message=f"{len(active)} sessions are active at the same time",
                schedule_ids=ids,
            )
        )
    if active:
        return active[0], diagnostics

    upcoming = sorted((v for v in views if v.status.is_upcoming), key=_by_start)
    return (upcoming[0] if upcoming else None), diagnostics


def find_hint_disagreements(views: Iterable[SessionView]) -> list[Diagnostic]:
    """Report sessions whose backend flags contradict the time-based status.

    Time-based status stays authoritative; the mismatch usually means the
    snapshot is stale.
    """
    diagnostics = []
    for view in views:
        if hint_disagrees(view.session, view.status):
            logger.warning(
                "Session %s status hint (upcoming=%s, past=%s) disagrees with time-based status",
                view.session.id,
                view.session.hint_upcoming,
                view.session.hint_past,
            )
            diagnostics.append(
                Diagnostic(
                    code=HINT_DISAGREEMENT,
                    message="Stored status disagrees with the clock; the snapshot may be stale",
                    schedule_ids=(view.session.id,),
                )
            )
    return diagnostics


def build_dashboard(
    sessions: Sequence[SessionWindow],
    now: datetime,
    max_upcoming: int = DEFAULT_MAX_UPCOMING,
    ending_soon_minutes: int = ENDING_SOON_MINUTES,
) -> DashboardView:
    """Compose the dashboard for one day's sessions at ``now``."""
    if max_upcoming < 0:
        raise ValueError("max_upcoming cannot be negative")
    views = tuple(
        sorted(
            (build_session_view(s, now, ending_soon_minutes) for s in sessions),
            key=_by_start,
        )
    )
    current, diagnostics = select_current_session(views)
    diagnostics.extend(find_hint_disagreements(views))
    upcoming = tuple(
        v for v in views if v.status.is_upcoming and v is not current
    )[:max_upcoming]
    return DashboardView(
        now=now,
        current_session=current,
        upcoming_sessions=upcoming,
        sessions=views,
        totals=sum_stats(views),
        counts=count_sessions(views),
        diagnostics=tuple(diagnostics),
    )
