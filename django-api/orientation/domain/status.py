"""Pure status resolution for sessions and attendees."""

import logging
from datetime import datetime

from orientation.domain.models import (
    AttendeeRecord,
    AttendeeStatus,
    AttendeeView,
    SessionStatus,
    SessionWindow,
)

logger = logging.getLogger(__name__)

PAST = SessionStatus(is_active=False, is_past=True, is_upcoming=False)


def resolve_session_status(window: SessionWindow, now: datetime) -> SessionStatus:
    """Partition the time axis into upcoming, active and past for ``window``.

    Exactly one flag is set. Should that ever not hold, the session is
    reported as past so it never appears live.
    """
    if window is None:
        raise ValueError("window is required")
    start, end = window.start_instant, window.end_instant
    status = SessionStatus(
        is_active=start <= now < end,
        is_past=now >= end,
        is_upcoming=now < start,
    )
    if (status.is_active, status.is_past, status.is_upcoming).count(True) != 1:
        logger.warning(
            "Session %s has an indeterminate status at %s, treating as past",
            window.id,
            now.isoformat(),
        )
        return PAST
    return status


def hint_disagrees(window: SessionWindow, status: SessionStatus) -> bool:
    """True when backend-supplied flags contradict the time-based status."""
    if window.hint_past is not None and window.hint_past != status.is_past:
        return True
    if window.hint_upcoming is not None and window.hint_upcoming != status.is_upcoming:
        return True
    return False


def resolve_attendee_status(
    check_in_time: datetime | None,
    check_out_time: datetime | None,
    window: SessionWindow | None = None,
    now: datetime | None = None,
) -> AttendeeStatus:
    """Derive attendee progress; first matching rule wins.

    Without a window and instant, an attendee with no scans stays pending.
    """
    if check_in_time is not None and check_out_time is not None:
        return AttendeeStatus.COMPLETED
    if check_in_time is not None:
        return AttendeeStatus.CHECKED_IN
    if check_out_time is not None:
        # Orphaned check-out: the most informative state that is still true.
        logger.warning("Check-out recorded without a check-in, treating as completed")
        return AttendeeStatus.COMPLETED
    if window is not None and now is not None and now >= window.end_instant:
        return AttendeeStatus.MISSED
    return AttendeeStatus.PENDING


def enrich_attendee(record: AttendeeRecord, window: SessionWindow, now: datetime) -> AttendeeView:
    status = resolve_attendee_status(record.check_in_time, record.check_out_time, window, now)
    duration = None
    if (
        status is AttendeeStatus.COMPLETED
        and record.check_in_time is not None
        and record.check_out_time is not None
    ):
        duration = record.check_out_time - record.check_in_time
    is_late = record.check_in_time is not None and record.check_in_time > window.start_instant
    return AttendeeView(record=record, status=status, duration=duration, is_late=is_late)
