"""Domain models for orientation sessions and attendance.

These are pure domain objects read from snapshots owned by the data store.
Django ORM models are in orientation/models.py (persistence layer).
Derived views (SessionView, DashboardView, ScanHistoryGroup) are recomputed
on every tick and never persisted.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from orientation.domain.errors import InvalidSessionWindowError
from orientation.domain.value_objects import AttendeeId, Capacity, MinuteOfDay, ScheduleId


class ScanType(Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class AttendeeStatus(Enum):
    """Derived attendee progress through a session."""

    COMPLETED = "completed"
    CHECKED_IN = "checked-in"
    PENDING = "pending"
    MISSED = "missed"


@dataclass(frozen=True)
class AttendeeRecord:
    """One attendee's participation in a session."""

    identity: AttendeeId
    full_name: str
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    qr_payload: str | None = None


@dataclass(frozen=True)
class SessionWindow:
    """One scheduled orientation slot.

    ``date`` is the reference-day midnight as an aware instant; the active
    interval is ``[date + start_minutes, date + end_minutes)``.
    """

    id: ScheduleId
    date: datetime
    start_minutes: MinuteOfDay
    end_minutes: MinuteOfDay
    venue: str = ""
    capacity: Capacity = Capacity(0)
    current_bookings: int = 0
    attendees: tuple[AttendeeRecord, ...] = ()
    hint_upcoming: bool | None = None
    hint_past: bool | None = None

    def __post_init__(self) -> None:
        if self.date is None:
            raise InvalidSessionWindowError("date is required")
        if self.date.tzinfo is None or self.date.utcoffset() is None:
            raise InvalidSessionWindowError("date must be timezone-aware")
        if self.start_minutes.value >= self.end_minutes.value:
            raise InvalidSessionWindowError("start must be before end")

    @property
    def start_instant(self) -> datetime:
        return self.date + timedelta(minutes=self.start_minutes.value)

    @property
    def end_instant(self) -> datetime:
        return self.date + timedelta(minutes=self.end_minutes.value)


@dataclass(frozen=True)
class ScanEvent:
    """Immutable record of a single check-in or check-out."""

    scan_type: ScanType
    timestamp: datetime
    attendee: AttendeeId
    schedule: ScheduleId
    attendee_name: str = ""
    session_time_slot: str = ""
    session_venue: str = ""
    session_date: datetime | None = None
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None


@dataclass(frozen=True)
class SessionStatus:
    """Status flags for a session at one instant."""

    is_active: bool
    is_past: bool
    is_upcoming: bool


@dataclass(frozen=True)
class SessionStats:
    """Attendee counts per status, plus raw scan counts."""

    total: int = 0
    completed: int = 0
    checked_in: int = 0
    pending: int = 0
    missed: int = 0
    scanned_in: int = 0
    scanned_out: int = 0

    @property
    def completion_rate(self) -> int:
        if self.total == 0:
            return 0
        return math.floor(self.completed * 100 / self.total + 0.5)

    def __add__(self, other: "SessionStats") -> "SessionStats":
        return SessionStats(
            total=self.total + other.total,
            completed=self.completed + other.completed,
            checked_in=self.checked_in + other.checked_in,
            pending=self.pending + other.pending,
            missed=self.missed + other.missed,
            scanned_in=self.scanned_in + other.scanned_in,
            scanned_out=self.scanned_out + other.scanned_out,
        )


@dataclass(frozen=True)
class AttendeeView:
    """Attendee with derived status."""

    record: AttendeeRecord
    status: AttendeeStatus
    duration: timedelta | None = None
    is_late: bool = False


@dataclass(frozen=True)
class SessionView:
    """Derived view of one session, recomputed every tick."""

    session: SessionWindow
    status: SessionStatus
    stats: SessionStats
    time_context: str
    attendees: tuple[AttendeeView, ...] = ()

    @property
    def available_slots(self) -> int:
        return max(self.session.capacity.value - self.stats.total, 0)


@dataclass(frozen=True)
class SessionCounts:
    total: int = 0
    upcoming: int = 0
    active: int = 0
    completed: int = 0


@dataclass(frozen=True)
class Diagnostic:
    """Operator-facing report of an inconsistency in the snapshot."""

    code: str
    message: str
    schedule_ids: tuple[ScheduleId, ...] = ()


@dataclass(frozen=True)
class DashboardView:
    """Ephemeral dashboard composed from all sessions of a day."""

    now: datetime
    current_session: SessionView | None
    upcoming_sessions: tuple[SessionView, ...]
    sessions: tuple[SessionView, ...]
    totals: SessionStats
    counts: SessionCounts
    diagnostics: tuple[Diagnostic, ...] = field(default=())


@dataclass(frozen=True)
class ScanHistoryEntry:
    event: ScanEvent
    duration: timedelta | None = None


@dataclass(frozen=True)
class ScanHistoryGroup:
    """Scans sharing one reference calendar day, most recent first."""

    day: datetime
    label: str
    entries: tuple[ScanHistoryEntry, ...]


@dataclass(frozen=True)
class ScanHistoryStats:
    total: int = 0
    check_ins: int = 0
    check_outs: int = 0
