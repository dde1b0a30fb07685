from orientation.domain.models import (
    AttendeeRecord,
    AttendeeStatus,
    AttendeeView,
    DashboardView,
    Diagnostic,
    ScanEvent,
    ScanHistoryEntry,
    ScanHistoryGroup,
    ScanHistoryStats,
    ScanType,
    SessionCounts,
    SessionStats,
    SessionStatus,
    SessionView,
    SessionWindow,
)
from orientation.domain.value_objects import AttendeeId, Capacity, MinuteOfDay, ScheduleId

__all__ = [
    "AttendeeRecord",
    "AttendeeStatus",
    "AttendeeView",
    "DashboardView",
    "Diagnostic",
    "ScanEvent",
    "ScanHistoryEntry",
    "ScanHistoryGroup",
    "ScanHistoryStats",
    "ScanType",
    "SessionCounts",
    "SessionStats",
    "SessionStatus",
    "SessionView",
    "SessionWindow",
    "AttendeeId",
    "ScheduleId",
    "MinuteOfDay",
    "Capacity",
]
