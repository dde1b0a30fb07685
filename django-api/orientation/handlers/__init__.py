from orientation.handlers.views import (
    DashboardView,
    ReferenceDayView,
    ScanHistoryView,
    ServerTimeView,
    SessionAttendeesView,
    SessionListView,
)

__all__ = [
    "DashboardView",
    "ReferenceDayView",
    "ScanHistoryView",
    "ServerTimeView",
    "SessionAttendeesView",
    "SessionListView",
]
