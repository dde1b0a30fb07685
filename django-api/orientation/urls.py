from django.urls import path

from orientation.handlers import (
    DashboardView,
    ReferenceDayView,
    ScanHistoryView,
    ServerTimeView,
    SessionAttendeesView,
    SessionListView,
)

urlpatterns = [
    path("time", ServerTimeView.as_view(), name="server-time"),
    path("time/today", ReferenceDayView.as_view(), name="reference-day"),
    path("sessions", SessionListView.as_view(), name="session-list"),
    path(
        "sessions/<str:schedule_id>/attendees",
        SessionAttendeesView.as_view(),
        name="session-attendees",
    ),
    path("dashboard", DashboardView.as_view(), name="dashboard"),
    path("scans", ScanHistoryView.as_view(), name="scan-history"),
]
