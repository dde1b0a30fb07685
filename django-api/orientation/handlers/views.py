"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from functools import lru_cache

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from orientation.domain import AttendeeStatus, ScanType
from orientation.domain.errors import DomainError, ErrorCode
from orientation.domain.reference_time import to_epoch_ms
from orientation.handlers.serializers import (
    AttendeeQuerySerializer,
    AttendeeSerializer,
    DashboardSerializer,
    DayQuerySerializer,
    ScanHistoryQuerySerializer,
    ScanHistorySerializer,
    SessionViewSerializer,
)
from orientation.services.attendees import AttendeeSort
from orientation.services.clock import TrustedClock
from orientation.services.dashboard_service import DashboardService
from orientation.services.scan_history import DatePreset, DateRange
from orientation.stores.django_store import (
    DjangoScanEventStore,
    DjangoSessionStore,
    DjangoTimeAuthority,
)

ERROR_STATUS = {
    ErrorCode.CLOCK_NOT_SYNCED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.SNAPSHOT_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INVALID_SESSION_WINDOW: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SCAN_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SCHEDULE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


@lru_cache(maxsize=1)
def get_clock() -> TrustedClock:
    clock = TrustedClock(DjangoTimeAuthority())
    clock.sync()
    return clock


def get_service() -> DashboardService:
    return DashboardService(DjangoSessionStore(), DjangoScanEventStore(), get_clock())


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def invalid_query(errors) -> Response:
    return Response(
        {"code": "INVALID_QUERY", "message": "Invalid query parameters", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class ServerTimeView(APIView):
    """Handler for GET /api/time"""

    def get(self, request: Request) -> Response:
        clock = get_clock()
        return Response({"server_instant": to_epoch_ms(clock.now())})


class ReferenceDayView(APIView):
    """Handler for GET /api/time/today"""

    def get(self, request: Request) -> Response:
        clock = get_clock()
        return Response({"reference_day_start": to_epoch_ms(clock.today())})


class SessionListView(APIView):
    """Handler for GET /api/sessions?day="""

    def get(self, request: Request) -> Response:
        query = DayQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return invalid_query(query.errors)
        try:
            sessions = get_service().get_sessions(query.validated_data.get("day"))
        except DomainError as e:
            return error_response(e)
        return Response([SessionViewSerializer(s).data for s in sessions])


class SessionAttendeesView(APIView):
    """Handler for GET /api/sessions/{schedule_id}/attendees"""

    def get(self, request: Request, schedule_id: str) -> Response:
        query = AttendeeQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return invalid_query(query.errors)
        params = query.validated_data
        try:
            session, attendees = get_service().get_session_attendees(
                schedule_id,
                search=params["search"],
                status=AttendeeStatus(params["status"]) if "status" in params else None,
                sort_by=AttendeeSort(params["sort"]),
                descending=params["order"] == "desc",
            )
        except DomainError as e:
            return error_response(e)
        data = SessionViewSerializer(session, include_attendees=False).data
        data["attendees"] = AttendeeSerializer(attendees, many=True).data
        return Response(data)


class DashboardView(APIView):
    """Handler for GET /api/dashboard?day="""

    def get(self, request: Request) -> Response:
        query = DayQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return invalid_query(query.errors)
        try:
            dashboard = get_service().get_dashboard(query.validated_data.get("day"))
        except DomainError as e:
            return error_response(e)
        return Response(DashboardSerializer(dashboard).data)


class ScanHistoryView(APIView):
    """Handler for GET /api/scans"""

    def get(self, request: Request) -> Response:
        query = ScanHistoryQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return invalid_query(query.errors)
        params = query.validated_data
        try:
            custom = None
            if "start" in params and "end" in params:
                custom = DateRange(start=params["start"], end=params["end"])
            result = get_service().get_scan_history(
                preset=DatePreset(params["preset"]),
                custom_range=custom,
                scan_type=None if params["scan_type"] == "all" else ScanType(params["scan_type"]),
                limit=params.get("limit"),
            )
        except DomainError as e:
            return error_response(e)
        return Response(ScanHistorySerializer(result).data)
