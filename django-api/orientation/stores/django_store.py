"""Django ORM implementations of the store interfaces.

Day snapshots are cached under ``orientation:sessions:<epoch_ms>`` and
invalidated by the signal handlers in orientation/signals.py.
"""

import uuid
from datetime import datetime

from django.core.cache import cache
from django.utils import timezone

from orientation import models
from orientation.conf import get_setting
from orientation.domain import (
    AttendeeId,
    AttendeeRecord,
    Capacity,
    MinuteOfDay,
    ScanEvent,
    ScanType,
    ScheduleId,
    SessionWindow,
)
from orientation.domain.reference_time import (
    format_time_slot,
    start_of_reference_day,
    to_epoch_ms,
    to_reference_time,
)
from orientation.stores.interfaces import ScanEventStore, SessionStore, TimeAuthority

SESSIONS_CACHE_PREFIX = "orientation:sessions"


def sessions_cache_key(day: datetime) -> str:
    return f"{SESSIONS_CACHE_PREFIX}:{to_epoch_ms(start_of_reference_day(day))}"


def _to_attendee(booking: models.OrientationBooking) -> AttendeeRecord:
    return AttendeeRecord(
        identity=AttendeeId(booking.application_id),
        full_name=booking.full_name,
        check_in_time=booking.check_in_time,
        check_out_time=booking.check_out_time,
        qr_payload=booking.qr_payload or None,
    )


def _to_window(schedule: models.OrientationSchedule) -> SessionWindow:
    bookings = tuple(_to_attendee(b) for b in schedule.bookings.all())
    return SessionWindow(
        id=ScheduleId(str(schedule.id)),
        date=to_reference_time(schedule.date),
        start_minutes=MinuteOfDay(schedule.start_minutes),
        end_minutes=MinuteOfDay(schedule.end_minutes),
        venue=schedule.venue_name,
        capacity=Capacity(schedule.total_slots),
        current_bookings=len(bookings),
        attendees=bookings,
        hint_upcoming=schedule.is_upcoming,
        hint_past=schedule.is_past,
    )


class DjangoTimeAuthority(TimeAuthority):
    """The server's own clock, as seen by Django."""

    def server_now(self) -> datetime:
        return timezone.now()

    def reference_day_start(self) -> datetime:
        return start_of_reference_day(timezone.now())


class DjangoSessionStore(SessionStore):
    """Database-backed session store using Django ORM."""

    def get_sessions_for_day(self, day: datetime) -> list[SessionWindow]:
        key = sessions_cache_key(day)
        cached = cache.get(key)
        if cached is not None:
            return cached
        schedules = (
            models.OrientationSchedule.objects.filter(date=start_of_reference_day(day))
            .prefetch_related("bookings")
            .order_by("start_minutes")
        )
        sessions = [_to_window(s) for s in schedules]
        cache.set(key, sessions, timeout=get_setting("SNAPSHOT_CACHE_TIMEOUT"))
        return sessions

    def get_session(self, schedule_id: ScheduleId) -> SessionWindow | None:
        try:
            pk = uuid.UUID(schedule_id.value)
        except ValueError:
            return None
        schedule = (
            models.OrientationSchedule.objects.filter(pk=pk)
            .prefetch_related("bookings")
            .first()
        )
        return _to_window(schedule) if schedule is not None else None


class DjangoScanEventStore(ScanEventStore):
    """Scan log backed by ScanRecord rows."""

    def list_scan_events(
        self,
        start: datetime | None,
        end: datetime | None,
        scan_type: ScanType | None = None,
        limit: int | None = None,
    ) -> list[ScanEvent]:
        records = models.ScanRecord.objects.select_related("booking__schedule").order_by("-timestamp")
        if start is not None:
            records = records.filter(timestamp__gte=start)
        if end is not None:
            records = records.filter(timestamp__lte=end)
        if scan_type is not None:
            records = records.filter(scan_type=scan_type.value)
        if limit is not None:
            records = records[:limit]
        return [self._to_event(r) for r in records]

    @staticmethod
    def _to_event(record: models.ScanRecord) -> ScanEvent:
        booking = record.booking
        schedule = booking.schedule
        return ScanEvent(
            scan_type=ScanType(record.scan_type),
            timestamp=record.timestamp,
            attendee=AttendeeId(booking.application_id),
            schedule=ScheduleId(str(schedule.id)),
            attendee_name=booking.full_name,
            session_time_slot=format_time_slot(schedule.start_minutes, schedule.end_minutes),
            session_venue=schedule.venue_name,
            session_date=to_reference_time(schedule.date),
            check_in_time=booking.check_in_time,
            check_out_time=booking.check_out_time,
        )
