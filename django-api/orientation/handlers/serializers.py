"""Serializers for query parameters and for rendering domain views.

Instants cross the wire as epoch milliseconds.
"""

from datetime import datetime, timezone

from rest_framework import serializers

from orientation.conf import get_setting
from orientation.domain import AttendeeStatus, ScanType
from orientation.domain.reference_time import (
    format_duration,
    format_time,
    format_time_slot,
    from_epoch_ms,
    to_epoch_ms,
)
from orientation.services.attendees import AttendeeSort
from orientation.services.scan_history import DatePreset

# Leaves room for reference-day arithmetic before datetime.max.
MAX_EPOCH_MS = to_epoch_ms(datetime(9999, 12, 30, tzinfo=timezone.utc))


def _ms(instant):
    return to_epoch_ms(instant) if instant is not None else None


class EpochMillisField(serializers.IntegerField):
    """Accepts epoch milliseconds and yields an aware datetime."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value < 0:
            raise serializers.ValidationError("Must be a non-negative epoch timestamp in milliseconds.")
        if value > MAX_EPOCH_MS:
            raise serializers.ValidationError("Epoch timestamp is out of range.")
        try:
            return from_epoch_ms(value)
        except (OverflowError, OSError, ValueError):
            raise serializers.ValidationError("Epoch timestamp is out of range.") from None

    def to_representation(self, value):
        return _ms(value)


# Query parameters


class DayQuerySerializer(serializers.Serializer):
    day = EpochMillisField(required=False)


class AttendeeQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, default="")
    status = serializers.ChoiceField(
        choices=[s.value for s in AttendeeStatus], required=False
    )
    sort = serializers.ChoiceField(
        choices=[s.value for s in AttendeeSort], required=False, default=AttendeeSort.NAME.value
    )
    order = serializers.ChoiceField(choices=["asc", "desc"], required=False, default="asc")


class ScanHistoryQuerySerializer(serializers.Serializer):
    preset = serializers.ChoiceField(
        choices=[p.value for p in DatePreset], required=False, default=DatePreset.LAST_7_DAYS.value
    )
    start = EpochMillisField(required=False)
    end = EpochMillisField(required=False)
    scan_type = serializers.ChoiceField(
        choices=[t.value for t in ScanType] + ["all"], required=False, default="all"
    )
    limit = serializers.IntegerField(required=False, min_value=1)

    def validate_limit(self, value):
        return min(value, get_setting("SCAN_HISTORY_MAX_LIMIT"))

    def validate(self, attrs):
        if attrs.get("preset") == DatePreset.CUSTOM.value:
            if "start" not in attrs or "end" not in attrs:
                raise serializers.ValidationError("A custom range needs both start and end")
        return attrs


# Responses


class StatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    checked_in = serializers.IntegerField()
    pending = serializers.IntegerField()
    missed = serializers.IntegerField()
    scanned_in = serializers.IntegerField()
    scanned_out = serializers.IntegerField()
    completion_rate = serializers.IntegerField()


class AttendeeSerializer(serializers.Serializer):
    def to_representation(self, instance):
        record = instance.record
        return {
            "application_id": str(record.identity),
            "full_name": record.full_name,
            "status": instance.status.value,
            "check_in_time": _ms(record.check_in_time),
            "check_out_time": _ms(record.check_out_time),
            "duration_ms": (
                int(instance.duration.total_seconds() * 1000) if instance.duration is not None else None
            ),
            "duration": format_duration(instance.duration) if instance.duration is not None else None,
            "is_late": instance.is_late,
            "qr_payload": record.qr_payload,
        }


class SessionViewSerializer(serializers.Serializer):
    def __init__(self, *args, include_attendees: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.include_attendees = include_attendees

    def to_representation(self, instance):
        session = instance.session
        data = {
            "schedule_id": str(session.id),
            "date": _ms(session.date),
            "start_minutes": session.start_minutes.value,
            "end_minutes": session.end_minutes.value,
            "time": format_time_slot(session.start_minutes.value, session.end_minutes.value),
            "venue": {"name": session.venue},
            "total_slots": session.capacity.value,
            "available_slots": instance.available_slots,
            "attendee_count": instance.stats.total,
            "is_active": instance.status.is_active,
            "is_past": instance.status.is_past,
            "is_upcoming": instance.status.is_upcoming,
            "time_context": instance.time_context,
            "stats": StatsSerializer(instance.stats).data,
        }
        if self.include_attendees:
            data["attendees"] = AttendeeSerializer(instance.attendees, many=True).data
        return data


class DashboardSerializer(serializers.Serializer):
    def to_representation(self, instance):
        current = instance.current_session
        return {
            "now": _ms(instance.now),
            "current_session": SessionViewSerializer(current).data if current is not None else None,
            "upcoming_sessions": [
                SessionViewSerializer(v, include_attendees=False).data for v in instance.upcoming_sessions
            ],
            "totals": StatsSerializer(instance.totals).data,
            "counts": {
                "total": instance.counts.total,
                "upcoming": instance.counts.upcoming,
                "active": instance.counts.active,
                "completed": instance.counts.completed,
            },
            "diagnostics": [
                {
                    "code": d.code,
                    "message": d.message,
                    "schedule_ids": [str(i) for i in d.schedule_ids],
                }
                for d in instance.diagnostics
            ],
        }


class ScanEntrySerializer(serializers.Serializer):
    def to_representation(self, instance):
        event = instance.event
        return {
            "scan_type": event.scan_type.value,
            "timestamp": _ms(event.timestamp),
            "time": format_time(event.timestamp),
            "attendee_id": str(event.attendee),
            "attendee_name": event.attendee_name,
            "schedule_id": str(event.schedule),
            "session_time_slot": event.session_time_slot,
            "session_venue": event.session_venue,
            "session_date": _ms(event.session_date),
            "duration_ms": (
                int(instance.duration.total_seconds() * 1000) if instance.duration is not None else None
            ),
        }


class ScanHistorySerializer(serializers.Serializer):
    def to_representation(self, instance):
        return {
            "start": _ms(instance.date_range.start),
            "end": _ms(instance.date_range.end),
            "stats": {
                "total": instance.stats.total,
                "check_ins": instance.stats.check_ins,
                "check_outs": instance.stats.check_outs,
            },
            "groups": [
                {
                    "date": _ms(group.day),
                    "label": group.label,
                    "scans": ScanEntrySerializer(group.entries, many=True).data,
                }
                for group in instance.groups
            ],
        }
