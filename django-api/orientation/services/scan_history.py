"""Grouping and filtering of check-in/check-out scans for history views."""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from orientation.domain import (
    AttendeeId,
    ScanEvent,
    ScanHistoryEntry,
    ScanHistoryGroup,
    ScanHistoryStats,
    ScanType,
    ScheduleId,
)
from orientation.domain.errors import InvalidDateRangeError
from orientation.domain.reference_time import (
    end_of_reference_day,
    format_relative_date,
    start_of_reference_day,
)

class DatePreset(Enum):
    TODAY = "today"
    LAST_7_DAYS = "last-7-days"
    LAST_30_DAYS = "last-30-days"
    CUSTOM = "custom"


PRESET_DAYS = {
    DatePreset.TODAY: 0,
    DatePreset.LAST_7_DAYS: 7,
    DatePreset.LAST_30_DAYS: 30,
}


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidDateRangeError()

    def __contains__(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def resolve_date_range(
    preset: DatePreset,
    now: datetime,
    custom: DateRange | None = None,
) -> DateRange:
    """Turn a preset into a concrete range ending at the close of today.

    ``custom`` without a range falls back to the last seven days.
    """
    if preset is DatePreset.CUSTOM and custom is not None:
        return custom
    days = PRESET_DAYS.get(preset, PRESET_DAYS[DatePreset.LAST_7_DAYS])
    today = start_of_reference_day(now)
    return DateRange(start=today - timedelta(days=days), end=end_of_reference_day(now))


def filter_scans(
    events: Iterable[ScanEvent],
    date_range: DateRange | None = None,
    scan_type: ScanType | None = None,
) -> list[ScanEvent]:
    return [
        event
        for event in events
        if (date_range is None or event.timestamp in date_range)
        and (scan_type is None or event.scan_type is scan_type)
    ]


def pair_durations(events: Iterable[ScanEvent]) -> dict[int, timedelta]:
    """Advisory durations for check-outs, keyed by ``id()`` of the check-out event.

    A check-out is matched to the latest earlier check-in by the same
    attendee for the same session; failing that, to the check-in instant the
    event itself carries. Check-outs without any check-in get no duration.
    """
    check_ins: dict[tuple[AttendeeId, ScheduleId], list[datetime]] = defaultdict(list)
    ordered = sorted(events, key=lambda e: e.timestamp)
    for event in ordered:
        if event.scan_type is ScanType.CHECK_IN:
            check_ins[(event.attendee, event.schedule)].append(event.timestamp)

    durations = {}
    for event in ordered:
        if event.scan_type is not ScanType.CHECK_OUT:
            continue
        earlier = [t for t in check_ins.get((event.attendee, event.schedule), ()) if t <= event.timestamp]
        check_in = earlier[-1] if earlier else event.check_in_time
        if check_in is not None and check_in <= event.timestamp:
            durations[id(event)] = event.timestamp - check_in
    return durations


def group_scan_history(
    events: Iterable[ScanEvent],
    now: datetime,
    date_range: DateRange | None = None,
    scan_type: ScanType | None = None,
) -> list[ScanHistoryGroup]:
    """Bucket scans by reference calendar day.

    Groups are ordered newest day first, and entries within a group newest
    scan first. ``now`` only feeds the "Today"/"Yesterday" labels.
    """
    events = list(events)
    durations = pair_durations(events)
    buckets: dict[datetime, list[ScanEvent]] = defaultdict(list)
    for event in filter_scans(events, date_range, scan_type):
        buckets[start_of_reference_day(event.timestamp)].append(event)

    groups = []
    for day in sorted(buckets, reverse=True):
        day_events = sorted(buckets[day], key=lambda e: e.timestamp, reverse=True)
        groups.append(
            ScanHistoryGroup(
                day=day,
                label=format_relative_date(day, now),
                entries=tuple(
                    ScanHistoryEntry(event=e, duration=durations.get(id(e))) for e in day_events
                ),
            )
        )
    return groups


def summarize_scans(events: Iterable[ScanEvent]) -> ScanHistoryStats:
    total = check_ins = check_outs = 0
    for event in events:
        total += 1
        if event.scan_type is ScanType.CHECK_IN:
            check_ins += 1
        elif event.scan_type is ScanType.CHECK_OUT:
            check_outs += 1
    return ScanHistoryStats(total=total, check_ins=check_ins, check_outs=check_outs)
