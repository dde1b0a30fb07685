"""Search, filter and sort helpers for a session's attendee list."""

from collections.abc import Iterable
from enum import Enum

from orientation.domain import AttendeeStatus, AttendeeView


class AttendeeSort(Enum):
    NAME = "name"
    CHECK_IN_TIME = "checkInTime"
    STATUS = "status"


STATUS_ORDER = {
    AttendeeStatus.COMPLETED: 1,
    AttendeeStatus.CHECKED_IN: 2,
    AttendeeStatus.PENDING: 3,
    AttendeeStatus.MISSED: 4,
}


def _name_key(attendee: AttendeeView) -> str:
    return attendee.record.full_name.casefold()


def _check_in_key(attendee: AttendeeView) -> tuple:
    # Attendees without a check-in sort before everyone who has one.
    check_in = attendee.record.check_in_time
    return (check_in is not None, check_in.timestamp() if check_in else 0.0)


def _status_key(attendee: AttendeeView) -> int:
    return STATUS_ORDER[attendee.status]


_SORT_KEYS = {
    AttendeeSort.NAME: _name_key,
    AttendeeSort.CHECK_IN_TIME: _check_in_key,
    AttendeeSort.STATUS: _status_key,
}


def filter_attendees(
    attendees: Iterable[AttendeeView],
    search: str = "",
    status: AttendeeStatus | None = None,
) -> list[AttendeeView]:
    query = search.strip().lower()
    result = []
    for attendee in attendees:
        if query and query not in attendee.record.full_name.lower():
            continue
        if status is not None and attendee.status is not status:
            continue
        result.append(attendee)
    return result


def sort_attendees(
    attendees: Iterable[AttendeeView],
    sort_by: AttendeeSort = AttendeeSort.NAME,
    descending: bool = False,
) -> list[AttendeeView]:
    return sorted(attendees, key=_SORT_KEYS[sort_by], reverse=descending)
