"""Reference-timezone arithmetic and display formatting.

All day boundaries are computed in Philippine Time (UTC+8, no DST) so that
results never depend on the host's configured timezone.
"""

import math
import re
from datetime import datetime, timedelta, timezone

REFERENCE_TZ = timezone(timedelta(hours=8), "PHT")
MINUTES_PER_DAY = 24 * 60
ONE_DAY = timedelta(days=1)

_TIME_OF_DAY_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])\s*$")

# Fixed English names; strftime names follow the process locale.
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _require_aware(instant: datetime) -> None:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError("instant must be timezone-aware")


def to_reference_time(instant: datetime) -> datetime:
    _require_aware(instant)
    return instant.astimezone(REFERENCE_TZ)


def start_of_reference_day(instant: datetime) -> datetime:
    """Return 00:00:00 PHT of the calendar day containing ``instant``."""
    local = to_reference_time(instant)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_reference_day(instant: datetime) -> datetime:
    """Return the last millisecond of the reference day containing ``instant``."""
    return start_of_reference_day(instant) + ONE_DAY - timedelta(milliseconds=1)


def same_reference_day(a: datetime, b: datetime) -> bool:
    return start_of_reference_day(a) == start_of_reference_day(b)


def from_epoch_ms(value: int | float) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def to_epoch_ms(instant: datetime) -> int:
    _require_aware(instant)
    delta = instant - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta // timedelta(milliseconds=1)


def ceil_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``, rounded up."""
    return math.ceil(delta / timedelta(minutes=1))


def parse_time_of_day(value: str) -> int | None:
    """Parse "h:mm AM/PM" into minutes since midnight.

    Returns None for anything that is not a valid 12-hour clock time.
    """
    if not isinstance(value, str):
        return None
    match = _TIME_OF_DAY_RE.match(value)
    if match is None:
        return None
    hour, minute, period = int(match.group(1)), int(match.group(2)), match.group(3).upper()
    if not 1 <= hour <= 12 or minute > 59:
        return None
    if period == "PM" and hour != 12:
        hour += 12
    if period == "AM" and hour == 12:
        hour = 0
    return hour * 60 + minute


def parse_time_slot(value: str) -> tuple[int, int] | None:
    """Parse "9:00 AM - 10:00 AM" into (start_minutes, end_minutes)."""
    if not isinstance(value, str) or " - " not in value:
        return None
    start_text, _, end_text = value.partition(" - ")
    start = parse_time_of_day(start_text)
    end = parse_time_of_day(end_text)
    if start is None or end is None or start >= end:
        return None
    return start, end


def format_clock(minutes: int) -> str:
    hour, minute = divmod(minutes, 60)
    period = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def format_time_slot(start_minutes: int, end_minutes: int) -> str:
    return f"{format_clock(start_minutes)} - {format_clock(end_minutes)}"


def format_time(instant: datetime) -> str:
    """e.g. "9:30 AM" in the reference timezone."""
    local = to_reference_time(instant)
    return format_clock(local.hour * 60 + local.minute)


def format_date(instant: datetime) -> str:
    """e.g. "Jan 15, 2025" in the reference timezone."""
    local = to_reference_time(instant)
    return f"{_MONTHS[local.month - 1][:3]} {local.day}, {local.year}"


def format_relative_date(instant: datetime, now: datetime) -> str:
    day = start_of_reference_day(instant)
    today = start_of_reference_day(now)
    if day == today:
        return "Today"
    if day == start_of_reference_day(today - ONE_DAY):
        return "Yesterday"
    return format_date(instant)


def format_weekday_date_time(instant: datetime) -> str:
    """e.g. "Tuesday, January 28 at 9:00 AM" in the reference timezone."""
    local = to_reference_time(instant)
    weekday = _WEEKDAYS[local.weekday()]
    month = _MONTHS[local.month - 1]
    return f"{weekday}, {month} {local.day} at {format_time(local)}"


def format_duration(delta: timedelta) -> str:
    """e.g. "1h 30m" or "45m"; partial minutes are dropped."""
    minutes = max(int(delta / timedelta(minutes=1)), 0)
    hours, remainder = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {remainder}m"
    return f"{minutes}m"
