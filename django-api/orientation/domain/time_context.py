"""Human-readable phrases relating "now" to a session window."""

from datetime import datetime

from orientation.domain.models import SessionWindow
from orientation.domain.reference_time import (
    ceil_minutes,
    format_weekday_date_time,
    parse_time_slot,
    same_reference_day,
    start_of_reference_day,
)
from orientation.domain.value_objects import MinuteOfDay, ScheduleId

WARNING_MARKER = "⚠️"
ENDING_SOON_MINUTES = 15
_TIME_SLOT_ID = ScheduleId("time-slot")


def pluralize(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_hours_minutes(minutes: int) -> str:
    hours, remainder = divmod(minutes, 60)
    return f"{hours}h {remainder}m"


def minutes_remaining(window: SessionWindow, now: datetime) -> int:
    return ceil_minutes(window.end_instant - now)


def minutes_until_start(window: SessionWindow, now: datetime) -> int:
    return ceil_minutes(window.start_instant - now)


def format_time_context(
    window: SessionWindow,
    now: datetime,
    *,
    hint_active: bool = False,
    ending_soon_minutes: int = ENDING_SOON_MINUTES,
) -> str:
    """Describe where ``now`` sits relative to ``window``.

    Rules are evaluated in order and the first match wins:

    1. Running (by time, or flagged active while the end is still ahead):
       a countdown to the end, with a warning marker under
       ``ending_soon_minutes``.
    2. Upcoming on the same reference day: a countdown to the start.
    3. Upcoming on a later day: the weekday, date and start time.
    4. Ended: "Session ended".
    """
    start, end = window.start_instant, window.end_instant
    running = start <= now < end or (hint_active and now < end)

    if running:
        remaining = minutes_remaining(window, now)
        if remaining < ending_soon_minutes:
            return f"{WARNING_MARKER} Ending in {pluralize(remaining, 'minute')}"
        if remaining < 60:
            return f"Ends in {pluralize(remaining, 'minute')}"
        return f"Ends in {format_hours_minutes(remaining)}"

    if now < start:
        if same_reference_day(start, now):
            until = minutes_until_start(window, now)
            if until == 0:
                return "Starting now..."
            if until < 60:
                return f"Starts in {pluralize(until, 'minute')}"
            return f"Starts in {format_hours_minutes(until)}"
        return f"Starts {format_weekday_date_time(start)}"

    if now >= end:
        return "Session ended"

    return ""


def format_time_slot_context(
    day: datetime,
    time_slot: str,
    now: datetime,
    **kwargs,
) -> str:
    """Like format_time_context, for a session described by a "h:mm AM - h:mm PM" label.

    A label that cannot be parsed yields an empty string, meaning no context
    is available.
    """
    bounds = parse_time_slot(time_slot)
    if bounds is None:
        return ""
    window = SessionWindow(
        id=_TIME_SLOT_ID,
        date=start_of_reference_day(day),
        start_minutes=MinuteOfDay(bounds[0]),
        end_minutes=MinuteOfDay(bounds[1]),
    )
    return format_time_context(window, now, **kwargs)

