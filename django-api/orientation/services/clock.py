"""Trusted clock anchored on a remote time authority.

Only the locally measured elapsed time is trusted, never the local wall
clock's absolute value:

    now = server_instant + (monotonic() - monotonic_at_fetch)
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from orientation.domain.errors import ClockNotSyncedError
from orientation.domain.reference_time import ONE_DAY, start_of_reference_day
from orientation.stores.interfaces import TimeAuthority

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anchor:
    server_instant: datetime
    local_at_fetch: float
    reference_day_start: datetime


@dataclass(frozen=True)
class DisplayTime:
    """An instant for display, flagged when it did not come from the anchor."""

    instant: datetime
    verified: bool


class TrustedClock:
    """Computes "now" from a single server anchor plus local elapsed time."""

    def __init__(
        self,
        authority: TimeAuthority,
        monotonic: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._authority = authority
        self._monotonic = monotonic
        self._wall_clock = wall_clock
        self._anchor: Anchor | None = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def anchor(self) -> Anchor | None:
        return self._anchor

    @property
    def is_synced(self) -> bool:
        return self._anchor is not None

    def on_synced(self, callback: Callable[[], None]) -> None:
        """Register a callback fired once the anchor becomes available."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def sync(self) -> Anchor:
        """Fetch the anchor from the authority.

        Errors from the authority propagate; the clock stays unsynced.
        """
        server_instant = self._authority.server_now()
        local_at_fetch = self._monotonic()
        if server_instant.tzinfo is None:
            raise ValueError("Time authority returned a naive datetime")
        day_start = self._authority.reference_day_start()
        self._anchor = Anchor(
            server_instant=server_instant,
            local_at_fetch=local_at_fetch,
            reference_day_start=day_start,
        )
        logger.info("Trusted clock anchored at %s", server_instant.isoformat())
        for callback in list(self._listeners):
            callback()
        return self._anchor

    def now(self) -> datetime:
        """Trusted current instant.

        Raises:
            ClockNotSyncedError: If the anchor has not been fetched yet.
        """
        anchor = self._anchor
        if anchor is None:
            raise ClockNotSyncedError()
        elapsed = self._monotonic() - anchor.local_at_fetch
        return anchor.server_instant + timedelta(seconds=elapsed)

    def now_or_none(self) -> datetime | None:
        return self.now() if self._anchor is not None else None

    def today(self) -> datetime:
        """Start of the current reference day, from trusted time.

        While trusted time is still on the anchor's day, the day start the
        authority reported is used as is.
        """
        now = self.now()
        anchored = self._anchor.reference_day_start
        if anchored <= now < anchored + ONE_DAY:
            return anchored
        return start_of_reference_day(now)

    def display_now(self) -> DisplayTime:
        """Trusted time when available, otherwise the local clock marked unverified.

        Never use the unverified value for access or status decisions.
        """
        if self._anchor is not None:
            return DisplayTime(instant=self.now(), verified=True)
        return DisplayTime(instant=self._wall_clock(), verified=False)
