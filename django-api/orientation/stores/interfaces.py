"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from orientation.domain import ScanEvent, ScanType, ScheduleId, SessionWindow


class TimeAuthority(ABC):
    """Remote source of trusted time."""

    @abstractmethod
    def server_now(self) -> datetime:
        """Return the authority's current instant (timezone-aware)."""
        ...

    @abstractmethod
    def reference_day_start(self) -> datetime:
        """Return the start of today in the reference timezone, as computed by the authority."""
        ...


class SessionStore(ABC):
    """Read access to session snapshots."""

    @abstractmethod
    def get_sessions_for_day(self, day: datetime) -> list[SessionWindow]:
        """Return sessions whose date equals ``day``, with attendees, ordered by start."""
        ...

    @abstractmethod
    def get_session(self, schedule_id: ScheduleId) -> SessionWindow | None:
        """Return one session with attendees, or None if not found."""
        ...


class ScanEventStore(ABC):
    """Read access to the append-only scan log."""

    @abstractmethod
    def list_scan_events(
        self,
        start: datetime | None,
        end: datetime | None,
        scan_type: ScanType | None = None,
        limit: int | None = None,
    ) -> list[ScanEvent]:
        """Return scans within [start, end], newest first, at most ``limit``."""
        ...
