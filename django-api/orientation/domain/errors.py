"""Domain error codes for the orientation module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    CLOCK_NOT_SYNCED = "CLOCK_NOT_SYNCED"
    SNAPSHOT_UNAVAILABLE = "SNAPSHOT_UNAVAILABLE"
    INVALID_SESSION_WINDOW = "INVALID_SESSION_WINDOW"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_SCAN_TYPE = "INVALID_SCAN_TYPE"
    SCHEDULE_NOT_FOUND = "SCHEDULE_NOT_FOUND"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ClockNotSyncedError(DomainError):
    """Raised when trusted time is requested before the anchor is fetched."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CLOCK_NOT_SYNCED,
            message="Trusted time is not available yet",
        )


class SnapshotUnavailableError(DomainError):
    """Raised when no session snapshot has been fetched yet."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SNAPSHOT_UNAVAILABLE,
            message="Session data is not available yet",
        )


class InvalidSessionWindowError(DomainError):
    """Raised when a session window violates its construction contract."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SESSION_WINDOW,
            message=f"Invalid session window: {reason}",
        )
        object.__setattr__(self, "reason", reason)


class InvalidDateRangeError(DomainError):
    """Raised when a scan history range starts after it ends."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE_RANGE,
            message="Start date must not be after end date",
        )


class InvalidScanTypeError(DomainError):
    """Raised when a scan type is not check-in or check-out."""

    def __init__(self, value: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SCAN_TYPE,
            message="Scan type must be check-in or check-out",
        )
        object.__setattr__(self, "value", value)


class ScheduleNotFoundError(DomainError):
    """Raised when a schedule is not found."""

    def __init__(self, schedule_id: str) -> None:
        super().__init__(
            code=ErrorCode.SCHEDULE_NOT_FOUND,
            message="Schedule not found",
        )
        object.__setattr__(self, "schedule_id", schedule_id)
