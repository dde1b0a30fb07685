"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class ScheduleId:
    """Opaque identifier for an orientation schedule slot."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("ScheduleId cannot be empty")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AttendeeId:
    """Opaque reference to an attendee (the application they booked with)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("AttendeeId cannot be empty")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MinuteOfDay:
    """Offset in minutes from a reference-day midnight, 0..1439."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("MinuteOfDay must be an integer")
        if not 0 <= self.value < MINUTES_PER_DAY:
            raise ValueError("MinuteOfDay must be between 0 and 1439")

    @property
    def hour(self) -> int:
        return self.value // 60

    @property
    def minute(self) -> int:
        return self.value % 60


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
