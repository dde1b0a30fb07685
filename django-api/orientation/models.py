"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.core.validators import MaxValueValidator
from django.db import models


class OrientationSchedule(models.Model):
    """Persistence model for an orientation slot on one reference day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateTimeField(help_text="Midnight of the slot's day in Philippine Time")
    start_minutes = models.PositiveSmallIntegerField(validators=[MaxValueValidator(1439)])
    end_minutes = models.PositiveSmallIntegerField(validators=[MaxValueValidator(1439)])
    venue_name = models.CharField(max_length=255)
    total_slots = models.PositiveIntegerField(default=0)
    is_upcoming = models.BooleanField(null=True, blank=True)
    is_past = models.BooleanField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date", "start_minutes"]
        indexes = [
            models.Index(fields=["date", "start_minutes"], name="orientation_date_7d1c3e_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_minutes__lt=models.F("end_minutes")),
                name="schedule_start_before_end",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.venue_name} - {self.date:%Y-%m-%d} {self.start_minutes}-{self.end_minutes}"


class OrientationBooking(models.Model):
    """Persistence model for one attendee booked into a schedule."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    schedule = models.ForeignKey(
        OrientationSchedule, on_delete=models.CASCADE, related_name="bookings"
    )
    application_id = models.CharField(max_length=64)
    full_name = models.CharField(max_length=255)
    check_in_time = models.DateTimeField(null=True, blank=True)
    check_out_time = models.DateTimeField(null=True, blank=True)
    qr_payload = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["full_name"]
        indexes = [
            models.Index(fields=["schedule"], name="orientation_schedul_2b9f4a_idx"),
            models.Index(fields=["application_id"], name="orientation_applica_5e0d81_idx"),
        ]

    def __str__(self) -> str:
        return self.full_name


class ScanRecord(models.Model):
    """Append-only log of check-in and check-out scans."""

    class ScanType(models.TextChoices):
        CHECK_IN = "check-in", "Check-in"
        CHECK_OUT = "check-out", "Check-out"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking = models.ForeignKey(
        OrientationBooking, on_delete=models.CASCADE, related_name="scans"
    )
    scan_type = models.CharField(max_length=16, choices=ScanType.choices)
    timestamp = models.DateTimeField()

    class Meta:
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["-timestamp"], name="orientation_timesta_9a4c2f_idx"),
            models.Index(fields=["scan_type", "-timestamp"], name="orientation_scan_ty_3f7e60_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.scan_type} - {self.booking.full_name} - {self.timestamp}"
