import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OrientationSchedule",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("date", models.DateTimeField(help_text="Midnight of the slot's day in Philippine Time")),
                ("start_minutes", models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(1439)])),
                ("end_minutes", models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(1439)])),
                ("venue_name", models.CharField(max_length=255)),
                ("total_slots", models.PositiveIntegerField(default=0)),
                ("is_upcoming", models.BooleanField(blank=True, null=True)),
                ("is_past", models.BooleanField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["date", "start_minutes"],
                "indexes": [models.Index(fields=["date", "start_minutes"], name="orientation_date_7d1c3e_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(start_minutes__lt=models.F("end_minutes")),
                        name="schedule_start_before_end",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="OrientationBooking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("application_id", models.CharField(max_length=64)),
                ("full_name", models.CharField(max_length=255)),
                ("check_in_time", models.DateTimeField(blank=True, null=True)),
                ("check_out_time", models.DateTimeField(blank=True, null=True)),
                ("qr_payload", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "schedule",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="orientation.orientationschedule",
                    ),
                ),
            ],
            options={
                "ordering": ["full_name"],
                "indexes": [
                    models.Index(fields=["schedule"], name="orientation_schedul_2b9f4a_idx"),
                    models.Index(fields=["application_id"], name="orientation_applica_5e0d81_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ScanRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "scan_type",
                    models.CharField(
                        choices=[("check-in", "Check-in"), ("check-out", "Check-out")], max_length=16
                    ),
                ),
                ("timestamp", models.DateTimeField()),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="scans",
                        to="orientation.orientationbooking",
                    ),
                ),
            ],
            options={
                "ordering": ["-timestamp"],
                "indexes": [
                    models.Index(fields=["-timestamp"], name="orientation_timesta_9a4c2f_idx"),
                    models.Index(fields=["scan_type", "-timestamp"], name="orientation_scan_ty_3f7e60_idx"),
                ],
            },
        ),
    ]
