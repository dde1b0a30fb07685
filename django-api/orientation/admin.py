from django.contrib import admin

from orientation.models import OrientationBooking, OrientationSchedule, ScanRecord


class BookingInline(admin.TabularInline):
    model = OrientationBooking
    extra = 1


class ScanRecordInline(admin.TabularInline):
    model = ScanRecord
    extra = 0


@admin.register(OrientationSchedule)
class OrientationScheduleAdmin(admin.ModelAdmin):
    list_display = ["venue_name", "date", "start_minutes", "end_minutes", "total_slots"]
    list_filter = ["date", "venue_name"]
    inlines = [BookingInline]


@admin.register(OrientationBooking)
class OrientationBookingAdmin(admin.ModelAdmin):
    list_display = ["full_name", "application_id", "schedule", "check_in_time", "check_out_time"]
    search_fields = ["full_name", "application_id"]
    list_filter = ["schedule__date"]
    inlines = [ScanRecordInline]


@admin.register(ScanRecord)
class ScanRecordAdmin(admin.ModelAdmin):
    list_display = ["booking", "scan_type", "timestamp"]
    list_filter = ["scan_type"]
