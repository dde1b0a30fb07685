"""Django signals for cache invalidation.

Any change to a schedule, booking or scan drops the cached snapshot of the
affected reference day. A schedule moved to another day, or a booking moved
to another schedule, drops the previous day as well.
"""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from orientation.models import OrientationBooking, OrientationSchedule, ScanRecord
from orientation.stores.django_store import sessions_cache_key


def _invalidate_day(schedule: OrientationSchedule) -> None:
    cache.delete(sessions_cache_key(schedule.date))


def _invalidate_stored_day(instance) -> None:
    stored_date = getattr(instance, "_stored_date", None)
    if stored_date is not None:
        cache.delete(sessions_cache_key(stored_date))


@receiver(pre_save, sender=OrientationSchedule)
def remember_schedule_date(sender, instance, **kwargs):
    """Record the schedule's stored date before it is overwritten."""
    instance._stored_date = (
        sender.objects.filter(pk=instance.pk).values_list("date", flat=True).first()
    )


@receiver(pre_save, sender=OrientationBooking)
def remember_booking_date(sender, instance, **kwargs):
    """Record the stored schedule date of a booking before it is overwritten."""
    instance._stored_date = (
        sender.objects.filter(pk=instance.pk).values_list("schedule__date", flat=True).first()
    )


@receiver([post_save, post_delete], sender=OrientationSchedule)
def invalidate_schedule_cache(sender, instance, **kwargs):
    """Invalidate the day snapshot when a schedule is saved or deleted."""
    _invalidate_day(instance)
    _invalidate_stored_day(instance)


@receiver([post_save, post_delete], sender=OrientationBooking)
def invalidate_booking_cache(sender, instance, **kwargs):
    """Invalidate the day snapshot when a booking is saved or deleted."""
    _invalidate_day(instance.schedule)
    _invalidate_stored_day(instance)


@receiver([post_save, post_delete], sender=ScanRecord)
def invalidate_scan_cache(sender, instance, **kwargs):
    """Invalidate the day snapshot when a scan is recorded or removed."""
    _invalidate_day(instance.booking.schedule)
