"""Signals to end open sleeps when a new activity is recorded.

When a feeding, diaper change, or new sleep is created, any open sleeps
(ended_at is NULL) for the same baby that started before the activity
are ended with the activity's timestamp.
"""

from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils import timezone

from diapers.models import DiaperChange
from feedings.models import Feeding

from .models import Nap


def _end_open_naps(profile_id, activity_timestamp, exclude_pk=None):
    """End all open sleeps for a baby that started before the given timestamp.

    Args:
        profile_id: The baby whose open sleeps should be ended.
        activity_timestamp: The timestamp to set as ended_at.
        exclude_pk: Optional nap PK to exclude (when a new sleep triggers this).
    """
    qs = Nap.objects.filter(
        profile_id=profile_id,
        ended_at__isnull=True,
        napped_at__lt=activity_timestamp,
    )
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    qs.update(ended_at=activity_timestamp, updated_at=timezone.now())


@receiver(post_save, sender=Feeding)
def end_naps_on_feeding(sender, instance, created, **kwargs):
    if created:
        _end_open_naps(instance.profile_id, instance.fed_at)


@receiver(post_save, sender=DiaperChange)
def end_naps_on_diaper_change(sender, instance, created, **kwargs):
    if created:
        _end_open_naps(instance.profile_id, instance.changed_at)


@receiver(post_save, sender=Nap)
def end_naps_on_new_nap(sender, instance, created, **kwargs):
    """End open sleeps when a new sleep is logged (excluding itself)."""
    if created:
        _end_open_naps(instance.profile_id, instance.napped_at, exclude_pk=instance.pk)
