"""Forward committed data changes to the notification service.

Model instances are converted to plain value objects when the signal fires
(a deleted row's primary key is gone by the time the transaction commits);
the service is only called once the change is durable.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from activities.models import Activity
from diapers.models import DiaperChange
from feedings.models import Feeding
from naps.models import Nap
from profiles.models import BabyProfile
from pumpings.models import Pumping

from .reminders import TrackedEvent
from .service import get_service
from .snapshots import ProfileSnapshot

TRACKED_MODELS = (Feeding, Pumping, DiaperChange, Nap, Activity)


def tracked_event(instance) -> TrackedEvent:
    """Build the engine's view of a tracking record."""
    return TrackedEvent(
        event_id=str(instance.pk),
        kind=instance.event_kind,
        timestamp=getattr(instance, instance.timestamp_field),
        profile=ProfileSnapshot.from_profile(instance.profile),
        summary=instance.notification_summary,
    )


@receiver(post_save, sender=BabyProfile, dispatch_uid="notify_profile_saved")
def profile_saved(sender, instance, raw=False, **kwargs):
    if raw:
        return
    snapshot = ProfileSnapshot.from_profile(instance)
    transaction.on_commit(lambda: get_service().profile_updated(snapshot))


@receiver(post_delete, sender=BabyProfile, dispatch_uid="notify_profile_deleted")
def profile_deleted(sender, instance, **kwargs):
    snapshot = ProfileSnapshot.from_profile(instance)
    transaction.on_commit(lambda: get_service().profile_removed(snapshot))


def event_saved(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    event = tracked_event(instance)
    if created:
        transaction.on_commit(lambda: get_service().event_created(event))
    else:
        transaction.on_commit(lambda: get_service().event_updated(event))


def event_deleted(sender, instance, **kwargs):
    event = tracked_event(instance)
    transaction.on_commit(lambda: get_service().event_removed(event))


for model in TRACKED_MODELS:
    label = model._meta.label_lower
    post_save.connect(event_saved, sender=model, dispatch_uid=f"notify_{label}_saved")
    post_delete.connect(
        event_deleted, sender=model, dispatch_uid=f"notify_{label}_deleted"
    )
