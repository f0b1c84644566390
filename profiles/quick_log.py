"""One-tap event logging using a profile's defaults.

Used by home-automation buttons and shortcuts that only know a profile id
(or handle) and what just happened.
"""

from django.utils import timezone

from activities.models import Activity
from diapers.models import DiaperChange
from feedings.models import Feeding
from naps.models import Nap
from pumpings.models import Pumping

from .constants import DEFAULT_NURSING_MINUTES_PER_SIDE


def _bottle_feed(profile, now):
    return Feeding.objects.create(
        profile=profile,
        feeding_type=Feeding.FeedingType.BOTTLE,
        fed_at=now,
        volume_ml=profile.default_feeding_volume,
    )


def _nursing(profile, now):
    return Feeding.objects.create(
        profile=profile,
        feeding_type=Feeding.FeedingType.NURSING,
        fed_at=now,
        left_duration_minutes=DEFAULT_NURSING_MINUTES_PER_SIDE,
        right_duration_minutes=DEFAULT_NURSING_MINUTES_PER_SIDE,
    )


def _pumping(profile, now):
    return Pumping.objects.create(
        profile=profile,
        pumped_at=now,
        duration_minutes=profile.pumping_duration,
        volume_ml=profile.default_feeding_volume,
    )


def _poop(profile, now):
    # Poop almost always comes with pee
    return DiaperChange.objects.create(
        profile=profile, changed_at=now, change_type=DiaperChange.ChangeType.BOTH
    )


def _pee(profile, now):
    return DiaperChange.objects.create(
        profile=profile, changed_at=now, change_type=DiaperChange.ChangeType.WET
    )


def _sleep(profile, now):
    return Nap.objects.create(profile=profile, napped_at=now)


def _play(profile, now):
    return Activity.objects.create(
        profile=profile, kind=Activity.Kind.PLAY, occurred_at=now
    )


def _bath(profile, now):
    return Activity.objects.create(
        profile=profile, kind=Activity.Kind.BATH, occurred_at=now
    )


QUICK_LOG_COMMANDS = {
    "bottle-feed": _bottle_feed,
    "nursing": _nursing,
    "pumping": _pumping,
    "poop": _poop,
    "pee": _pee,
    "sleep": _sleep,
    "play": _play,
    "bath": _bath,
}


def log_event(profile, command, now=None):
    """Create the event for ``command`` at ``now`` (default: current time).

    Raises:
        KeyError: If the command is not one of ``QUICK_LOG_COMMANDS``
    """
    create = QUICK_LOG_COMMANDS[command]
    return create(profile, now or timezone.now())
