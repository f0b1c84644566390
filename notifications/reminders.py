"""Reminder records and the per-family scheduling rules.

A ``Reminder`` is derived state anchored to the latest logged event of a
reminder family (feeding or pumping) for one profile. The rules that differ
between families are plain functions dispatched on ``Reminder.family``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta
from django.utils import timezone

from .daytime import is_daytime
from .snapshots import ProfileSnapshot


class EventKind(enum.Enum):
    """Every kind of event the data layer can report."""

    BOTTLE_FEED = "bottle_feed"
    NURSING = "nursing"
    PUMPING = "pumping"
    DIAPER_CHANGE = "diaper_change"
    SLEEP = "sleep"
    PLAY = "play"
    BATH = "bath"
    MEASUREMENT = "measurement"
    MEDICINE = "medicine"
    NOTE = "note"
    TRAVEL = "travel"


class ReminderFamily(enum.Enum):
    """Event kinds that share one repeating reminder."""

    FEEDING = "feeding"
    PUMPING = "pumping"


_FAMILY_BY_KIND = {
    EventKind.BOTTLE_FEED: ReminderFamily.FEEDING,
    EventKind.NURSING: ReminderFamily.FEEDING,
    EventKind.PUMPING: ReminderFamily.PUMPING,
}


def family_for_kind(kind: EventKind) -> ReminderFamily | None:
    """Return the reminder family for an event kind, or None if not repeating."""
    return _FAMILY_BY_KIND.get(kind)


@dataclass(frozen=True)
class TrackedEvent:
    """What the engine needs to know about a logged event.

    Attributes:
        event_id: Unique event id (unique across every event table)
        kind: What was logged
        timestamp: When the event happened
        profile: Settings of the owning profile at the time of the change
        summary: Short human text for activity notifications
    """

    event_id: str
    kind: EventKind
    timestamp: datetime
    profile: ProfileSnapshot
    summary: str = ""

    @property
    def profile_id(self) -> str:
        return self.profile.profile_id

    @property
    def family(self) -> ReminderFamily | None:
        return family_for_kind(self.kind)


@dataclass(frozen=True)
class TimingConfig:
    daytime_interval: timedelta
    nighttime_interval: timedelta
    daytime_start: int
    daytime_end: int


@dataclass
class Reminder:
    """Live reminder state for one (profile, family) pair.

    Attributes:
        event_id: Id of the event this reminder is anchored to
        profile_id: Owning profile id
        family: Reminder family of the anchored event
        event_timestamp: Time of the anchored event (updated on edits)
        last_notified_timestamp: When a stage last fired; only moves forward
            except when an edit moves ``event_timestamp``
    """

    event_id: str
    profile_id: str
    family: ReminderFamily
    event_timestamp: datetime
    last_notified_timestamp: datetime | None = None

    def to_dict(self):
        return {
            "event_id": self.event_id,
            "profile_id": self.profile_id,
            "family": self.family.value,
            "event_timestamp": self.event_timestamp.isoformat(),
            "last_notified_timestamp": (
                self.last_notified_timestamp.isoformat()
                if self.last_notified_timestamp
                else None
            ),
        }


def timing_config(family: ReminderFamily, snapshot: ProfileSnapshot) -> TimingConfig:
    """Pick the intervals and daytime window a family is scheduled with.

    Feeding follows the baby's day; pumping follows the parent's day.
    """
    if family is ReminderFamily.FEEDING:
        return TimingConfig(
            daytime_interval=snapshot.feeding_interval,
            nighttime_interval=snapshot.night_feeding_interval,
            daytime_start=snapshot.baby_daytime_start,
            daytime_end=snapshot.baby_daytime_end,
        )
    if family is ReminderFamily.PUMPING:
        return TimingConfig(
            daytime_interval=snapshot.pumping_interval,
            nighttime_interval=snapshot.night_pumping_interval,
            daytime_start=snapshot.parent_daytime_start,
            daytime_end=snapshot.parent_daytime_end,
        )
    raise ValueError(f"Unknown reminder family: {family}")


def notify_enabled(family: ReminderFamily, snapshot: ProfileSnapshot) -> bool:
    if family is ReminderFamily.FEEDING:
        return snapshot.enable_feeding_reminder
    if family is ReminderFamily.PUMPING:
        return snapshot.enable_pumping_reminder
    raise ValueError(f"Unknown reminder family: {family}")


def next_event_timestamp(
    reminder: Reminder, snapshot: ProfileSnapshot
) -> datetime | None:
    """Compute when the next event of the reminder's family is expected.

    Uses the daytime interval if it lands in daytime, otherwise the nighttime
    interval if that lands in nighttime. A zero interval for the current part
    of the day, or an interval pair that matches neither rule, yields None.
    """
    cfg = timing_config(reminder.family, snapshot)
    start, end = cfg.daytime_start, cfg.daytime_end

    if is_daytime(reminder.event_timestamp, start, end):
        if not cfg.daytime_interval:
            return None
    elif not cfg.nighttime_interval:
        return None

    candidate = reminder.event_timestamp + cfg.daytime_interval
    if is_daytime(candidate, start, end):
        return candidate

    candidate = reminder.event_timestamp + cfg.nighttime_interval
    if not is_daytime(candidate, start, end):
        return candidate

    return None


_DURATION_UNITS = ("years", "months", "days", "hours", "minutes")


def _plural(value, unit):
    return f"{value} {unit if value != 1 else unit[:-1]}"


def format_duration(start: datetime, end: datetime) -> str:
    """Human relative duration between two instants, e.g. '2 hours 15 minutes'.

    Shows the two most significant non-zero units; spans under a minute are
    shown in seconds.
    """
    delta = relativedelta(max(start, end), min(start, end))
    parts = []
    for unit in _DURATION_UNITS:
        value = getattr(delta, unit)
        if value:
            parts.append(_plural(value, unit))
        elif parts:
            break
        if len(parts) == 2:
            break
    if not parts:
        return _plural(delta.seconds, "seconds")
    return " ".join(parts)


_MESSAGE_VERBS = {
    ReminderFamily.FEEDING: ("Feed baby", "last fed"),
    ReminderFamily.PUMPING: ("Pump", "last pumped"),
}


def generate_message(
    reminder: Reminder, advance: timedelta, now: datetime | None = None
) -> str:
    """Reminder text, e.g. 'Feed baby in 30 minutes (last fed 2 hours ago)'.

    Args:
        reminder: The reminder being announced
        advance: Lead time of the stage that fired; zero means "now"
        now: Reference time for "time since last event" (defaults to now)
    """
    action, since = _MESSAGE_VERBS[reminder.family]
    now = now or timezone.now()
    when = f"in {int(advance.total_seconds() // 60)} minutes" if advance else "now"
    elapsed = format_duration(reminder.event_timestamp, now)
    return f"{action} {when} ({since} {elapsed} ago)"
