"""Helpers shared by the notifications test modules."""

from datetime import datetime, timezone as dt_timezone
from unittest.mock import patch

from .reminders import EventKind, TrackedEvent
from .snapshots import ProfileSnapshot


def at(hour, minute=0, day=1):
    """2024-01-<day> <hour>:<minute> UTC."""
    return datetime(2024, 1, day, hour, minute, tzinfo=dt_timezone.utc)


def frozen_now(moment):
    """Patch the clock seen by the daytime policy and the scheduler."""
    return patch("django.utils.timezone.now", return_value=moment)


def make_snapshot(profile_id="p1", **overrides):
    values = {"name": "Baby"}
    values.update(overrides)
    return ProfileSnapshot(profile_id=profile_id, **values)


def make_event(event_id, timestamp, kind=EventKind.BOTTLE_FEED, profile=None, summary=""):
    return TrackedEvent(
        event_id=event_id,
        kind=kind,
        timestamp=timestamp,
        profile=profile or make_snapshot(),
        summary=summary,
    )


class RecordingGateway:
    """Gateway double that keeps every message instead of sending it."""

    def __init__(self):
        self.sent = []
        self.debug = []
        self.calls = []

    def notify(self, sender, message):
        self.sent.append((sender, message))

    def notify_debug(self, sender, message):
        self.debug.append((sender, message))

    def call(self, url):
        self.calls.append(url)
