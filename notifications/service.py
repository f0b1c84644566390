"""Notification service: the entry point the data layer talks to.

One instance is built at startup (see ``NotificationsConfig.ready``) and
owns the reminder registry, the profile snapshot cache, the gateway and the
reminder scheduler. Every mutation and every scheduler tick holds the same
lock, so request threads and the scheduler thread never interleave.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from django.apps import apps
from django.conf import settings

from .gateway import WebhookGateway
from .registry import ReminderRegistry
from .reminders import ReminderFamily, TrackedEvent, next_event_timestamp
from .scheduler import REMINDER_INTERVAL, ReminderScheduler
from .snapshots import ProfileSnapshot, ProfileSnapshotCache

logger = logging.getLogger(__name__)


class NotificationService:
    """Keeps reminders in sync with logged events and sends notifications.

    Args:
        gateway: Notification gateway (defaults to ``WebhookGateway`` built
            from settings)
        request_assistant_url: Hook called by ``request_assistant``
        interval: Scheduler tick period in seconds
    """

    def __init__(self, gateway=None, request_assistant_url=None, interval=REMINDER_INTERVAL):
        self.gateway = gateway if gateway is not None else WebhookGateway.from_settings()
        if request_assistant_url is None:
            request_assistant_url = getattr(settings, "REQUEST_ASSISTANT_URL", "")
        self.request_assistant_url = request_assistant_url
        self.registry = ReminderRegistry()
        self.snapshots = ProfileSnapshotCache()
        self._lock = threading.RLock()
        self.scheduler = ReminderScheduler(
            self.registry,
            self.snapshots,
            self.gateway,
            lock=self._lock,
            interval=interval,
        )

    # Profiles

    def profile_updated(self, profile: ProfileSnapshot) -> None:
        """Refresh the cached settings after a profile is created or updated."""
        self.gateway.notify(f"[Profile] {profile.display_name}", "Profile updated")
        with self._lock:
            self.snapshots.upsert_if_changed(profile)

    def profile_removed(self, profile: ProfileSnapshot) -> None:
        """Forget a deleted profile and all of its reminders."""
        self.gateway.notify(
            f"[Profile] {profile.display_name}",
            "Profile removed! All associated data are also removed.",
        )
        with self._lock:
            self.snapshots.remove(profile.profile_id)
            self.registry.on_profile_removed(profile.profile_id)
        logger.info("Dropped reminders for removed profile %s", profile.profile_id)

    # Events

    def event_created(self, event: TrackedEvent) -> None:
        if self._should_announce(event):
            self.gateway.notify(f"[Log] {event.profile.display_name}", event.summary)
        with self._lock:
            self.snapshots.upsert_if_changed(event.profile)
            self.registry.on_event_created(event)

    def event_updated(self, event: TrackedEvent) -> None:
        if self._should_announce(event):
            self.gateway.notify(f"[Update] {event.profile.display_name}", event.summary)
        with self._lock:
            self.snapshots.upsert_if_changed(event.profile)
            self.registry.on_event_updated(event)

    def event_removed(self, event: TrackedEvent) -> None:
        with self._lock:
            self.registry.on_event_removed(
                event.event_id, event.profile_id, event.family
            )

    # Direct messages

    def request_assistant(self, profile: ProfileSnapshot) -> None:
        """Ask for help right away, bypassing the reminder machinery."""
        logger.info("Assistance requested for %s", profile.display_name)
        self.gateway.notify(f"[Help] {profile.display_name}", "Needs assistance!")
        self.gateway.call(self.request_assistant_url)

    def notify_message(self, message, profile: ProfileSnapshot | None = None, debug=False):
        sender = f"[Notify] {profile.display_name if profile else 'System'}"
        if debug:
            self.gateway.notify_debug(sender, message)
        else:
            self.gateway.notify(sender, message)

    # Introspection

    def live_reminders(self, profile_id):
        """Return ``(reminder, next_event_timestamp)`` pairs for a profile."""
        with self._lock:
            snapshot = self.snapshots.get(profile_id)
            result = []
            for reminder in self.registry.for_profile(profile_id):
                next_timestamp = (
                    next_event_timestamp(reminder, snapshot) if snapshot else None
                )
                result.append((replace(reminder), next_timestamp))
            return result

    def _should_announce(self, event: TrackedEvent) -> bool:
        family = event.family
        profile = event.profile
        if family is ReminderFamily.FEEDING:
            return profile.enable_feeding_notification
        if family is ReminderFamily.PUMPING:
            return profile.enable_pumping_notification
        return profile.enable_other_activities_notification


def get_service() -> NotificationService:
    """Return the process-wide service built by ``NotificationsConfig.ready``."""
    return apps.get_app_config("notifications").service
