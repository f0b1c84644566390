"""Registry of live reminders, one per (profile, reminder family).

The registry is told about every create/update/remove of a repeatable event
and keeps exactly one reminder per (profile, family): the one anchored to
the chronologically latest event it knows of.
"""

from __future__ import annotations

import logging
from datetime import datetime

from .reminders import Reminder, ReminderFamily, TrackedEvent

logger = logging.getLogger(__name__)

# Known events remembered per (profile, family) for promotion after edits
MAX_KNOWN_EVENTS = 50


class ReminderRegistry:
    """Map of event id to the live ``Reminder`` anchored to that event.

    Not thread-safe on its own; the notification service serialises access.
    """

    def __init__(self):
        self._reminders: dict[str, Reminder] = {}
        # (profile_id, family) -> {event_id: timestamp}
        self._known: dict[tuple[str, ReminderFamily], dict[str, datetime]] = {}

    def __len__(self):
        return len(self._reminders)

    def __contains__(self, event_id):
        return str(event_id) in self._reminders

    def get(self, event_id) -> Reminder | None:
        return self._reminders.get(str(event_id))

    def reminders(self) -> list[Reminder]:
        return list(self._reminders.values())

    def for_profile(self, profile_id) -> list[Reminder]:
        profile_id = str(profile_id)
        return [r for r in self._reminders.values() if r.profile_id == profile_id]

    def on_event_created(self, event: TrackedEvent) -> None:
        """Track a newly logged event if it is the latest of its family."""
        family = event.family
        if family is None:
            return
        self._remember(event, family)
        self._reconcile(self._make_reminder(event, family))
        self._promote_latest_known(event.profile_id, family)

    def on_event_updated(self, event: TrackedEvent) -> None:
        """Apply an edit to a tracked or known event.

        Editing the time of the live reminder's event moves it in place and
        clears its stage history; reconciliation then decides which event
        is the latest. An event moved to another profile is forgotten by its
        previous owner first and then tracked as new for the current one.
        """
        family = event.family
        if family is None:
            return
        self._detach_from_other_profiles(str(event.event_id), event.profile_id)
        self._remember(event, family)
        incoming = self._make_reminder(event, family)
        existing = self._reminders.get(incoming.event_id)
        if existing and existing.event_timestamp != incoming.event_timestamp:
            logger.debug(
                "Reminder for event %s moved from %s to %s",
                incoming.event_id,
                existing.event_timestamp,
                incoming.event_timestamp,
            )
            existing.event_timestamp = incoming.event_timestamp
            existing.last_notified_timestamp = None
        self._reconcile(incoming)
        self._promote_latest_known(event.profile_id, family)

    def on_event_removed(self, event_id, profile_id=None, family=None) -> None:
        """Forget an event; if it anchored the live reminder, fall back.

        ``profile_id`` and ``family`` are optional hints used to promote the
        next latest known event of the same family.
        """
        event_id = str(event_id)
        removed = self._reminders.pop(event_id, None)
        if removed is not None:
            logger.debug("Removed reminder for event %s", event_id)
            profile_id, family = removed.profile_id, removed.family
        if profile_id is None or family is None:
            return
        known = self._known.get((str(profile_id), family))
        if known is not None:
            known.pop(event_id, None)
        if removed is not None:
            self._promote_latest_known(str(profile_id), family)

    def on_profile_removed(self, profile_id) -> None:
        """Drop every reminder and known event owned by the profile."""
        profile_id = str(profile_id)
        for event_id in [
            r.event_id for r in self._reminders.values() if r.profile_id == profile_id
        ]:
            del self._reminders[event_id]
        for key in [key for key in self._known if key[0] == profile_id]:
            del self._known[key]

    def _detach_from_other_profiles(self, event_id: str, profile_id: str) -> None:
        """Forget ``event_id`` under every profile except ``profile_id``."""
        for key in [
            key
            for key, known in self._known.items()
            if key[0] != profile_id and event_id in known
        ]:
            del self._known[key][event_id]

        previous = self._reminders.get(event_id)
        if previous is None or previous.profile_id == profile_id:
            return
        del self._reminders[event_id]
        logger.debug(
            "Event %s moved from profile %s to %s",
            event_id,
            previous.profile_id,
            profile_id,
        )
        self._promote_latest_known(previous.profile_id, previous.family)

    def _make_reminder(self, event: TrackedEvent, family: ReminderFamily) -> Reminder:
        return Reminder(
            event_id=str(event.event_id),
            profile_id=event.profile_id,
            family=family,
            event_timestamp=event.timestamp,
        )

    def _remember(self, event: TrackedEvent, family: ReminderFamily) -> None:
        known = self._known.setdefault((event.profile_id, family), {})
        known[str(event.event_id)] = event.timestamp
        if len(known) > MAX_KNOWN_EVENTS:
            oldest = min(known, key=known.get)
            del known[oldest]

    def _reconcile(self, incoming: Reminder) -> None:
        """Keep only the latest reminder of the incoming reminder's family.

        Stale reminders are discarded. The incoming reminder replaces the
        retained one only when strictly newer, inheriting its
        ``last_notified_timestamp``.
        """
        family_reminders = sorted(
            (
                r
                for r in self._reminders.values()
                if r.profile_id == incoming.profile_id and r.family is incoming.family
            ),
            key=lambda r: r.event_timestamp,
            reverse=True,
        )
        latest = family_reminders[0] if family_reminders else None
        for stale in family_reminders[1:]:
            del self._reminders[stale.event_id]

        if latest is None:
            self._reminders[incoming.event_id] = incoming
            logger.debug("Tracking reminder for event %s", incoming.event_id)
        elif incoming.event_timestamp > latest.event_timestamp:
            if latest.event_id == incoming.event_id:
                return
            incoming.last_notified_timestamp = latest.last_notified_timestamp
            del self._reminders[latest.event_id]
            self._reminders[incoming.event_id] = incoming
            logger.debug(
                "Reminder moved from event %s to newer event %s",
                latest.event_id,
                incoming.event_id,
            )

    def _promote_latest_known(self, profile_id: str, family: ReminderFamily) -> None:
        known = self._known.get((profile_id, family))
        if not known:
            return
        latest_id = max(known, key=known.get)
        live = next(
            (
                r
                for r in self._reminders.values()
                if r.profile_id == profile_id and r.family is family
            ),
            None,
        )
        if live is None or (
            live.event_id != latest_id and known[latest_id] > live.event_timestamp
        ):
            self._reconcile(
                Reminder(
                    event_id=latest_id,
                    profile_id=profile_id,
                    family=family,
                    event_timestamp=known[latest_id],
                )
            )
