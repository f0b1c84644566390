"""Periodic reminder loop.

Every ``REMINDER_INTERVAL`` the scheduler examines each live reminder and
checks its stages in ``REMINDER_STAGES`` order ("now", then 5, 15 and 30
minutes ahead of the next expected event). Stages still in the future are
skipped; the first stage whose time has passed fires once, and
``last_notified_timestamp`` is set to "now" whether or not the profile has
the reminder enabled, so edits to the profile or event never replay it.
"""

from __future__ import annotations

import enum
import json
import logging
import threading
from datetime import datetime, timedelta

from django.utils import timezone

from .reminders import Reminder, generate_message, next_event_timestamp, notify_enabled

logger = logging.getLogger(__name__)

REMINDER_INTERVAL = 5  # seconds
REMINDER_STAGES = (
    timedelta(0),
    timedelta(minutes=5),
    timedelta(minutes=15),
    timedelta(minutes=30),
)


class StageState(enum.Enum):
    """Outcome of checking one stage of one reminder."""

    TOO_SOON = "too-soon"  # stage time still ahead; check the next stage
    DUE = "due"  # fire this stage
    ALREADY_NOTIFIED = "already-notified"  # this and smaller stages handled
    UNREACHABLE = "unreachable"  # stage falls before the anchored event


def evaluate_stage(
    reminder: Reminder, next_timestamp: datetime, step: timedelta, now: datetime
) -> StageState:
    reminder_time = next_timestamp - step
    if reminder_time <= reminder.event_timestamp:
        return StageState.UNREACHABLE
    last = reminder.last_notified_timestamp
    if last is not None and last >= reminder_time:
        return StageState.ALREADY_NOTIFIED
    if reminder_time > now:
        return StageState.TOO_SOON
    return StageState.DUE


def due_stage(
    reminder: Reminder, next_timestamp: datetime, now: datetime
) -> timedelta | None:
    """Return the lead time of the stage to fire now, or None."""
    for step in REMINDER_STAGES:
        state = evaluate_stage(reminder, next_timestamp, step, now)
        if state is StageState.TOO_SOON:
            continue
        if state is StageState.DUE:
            return step
        return None
    return None


class ReminderScheduler:
    """Fires staged reminders for every live reminder on a fixed period.

    Args:
        registry: ``ReminderRegistry`` holding the live reminders
        snapshots: ``ProfileSnapshotCache`` with the owning profiles
        gateway: Object with ``notify``/``notify_debug`` (never raises)
        lock: Lock shared with whatever mutates the registry and cache
        interval: Seconds between ticks
    """

    def __init__(self, registry, snapshots, gateway, lock=None, interval=REMINDER_INTERVAL):
        self.registry = registry
        self.snapshots = snapshots
        self.gateway = gateway
        self.interval = interval
        self._lock = lock or threading.RLock()
        self._tick_guard = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="reminder-scheduler", daemon=True
        )
        self._thread.start()
        logger.info("Reminder scheduler started (every %ss)", self.interval)

    def stop(self, timeout: float | None = None) -> None:
        """Stop ticking. A tick in progress is allowed to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info("Reminder scheduler stopped")

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.tick()

    def tick(self, now: datetime | None = None) -> int:
        """Run one pass over all live reminders.

        Skipped entirely if another tick is still running.

        Returns:
            int: Number of stages that fired (enabled or not)
        """
        if not self._tick_guard.acquire(blocking=False):
            logger.debug("Previous reminder tick still running; skipping")
            return 0
        try:
            now = now or timezone.now()
            with self._lock:
                outgoing = []
                for reminder in self.registry.reminders():
                    try:
                        message = self._process(reminder, now)
                    except Exception:
                        logger.exception(
                            "Failed to process reminder for event %s", reminder.event_id
                        )
                        continue
                    if message is not None:
                        outgoing.append(message)
            for sender, text, debug_text in outgoing:
                if text is None:
                    continue
                self.gateway.notify(sender, text)
                self.gateway.notify_debug(sender, debug_text)
            return len(outgoing)
        finally:
            self._tick_guard.release()

    def _process(self, reminder: Reminder, now: datetime):
        snapshot = self.snapshots.get(reminder.profile_id)
        if snapshot is None:
            return None

        next_timestamp = next_event_timestamp(reminder, snapshot)
        if next_timestamp is None or next_timestamp < now:
            return None

        step = due_stage(reminder, next_timestamp, now)
        if step is None:
            return None

        sender = f"[Reminder] {snapshot.display_name}"
        text = debug_text = None
        if notify_enabled(reminder.family, snapshot):
            text = generate_message(reminder, step, now)
            debug_text = f"{text}\n\n{json.dumps(reminder.to_dict(), indent=2)}"
            logger.info("%s: %s", sender, text)
        reminder.last_notified_timestamp = now
        return sender, text, debug_text
