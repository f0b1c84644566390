"""Tests for staged reminder firing and the scheduler thread."""

import threading
import time
from datetime import timedelta
from unittest.mock import patch

from django.test import SimpleTestCase

from .registry import ReminderRegistry
from .reminders import EventKind, Reminder, ReminderFamily
from .scheduler import (
    REMINDER_INTERVAL,
    REMINDER_STAGES,
    ReminderScheduler,
    StageState,
    due_stage,
    evaluate_stage,
)
from .snapshots import ProfileSnapshotCache
from .testing import RecordingGateway, at, frozen_now, make_event, make_snapshot


class StageTableTests(SimpleTestCase):
    def test_stage_order_and_period(self):
        self.assertEqual(
            [int(step.total_seconds() // 60) for step in REMINDER_STAGES],
            [0, 5, 15, 30],
        )
        self.assertEqual(REMINDER_INTERVAL, 5)


class EvaluateStageTests(SimpleTestCase):
    def setUp(self):
        self.reminder = Reminder("e1", "p1", ReminderFamily.FEEDING, at(10))

    def test_too_soon(self):
        state = evaluate_stage(self.reminder, at(13), timedelta(minutes=30), at(12))
        self.assertIs(state, StageState.TOO_SOON)

    def test_due(self):
        state = evaluate_stage(self.reminder, at(13), timedelta(minutes=30), at(12, 31))
        self.assertIs(state, StageState.DUE)

    def test_already_notified(self):
        self.reminder.last_notified_timestamp = at(12, 31)
        state = evaluate_stage(self.reminder, at(13), timedelta(minutes=30), at(12, 40))
        self.assertIs(state, StageState.ALREADY_NOTIFIED)

    def test_unreachable_when_interval_too_short(self):
        # Next event 10 minutes after the last one: a 15 minute lead is impossible
        state = evaluate_stage(
            self.reminder, at(10, 10), timedelta(minutes=15), at(10, 5)
        )
        self.assertIs(state, StageState.UNREACHABLE)

    def test_due_stage_picks_smallest_passed_lead(self):
        self.assertEqual(
            due_stage(self.reminder, at(13), at(12, 50)), timedelta(minutes=15)
        )

    def test_due_stage_none_before_first_stage(self):
        self.assertIsNone(due_stage(self.reminder, at(13), at(12)))

    def test_due_stage_stops_at_unreachable(self):
        self.assertIsNone(due_stage(self.reminder, at(10, 3), at(10, 1)))


class ReminderSchedulerTests(SimpleTestCase):
    def setUp(self):
        self.registry = ReminderRegistry()
        self.snapshots = ProfileSnapshotCache()
        self.gateway = RecordingGateway()
        self.scheduler = ReminderScheduler(self.registry, self.snapshots, self.gateway)
        self.snapshot = make_snapshot(name="Alice")
        self.snapshots.upsert_if_changed(self.snapshot)

    def log_feeding(self, event_id="e1", timestamp=None):
        self.registry.on_event_created(
            make_event(event_id, timestamp or at(10), profile=self.snapshot)
        )

    def tick(self, moment):
        with frozen_now(moment):
            return self.scheduler.tick(moment)

    def test_end_to_end_staged_reminders(self):
        self.log_feeding()

        self.assertEqual(self.tick(at(12, 30)), 1)
        self.assertEqual(len(self.gateway.sent), 1)
        sender, message = self.gateway.sent[0]
        self.assertEqual(sender, "[Reminder] Alice")
        self.assertIn("30 minutes", message)
        self.assertIn("2 hours", message)

        self.assertEqual(self.tick(at(12, 55)), 1)
        self.assertEqual(len(self.gateway.sent), 2)
        self.assertIn("in 5 minutes", self.gateway.sent[1][1])

        self.assertEqual(self.tick(at(12, 56)), 0)
        self.assertEqual(len(self.gateway.sent), 2)

        self.assertEqual(self.tick(at(13)), 1)
        self.assertIn("Feed baby now", self.gateway.sent[2][1])

        # Once the expected time has passed there is nothing left to remind
        self.assertEqual(self.tick(at(13, 1)), 0)
        self.assertEqual(len(self.gateway.sent), 3)

    def test_same_now_never_fires_twice(self):
        self.log_feeding()
        self.tick(at(12, 40))
        self.tick(at(12, 40))
        self.assertEqual(len(self.gateway.sent), 1)

    def test_skipped_stages_are_not_replayed(self):
        """Jumping past several stages fires only the latest one."""
        self.log_feeding()
        self.tick(at(12, 58))
        self.tick(at(12, 59))
        self.assertEqual(len(self.gateway.sent), 1)
        self.assertIn("in 5 minutes", self.gateway.sent[0][1])

    def test_debug_copy_includes_reminder_state(self):
        self.log_feeding()
        self.tick(at(12, 30))
        sender, text = self.gateway.debug[0]
        self.assertEqual(sender, "[Reminder] Alice")
        self.assertIn('"event_id": "e1"', text)

    def test_last_notified_is_monotonic(self):
        self.log_feeding()
        seen = []
        for moment in (at(12, 30), at(12, 31), at(12, 45), at(12, 50), at(12, 55)):
            self.tick(moment)
            seen.append(self.registry.get("e1").last_notified_timestamp)
        self.assertEqual(seen, sorted(seen))
        self.assertEqual(seen[-1], at(12, 55))

    def test_disabled_reminder_is_marked_but_silent(self):
        self.snapshot = make_snapshot(name="Alice", enable_feeding_reminder=False)
        self.snapshots.upsert_if_changed(self.snapshot)
        self.log_feeding()

        self.assertEqual(self.tick(at(12, 30)), 1)

        self.assertEqual(self.gateway.sent, [])
        self.assertEqual(self.registry.get("e1").last_notified_timestamp, at(12, 30))

    def test_missing_snapshot_is_skipped(self):
        self.log_feeding()
        self.snapshots.remove("p1")
        self.assertEqual(self.tick(at(12, 30)), 0)
        self.assertIsNone(self.registry.get("e1").last_notified_timestamp)

    def test_no_next_timestamp_is_skipped(self):
        self.snapshots.upsert_if_changed(
            make_snapshot(name="Alice", feeding_interval=timedelta(0))
        )
        self.log_feeding()
        self.assertEqual(self.tick(at(12, 30)), 0)

    def test_pumping_reminder(self):
        self.registry.on_event_created(
            make_event("p", at(9), kind=EventKind.PUMPING, profile=self.snapshot)
        )
        self.tick(at(11, 45))
        self.assertEqual(len(self.gateway.sent), 1)
        self.assertIn("Pump in 15 minutes (last pumped 2 hours 45 minutes ago)", self.gateway.sent[0][1])

    def test_failure_in_one_reminder_does_not_stop_others(self):
        other = make_snapshot("p2", name="Bob")
        self.snapshots.upsert_if_changed(other)
        self.log_feeding()
        self.registry.on_event_created(make_event("e2", at(10), profile=other))

        original = self.scheduler._process

        def flaky(reminder, now):
            if reminder.event_id == "e1":
                raise RuntimeError("boom")
            return original(reminder, now)

        with patch.object(self.scheduler, "_process", side_effect=flaky):
            with self.assertLogs("notifications.scheduler", level="ERROR"):
                fired = self.tick(at(12, 30))

        self.assertEqual(fired, 1)
        self.assertEqual(self.gateway.sent[0][0], "[Reminder] Bob")

    def test_overlapping_tick_is_skipped(self):
        self.log_feeding()
        self.scheduler._tick_guard.acquire()
        try:
            self.assertEqual(self.tick(at(12, 30)), 0)
        finally:
            self.scheduler._tick_guard.release()
        self.assertEqual(self.gateway.sent, [])
        self.assertEqual(self.tick(at(12, 30)), 1)


class SchedulerThreadTests(SimpleTestCase):
    def test_start_ticks_and_stop_joins(self):
        scheduler = ReminderScheduler(
            ReminderRegistry(), ProfileSnapshotCache(), RecordingGateway(), interval=0.01
        )
        ticked = threading.Event()

        with patch.object(scheduler, "tick", side_effect=lambda: ticked.set()):
            scheduler.start()
            self.assertTrue(scheduler.running)
            self.assertTrue(ticked.wait(timeout=2))
            scheduler.stop(timeout=2)

        self.assertFalse(scheduler.running)

    def test_start_twice_keeps_one_thread(self):
        scheduler = ReminderScheduler(
            ReminderRegistry(), ProfileSnapshotCache(), RecordingGateway(), interval=60
        )
        scheduler.start()
        thread = scheduler._thread
        scheduler.start()
        self.assertIs(scheduler._thread, thread)
        started = time.monotonic()
        scheduler.stop(timeout=2)
        # Stopping does not wait for the next tick
        self.assertLess(time.monotonic() - started, 2)
