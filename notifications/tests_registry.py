"""Tests for the reminder registry (one live reminder per profile and family)."""

from datetime import timedelta

from django.test import SimpleTestCase

from .registry import MAX_KNOWN_EVENTS, ReminderRegistry
from .reminders import EventKind, ReminderFamily
from .testing import at, make_event, make_snapshot


class ReminderRegistryTests(SimpleTestCase):
    def setUp(self):
        self.registry = ReminderRegistry()

    def live(self, profile_id="p1", family=ReminderFamily.FEEDING):
        matches = [
            r for r in self.registry.for_profile(profile_id) if r.family is family
        ]
        self.assertLessEqual(len(matches), 1)
        return matches[0] if matches else None

    def test_first_event_creates_reminder(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        reminder = self.live()
        self.assertEqual(reminder.event_id, "e1")
        self.assertEqual(reminder.event_timestamp, at(10))
        self.assertIsNone(reminder.last_notified_timestamp)

    def test_newer_event_supersedes_and_carries_last_notified(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.get("e1").last_notified_timestamp = at(12, 30)

        self.registry.on_event_created(make_event("e2", at(11)))

        reminder = self.live()
        self.assertEqual(reminder.event_id, "e2")
        self.assertEqual(reminder.last_notified_timestamp, at(12, 30))
        self.assertNotIn("e1", self.registry)
        self.assertEqual(len(self.registry), 1)

    def test_older_event_is_ignored(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.on_event_created(make_event("e0", at(9)))
        self.assertEqual(self.live().event_id, "e1")

    def test_nursing_and_bottle_share_a_family(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.on_event_created(
            make_event("e2", at(11), kind=EventKind.NURSING)
        )
        self.assertEqual(self.live().event_id, "e2")
        self.assertEqual(len(self.registry), 1)

    def test_families_are_tracked_separately(self):
        self.registry.on_event_created(make_event("f1", at(10)))
        self.registry.on_event_created(
            make_event("p1", at(11), kind=EventKind.PUMPING)
        )
        self.assertEqual(self.live().event_id, "f1")
        self.assertEqual(self.live(family=ReminderFamily.PUMPING).event_id, "p1")

    def test_profiles_are_tracked_separately(self):
        other = make_snapshot("p2", name="Twin")
        self.registry.on_event_created(make_event("a", at(10)))
        self.registry.on_event_created(make_event("b", at(11), profile=other))
        self.assertEqual(self.live().event_id, "a")
        self.assertEqual(self.live("p2").event_id, "b")

    def test_non_repeating_events_are_ignored(self):
        for kind in (EventKind.DIAPER_CHANGE, EventKind.SLEEP, EventKind.MEDICINE):
            self.registry.on_event_created(make_event(kind.value, at(10), kind=kind))
            self.registry.on_event_updated(make_event(kind.value, at(11), kind=kind))
        self.assertEqual(len(self.registry), 0)

    def test_update_moves_timestamp_and_resets_last_notified(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.get("e1").last_notified_timestamp = at(12, 30)

        self.registry.on_event_updated(make_event("e1", at(10, 30)))

        reminder = self.live()
        self.assertEqual(reminder.event_timestamp, at(10, 30))
        self.assertIsNone(reminder.last_notified_timestamp)

    def test_update_without_time_change_keeps_last_notified(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.get("e1").last_notified_timestamp = at(12, 30)

        self.registry.on_event_updated(make_event("e1", at(10), summary="edited"))

        self.assertEqual(self.live().last_notified_timestamp, at(12, 30))

    def test_edit_promotes_newer_event(self):
        """Moving the live event behind another known event promotes that one."""
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.on_event_created(make_event("e2", at(9)))
        self.assertEqual(self.live().event_id, "e1")

        self.registry.on_event_updated(make_event("e1", at(8, 30)))

        reminder = self.live()
        self.assertEqual(reminder.event_id, "e2")
        self.assertEqual(reminder.event_timestamp, at(9))
        self.assertIsNone(reminder.last_notified_timestamp)
        self.assertEqual(len(self.registry), 1)

    def test_editing_older_event_to_newest_promotes_it(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.on_event_created(make_event("e0", at(9)))
        self.registry.get("e1").last_notified_timestamp = at(12, 30)

        self.registry.on_event_updated(make_event("e0", at(11)))

        reminder = self.live()
        self.assertEqual(reminder.event_id, "e0")
        self.assertEqual(reminder.event_timestamp, at(11))
        self.assertEqual(reminder.last_notified_timestamp, at(12, 30))

    def test_remove_live_event_falls_back_to_previous(self):
        self.registry.on_event_created(make_event("e1", at(9)))
        self.registry.on_event_created(make_event("e2", at(10)))

        self.registry.on_event_removed("e2", "p1", ReminderFamily.FEEDING)

        self.assertEqual(self.live().event_id, "e1")

    def test_remove_only_event_clears_reminder(self):
        self.registry.on_event_created(make_event("e1", at(9)))
        self.registry.on_event_removed("e1")
        self.assertIsNone(self.live())

    def test_removed_known_event_is_not_promoted(self):
        self.registry.on_event_created(make_event("e1", at(10)))
        self.registry.on_event_created(make_event("e0", at(9)))

        self.registry.on_event_removed("e0", "p1", ReminderFamily.FEEDING)
        self.registry.on_event_removed("e1", "p1", ReminderFamily.FEEDING)

        # e0 was forgotten, so nothing is left to fall back to
        self.assertIsNone(self.live())

    def test_remove_unknown_event_is_noop(self):
        self.registry.on_event_removed("missing")
        self.assertEqual(len(self.registry), 0)

    def test_profile_removed_drops_everything(self):
        other = make_snapshot("p2", name="Twin")
        self.registry.on_event_created(make_event("a", at(10)))
        self.registry.on_event_created(make_event("b", at(10), kind=EventKind.PUMPING))
        self.registry.on_event_created(make_event("c", at(10), profile=other))

        self.registry.on_profile_removed("p1")

        self.assertEqual(self.registry.for_profile("p1"), [])
        self.assertEqual([r.event_id for r in self.registry.reminders()], ["c"])
        # Known events went too: a fresh event starts from scratch
        self.registry.on_event_created(make_event("d", at(8)))
        self.assertEqual(self.live().event_id, "d")

    def test_event_moved_to_other_profile(self):
        other = make_snapshot("p2", name="Twin")
        self.registry.on_event_created(make_event("a9", at(9)))
        self.registry.on_event_created(make_event("a10", at(10)))
        self.registry.on_event_created(make_event("b11", at(11), profile=other))

        self.registry.on_event_updated(make_event("a10", at(10), profile=other))

        self.assertEqual(self.live().event_id, "a9")
        self.assertEqual(self.live().profile_id, "p1")
        self.assertEqual(self.live("p2").event_id, "b11")
        self.assertNotIn("a10", self.registry)
        self.assertNotIn("a10", self.registry._known[("p1", ReminderFamily.FEEDING)])

    def test_event_moved_to_profile_without_events(self):
        other = make_snapshot("p2", name="Twin")
        self.registry.on_event_created(make_event("a9", at(9)))
        self.registry.on_event_created(make_event("a10", at(10)))

        self.registry.on_event_updated(make_event("a10", at(10), profile=other))

        self.assertEqual(self.live().event_id, "a9")
        moved = self.live("p2")
        self.assertEqual(moved.event_id, "a10")
        self.assertEqual(moved.profile_id, "p2")
        self.assertEqual(len(self.registry), 2)

    def test_only_event_moved_away_clears_old_profile(self):
        other = make_snapshot("p2", name="Twin")
        self.registry.on_event_created(make_event("a10", at(10)))
        self.registry.get("a10").last_notified_timestamp = at(13)

        self.registry.on_event_updated(make_event("a10", at(10), profile=other))

        self.assertIsNone(self.live())
        self.assertIsNone(self.live("p2").last_notified_timestamp)

    def test_latest_event_always_live(self):
        """After any mix of changes the live reminder is the latest event."""
        timeline = {}
        operations = [
            ("create", "e1", at(10)),
            ("create", "e2", at(12)),
            ("create", "e3", at(11)),
            ("update", "e2", at(9)),
            ("create", "e4", at(8)),
            ("remove", "e3", None),
            ("update", "e4", at(13)),
            ("remove", "e4", None),
        ]
        for op, event_id, timestamp in operations:
            if op == "create":
                timeline[event_id] = timestamp
                self.registry.on_event_created(make_event(event_id, timestamp))
            elif op == "update":
                timeline[event_id] = timestamp
                self.registry.on_event_updated(make_event(event_id, timestamp))
            else:
                del timeline[event_id]
                self.registry.on_event_removed(
                    event_id, "p1", ReminderFamily.FEEDING
                )
            latest = max(timeline, key=timeline.get)
            reminder = self.live()
            self.assertEqual(reminder.event_id, latest, (op, event_id))
            self.assertEqual(reminder.event_timestamp, timeline[latest])

    def test_known_events_are_bounded(self):
        for minute in range(MAX_KNOWN_EVENTS + 10):
            self.registry.on_event_created(
                make_event(f"e{minute}", at(0) + timedelta(minutes=minute))
            )
        known = self.registry._known[("p1", ReminderFamily.FEEDING)]
        self.assertEqual(len(known), MAX_KNOWN_EVENTS)
        self.assertIn(f"e{MAX_KNOWN_EVENTS + 9}", known)
        self.assertNotIn("e0", known)
