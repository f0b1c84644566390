"""Tests for the daytime policy, reminder rules and profile snapshots."""

from datetime import timedelta
from types import SimpleNamespace

from django.test import SimpleTestCase

from .daytime import is_daytime
from .reminders import (
    EventKind,
    Reminder,
    ReminderFamily,
    family_for_kind,
    format_duration,
    generate_message,
    next_event_timestamp,
    notify_enabled,
    timing_config,
)
from .snapshots import ProfileSnapshot, ProfileSnapshotCache
from .testing import at, frozen_now, make_event, make_snapshot


class IsDaytimeTests(SimpleTestCase):
    def test_half_open_window(self):
        """Hours 7 through 18 are daytime, 19 through 6 are not."""
        for hour in range(24):
            with frozen_now(at(hour, 30)):
                self.assertEqual(is_daytime(at(hour, 30), 7, 19), 7 <= hour < 19, hour)

    def test_evaluates_current_time_not_instant(self):
        """The instant argument does not change the answer; the clock does."""
        with frozen_now(at(10)):
            self.assertTrue(is_daytime(at(23), 7, 19))
        with frozen_now(at(23)):
            self.assertFalse(is_daytime(at(10), 7, 19))

    def test_end_of_day_window(self):
        with frozen_now(at(23, 59)):
            self.assertTrue(is_daytime(at(23, 59), 6, 24))
        with frozen_now(at(5, 59)):
            self.assertFalse(is_daytime(at(5, 59), 6, 24))


class FamilyTests(SimpleTestCase):
    def test_feeding_family(self):
        self.assertIs(family_for_kind(EventKind.BOTTLE_FEED), ReminderFamily.FEEDING)
        self.assertIs(family_for_kind(EventKind.NURSING), ReminderFamily.FEEDING)

    def test_pumping_family(self):
        self.assertIs(family_for_kind(EventKind.PUMPING), ReminderFamily.PUMPING)

    def test_other_kinds_have_no_family(self):
        for kind in (EventKind.DIAPER_CHANGE, EventKind.SLEEP, EventKind.NOTE):
            self.assertIsNone(family_for_kind(kind))
            self.assertIsNone(make_event("e", at(10), kind=kind).family)


class TimingConfigTests(SimpleTestCase):
    def setUp(self):
        self.snapshot = make_snapshot(
            feeding_interval=timedelta(hours=2),
            night_feeding_interval=timedelta(hours=5),
            pumping_interval=timedelta(hours=3),
            night_pumping_interval=timedelta(hours=6),
            baby_daytime_start=8,
            baby_daytime_end=20,
            parent_daytime_start=5,
            parent_daytime_end=23,
            enable_feeding_reminder=False,
            enable_pumping_reminder=True,
        )

    def test_feeding_uses_baby_day(self):
        cfg = timing_config(ReminderFamily.FEEDING, self.snapshot)
        self.assertEqual(cfg.daytime_interval, timedelta(hours=2))
        self.assertEqual(cfg.nighttime_interval, timedelta(hours=5))
        self.assertEqual((cfg.daytime_start, cfg.daytime_end), (8, 20))

    def test_pumping_uses_parent_day(self):
        cfg = timing_config(ReminderFamily.PUMPING, self.snapshot)
        self.assertEqual(cfg.daytime_interval, timedelta(hours=3))
        self.assertEqual(cfg.nighttime_interval, timedelta(hours=6))
        self.assertEqual((cfg.daytime_start, cfg.daytime_end), (5, 23))

    def test_notify_enabled_per_family(self):
        self.assertFalse(notify_enabled(ReminderFamily.FEEDING, self.snapshot))
        self.assertTrue(notify_enabled(ReminderFamily.PUMPING, self.snapshot))


class NextEventTimestampTests(SimpleTestCase):
    def reminder(self, timestamp, family=ReminderFamily.FEEDING):
        return Reminder(
            event_id="e1", profile_id="p1", family=family, event_timestamp=timestamp
        )

    def test_daytime_interval(self):
        with frozen_now(at(10)):
            result = next_event_timestamp(self.reminder(at(10)), make_snapshot())
        self.assertEqual(result, at(13))

    def test_nighttime_interval(self):
        """At night both candidates land in night, so the night interval wins."""
        with frozen_now(at(20)):
            result = next_event_timestamp(self.reminder(at(18)), make_snapshot())
        self.assertEqual(result, at(22))

    def test_daytime_clock_keeps_daytime_interval_across_evening(self):
        # Daytime is judged by the clock, so an 18:00 feed seen at 18:00 uses 3h
        with frozen_now(at(18)):
            result = next_event_timestamp(self.reminder(at(18)), make_snapshot())
        self.assertEqual(result, at(21))

    def test_zero_daytime_interval_disables(self):
        snapshot = make_snapshot(feeding_interval=timedelta(0))
        with frozen_now(at(10)):
            self.assertIsNone(next_event_timestamp(self.reminder(at(10)), snapshot))

    def test_zero_nighttime_interval_disables(self):
        snapshot = make_snapshot(night_feeding_interval=timedelta(0))
        with frozen_now(at(22)):
            self.assertIsNone(next_event_timestamp(self.reminder(at(22)), snapshot))

    def test_zero_nighttime_interval_keeps_daytime_reminder(self):
        snapshot = make_snapshot(night_feeding_interval=timedelta(0))
        with frozen_now(at(9)):
            self.assertEqual(
                next_event_timestamp(self.reminder(at(9)), snapshot), at(12)
            )

    def test_pumping_uses_pumping_intervals(self):
        reminder = self.reminder(at(9), family=ReminderFamily.PUMPING)
        snapshot = make_snapshot(pumping_interval=timedelta(hours=2, minutes=30))
        with frozen_now(at(9)):
            self.assertEqual(
                next_event_timestamp(reminder, snapshot), at(11, 30)
            )


class FormatDurationTests(SimpleTestCase):
    def test_hours_and_minutes(self):
        self.assertEqual(format_duration(at(10), at(12, 30)), "2 hours 30 minutes")

    def test_whole_hours(self):
        self.assertEqual(format_duration(at(10), at(13)), "3 hours")

    def test_singular_units(self):
        self.assertEqual(format_duration(at(10), at(11, 1)), "1 hour 1 minute")

    def test_stops_at_first_gap(self):
        """Only adjacent units are shown: 1 day 0 hours 5 minutes is '1 day'."""
        self.assertEqual(format_duration(at(10), at(10, 5, day=2)), "1 day")

    def test_under_a_minute(self):
        self.assertEqual(
            format_duration(at(10), at(10) + timedelta(seconds=45)), "45 seconds"
        )

    def test_order_of_arguments_does_not_matter(self):
        self.assertEqual(format_duration(at(12, 30), at(10)), "2 hours 30 minutes")


class GenerateMessageTests(SimpleTestCase):
    def test_feeding_in_advance(self):
        reminder = Reminder("e1", "p1", ReminderFamily.FEEDING, at(10))
        self.assertEqual(
            generate_message(reminder, timedelta(minutes=30), now=at(12, 30)),
            "Feed baby in 30 minutes (last fed 2 hours 30 minutes ago)",
        )

    def test_pumping_now(self):
        reminder = Reminder("e1", "p1", ReminderFamily.PUMPING, at(10))
        self.assertEqual(
            generate_message(reminder, timedelta(0), now=at(13)),
            "Pump now (last pumped 3 hours ago)",
        )

    def test_reminder_to_dict(self):
        reminder = Reminder("e1", "p1", ReminderFamily.PUMPING, at(10))
        data = reminder.to_dict()
        self.assertEqual(data["family"], "pumping")
        self.assertIsNone(data["last_notified_timestamp"])
        self.assertEqual(data["event_timestamp"], at(10).isoformat())


class ProfileSnapshotTests(SimpleTestCase):
    def profile(self, **overrides):
        values = {
            "pk": "5b1f",
            "name": "Alice",
            "nickname": "",
            "feeding_interval": 180,
            "night_feeding_interval": 240,
            "pumping_duration": 30,
            "pumping_interval": 0,
            "night_pumping_interval": 240,
            "baby_daytime_start": 7,
            "baby_daytime_end": 19,
            "parent_daytime_start": 6,
            "parent_daytime_end": 24,
            "enable_feeding_reminder": True,
            "enable_pumping_reminder": True,
            "enable_feeding_notification": True,
            "enable_pumping_notification": False,
            "enable_other_activities_notification": False,
        }
        values.update(overrides)
        return SimpleNamespace(**values)

    def test_from_profile_converts_minutes(self):
        snapshot = ProfileSnapshot.from_profile(self.profile())
        self.assertEqual(snapshot.profile_id, "5b1f")
        self.assertEqual(snapshot.feeding_interval, timedelta(hours=3))
        self.assertEqual(snapshot.pumping_interval, timedelta(0))
        self.assertFalse(snapshot.enable_pumping_notification)

    def test_display_name_prefers_nickname(self):
        self.assertEqual(ProfileSnapshot.from_profile(self.profile()).display_name, "Alice")
        snapshot = ProfileSnapshot.from_profile(self.profile(nickname="Bean"))
        self.assertEqual(snapshot.display_name, "Bean")

    def test_hash_tracks_settings(self):
        first = ProfileSnapshot.from_profile(self.profile())
        same = ProfileSnapshot.from_profile(self.profile())
        changed = ProfileSnapshot.from_profile(self.profile(feeding_interval=120))
        self.assertEqual(first.content_hash, same.content_hash)
        self.assertNotEqual(first.content_hash, changed.content_hash)


class ProfileSnapshotCacheTests(SimpleTestCase):
    def test_upsert_only_when_changed(self):
        cache = ProfileSnapshotCache()
        self.assertTrue(cache.upsert_if_changed(make_snapshot()))
        self.assertFalse(cache.upsert_if_changed(make_snapshot()))
        self.assertTrue(
            cache.upsert_if_changed(make_snapshot(feeding_interval=timedelta(hours=2)))
        )
        self.assertEqual(cache.get("p1").feeding_interval, timedelta(hours=2))
        self.assertEqual(len(cache), 1)

    def test_remove(self):
        cache = ProfileSnapshotCache()
        cache.upsert_if_changed(make_snapshot())
        cache.remove("p1")
        self.assertIsNone(cache.get("p1"))
        self.assertNotIn("p1", cache)
        # Removing twice is harmless
        cache.remove("p1")
