from datetime import date

from django.contrib.admin.sites import site as admin_site
from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from activities.models import Activity
from diapers.models import DiaperChange
from feedings.models import Feeding
from naps.models import Nap
from pumpings.models import Pumping

from .models import BabyProfile
from .quick_log import QUICK_LOG_COMMANDS, log_event


class BabyProfileModelTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.profile = BabyProfile.objects.create(
            name="Baby Jane",
            handle="jane",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2025, 6, 15),
        )

    def test_defaults(self):
        self.assertEqual(self.profile.feeding_interval, 180)
        self.assertEqual(self.profile.night_feeding_interval, 240)
        self.assertEqual(self.profile.baby_daytime_start, 7)
        self.assertEqual(self.profile.parent_daytime_end, 24)
        self.assertTrue(self.profile.enable_feeding_reminder)
        self.assertFalse(self.profile.enable_other_activities_notification)
        self.assertEqual(self.profile.stage, BabyProfile.Stage.NEWBORN)

    def test_display_name_prefers_nickname(self):
        self.assertEqual(self.profile.display_name, "Baby Jane")
        self.assertEqual(str(self.profile), "Baby Jane")
        self.profile.nickname = "JJ"
        self.assertEqual(self.profile.display_name, "JJ")

    def test_resolve_by_id_and_handle(self):
        self.assertEqual(BabyProfile.resolve(self.profile.pk), self.profile)
        self.assertEqual(BabyProfile.resolve(str(self.profile.pk)), self.profile)
        self.assertEqual(BabyProfile.resolve("jane"), self.profile)

    def test_resolve_unknown(self):
        with self.assertRaises(BabyProfile.DoesNotExist):
            BabyProfile.resolve("nobody")
        with self.assertRaises(BabyProfile.DoesNotExist):
            BabyProfile.resolve("00000000-0000-0000-0000-000000000000")

    def test_blank_handles_do_not_collide(self):
        first = BabyProfile.objects.create(
            name="A", handle="", gender_at_birth="M", date_of_birth=date(2025, 1, 1)
        )
        second = BabyProfile.objects.create(
            name="B", handle="", gender_at_birth="F", date_of_birth=date(2025, 1, 1)
        )
        self.assertIsNone(first.handle)
        self.assertIsNone(second.handle)

    def test_empty_daytime_window_violates_constraint(self):
        with self.assertRaises(IntegrityError):
            BabyProfile.objects.create(
                name="Owl",
                gender_at_birth="M",
                date_of_birth=date(2025, 1, 1),
                baby_daytime_start=19,
                baby_daytime_end=7,
            )

    def test_delete_cascades_to_events(self):
        profile = BabyProfile.objects.create(
            name="Temp", gender_at_birth="F", date_of_birth=date(2025, 1, 1)
        )
        log_event(profile, "bottle-feed")
        log_event(profile, "pee")
        profile.delete()
        self.assertFalse(Feeding.objects.exists())
        self.assertFalse(DiaperChange.objects.exists())

    def test_admin_registered(self):
        self.assertIn(BabyProfile, admin_site._registry)


class QuickLogTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.profile = BabyProfile.objects.create(
            name="Baby Jane",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2025, 6, 15),
            default_feeding_volume=120,
            pumping_duration=25,
        )

    def test_bottle_feed_uses_default_volume(self):
        now = timezone.now()
        feeding = log_event(self.profile, "bottle-feed", now=now)
        self.assertEqual(feeding.feeding_type, Feeding.FeedingType.BOTTLE)
        self.assertEqual(feeding.volume_ml, 120)
        self.assertEqual(feeding.fed_at, now)

    def test_nursing_both_sides(self):
        feeding = log_event(self.profile, "nursing")
        self.assertEqual(feeding.feeding_type, Feeding.FeedingType.NURSING)
        self.assertEqual(feeding.left_duration_minutes, 15)
        self.assertEqual(feeding.right_duration_minutes, 15)

    def test_pumping_uses_profile_duration(self):
        pumping = log_event(self.profile, "pumping")
        self.assertIsInstance(pumping, Pumping)
        self.assertEqual(pumping.duration_minutes, 25)

    def test_poop_and_pee(self):
        self.assertEqual(
            log_event(self.profile, "poop").change_type, DiaperChange.ChangeType.BOTH
        )
        self.assertEqual(
            log_event(self.profile, "pee").change_type, DiaperChange.ChangeType.WET
        )

    def test_sleep_opens_nap(self):
        nap = log_event(self.profile, "sleep")
        self.assertIsInstance(nap, Nap)
        self.assertIsNone(nap.ended_at)

    def test_play_and_bath(self):
        self.assertEqual(log_event(self.profile, "play").kind, Activity.Kind.PLAY)
        self.assertEqual(log_event(self.profile, "bath").kind, Activity.Kind.BATH)

    def test_every_command_creates_an_event(self):
        for command in QUICK_LOG_COMMANDS:
            event = log_event(self.profile, command)
            self.assertIsNotNone(event.pk, command)

    def test_unknown_command(self):
        with self.assertRaises(KeyError):
            log_event(self.profile, "juggle")
