from datetime import date, timedelta

from django.contrib.admin.sites import site as admin_site
from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from notifications.reminders import EventKind
from profiles.models import BabyProfile

from .models import Nap


class NapModelTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.profile = BabyProfile.objects.create(
            name="Baby Jane",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2025, 6, 15),
        )

    def test_nap_creation(self):
        nap = Nap.objects.create(profile=self.profile, napped_at=timezone.now())
        self.assertEqual(nap.profile, self.profile)
        self.assertIs(nap.event_kind, EventKind.SLEEP)
        self.assertEqual(nap.notification_summary, "Baby sleeping")

    def test_nap_str(self):
        nap = Nap.objects.create(profile=self.profile, napped_at=timezone.now())
        self.assertEqual(str(nap), "Baby Jane - Sleep")

    def test_open_nap_has_no_duration(self):
        nap = Nap(profile=self.profile, napped_at=timezone.now())
        self.assertIsNone(nap.duration_minutes)
        self.assertIsNone(nap.duration_display)

    def test_duration_display(self):
        start = timezone.now()
        nap = Nap(profile=self.profile, napped_at=start, ended_at=start + timedelta(minutes=95))
        self.assertEqual(nap.duration_minutes, 95)
        self.assertEqual(nap.duration_display, "1h 35m")

        nap.ended_at = start + timedelta(minutes=40)
        self.assertEqual(nap.duration_display, "40m")

    def test_end_before_start_violates_constraint(self):
        start = timezone.now()
        with self.assertRaises(IntegrityError):
            Nap.objects.create(
                profile=self.profile, napped_at=start, ended_at=start - timedelta(minutes=1)
            )

    def test_admin_registered(self):
        self.assertIn(Nap, admin_site._registry)
