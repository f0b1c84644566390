from datetime import date

from django.contrib.admin.sites import site as admin_site
from django.test import TestCase
from django.utils import timezone

from notifications.reminders import EventKind
from profiles.models import BabyProfile

from .models import DiaperChange


class DiaperChangeModelTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.profile = BabyProfile.objects.create(
            name="Baby Jane",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2025, 6, 15),
        )

    def test_diaper_change_creation(self):
        change = DiaperChange.objects.create(
            profile=self.profile,
            change_type=DiaperChange.ChangeType.BOTH,
            changed_at=timezone.now(),
        )
        self.assertEqual(change.profile, self.profile)
        self.assertEqual(change.change_type, "both")
        self.assertIs(change.event_kind, EventKind.DIAPER_CHANGE)

    def test_diaper_change_str(self):
        change = DiaperChange.objects.create(
            profile=self.profile,
            change_type=DiaperChange.ChangeType.DIRTY,
            changed_at=timezone.now(),
        )
        self.assertEqual(str(change), "Baby Jane - Dirty")

    def test_notification_summary(self):
        wet = DiaperChange(profile=self.profile, change_type=DiaperChange.ChangeType.WET)
        dirty = DiaperChange(
            profile=self.profile, change_type=DiaperChange.ChangeType.DIRTY
        )
        both = DiaperChange(profile=self.profile, change_type=DiaperChange.ChangeType.BOTH)
        self.assertEqual(wet.notification_summary, "Wet diaper")
        self.assertEqual(dirty.notification_summary, "Poopy diaper")
        self.assertEqual(both.notification_summary, "Poopy diaper")

    def test_admin_registered(self):
        self.assertIn(DiaperChange, admin_site._registry)
