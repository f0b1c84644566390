from datetime import date

from django.contrib.admin.sites import site as admin_site
from django.db import IntegrityError
from django.test import TestCase
from django.utils import timezone

from notifications.reminders import EventKind
from profiles.models import BabyProfile

from .models import Feeding


class FeedingModelTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.profile = BabyProfile.objects.create(
            name="Baby Jane",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2025, 6, 15),
        )

    def test_bottle_feeding_creation(self):
        feeding = Feeding.objects.create(
            profile=self.profile,
            feeding_type=Feeding.FeedingType.BOTTLE,
            fed_at=timezone.now(),
            volume_ml=120,
            formula_volume_ml=60,
        )
        self.assertEqual(feeding.profile, self.profile)
        self.assertIs(feeding.event_kind, EventKind.BOTTLE_FEED)
        self.assertEqual(feeding.notification_summary, "Bottlefeed baby 120ml")

    def test_nursing_creation(self):
        feeding = Feeding.objects.create(
            profile=self.profile,
            feeding_type=Feeding.FeedingType.NURSING,
            fed_at=timezone.now(),
            left_duration_minutes=10,
            right_duration_minutes=7,
        )
        self.assertIs(feeding.event_kind, EventKind.NURSING)
        self.assertEqual(feeding.nursing_minutes, 17)
        self.assertEqual(feeding.notification_summary, "Breastfeed baby for 17 mins")

    def test_feeding_str_bottle(self):
        feeding = Feeding.objects.create(
            profile=self.profile,
            feeding_type=Feeding.FeedingType.BOTTLE,
            fed_at=timezone.now(),
            volume_ml=90,
        )
        self.assertEqual(str(feeding), "Baby Jane - Bottle")

    def test_bottle_without_volume_violates_constraint(self):
        with self.assertRaises(IntegrityError):
            Feeding.objects.create(
                profile=self.profile,
                feeding_type=Feeding.FeedingType.BOTTLE,
                fed_at=timezone.now(),
            )

    def test_nursing_without_duration_violates_constraint(self):
        with self.assertRaises(IntegrityError):
            Feeding.objects.create(
                profile=self.profile,
                feeding_type=Feeding.FeedingType.NURSING,
                fed_at=timezone.now(),
            )

    def test_formula_over_volume_violates_constraint(self):
        with self.assertRaises(IntegrityError):
            Feeding.objects.create(
                profile=self.profile,
                feeding_type=Feeding.FeedingType.BOTTLE,
                fed_at=timezone.now(),
                volume_ml=60,
                formula_volume_ml=90,
            )

    def test_ordering_newest_first(self):
        now = timezone.now()
        older = Feeding.objects.create(
            profile=self.profile,
            feeding_type=Feeding.FeedingType.BOTTLE,
            fed_at=now - timezone.timedelta(hours=3),
            volume_ml=90,
        )
        newer = Feeding.objects.create(
            profile=self.profile,
            feeding_type=Feeding.FeedingType.BOTTLE,
            fed_at=now,
            volume_ml=90,
        )
        self.assertEqual(list(Feeding.objects.all()), [newer, older])

    def test_admin_registered(self):
        self.assertIn(Feeding, admin_site._registry)
