"""Tests for nap auto-end signals."""

from datetime import date, timedelta

from django.test import TestCase
from django.utils import timezone

from diapers.models import DiaperChange
from feedings.models import Feeding
from profiles.models import BabyProfile

from .models import Nap


class NapAutoEndSignalTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.profile = BabyProfile.objects.create(
            name="Baby Jane",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2025, 6, 15),
        )
        cls.other_profile = BabyProfile.objects.create(
            name="Baby Joe",
            gender_at_birth=BabyProfile.Gender.MALE,
            date_of_birth=date(2025, 8, 1),
        )

    def log_bottle(self, profile, fed_at):
        return Feeding.objects.create(
            profile=profile,
            fed_at=fed_at,
            feeding_type=Feeding.FeedingType.BOTTLE,
            volume_ml=90,
        )

    def test_feeding_ends_open_nap(self):
        nap_start = timezone.now() - timedelta(hours=2)
        nap = Nap.objects.create(profile=self.profile, napped_at=nap_start)

        feeding_time = timezone.now() - timedelta(hours=1)
        self.log_bottle(self.profile, feeding_time)

        nap.refresh_from_db()
        self.assertEqual(nap.ended_at, feeding_time)

    def test_diaper_ends_open_nap(self):
        nap_start = timezone.now() - timedelta(hours=2)
        nap = Nap.objects.create(profile=self.profile, napped_at=nap_start)

        diaper_time = timezone.now() - timedelta(hours=1)
        DiaperChange.objects.create(
            profile=self.profile,
            changed_at=diaper_time,
            change_type=DiaperChange.ChangeType.WET,
        )

        nap.refresh_from_db()
        self.assertEqual(nap.ended_at, diaper_time)

    def test_new_nap_ends_old_open_nap(self):
        old_nap_start = timezone.now() - timedelta(hours=3)
        old_nap = Nap.objects.create(profile=self.profile, napped_at=old_nap_start)

        new_nap_start = timezone.now() - timedelta(hours=1)
        new_nap = Nap.objects.create(profile=self.profile, napped_at=new_nap_start)

        old_nap.refresh_from_db()
        self.assertEqual(old_nap.ended_at, new_nap_start)

        new_nap.refresh_from_db()
        self.assertIsNone(new_nap.ended_at)

    def test_does_not_end_nap_for_different_profile(self):
        nap_start = timezone.now() - timedelta(hours=2)
        nap = Nap.objects.create(profile=self.profile, napped_at=nap_start)

        self.log_bottle(self.other_profile, timezone.now() - timedelta(hours=1))

        nap.refresh_from_db()
        self.assertIsNone(nap.ended_at)

    def test_does_not_end_already_ended_nap(self):
        nap_start = timezone.now() - timedelta(hours=3)
        original_end = timezone.now() - timedelta(hours=2)
        nap = Nap.objects.create(
            profile=self.profile,
            napped_at=nap_start,
            ended_at=original_end,
        )

        self.log_bottle(self.profile, timezone.now() - timedelta(hours=1))

        nap.refresh_from_db()
        self.assertEqual(nap.ended_at, original_end)

    def test_does_not_end_nap_started_after_activity(self):
        """A nap that started after the activity timestamp should not be ended."""
        feeding_time = timezone.now() - timedelta(hours=2)
        nap_start = timezone.now() - timedelta(hours=1)
        nap = Nap.objects.create(profile=self.profile, napped_at=nap_start)

        # Feeding logged late, with a time before the nap started
        self.log_bottle(self.profile, feeding_time)

        nap.refresh_from_db()
        self.assertIsNone(nap.ended_at)

    def test_update_does_not_trigger_auto_end(self):
        """Updating an existing feeding should not end open naps."""
        nap_start = timezone.now() - timedelta(hours=2)
        nap = Nap.objects.create(profile=self.profile, napped_at=nap_start)

        feeding = self.log_bottle(self.profile, timezone.now() - timedelta(hours=3))

        nap.refresh_from_db()
        self.assertIsNone(nap.ended_at)

        # Updating is not a new activity
        feeding.fed_at = timezone.now() - timedelta(hours=1)
        feeding.save()

        nap.refresh_from_db()
        self.assertIsNone(nap.ended_at)
