"""Tests that committed data changes reach the notification service."""

from datetime import date
from unittest.mock import patch

from django.apps import apps
from django.test import TestCase

from activities.models import Activity
from diapers.models import DiaperChange
from feedings.models import Feeding
from profiles.models import BabyProfile
from pumpings.models import Pumping

from .reminders import EventKind, ReminderFamily
from .service import NotificationService
from .signals import tracked_event
from .testing import RecordingGateway, at


class SignalForwardingTests(TestCase):
    """Model changes are forwarded once the transaction commits."""

    def setUp(self):
        self.gateway = RecordingGateway()
        self.service = NotificationService(gateway=self.gateway)
        patcher = patch.object(
            apps.get_app_config("notifications"), "service", self.service
        )
        patcher.start()
        self.addCleanup(patcher.stop)

        with self.captureOnCommitCallbacks(execute=True):
            self.profile = BabyProfile.objects.create(
                name="Alice",
                gender_at_birth=BabyProfile.Gender.FEMALE,
                date_of_birth=date(2024, 1, 1),
            )
        self.profile_id = str(self.profile.pk)

    def log_bottle(self, fed_at, volume_ml=90):
        with self.captureOnCommitCallbacks(execute=True):
            return Feeding.objects.create(
                profile=self.profile,
                feeding_type=Feeding.FeedingType.BOTTLE,
                fed_at=fed_at,
                volume_ml=volume_ml,
            )

    def test_profile_created_is_cached(self):
        self.assertIn(self.profile_id, self.service.snapshots)
        self.assertEqual(self.gateway.sent, [("[Profile] Alice", "Profile updated")])

    def test_profile_update_refreshes_snapshot(self):
        self.profile.feeding_interval = 120
        with self.captureOnCommitCallbacks(execute=True):
            self.profile.save()
        snapshot = self.service.snapshots.get(self.profile_id)
        self.assertEqual(snapshot.feeding_interval.total_seconds(), 7200)

    def test_nothing_is_forwarded_before_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            Feeding.objects.create(
                profile=self.profile,
                feeding_type=Feeding.FeedingType.BOTTLE,
                fed_at=at(10),
                volume_ml=90,
            )
        self.assertEqual(len(callbacks), 1)
        self.assertEqual(len(self.service.registry), 0)

    def test_feeding_created_tracks_reminder(self):
        feeding = self.log_bottle(at(10))

        reminder = self.service.registry.get(feeding.pk)
        self.assertEqual(reminder.family, ReminderFamily.FEEDING)
        self.assertEqual(reminder.profile_id, self.profile_id)
        self.assertEqual(reminder.event_timestamp, at(10))
        self.assertEqual(self.gateway.sent[-1], ("[Log] Alice", "Bottlefeed baby 90ml"))

    def test_feeding_edit_moves_reminder(self):
        feeding = self.log_bottle(at(10))
        feeding.fed_at = at(10, 30)
        feeding.volume_ml = 120
        with self.captureOnCommitCallbacks(execute=True):
            feeding.save()

        self.assertEqual(
            self.service.registry.get(feeding.pk).event_timestamp, at(10, 30)
        )
        self.assertEqual(self.gateway.sent[-1], ("[Update] Alice", "Bottlefeed baby 120ml"))

    def test_feeding_deleted_falls_back_to_previous(self):
        first = self.log_bottle(at(9))
        second = self.log_bottle(at(10))
        with self.captureOnCommitCallbacks(execute=True):
            second.delete()

        reminders = self.service.registry.for_profile(self.profile_id)
        self.assertEqual([r.event_id for r in reminders], [str(first.pk)])

    def test_feeding_moved_to_other_profile(self):
        first = self.log_bottle(at(9))
        moved = self.log_bottle(at(10))
        with self.captureOnCommitCallbacks(execute=True):
            twin = BabyProfile.objects.create(
                name="Bob",
                gender_at_birth=BabyProfile.Gender.MALE,
                date_of_birth=date(2024, 1, 1),
            )
            Feeding.objects.create(
                profile=twin,
                feeding_type=Feeding.FeedingType.BOTTLE,
                fed_at=at(11),
                volume_ml=90,
            )

        moved.profile = twin
        with self.captureOnCommitCallbacks(execute=True):
            moved.save()

        own = self.service.registry.for_profile(self.profile_id)
        self.assertEqual([r.event_id for r in own], [str(first.pk)])
        twin_reminders = self.service.registry.for_profile(twin.pk)
        self.assertEqual(len(twin_reminders), 1)
        self.assertEqual(twin_reminders[0].event_timestamp, at(11))
        self.assertNotIn(str(moved.pk), self.service.registry)

    def test_pumping_and_feeding_are_separate(self):
        self.log_bottle(at(10))
        with self.captureOnCommitCallbacks(execute=True):
            Pumping.objects.create(
                profile=self.profile, pumped_at=at(10), duration_minutes=20, volume_ml=60
            )
        families = {r.family for r in self.service.registry.for_profile(self.profile_id)}
        self.assertEqual(families, {ReminderFamily.FEEDING, ReminderFamily.PUMPING})

    def test_diaper_change_is_not_tracked(self):
        with self.captureOnCommitCallbacks(execute=True):
            DiaperChange.objects.create(profile=self.profile, changed_at=at(10))
        self.assertEqual(len(self.service.registry), 0)

    def test_profile_deleted_drops_everything(self):
        self.log_bottle(at(10))
        with self.captureOnCommitCallbacks(execute=True):
            self.profile.delete()

        self.assertEqual(len(self.service.registry), 0)
        self.assertNotIn(self.profile_id, self.service.snapshots)
        self.assertEqual(
            self.gateway.sent[-1],
            ("[Profile] Alice", "Profile removed! All associated data are also removed."),
        )


class TrackedEventTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.profile = BabyProfile.objects.create(
            name="Alice",
            nickname="Bean",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2024, 1, 1),
        )

    def test_nursing_feeding(self):
        feeding = Feeding.objects.create(
            profile=self.profile,
            feeding_type=Feeding.FeedingType.NURSING,
            fed_at=at(10),
            left_duration_minutes=10,
            right_duration_minutes=5,
        )
        event = tracked_event(feeding)
        self.assertEqual(event.event_id, str(feeding.pk))
        self.assertIs(event.kind, EventKind.NURSING)
        self.assertEqual(event.timestamp, at(10))
        self.assertEqual(event.summary, "Breastfeed baby for 15 mins")
        self.assertEqual(event.profile.display_name, "Bean")

    def test_activity_kind(self):
        activity = Activity.objects.create(
            profile=self.profile, kind=Activity.Kind.BATH, occurred_at=at(18)
        )
        event = tracked_event(activity)
        self.assertIs(event.kind, EventKind.BATH)
        self.assertEqual(event.summary, "Bathing baby")
        self.assertIsNone(event.family)
