"""API tests for feedings app."""

from unittest.mock import patch

from django.apps import apps
from rest_framework import status

from notifications.service import NotificationService
from notifications.testing import RecordingGateway

from profiles.tests_tracking_base import BaseTrackingAPITests

from .models import Feeding

TEST_DATETIME = "2025-01-15T10:00:00Z"


class FeedingAPITests(BaseTrackingAPITests):
    """Tests for Feeding API endpoints."""

    model = Feeding
    app_name = "feedings"

    def get_create_data(self):
        """Return data for creating a bottle feeding."""
        return {
            "feeding_type": "bottle",
            "fed_at": TEST_DATETIME,
            "volume_ml": 90,
        }

    def create_test_record(self, profile=None):
        """Create and return a test feeding."""
        return Feeding.objects.create(
            profile=profile or self.profile,
            feeding_type=Feeding.FeedingType.BOTTLE,
            fed_at=TEST_DATETIME,
            volume_ml=60,
        )

    # Feedings-specific validation tests
    def test_get_update_data_returns_create_data(self):
        """Base get_update_data() returns get_create_data() when not overridden."""
        self.assertEqual(self.get_update_data(), self.get_create_data())

    def test_base_get_create_data_raises_not_implemented(self):
        """Base get_create_data() raises NotImplementedError when called on base."""
        with self.assertRaises(NotImplementedError) as ctx:
            BaseTrackingAPITests.get_create_data(self)
        self.assertIn("get_create_data", str(ctx.exception))

    def test_base_create_test_record_raises_not_implemented(self):
        """Base create_test_record() raises NotImplementedError when called on base."""
        with self.assertRaises(NotImplementedError) as ctx:
            BaseTrackingAPITests.create_test_record(self)
        self.assertIn("create_test_record", str(ctx.exception))

    def test_create_bottle_feeding(self):
        """Can create bottle feeding with volume."""
        response = self.client.post(self.get_list_url(), self.get_create_data())
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["feeding_type"], "bottle")
        self.assertEqual(response.data["volume_ml"], 90)
        self.assertEqual(response.data["feeding_type_display"], "Bottle")

    def test_create_bottle_feeding_missing_volume(self):
        """Bottle feeding requires volume."""
        data = {"feeding_type": "bottle", "fed_at": TEST_DATETIME}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("volume_ml", response.data)

    def test_bottle_volume_over_limit(self):
        """Bottle volume is capped."""
        data = {**self.get_create_data(), "volume_ml": 501}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("volume_ml", response.data)

    def test_formula_cannot_exceed_volume(self):
        """Formula part of a bottle cannot exceed the whole bottle."""
        data = {**self.get_create_data(), "formula_volume_ml": 100}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("formula_volume_ml", response.data)

    def test_bottle_clears_nursing_durations(self):
        """Nursing durations sent with a bottle are dropped."""
        data = {**self.get_create_data(), "left_duration_minutes": 10}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["left_duration_minutes"], 0)

    def test_create_nursing(self):
        """Can create nursing with per-side durations."""
        data = {
            "feeding_type": "nursing",
            "fed_at": "2025-01-15T12:00:00Z",
            "left_duration_minutes": 12,
            "right_duration_minutes": 8,
            "volume_ml": 80,
        }
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["feeding_type"], "nursing")
        self.assertEqual(response.data["left_duration_minutes"], 12)
        self.assertIsNone(response.data["volume_ml"])

    def test_nursing_requires_a_side(self):
        """Nursing without any duration is rejected."""
        data = {"feeding_type": "nursing", "fed_at": TEST_DATETIME}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_partial_update_keeps_type_rules(self):
        """PATCH of a bottle without volume uses the stored volume."""
        record = self.create_test_record()
        response = self.client.patch(
            self.get_detail_url(record.pk), {"comment": "spit up a little"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["volume_ml"], 60)

    def test_top_level_create_requires_profile(self):
        """Top-level create takes the profile from the body."""
        data = {**self.get_create_data(), "profile": str(self.profile.pk)}
        response = self.client.post("/api/v1/feedings/", data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["profile_name"], "Test Baby")

        response = self.client.post("/api/v1/feedings/", self.get_create_data())
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("profile", response.data)

    def test_filter_by_fed_at(self):
        """List accepts fed_at__gte / fed_at__lt."""
        self.create_test_record()
        Feeding.objects.create(
            profile=self.profile,
            feeding_type=Feeding.FeedingType.BOTTLE,
            fed_at="2025-01-16T10:00:00Z",
            volume_ml=60,
        )
        response = self.client.get(
            self.get_list_url(), {"fed_at__gte": "2025-01-16T00:00:00Z"}
        )
        self.assertEqual(len(response.data["results"]), 1)

        response = self.client.get(
            self.get_list_url(), {"fed_at__lt": "2025-01-16T00:00:00Z"}
        )
        self.assertEqual(len(response.data["results"]), 1)

        response = self.client.get(self.get_list_url(), {"fed_at__gte": "garbage"})
        self.assertEqual(len(response.data["results"]), 2)

    def test_move_to_other_profile_updates_reminders(self):
        """Moving a feeding to another profile moves its reminder with it."""
        service = NotificationService(gateway=RecordingGateway())
        with patch.object(apps.get_app_config("notifications"), "service", service):
            with self.captureOnCommitCallbacks(execute=True):
                record = self.create_test_record()
            self.assertEqual(len(service.registry.for_profile(self.profile.pk)), 1)

            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.patch(
                    f"/api/v1/feedings/{record.pk}/",
                    {"profile": str(self.other_profile.pk)},
                )
            self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

        self.assertEqual(service.registry.for_profile(self.profile.pk), [])
        moved = service.registry.for_profile(self.other_profile.pk)
        self.assertEqual([r.event_id for r in moved], [str(record.pk)])
