"""API tests for pumpings app."""

from rest_framework import status

from profiles.tests_tracking_base import BaseTrackingAPITests

from .models import Pumping

TEST_DATETIME = "2025-01-15T10:00:00Z"


class PumpingAPITests(BaseTrackingAPITests):
    """Tests for Pumping API endpoints."""

    model = Pumping
    app_name = "pumpings"

    def get_create_data(self):
        """Return data for creating a pumping session."""
        return {
            "pumped_at": TEST_DATETIME,
            "duration_minutes": 20,
            "volume_ml": 110,
        }

    def create_test_record(self, profile=None):
        """Create and return a test pumping session."""
        return Pumping.objects.create(
            profile=profile or self.profile,
            pumped_at=TEST_DATETIME,
            duration_minutes=15,
            volume_ml=80,
        )

    def test_create_pumping(self):
        response = self.client.post(self.get_list_url(), self.get_create_data())
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["volume_ml"], 110)
        self.assertEqual(response.data["duration_minutes"], 20)

    def test_volume_defaults_to_zero(self):
        response = self.client.post(self.get_list_url(), {"pumped_at": TEST_DATETIME})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["volume_ml"], 0)
        self.assertIsNone(response.data["duration_minutes"])

    def test_volume_over_limit(self):
        data = {**self.get_create_data(), "volume_ml": 1001}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("volume_ml", response.data)

    def test_summary_and_kind(self):
        record = self.create_test_record()
        self.assertEqual(record.notification_summary, "Mom pumped 80ml")
        self.assertEqual(record.event_kind.value, "pumping")
