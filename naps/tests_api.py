"""API tests for naps app."""

from rest_framework import status

from profiles.tests_tracking_base import BaseTrackingAPITests

from .models import Nap

TEST_DATETIME = "2025-01-15T10:00:00Z"


class NapAPITests(BaseTrackingAPITests):
    """Tests for Nap API endpoints."""

    model = Nap
    app_name = "naps"

    def get_create_data(self):
        """Return data for creating a nap."""
        return {"napped_at": TEST_DATETIME}

    def create_test_record(self, profile=None):
        """Create and return a test nap."""
        return Nap.objects.create(
            profile=profile or self.profile, napped_at=TEST_DATETIME
        )

    # Naps-specific tests
    def test_create_nap_with_ended_at(self):
        data = {"napped_at": TEST_DATETIME, "ended_at": "2025-01-15T11:30:00Z"}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["duration_minutes"], 90.0)

    def test_create_nap_without_ended_at(self):
        response = self.client.post(self.get_list_url(), self.get_create_data())
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data["ended_at"])
        self.assertIsNone(response.data["duration_minutes"])

    def test_ended_at_before_napped_at_rejected(self):
        data = {"napped_at": TEST_DATETIME, "ended_at": "2025-01-15T09:00:00Z"}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("ended_at", response.data)

    def test_patch_end_before_stored_start_rejected(self):
        record = self.create_test_record()
        response = self.client.patch(
            self.get_detail_url(record.pk), {"ended_at": "2025-01-15T09:00:00Z"}
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_end_sets_duration(self):
        record = self.create_test_record()
        response = self.client.patch(
            self.get_detail_url(record.pk), {"ended_at": "2025-01-15T10:45:00Z"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["duration_minutes"], 45.0)
