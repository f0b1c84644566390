"""API tests for diapers app."""

from rest_framework import status

from profiles.tests_tracking_base import BaseTrackingAPITests

from .models import DiaperChange

TEST_DATETIME = "2025-01-15T10:00:00Z"


class DiaperChangeAPITests(BaseTrackingAPITests):
    """Tests for DiaperChange API endpoints."""

    model = DiaperChange
    app_name = "diapers"

    def get_create_data(self):
        """Return data for creating a diaper change."""
        return {
            "change_type": "wet",
            "changed_at": TEST_DATETIME,
        }

    def get_update_data(self):
        return {"change_type": "both", "changed_at": TEST_DATETIME}

    def create_test_record(self, profile=None):
        """Create and return a test diaper change."""
        return DiaperChange.objects.create(
            profile=profile or self.profile,
            change_type=DiaperChange.ChangeType.WET,
            changed_at=TEST_DATETIME,
        )

    # Diapers-specific tests
    def test_list_diapers(self):
        """List returns change type and its label."""
        self.create_test_record()
        response = self.client.get(self.get_list_url())
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["results"]), 1)
        self.assertEqual(response.data["results"][0]["change_type"], "wet")
        self.assertEqual(response.data["results"][0]["change_type_display"], "Wet")

    def test_update_change_type(self):
        """PUT changes the change type."""
        record = self.create_test_record()
        response = self.client.put(
            self.get_detail_url(record.pk), self.get_update_data()
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        record.refresh_from_db()
        self.assertEqual(record.change_type, DiaperChange.ChangeType.BOTH)

    def test_invalid_change_type(self):
        """Unknown change type is rejected."""
        data = {"change_type": "glitter", "changed_at": TEST_DATETIME}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("change_type", response.data)

    def test_change_type_defaults_to_wet(self):
        response = self.client.post(self.get_list_url(), {"changed_at": TEST_DATETIME})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["change_type"], "wet")

    def test_filter_by_changed_at(self):
        """List accepts changed_at__gte."""
        self.create_test_record()
        DiaperChange.objects.create(
            profile=self.profile, changed_at="2025-01-16T10:00:00Z"
        )
        response = self.client.get(
            self.get_list_url(), {"changed_at__gte": "2025-01-16T00:00:00Z"}
        )
        self.assertEqual(len(response.data["results"]), 1)
