"""API tests for activities app."""

from rest_framework import status

from profiles.tests_tracking_base import BaseTrackingAPITests

from .constants import TOP_PRESCRIPTIONS_LIMIT
from .models import Activity

TEST_DATETIME = "2025-01-15T10:00:00Z"


class ActivityAPITests(BaseTrackingAPITests):
    """Tests for Activity API endpoints."""

    model = Activity
    app_name = "activities"

    def get_create_data(self):
        """Return data for creating a play session."""
        return {"kind": "play", "occurred_at": TEST_DATETIME, "duration_minutes": 20}

    def create_test_record(self, profile=None):
        """Create and return a test bath."""
        return Activity.objects.create(
            profile=profile or self.profile,
            kind=Activity.Kind.BATH,
            occurred_at=TEST_DATETIME,
        )

    def test_create_measurement(self):
        data = {
            "kind": "measurement",
            "occurred_at": TEST_DATETIME,
            "height_cm": "61.5",
            "weight_kg": "6.20",
        }
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["height_cm"], "61.5")
        self.assertEqual(response.data["kind_display"], "Measurement")

    def test_medicine_requires_prescription(self):
        data = {"kind": "medicine", "occurred_at": TEST_DATETIME}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("prescription", response.data)

        data["prescription"] = "Vitamin D 400 IU"
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_create_memory_note(self):
        data = {
            "kind": "note",
            "occurred_at": TEST_DATETIME,
            "note_purpose": "memory",
            "comment": "First smile",
        }
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        record = Activity.objects.get(pk=response.data["id"])
        self.assertEqual(record.notification_summary, "Jotting down memory")

    def test_filter_by_kind(self):
        self.create_test_record()
        Activity.objects.create(
            profile=self.profile, kind=Activity.Kind.PLAY, occurred_at=TEST_DATETIME
        )
        response = self.client.get(self.get_list_url(), {"kind": "bath"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["results"]), 1)
        self.assertEqual(response.data["results"][0]["kind"], "bath")

    def test_create_travel(self):
        data = {
            "kind": "travel",
            "occurred_at": TEST_DATETIME,
            "ended_at": "2025-01-20T18:00:00Z",
            "destination": "Grandma's house",
            "time_zone": "America/Chicago",
        }
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["kind_display"], "Travel")
        record = Activity.objects.get(pk=response.data["id"])
        self.assertEqual(record.notification_summary, "Traveling")
        self.assertEqual(record.time_zone, "America/Chicago")

    def test_travel_requires_destination_and_end(self):
        data = {
            "kind": "travel",
            "occurred_at": TEST_DATETIME,
            "ended_at": "2025-01-20T18:00:00Z",
        }
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("destination", response.data)

        data = {"kind": "travel", "occurred_at": TEST_DATETIME, "destination": "Lake"}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("ended_at", response.data)

    def test_travel_must_end_after_start(self):
        data = {
            "kind": "travel",
            "occurred_at": TEST_DATETIME,
            "ended_at": "2025-01-14T10:00:00Z",
            "destination": "Lake",
        }
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("ended_at", response.data)

    def test_ordering(self):
        older = Activity.objects.create(
            profile=self.profile,
            kind=Activity.Kind.PLAY,
            occurred_at="2025-01-14T10:00:00Z",
        )
        newer = self.create_test_record()

        response = self.client.get(self.get_list_url())
        ids = [row["id"] for row in response.data["results"]]
        self.assertEqual(ids, [str(newer.pk), str(older.pk)])

        response = self.client.get(self.get_list_url(), {"ordering": "occurred_at"})
        ids = [row["id"] for row in response.data["results"]]
        self.assertEqual(ids, [str(older.pk), str(newer.pk)])

    def give_medicine(self, prescription, profile=None):
        return Activity.objects.create(
            profile=profile or self.profile,
            kind=Activity.Kind.MEDICINE,
            occurred_at=TEST_DATETIME,
            prescription=prescription,
        )

    def test_top_prescriptions(self):
        for _ in range(3):
            self.give_medicine("Vitamin D 400 IU")
        self.give_medicine("Gripe water")
        self.give_medicine("Infant ibuprofen", profile=self.other_profile)

        url = self.get_list_url() + "top-prescriptions/"
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, ["Vitamin D 400 IU", "Gripe water"])

    def test_top_prescriptions_search(self):
        self.give_medicine("Vitamin D 400 IU")
        self.give_medicine("Gripe water")
        url = self.get_list_url("test-baby") + "top-prescriptions/"

        response = self.client.get(url, {"search": "grip"})
        self.assertEqual(response.data, ["Gripe water"])

        # Too short to narrow the list
        response = self.client.get(url, {"search": "gr"})
        self.assertEqual(len(response.data), 2)

    def test_top_prescriptions_limit(self):
        for number in range(TOP_PRESCRIPTIONS_LIMIT + 2):
            self.give_medicine(f"Drops #{number}")
        response = self.client.get(self.get_list_url() + "top-prescriptions/")
        self.assertEqual(len(response.data), TOP_PRESCRIPTIONS_LIMIT)

    def test_invalid_kind(self):
        data = {"kind": "skydiving", "occurred_at": TEST_DATETIME}
        response = self.client.post(self.get_list_url(), data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
