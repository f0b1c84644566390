"""API tests for profiles app."""

from unittest.mock import patch

from django.apps import apps
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from django_project.test_constants import TEST_PASSWORD
from feedings.models import Feeding
from notifications.service import NotificationService
from notifications.snapshots import ProfileSnapshot
from notifications.testing import RecordingGateway, at, frozen_now, make_event

from .models import BabyProfile

PROFILES_URL = "/api/v1/profiles/"


class BabyProfileAPITests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = get_user_model().objects.create_user(
            username="parent",
            email="parent@example.com",
            password=TEST_PASSWORD,
        )
        cls.profile = BabyProfile.objects.create(
            name="Baby Jane",
            handle="jane",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth="2025-06-15",
        )

    def setUp(self):
        self.token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")
        self.gateway = RecordingGateway()
        self.service = NotificationService(
            gateway=self.gateway, request_assistant_url="http://hooks.local/help"
        )
        patcher = patch.object(
            apps.get_app_config("notifications"), "service", self.service
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def detail_url(self, ref, suffix=""):
        return f"{PROFILES_URL}{ref}/{suffix}"

    def test_requires_authentication(self):
        self.client.credentials()
        response = self.client.get(PROFILES_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_endpoint(self):
        self.client.credentials()
        response = self.client.post(
            "/api/v1/auth/token/", {"username": "parent", "password": TEST_PASSWORD}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["token"], self.token.key)

    def test_list(self):
        response = self.client.get(PROFILES_URL)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["results"]), 1)
        self.assertEqual(response.data["results"][0]["display_name"], "Baby Jane")

    def test_create_with_defaults(self):
        data = {
            "name": "Baby Joe",
            "gender_at_birth": "M",
            "date_of_birth": "2025-08-01",
        }
        response = self.client.post(PROFILES_URL, data)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["feeding_interval"], 180)
        self.assertEqual(response.data["baby_daytime_start"], 7)
        self.assertIsNone(response.data["handle"])

    def test_create_rejects_inverted_window(self):
        data = {
            "name": "Owl",
            "gender_at_birth": "M",
            "date_of_birth": "2025-08-01",
            "parent_daytime_start": 22,
            "parent_daytime_end": 6,
        }
        response = self.client.post(PROFILES_URL, data)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("parent_daytime_start", response.data)

    def test_patch_window_checked_against_stored_value(self):
        response = self.client.patch(self.detail_url("jane"), {"baby_daytime_start": 20})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("baby_daytime_start", response.data)

    def test_hour_out_of_range(self):
        response = self.client.patch(self.detail_url("jane"), {"baby_daytime_end": 25})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_retrieve_by_id_and_handle(self):
        by_id = self.client.get(self.detail_url(self.profile.pk))
        by_handle = self.client.get(self.detail_url("jane"))
        self.assertEqual(by_id.status_code, status.HTTP_200_OK)
        self.assertEqual(by_handle.data["id"], by_id.data["id"])

    def test_unknown_profile(self):
        response = self.client.get(self.detail_url("nobody"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_settings(self):
        response = self.client.patch(
            self.detail_url("jane"),
            {"feeding_interval": 150, "enable_pumping_reminder": False},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.feeding_interval, 150)
        self.assertFalse(self.profile.enable_pumping_reminder)

    def test_delete(self):
        profile = BabyProfile.objects.create(
            name="Temp", gender_at_birth="F", date_of_birth="2025-01-01"
        )
        response = self.client.delete(self.detail_url(profile.pk))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(BabyProfile.objects.filter(pk=profile.pk).exists())

    def test_request_assistant(self):
        response = self.client.post(self.detail_url("jane", "request-assistant/"))
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(response.data, {"status": "requested"})
        self.assertEqual(self.gateway.sent, [("[Help] Baby Jane", "Needs assistance!")])
        self.assertEqual(self.gateway.calls, ["http://hooks.local/help"])

    def test_reminders(self):
        snapshot = ProfileSnapshot.from_profile(self.profile)
        self.service.profile_updated(snapshot)
        self.service.event_created(make_event("e1", at(10), profile=snapshot))

        with frozen_now(at(10)):
            response = self.client.get(self.detail_url("jane", "reminders/"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        row = response.data[0]
        self.assertEqual(row["event_id"], "e1")
        self.assertEqual(row["family"], "feeding")
        self.assertIsNone(row["last_notified_timestamp"])
        self.assertEqual(row["next_event_timestamp"], "2024-01-01T13:00:00Z")

    def test_reminders_empty(self):
        response = self.client.get(self.detail_url("jane", "reminders/"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_quick_log(self):
        response = self.client.post(self.detail_url("jane", "quick-log/bottle-feed/"))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["kind"], "bottle_feed")
        feeding = Feeding.objects.get(pk=response.data["event_id"])
        self.assertEqual(feeding.profile, self.profile)
        self.assertEqual(feeding.volume_ml, self.profile.default_feeding_volume)

    def test_quick_log_reaches_reminders(self):
        """Quick-logging a feeding starts a feeding reminder once committed."""
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(self.detail_url("jane", "quick-log/nursing/"))
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn(response.data["event_id"], self.service.registry)

    def test_quick_log_unknown_command(self):
        response = self.client.post(self.detail_url("jane", "quick-log/juggle/"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("bottle-feed", response.data["commands"])

    def test_quick_log_unknown_profile(self):
        response = self.client.post(self.detail_url("nobody", "quick-log/pee/"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
