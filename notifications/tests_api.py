"""API tests for the notifications system."""

from datetime import date
from unittest.mock import patch

from django.apps import apps
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from django_project.test_constants import TEST_PASSWORD
from profiles.models import BabyProfile

from .service import NotificationService
from .testing import RecordingGateway

NOTIFY_URL = "/api/v1/notifications/notify/"


class NotifyMessageAPITests(APITestCase):
    """Tests for POST /api/v1/notifications/notify/."""

    @classmethod
    def setUpTestData(cls):
        cls.user = get_user_model().objects.create_user(
            username="notifuser",
            email="notifuser@example.com",
            password=TEST_PASSWORD,
        )
        cls.profile = BabyProfile.objects.create(
            name="Baby Notif",
            nickname="Noti",
            handle="noti",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2025, 6, 15),
        )

    def setUp(self):
        self.token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")
        self.gateway = RecordingGateway()
        patcher = patch.object(
            apps.get_app_config("notifications"),
            "service",
            NotificationService(gateway=self.gateway),
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_system_message(self):
        response = self.client.post(NOTIFY_URL, {"message": "Backup finished"})
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(response.data, {"status": "sent"})
        self.assertEqual(self.gateway.sent, [("[Notify] System", "Backup finished")])

    def test_message_for_profile_by_handle(self):
        response = self.client.post(
            NOTIFY_URL, {"message": "Daycare pickup at 5", "profile": "noti"}
        )
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(self.gateway.sent, [("[Notify] Noti", "Daycare pickup at 5")])

    def test_debug_message(self):
        response = self.client.post(
            NOTIFY_URL,
            {"message": "trace", "profile": str(self.profile.pk), "debug": True},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(self.gateway.sent, [])
        self.assertEqual(self.gateway.debug, [("[Notify] Noti", "trace")])

    def test_unknown_profile(self):
        response = self.client.post(NOTIFY_URL, {"message": "hi", "profile": "ghost"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("profile", response.data)
        self.assertEqual(self.gateway.sent, [])

    def test_message_required(self):
        response = self.client.post(NOTIFY_URL, {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("message", response.data)

    def test_requires_authentication(self):
        self.client.credentials()
        response = self.client.post(NOTIFY_URL, {"message": "hi"})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
