"""Base test class for tracking app API tests.

This class consolidates common test patterns across feedings, pumpings,
diapers, naps and activities API tests to eliminate duplication.
"""

from abc import ABC

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from django_project.test_constants import TEST_PASSWORD

from .models import BabyProfile


class BaseTrackingAPITests(ABC, APITestCase):
    """Base class for tracking API tests.

    This is an abstract base class and will not be run by Django's test runner.

    Subclasses must set:
        model: The tracking model class (e.g., DiaperChange, Feeding, Nap)
        app_name: The URL prefix for the app (e.g., "diapers", "feedings", "naps")

    Subclasses should override:
        get_create_data(): Return dict of data for creating a record
        get_update_data(): Return dict of data for updating a record (optional)
        create_test_record(): Create a test record and return it
    """

    model: type | None = None  # Must be set by subclass
    app_name: str | None = None  # Must be set by subclass

    @classmethod
    def __subclasshook__(cls, subclass):
        """Make this class abstract - won't be collected as a test class."""
        return NotImplemented

    @classmethod
    def setUpTestData(cls):
        """Create a user and two profiles for testing."""
        cls.user = get_user_model().objects.create_user(
            username="parent",
            email="parent@example.com",
            password=TEST_PASSWORD,
        )
        cls.profile = BabyProfile.objects.create(
            name="Test Baby",
            handle="test-baby",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth="2025-01-01",
        )
        cls.other_profile = BabyProfile.objects.create(
            name="Other Baby",
            gender_at_birth=BabyProfile.Gender.MALE,
            date_of_birth="2024-06-01",
        )

    def setUp(self):
        """Authenticate with a token."""
        # Skip if this is the base class itself (not a subclass)
        if self.__class__ == BaseTrackingAPITests:
            self.skipTest("Base class should not be run directly")
        self.token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")

    def get_list_url(self, profile_ref=None):
        """Get the list/create URL for this tracking app."""
        return f"/api/v1/profiles/{profile_ref or self.profile.pk}/{self.app_name}/"

    def get_detail_url(self, pk):
        """Get the retrieve/update/delete URL for a specific record."""
        return f"/api/v1/profiles/{self.profile.pk}/{self.app_name}/{pk}/"

    def get_create_data(self):
        """Override in subclass to return data for creating a record."""
        raise NotImplementedError("Subclass must implement get_create_data()")

    def get_update_data(self):
        """Override in subclass to return data for updating a record."""
        return self.get_create_data()

    def create_test_record(self, profile=None):
        """Override in subclass to create and return a test record."""
        raise NotImplementedError("Subclass must implement create_test_record()")

    # Common test methods
    def test_create(self):
        """Creating through the nested route attaches the profile from the URL."""
        response = self.client.post(self.get_list_url(), self.get_create_data())
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        record = self.model.objects.get(pk=response.data["id"])
        self.assertEqual(record.profile, self.profile)

    def test_create_by_handle(self):
        """Profiles can be addressed by handle instead of id."""
        response = self.client.post(
            self.get_list_url("test-baby"), self.get_create_data()
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_list_only_own_profile(self):
        """Nested list only returns records of the profile in the URL."""
        self.create_test_record()
        self.create_test_record(profile=self.other_profile)
        response = self.client.get(self.get_list_url())
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["results"]), 1)

    def test_search_by_comment(self):
        """?search= matches text anywhere in the comment, ignoring case."""
        matching = self.create_test_record()
        self.model.objects.filter(pk=matching.pk).update(comment="Spit up after")
        self.create_test_record()
        response = self.client.get(self.get_list_url(), {"search": "spit"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [row["id"] for row in response.data["results"]], [str(matching.pk)]
        )

    def test_update(self):
        """Full update with PUT."""
        record = self.create_test_record()
        response = self.client.put(
            self.get_detail_url(record.pk), self.get_update_data()
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_partial_update(self):
        """Partial update with PATCH."""
        record = self.create_test_record()
        response = self.client.patch(
            self.get_detail_url(record.pk), self.get_create_data()
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_retrieve(self):
        """Can retrieve single record."""
        record = self.create_test_record()
        response = self.client.get(self.get_detail_url(record.pk))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(record.pk))

    def test_delete(self):
        """Delete removes the record."""
        record = self.create_test_record()
        response = self.client.delete(self.get_detail_url(record.pk))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(self.model.objects.filter(pk=record.pk).exists())

    def test_other_profiles_record_is_not_found(self):
        """A record of another profile is not reachable through this profile."""
        record = self.create_test_record(profile=self.other_profile)
        response = self.client.get(self.get_detail_url(record.pk))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_nonexistent_profile_returns_404(self):
        """Accessing records for a nonexistent profile returns 404."""
        response = self.client.get(self.get_list_url("no-such-baby"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_top_level_list(self):
        """Top-level route lists records of every profile."""
        self.create_test_record()
        self.create_test_record(profile=self.other_profile)
        response = self.client.get(f"/api/v1/{self.app_name}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["results"]), 2)

    def test_unauthenticated_is_rejected(self):
        """Anonymous requests are refused."""
        self.client.credentials()
        response = self.client.get(self.get_list_url())
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class TrackingBaseContractTests(TestCase):
    """Tests for BaseTrackingAPITests contract (subclasshook, etc.)."""

    def test_subclasshook_returns_not_implemented_for_non_subclass(self):
        """__subclasshook__ returns NotImplemented for non-subclass."""
        # Called as class method: cls is bound, pass only the candidate subclass
        result = BaseTrackingAPITests.__subclasshook__(object)
        self.assertIs(result, NotImplemented)
