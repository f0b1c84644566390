"""Tests for the analytics stats endpoint and its aggregation helpers."""

from datetime import date, datetime, timedelta
from datetime import timezone as dt_timezone

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from activities.models import Activity
from django_project.test_constants import TEST_PASSWORD
from feedings.models import Feeding
from profiles.models import BabyProfile

from .utils import _age_label, _calculate_trend, get_event_stats


def at(day, hour, month=1):
    return datetime(2024, month, day, hour, tzinfo=dt_timezone.utc)


class StatsAPITests(APITestCase):
    """Tests for GET /api/v1/analytics/profiles/{id}/stats/."""

    @classmethod
    def setUpTestData(cls):
        cls.user = get_user_model().objects.create_user(
            username="statsuser",
            email="stats@example.com",
            password=TEST_PASSWORD,
        )
        # A Monday, so day, week and month labels are easy to read
        cls.profile = BabyProfile.objects.create(
            name="Baby Stats",
            handle="stats",
            gender_at_birth=BabyProfile.Gender.FEMALE,
            date_of_birth=date(2023, 12, 25),
        )
        cls.other_profile = BabyProfile.objects.create(
            name="Other",
            gender_at_birth=BabyProfile.Gender.MALE,
            date_of_birth=date(2023, 12, 25),
        )

        def bottle(fed_at, volume_ml, profile=cls.profile, **extra):
            Feeding.objects.create(
                profile=profile,
                feeding_type=Feeding.FeedingType.BOTTLE,
                fed_at=fed_at,
                volume_ml=volume_ml,
                **extra,
            )

        bottle(at(1, 10), 90)
        bottle(at(1, 14), 120, formula_volume_ml=30)
        bottle(at(3, 9), 60)
        bottle(at(10, 9, month=2), 100)  # outside January
        bottle(at(1, 11), 150, profile=cls.other_profile)
        Feeding.objects.create(
            profile=cls.profile,
            feeding_type=Feeding.FeedingType.NURSING,
            fed_at=at(2, 8),
            left_duration_minutes=10,
            right_duration_minutes=5,
        )

    def setUp(self):
        self.token = Token.objects.create(user=self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {self.token.key}")

    def get_stats(self, ref="stats", **params):
        params.setdefault("start", "2024-01-01")
        params.setdefault("end", "2024-01-31")
        return self.client.get(f"/api/v1/analytics/profiles/{ref}/stats/", params)

    def test_daily_bottle_feeds(self):
        response = self.get_stats(type="bottle_feed")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertEqual(data["profile_id"], str(self.profile.pk))
        self.assertEqual(data["frequency"], "daily")
        self.assertEqual(data["period"], "2024-01-01 to 2024-01-31")

        first, second = data["records"]
        self.assertEqual(first["period_start"], "2024-01-01")
        self.assertEqual(first["label"], "Day 7")
        self.assertEqual(first["count"], 2)
        self.assertEqual(first["total_volume_ml"], 210)
        self.assertEqual(first["avg_volume_ml"], 105)
        self.assertEqual(first["total_formula_volume_ml"], 30)
        self.assertEqual(second["period_start"], "2024-01-03")
        self.assertEqual(second["label"], "Day 9")
        self.assertEqual(second["total_volume_ml"], 60)
        self.assertIsNone(second["total_formula_volume_ml"])

        self.assertEqual(
            data["summary"], {"total": 3, "avg_per_period": 1.5, "trend": "decreasing"}
        )

    def test_weekly_and_monthly_buckets(self):
        weekly = self.get_stats(type="bottle_feed", frequency="weekly").json()
        self.assertEqual(len(weekly["records"]), 1)
        self.assertEqual(weekly["records"][0]["period_start"], "2024-01-01")
        self.assertEqual(weekly["records"][0]["label"], "Week 1")

        monthly = self.get_stats(type="bottle_feed", frequency="monthly").json()
        (record,) = monthly["records"]
        self.assertEqual(record["label"], "Month 1")
        self.assertEqual(record["count"], 3)
        self.assertEqual(record["total_volume_ml"], 270)
        self.assertEqual(record["avg_volume_ml"], 90)
        # 270 ml over the two days that had feeds
        self.assertEqual(record["daily_avg_volume_ml"], 135)

    def test_nursing_duration(self):
        data = self.get_stats(type="nursing").json()
        (record,) = data["records"]
        self.assertEqual(record["count"], 1)
        self.assertEqual(record["total_duration_minutes"], 15)
        self.assertNotIn("total_volume_ml", record)

    def test_range_excludes_other_days(self):
        data = self.get_stats(type="bottle_feed", start="2024-02-01", end="2024-02-29")
        self.assertEqual(len(data.json()["records"]), 1)

    def test_empty_type(self):
        data = self.get_stats(type="diaper_change").json()
        self.assertEqual(data["records"], [])
        self.assertEqual(data["summary"]["total"], 0)
        self.assertEqual(data["summary"]["trend"], "stable")

    def test_default_range_is_last_30_days(self):
        now = timezone.now()
        Activity.objects.create(
            profile=self.profile,
            kind=Activity.Kind.TRAVEL,
            occurred_at=now - timedelta(days=2),
            ended_at=now,
            destination="Lake",
        )
        response = self.client.get(
            f"/api/v1/analytics/profiles/{self.profile.pk}/stats/", {"type": "travel"}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["summary"]["total"], 1)

    def test_type_is_required(self):
        response = self.client.get("/api/v1/analytics/profiles/stats/stats/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("type", response.data)

    def test_invalid_frequency(self):
        response = self.get_stats(type="bottle_feed", frequency="hourly")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("frequency", response.data)

    def test_start_after_end(self):
        response = self.get_stats(type="bottle_feed", start="2024-02-01", end="2024-01-01")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("start", response.data)

    def test_unknown_profile(self):
        response = self.get_stats(ref="nobody", type="bottle_feed")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_unauthenticated(self):
        self.client.credentials()
        response = self.get_stats(type="bottle_feed")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class StatsHelperTests(SimpleTestCase):
    def test_trend(self):
        self.assertEqual(_calculate_trend([]), "stable")
        self.assertEqual(_calculate_trend([4]), "stable")
        self.assertEqual(_calculate_trend([2, 2, 4, 4]), "increasing")
        self.assertEqual(_calculate_trend([4, 4, 2, 2]), "decreasing")
        self.assertEqual(_calculate_trend([10, 10, 10, 10.5]), "stable")
        self.assertEqual(_calculate_trend([0, 3]), "increasing")

    def test_age_labels(self):
        profile = BabyProfile(date_of_birth=date(2024, 1, 31))
        self.assertEqual(_age_label(profile, date(2024, 2, 1), "daily"), "Day 1")
        self.assertEqual(_age_label(profile, date(2024, 2, 1), "monthly"), "Month 1")
        # Born on a Wednesday: that week starts on Monday 29 January
        self.assertEqual(_age_label(profile, date(2024, 2, 12), "weekly"), "Week 2")


class EventStatsTests(TestCase):
    def test_stats_for_profile_without_events(self):
        profile = BabyProfile.objects.create(
            name="Quiet",
            gender_at_birth=BabyProfile.Gender.MALE,
            date_of_birth=date(2024, 1, 1),
        )
        data = get_event_stats(
            profile, "sleep", start_date=date(2024, 1, 1), end_date=date(2024, 1, 7)
        )
        self.assertEqual(data["records"], [])
        self.assertEqual(data["period"], "2024-01-01 to 2024-01-07")
