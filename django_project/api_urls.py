"""API URL configuration for the baby-care tracker.

All API endpoints are prefixed with /api/v1/.
"""

from django.urls import include, path
from rest_framework.authtoken.views import obtain_auth_token
from rest_framework.routers import DefaultRouter

from activities.api import ActivityViewSet
from analytics.views import AnalyticsViewSet
from diapers.api import DiaperChangeViewSet
from feedings.api import FeedingViewSet
from naps.api import NapViewSet
from notifications.views import NotifyMessageView
from profiles.api import BabyProfileViewSet
from pumpings.api import PumpingViewSet

TRACKING_VIEWSETS = [
    ("feedings", FeedingViewSet),
    ("pumpings", PumpingViewSet),
    ("diapers", DiaperChangeViewSet),
    ("naps", NapViewSet),
    ("activities", ActivityViewSet),
]

# Main router for top-level resources
router = DefaultRouter()
router.register("profiles", BabyProfileViewSet, basename="profile")
router.register("feedings", FeedingViewSet, basename="feeding")
router.register("pumpings", PumpingViewSet, basename="pumping")
router.register("diapers", DiaperChangeViewSet, basename="diaperchange")
router.register("naps", NapViewSet, basename="nap")
router.register("activities", ActivityViewSet, basename="activity")


def nested_tracking_urls(prefix, viewset):
    """List/detail routes for a tracking viewset under a profile (id or handle)."""
    return [
        path(
            f"profiles/<str:profile_pk>/{prefix}/",
            viewset.as_view({"get": "list", "post": "create"}),
            name=f"profile-{prefix}-list",
        ),
        path(
            f"profiles/<str:profile_pk>/{prefix}/<uuid:pk>/",
            viewset.as_view(
                {
                    "get": "retrieve",
                    "put": "update",
                    "patch": "partial_update",
                    "delete": "destroy",
                }
            ),
            name=f"profile-{prefix}-detail",
        ),
    ]


urlpatterns = [
    # DRF browsable API login (for browser testing)
    path("api-auth/", include("rest_framework.urls")),
    path("auth/token/", obtain_auth_token, name="auth-token"),
    path(
        "notifications/notify/",
        NotifyMessageView.as_view(),
        name="notifications-notify",
    ),
    # Analytics endpoints (read-only)
    path(
        "analytics/profiles/<str:pk>/stats/",
        AnalyticsViewSet.as_view({"get": "stats"}),
        name="analytics-stats",
    ),
    # Nested tracking routes must come before the router's profile detail routes
    path(
        "profiles/<str:profile_pk>/activities/top-prescriptions/",
        ActivityViewSet.as_view({"get": "top_prescriptions"}),
        name="profile-activities-top-prescriptions",
    ),
    *[
        url
        for prefix, viewset in TRACKING_VIEWSETS
        for url in nested_tracking_urls(prefix, viewset)
    ],
    path("", include(router.urls)),
]
