"""REST API views for analytics endpoints.

Per-type statistics over a date range, the data behind trend charts.
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from profiles.models import BabyProfile

from .serializers import StatsQuerySerializer, StatsResponseSerializer
from .utils import get_event_stats


class AnalyticsViewSet(viewsets.ViewSet):
    """ViewSet for analytics endpoints.

    All endpoints are read-only and use database-level aggregations.
    """

    permission_classes = [IsAuthenticated]

    def get_profile(self, ref) -> BabyProfile:
        try:
            return BabyProfile.resolve(ref)
        except BabyProfile.DoesNotExist:
            raise NotFound("Baby profile not found.")

    @action(detail=True, methods=["get"])
    def stats(self, request, pk=None):
        """Get statistics for one event type of a profile.

        Query Parameters:
            type: Event type (bottle_feed, nursing, pumping, diaper_change,
                sleep, or an activity kind)
            frequency: daily (default), weekly or monthly
            start, end: Inclusive date range (default: the last 30 days)
        """
        profile = self.get_profile(pk)
        serializer = StatsQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        query = serializer.validated_data

        data = get_event_stats(
            profile,
            query["type"],
            frequency=query["frequency"],
            start_date=query.get("start"),
            end_date=query.get("end"),
        )
        return Response(StatsResponseSerializer(data).data, status=status.HTTP_200_OK)
