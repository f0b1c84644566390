"""REST API for pumpings app: Pumping."""

from rest_framework import serializers

from profiles.tracking_api import TrackingViewSet

from .models import Pumping


class PumpingSerializer(serializers.ModelSerializer):
    """Pumping serializer."""

    profile_name = serializers.CharField(source="profile.name", read_only=True)

    class Meta:
        model = Pumping
        fields = [
            "id",
            "profile",
            "profile_name",
            "pumped_at",
            "duration_minutes",
            "volume_ml",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "profile_name", "created_at", "updated_at"]


class NestedPumpingSerializer(serializers.ModelSerializer):
    """Pumping serializer for nested routes (profile from URL)."""

    class Meta:
        model = Pumping
        fields = [
            "id",
            "pumped_at",
            "duration_minutes",
            "volume_ml",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class PumpingViewSet(TrackingViewSet):
    """ViewSet for Pumping CRUD (nested under profiles)."""

    queryset = Pumping.objects.all()
    serializer_class = PumpingSerializer
    nested_serializer_class = NestedPumpingSerializer
    datetime_filter_field = "pumped_at"
