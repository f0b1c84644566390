"""REST API for naps app: Nap (sleep)."""

from rest_framework import serializers

from profiles.tracking_api import TrackingViewSet

from .models import Nap


class NapSerializer(serializers.ModelSerializer):
    """Nap serializer."""

    profile_name = serializers.CharField(source="profile.name", read_only=True)
    duration_minutes = serializers.FloatField(read_only=True)

    class Meta:
        model = Nap
        fields = [
            "id",
            "profile",
            "profile_name",
            "napped_at",
            "ended_at",
            "duration_minutes",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "profile_name",
            "duration_minutes",
            "created_at",
            "updated_at",
        ]

    def validate(self, data):
        napped_at = data.get("napped_at", getattr(self.instance, "napped_at", None))
        ended_at = data.get("ended_at", getattr(self.instance, "ended_at", None))
        if ended_at is not None and napped_at is not None and ended_at <= napped_at:
            raise serializers.ValidationError(
                {"ended_at": "End time must be after start time."}
            )
        return data


class NestedNapSerializer(NapSerializer):
    """Nap serializer for nested routes (profile from URL)."""

    class Meta(NapSerializer.Meta):
        fields = [
            "id",
            "napped_at",
            "ended_at",
            "duration_minutes",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "duration_minutes", "created_at", "updated_at"]


class NapViewSet(TrackingViewSet):
    """ViewSet for Nap CRUD (nested under profiles)."""

    queryset = Nap.objects.all()
    serializer_class = NapSerializer
    nested_serializer_class = NestedNapSerializer
    datetime_filter_field = "napped_at"
