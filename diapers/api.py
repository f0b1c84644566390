"""REST API for diapers app: DiaperChange."""

from rest_framework import serializers

from profiles.tracking_api import TrackingViewSet

from .models import DiaperChange


class DiaperChangeSerializer(serializers.ModelSerializer):
    """DiaperChange serializer."""

    profile_name = serializers.CharField(source="profile.name", read_only=True)
    change_type_display = serializers.CharField(
        source="get_change_type_display", read_only=True
    )

    class Meta:
        model = DiaperChange
        fields = [
            "id",
            "profile",
            "profile_name",
            "change_type",
            "change_type_display",
            "changed_at",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "profile_name",
            "change_type_display",
            "created_at",
            "updated_at",
        ]


class NestedDiaperChangeSerializer(serializers.ModelSerializer):
    """DiaperChange serializer for nested routes (profile from URL)."""

    change_type_display = serializers.CharField(
        source="get_change_type_display", read_only=True
    )

    class Meta:
        model = DiaperChange
        fields = [
            "id",
            "change_type",
            "change_type_display",
            "changed_at",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "change_type_display", "created_at", "updated_at"]


class DiaperChangeViewSet(TrackingViewSet):
    """ViewSet for DiaperChange CRUD (nested under profiles)."""

    queryset = DiaperChange.objects.all()
    serializer_class = DiaperChangeSerializer
    nested_serializer_class = NestedDiaperChangeSerializer
    datetime_filter_field = "changed_at"
