"""REST API for feedings app: Feeding."""

from rest_framework import serializers

from profiles.tracking_api import TrackingViewSet

from .constants import MAX_BOTTLE_ML, MIN_BOTTLE_ML
from .models import Feeding


class FeedingSerializer(serializers.ModelSerializer):
    """Feeding serializer with conditional validation."""

    profile_name = serializers.CharField(source="profile.name", read_only=True)
    feeding_type_display = serializers.CharField(
        source="get_feeding_type_display", read_only=True
    )

    class Meta:
        model = Feeding
        fields = [
            "id",
            "profile",
            "profile_name",
            "feeding_type",
            "feeding_type_display",
            "fed_at",
            "volume_ml",
            "formula_volume_ml",
            "duration_minutes",
            "left_duration_minutes",
            "right_duration_minutes",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "profile_name",
            "feeding_type_display",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "volume_ml": {"min_value": MIN_BOTTLE_ML, "max_value": MAX_BOTTLE_ML},
        }

    def _value(self, data, field_name):
        """Field value from submitted data or the existing instance."""
        if field_name in data:
            return data[field_name]
        return getattr(self.instance, field_name, None) if self.instance else None

    def validate(self, data):
        """Validate bottle vs nursing fields."""
        feeding_type = self._value(data, "feeding_type")

        if feeding_type == Feeding.FeedingType.BOTTLE:
            volume = self._value(data, "volume_ml")
            if not volume:
                raise serializers.ValidationError(
                    {"volume_ml": "Volume is required for bottle feedings."}
                )
            formula = self._value(data, "formula_volume_ml")
            if formula is not None and formula > volume:
                raise serializers.ValidationError(
                    {"formula_volume_ml": "Formula volume cannot exceed total volume."}
                )
            # Clear nursing fields
            data["left_duration_minutes"] = 0
            data["right_duration_minutes"] = 0

        elif feeding_type == Feeding.FeedingType.NURSING:
            left = self._value(data, "left_duration_minutes") or 0
            right = self._value(data, "right_duration_minutes") or 0
            if not left and not right:
                raise serializers.ValidationError(
                    "Nursing needs a duration for at least one side."
                )
            # Clear bottle fields
            data["volume_ml"] = None
            data["formula_volume_ml"] = None
            data["duration_minutes"] = None

        return data


class NestedFeedingSerializer(FeedingSerializer):
    """Feeding serializer for nested routes (profile from URL)."""

    class Meta(FeedingSerializer.Meta):
        fields = [
            field for field in FeedingSerializer.Meta.fields
            if field not in ("profile", "profile_name")
        ]
        read_only_fields = [
            "id",
            "feeding_type_display",
            "created_at",
            "updated_at",
        ]


class FeedingViewSet(TrackingViewSet):
    """ViewSet for Feeding CRUD (nested under profiles)."""

    queryset = Feeding.objects.all()
    serializer_class = FeedingSerializer
    nested_serializer_class = NestedFeedingSerializer
    datetime_filter_field = "fed_at"
