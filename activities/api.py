"""REST API for activities app: Activity."""

from django.db.models import Count
from rest_framework import serializers
from rest_framework.decorators import action
from rest_framework.response import Response

from profiles.tracking_api import TrackingViewSet

from .constants import MIN_PRESCRIPTION_SEARCH_LENGTH, TOP_PRESCRIPTIONS_LIMIT
from .models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    """Activity serializer with per-kind validation."""

    profile_name = serializers.CharField(source="profile.name", read_only=True)
    kind_display = serializers.CharField(source="get_kind_display", read_only=True)

    class Meta:
        model = Activity
        fields = [
            "id",
            "profile",
            "profile_name",
            "kind",
            "kind_display",
            "occurred_at",
            "duration_minutes",
            "height_cm",
            "weight_kg",
            "prescription",
            "note_purpose",
            "ended_at",
            "destination",
            "time_zone",
            "comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "profile_name",
            "kind_display",
            "created_at",
            "updated_at",
        ]

    def _value(self, data, field_name, default=None):
        """Field value from submitted data or the existing instance."""
        if field_name in data:
            return data[field_name]
        return getattr(self.instance, field_name, default) if self.instance else default

    def validate(self, data):
        kind = self._value(data, "kind")
        if kind == Activity.Kind.MEDICINE:
            if not self._value(data, "prescription", ""):
                raise serializers.ValidationError(
                    {"prescription": "Prescription is required for medicine."}
                )
        elif kind == Activity.Kind.TRAVEL:
            if not self._value(data, "destination", ""):
                raise serializers.ValidationError(
                    {"destination": "Destination is required for travel."}
                )
            if self._value(data, "ended_at") is None:
                raise serializers.ValidationError(
                    {"ended_at": "End time is required for travel."}
                )

        occurred_at = self._value(data, "occurred_at")
        ended_at = self._value(data, "ended_at")
        if ended_at is not None and occurred_at is not None and ended_at <= occurred_at:
            raise serializers.ValidationError(
                {"ended_at": "End time must be after start time."}
            )
        return data


class NestedActivitySerializer(ActivitySerializer):
    """Activity serializer for nested routes (profile from URL)."""

    class Meta(ActivitySerializer.Meta):
        fields = [
            field for field in ActivitySerializer.Meta.fields
            if field not in ("profile", "profile_name")
        ]
        read_only_fields = ["id", "kind_display", "created_at", "updated_at"]


class ActivityViewSet(TrackingViewSet):
    """ViewSet for Activity CRUD (nested under profiles).

    The list endpoint also accepts ``?kind=`` to filter by activity kind.
    """

    queryset = Activity.objects.all()
    serializer_class = ActivitySerializer
    nested_serializer_class = NestedActivitySerializer
    datetime_filter_field = "occurred_at"

    def get_queryset(self):
        qs = super().get_queryset()
        kind = self.request.query_params.get("kind")
        if kind:
            qs = qs.filter(kind=kind)
        return qs

    @action(detail=False, methods=["get"], url_path="top-prescriptions")
    def top_prescriptions(self, request, **kwargs):
        """Most given prescriptions, for autocomplete.

        ``?search=`` narrows the list once it is at least
        ``MIN_PRESCRIPTION_SEARCH_LENGTH`` characters long.
        """
        qs = self.get_queryset().filter(kind=Activity.Kind.MEDICINE)
        search = request.query_params.get("search", "").strip()
        if len(search) >= MIN_PRESCRIPTION_SEARCH_LENGTH:
            qs = qs.filter(prescription__icontains=search)
        rows = (
            qs.values("prescription")
            .annotate(uses=Count("id"))
            .order_by("-uses", "prescription")[:TOP_PRESCRIPTIONS_LIMIT]
        )
        return Response([row["prescription"] for row in rows])
