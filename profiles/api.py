"""REST API for profiles app: BabyProfile."""

from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from django_project.throttles import AssistantRequestThrottle, EventCreateThrottle
from notifications.service import get_service
from notifications.snapshots import ProfileSnapshot

from .models import BabyProfile
from .quick_log import QUICK_LOG_COMMANDS, log_event

DAYTIME_WINDOWS = [
    ("baby_daytime_start", "baby_daytime_end"),
    ("parent_daytime_start", "parent_daytime_end"),
]


class BabyProfileSerializer(serializers.ModelSerializer):
    """Profile serializer, including every reminder setting."""

    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = BabyProfile
        fields = [
            "id",
            "name",
            "nickname",
            "display_name",
            "handle",
            "gender_at_birth",
            "date_of_birth",
            "stage",
            "default_feeding_volume",
            "feeding_interval",
            "night_feeding_interval",
            "pumping_duration",
            "pumping_interval",
            "night_pumping_interval",
            "baby_daytime_start",
            "baby_daytime_end",
            "parent_daytime_start",
            "parent_daytime_end",
            "enable_feeding_reminder",
            "enable_pumping_reminder",
            "enable_feeding_notification",
            "enable_pumping_notification",
            "enable_other_activities_notification",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "display_name", "created_at", "updated_at"]

    def _value(self, data, field_name):
        """Submitted value, falling back to the existing instance or the default."""
        if field_name in data:
            return data[field_name]
        if self.instance is not None:
            return getattr(self.instance, field_name)
        return BabyProfile._meta.get_field(field_name).get_default()

    def validate(self, data):
        """Daytime windows are half-open [start, end) and must not be empty."""
        for start_field, end_field in DAYTIME_WINDOWS:
            if self._value(data, start_field) >= self._value(data, end_field):
                raise serializers.ValidationError(
                    {start_field: "Daytime start must be before daytime end."}
                )
        return data


class ReminderSerializer(serializers.Serializer):
    """Read-only view of a live reminder."""

    event_id = serializers.CharField()
    family = serializers.CharField(source="family.value")
    event_timestamp = serializers.DateTimeField()
    last_notified_timestamp = serializers.DateTimeField(allow_null=True)
    next_event_timestamp = serializers.DateTimeField(allow_null=True)


class BabyProfileViewSet(viewsets.ModelViewSet):
    """ViewSet for BabyProfile CRUD.

    Detail routes accept the profile's id or its handle.
    """

    queryset = BabyProfile.objects.all()
    serializer_class = BabyProfileSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        try:
            profile = BabyProfile.resolve(self.kwargs[self.lookup_field])
        except BabyProfile.DoesNotExist:
            raise NotFound("Baby profile not found.")
        self.check_object_permissions(self.request, profile)
        return profile

    @action(
        detail=True,
        methods=["post"],
        url_path="request-assistant",
        throttle_classes=[AssistantRequestThrottle],
    )
    def request_assistant(self, request, pk=None):
        """Ask for help right now (chat message plus the assistant hook)."""
        profile = self.get_object()
        get_service().request_assistant(ProfileSnapshot.from_profile(profile))
        return Response({"status": "requested"}, status=status.HTTP_202_ACCEPTED)

    @action(detail=True, methods=["get"])
    def reminders(self, request, pk=None):
        """List live reminders with the time the next event is expected."""
        profile = self.get_object()
        rows = [
            {
                "event_id": reminder.event_id,
                "family": reminder.family,
                "event_timestamp": reminder.event_timestamp,
                "last_notified_timestamp": reminder.last_notified_timestamp,
                "next_event_timestamp": next_timestamp,
            }
            for reminder, next_timestamp in get_service().live_reminders(profile.pk)
        ]
        return Response(ReminderSerializer(rows, many=True).data)

    @action(
        detail=True,
        methods=["post"],
        url_path=r"quick-log/(?P<command>[\w-]+)",
        throttle_classes=[EventCreateThrottle],
    )
    def quick_log(self, request, pk=None, command=None):
        """Log an event "now" using the profile's defaults."""
        profile = self.get_object()
        if command not in QUICK_LOG_COMMANDS:
            return Response(
                {
                    "error": f"Unsupported quick-log command '{command}'.",
                    "commands": sorted(QUICK_LOG_COMMANDS),
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        event = log_event(profile, command)
        return Response(
            {"event_id": str(event.pk), "kind": event.event_kind.value},
            status=status.HTTP_201_CREATED,
        )
