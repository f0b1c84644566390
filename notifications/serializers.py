"""Serializers for the notifications API."""

from rest_framework import serializers

from profiles.models import BabyProfile


class NotifyMessageSerializer(serializers.Serializer):
    """Free-form message sent through the notification webhook."""

    message = serializers.CharField(max_length=2000)
    profile = serializers.CharField(required=False, allow_blank=True)
    debug = serializers.BooleanField(default=False)

    def validate_profile(self, value):
        """Accept a profile id or handle; blank means a system message."""
        if not value:
            return None
        try:
            return BabyProfile.resolve(value)
        except BabyProfile.DoesNotExist:
            raise serializers.ValidationError("Baby profile not found.")
