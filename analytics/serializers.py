"""Serializers for analytics endpoints."""

from rest_framework import serializers

from .utils import STATS_SOURCES, Frequency


class StatsQuerySerializer(serializers.Serializer):
    """Validate the query parameters of the stats endpoint."""

    type = serializers.ChoiceField(choices=sorted(STATS_SOURCES))
    frequency = serializers.ChoiceField(
        choices=Frequency.CHOICES, default=Frequency.DAILY
    )
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)

    def validate(self, data):
        start, end = data.get("start"), data.get("end")
        if start and end and start > end:
            raise serializers.ValidationError({"start": "Start must not be after end."})
        return data


class StatsSummarySerializer(serializers.Serializer):
    total = serializers.IntegerField()
    avg_per_period = serializers.FloatField()
    trend = serializers.CharField()  # 'increasing', 'decreasing', 'stable'


class StatsResponseSerializer(serializers.Serializer):
    """Response for the stats endpoint."""

    profile_id = serializers.CharField()
    event_type = serializers.CharField()
    frequency = serializers.CharField()
    period = serializers.CharField()
    records = serializers.ListField(child=serializers.DictField())
    summary = StatsSummarySerializer()
    last_updated = serializers.DateTimeField()
