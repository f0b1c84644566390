"""Aggregation utilities for event statistics.

Events of one type are grouped into daily, weekly or monthly buckets with
counts, volume totals and averages, all computed at the database level.
Buckets are labelled by the baby's age ("Day 12", "Week 3", "Month 2").
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from django.db.models import Avg, Count, F, Sum
from django.db.models.functions import TruncDate, TruncDay, TruncMonth, TruncWeek
from django.utils import timezone

from activities.models import Activity
from diapers.models import DiaperChange
from feedings.models import Feeding
from naps.models import Nap
from profiles.models import BabyProfile
from pumpings.models import Pumping

DEFAULT_STATS_DAYS = 30


class Frequency:
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    CHOICES = [DAILY, WEEKLY, MONTHLY]


_TRUNC_BY_FREQUENCY = {
    Frequency.DAILY: TruncDay,
    Frequency.WEEKLY: TruncWeek,
    Frequency.MONTHLY: TruncMonth,
}


@dataclass(frozen=True)
class StatsSource:
    """Where the events of one type live and what to add up for them."""

    model: type
    filters: dict = field(default_factory=dict)
    volume_fields: tuple = ()
    duration: Any = None

    @property
    def time_field(self):
        return self.model.timestamp_field


STATS_SOURCES = {
    "bottle_feed": StatsSource(
        Feeding,
        {"feeding_type": Feeding.FeedingType.BOTTLE},
        volume_fields=("volume_ml", "formula_volume_ml"),
        duration=Sum("duration_minutes"),
    ),
    "nursing": StatsSource(
        Feeding,
        {"feeding_type": Feeding.FeedingType.NURSING},
        duration=Sum(F("left_duration_minutes") + F("right_duration_minutes")),
    ),
    "pumping": StatsSource(
        Pumping, volume_fields=("volume_ml",), duration=Sum("duration_minutes")
    ),
    "diaper_change": StatsSource(DiaperChange),
    "sleep": StatsSource(Nap),
    **{
        kind.value: StatsSource(
            Activity,
            {"kind": kind},
            duration=Sum("duration_minutes") if kind == Activity.Kind.PLAY else None,
        )
        for kind in Activity.Kind
    },
}


def _age_label(profile: BabyProfile, period_start: date, frequency: str) -> str:
    """Label a bucket by how old the baby was when it started."""
    dob = profile.date_of_birth
    if frequency == Frequency.WEEKLY:
        dob_week = dob - timedelta(days=dob.weekday())
        return f"Week {(period_start - dob_week).days // 7}"
    if frequency == Frequency.MONTHLY:
        months = (period_start.year - dob.year) * 12 + period_start.month - dob.month
        return f"Month {months}"
    return f"Day {(period_start - dob).days}"


def _calculate_trend(values: list[int | float]) -> str:
    """Compare the first half of ``values`` with the second half.

    Returns:
        String: 'increasing', 'decreasing', or 'stable'
    """
    if len(values) < 2:
        return "stable"

    mid = len(values) // 2
    first_avg = sum(values[:mid]) / mid
    second_avg = sum(values[mid:]) / (len(values) - mid)

    if first_avg == 0:
        return "increasing" if second_avg > 0 else "stable"

    pct_change = (second_avg - first_avg) / first_avg
    if pct_change > 0.1:  # 10% increase
        return "increasing"
    elif pct_change < -0.1:  # 10% decrease
        return "decreasing"
    return "stable"


def _rounded(value):
    return round(value) if value is not None else None


def get_event_stats(
    profile: BabyProfile,
    event_type: str,
    frequency: str = Frequency.DAILY,
    start_date: date | None = None,
    end_date: date | None = None,
) -> dict[str, Any]:
    """Time series statistics for one event type of a profile.

    Args:
        profile: The baby
        event_type: Key of ``STATS_SOURCES`` (e.g. 'bottle_feed', 'sleep')
        frequency: 'daily', 'weekly' or 'monthly'
        start_date: First day included (default: 30 days before end_date)
        end_date: Last day included (default: today)

    Returns:
        Dict with the query echo, one record per non-empty bucket (oldest
        first) and a summary with the average count per bucket and its trend
    """
    source = STATS_SOURCES[event_type]
    if end_date is None:
        end_date = timezone.localdate()
    if start_date is None:
        start_date = end_date - timedelta(days=DEFAULT_STATS_DAYS - 1)

    time_field = source.time_field
    aggregates = {
        "count": Count("id"),
        "days": Count(TruncDate(time_field), distinct=True),
    }
    for name in source.volume_fields:
        aggregates[f"total_{name}"] = Sum(name)
        aggregates[f"avg_{name}"] = Avg(name)
    if source.duration is not None:
        aggregates["total_duration_minutes"] = source.duration

    rows = (
        source.model.objects.filter(
            profile=profile,
            **source.filters,
            **{
                f"{time_field}__date__gte": start_date,
                f"{time_field}__date__lte": end_date,
            },
        )
        .annotate(period=_TRUNC_BY_FREQUENCY[frequency](time_field))
        .values("period")
        .annotate(**aggregates)
        .order_by("period")
    )

    records = []
    for row in rows:
        period_start = timezone.localtime(row["period"]).date()
        record = {
            "period_start": period_start,
            "label": _age_label(profile, period_start, frequency),
            "count": row["count"],
        }
        for name in source.volume_fields:
            total = row[f"total_{name}"]
            record[f"total_{name}"] = total
            record[f"avg_{name}"] = _rounded(row[f"avg_{name}"])
            record[f"daily_avg_{name}"] = (
                round(total / row["days"]) if total is not None else None
            )
        if source.duration is not None:
            record["total_duration_minutes"] = row["total_duration_minutes"]
        records.append(record)

    counts = [record["count"] for record in records]
    return {
        "profile_id": str(profile.pk),
        "event_type": event_type,
        "frequency": frequency,
        "period": f"{start_date} to {end_date}",
        "records": records,
        "summary": {
            "total": sum(counts),
            "avg_per_period": round(sum(counts) / len(counts), 2) if counts else 0,
            "trend": _calculate_trend(counts),
        },
        "last_updated": timezone.now().isoformat(),
    }
