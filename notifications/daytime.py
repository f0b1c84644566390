"""Daytime window policy used to pick day or night reminder intervals."""

from datetime import datetime

from django.utils import timezone


def is_daytime(instant: datetime, start_hour: int, end_hour: int) -> bool:
    """Check if the current local wall-clock hour falls in [start_hour, end_hour).

    The hour is taken from ``timezone.now()`` in the active time zone, not from
    ``instant``. Reminder interval selection has always been evaluated against
    "now"; ``instant`` is accepted so callers can state which moment they are
    asking about once this is revisited.

    Args:
        instant: The moment being classified (currently unused)
        start_hour: First hour of the daytime window (inclusive, 0-24)
        end_hour: Hour the daytime window ends (exclusive, 0-24)

    Returns:
        bool: True if the current local hour is inside the daytime window
    """
    now_local = timezone.localtime(timezone.now())
    hour = now_local.hour + now_local.minute // 60
    return start_hour <= hour < end_hour
