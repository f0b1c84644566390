import uuid

from django.db import models
from django.db.models import CheckConstraint, Q

from notifications.reminders import EventKind
from profiles.models import BabyProfile


class Nap(models.Model):
    """Sleep tracking record.

    Records when the baby fell asleep, with optional end time for duration tracking.
    End time can be set manually or auto-filled when the next activity is recorded.

    Attributes:
        profile (ForeignKey): The baby who slept
        napped_at (DateTimeField): When the sleep started (UTC, indexed for queries)
        ended_at (DateTimeField): When the sleep ended (UTC, nullable, indexed)
        comment (TextField): Free-form note
    """

    timestamp_field = "napped_at"
    event_kind = EventKind.SLEEP

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.ForeignKey(
        BabyProfile,
        on_delete=models.CASCADE,
        related_name="naps",
    )
    napped_at = models.DateTimeField(db_index=True)
    ended_at = models.DateTimeField(null=True, blank=True, db_index=True)
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-napped_at"]
        constraints = [
            CheckConstraint(
                condition=Q(ended_at__isnull=True)
                | Q(ended_at__gt=models.F("napped_at")),
                name="nap_ended_after_start",
            ),
        ]

    def __str__(self):
        return f"{self.profile.name} - Sleep"

    @property
    def duration_minutes(self):
        """Sleep duration in minutes, or None if the baby is still asleep."""
        if self.ended_at is None:
            return None
        return (self.ended_at - self.napped_at).total_seconds() / 60

    @property
    def duration_display(self):
        """Human-readable duration (e.g. '1h 30m') or None if still asleep."""
        if self.ended_at is None:
            return None
        total = int(self.duration_minutes)
        h, m = divmod(total, 60)
        return f"{h}h {m}m" if h else f"{m}m"

    @property
    def notification_summary(self):
        return "Baby sleeping"
