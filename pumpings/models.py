import uuid

from django.core.validators import MaxValueValidator
from django.db import models

from notifications.reminders import EventKind
from profiles.models import BabyProfile

MAX_PUMPING_ML = 1000
MAX_PUMPING_MINUTES = 180


class Pumping(models.Model):
    """Breast pumping session.

    Attributes:
        profile (ForeignKey): The baby the milk is for
        pumped_at (DateTimeField): When pumping started (UTC, indexed for queries)
        duration_minutes (PositiveIntegerField): Session length, if recorded
        volume_ml (PositiveIntegerField): Milk collected
        comment (TextField): Free-form note
    """

    timestamp_field = "pumped_at"
    event_kind = EventKind.PUMPING

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.ForeignKey(
        BabyProfile,
        on_delete=models.CASCADE,
        related_name="pumpings",
    )
    pumped_at = models.DateTimeField(db_index=True)
    duration_minutes = models.PositiveIntegerField(
        null=True, blank=True, validators=[MaxValueValidator(MAX_PUMPING_MINUTES)]
    )
    volume_ml = models.PositiveIntegerField(
        default=0, validators=[MaxValueValidator(MAX_PUMPING_ML)]
    )
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-pumped_at"]
        indexes = [
            models.Index(fields=["profile", "pumped_at"], name="pumping_profile_time_idx"),
        ]

    def __str__(self):
        return f"{self.profile.name} - Pumping"

    @property
    def notification_summary(self):
        return f"Mom pumped {self.volume_ml}ml"
