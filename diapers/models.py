import uuid

from django.db import models

from notifications.reminders import EventKind
from profiles.models import BabyProfile


class DiaperChange(models.Model):
    """Diaper change tracking record.

    Records when a diaper was changed and what type of change occurred.
    Supports three change types: wet, dirty, or both.

    Attributes:
        profile (ForeignKey): The baby whose diaper was changed
        change_type (CharField): One of 'wet', 'dirty', or 'both'
        changed_at (DateTimeField): When the diaper change occurred (UTC, indexed for queries)
        comment (TextField): Free-form note
    """

    class ChangeType(models.TextChoices):
        WET = "wet", "Wet"
        DIRTY = "dirty", "Dirty"
        BOTH = "both", "Wet + Dirty"

    timestamp_field = "changed_at"
    event_kind = EventKind.DIAPER_CHANGE

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.ForeignKey(
        BabyProfile,
        on_delete=models.CASCADE,
        related_name="diaper_changes",
    )
    change_type = models.CharField(
        max_length=10, choices=ChangeType.choices, default=ChangeType.WET
    )
    changed_at = models.DateTimeField(db_index=True)
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-changed_at"]
        indexes = [
            models.Index(fields=["profile", "changed_at"], name="diaper_profile_time_idx"),
        ]

    def __str__(self):
        return f"{self.profile.name} - {self.get_change_type_display()}"

    @property
    def is_poopy(self):
        return self.change_type in (self.ChangeType.DIRTY, self.ChangeType.BOTH)

    @property
    def notification_summary(self):
        return "Poopy diaper" if self.is_poopy else "Wet diaper"
