import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import CheckConstraint, Q

from notifications.reminders import EventKind
from profiles.models import BabyProfile


class Activity(models.Model):
    """Every other kind of event: play, bath, measurement, medicine, note, travel.

    Kind-specific fields are optional and only meaningful for their kind:
    - Play: duration_minutes
    - Measurement: height_cm and/or weight_kg
    - Medicine: prescription (required)
    - Note: note_purpose
    - Travel: ended_at and destination (required), time_zone

    Attributes:
        profile (ForeignKey): The baby
        kind (CharField): What happened
        occurred_at (DateTimeField): When it happened (UTC, indexed for queries)
        comment (TextField): Free-form note
    """

    class Kind(models.TextChoices):
        PLAY = "play", "Play"
        BATH = "bath", "Bath"
        MEASUREMENT = "measurement", "Measurement"
        MEDICINE = "medicine", "Medicine"
        NOTE = "note", "Note"
        TRAVEL = "travel", "Travel"

    class NotePurpose(models.TextChoices):
        NOTE = "note", "Note"
        MEMORY = "memory", "Memory"

    timestamp_field = "occurred_at"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.ForeignKey(
        BabyProfile,
        on_delete=models.CASCADE,
        related_name="activities",
    )
    kind = models.CharField(max_length=20, choices=Kind.choices)
    occurred_at = models.DateTimeField(db_index=True)

    duration_minutes = models.PositiveIntegerField(
        null=True, blank=True, validators=[MaxValueValidator(24 * 60)]
    )
    height_cm = models.DecimalField(
        max_digits=5,
        decimal_places=1,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    weight_kg = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    prescription = models.CharField(max_length=200, blank=True)
    note_purpose = models.CharField(
        max_length=10, choices=NotePurpose.choices, blank=True
    )
    ended_at = models.DateTimeField(null=True, blank=True)
    destination = models.CharField(max_length=200, blank=True)
    time_zone = models.CharField(max_length=64, blank=True)

    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "activities"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(
                fields=["profile", "kind", "occurred_at"],
                name="activity_profile_kind_time_idx",
            ),
        ]
        constraints = [
            CheckConstraint(
                condition=~Q(kind="medicine") | ~Q(prescription=""),
                name="medicine_has_prescription",
            ),
            CheckConstraint(
                condition=Q(ended_at__isnull=True)
                | Q(ended_at__gt=models.F("occurred_at")),
                name="activity_ended_after_start",
            ),
        ]

    def __str__(self):
        return f"{self.profile.name} - {self.get_kind_display()}"

    @property
    def event_kind(self):
        return EventKind(self.kind)

    @property
    def notification_summary(self):
        if self.kind == self.Kind.NOTE:
            if self.note_purpose == self.NotePurpose.MEMORY:
                return "Jotting down memory"
            return "Making note"
        return {
            self.Kind.PLAY: "Baby playing",
            self.Kind.BATH: "Bathing baby",
            self.Kind.MEASUREMENT: "Measuring baby",
            self.Kind.MEDICINE: "Giving baby medicine",
            self.Kind.TRAVEL: "Traveling",
        }[self.kind]
