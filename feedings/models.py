import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import CheckConstraint, Q

from notifications.reminders import EventKind
from profiles.models import BabyProfile

from .constants import (
    MAX_BOTTLE_ML,
    MAX_FEEDING_MINUTES,
    MIN_BOTTLE_ML,
    MIN_FEEDING_MINUTES,
)

DURATION_VALIDATORS = [
    MinValueValidator(MIN_FEEDING_MINUTES),
    MaxValueValidator(MAX_FEEDING_MINUTES),
]


class Feeding(models.Model):
    """Feeding tracking record with conditional bottle/nursing fields.

    Supports two feeding types with different required fields:
    - Bottle: Requires volume_ml, no nursing durations allowed
    - Nursing: Requires left and/or right duration, no bottle volumes allowed

    Database constraints enforce these rules at the schema level using CheckConstraints.
    Application-level validation should be performed by serializers.

    Attributes:
        profile (ForeignKey): The baby being fed
        feeding_type (CharField): 'bottle' or 'nursing'
        fed_at (DateTimeField): When feeding occurred (UTC, indexed for queries)
        volume_ml (PositiveIntegerField): Total bottle volume (bottle only)
        formula_volume_ml (PositiveIntegerField): Part of the volume that was formula (bottle only)
        duration_minutes (PositiveIntegerField): How long the bottle took (bottle only)
        left_duration_minutes (PositiveIntegerField): Nursing time on the left side
        right_duration_minutes (PositiveIntegerField): Nursing time on the right side
        comment (TextField): Free-form note
    """

    class FeedingType(models.TextChoices):
        BOTTLE = "bottle", "Bottle"
        NURSING = "nursing", "Nursing"

    timestamp_field = "fed_at"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.ForeignKey(
        BabyProfile,
        on_delete=models.CASCADE,
        related_name="feedings",
    )
    feeding_type = models.CharField(max_length=10, choices=FeedingType.choices)
    fed_at = models.DateTimeField(db_index=True)

    # Bottle fields
    volume_ml = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(MIN_BOTTLE_ML), MaxValueValidator(MAX_BOTTLE_ML)],
    )
    formula_volume_ml = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(MAX_BOTTLE_ML)],
    )
    duration_minutes = models.PositiveIntegerField(
        null=True, blank=True, validators=DURATION_VALIDATORS
    )

    # Nursing fields
    left_duration_minutes = models.PositiveIntegerField(
        default=0, validators=DURATION_VALIDATORS
    )
    right_duration_minutes = models.PositiveIntegerField(
        default=0, validators=DURATION_VALIDATORS
    )

    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-fed_at"]
        indexes = [
            models.Index(fields=["profile", "fed_at"], name="feeding_profile_time_idx"),
        ]
        constraints = [
            # Bottle feedings must have volume_ml and no nursing durations
            CheckConstraint(
                condition=Q(
                    feeding_type="bottle",
                    volume_ml__isnull=False,
                    left_duration_minutes=0,
                    right_duration_minutes=0,
                )
                | Q(feeding_type="nursing"),
                name="bottle_has_volume",
            ),
            # Nursing must have time on at least one side and no bottle volumes
            CheckConstraint(
                condition=(
                    Q(feeding_type="nursing")
                    & (Q(left_duration_minutes__gt=0) | Q(right_duration_minutes__gt=0))
                    & Q(volume_ml__isnull=True, formula_volume_ml__isnull=True)
                )
                | Q(feeding_type="bottle"),
                name="nursing_has_duration",
            ),
            CheckConstraint(
                condition=Q(formula_volume_ml__isnull=True)
                | Q(formula_volume_ml__lte=models.F("volume_ml")),
                name="formula_within_volume",
            ),
        ]

    def __str__(self):
        return f"{self.profile.name} - {self.get_feeding_type_display()}"

    @property
    def event_kind(self):
        if self.feeding_type == self.FeedingType.NURSING:
            return EventKind.NURSING
        return EventKind.BOTTLE_FEED

    @property
    def nursing_minutes(self):
        return self.left_duration_minutes + self.right_duration_minutes

    @property
    def notification_summary(self):
        if self.feeding_type == self.FeedingType.NURSING:
            return f"Breastfeed baby for {self.nursing_minutes} mins"
        return f"Bottlefeed baby {self.volume_ml}ml"
