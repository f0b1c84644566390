from __future__ import annotations

import uuid
from typing import Any

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import CheckConstraint, F, Q

from .constants import (
    DEFAULT_BABY_DAYTIME_END_HOUR,
    DEFAULT_BABY_DAYTIME_START_HOUR,
    DEFAULT_ENABLE_NOTIFICATION,
    DEFAULT_FEEDING_INTERVAL_MINUTES,
    DEFAULT_FEEDING_VOLUME_ML,
    DEFAULT_NIGHT_FEEDING_INTERVAL_MINUTES,
    DEFAULT_NIGHT_PUMPING_INTERVAL_MINUTES,
    DEFAULT_PARENT_DAYTIME_END_HOUR,
    DEFAULT_PARENT_DAYTIME_START_HOUR,
    DEFAULT_PUMPING_DURATION_MINUTES,
    DEFAULT_PUMPING_INTERVAL_MINUTES,
    MAX_FEEDING_VOLUME_ML,
    MAX_INTERVAL_MINUTES,
)

HOUR_VALIDATORS = [MinValueValidator(0), MaxValueValidator(24)]
INTERVAL_VALIDATORS = [MaxValueValidator(MAX_INTERVAL_MINUTES)]


class BabyProfile(models.Model):
    """A baby being tracked, with the settings that drive reminders.

    Owns every tracking record (feedings, pumpings, diaper changes, naps,
    activities); deleting a profile deletes them too.

    Attributes:
        name (CharField): Baby's name
        nickname (CharField): Optional name used in notifications
        handle (CharField): Optional unique short id usable in URLs instead of the UUID
        gender_at_birth (CharField): 'M' or 'F'
        date_of_birth (DateField): ISO format date (YYYY-MM-DD)
        stage (CharField): Developmental stage
        default_feeding_volume (PositiveIntegerField): Volume (ml) used for quick-logged bottles
        feeding_interval (PositiveIntegerField): Minutes between daytime feedings; 0 = no reminder
        night_feeding_interval (PositiveIntegerField): Minutes between night feedings; 0 = no reminder
        pumping_duration (PositiveIntegerField): Minutes used for quick-logged pumpings
        pumping_interval (PositiveIntegerField): Minutes between daytime pumpings; 0 = no reminder
        night_pumping_interval (PositiveIntegerField): Minutes between night pumpings; 0 = no reminder
        baby_daytime_start/end (PositiveSmallIntegerField): Baby's daytime window [start, end) in hours
        parent_daytime_start/end (PositiveSmallIntegerField): Parent's daytime window [start, end) in hours
        enable_*_reminder (BooleanField): Send staged reminders ahead of the next feeding/pumping
        enable_*_notification (BooleanField): Announce logged events
    """

    class Gender(models.TextChoices):
        MALE = "M", "Male"
        FEMALE = "F", "Female"

    class Stage(models.TextChoices):
        NEWBORN = "newborn", "Newborn"
        NEWBORN_EXCLUSIVE_BOTTLE_FED = (
            "newborn_bottle_fed",
            "Newborn (exclusively bottle-fed)",
        )
        INFANT = "infant", "Infant"
        TODDLER = "toddler", "Toddler"
        PRESCHOOLER = "preschooler", "Preschooler"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    nickname = models.CharField(max_length=100, blank=True)
    handle = models.SlugField(max_length=50, unique=True, null=True, blank=True)
    gender_at_birth = models.CharField(max_length=1, choices=Gender.choices)
    date_of_birth = models.DateField()
    stage = models.CharField(max_length=20, choices=Stage.choices, default=Stage.NEWBORN)

    # Feeding
    default_feeding_volume = models.PositiveIntegerField(
        default=DEFAULT_FEEDING_VOLUME_ML,
        validators=[MaxValueValidator(MAX_FEEDING_VOLUME_ML)],
        help_text="Bottle volume (ml) used when quick-logging a feeding",
    )
    feeding_interval = models.PositiveIntegerField(
        default=DEFAULT_FEEDING_INTERVAL_MINUTES,
        validators=INTERVAL_VALIDATORS,
        help_text="Minutes between daytime feedings; 0 disables the reminder",
    )
    night_feeding_interval = models.PositiveIntegerField(
        default=DEFAULT_NIGHT_FEEDING_INTERVAL_MINUTES,
        validators=INTERVAL_VALIDATORS,
        help_text="Minutes between nighttime feedings; 0 disables the reminder",
    )

    # Pumping
    pumping_duration = models.PositiveIntegerField(
        default=DEFAULT_PUMPING_DURATION_MINUTES,
        validators=INTERVAL_VALIDATORS,
    )
    pumping_interval = models.PositiveIntegerField(
        default=DEFAULT_PUMPING_INTERVAL_MINUTES,
        validators=INTERVAL_VALIDATORS,
        help_text="Minutes between daytime pumpings; 0 disables the reminder",
    )
    night_pumping_interval = models.PositiveIntegerField(
        default=DEFAULT_NIGHT_PUMPING_INTERVAL_MINUTES,
        validators=INTERVAL_VALIDATORS,
        help_text="Minutes between nighttime pumpings; 0 disables the reminder",
    )

    # Daytime windows
    baby_daytime_start = models.PositiveSmallIntegerField(
        default=DEFAULT_BABY_DAYTIME_START_HOUR, validators=HOUR_VALIDATORS
    )
    baby_daytime_end = models.PositiveSmallIntegerField(
        default=DEFAULT_BABY_DAYTIME_END_HOUR, validators=HOUR_VALIDATORS
    )
    parent_daytime_start = models.PositiveSmallIntegerField(
        default=DEFAULT_PARENT_DAYTIME_START_HOUR, validators=HOUR_VALIDATORS
    )
    parent_daytime_end = models.PositiveSmallIntegerField(
        default=DEFAULT_PARENT_DAYTIME_END_HOUR, validators=HOUR_VALIDATORS
    )

    # Notifications
    enable_feeding_reminder = models.BooleanField(default=DEFAULT_ENABLE_NOTIFICATION)
    enable_pumping_reminder = models.BooleanField(default=DEFAULT_ENABLE_NOTIFICATION)
    enable_feeding_notification = models.BooleanField(
        default=DEFAULT_ENABLE_NOTIFICATION
    )
    enable_pumping_notification = models.BooleanField(
        default=DEFAULT_ENABLE_NOTIFICATION
    )
    # Too noisy to be on by default
    enable_other_activities_notification = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date_of_birth"]
        constraints = [
            CheckConstraint(
                condition=Q(baby_daytime_start__lt=F("baby_daytime_end")),
                name="baby_daytime_start_before_end",
            ),
            CheckConstraint(
                condition=Q(parent_daytime_start__lt=F("parent_daytime_end")),
                name="parent_daytime_start_before_end",
            ),
        ]

    def __str__(self) -> str:
        return self.display_name

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Store a blank handle as NULL so it does not collide on uniqueness."""
        if not self.handle:
            self.handle = None
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        return self.nickname or self.name

    @classmethod
    def resolve(cls, id_or_handle: Any) -> BabyProfile:
        """Find a profile by UUID or by handle.

        Raises:
            BabyProfile.DoesNotExist: If no profile matches
        """
        value = str(id_or_handle).strip()
        try:
            return cls.objects.get(pk=uuid.UUID(value))
        except (ValueError, cls.DoesNotExist):
            pass
        return cls.objects.get(handle=value)
