import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="BabyProfile",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=100)),
                ("nickname", models.CharField(blank=True, max_length=100)),
                (
                    "handle",
                    models.SlugField(blank=True, null=True, unique=True),
                ),
                (
                    "gender_at_birth",
                    models.CharField(
                        choices=[("M", "Male"), ("F", "Female")], max_length=1
                    ),
                ),
                ("date_of_birth", models.DateField()),
                (
                    "stage",
                    models.CharField(
                        choices=[
                            ("newborn", "Newborn"),
                            ("newborn_bottle_fed", "Newborn (exclusively bottle-fed)"),
                            ("infant", "Infant"),
                            ("toddler", "Toddler"),
                            ("preschooler", "Preschooler"),
                        ],
                        default="newborn",
                        max_length=20,
                    ),
                ),
                (
                    "default_feeding_volume",
                    models.PositiveIntegerField(
                        default=60,
                        help_text="Bottle volume (ml) used when quick-logging a feeding",
                        validators=[django.core.validators.MaxValueValidator(500)],
                    ),
                ),
                (
                    "feeding_interval",
                    models.PositiveIntegerField(
                        default=180,
                        help_text="Minutes between daytime feedings; 0 disables the reminder",
                        validators=[django.core.validators.MaxValueValidator(1440)],
                    ),
                ),
                (
                    "night_feeding_interval",
                    models.PositiveIntegerField(
                        default=240,
                        help_text="Minutes between nighttime feedings; 0 disables the reminder",
                        validators=[django.core.validators.MaxValueValidator(1440)],
                    ),
                ),
                (
                    "pumping_duration",
                    models.PositiveIntegerField(
                        default=30,
                        validators=[django.core.validators.MaxValueValidator(1440)],
                    ),
                ),
                (
                    "pumping_interval",
                    models.PositiveIntegerField(
                        default=180,
                        help_text="Minutes between daytime pumpings; 0 disables the reminder",
                        validators=[django.core.validators.MaxValueValidator(1440)],
                    ),
                ),
                (
                    "night_pumping_interval",
                    models.PositiveIntegerField(
                        default=240,
                        help_text="Minutes between nighttime pumpings; 0 disables the reminder",
                        validators=[django.core.validators.MaxValueValidator(1440)],
                    ),
                ),
                (
                    "baby_daytime_start",
                    models.PositiveSmallIntegerField(
                        default=7,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(24),
                        ],
                    ),
                ),
                (
                    "baby_daytime_end",
                    models.PositiveSmallIntegerField(
                        default=19,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(24),
                        ],
                    ),
                ),
                (
                    "parent_daytime_start",
                    models.PositiveSmallIntegerField(
                        default=6,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(24),
                        ],
                    ),
                ),
                (
                    "parent_daytime_end",
                    models.PositiveSmallIntegerField(
                        default=24,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(24),
                        ],
                    ),
                ),
                ("enable_feeding_reminder", models.BooleanField(default=True)),
                ("enable_pumping_reminder", models.BooleanField(default=True)),
                ("enable_feeding_notification", models.BooleanField(default=True)),
                ("enable_pumping_notification", models.BooleanField(default=True)),
                (
                    "enable_other_activities_notification",
                    models.BooleanField(default=False),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-date_of_birth"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("baby_daytime_start__lt", models.F("baby_daytime_end"))
                        ),
                        name="baby_daytime_start_before_end",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("parent_daytime_start__lt", models.F("parent_daytime_end"))
                        ),
                        name="parent_daytime_start_before_end",
                    ),
                ],
            },
        ),
    ]
