import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def duration_validators():
    return [
        django.core.validators.MinValueValidator(0),
        django.core.validators.MaxValueValidator(180),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("profiles", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Feeding",
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
                (
                    "feeding_type",
                    models.CharField(
                        choices=[("bottle", "Bottle"), ("nursing", "Nursing")],
                        max_length=10,
                    ),
                ),
                ("fed_at", models.DateTimeField(db_index=True)),
                (
                    "volume_ml",
                    models.PositiveIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(500),
                        ],
                    ),
                ),
                (
                    "formula_volume_ml",
                    models.PositiveIntegerField(
                        blank=True,
                        null=True,
                        validators=[django.core.validators.MaxValueValidator(500)],
                    ),
                ),
                (
                    "duration_minutes",
                    models.PositiveIntegerField(
                        blank=True, null=True, validators=duration_validators()
                    ),
                ),
                (
                    "left_duration_minutes",
                    models.PositiveIntegerField(
                        default=0, validators=duration_validators()
                    ),
                ),
                (
                    "right_duration_minutes",
                    models.PositiveIntegerField(
                        default=0, validators=duration_validators()
                    ),
                ),
                ("comment", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "profile",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="feedings",
                        to="profiles.babyprofile",
                    ),
                ),
            ],
            options={
                "ordering": ["-fed_at"],
                "indexes": [
                    models.Index(
                        fields=["profile", "fed_at"], name="feeding_profile_time_idx"
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("feeding_type", "bottle"),
                                ("volume_ml__isnull", False),
                                ("left_duration_minutes", 0),
                                ("right_duration_minutes", 0),
                            ),
                            ("feeding_type", "nursing"),
                            _connector="OR",
                        ),
                        name="bottle_has_volume",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("feeding_type", "nursing"),
                                models.Q(
                                    ("left_duration_minutes__gt", 0),
                                    ("right_duration_minutes__gt", 0),
                                    _connector="OR",
                                ),
                                models.Q(
                                    ("volume_ml__isnull", True),
                                    ("formula_volume_ml__isnull", True),
                                ),
                            ),
                            ("feeding_type", "bottle"),
                            _connector="OR",
                        ),
                        name="nursing_has_duration",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("formula_volume_ml__isnull", True),
                            ("formula_volume_ml__lte", models.F("volume_ml")),
                            _connector="OR",
                        ),
                        name="formula_within_volume",
                    ),
                ],
            },
        ),
    ]
