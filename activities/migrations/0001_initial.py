import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("profiles", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
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
                    "kind",
                    models.CharField(
                        choices=[
                            ("play", "Play"),
                            ("bath", "Bath"),
                            ("measurement", "Measurement"),
                            ("medicine", "Medicine"),
                            ("note", "Note"),
                        ],
                        max_length=20,
                    ),
                ),
                ("occurred_at", models.DateTimeField(db_index=True)),
                (
                    "duration_minutes",
                    models.PositiveIntegerField(
                        blank=True,
                        null=True,
                        validators=[django.core.validators.MaxValueValidator(1440)],
                    ),
                ),
                (
                    "height_cm",
                    models.DecimalField(
                        blank=True,
                        decimal_places=1,
                        max_digits=5,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "weight_kg",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("prescription", models.CharField(blank=True, max_length=200)),
                (
                    "note_purpose",
                    models.CharField(
                        blank=True,
                        choices=[("note", "Note"), ("memory", "Memory")],
                        max_length=10,
                    ),
                ),
                ("comment", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "profile",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to="profiles.babyprofile",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "activities",
                "ordering": ["-occurred_at"],
                "indexes": [
                    models.Index(
                        fields=["profile", "kind", "occurred_at"],
                        name="activity_profile_kind_time_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("kind", "medicine"), _negated=True),
                            models.Q(("prescription", ""), _negated=True),
                            _connector="OR",
                        ),
                        name="medicine_has_prescription",
                    )
                ],
            },
        ),
    ]
