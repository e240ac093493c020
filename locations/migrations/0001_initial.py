import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Location",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when the object was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        db_index=True,
                        help_text="Timestamp when the object was last modified",
                    ),
                ),
                (
                    "name",
                    models.CharField(help_text="Name of the object", max_length=255),
                ),
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
                    "code",
                    models.CharField(
                        help_text="Location number, e.g. LOC-001",
                        max_length=100,
                        unique=True,
                    ),
                ),
                (
                    "area",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Area size of the location",
                        max_digits=10,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0"))
                        ],
                    ),
                ),
                (
                    "level",
                    models.PositiveIntegerField(
                        default=0,
                        editable=False,
                        help_text="Hierarchy level of the location (0 for roots)",
                    ),
                ),
                (
                    "path",
                    models.CharField(
                        db_index=True,
                        editable=False,
                        help_text="Ids from the root down to this location, joined by dots",
                        max_length=1000,
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        help_text="Parent location in the hierarchy",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to="locations.location",
                    ),
                ),
            ],
            options={
                "verbose_name": "Location",
                "verbose_name_plural": "Locations",
                "db_table": "locations_location",
                "ordering": ["path"],
                "indexes": [
                    models.Index(
                        fields=["parent", "path"], name="location_parent_path_idx"
                    )
                ],
            },
        ),
    ]
