"""
Core model mixins for reusable model functionality.

These mixins provide common fields and behaviors that can be shared across
models in the application. Each mixin is composable and can be used
individually or in combination with other mixins.

Available mixins:
- TimestampedMixin: Automatic created_at and updated_at fields
- NamedModelMixin: Standard name field with __str__ method

Usage:
    class MyModel(TimestampedMixin, NamedModelMixin):
        extra_field = models.CharField(max_length=100)

        class Meta:
            app_label = 'myapp'
"""

from django.db import models


class TimestampedMixin(models.Model):
    """
    Mixin to add automatic timestamp tracking to models.

    Provides:
    - created_at: Automatically set when object is first created (indexed)
    - updated_at: Automatically updated every time object is saved (indexed)

    Performance Notes:
    - Both fields are indexed for efficient date-based queries
    - Bulk ``QuerySet.update()`` calls bypass ``auto_now``; callers that
      rewrite rows in bulk must set ``updated_at`` themselves
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when the object was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        db_index=True,
        help_text="Timestamp when the object was last modified",
    )

    class Meta:
        abstract = True


class NamedModelMixin(models.Model):
    """
    Mixin to add a standardized name field with __str__ method.

    Provides:
    - name: Required CharField with 255 character limit
    - __str__: Returns the name of the object
    """

    name = models.CharField(max_length=255, help_text="Name of the object")

    def __str__(self):
        return self.name

    class Meta:
        abstract = True
