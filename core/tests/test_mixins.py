"""
Tests for the core model mixins, exercised through the Location model.
"""

import time

from django.test import SimpleTestCase, TestCase

from core.models import NamedModelMixin, TimestampedMixin
from locations.models import Location


class MixinStructureTest(SimpleTestCase):
    """Test that the mixins are abstract and contribute their fields."""

    def test_mixins_are_abstract(self):
        self.assertTrue(TimestampedMixin._meta.abstract)
        self.assertTrue(NamedModelMixin._meta.abstract)

    def test_timestamp_fields_are_indexed(self):
        for name in ("created_at", "updated_at"):
            field = Location._meta.get_field(name)
            self.assertTrue(field.db_index)

    def test_name_field(self):
        field = Location._meta.get_field("name")
        self.assertEqual(field.max_length, 255)
        self.assertFalse(field.blank)


class TimestampedMixinTest(TestCase):
    """Test automatic timestamp behaviour."""

    def test_updated_at_changes_on_save(self):
        location = Location.objects.create(
            name="Stamped", code="LOC-TS", area=1, level=0, path="placeholder"
        )
        created_at, updated_at = location.created_at, location.updated_at

        time.sleep(0.01)
        location.name = "Restamped"
        location.save()

        self.assertEqual(location.created_at, created_at)
        self.assertGreater(location.updated_at, updated_at)
