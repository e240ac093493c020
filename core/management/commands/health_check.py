"""
Django management command to test the database connection.
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connections

from locations.models import Location


class Command(BaseCommand):
    help = "Test the database connection and the locations table"

    def handle(self, *args, **options):
        """Run health checks for the database."""
        try:
            connections["default"].ensure_connection()
            self.stdout.write(self.style.SUCCESS("✅ Database connection: OK"))
        except DatabaseError as e:
            self.stdout.write(self.style.ERROR(f"❌ Database connection failed: {e}"))
            raise CommandError("Health check failed") from e

        try:
            count = Location.objects.count()
            self.stdout.write(self.style.SUCCESS(f"✅ Locations table: {count} rows"))
        except DatabaseError as e:
            self.stdout.write(self.style.ERROR(f"❌ Locations table unavailable: {e}"))
            raise CommandError("Health check failed") from e

        self.stdout.write(self.style.SUCCESS("\n✅ All services OK"))
