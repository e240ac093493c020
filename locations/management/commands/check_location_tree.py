"""
Django management command to verify the stored location hierarchy.
"""

from django.core.management.base import BaseCommand, CommandError

from locations.services import LocationService


class Command(BaseCommand):
    help = "Check that every location's level and path match its parent chain"

    def add_arguments(self, parser):
        parser.add_argument(
            "--repair",
            action="store_true",
            help="Recompute level and path from the parent chain before re-checking",
        )

    def handle(self, *args, **options):
        """Report hierarchy inconsistencies, optionally repairing them."""
        issues = LocationService.check_integrity()

        if issues and options["repair"]:
            repaired = LocationService.rebuild_paths()
            self.stdout.write(f"Repaired {repaired} location(s)")
            issues = LocationService.check_integrity()

        if not issues:
            self.stdout.write(self.style.SUCCESS("✅ Location hierarchy: OK"))
            return

        for issue in issues:
            self.stdout.write(self.style.ERROR(f"❌ {issue}"))
        raise CommandError(f"{len(issues)} hierarchy issue(s) found")
