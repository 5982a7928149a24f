from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from ...services.org_statistics_service import refresh_org_statistics


class Command(BaseCommand):
    help = "Recompute the organization statistics snapshot now."

    def add_arguments(self, parser):
        parser.add_argument(
            "--quiet",
            action="store_true",
            help="Only report failures.",
        )

    def handle(self, *args, **options):
        snapshot = refresh_org_statistics()
        if snapshot is None:
            raise CommandError("Org statistics refresh failed; see the log for details.")
        if not options["quiet"]:
            self.stdout.write(self.style.SUCCESS(
                f"Org statistics refreshed at {snapshot.last_refreshed.isoformat()}."
            ))
