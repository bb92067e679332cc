from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from apps.competitions.services import archive_expired_competitions
from apps.competitions.tasks import auto_archive_competitions


class Command(BaseCommand):
    help = "Archive active competitions flagged auto_archive whose end date has passed."

    def add_arguments(self, parser):
        parser.add_argument("--today", help="Reference date (YYYY-MM-DD), default: today")
        parser.add_argument("--async", action="store_true", dest="dispatch", help="Dispatch to Celery instead")

    def handle(self, *args, **options):
        if options["dispatch"]:
            auto_archive_competitions.delay()
            self.stdout.write(self.style.SUCCESS("Auto-archive dispatched."))
            return
        today = None
        if options.get("today"):
            try:
                today = date.fromisoformat(options["today"])
            except ValueError:
                raise CommandError(f"Invalid date: {options['today']}")
        archived = archive_expired_competitions(today)
        for c in archived:
            self.stdout.write(f"Archived {c.slug} (end date {c.end_date})")
        self.stdout.write(self.style.SUCCESS(f"Archived {len(archived)} competition(s)."))
