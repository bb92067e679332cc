from __future__ import annotations

from datetime import date

from django.core.management.base import BaseCommand

from apps.competitions.models import Competition

DEMO_COMPETITIONS = [
    {
        "slug": "post-cs-ii",
        "title": "Post CS II",
        "description": "Concurs pentru ocuparea unui post de cercetător științific gradul II.",
        "status": Competition.STATUS_ACTIVE,
        "start_date": date(2026, 3, 1),
        "end_date": date(2026, 4, 15),
        "keywords": "cercetare, CS II",
        "auto_archive": True,
    },
    {
        "slug": "asistent-cercetare-2025",
        "title": "Asistent de cercetare 2025",
        "description": "Concurs încheiat pentru postul de asistent de cercetare.",
        "status": Competition.STATUS_ARCHIVED,
        "start_date": date(2025, 5, 10),
        "end_date": date(2025, 6, 30),
        "keywords": "asistent",
    },
]


class Command(BaseCommand):
    help = "Seed demo data: one active and one archived competition."

    def handle(self, *args, **options):
        for item in DEMO_COMPETITIONS:
            defaults = {k: v for k, v in item.items() if k != "slug"}
            _competition, created = Competition.objects.get_or_create(slug=item["slug"], defaults=defaults)
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created competition '{item['slug']}'"))
            else:
                self.stdout.write(self.style.WARNING(f"Competition '{item['slug']}' already exists"))

        self.stdout.write(self.style.SUCCESS("Seed complete."))
